import datetime
from collections import defaultdict
from typing import Callable, List, Optional

from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.service.farm_visit.app.dto.farm_summary import FarmSummary
from src.service.farm_visit.domain.value_object.slot_filter import SlotFilter


class ListFarmsUseCase:
    """Public farms accepting visits, each with its count of upcoming open slots."""

    def __init__(
        self,
        *,
        uow_factory: Callable[[], AbstractUnitOfWork],
        today: Callable[[], datetime.date] = datetime.date.today,
    ) -> None:
        self.uow_factory = uow_factory
        self.today = today

    @Logger.io
    async def execute(
        self,
        *,
        visit_type: Optional[str] = None,
        has_availability: bool = False,
        location: Optional[str] = None,
    ) -> List[FarmSummary]:
        async with self.uow_factory() as uow:
            profiles = await uow.farm_profile_repo.list_public(
                visit_type=visit_type, location=location
            )
            open_slots = await uow.slot_repo.list(
                slot_filter=SlotFilter(
                    start_date=self.today(), available_only=True, visit_type=visit_type
                )
            )

        slots_by_seller = defaultdict(list)
        for slot in open_slots:
            slots_by_seller[slot.seller_id].append(slot)

        farms = []
        for profile in profiles:
            slots = [
                s for s in slots_by_seller[profile.seller_id] if profile.accepts_visit_type(s.visit_type)
            ]
            if has_availability and not slots:
                continue
            farms.append(
                FarmSummary(
                    seller_id=profile.seller_id,
                    farm_name=profile.farm_name,
                    farm_story=profile.farm_story,
                    detailed_location=profile.detailed_location,
                    visit_booking_enabled=profile.visit_booking_enabled,
                    garden_visit_enabled=profile.garden_visit_enabled,
                    available_slots_count=len(slots),
                    available_visit_types=sorted({s.visit_type for s in slots}),
                )
            )
        return farms
