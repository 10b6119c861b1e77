import datetime
from typing import Callable, List, Optional
from uuid import UUID

import attrs

from src.platform.config.core_setting import settings
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.service.farm_visit.domain.access_policy import AccessPolicy
from src.service.farm_visit.domain.entity.availability_slot_entity import AvailabilitySlot
from src.service.farm_visit.domain.enum.visit_action import VisitAction
from src.service.farm_visit.domain.farm_visit_errors import SlotNotFoundError
from src.service.farm_visit.domain.value_object.actor import Actor
from src.service.farm_visit.domain.value_object.resource_ref import ResourceRef
from src.service.farm_visit.domain.value_object.slot_filter import SlotFilter


class ListSlotsUseCase:
    """
    Slot read paths.

    Owners and admins see every slot they manage. Everyone else only sees slots
    of sellers whose farm profile is public and accepts that visit type.
    """

    def __init__(
        self,
        *,
        uow_factory: Callable[[], AbstractUnitOfWork],
        access_policy: AccessPolicy,
        today: Callable[[], datetime.date] = datetime.date.today,
    ) -> None:
        self.uow_factory = uow_factory
        self.access_policy = access_policy
        self.today = today

    def _with_default_window(self, slot_filter: SlotFilter) -> SlotFilter:
        if slot_filter.has_date_filter:
            return slot_filter
        today = self.today()
        return attrs.evolve(
            slot_filter,
            start_date=today,
            end_date=today + datetime.timedelta(days=settings.SLOT_LISTING_DEFAULT_DAYS),
        )

    def _manages(self, actor: Optional[Actor], seller_id: int) -> bool:
        return self.access_policy.authorize(
            actor, VisitAction.VIEW_UNPUBLISHED_SLOT, ResourceRef(seller_id=seller_id)
        )

    @Logger.io
    async def list_slots(
        self, *, actor: Optional[Actor], slot_filter: SlotFilter
    ) -> List[AvailabilitySlot]:
        slot_filter = self._with_default_window(slot_filter)

        async with self.uow_factory() as uow:
            slots = await uow.slot_repo.list(slot_filter=slot_filter)

            hidden_sellers = {s.seller_id for s in slots if not self._manages(actor, s.seller_id)}
            profiles = await uow.farm_profile_repo.get_many(seller_ids=hidden_sellers)

        visible = []
        for slot in slots:
            if slot.seller_id in hidden_sellers:
                profile = profiles.get(slot.seller_id)
                if profile is None or not profile.publishes(slot.visit_type):
                    continue
            visible.append(slot)
        return visible

    @Logger.io
    async def get_slot(self, *, actor: Optional[Actor], slot_id: UUID) -> AvailabilitySlot:
        async with self.uow_factory() as uow:
            slot = await uow.slot_repo.get(slot_id=slot_id)
            if not slot:
                raise SlotNotFoundError()
            if self._manages(actor, slot.seller_id):
                return slot

            profile = await uow.farm_profile_repo.get(seller_id=slot.seller_id)

        # Unpublished slots are reported as missing to outsiders
        if profile is None or not profile.publishes(slot.visit_type):
            raise SlotNotFoundError()
        return slot
