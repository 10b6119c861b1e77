import datetime
from typing import Callable, Optional

from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.service.farm_visit.domain.access_policy import AccessPolicy
from src.service.farm_visit.domain.entity.availability_slot_entity import AvailabilitySlot
from src.service.farm_visit.domain.enum.visit_action import VisitAction
from src.service.farm_visit.domain.value_object.actor import Actor
from src.service.farm_visit.domain.value_object.resource_ref import ResourceRef


class CreateSlotUseCase:
    def __init__(
        self,
        *,
        uow_factory: Callable[[], AbstractUnitOfWork],
        access_policy: AccessPolicy,
    ) -> None:
        self.uow_factory = uow_factory
        self.access_policy = access_policy

    @Logger.io
    async def execute(
        self,
        *,
        actor: Actor,
        date: datetime.date,
        start_time: datetime.time,
        end_time: datetime.time,
        seller_id: Optional[int] = None,
        max_visitors: Optional[int] = None,
        is_available: bool = True,
        price_per_person: int = 0,
        visit_type: Optional[str] = None,
        location_type: Optional[str] = None,
        activity_type: Optional[str] = None,
        space_description: Optional[str] = None,
        special_notes: Optional[str] = None,
    ) -> AvailabilitySlot:
        """Sellers create slots for themselves; admins may name another seller."""
        target_seller_id = seller_id if seller_id is not None else actor.user_id
        self.access_policy.enforce(
            actor, VisitAction.CREATE_SLOT, ResourceRef(seller_id=target_seller_id)
        )

        slot = AvailabilitySlot.create(
            seller_id=target_seller_id,
            date=date,
            start_time=start_time,
            end_time=end_time,
            max_visitors=max_visitors,
            is_available=is_available,
            price_per_person=price_per_person,
            visit_type=visit_type,
            location_type=location_type,
            activity_type=activity_type,
            space_description=space_description,
            special_notes=special_notes,
        )

        async with self.uow_factory() as uow:
            created = await uow.slot_repo.create(slot=slot)
            await uow.commit()

        Logger.base.info(f'📅 [SLOT] Seller {target_seller_id} opened slot {created.id}')
        return created
