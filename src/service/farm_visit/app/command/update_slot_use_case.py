from typing import Any, Callable, Mapping
from uuid import UUID

from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.service.farm_visit.domain.access_policy import AccessPolicy
from src.service.farm_visit.domain.entity.availability_slot_entity import AvailabilitySlot
from src.service.farm_visit.domain.enum.visit_action import VisitAction
from src.service.farm_visit.domain.farm_visit_errors import SlotNotFoundError
from src.service.farm_visit.domain.value_object.actor import Actor
from src.service.farm_visit.domain.value_object.resource_ref import ResourceRef


class UpdateSlotUseCase:
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
        self, *, actor: Actor, slot_id: UUID, changes: Mapping[str, Any]
    ) -> AvailabilitySlot:
        async with self.uow_factory() as uow:
            slot = await uow.slot_repo.get(slot_id=slot_id)
            if not slot:
                raise SlotNotFoundError()
            self.access_policy.enforce(
                actor, VisitAction.UPDATE_SLOT, ResourceRef(seller_id=slot.seller_id)
            )

            if not changes:
                return slot

            updated = await uow.slot_repo.update(slot_id=slot_id, changes=changes)
            await uow.commit()

        return updated
