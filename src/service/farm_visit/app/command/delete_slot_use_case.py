from typing import Callable, List
from uuid import UUID

from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.service.farm_visit.app.command.visit_request_transition import (
    apply_transition,
    notify_after_commit,
)
from src.service.farm_visit.app.interface.i_notification_dispatcher import (
    INotificationDispatcher,
)
from src.service.farm_visit.domain.access_policy import AccessPolicy
from src.service.farm_visit.domain.domain_event.visit_request_event import VisitRequestEvent
from src.service.farm_visit.domain.entity.visit_request_entity import VisitRequest
from src.service.farm_visit.domain.enum.visit_action import VisitAction
from src.service.farm_visit.domain.enum.visit_request_status import (
    ACTIVE_STATUSES,
    VisitRequestStatus,
)
from src.service.farm_visit.domain.farm_visit_errors import SlotNotFoundError
from src.service.farm_visit.domain.value_object.actor import Actor
from src.service.farm_visit.domain.value_object.resource_ref import ResourceRef
from src.service.farm_visit.domain.visit_request_workflow import VisitRequestWorkflow


SLOT_REMOVED_NOTE = 'The time slot was removed by the farm'


class DeleteSlotUseCase:
    """
    Delete a slot.

    Without cascade the delete fails while pending or approved requests exist.
    With cascade those dependents are rejected (pending) or cancelled
    (approved, capacity released) in the same transaction first.
    """

    def __init__(
        self,
        *,
        uow_factory: Callable[[], AbstractUnitOfWork],
        access_policy: AccessPolicy,
        workflow: VisitRequestWorkflow,
        notifier: INotificationDispatcher,
    ) -> None:
        self.uow_factory = uow_factory
        self.access_policy = access_policy
        self.workflow = workflow
        self.notifier = notifier

    @Logger.io
    async def execute(self, *, actor: Actor, slot_id: UUID, cascade: bool = False) -> None:
        closed: List[VisitRequest] = []

        async with self.uow_factory() as uow:
            slot = await uow.slot_repo.get_for_update(slot_id=slot_id)
            if not slot:
                raise SlotNotFoundError()
            self.access_policy.enforce(
                actor, VisitAction.DELETE_SLOT, ResourceRef(seller_id=slot.seller_id)
            )

            if cascade:
                dependents = await uow.visit_request_repo.list_by_slot(
                    slot_id=slot_id, statuses=ACTIVE_STATUSES
                )
                for request in dependents:
                    target = (
                        VisitRequestStatus.REJECTED
                        if request.status == VisitRequestStatus.PENDING
                        else VisitRequestStatus.CANCELLED
                    )
                    plan = self.workflow.plan(actor=actor, request=request, target=target)
                    updated = request.transition_to(
                        status=target,
                        reviewed_by=actor.user_id,
                        admin_notes=SLOT_REMOVED_NOTE,
                        rejection_reason=(
                            SLOT_REMOVED_NOTE if target == VisitRequestStatus.REJECTED else None
                        ),
                    )
                    await apply_transition(uow=uow, plan=plan, updated=updated)
                    closed.append(updated)

            await uow.slot_repo.delete(slot_id=slot_id)
            await uow.commit()

        Logger.base.info(f'🗑️ [SLOT] Slot {slot_id} deleted, {len(closed)} request(s) closed')
        for request in closed:
            await notify_after_commit(
                notifier=self.notifier,
                event=VisitRequestEvent.for_status(request.status),
                request=request,
            )
