from typing import Callable, Optional
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
from src.service.farm_visit.domain.domain_event.visit_request_event import VisitRequestEvent
from src.service.farm_visit.domain.entity.visit_request_entity import (
    OVERRIDE_NOTE_PREFIX,
    VisitRequest,
)
from src.service.farm_visit.domain.enum.visit_request_status import VisitRequestStatus
from src.service.farm_visit.domain.farm_visit_errors import VisitRequestNotFoundError
from src.service.farm_visit.domain.value_object.actor import Actor
from src.service.farm_visit.domain.visit_request_workflow import VisitRequestWorkflow


class OverrideVisitRequestStatusUseCase:
    """Administrative status override, terminal statuses included. Always audited."""

    def __init__(
        self,
        *,
        uow_factory: Callable[[], AbstractUnitOfWork],
        workflow: VisitRequestWorkflow,
        notifier: INotificationDispatcher,
    ) -> None:
        self.uow_factory = uow_factory
        self.workflow = workflow
        self.notifier = notifier

    @Logger.io
    async def execute(
        self,
        *,
        actor: Actor,
        request_id: UUID,
        status: VisitRequestStatus,
        notes: Optional[str] = None,
    ) -> VisitRequest:
        async with self.uow_factory() as uow:
            request = await uow.visit_request_repo.get_for_update(request_id=request_id)
            if not request:
                raise VisitRequestNotFoundError()

            plan = self.workflow.plan_override(actor=actor, request=request, target=status)
            audit_note = f'{OVERRIDE_NOTE_PREFIX} {notes}' if notes else OVERRIDE_NOTE_PREFIX
            updated = request.transition_to(
                status=status, reviewed_by=actor.user_id, admin_notes=audit_note
            )
            await apply_transition(uow=uow, plan=plan, updated=updated)
            await uow.commit()

        Logger.base.warning(
            f'🛠️ [OVERRIDE] {request_id}: {plan.from_status} -> {status} '
            f'by admin {actor.user_id} (capacity: {plan.effect})'
        )
        await notify_after_commit(
            notifier=self.notifier, event=VisitRequestEvent.for_status(status), request=updated
        )
        return updated
