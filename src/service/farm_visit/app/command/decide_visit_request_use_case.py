from typing import Callable, Optional
from uuid import UUID

from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import CustomBaseError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.farm_visit_metrics import metrics
from src.service.farm_visit.app.command.visit_request_transition import (
    apply_transition,
    notify_after_commit,
)
from src.service.farm_visit.app.interface.i_notification_dispatcher import (
    INotificationDispatcher,
)
from src.service.farm_visit.domain.domain_event.visit_request_event import VisitRequestEvent
from src.service.farm_visit.domain.entity.visit_request_entity import VisitRequest
from src.service.farm_visit.domain.enum.visit_action import VisitDecision
from src.service.farm_visit.domain.farm_visit_errors import VisitRequestNotFoundError
from src.service.farm_visit.domain.value_object.actor import Actor
from src.service.farm_visit.domain.visit_request_workflow import VisitRequestWorkflow


class DecideVisitRequestUseCase:
    """
    Approve, reject, complete or cancel a visit request.

    Flow (one transaction):
    1. Load and lock the request
    2. Workflow validates actor and transition, returns the capacity effect
    3. Compare-and-swap the status with audit fields
    4. Reserve or release capacity (a failed reserve rolls the status back)
    5. Commit, then notify
    """

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
        decision: VisitDecision,
        notes: Optional[str] = None,
        rejection_reason: Optional[str] = None,
    ) -> VisitRequest:
        target = decision.target_status

        async with self.uow_factory() as uow:
            request = await uow.visit_request_repo.get_for_update(request_id=request_id)
            if not request:
                raise VisitRequestNotFoundError()

            try:
                plan = self.workflow.plan(actor=actor, request=request, target=target)
                updated = request.transition_to(
                    status=target,
                    reviewed_by=actor.user_id,
                    admin_notes=notes,
                    rejection_reason=(
                        rejection_reason if decision == VisitDecision.REJECT else None
                    ),
                )
                await apply_transition(uow=uow, plan=plan, updated=updated)
                await uow.commit()
            except CustomBaseError:
                metrics.record_transition(
                    from_status=request.status, to_status=target, success=False
                )
                raise

        metrics.record_transition(from_status=plan.from_status, to_status=target, success=True)
        Logger.base.info(
            f'✅ [REQUEST] {request_id}: {plan.from_status} -> {target} by user {actor.user_id}'
        )
        await notify_after_commit(
            notifier=self.notifier, event=VisitRequestEvent.for_status(target), request=updated
        )
        return updated
