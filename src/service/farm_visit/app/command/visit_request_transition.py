"""
Shared steps for committing a visit request status change.

The status write is a compare-and-swap on the previous status and happens
before the capacity effect, inside the caller's Unit of Work. A duplicate
approve/cancel racing the first one loses the swap and never touches capacity.
"""

from typing import Optional

from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.logging.loguru_io import Logger
from src.service.farm_visit.app.interface.i_notification_dispatcher import (
    INotificationDispatcher,
)
from src.service.farm_visit.domain.domain_event.visit_request_event import VisitRequestEvent
from src.service.farm_visit.domain.entity.visit_request_entity import VisitRequest
from src.service.farm_visit.domain.farm_visit_errors import (
    InvalidTransitionError,
    RequestTerminalError,
    VisitRequestNotFoundError,
)
from src.service.farm_visit.domain.visit_request_workflow import CapacityEffect, TransitionPlan


async def apply_transition(
    *, uow: AbstractUnitOfWork, plan: TransitionPlan, updated: VisitRequest
) -> None:
    swapped = await uow.visit_request_repo.save_transition(
        request=updated, expected_status=plan.from_status
    )
    if not swapped:
        current = await uow.visit_request_repo.get(request_id=plan.request_id)
        if current is None:
            raise VisitRequestNotFoundError()
        if current.is_terminal:
            raise RequestTerminalError(f'Visit request is already {current.status}')
        raise InvalidTransitionError(f'Visit request was changed to {current.status} meanwhile')

    # slot_id is only None with CapacityEffect.NONE (see VisitRequestWorkflow)
    if plan.effect == CapacityEffect.RESERVE and plan.slot_id is not None:
        await uow.capacity_guard.reserve(slot_id=plan.slot_id, visitor_count=plan.visitor_count)
    elif plan.effect == CapacityEffect.RELEASE and plan.slot_id is not None:
        await uow.capacity_guard.release(slot_id=plan.slot_id, visitor_count=plan.visitor_count)


async def notify_after_commit(
    *,
    notifier: INotificationDispatcher,
    event: Optional[VisitRequestEvent],
    request: VisitRequest,
) -> None:
    """Fire-and-forget: a failed notification never undoes the committed change"""
    if event is None:
        return
    try:
        await notifier.notify(event=event, request=request)
    except Exception as e:
        Logger.base.warning(
            f'📭 [NOTIFY] {event} for request {request.id} failed: {type(e).__name__}: {e}'
        )
