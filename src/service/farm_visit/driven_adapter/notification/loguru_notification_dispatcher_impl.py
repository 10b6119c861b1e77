"""Notification dispatcher that writes visit request events to the log instead of delivering them."""

from src.platform.logging.loguru_io import Logger
from src.service.farm_visit.app.interface.i_notification_dispatcher import (
    INotificationDispatcher,
)
from src.service.farm_visit.domain.domain_event.visit_request_event import VisitRequestEvent
from src.service.farm_visit.domain.entity.visit_request_entity import VisitRequest


_EVENT_MESSAGES = {
    VisitRequestEvent.SUBMITTED: 'New farm visit request received',
    VisitRequestEvent.APPROVED: 'Your farm visit request has been approved',
    VisitRequestEvent.REJECTED: 'Your farm visit request has been declined',
    VisitRequestEvent.COMPLETED: 'Thank you for visiting the farm',
    VisitRequestEvent.CANCELLED: 'A farm visit has been cancelled',
}


class LoguruNotificationDispatcherImpl(INotificationDispatcher):
    @Logger.io
    async def notify(self, *, event: VisitRequestEvent, request: VisitRequest) -> None:
        # Sellers hear about submissions, requesters about decisions
        recipient = (
            f'seller:{request.seller_id}'
            if event == VisitRequestEvent.SUBMITTED
            else f'user:{request.user_id or "guest"}'
        )
        Logger.base.info(
            f'📨 [NOTIFY] {event} -> {recipient} | {_EVENT_MESSAGES[event]} '
            f'| request={request.id} date={request.requested_date} '
            f'{request.requested_time_start}-{request.requested_time_end}'
        )
