"""
Visit Request Notification Events

Emitted after a visit request change has been committed. Delivery is handled
outside this service and never affects the committed change.
"""

from enum import StrEnum
from typing import Optional

from src.service.farm_visit.domain.enum.visit_request_status import VisitRequestStatus


class VisitRequestEvent(StrEnum):
    SUBMITTED = 'submitted'
    APPROVED = 'approved'
    REJECTED = 'rejected'
    COMPLETED = 'completed'
    CANCELLED = 'cancelled'

    @classmethod
    def for_status(cls, status: VisitRequestStatus) -> Optional['VisitRequestEvent']:
        if status == VisitRequestStatus.PENDING:
            return None
        return cls(status.value)
