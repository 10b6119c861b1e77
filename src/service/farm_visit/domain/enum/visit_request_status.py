from enum import StrEnum


class VisitRequestStatus(StrEnum):
    PENDING = 'pending'
    APPROVED = 'approved'
    REJECTED = 'rejected'
    COMPLETED = 'completed'
    CANCELLED = 'cancelled'

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATUSES

    @property
    def holds_capacity(self) -> bool:
        """Approved and completed requests keep their visitors counted against the slot."""
        return self in CAPACITY_HOLDING_STATUSES


TERMINAL_STATUSES = frozenset(
    {VisitRequestStatus.REJECTED, VisitRequestStatus.COMPLETED, VisitRequestStatus.CANCELLED}
)
CAPACITY_HOLDING_STATUSES = frozenset({VisitRequestStatus.APPROVED, VisitRequestStatus.COMPLETED})
# Requests that block a plain slot deletion
ACTIVE_STATUSES = frozenset({VisitRequestStatus.PENDING, VisitRequestStatus.APPROVED})
