from enum import StrEnum

from src.service.farm_visit.domain.enum.visit_request_status import VisitRequestStatus


class VisitAction(StrEnum):
    CREATE_SLOT = 'create_slot'
    UPDATE_SLOT = 'update_slot'
    DELETE_SLOT = 'delete_slot'
    VIEW_UNPUBLISHED_SLOT = 'view_unpublished_slot'
    SUBMIT_REQUEST = 'submit_request'
    VIEW_SELLER_REQUESTS = 'view_seller_requests'
    VIEW_OWN_REQUESTS = 'view_own_requests'
    VIEW_ALL_REQUESTS = 'view_all_requests'
    APPROVE_REQUEST = 'approve_request'
    REJECT_REQUEST = 'reject_request'
    COMPLETE_REQUEST = 'complete_request'
    CANCEL_REQUEST = 'cancel_request'
    OVERRIDE_REQUEST_STATUS = 'override_request_status'


class VisitDecision(StrEnum):
    APPROVE = 'approve'
    REJECT = 'reject'
    COMPLETE = 'complete'
    CANCEL = 'cancel'

    @property
    def target_status(self) -> VisitRequestStatus:
        return _DECISION_TARGETS[self]

    @property
    def action(self) -> VisitAction:
        return _DECISION_ACTIONS[self]


_DECISION_TARGETS = {
    VisitDecision.APPROVE: VisitRequestStatus.APPROVED,
    VisitDecision.REJECT: VisitRequestStatus.REJECTED,
    VisitDecision.COMPLETE: VisitRequestStatus.COMPLETED,
    VisitDecision.CANCEL: VisitRequestStatus.CANCELLED,
}

_DECISION_ACTIONS = {
    VisitDecision.APPROVE: VisitAction.APPROVE_REQUEST,
    VisitDecision.REJECT: VisitAction.REJECT_REQUEST,
    VisitDecision.COMPLETE: VisitAction.COMPLETE_REQUEST,
    VisitDecision.CANCEL: VisitAction.CANCEL_REQUEST,
}
