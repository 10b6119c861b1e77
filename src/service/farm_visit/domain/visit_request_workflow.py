"""
Visit Request Workflow
Explicit state machine for visit requests: which status changes exist, who may
make them and what each one does to slot capacity.

Pure domain logic; persistence and the capacity guard are driven by the caller
from the returned TransitionPlan.
"""

from enum import StrEnum
from typing import Mapping, Optional
from uuid import UUID

import attrs

from src.platform.logging.loguru_io import Logger
from src.service.farm_visit.domain.access_policy import REQUEST_RELATIONS, AccessPolicy, Relation
from src.service.farm_visit.domain.entity.visit_request_entity import VisitRequest
from src.service.farm_visit.domain.enum.visit_request_status import VisitRequestStatus
from src.service.farm_visit.domain.farm_visit_errors import (
    InvalidTransitionError,
    RequestTerminalError,
    SlotUnavailableError,
    UnauthorizedError,
)
from src.service.farm_visit.domain.value_object.actor import Actor
from src.service.farm_visit.domain.value_object.resource_ref import ResourceRef


class CapacityEffect(StrEnum):
    NONE = 'none'
    RESERVE = 'reserve'
    RELEASE = 'release'


@attrs.define(frozen=True)
class TransitionRule:
    allowed: frozenset[Relation]
    effect: CapacityEffect = CapacityEffect.NONE


_DECIDERS = frozenset({Relation.SELLER_OWNER, Relation.ADMIN})

TRANSITIONS: Mapping[tuple[VisitRequestStatus, VisitRequestStatus], TransitionRule] = {
    (VisitRequestStatus.PENDING, VisitRequestStatus.APPROVED): TransitionRule(
        allowed=_DECIDERS, effect=CapacityEffect.RESERVE
    ),
    (VisitRequestStatus.PENDING, VisitRequestStatus.REJECTED): TransitionRule(allowed=_DECIDERS),
    (VisitRequestStatus.PENDING, VisitRequestStatus.CANCELLED): TransitionRule(
        allowed=frozenset({Relation.REQUESTER, Relation.ADMIN})
    ),
    (VisitRequestStatus.APPROVED, VisitRequestStatus.COMPLETED): TransitionRule(allowed=_DECIDERS),
    (VisitRequestStatus.APPROVED, VisitRequestStatus.CANCELLED): TransitionRule(
        allowed=REQUEST_RELATIONS, effect=CapacityEffect.RELEASE
    ),
}


@attrs.define(frozen=True)
class TransitionPlan:
    request_id: UUID
    from_status: VisitRequestStatus
    to_status: VisitRequestStatus
    effect: CapacityEffect
    slot_id: Optional[UUID]
    visitor_count: int


def request_resource(request: VisitRequest) -> ResourceRef:
    return ResourceRef(seller_id=request.seller_id, requester_id=request.user_id)


class VisitRequestWorkflow:
    def __init__(self, *, access_policy: Optional[AccessPolicy] = None) -> None:
        self.access_policy = access_policy or AccessPolicy()

    @Logger.io
    def plan(
        self, *, actor: Optional[Actor], request: VisitRequest, target: VisitRequestStatus
    ) -> TransitionPlan:
        """
        Validate a regular status change

        Checked in order: relation to the request, terminal status, transition
        table, then whether this relation may make this particular change.

        Raises:
            UnauthorizedError: Caller is unrelated to the request or not allowed this change
            RequestTerminalError: Request is already rejected, completed or cancelled
            InvalidTransitionError: The status change is not in the transition table
        """
        relations = self.access_policy.relations_for(actor, request_resource(request))
        if not relations & REQUEST_RELATIONS:
            raise UnauthorizedError()

        current = request.status
        if current.is_terminal:
            raise RequestTerminalError(f'Visit request is already {current}')

        rule = TRANSITIONS.get((current, target))
        if rule is None:
            raise InvalidTransitionError(f'Cannot change a visit request from {current} to {target}')

        if not relations & rule.allowed:
            raise UnauthorizedError(f'You are not allowed to mark this request as {target}')

        return self._build_plan(request=request, target=target, effect=rule.effect)

    @Logger.io
    def plan_override(
        self, *, actor: Optional[Actor], request: VisitRequest, target: VisitRequestStatus
    ) -> TransitionPlan:
        """
        Administrative override: any status, terminal ones included

        Capacity follows the holding-state difference between the two statuses.
        """
        relations = self.access_policy.relations_for(actor, request_resource(request))
        if Relation.ADMIN not in relations:
            raise UnauthorizedError('Only administrators can override a visit request status')

        current = request.status
        if current == target:
            raise InvalidTransitionError(f'Visit request is already {current}')

        if target.holds_capacity and not current.holds_capacity:
            effect = CapacityEffect.RESERVE
        elif current.holds_capacity and not target.holds_capacity:
            effect = CapacityEffect.RELEASE
        else:
            effect = CapacityEffect.NONE

        return self._build_plan(request=request, target=target, effect=effect)

    @staticmethod
    def _build_plan(
        *, request: VisitRequest, target: VisitRequestStatus, effect: CapacityEffect
    ) -> TransitionPlan:
        if request.availability_id is None:
            # The slot was removed: nothing left to hold, and nothing to release
            if effect == CapacityEffect.RESERVE:
                raise SlotUnavailableError('The time slot for this request no longer exists')
            effect = CapacityEffect.NONE

        return TransitionPlan(
            request_id=request.id,
            from_status=request.status,
            to_status=target,
            effect=effect,
            slot_id=request.availability_id,
            visitor_count=request.number_of_visitors,
        )
