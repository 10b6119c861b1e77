"""
Unit tests for VisitRequestWorkflow

Covers the transition table, the order of checks and the capacity effect of
every allowed change, for regular decisions and administrative overrides.
"""

from typing import Optional

import attrs
import pytest

from src.service.farm_visit.domain.enum.visit_request_status import VisitRequestStatus
from src.service.farm_visit.domain.farm_visit_errors import (
    InvalidTransitionError,
    RequestTerminalError,
    SlotUnavailableError,
    UnauthorizedError,
)
from src.service.farm_visit.domain.value_object.actor import Actor
from src.service.farm_visit.domain.visit_request_workflow import (
    CapacityEffect,
    VisitRequestWorkflow,
)
from test.service.farm_visit.fixtures import (
    ADMIN,
    BUYER,
    OTHER_BUYER,
    OTHER_SELLER,
    SELLER,
    SUPERADMIN,
    make_request,
)


S = VisitRequestStatus


@pytest.fixture
def workflow() -> VisitRequestWorkflow:
    return VisitRequestWorkflow()


@pytest.mark.unit
class TestPlan:
    @pytest.mark.parametrize(
        'actor, current, target, effect',
        [
            (SELLER, S.PENDING, S.APPROVED, CapacityEffect.RESERVE),
            (ADMIN, S.PENDING, S.APPROVED, CapacityEffect.RESERVE),
            (SELLER, S.PENDING, S.REJECTED, CapacityEffect.NONE),
            (BUYER, S.PENDING, S.CANCELLED, CapacityEffect.NONE),
            (SELLER, S.APPROVED, S.COMPLETED, CapacityEffect.NONE),
            (BUYER, S.APPROVED, S.CANCELLED, CapacityEffect.RELEASE),
            (SELLER, S.APPROVED, S.CANCELLED, CapacityEffect.RELEASE),
            (SUPERADMIN, S.APPROVED, S.CANCELLED, CapacityEffect.RELEASE),
        ],
    )
    def test_allowed_transitions(
        self,
        workflow: VisitRequestWorkflow,
        actor: Actor,
        current: VisitRequestStatus,
        target: VisitRequestStatus,
        effect: CapacityEffect,
    ) -> None:
        request = make_request(status=current, number_of_visitors=3)

        plan = workflow.plan(actor=actor, request=request, target=target)

        assert plan.from_status == current
        assert plan.to_status == target
        assert plan.effect == effect
        assert plan.slot_id == request.availability_id
        assert plan.visitor_count == 3

    @pytest.mark.parametrize('terminal', [S.REJECTED, S.COMPLETED, S.CANCELLED])
    def test_terminal_request_cannot_move(
        self, workflow: VisitRequestWorkflow, terminal: VisitRequestStatus
    ) -> None:
        request = make_request(status=terminal)

        with pytest.raises(RequestTerminalError):
            workflow.plan(actor=BUYER, request=request, target=S.CANCELLED)

    @pytest.mark.parametrize(
        'current, target',
        [(S.PENDING, S.COMPLETED), (S.APPROVED, S.REJECTED), (S.APPROVED, S.PENDING)],
    )
    def test_transition_outside_table_is_invalid(
        self,
        workflow: VisitRequestWorkflow,
        current: VisitRequestStatus,
        target: VisitRequestStatus,
    ) -> None:
        with pytest.raises(InvalidTransitionError):
            workflow.plan(actor=SELLER, request=make_request(status=current), target=target)

    @pytest.mark.parametrize('outsider', [OTHER_SELLER, OTHER_BUYER, None])
    def test_unrelated_caller_is_unauthorized(
        self, workflow: VisitRequestWorkflow, outsider: Optional[Actor]
    ) -> None:
        with pytest.raises(UnauthorizedError):
            workflow.plan(actor=outsider, request=make_request(), target=S.APPROVED)

    def test_unrelated_caller_is_rejected_before_terminal_check(
        self, workflow: VisitRequestWorkflow
    ) -> None:
        request = make_request(status=S.CANCELLED)

        with pytest.raises(UnauthorizedError):
            workflow.plan(actor=OTHER_SELLER, request=request, target=S.CANCELLED)

    def test_requester_cannot_approve_own_request(self, workflow: VisitRequestWorkflow) -> None:
        with pytest.raises(UnauthorizedError):
            workflow.plan(actor=BUYER, request=make_request(), target=S.APPROVED)

    def test_seller_cannot_cancel_pending_request(self, workflow: VisitRequestWorkflow) -> None:
        # Sellers reject pending requests; cancelling is the requester's move
        with pytest.raises(UnauthorizedError):
            workflow.plan(actor=SELLER, request=make_request(), target=S.CANCELLED)

    def test_approving_request_without_slot_is_unavailable(
        self, workflow: VisitRequestWorkflow
    ) -> None:
        request = attrs.evolve(make_request(), availability_id=None)

        with pytest.raises(SlotUnavailableError):
            workflow.plan(actor=SELLER, request=request, target=S.APPROVED)

    def test_cancelling_request_without_slot_releases_nothing(
        self, workflow: VisitRequestWorkflow
    ) -> None:
        request = attrs.evolve(make_request(status=S.APPROVED), availability_id=None)

        plan = workflow.plan(actor=BUYER, request=request, target=S.CANCELLED)

        assert plan.effect == CapacityEffect.NONE
        assert plan.slot_id is None


@pytest.mark.unit
class TestPlanOverride:
    @pytest.mark.parametrize(
        'current, target, effect',
        [
            (S.REJECTED, S.APPROVED, CapacityEffect.RESERVE),
            (S.CANCELLED, S.COMPLETED, CapacityEffect.RESERVE),
            (S.COMPLETED, S.CANCELLED, CapacityEffect.RELEASE),
            (S.APPROVED, S.PENDING, CapacityEffect.RELEASE),
            (S.APPROVED, S.COMPLETED, CapacityEffect.NONE),
            (S.PENDING, S.REJECTED, CapacityEffect.NONE),
        ],
    )
    def test_effect_follows_capacity_holding_states(
        self,
        workflow: VisitRequestWorkflow,
        current: VisitRequestStatus,
        target: VisitRequestStatus,
        effect: CapacityEffect,
    ) -> None:
        plan = workflow.plan_override(
            actor=ADMIN, request=make_request(status=current), target=target
        )

        assert plan.effect == effect

    @pytest.mark.parametrize('actor', [SELLER, BUYER, None])
    def test_only_admins_may_override(
        self, workflow: VisitRequestWorkflow, actor: Optional[Actor]
    ) -> None:
        with pytest.raises(UnauthorizedError):
            workflow.plan_override(
                actor=actor, request=make_request(status=S.REJECTED), target=S.APPROVED
            )

    def test_same_status_is_invalid(self, workflow: VisitRequestWorkflow) -> None:
        with pytest.raises(InvalidTransitionError):
            workflow.plan_override(
                actor=ADMIN, request=make_request(status=S.APPROVED), target=S.APPROVED
            )
