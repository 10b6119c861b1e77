"""
Reservation Service

Facade over the farm visit use cases. HTTP controllers and any other entry
point call this class only, so every path goes through the same access
policy, workflow and capacity guard.
"""

import datetime
from typing import Any, Callable, List, Mapping, Optional
from uuid import UUID

from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.service.farm_visit.app.command.create_slot_use_case import CreateSlotUseCase
from src.service.farm_visit.app.command.decide_visit_request_use_case import (
    DecideVisitRequestUseCase,
)
from src.service.farm_visit.app.command.delete_slot_use_case import DeleteSlotUseCase
from src.service.farm_visit.app.command.override_visit_request_status_use_case import (
    OverrideVisitRequestStatusUseCase,
)
from src.service.farm_visit.app.command.submit_visit_request_use_case import (
    SubmitVisitRequestUseCase,
)
from src.service.farm_visit.app.command.update_slot_use_case import UpdateSlotUseCase
from src.service.farm_visit.app.dto.farm_summary import FarmSummary
from src.service.farm_visit.app.interface.i_notification_dispatcher import (
    INotificationDispatcher,
)
from src.service.farm_visit.app.query.list_farms_use_case import ListFarmsUseCase
from src.service.farm_visit.app.query.list_slots_use_case import ListSlotsUseCase
from src.service.farm_visit.app.query.list_visit_requests_use_case import (
    ListVisitRequestsUseCase,
)
from src.service.farm_visit.domain.access_policy import AccessPolicy
from src.service.farm_visit.domain.entity.availability_slot_entity import AvailabilitySlot
from src.service.farm_visit.domain.entity.visit_request_entity import VisitRequest
from src.service.farm_visit.domain.enum.visit_action import VisitDecision
from src.service.farm_visit.domain.enum.visit_request_status import VisitRequestStatus
from src.service.farm_visit.domain.value_object.actor import Actor
from src.service.farm_visit.domain.value_object.slot_filter import SlotFilter
from src.service.farm_visit.domain.visit_request_workflow import VisitRequestWorkflow


class ReservationService:
    def __init__(
        self,
        *,
        uow_factory: Callable[[], AbstractUnitOfWork],
        notifier: INotificationDispatcher,
        access_policy: Optional[AccessPolicy] = None,
        today: Callable[[], datetime.date] = datetime.date.today,
    ) -> None:
        self.access_policy = access_policy or AccessPolicy()
        workflow = VisitRequestWorkflow(access_policy=self.access_policy)

        self._create_slot = CreateSlotUseCase(
            uow_factory=uow_factory, access_policy=self.access_policy
        )
        self._update_slot = UpdateSlotUseCase(
            uow_factory=uow_factory, access_policy=self.access_policy
        )
        self._delete_slot = DeleteSlotUseCase(
            uow_factory=uow_factory,
            access_policy=self.access_policy,
            workflow=workflow,
            notifier=notifier,
        )
        self._submit_request = SubmitVisitRequestUseCase(
            uow_factory=uow_factory,
            access_policy=self.access_policy,
            notifier=notifier,
            today=today,
        )
        self._decide = DecideVisitRequestUseCase(
            uow_factory=uow_factory, workflow=workflow, notifier=notifier
        )
        self._override = OverrideVisitRequestStatusUseCase(
            uow_factory=uow_factory, workflow=workflow, notifier=notifier
        )
        self._slots = ListSlotsUseCase(
            uow_factory=uow_factory, access_policy=self.access_policy, today=today
        )
        self._requests = ListVisitRequestsUseCase(
            uow_factory=uow_factory, access_policy=self.access_policy
        )
        self._farms = ListFarmsUseCase(uow_factory=uow_factory, today=today)

    # ========== Slots ==========

    async def create_slot(self, *, actor: Actor, **attrs: Any) -> AvailabilitySlot:
        return await self._create_slot.execute(actor=actor, **attrs)

    async def update_slot(
        self, *, actor: Actor, slot_id: UUID, changes: Mapping[str, Any]
    ) -> AvailabilitySlot:
        return await self._update_slot.execute(actor=actor, slot_id=slot_id, changes=changes)

    async def delete_slot(self, *, actor: Actor, slot_id: UUID, cascade: bool = False) -> None:
        await self._delete_slot.execute(actor=actor, slot_id=slot_id, cascade=cascade)

    async def get_slot(self, *, actor: Optional[Actor], slot_id: UUID) -> AvailabilitySlot:
        return await self._slots.get_slot(actor=actor, slot_id=slot_id)

    async def list_slots(
        self, *, actor: Optional[Actor], slot_filter: Optional[SlotFilter] = None
    ) -> List[AvailabilitySlot]:
        return await self._slots.list_slots(actor=actor, slot_filter=slot_filter or SlotFilter())

    # ========== Visit requests ==========

    async def submit_request(self, *, actor: Optional[Actor], **details: Any) -> VisitRequest:
        return await self._submit_request.execute(actor=actor, **details)

    async def decide(
        self,
        *,
        actor: Actor,
        request_id: UUID,
        decision: VisitDecision,
        notes: Optional[str] = None,
        rejection_reason: Optional[str] = None,
    ) -> VisitRequest:
        return await self._decide.execute(
            actor=actor,
            request_id=request_id,
            decision=decision,
            notes=notes,
            rejection_reason=rejection_reason,
        )

    async def override_status(
        self,
        *,
        actor: Actor,
        request_id: UUID,
        status: VisitRequestStatus,
        notes: Optional[str] = None,
    ) -> VisitRequest:
        return await self._override.execute(
            actor=actor, request_id=request_id, status=status, notes=notes
        )

    async def list_for_seller(
        self,
        *,
        actor: Actor,
        seller_id: Optional[int] = None,
        status: Optional[VisitRequestStatus] = None,
    ) -> List[VisitRequest]:
        return await self._requests.list_for_seller(actor=actor, seller_id=seller_id, status=status)

    async def list_for_requester(
        self,
        *,
        actor: Actor,
        user_id: Optional[int] = None,
        status: Optional[VisitRequestStatus] = None,
    ) -> List[VisitRequest]:
        return await self._requests.list_for_requester(actor=actor, user_id=user_id, status=status)

    async def list_visit_requests(
        self,
        *,
        actor: Actor,
        seller_id: Optional[int] = None,
        user_id: Optional[int] = None,
        status: Optional[VisitRequestStatus] = None,
    ) -> List[VisitRequest]:
        return await self._requests.list_visit_requests(
            actor=actor, seller_id=seller_id, user_id=user_id, status=status
        )

    # ========== Farms ==========

    async def list_farms(
        self,
        *,
        visit_type: Optional[str] = None,
        has_availability: bool = False,
        location: Optional[str] = None,
    ) -> List[FarmSummary]:
        return await self._farms.execute(
            visit_type=visit_type, has_availability=has_availability, location=location
        )
