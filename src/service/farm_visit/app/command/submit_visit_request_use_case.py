import datetime
from typing import Callable, Optional
from uuid import UUID

from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.farm_visit_metrics import metrics
from src.service.farm_visit.app.command.visit_request_transition import notify_after_commit
from src.service.farm_visit.app.interface.i_notification_dispatcher import (
    INotificationDispatcher,
)
from src.service.farm_visit.domain.access_policy import AccessPolicy
from src.service.farm_visit.domain.domain_event.visit_request_event import VisitRequestEvent
from src.service.farm_visit.domain.entity.availability_slot_entity import AvailabilitySlot
from src.service.farm_visit.domain.entity.visit_request_entity import VisitRequest
from src.service.farm_visit.domain.enum.visit_action import VisitAction
from src.service.farm_visit.domain.farm_visit_errors import SlotNotFoundError
from src.service.farm_visit.domain.value_object.actor import Actor
from src.service.farm_visit.domain.value_object.resource_ref import ResourceRef


class SubmitVisitRequestUseCase:
    """
    Submit a pending visit request against a slot.

    The slot is given directly by availability_id, or found from the seller and
    the requested date and times. Slots hidden from the caller (private farm,
    visit type switched off) are reported as missing, as on the read paths.

    The capacity check here only turns away parties larger than the slot;
    places are held when the request is approved.
    """

    def __init__(
        self,
        *,
        uow_factory: Callable[[], AbstractUnitOfWork],
        access_policy: AccessPolicy,
        notifier: INotificationDispatcher,
        today: Callable[[], datetime.date] = datetime.date.today,
    ) -> None:
        self.uow_factory = uow_factory
        self.access_policy = access_policy
        self.notifier = notifier
        self.today = today

    def _manages(self, actor: Optional[Actor], seller_id: int) -> bool:
        return self.access_policy.authorize(
            actor, VisitAction.VIEW_UNPUBLISHED_SLOT, ResourceRef(seller_id=seller_id)
        )

    async def _ensure_published(
        self, *, uow: AbstractUnitOfWork, actor: Optional[Actor], slot: AvailabilitySlot
    ) -> None:
        # Same visibility as the slot read paths: a hidden slot takes no requests
        if self._manages(actor, slot.seller_id):
            return
        profile = await uow.farm_profile_repo.get(seller_id=slot.seller_id)
        if profile is None or not profile.publishes(slot.visit_type):
            raise SlotNotFoundError()

    @Logger.io
    async def execute(
        self,
        *,
        actor: Optional[Actor],
        visitor_name: str,
        visitor_phone: str,
        number_of_visitors: int = 1,
        availability_id: Optional[UUID] = None,
        seller_id: Optional[int] = None,
        requested_date: Optional[datetime.date] = None,
        requested_time_start: Optional[datetime.time] = None,
        requested_time_end: Optional[datetime.time] = None,
        visitor_email: Optional[str] = None,
        purpose: Optional[str] = None,
        special_requirements: Optional[str] = None,
        message_to_farmer: Optional[str] = None,
    ) -> VisitRequest:
        if number_of_visitors < 1:
            raise DomainError('number_of_visitors must be at least 1')

        async with self.uow_factory() as uow:
            if availability_id is not None:
                slot_id = availability_id
            elif seller_id is not None and requested_date and requested_time_start:
                match = await uow.slot_repo.find_by_window(
                    seller_id=seller_id,
                    date=requested_date,
                    start_time=requested_time_start,
                    end_time=requested_time_end,
                )
                if not match:
                    raise SlotNotFoundError('Selected time slot is not available')
                slot_id = match.id
            else:
                raise DomainError(
                    'availability_id, or seller_id with requested_date and '
                    'requested_time_start, is required'
                )

            # Locks the slot row so a concurrent delete cannot orphan this request
            slot = await uow.slot_repo.get_for_update(slot_id=slot_id)
            if not slot:
                raise SlotNotFoundError()

            self.access_policy.enforce(
                actor, VisitAction.SUBMIT_REQUEST, ResourceRef(seller_id=slot.seller_id)
            )
            await self._ensure_published(uow=uow, actor=actor, slot=slot)
            slot.ensure_can_accept(visitor_count=number_of_visitors, today=self.today())

            request = VisitRequest.create(
                slot=slot,
                user_id=actor.user_id if actor else None,
                number_of_visitors=number_of_visitors,
                visitor_name=visitor_name,
                visitor_phone=visitor_phone,
                visitor_email=visitor_email or (actor.email if actor else None),
                purpose=purpose,
                special_requirements=special_requirements,
                message_to_farmer=message_to_farmer,
            )
            created = await uow.visit_request_repo.create(request=request)
            await uow.commit()

        metrics.record_submission(visit_type=slot.visit_type)
        Logger.base.info(
            f'📝 [REQUEST] Request {created.id} for {created.number_of_visitors} on slot {slot.id}'
        )
        await notify_after_commit(
            notifier=self.notifier, event=VisitRequestEvent.SUBMITTED, request=created
        )
        return created
