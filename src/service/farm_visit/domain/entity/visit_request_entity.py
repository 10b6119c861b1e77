import datetime
from typing import Optional
from uuid import UUID

import attrs

from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.platform.types.uuid7 import new_uuid7
from src.service.farm_visit.domain.entity.availability_slot_entity import AvailabilitySlot
from src.service.farm_visit.domain.enum.visit_request_status import VisitRequestStatus


OVERRIDE_NOTE_PREFIX = '[override]'


@attrs.define
class VisitRequest:
    id: UUID
    seller_id: int
    requested_date: datetime.date
    requested_time_start: datetime.time
    requested_time_end: datetime.time
    number_of_visitors: int
    visitor_name: str
    user_id: Optional[int] = None  # None for guest requesters
    availability_id: Optional[UUID] = None  # None once the slot is removed
    visitor_phone: Optional[str] = attrs.field(default=None, repr=False)
    visitor_email: Optional[str] = attrs.field(default=None, repr=False)
    purpose: Optional[str] = None
    special_requirements: Optional[str] = None
    message_to_farmer: Optional[str] = None
    status: VisitRequestStatus = VisitRequestStatus.PENDING
    admin_notes: Optional[str] = None
    rejection_reason: Optional[str] = None
    reviewed_by: Optional[int] = None
    reviewed_at: Optional[datetime.datetime] = None
    created_at: Optional[datetime.datetime] = None
    updated_at: Optional[datetime.datetime] = None

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        slot: AvailabilitySlot,
        user_id: Optional[int],
        number_of_visitors: int,
        visitor_name: str,
        visitor_phone: str,
        visitor_email: Optional[str] = None,
        purpose: Optional[str] = None,
        special_requirements: Optional[str] = None,
        message_to_farmer: Optional[str] = None,
    ) -> 'VisitRequest':
        """Pending request carrying a snapshot of the slot's date and time"""
        if number_of_visitors < 1:
            raise DomainError('number_of_visitors must be at least 1')
        if not visitor_name or not visitor_name.strip():
            raise DomainError('Missing required field: visitor_name')
        if not visitor_phone or not visitor_phone.strip():
            raise DomainError('Missing required field: visitor_phone')

        now = datetime.datetime.now(datetime.timezone.utc)
        return cls(
            id=new_uuid7(),
            user_id=user_id,
            seller_id=slot.seller_id,
            availability_id=slot.id,
            requested_date=slot.date,
            requested_time_start=slot.start_time,
            requested_time_end=slot.end_time,
            number_of_visitors=number_of_visitors,
            visitor_name=visitor_name.strip(),
            visitor_phone=visitor_phone.strip(),
            visitor_email=visitor_email,
            purpose=purpose if purpose is not None else message_to_farmer,
            special_requirements=special_requirements,
            message_to_farmer=message_to_farmer,
            status=VisitRequestStatus.PENDING,
            created_at=now,
            updated_at=now,
        )

    @property
    def is_terminal(self) -> bool:
        return self.status.is_terminal

    @property
    def holds_capacity(self) -> bool:
        return self.status.holds_capacity

    def transition_to(
        self,
        *,
        status: VisitRequestStatus,
        reviewed_by: int,
        admin_notes: Optional[str] = None,
        rejection_reason: Optional[str] = None,
    ) -> 'VisitRequest':
        """
        Apply an already validated status change with its audit fields

        The workflow decides whether the change is allowed; this only records it.
        """
        now = datetime.datetime.now(datetime.timezone.utc)
        return attrs.evolve(
            self,
            status=status,
            reviewed_by=reviewed_by,
            reviewed_at=now,
            admin_notes=admin_notes if admin_notes is not None else self.admin_notes,
            rejection_reason=(
                rejection_reason if rejection_reason is not None else self.rejection_reason
            ),
            updated_at=now,
        )
