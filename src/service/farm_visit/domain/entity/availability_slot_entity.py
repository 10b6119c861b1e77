import datetime
from typing import Any, Mapping, Optional
from uuid import UUID

import attrs

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.platform.types.uuid7 import new_uuid7
from src.service.farm_visit.domain.enum.visit_type import VisitType
from src.service.farm_visit.domain.farm_visit_errors import (
    CapacityExceededError,
    SlotExpiredError,
    SlotUnavailableError,
)


# current_bookings belongs to the capacity guard; the rest is fixed at creation
PROTECTED_SLOT_FIELDS = frozenset({'id', 'seller_id', 'current_bookings', 'created_at', 'updated_at'})
UPDATABLE_SLOT_FIELDS = frozenset(
    {
        'date',
        'start_time',
        'end_time',
        'is_available',
        'max_visitors',
        'price_per_person',
        'visit_type',
        'location_type',
        'activity_type',
        'space_description',
        'special_notes',
    }
)


def default_max_visitors(visit_type: str) -> int:
    if visit_type == VisitType.GARDEN:
        return settings.DEFAULT_MAX_VISITORS_GARDEN
    return settings.DEFAULT_MAX_VISITORS_FARM


def default_activity_type(visit_type: str) -> str:
    return 'garden_tour' if visit_type == VisitType.GARDEN else 'farm_tour'


@attrs.define
class AvailabilitySlot:
    id: UUID
    seller_id: int
    date: datetime.date
    start_time: datetime.time
    end_time: datetime.time
    max_visitors: int
    current_bookings: int = 0
    is_available: bool = True
    price_per_person: int = 0
    visit_type: str = VisitType.FARM
    location_type: str = 'farm'
    activity_type: str = 'farm_tour'
    space_description: Optional[str] = None
    special_notes: Optional[str] = None
    created_at: Optional[datetime.datetime] = None
    updated_at: Optional[datetime.datetime] = None

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        seller_id: int,
        date: datetime.date,
        start_time: datetime.time,
        end_time: datetime.time,
        max_visitors: Optional[int] = None,
        is_available: bool = True,
        price_per_person: int = 0,
        visit_type: Optional[str] = None,
        location_type: Optional[str] = None,
        activity_type: Optional[str] = None,
        space_description: Optional[str] = None,
        special_notes: Optional[str] = None,
    ) -> 'AvailabilitySlot':
        visit_type = visit_type or VisitType.FARM
        if max_visitors is None:
            max_visitors = default_max_visitors(visit_type)

        now = datetime.datetime.now(datetime.timezone.utc)
        slot = cls(
            id=new_uuid7(),
            seller_id=seller_id,
            date=date,
            start_time=start_time,
            end_time=end_time,
            max_visitors=max_visitors,
            current_bookings=0,
            is_available=is_available,
            price_per_person=price_per_person,
            visit_type=visit_type,
            location_type=location_type or 'farm',
            activity_type=activity_type or default_activity_type(visit_type),
            space_description=space_description,
            special_notes=special_notes,
            created_at=now,
            updated_at=now,
        )
        slot._validate()
        return slot

    @Logger.io
    def apply_changes(self, changes: Mapping[str, Any]) -> 'AvailabilitySlot':
        """
        Return a copy of the slot with owner-editable fields changed

        Raises:
            DomainError: When a protected or unknown field is given, or the result is invalid
        """
        for field in changes:
            if field in PROTECTED_SLOT_FIELDS:
                raise DomainError(f'{field} cannot be updated')
            if field not in UPDATABLE_SLOT_FIELDS:
                raise DomainError(f'Unknown slot field: {field}')

        updated = attrs.evolve(
            self, **changes, updated_at=datetime.datetime.now(datetime.timezone.utc)
        )
        updated._validate()
        return updated

    def _validate(self) -> None:
        if self.max_visitors < 0:
            raise DomainError('max_visitors must be zero or greater')
        if self.end_time <= self.start_time:
            raise DomainError('end_time must be after start_time')
        if self.price_per_person < 0:
            raise DomainError('price_per_person must be zero or greater')
        if self.max_visitors < self.current_bookings:
            raise DomainError('max_visitors cannot be lower than current bookings')

    @property
    def remaining_capacity(self) -> int:
        return max(self.max_visitors - self.current_bookings, 0)

    def is_expired(self, *, today: datetime.date) -> bool:
        return self.date < today

    def is_open(self, *, today: datetime.date) -> bool:
        """Listed as bookable: toggled on, not in the past and with room left."""
        return self.is_available and not self.is_expired(today=today) and self.remaining_capacity > 0

    def ensure_can_accept(self, *, visitor_count: int, today: datetime.date) -> None:
        """
        Early user-facing check before a request is created

        Capacity is only held at approval, so a full slot still takes requests
        (an approved visit may be cancelled); only a party larger than the whole
        slot is turned away here. Remaining places are enforced when the request
        is approved, by CapacityGuard.reserve in the same transaction as the
        status change; do not compare against current_bookings here.
        """
        if not self.is_available:
            raise SlotUnavailableError()
        if self.is_expired(today=today):
            raise SlotExpiredError()
        if visitor_count > self.max_visitors:
            raise CapacityExceededError(
                'Not enough space available for the requested number of visitors'
            )
