from abc import ABC, abstractmethod
import datetime
from typing import Any, List, Mapping, Optional
from uuid import UUID

from src.service.farm_visit.domain.entity.availability_slot_entity import AvailabilitySlot
from src.service.farm_visit.domain.value_object.slot_filter import SlotFilter


class ISlotRepo(ABC):
    """Repository interface for availability slots. Never writes current_bookings."""

    @abstractmethod
    async def create(self, *, slot: AvailabilitySlot) -> AvailabilitySlot:
        """
        Raises:
            SlotConflictError: A slot already exists for this seller, date and start time
        """
        pass

    @abstractmethod
    async def get(self, *, slot_id: UUID) -> Optional[AvailabilitySlot]:
        pass

    @abstractmethod
    async def get_for_update(self, *, slot_id: UUID) -> Optional[AvailabilitySlot]:
        """Get the slot and lock its row until the transaction ends"""
        pass

    @abstractmethod
    async def find_by_window(
        self,
        *,
        seller_id: int,
        date: datetime.date,
        start_time: datetime.time,
        end_time: Optional[datetime.time] = None,
    ) -> Optional[AvailabilitySlot]:
        """end_time None matches any end time"""
        pass

    @abstractmethod
    async def update(self, *, slot_id: UUID, changes: Mapping[str, Any]) -> AvailabilitySlot:
        """
        Update owner-editable fields

        Raises:
            DomainError: changes contain current_bookings, or max_visitors would drop below it
            SlotNotFoundError: Slot does not exist
        """
        pass

    @abstractmethod
    async def delete(self, *, slot_id: UUID) -> None:
        """
        Delete the slot and detach its terminal requests

        Raises:
            SlotInUseError: A pending or approved request still references the slot
        """
        pass

    @abstractmethod
    async def list(self, *, slot_filter: SlotFilter) -> List[AvailabilitySlot]:
        pass
