from abc import ABC, abstractmethod
from uuid import UUID

from src.service.farm_visit.domain.entity.availability_slot_entity import AvailabilitySlot


class ICapacityGuard(ABC):
    """The only writer of AvailabilitySlot.current_bookings"""

    @abstractmethod
    async def reserve(self, *, slot_id: UUID, visitor_count: int) -> AvailabilitySlot:
        """
        Atomically hold visitor_count places on the slot

        Raises:
            SlotUnavailableError: Slot is missing or switched off
            CapacityExceededError: Not enough places left
        """
        pass

    @abstractmethod
    async def release(self, *, slot_id: UUID, visitor_count: int) -> None:
        """Give places back, floored at zero. Missing slots are ignored."""
        pass
