from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.service.farm_visit.domain.entity.visit_request_entity import VisitRequest
from src.service.farm_visit.domain.enum.visit_request_status import VisitRequestStatus
from src.service.farm_visit.domain.value_object.visit_request_filter import VisitRequestFilter


class IVisitRequestRepo(ABC):
    """Repository interface for visit requests"""

    @abstractmethod
    async def create(self, *, request: VisitRequest) -> VisitRequest:
        pass

    @abstractmethod
    async def get(self, *, request_id: UUID) -> Optional[VisitRequest]:
        pass

    @abstractmethod
    async def get_for_update(self, *, request_id: UUID) -> Optional[VisitRequest]:
        pass

    @abstractmethod
    async def save_transition(
        self, *, request: VisitRequest, expected_status: VisitRequestStatus
    ) -> bool:
        """
        Compare-and-swap the status and audit fields

        Returns:
            False when the stored status no longer equals expected_status
        """
        pass

    @abstractmethod
    async def list(self, *, request_filter: VisitRequestFilter) -> List[VisitRequest]:
        """Newest first"""
        pass

    @abstractmethod
    async def list_by_slot(
        self, *, slot_id: UUID, statuses: Optional[frozenset[VisitRequestStatus]] = None
    ) -> List[VisitRequest]:
        pass
