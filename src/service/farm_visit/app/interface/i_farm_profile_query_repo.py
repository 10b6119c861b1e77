from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from src.service.farm_visit.domain.entity.farm_visit_profile_entity import FarmVisitProfile


class IFarmProfileQueryRepo(ABC):
    """Read-only access to seller farm profiles"""

    @abstractmethod
    async def get(self, *, seller_id: int) -> Optional[FarmVisitProfile]:
        pass

    @abstractmethod
    async def get_many(self, *, seller_ids: Iterable[int]) -> dict[int, FarmVisitProfile]:
        pass

    @abstractmethod
    async def list_public(
        self, *, visit_type: Optional[str] = None, location: Optional[str] = None
    ) -> List[FarmVisitProfile]:
        """Public profiles accepting visits of the given type (either type when None)"""
        pass
