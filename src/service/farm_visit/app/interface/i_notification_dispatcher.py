from abc import ABC, abstractmethod

from src.service.farm_visit.domain.domain_event.visit_request_event import VisitRequestEvent
from src.service.farm_visit.domain.entity.visit_request_entity import VisitRequest


class INotificationDispatcher(ABC):
    @abstractmethod
    async def notify(self, *, event: VisitRequestEvent, request: VisitRequest) -> None:
        pass
