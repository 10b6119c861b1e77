from src.service.farm_visit.domain.domain_event.visit_request_event import VisitRequestEvent

__all__ = ['VisitRequestEvent']
