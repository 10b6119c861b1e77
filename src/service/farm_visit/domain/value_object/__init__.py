"""Farm Visit Value Objects"""

from src.service.farm_visit.domain.value_object.actor import Actor
from src.service.farm_visit.domain.value_object.resource_ref import ResourceRef
from src.service.farm_visit.domain.value_object.slot_filter import SlotFilter
from src.service.farm_visit.domain.value_object.visit_request_filter import VisitRequestFilter

__all__ = ['Actor', 'ResourceRef', 'SlotFilter', 'VisitRequestFilter']
