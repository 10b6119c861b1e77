"""Application layer interfaces (Ports)"""

from src.service.farm_visit.app.interface.i_capacity_guard import ICapacityGuard
from src.service.farm_visit.app.interface.i_farm_profile_query_repo import IFarmProfileQueryRepo
from src.service.farm_visit.app.interface.i_notification_dispatcher import INotificationDispatcher
from src.service.farm_visit.app.interface.i_slot_repo import ISlotRepo
from src.service.farm_visit.app.interface.i_visit_request_repo import IVisitRequestRepo

__all__ = [
    'ICapacityGuard',
    'IFarmProfileQueryRepo',
    'INotificationDispatcher',
    'ISlotRepo',
    'IVisitRequestRepo',
]
