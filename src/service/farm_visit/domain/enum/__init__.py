"""Farm Visit Domain Enums"""

from src.service.farm_visit.domain.enum.user_role import UserRole
from src.service.farm_visit.domain.enum.visit_action import VisitAction, VisitDecision
from src.service.farm_visit.domain.enum.visit_request_status import VisitRequestStatus
from src.service.farm_visit.domain.enum.visit_type import VisitType

__all__ = ['UserRole', 'VisitAction', 'VisitDecision', 'VisitRequestStatus', 'VisitType']
