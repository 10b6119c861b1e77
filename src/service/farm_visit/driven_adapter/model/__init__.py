"""
Database Models

Import all models here to ensure they are registered with SQLAlchemy
"""

from src.service.farm_visit.driven_adapter.model.availability_slot_model import (
    AvailabilitySlotModel,
)
from src.service.farm_visit.driven_adapter.model.farm_profile_model import FarmProfileModel
from src.service.farm_visit.driven_adapter.model.visit_request_model import VisitRequestModel

__all__ = [
    'AvailabilitySlotModel',
    'FarmProfileModel',
    'VisitRequestModel',
]
