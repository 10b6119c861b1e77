"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.farm_visit.driving_adapter.http_controller import (
    farm_controller,
    slot_controller,
    visit_request_controller,
)
from src.service.farm_visit.driving_adapter.http_controller.auth import jwt_auth


WIRE_MODULES: list[ModuleType] = [
    jwt_auth,
    slot_controller,
    visit_request_controller,
    farm_controller,
]
