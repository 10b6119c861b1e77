from typing import List, Literal, Optional

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.farm_visit.app.reservation_service import ReservationService
from src.service.farm_visit.driving_adapter.http_controller.schema.farm_schema import (
    FarmSummaryResponse,
)


router = APIRouter()


@router.get('', response_model=List[FarmSummaryResponse])
@Logger.io
@inject
async def list_farms(
    visit_type: Optional[Literal['farm', 'garden']] = None,
    has_availability: bool = False,
    location: Optional[str] = None,
    service: ReservationService = Depends(Provide[Container.reservation_service]),
) -> List[FarmSummaryResponse]:
    farms = await service.list_farms(
        visit_type=visit_type, has_availability=has_availability, location=location
    )
    return [FarmSummaryResponse.model_validate(farm) for farm in farms]
