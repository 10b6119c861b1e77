import datetime
from typing import List, Literal, Optional
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, Response, status
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.farm_visit.app.reservation_service import ReservationService
from src.service.farm_visit.domain.value_object.actor import Actor
from src.service.farm_visit.domain.value_object.slot_filter import SlotFilter
from src.service.farm_visit.driving_adapter.http_controller.auth.jwt_auth import (
    get_current_actor,
    get_optional_actor,
)
from src.service.farm_visit.driving_adapter.http_controller.schema.slot_schema import (
    SlotCreateRequest,
    SlotResponse,
    SlotUpdateRequest,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
@inject
async def create_slot(
    request: SlotCreateRequest,
    actor: Actor = Depends(get_current_actor),
    service: ReservationService = Depends(Provide[Container.reservation_service]),
) -> SlotResponse:
    with tracer.start_as_current_span('controller.create_slot') as span:
        span.set_attribute('actor.id', actor.user_id)
        slot = await service.create_slot(actor=actor, **request.model_dump())
        span.set_attribute('slot.id', str(slot.id))
        return SlotResponse.model_validate(slot)


@router.get('', response_model=List[SlotResponse])
@Logger.io
@inject
async def list_slots(
    seller_id: Optional[int] = None,
    date: Optional[datetime.date] = None,
    start_date: Optional[datetime.date] = None,
    end_date: Optional[datetime.date] = None,
    available_only: bool = False,
    visit_type: Optional[Literal['farm', 'garden']] = None,
    actor: Optional[Actor] = Depends(get_optional_actor),
    service: ReservationService = Depends(Provide[Container.reservation_service]),
) -> List[SlotResponse]:
    slots = await service.list_slots(
        actor=actor,
        slot_filter=SlotFilter(
            seller_id=seller_id,
            date=date,
            start_date=start_date,
            end_date=end_date,
            available_only=available_only,
            visit_type=visit_type,
        ),
    )
    return [SlotResponse.model_validate(slot) for slot in slots]


@router.get('/{slot_id}')
@Logger.io
@inject
async def get_slot(
    slot_id: UUID,
    actor: Optional[Actor] = Depends(get_optional_actor),
    service: ReservationService = Depends(Provide[Container.reservation_service]),
) -> SlotResponse:
    slot = await service.get_slot(actor=actor, slot_id=slot_id)
    return SlotResponse.model_validate(slot)


@router.patch('/{slot_id}')
@Logger.io
@inject
async def update_slot(
    slot_id: UUID,
    request: SlotUpdateRequest,
    actor: Actor = Depends(get_current_actor),
    service: ReservationService = Depends(Provide[Container.reservation_service]),
) -> SlotResponse:
    slot = await service.update_slot(
        actor=actor, slot_id=slot_id, changes=request.model_dump(exclude_unset=True)
    )
    return SlotResponse.model_validate(slot)


@router.delete('/{slot_id}', status_code=status.HTTP_204_NO_CONTENT)
@Logger.io
@inject
async def delete_slot(
    slot_id: UUID,
    cascade: bool = False,
    actor: Actor = Depends(get_current_actor),
    service: ReservationService = Depends(Provide[Container.reservation_service]),
) -> Response:
    await service.delete_slot(actor=actor, slot_id=slot_id, cascade=cascade)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
