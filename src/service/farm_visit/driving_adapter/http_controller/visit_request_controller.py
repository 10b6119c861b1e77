from typing import List, Optional
from uuid import UUID

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, status
from opentelemetry import trace

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.farm_visit.app.reservation_service import ReservationService
from src.service.farm_visit.domain.enum.visit_request_status import VisitRequestStatus
from src.service.farm_visit.domain.value_object.actor import Actor
from src.service.farm_visit.driving_adapter.http_controller.auth.jwt_auth import (
    get_current_actor,
    get_optional_actor,
)
from src.service.farm_visit.driving_adapter.http_controller.schema.visit_request_schema import (
    VisitRequestDecisionRequest,
    VisitRequestOverrideRequest,
    VisitRequestResponse,
    VisitRequestSubmitRequest,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
@inject
async def submit_visit_request(
    request: VisitRequestSubmitRequest,
    actor: Optional[Actor] = Depends(get_optional_actor),
    service: ReservationService = Depends(Provide[Container.reservation_service]),
) -> VisitRequestResponse:
    """Guests may submit too; the request is then not tied to a user."""
    with tracer.start_as_current_span('controller.submit_visit_request') as span:
        span.set_attribute('number_of_visitors', request.number_of_visitors)
        visit_request = await service.submit_request(actor=actor, **request.model_dump())
        span.set_attribute('visit_request.id', str(visit_request.id))
        return VisitRequestResponse.model_validate(visit_request)


@router.get('', response_model=List[VisitRequestResponse])
@Logger.io
@inject
async def list_visit_requests(
    status: Optional[VisitRequestStatus] = None,
    seller_id: Optional[int] = None,
    user_id: Optional[int] = None,
    actor: Actor = Depends(get_current_actor),
    service: ReservationService = Depends(Provide[Container.reservation_service]),
) -> List[VisitRequestResponse]:
    """Buyers see their own requests, sellers their farm's, admins everything."""
    requests = await service.list_visit_requests(
        actor=actor, seller_id=seller_id, user_id=user_id, status=status
    )
    return [VisitRequestResponse.model_validate(r) for r in requests]


@router.patch('/{request_id}')
@Logger.io
@inject
async def decide_visit_request(
    request_id: UUID,
    request: VisitRequestDecisionRequest,
    actor: Actor = Depends(get_current_actor),
    service: ReservationService = Depends(Provide[Container.reservation_service]),
) -> VisitRequestResponse:
    with tracer.start_as_current_span('controller.decide_visit_request') as span:
        span.set_attribute('visit_request.id', str(request_id))
        span.set_attribute('decision', request.decision.value)
        visit_request = await service.decide(
            actor=actor,
            request_id=request_id,
            decision=request.decision,
            notes=request.notes,
            rejection_reason=request.rejection_reason,
        )
        return VisitRequestResponse.model_validate(visit_request)


@router.put('/{request_id}/override')
@Logger.io
@inject
async def override_visit_request_status(
    request_id: UUID,
    request: VisitRequestOverrideRequest,
    actor: Actor = Depends(get_current_actor),
    service: ReservationService = Depends(Provide[Container.reservation_service]),
) -> VisitRequestResponse:
    visit_request = await service.override_status(
        actor=actor, request_id=request_id, status=request.status, notes=request.notes
    )
    return VisitRequestResponse.model_validate(visit_request)
