import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from src.service.farm_visit.domain.enum.visit_action import VisitDecision
from src.service.farm_visit.domain.enum.visit_request_status import VisitRequestStatus


class VisitRequestSubmitRequest(BaseModel):
    # Either availability_id, or seller_id with the requested date and times
    availability_id: Optional[UUID] = None
    seller_id: Optional[int] = None
    requested_date: Optional[datetime.date] = None
    requested_time_start: Optional[datetime.time] = None
    requested_time_end: Optional[datetime.time] = None
    number_of_visitors: int = Field(1, ge=1)
    visitor_name: str
    visitor_phone: str
    visitor_email: Optional[str] = None
    purpose: Optional[str] = None
    special_requirements: Optional[str] = None
    message_to_farmer: Optional[str] = None

    class Config:
        json_schema_extra = {
            'examples': [
                {
                    'availability_id': '01936d8f-5e73-7c4e-a9c5-123456789abc',
                    'number_of_visitors': 3,
                    'visitor_name': 'Mei Lin',
                    'visitor_phone': '0912345678',
                },
                {
                    'seller_id': 7,
                    'requested_date': '2026-11-02',
                    'requested_time_start': '10:00:00',
                    'requested_time_end': '12:00:00',
                    'number_of_visitors': 2,
                    'visitor_name': 'Mei Lin',
                    'visitor_phone': '0912345678',
                },
            ]
        }


class VisitRequestDecisionRequest(BaseModel):
    decision: VisitDecision
    notes: Optional[str] = None
    rejection_reason: Optional[str] = None

    class Config:
        json_schema_extra = {'example': {'decision': 'approve', 'notes': 'See you at the gate'}}


class VisitRequestOverrideRequest(BaseModel):
    status: VisitRequestStatus
    notes: Optional[str] = None


class VisitRequestResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: Optional[int] = None
    seller_id: int
    availability_id: Optional[UUID] = None
    requested_date: datetime.date
    requested_time_start: datetime.time
    requested_time_end: datetime.time
    number_of_visitors: int
    visitor_name: str
    visitor_phone: Optional[str] = None
    visitor_email: Optional[str] = None
    purpose: Optional[str] = None
    special_requirements: Optional[str] = None
    message_to_farmer: Optional[str] = None
    status: VisitRequestStatus
    admin_notes: Optional[str] = None
    rejection_reason: Optional[str] = None
    reviewed_by: Optional[int] = None
    reviewed_at: Optional[datetime.datetime] = None
    created_at: Optional[datetime.datetime] = None
    updated_at: Optional[datetime.datetime] = None
