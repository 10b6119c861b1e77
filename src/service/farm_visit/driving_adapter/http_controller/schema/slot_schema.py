import datetime
from typing import Literal, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class SlotCreateRequest(BaseModel):
    date: datetime.date
    start_time: datetime.time
    end_time: datetime.time
    seller_id: Optional[int] = None  # admins only; sellers always create for themselves
    max_visitors: Optional[int] = Field(None, ge=0)  # defaults by visit type
    is_available: bool = True
    price_per_person: int = Field(0, ge=0)
    visit_type: Optional[Literal['farm', 'garden']] = None
    location_type: Optional[str] = None
    activity_type: Optional[str] = None
    space_description: Optional[str] = None
    special_notes: Optional[str] = None

    class Config:
        json_schema_extra = {
            'example': {
                'date': '2026-11-02',
                'start_time': '10:00:00',
                'end_time': '12:00:00',
                'max_visitors': 5,
                'price_per_person': 150,
                'visit_type': 'farm',
            }
        }


class SlotUpdateRequest(BaseModel):
    """
    Partial update. Unknown keys are kept and handed to the domain, which
    rejects protected fields such as current_bookings by name.
    """

    model_config = ConfigDict(extra='allow')

    date: Optional[datetime.date] = None
    start_time: Optional[datetime.time] = None
    end_time: Optional[datetime.time] = None
    max_visitors: Optional[int] = Field(None, ge=0)
    is_available: Optional[bool] = None
    price_per_person: Optional[int] = Field(None, ge=0)
    visit_type: Optional[Literal['farm', 'garden']] = None
    location_type: Optional[str] = None
    activity_type: Optional[str] = None
    space_description: Optional[str] = None
    special_notes: Optional[str] = None


class SlotResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    seller_id: int
    date: datetime.date
    start_time: datetime.time
    end_time: datetime.time
    max_visitors: int
    current_bookings: int
    remaining_capacity: int
    is_available: bool
    price_per_person: int
    visit_type: str
    location_type: str
    activity_type: str
    space_description: Optional[str] = None
    special_notes: Optional[str] = None
    created_at: Optional[datetime.datetime] = None
    updated_at: Optional[datetime.datetime] = None
