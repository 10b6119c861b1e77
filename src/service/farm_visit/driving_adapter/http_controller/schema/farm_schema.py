from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class FarmSummaryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    seller_id: int
    farm_name: Optional[str] = None
    farm_story: Optional[str] = None
    detailed_location: Optional[str] = None
    visit_booking_enabled: bool
    garden_visit_enabled: bool
    available_slots_count: int
    available_visit_types: List[str] = []
