"""Farm listing DTO."""

from typing import List, Optional

import attrs


@attrs.define(frozen=True)
class FarmSummary:
    """A public farm accepting visits, with its upcoming open slot count."""

    seller_id: int
    farm_name: Optional[str]
    farm_story: Optional[str]
    detailed_location: Optional[str]
    visit_booking_enabled: bool
    garden_visit_enabled: bool
    available_slots_count: int = 0
    available_visit_types: List[str] = attrs.field(factory=list)
