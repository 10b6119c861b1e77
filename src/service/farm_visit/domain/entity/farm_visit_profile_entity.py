from typing import Optional

import attrs

from src.service.farm_visit.domain.enum.visit_type import VisitType


@attrs.define(frozen=True)
class FarmVisitProfile:
    """Seller farm profile, owned by the marketplace profile feature and read-only here."""

    seller_id: int
    farm_name: Optional[str] = None
    farm_story: Optional[str] = None
    detailed_location: Optional[str] = None
    visit_booking_enabled: bool = False
    garden_visit_enabled: bool = False
    public_profile: bool = False

    def accepts_visit_type(self, visit_type: Optional[str]) -> bool:
        if visit_type == VisitType.GARDEN:
            return self.garden_visit_enabled
        if visit_type == VisitType.FARM:
            return self.visit_booking_enabled
        return self.visit_booking_enabled or self.garden_visit_enabled

    def publishes(self, visit_type: Optional[str]) -> bool:
        """Slots of this visit type are discoverable by the public."""
        return self.public_profile and self.accepts_visit_type(visit_type)
