from typing import Optional
from uuid import UUID

import attrs

from src.service.farm_visit.domain.enum.visit_request_status import VisitRequestStatus


@attrs.define(frozen=True)
class VisitRequestFilter:
    seller_id: Optional[int] = None
    user_id: Optional[int] = None
    status: Optional[VisitRequestStatus] = None
    availability_id: Optional[UUID] = None
