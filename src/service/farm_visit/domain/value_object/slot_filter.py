import datetime
from typing import Optional

import attrs


@attrs.define(frozen=True)
class SlotFilter:
    seller_id: Optional[int] = None
    date: Optional[datetime.date] = None
    start_date: Optional[datetime.date] = None
    end_date: Optional[datetime.date] = None
    available_only: bool = False
    visit_type: Optional[str] = None

    @property
    def has_date_filter(self) -> bool:
        return self.date is not None or self.start_date is not None or self.end_date is not None
