from typing import Optional

import attrs


@attrs.define(frozen=True)
class ResourceRef:
    """Ownership facts about a slot or request, as seen by the access policy."""

    seller_id: Optional[int] = None
    requester_id: Optional[int] = None
