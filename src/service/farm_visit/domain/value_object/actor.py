from typing import Optional

import attrs

from src.service.farm_visit.domain.enum.user_role import UserRole


@attrs.define(frozen=True)
class Actor:
    """Verified caller identity handed over by the auth layer. Guests have no Actor."""

    user_id: int
    role: UserRole
    email: Optional[str] = attrs.field(default=None, repr=False)

    @property
    def is_admin(self) -> bool:
        return self.role.is_admin

    @property
    def is_seller(self) -> bool:
        return self.role == UserRole.SELLER
