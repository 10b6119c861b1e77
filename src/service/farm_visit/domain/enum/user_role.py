from enum import StrEnum


class UserRole(StrEnum):
    BUYER = 'buyer'
    SELLER = 'seller'
    ADMIN = 'admin'
    SUPERADMIN = 'superadmin'

    @property
    def is_admin(self) -> bool:
        return self in (UserRole.ADMIN, UserRole.SUPERADMIN)
