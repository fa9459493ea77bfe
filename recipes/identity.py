"""Identity value object handed to every engagement operation."""

from dataclasses import dataclass
from typing import Optional

ROLE_ANONYMOUS = "anonymous"
ROLE_USER = "user"
ROLE_ADMIN = "admin"
ROLE_SYSTEM = "system"

ROLES = (ROLE_USER, ROLE_ADMIN, ROLE_SYSTEM)


@dataclass(frozen=True)
class Identity:
    """Caller identity supplied by the external identity provider.

    `user_id` is None for anonymous callers and for the system actor used by
    background jobs.
    """

    user_id: Optional[int] = None
    role: str = ROLE_ANONYMOUS

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None

    @property
    def is_admin(self) -> bool:
        return self.is_authenticated and self.role == ROLE_ADMIN

    @property
    def is_system(self) -> bool:
        return self.role == ROLE_SYSTEM

    @classmethod
    def from_user(cls, user) -> "Identity":
        """Build an identity from a Django user (or AnonymousUser/None)."""
        if user is None or not getattr(user, "is_authenticated", False):
            return ANONYMOUS
        role = ROLE_ADMIN if getattr(user, "is_admin", False) else ROLE_USER
        return cls(user_id=user.pk, role=role)


ANONYMOUS = Identity()
SYSTEM = Identity(role=ROLE_SYSTEM)
