"""Repository helpers for user lookups."""

from typing import Optional

from recipes.db_accessor import DB_Accessor
from recipes.models.user import User
from recipes.models.user_block import UserBlock


class UserRepo(DB_Accessor):
    """Repository for user and user-block queries."""
    def __init__(self) -> None:
        """Initialise with the User model."""
        super().__init__(User)

    def get_by_id(self, user_id: int) -> Optional[User]:
        """Return a user by id, or None."""
        return self.find(id=user_id)

    def is_blocked(self, user_id: int) -> bool:
        """True when any admin has blocked this user."""
        return UserBlock.objects.filter(blocked_user_id=user_id).exists()

    def blocks_issued_by(self, blocker_id: int):
        """Blocks created by an admin, newest first, with the blocked user loaded."""
        return (
            UserBlock.objects.filter(blocker_id=blocker_id)
            .select_related("blocked_user")
            .order_by("-created_at", "-id")
        )
