"""Repository helpers for likes, favorites and the view log."""

from datetime import datetime
from typing import Optional

from recipes.db_accessor import DB_Accessor
from recipes.models.favorite import Favorite
from recipes.models.like import Like
from recipes.models.view import RecipeView


class ToggleRepo(DB_Accessor):
    """(recipe, user) membership rows: likes and favorites."""

    def has(self, recipe_id, user_id) -> bool:
        return self.exists(recipe_id=recipe_id, user_id=user_id)

    def add(self, recipe_id, user_id):
        return self.create(recipe_id=recipe_id, user_id=user_id)

    def remove(self, recipe_id, user_id) -> int:
        return self.delete(recipe_id=recipe_id, user_id=user_id)

    def total_for(self, recipe_id) -> int:
        return self.count(recipe_id=recipe_id)


class LikeRepo(ToggleRepo):
    def __init__(self) -> None:
        super().__init__(Like)


class FavoriteRepo(ToggleRepo):
    def __init__(self) -> None:
        super().__init__(Favorite)


class ViewRepo(DB_Accessor):
    """Append-only view log."""
    def __init__(self) -> None:
        super().__init__(RecipeView)

    def seen_since(self, recipe_id, *, user_id: Optional[int], ip: Optional[str], since: datetime) -> bool:
        """True if this viewer (user id, else IP) already has a view row after `since`."""
        qs = self.model.objects.filter(recipe_id=recipe_id, viewed_at__gte=since)
        if user_id is not None:
            return qs.filter(user_id=user_id).exists()
        if ip:
            return qs.filter(user__isnull=True, ip_address=ip).exists()
        return False

    def log(self, recipe_id, *, user_id: Optional[int], ip: Optional[str], viewed_at: datetime, counted: bool) -> RecipeView:
        return self.create(
            recipe_id=recipe_id,
            user_id=user_id,
            ip_address=ip,
            viewed_at=viewed_at,
            counted=counted,
        )

    def totals_for(self, recipe_id):
        """(raw views, counted views) for a recipe."""
        qs = self.model.objects.filter(recipe_id=recipe_id)
        return qs.count(), qs.filter(counted=True).count()
