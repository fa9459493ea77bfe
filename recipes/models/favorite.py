"""Model representing a user's favorite (bookmark) of a recipe."""

from django.conf import settings
from django.db import models
from .recipe import Recipe


class Favorite(models.Model):
    """User favorite on a recipe; independent from likes."""
    recipe = models.ForeignKey(
        Recipe,
        on_delete=models.CASCADE,
        db_column="recipe_id",
        related_name="favorites",
    )

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        db_column="user_id",
        related_name="favorites",
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "recipe_favorite"
        constraints = [
            models.UniqueConstraint(
                fields=["recipe", "user"],
                name="uniq_favorite_recipe_user",
            ),
        ]
        indexes = [
            models.Index(fields=["user"], name="recipe_favo_user_id_3d5e8f_idx"),
        ]

    def __str__(self) -> str:
        return f"Favorite(user={self.user_id}, recipe={self.recipe_id})"
