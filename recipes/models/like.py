"""Model representing a user's like on a recipe."""

from django.conf import settings
from django.db import models
from .recipe import Recipe


class Like(models.Model):
    """User like on a recipe; at most one row per (recipe, user)."""
    recipe = models.ForeignKey(
        Recipe,
        on_delete=models.CASCADE,
        db_column="recipe_id",
        related_name="likes",
    )

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        db_column="user_id",
        related_name="likes",
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Enforce one like per user/recipe pair."""
        db_table = "recipe_like"
        constraints = [
            models.UniqueConstraint(
                fields=["recipe", "user"],
                name="uniq_like_recipe_user",
            ),
        ]
        indexes = [
            models.Index(fields=["user"], name="recipe_like_user_id_6a7b9c_idx"),
        ]

    def __str__(self):
        """Readable representation for admin/debugging."""
        return f"{self.user_id} → {self.recipe_id}"
