"""
RecipeView model

Raw view log used for popularity:
- every view is stored, anonymous ones with `user` NULL and the client IP
- `counted` records whether this row counted toward popularity; it is
  decided in the same transaction that inserts the row (cool-down rule
  in recipes/services/engagement.py), never updated afterwards
"""

from django.conf import settings
from django.db import models
from django.utils import timezone
from .recipe import Recipe


class RecipeView(models.Model):
    recipe = models.ForeignKey(
        Recipe,
        on_delete=models.CASCADE,
        db_column="recipe_id",
        related_name="views",
    )

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        db_column="user_id",
        related_name="recipe_views",
        null=True,
        blank=True,
    )

    ip_address = models.GenericIPAddressField(null=True, blank=True)
    viewed_at = models.DateTimeField(default=timezone.now, db_index=True)
    counted = models.BooleanField(default=False)

    class Meta:
        db_table = "recipe_view"
        indexes = [
            models.Index(fields=["recipe", "user", "viewed_at"], name="recipe_view_recipe__1a2b3c_idx"),
            models.Index(fields=["recipe", "ip_address", "viewed_at"], name="recipe_view_recipe__4d5e6f_idx"),
        ]

    def __str__(self):
        viewer = self.user_id or self.ip_address or "anonymous"
        return f"View of {self.recipe_id} by {viewer}"
