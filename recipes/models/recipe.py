"""
Recipe model

A recipe is owned by one user and moves through a publication workflow:

    draft -> processing -> pending_review -> published

- `status` is a closed enum; a check constraint keeps the column inside it.
  Only the workflow service writes it (see recipes/services/workflow.py).
- Nutritional fields mirror the submission form: servings, calories and
  macro grams per serving.
- Deleting a recipe cascades to comments, likes, favorites and views.
"""

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models


class Recipe(models.Model):
    STATUS_DRAFT = "draft"
    STATUS_PROCESSING = "processing"
    STATUS_PENDING_REVIEW = "pending_review"
    STATUS_PUBLISHED = "published"

    STATUS_CHOICES = [
        (STATUS_DRAFT, "Draft"),
        (STATUS_PROCESSING, "Processing"),
        (STATUS_PENDING_REVIEW, "Pending review"),
        (STATUS_PUBLISHED, "Published"),
    ]

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="recipes",
        db_column="owner_id",
    )

    title = models.CharField(max_length=255)
    servings = models.PositiveIntegerField(default=1, validators=[MinValueValidator(1)])
    calories = models.PositiveIntegerField(default=0)
    protein_g = models.DecimalField(max_digits=5, decimal_places=1, default=0, validators=[MinValueValidator(0)])
    carbs_g = models.DecimalField(max_digits=5, decimal_places=1, default=0, validators=[MinValueValidator(0)])
    fat_g = models.DecimalField(max_digits=5, decimal_places=1, default=0, validators=[MinValueValidator(0)])
    notes = models.TextField(blank=True)

    status = models.CharField(
        max_length=20,
        choices=STATUS_CHOICES,
        default=STATUS_DRAFT,
        db_index=True,
    )

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "recipe"
        ordering = ["-created_at", "-id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(status__in=["draft", "processing", "pending_review", "published"]),
                name="chk_recipe_status_known",
            ),
        ]
        indexes = [
            models.Index(fields=["owner"], name="recipe_owner_i_2b1c3e_idx"),
            models.Index(fields=["title"], name="recipe_title_9f0d4a_idx"),
        ]

    def __str__(self):
        return self.title

    @property
    def is_published(self):
        return self.status == self.STATUS_PUBLISHED
