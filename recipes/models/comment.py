"""Model for threaded user comments on recipes."""

from django.conf import settings
from django.db import models
from .recipe import Recipe


class Comment(models.Model):
    """User-authored comment; `parent` is set at creation and never changes."""

    # FK -> recipe.id
    recipe = models.ForeignKey(
        Recipe,
        on_delete=models.CASCADE,
        db_column="recipe_id",
        related_name="comments",
    )

    # FK -> user.id; null once the account is deleted, the node stays in the thread
    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        db_column="author_id",
        related_name="comments",
        null=True,
        blank=True,
    )

    # null = top-level; nodes are only removed together with their recipe
    parent = models.ForeignKey(
        "self",
        on_delete=models.RESTRICT,
        db_column="parent_id",
        related_name="replies",
        null=True,
        blank=True,
    )

    content = models.TextField()

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    is_deleted = models.BooleanField(default=False, help_text="Tombstone: content hidden, node kept")
    deleted_at = models.DateTimeField(null=True, blank=True)

    is_hidden = models.BooleanField(default=False, help_text="Hidden by an admin")
    hidden_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="hidden_comments",
    )
    hidden_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        """DB table name, ordering and self-parent guard."""
        db_table = "comment"
        ordering = ["created_at", "id"]
        constraints = [
            models.CheckConstraint(
                condition=~models.Q(parent=models.F("id")),
                name="chk_comment_not_own_parent",
            ),
        ]
        indexes = [
            models.Index(fields=["recipe", "created_at"], name="comment_recipe__5e8a11_idx"),
            models.Index(fields=["parent"], name="comment_parent__c4d2f7_idx"),
        ]

    def __str__(self):
        """Readable identifier for admin/debugging."""
        return f"Comment by {self.author_id} on {self.recipe_id}"

    @property
    def is_visible(self):
        return not (self.is_deleted or self.is_hidden)
