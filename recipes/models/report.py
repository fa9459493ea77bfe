"""Model for user-submitted reports against recipes, comments or profiles."""

from django.conf import settings
from django.db import models
from .comment import Comment
from .recipe import Recipe


class Report(models.Model):
    """User-submitted report, reviewed by an admin."""

    CONTENT_RECIPE = "recipe"
    CONTENT_COMMENT = "comment"
    CONTENT_PROFILE = "profile"

    CONTENT_TYPES = [
        (CONTENT_RECIPE, "Recipe"),
        (CONTENT_COMMENT, "Comment"),
        (CONTENT_PROFILE, "Profile"),
    ]

    REPORT_REASONS = [
        ("spam", "Spam"),
        ("harassment", "Harassment"),
        ("inappropriate", "Inappropriate Content"),
        ("offensive", "Offensive"),
        ("other", "Other"),
    ]

    STATUS_PENDING = "pending"
    STATUS_INVESTIGATING = "investigating"
    STATUS_RESOLVED = "resolved"
    STATUS_DISMISSED = "dismissed"

    STATUS_CHOICES = [
        (STATUS_PENDING, "Pending"),
        (STATUS_INVESTIGATING, "Investigating"),
        (STATUS_RESOLVED, "Resolved"),
        (STATUS_DISMISSED, "Dismissed"),
    ]

    OPEN_STATUSES = (STATUS_PENDING, STATUS_INVESTIGATING)

    # Who is reporting?
    reporter = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="submitted_reports",
    )

    # whose behaviour is reported; the author/owner of the content for recipes and comments
    reported_user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="reports_received",
    )

    content_type = models.CharField(max_length=20, choices=CONTENT_TYPES)
    content_id = models.PositiveBigIntegerField()

    recipe = models.ForeignKey(
        Recipe,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="reports",
    )
    comment = models.ForeignKey(
        Comment,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="reports",
    )

    reason = models.CharField(max_length=50, choices=REPORT_REASONS)
    description = models.TextField(blank=True, help_text="Additional details from the user")

    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING, db_index=True)
    reviewed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="reviewed_reports",
    )
    reviewed_at = models.DateTimeField(null=True, blank=True)
    action_taken = models.TextField(blank=True, help_text="Admin's notes on the decision")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        """Ordering, table name and one-report-per-content guard."""
        db_table = "report"
        ordering = ["-created_at", "-id"]
        constraints = [
            models.UniqueConstraint(
                fields=["reporter", "content_type", "content_id"],
                name="uniq_report_reporter_content",
            ),
        ]

    def __str__(self):
        """Readable summary of the report target and reporter."""
        return f"Report on {self.get_content_type_display()} {self.content_id} by {self.reporter}"

    @property
    def is_open(self):
        return self.status in self.OPEN_STATUSES
