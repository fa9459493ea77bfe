"""Model for admin-issued blocks that stop a user from commenting."""

from django.conf import settings
from django.db import models


class UserBlock(models.Model):
    """An admin (`blocker`) blocking `blocked_user` from posting comments."""

    blocker = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="blocks_issued",
    )
    blocked_user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="blocks_received",
    )
    reason = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "user_block"
        ordering = ["-created_at", "-id"]
        constraints = [
            models.UniqueConstraint(
                fields=["blocker", "blocked_user"],
                name="uniq_user_block_pair",
            ),
            models.CheckConstraint(
                condition=~models.Q(blocker=models.F("blocked_user")),
                name="chk_user_block_not_self",
            ),
        ]

    def __str__(self):
        return f"{self.blocker_id} blocked {self.blocked_user_id}"
