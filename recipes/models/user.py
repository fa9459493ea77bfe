"""User model carrying the role supplied by the identity provider."""

from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    """Account row referenced by recipes, comments and engagement tables.

    Credentials are owned by the external identity provider; the row exists
    so engagement tables can hold real foreign keys to user ids.
    """

    ROLE_USER = "user"
    ROLE_ADMIN = "admin"

    ROLE_CHOICES = [
        (ROLE_USER, "User"),
        (ROLE_ADMIN, "Admin"),
    ]

    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default=ROLE_USER)
    display_name = models.CharField(max_length=100, blank=True)

    class Meta:
        """Table name and default ordering for users."""
        db_table = "user"
        ordering = ["id"]

    @property
    def is_admin(self):
        """True for admin role or Django staff/superusers."""
        return self.role == self.ROLE_ADMIN or self.is_staff or self.is_superuser

    def __str__(self):
        return self.display_name or self.username
