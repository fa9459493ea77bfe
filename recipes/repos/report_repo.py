"""Repository helpers for the admin report queue."""

from typing import Optional

from django.db.models import QuerySet

from recipes.db_accessor import DB_Accessor
from recipes.models.report import Report


class ReportRepo(DB_Accessor):
    """Repository for Report queries."""
    def __init__(self) -> None:
        super().__init__(Report)

    def in_status(self, status: Optional[str]) -> QuerySet:
        """Reports in `status` (every report when None), newest first, users loaded."""
        qs = self.model.objects.select_related("reporter", "reported_user", "reviewed_by")
        if status:
            qs = qs.filter(status=status)
        return qs.order_by("-created_at", "-id")

    def page(self, status: Optional[str], *, limit: int, offset: int = 0) -> QuerySet:
        return self._apply_slice(self.in_status(status), offset=offset, limit=limit)

    def already_reported(self, reporter_id, content_type: str, content_id) -> bool:
        return self.exists(reporter_id=reporter_id, content_type=content_type, content_id=content_id)
