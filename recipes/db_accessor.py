import logging
from typing import Any, Callable, Optional, Sequence, Type, TypeVar

from django.db import DatabaseError, IntegrityError, InterfaceError, OperationalError, transaction
from django.db.models import Model, QuerySet

from recipes.errors import EngagementError, StorageUnavailable

logger = logging.getLogger(__name__)

T = TypeVar("T")


def run_atomic(operation: Callable[[], T], *, label: str = "operation", retries: int = 1) -> T:
    """Run `operation` inside one transaction; all of it commits or none of it.

    Serialization conflicts (lock timeouts, deadlocks, a concurrent insert
    tripping a unique constraint) are retried `retries` times with a fresh
    read. Anything still failing, or any lost connection, surfaces as
    StorageUnavailable.
    """
    attempt = 0
    while True:
        try:
            with transaction.atomic():
                return operation()
        except EngagementError:
            raise
        except (OperationalError, IntegrityError) as exc:
            if attempt < retries:
                attempt += 1
                logger.warning("Storage conflict during %s, retrying (%s/%s): %s", label, attempt, retries, exc)
                continue
            logger.error("Storage conflict during %s persisted after retry: %s", label, exc)
            raise StorageUnavailable(f"Storage conflict during {label}.") from exc
        except (InterfaceError, DatabaseError) as exc:
            logger.error("Storage failure during %s: %s", label, exc)
            raise StorageUnavailable(f"Storage unavailable during {label}.") from exc


class DB_Accessor:
    """Generic data accessor to wrap basic queryset operations."""

    def __init__(self, model: Type[Model]) -> None:
        self.model = model

    def _apply_ordering(self, qs: QuerySet, order_by: Sequence[str]) -> QuerySet:
        return qs.order_by(*order_by) if order_by else qs

    def _apply_slice(
        self, qs: QuerySet, *, offset: int = 0, limit: Optional[int] = None
    ) -> QuerySet:
        if not (offset or limit is not None):
            return qs
        start = max(0, int(offset))
        end = None if limit is None else start + max(0, int(limit))
        return qs[start:end]

    def find(self, **lookup: Any) -> Optional[Model]:
        """Return the single object matching lookup, or None."""
        return self.model.objects.filter(**lookup).first()

    def get_for_update(self, **lookup: Any) -> Optional[Model]:
        """Lock and return the matching row; must run inside a transaction."""
        return self.model.objects.select_for_update().filter(**lookup).first()

    def exists(self, **lookup: Any) -> bool:
        return self.model.objects.filter(**lookup).exists()

    def count(self, **lookup: Any) -> int:
        return self.model.objects.filter(**lookup).count()

    def create(self, **data: Any) -> Model:
        """Create and return a new object."""
        return self.model.objects.create(**data)

    def delete(self, **lookup: Any) -> int:
        """Delete objects matching lookup; return count deleted."""
        count, _ = self.model.objects.filter(**lookup).delete()
        return count
