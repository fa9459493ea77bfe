"""Repository helpers for fetching recipes under the visibility rule."""

from typing import Optional, Sequence

from django.db.models import Count, F, Q, QuerySet

from recipes.db_accessor import DB_Accessor
from recipes.identity import Identity
from recipes.models.recipe import Recipe

POPULARITY_ORDER = ("-popularity", "-created_at", "-id")


class RecipeRepo(DB_Accessor):
    """Repository for Recipe queries; every read path goes through visible_to."""
    def __init__(self) -> None:
        """Initialise with the Recipe model."""
        super().__init__(Recipe)

    def visible_to(self, identity: Identity) -> QuerySet:
        """Published recipes, plus the caller's own (or everything for admins)."""
        qs = self.model.objects.select_related("owner")
        if identity.is_admin:
            return qs
        if identity.is_authenticated:
            return qs.filter(Q(status=Recipe.STATUS_PUBLISHED) | Q(owner_id=identity.user_id))
        return qs.filter(status=Recipe.STATUS_PUBLISHED)

    def get_visible(self, recipe_id, identity: Identity) -> Optional[Recipe]:
        """Return the recipe if it exists and the caller may see it, else None."""
        return self.visible_to(identity).filter(id=recipe_id).first()

    def list_visible(
        self,
        identity: Identity,
        *,
        status: Optional[str] = None,
        owner_id: Optional[int] = None,
        search: Optional[str] = None,
        order_by: Sequence[str] = ("-created_at", "-id"),
        limit: Optional[int] = None,
        offset: int = 0,
        popularity: bool = False,
    ) -> QuerySet:
        """Return visible recipes with optional filters and paging.

        With `popularity` the rows carry the engagement totals, so `order_by`
        may use POPULARITY_ORDER.
        """
        qs = self.visible_to(identity)
        if status:
            qs = qs.filter(status=status)
        if owner_id is not None:
            qs = qs.filter(owner_id=owner_id)
        if search:
            qs = qs.filter(title__icontains=search)
        if popularity:
            qs = self.with_popularity(qs)
        qs = self._apply_ordering(qs, order_by)
        return self._apply_slice(qs, offset=offset, limit=limit)

    def with_popularity(self, qs: QuerySet) -> QuerySet:
        """Annotate like/favorite/counted-view totals and a summed score."""
        return qs.annotate(
            likes_total=Count("likes", distinct=True),
            favorites_total=Count("favorites", distinct=True),
            counted_views_total=Count("views", filter=Q(views__counted=True), distinct=True),
        ).annotate(
            popularity=F("likes_total") + F("favorites_total") + F("counted_views_total"),
        )

    def list_in_status(self, status: str) -> QuerySet:
        """All recipes currently in `status`, oldest first (used by background jobs)."""
        return self.model.objects.filter(status=status).order_by("created_at", "id")
