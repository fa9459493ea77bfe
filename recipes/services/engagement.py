"""Service helpers for likes, favorites and the view log."""

import logging
from typing import Optional

from django.core.exceptions import ValidationError
from django.core.validators import validate_ipv46_address
from django.utils import timezone

from recipes import conf
from recipes.db_accessor import run_atomic
from recipes.errors import NotFound
from recipes.identity import Identity
from recipes.permissions import can_view_recipe, require_user
from recipes.repos.engagement_repo import FavoriteRepo, LikeRepo, ViewRepo
from recipes.repos.recipe_repo import RecipeRepo

logger = logging.getLogger(__name__)


def _clean_ip(ip) -> Optional[str]:
    """Return a valid IPv4/IPv6 string, or None for anything else."""
    if not ip:
        return None
    try:
        validate_ipv46_address(ip)
    except ValidationError:
        logger.debug("Ignoring malformed viewer address %r", ip)
        return None
    return ip


class EngagementService:
    """Encapsulate engagement counters for recipes."""

    def __init__(self, recipe_repo=None, like_repo=None, favorite_repo=None, view_repo=None):
        self.recipes = recipe_repo or RecipeRepo()
        self.likes = like_repo or LikeRepo()
        self.favorites = favorite_repo or FavoriteRepo()
        self.views = view_repo or ViewRepo()

    def _lock_visible(self, recipe_id, actor: Identity):
        """Lock the recipe row and check the caller may see it."""
        recipe = self.recipes.get_for_update(id=recipe_id)
        if recipe is None or not can_view_recipe(actor, recipe):
            raise NotFound("Recipe not found.")
        return recipe

    def _toggle(self, repo, recipe_id, user: Identity, label):
        require_user(user)

        def _flip():
            recipe = self._lock_visible(recipe_id, user)
            if repo.has(recipe.id, user.user_id):
                repo.remove(recipe.id, user.user_id)
                active = False
            else:
                repo.add(recipe.id, user.user_id)
                active = True
            return active, repo.total_for(recipe.id)

        return run_atomic(_flip, label=label, retries=1)

    def toggle_like(self, recipe_id, user: Identity) -> dict:
        """Like the recipe if not liked yet, otherwise remove the like."""
        liked, total = self._toggle(self.likes, recipe_id, user, "toggle_like")
        return {"liked": liked, "total_likes": total}

    def toggle_favorite(self, recipe_id, user: Identity) -> dict:
        """Favorite the recipe if not favorited yet, otherwise remove it."""
        favorited, total = self._toggle(self.favorites, recipe_id, user, "toggle_favorite")
        return {"favorited": favorited, "total_favorites": total}

    def record_view(self, recipe_id, viewer: Identity, ip=None) -> dict:
        """Log a view; it counts toward popularity once per viewer per cooldown window.

        Authenticated viewers are keyed by user id, anonymous ones by IP.
        An anonymous view without a usable IP is logged but never counted.
        """
        address = _clean_ip(ip)
        user_id = viewer.user_id if viewer.is_authenticated else None

        def _log():
            recipe = self._lock_visible(recipe_id, viewer)
            now = timezone.now()
            if user_id is None and address is None:
                counted = False
            else:
                counted = not self.views.seen_since(
                    recipe.id,
                    user_id=user_id,
                    ip=address,
                    since=now - conf.view_cooldown(),
                )
            self.views.log(recipe.id, user_id=user_id, ip=address, viewed_at=now, counted=counted)
            return counted

        counted = run_atomic(_log, label="record_view", retries=0)
        return {"counted_toward_popularity": counted}

    def recipe_stats(self, recipe_id, viewer: Identity) -> dict:
        """Counters recomputed from committed rows."""

        def _read():
            recipe = self.recipes.get_visible(recipe_id, viewer)
            if recipe is None:
                raise NotFound("Recipe not found.")
            views, counted_views = self.views.totals_for(recipe.id)
            return {
                "likes": self.likes.total_for(recipe.id),
                "favorites": self.favorites.total_for(recipe.id),
                "views": views,
                "counted_views": counted_views,
            }

        return run_atomic(_read, label="recipe_stats", retries=0)
