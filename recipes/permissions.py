"""Capability predicates shared by the comment, recipe and workflow paths."""

from recipes.errors import Unauthenticated
from recipes.identity import Identity


def _owner_id(entity):
    """Return the id of the user who owns a recipe or authored a comment."""
    for attr in ("owner_id", "author_id"):
        value = getattr(entity, attr, None)
        if value is not None:
            return value
    return None


def can_moderate(actor: Identity, entity) -> bool:
    """Owner/author of the entity, or an admin."""
    if actor is None or not actor.is_authenticated:
        return False
    if actor.is_admin:
        return True
    return _owner_id(entity) == actor.user_id


def can_view_recipe(actor: Identity, recipe) -> bool:
    """Published recipes are public; anything else only for owner or admin."""
    if recipe.is_published:
        return True
    return can_moderate(actor, recipe)


def require_user(actor: Identity) -> Identity:
    """Raise Unauthenticated unless a user identity was supplied."""
    if actor is None or not actor.is_authenticated:
        raise Unauthenticated()
    return actor
