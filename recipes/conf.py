"""Typed accessors for the engagement engine settings."""

from datetime import timedelta
from django.conf import settings

DEFAULT_VIEW_COOLDOWN_SECONDS = 3600
DEFAULT_COMMENT_MAX_LENGTH = 1000
DEFAULT_COMMENT_MAX_DEPTH = 8


def view_cooldown() -> timedelta:
    """Window in which repeat views by one viewer count only once."""
    return timedelta(seconds=getattr(settings, "RECIPES_VIEW_COOLDOWN_SECONDS", DEFAULT_VIEW_COOLDOWN_SECONDS))


def comment_max_length() -> int:
    return getattr(settings, "RECIPES_COMMENT_MAX_LENGTH", DEFAULT_COMMENT_MAX_LENGTH)


def comment_max_depth() -> int:
    """Deepest allowed nesting level; top-level comments are depth 1."""
    return getattr(settings, "RECIPES_COMMENT_MAX_DEPTH", DEFAULT_COMMENT_MAX_DEPTH)


def trusted_proxies() -> frozenset:
    """Socket peers allowed to supply the client address via X-Forwarded-For."""
    return frozenset(getattr(settings, "RECIPES_TRUSTED_PROXIES", ()))
