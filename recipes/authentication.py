from django.conf import settings
from django.contrib.auth import get_user_model
from django.contrib.auth.models import AnonymousUser
from rest_framework import authentication
from rest_framework import exceptions

from recipes.identity import ROLE_ADMIN, ROLE_SYSTEM, ROLES, SYSTEM, Identity

User = get_user_model()


def _meta_key(header_name):
    return "HTTP_" + header_name.upper().replace("-", "_")


class IdentityHeaderAuthentication(authentication.BaseAuthentication):
    """DRF authentication backend trusting identity headers set by the gateway.

    `X-User-Id` names the caller; `X-User-Role` may add `admin` or, without a
    user id, mark the call as coming from the background `system` actor.
    No headers means an anonymous caller.
    """

    def authenticate(self, request):
        """Return (user, Identity) for the forwarded caller, or None."""
        user_header = getattr(settings, "RECIPES_IDENTITY_USER_HEADER", "X-User-Id")
        role_header = getattr(settings, "RECIPES_IDENTITY_ROLE_HEADER", "X-User-Role")
        raw_id = (request.META.get(_meta_key(user_header)) or "").strip()
        role = (request.META.get(_meta_key(role_header)) or "").strip().lower()

        if role and role not in ROLES:
            raise exceptions.AuthenticationFailed("Unknown role")

        if not raw_id:
            if role == ROLE_SYSTEM:
                return (AnonymousUser(), SYSTEM)
            return None

        try:
            user_id = int(raw_id)
        except ValueError:
            raise exceptions.AuthenticationFailed("Invalid user id")

        user = User.objects.filter(pk=user_id, is_active=True).first()
        if user is None:
            raise exceptions.AuthenticationFailed("User not found")

        identity = Identity.from_user(user)
        if role == ROLE_ADMIN and not identity.is_admin:
            identity = Identity(user_id=user.pk, role=ROLE_ADMIN)
        return (user, identity)

    def authenticate_header(self, request):
        return getattr(settings, "RECIPES_IDENTITY_USER_HEADER", "X-User-Id")


def identity_for(request) -> Identity:
    """Identity of the caller behind a DRF request."""
    if isinstance(request.auth, Identity):
        return request.auth
    return Identity.from_user(request.user)
