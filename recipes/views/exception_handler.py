"""Map engagement errors and DRF's own exceptions onto the API error body."""

import logging

from django.http import Http404
from rest_framework import exceptions
from rest_framework.response import Response
from rest_framework.views import exception_handler

from recipes.errors import (
    EngagementError,
    Forbidden,
    InvalidContent,
    NotFound,
    Unauthenticated,
)

logger = logging.getLogger(__name__)

DRF_ERROR_KINDS = (
    ((exceptions.NotAuthenticated, exceptions.AuthenticationFailed), Unauthenticated),
    ((exceptions.PermissionDenied,), Forbidden),
    ((exceptions.ValidationError, exceptions.ParseError, exceptions.UnsupportedMediaType), InvalidContent),
    ((exceptions.NotFound, Http404), NotFound),
)


def _validation_message(detail):
    """Flatten DRF validation detail into one readable line."""
    if isinstance(detail, dict):
        return "; ".join(f"{field}: {_validation_message(value)}" for field, value in detail.items())
    if isinstance(detail, list):
        return " ".join(_validation_message(item) for item in detail)
    return str(detail)


def engagement_exception_handler(exc, context):
    """DRF EXCEPTION_HANDLER returning {"error": kind, "message": text}."""
    if isinstance(exc, EngagementError):
        if exc.status_code >= 500:
            logger.error("%s: %s", exc.kind, exc.message)
        return Response(exc.as_dict(), status=exc.status_code)

    for drf_types, error_cls in DRF_ERROR_KINDS:
        if isinstance(exc, drf_types):
            detail = getattr(exc, "detail", None)
            message = _validation_message(detail) if detail else error_cls.default_message
            headers = {}
            if getattr(exc, "auth_header", None):
                headers["WWW-Authenticate"] = exc.auth_header
            return Response(
                error_cls(message).as_dict(),
                status=error_cls.status_code,
                headers=headers or None,
            )

    response = exception_handler(exc, context)
    if response is not None:
        detail = getattr(exc, "detail", "")
        response.data = {"error": exc.__class__.__name__, "message": _validation_message(detail)}
        return response
    return None
