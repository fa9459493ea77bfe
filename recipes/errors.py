"""
Error kinds raised by the engagement and workflow services.

Every error carries a stable `kind` (the value returned to callers in the
`error` field of the response body) and the HTTP status the API boundary maps
it to.
"""


class EngagementError(Exception):
    """Base exception for engagement/workflow failures."""

    kind = "EngagementError"
    status_code = 500
    default_message = "Request could not be completed."

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def as_dict(self):
        return {"error": self.kind, "message": self.message}


class NotFound(EngagementError):
    """Recipe or comment does not exist (or is not visible to the caller)."""
    kind = "NotFound"
    status_code = 404
    default_message = "Not found."


class Forbidden(EngagementError):
    """Caller is identified but lacks the capability for this action."""
    kind = "Forbidden"
    status_code = 403
    default_message = "You do not have permission to perform this action."


class Unauthenticated(EngagementError):
    """An operation that needs a user identity was called anonymously."""
    kind = "Unauthenticated"
    status_code = 401
    default_message = "Authentication required."


class InvalidContent(EngagementError):
    """Submitted content is empty, too long or otherwise malformed."""
    kind = "InvalidContent"
    status_code = 400
    default_message = "Invalid content."


class CrossRecipeParent(EngagementError):
    """Reply parent belongs to a different recipe."""
    kind = "CrossRecipeParent"
    status_code = 400
    default_message = "Parent comment belongs to a different recipe."


class InvalidTransition(EngagementError):
    """Workflow event does not apply to the recipe's current status."""
    kind = "InvalidTransition"
    status_code = 409
    default_message = "Transition not allowed from the current status."


class Conflict(EngagementError):
    """Resource already exists (e.g. duplicate user block)."""
    kind = "Conflict"
    status_code = 409
    default_message = "Resource already exists."


class StorageUnavailable(EngagementError):
    """Storage timed out, lost its connection or kept conflicting."""
    kind = "StorageUnavailable"
    status_code = 503
    default_message = "Storage is temporarily unavailable."
