"""
Application exception hierarchy.

Services raise these; the handlers registered in ``baatcheet.main`` turn
them into JSON error responses with the matching status code.

    BaatcheetError
    ├── ValidationError  → 400
    ├── AuthError        → 401
    ├── ForbiddenError   → 403
    ├── NotFoundError    → 404
    ├── ConflictError    → 409
    └── StoreError       → 500
"""

from typing import Any, Dict, Optional


class BaatcheetError(Exception):
    """
    Base exception for application errors.

    ``message`` is safe to return to the client. ``context`` carries debug
    details for the log; only ValidationError sends it back, as ``details``.
    """

    status_code = 500
    error_code = "server_error"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(BaatcheetError):
    """Client input is missing or malformed."""

    status_code = 400
    error_code = "validation_error"

    @classmethod
    def from_pydantic(cls, exc: Any) -> "ValidationError":
        """Build from a pydantic ValidationError, one entry per bad field"""
        details = {
            ".".join(str(part) for part in error["loc"]) or "body": error["msg"]
            for error in exc.errors()
        }
        fields = ", ".join(details) or "request"
        return cls(f"Invalid or missing fields: {fields}", context=details)


class AuthError(BaatcheetError):
    """Bad credentials, or a missing, invalid or expired bearer token."""

    status_code = 401
    error_code = "unauthorized"


class ForbiddenError(BaatcheetError):
    """A valid token acting on another user's data."""

    status_code = 403
    error_code = "forbidden"


class NotFoundError(BaatcheetError):
    """A referenced user or post does not exist."""

    status_code = 404
    error_code = "not_found"


class ConflictError(BaatcheetError):
    """A unique field (email) is already taken."""

    status_code = 409
    error_code = "conflict"


class StoreError(BaatcheetError):
    """
    The database or the asset directory failed underneath us.

    The client only ever sees the generic message below.
    """

    status_code = 500
    error_code = "server_error"
    public_message = "An internal error occurred. Please try again later."
