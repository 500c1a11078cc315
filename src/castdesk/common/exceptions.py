"""castdesk exception hierarchy.

Each error carries the HTTP status it maps to; the handlers registered in
``castdesk.app`` render them as ``{"error": message, "details": ...}``.
"""

from typing import Any


class CastdeskError(Exception):
    """Base exception for all castdesk errors."""

    status_code = 500

    def __init__(
        self,
        message: str = "",
        code: str = "CASTDESK_ERROR",
        details: Any = None,
    ):
        self.message = message
        self.code = code
        self.details = details
        super().__init__(message)


class NotAuthenticatedError(CastdeskError):
    """Raised when a request carries no valid session."""

    status_code = 401

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message, code="UNAUTHENTICATED")


class ForbiddenError(CastdeskError):
    """Raised when the caller's tenant may not touch the resource."""

    status_code = 403

    def __init__(self, message: str = "Forbidden"):
        super().__init__(message, code="FORBIDDEN")


class NotFoundError(CastdeskError):
    """Raised when a referenced row does not exist."""

    status_code = 404

    def __init__(self, message: str = "Not found", details: Any = None):
        super().__init__(message, code="NOT_FOUND", details=details)


class InvalidInputError(CastdeskError):
    """Raised when a request is well-formed JSON but semantically invalid."""

    status_code = 400

    def __init__(self, message: str = "Invalid input data", details: Any = None):
        super().__init__(message, code="INVALID_INPUT", details=details)
