"""
RecipeVault Exceptions.

All recipevault errors derive from VaultError for consistent handling.
Each subclass maps onto one HTTP status; the public body never carries
more than the message.
"""

import logging
from contextlib import contextmanager
from typing import Any, Iterator

from django.db import DatabaseError

logger = logging.getLogger(__name__)


class VaultError(Exception):
    """
    Base exception for all RecipeVault errors.

    Usage:
        raise NotFoundError("Recipe not found.", recipe_id=7, user_id=3)

    Attributes:
        code: Error code (NOT_FOUND, CONFLICT, etc.)
        message: Public, client-safe message
        details: Additional context for logs only (never sent to clients)
    """

    status_code = 500
    code = "INTERNAL_ERROR"
    message = "Internal server error"

    def __init__(self, message: str | None = None, **details: Any):
        if message:
            self.message = message
        self.details = details
        super().__init__(self.message)

    def as_dict(self) -> dict:
        """Return the public error body for API responses."""
        return {"error": self.message}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{type(self).__name__}({self.code}: {self.message} {details_str})"
        return f"{type(self).__name__}({self.code}: {self.message})"


class ValidationError(VaultError):
    """Missing or empty required field."""

    status_code = 400
    code = "VALIDATION_ERROR"
    message = "Invalid request."


class AuthError(VaultError):
    """Bad credentials, or a missing, invalid or expired session token."""

    status_code = 401
    code = "AUTH_ERROR"
    message = "Authentication required."


class NotFoundError(VaultError):
    """
    Resource absent, or not owned by the caller.

    Both causes are deliberately indistinguishable to the client.
    """

    status_code = 404
    code = "NOT_FOUND"
    message = "Not found."


class ConflictError(VaultError):
    """Duplicate unique key."""

    status_code = 409
    code = "CONFLICT"
    message = "Resource already exists."


class InternalError(VaultError):
    """Unexpected store or runtime failure. The real cause is logged, not exposed."""


@contextmanager
def translate_store_errors(operation: str, **context: Any) -> Iterator[None]:
    """
    Map raw database failures raised inside the block to InternalError.

    The traceback is logged with the operation name; the client only ever
    sees the generic message. VaultErrors pass through untouched.
    """
    try:
        yield
    except DatabaseError as exc:
        logger.exception(f"Store failure during {operation}", extra=context)
        raise InternalError(operation=operation, **context) from exc
