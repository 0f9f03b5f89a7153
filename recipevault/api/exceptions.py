"""
DRF exception handler.

Every error leaves the API as a JSON object with an ``error`` key:

    VaultError            → its status and message
    DRF ValidationError   → 400 {"error": ..., "details": {...}}
    other APIException    → its status, {"error": detail}
    anything else         → 500 {"error": "Internal server error"}, logged
"""

import logging

from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler
from rest_framework.views import set_rollback

from recipevault.exceptions import InternalError, ValidationError, VaultError

logger = logging.getLogger(__name__)


def _view_name(context) -> str:
    view = context.get("view")
    return type(view).__name__ if view is not None else "unknown view"


def exception_handler(exc, context):
    """Map an exception raised inside a RecipeVault view to a JSON response."""
    if isinstance(exc, VaultError):
        if exc.status_code >= 500:
            # Cause already logged at the store boundary
            logger.error(f"{exc} in {_view_name(context)}")
        set_rollback()
        return Response(exc.as_dict(), status=exc.status_code)

    response = drf_exception_handler(exc, context)

    if response is None:
        logger.error(
            f"Unhandled {type(exc).__name__} in {_view_name(context)}",
            exc_info=exc,
        )
        set_rollback()
        return Response(
            InternalError().as_dict(),
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    if isinstance(exc, exceptions.ValidationError):
        response.data = {
            "error": ValidationError.message,
            "details": response.data,
        }
    elif isinstance(response.data, dict) and "detail" in response.data:
        response.data = {"error": str(response.data["detail"])}

    return response
