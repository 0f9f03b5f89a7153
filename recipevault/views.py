"""
RecipeVault Views.

Plain Django views outside the DRF API: health check and the JSON
error handlers for unmatched routes and uncaught failures.
"""

import logging

from django.http import JsonResponse
from django.views.decorators.http import require_GET

from recipevault.exceptions import InternalError

logger = logging.getLogger(__name__)


@require_GET
def health(request):
    return JsonResponse({"message": "RecipeVault API is running"})


def route_not_found(request, exception=None):
    return JsonResponse({"error": "Route not found"}, status=404)


def server_error(request):
    # Django's request logger has already recorded the traceback
    logger.error(f"Internal server error on {request.method} {request.path}")
    return JsonResponse(InternalError().as_dict(), status=500)
