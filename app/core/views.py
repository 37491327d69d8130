"""
Infrastructure endpoints.

Only the health check lives here; the back office has no public API.
"""

import logging

from django.core.cache import cache
from django.db import DatabaseError, connection
from django.http import JsonResponse

logger = logging.getLogger(__name__)


def health_check(request):
    """
    Report database and cache connectivity.

    Returns 200 while the database answers and 503 otherwise. The cache
    is optional: a missing Redis degrades the report but not the status.

    Example Response:
        {"status": "healthy", "database": "connected", "cache": "disconnected"}
    """
    report = {"status": "healthy", "database": "connected", "cache": "connected"}

    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()
    except DatabaseError:
        logger.exception("Health check: database unreachable")
        report["database"] = "disconnected"
        report["status"] = "unhealthy"

    # django-redis swallows connection errors (IGNORE_EXCEPTIONS), so a
    # failed round trip shows up as a missing value
    cache.set("health_check", "ok", timeout=1)
    if cache.get("health_check") != "ok":
        report["cache"] = "disconnected"

    return JsonResponse(report, status=200 if report["status"] == "healthy" else 503)
