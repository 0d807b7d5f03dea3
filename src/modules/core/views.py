import time
from typing import Any, Dict

import structlog
from django.conf import settings
from django.db import connections
from django.http import HttpRequest, JsonResponse
from django.utils import timezone

from modules.core.errors import NotFoundError

logger = structlog.get_logger(__name__)

_STARTED_AT = time.monotonic()


def health_check(request: HttpRequest) -> JsonResponse:
    services: Dict[str, Dict[str, Any]] = {}
    overall_healthy = True

    try:
        start = time.monotonic()
        conn = connections["default"]
        conn.ensure_connection()
        with conn.cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()
        services["database"] = {
            "status": "up",
            "response_time_ms": round((time.monotonic() - start) * 1000, 2),
        }
    except Exception:
        services["database"] = {"status": "down"}
        overall_healthy = False
        logger.error("health_check_db_failure", exc_info=True)

    status_code = 200 if overall_healthy else 503

    logger.info(
        "health_check_completed", status="healthy" if overall_healthy else "unhealthy"
    )

    return JsonResponse(
        {
            "status": "healthy" if overall_healthy else "unhealthy",
            "timestamp": timezone.now().isoformat(),
            "uptime_seconds": round(time.monotonic() - _STARTED_AT, 2),
            "environment": settings.ENVIRONMENT,
            "services": services,
        },
        status=status_code,
    )


def api_root(request: HttpRequest) -> JsonResponse:
    """Index of the public endpoints."""
    return JsonResponse(
        {
            "message": settings.API_TITLE,
            "version": settings.API_VERSION,
            "endpoints": {
                "health": "/health",
                "products": "/api/products",
                "categories": "/api/categories",
                "cart": "/api/cart",
                "docs": "/api/docs/",
            },
        }
    )


def route_not_found(request: HttpRequest, exception: Exception | None = None) -> JsonResponse:
    """``handler404``: unknown routes get the JSON failure envelope."""
    error = NotFoundError(f"Route {request.get_full_path()} not found")
    return JsonResponse(error.to_payload(), status=error.status_code)
