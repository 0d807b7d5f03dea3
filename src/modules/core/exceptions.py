"""DRF exception handler rendering the standard failure envelope.

Configured as ``REST_FRAMEWORK["EXCEPTION_HANDLER"]``.  Views let
exceptions propagate; this is the single place where a failure becomes
an HTTP response::

    {"success": false, "error": "<label>", "message": "..."}
    {"success": false, "error": "Validation Error", "details": [...]}
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import structlog
from django.conf import settings
from rest_framework.response import Response

from modules.core.errors import error_classifier

logger = structlog.get_logger(__name__)


def api_exception_handler(exc: Exception, context: Dict[str, Any]) -> Optional[Response]:
    error = error_classifier.classify(
        exc, expose_details=getattr(settings, "EXPOSE_ERROR_DETAILS", False)
    )

    view = context.get("view")
    log = logger.bind(
        error=error.label,
        status_code=int(error.status_code),
        view=type(view).__name__ if view is not None else None,
    )
    if error.status_code >= 500:
        log.error("request.failed", exc_info=exc)
    else:
        log.warning("request.rejected", detail=error.message)

    return Response(error.to_payload(), status=error.status_code)
