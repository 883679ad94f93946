"""Structured JSON error responses shared by API views."""

from __future__ import annotations

import logging

from django.http import JsonResponse

from core.errors import PredictionDebugError

logger = logging.getLogger(__name__)


def write_error_response(err: Exception) -> JsonResponse:
    """Build a structured error response for a backend failure.

    Args:
        err: The failure to report. `PredictionDebugError` subclasses provide
            their own code and status; anything else is reported as a 500.

    Returns:
        JsonResponse with `{"code": ..., "message": ...}`.
    """

    if isinstance(err, PredictionDebugError):
        code, status = err.code, err.status_code
    else:
        code, status = PredictionDebugError.code, PredictionDebugError.status_code

    message = str(err) or err.__class__.__name__
    if status >= 500:
        logger.error("Prediction debug backend failure code=%s: %s", code, message, exc_info=err)
    else:
        logger.warning("Prediction debug request failed code=%s: %s", code, message)
    return JsonResponse({"code": code, "message": message}, status=status)
