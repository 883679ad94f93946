"""System checks for the prediction debug backends."""

from __future__ import annotations

from typing import Any

from django.core.checks import Error, register
from django.core.exceptions import ImproperlyConfigured

from .backends import build_backends


@register()
def check_prediction_debug_backends(app_configs: Any = None, **kwargs: Any) -> list[Error]:
    """Fail `manage.py check` (and server startup) when a debug collaborator cannot be built."""

    try:
        build_backends()
    except ImproperlyConfigured as exc:
        return [
            Error(
                str(exc),
                hint="Set PREDICTION_DEBUG_BACKENDS or the PREDICTION_DEBUG_* environment variables.",
                id="core.E001",
            )
        ]
    return []
