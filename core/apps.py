"""App configuration for the core Django app."""

from __future__ import annotations

from django.apps import AppConfig


class CoreConfig(AppConfig):
    """Configuration for the `core` app (prediction jobs and the debug page)."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "core"
    verbose_name = "Prediction debug"

    def ready(self) -> None:
        """Register the prediction debug system checks."""

        from core import checks  # noqa: F401
