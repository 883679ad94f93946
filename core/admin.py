"""Admin registrations for the core app."""

from __future__ import annotations

from django.contrib import admin

from core.models import PredictionJob


@admin.register(PredictionJob)
class PredictionJobAdmin(admin.ModelAdmin):
    """Admin configuration for PredictionJob."""

    list_display = ("namespace", "name", "updated_at")
    list_filter = ("namespace",)
    search_fields = ("namespace", "name")
    readonly_fields = ("created_at", "updated_at")
