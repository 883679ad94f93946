"""URL configuration for core views."""

from __future__ import annotations

from django.urls import path

from core import views

app_name = "core"

urlpatterns = [
    path(
        "api/v1/prediction/debug/<str:namespace>/<str:tsp>",
        views.prediction_debug,
        name="prediction_debug",
    ),
]
