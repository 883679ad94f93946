"""Database models for the core app.

Prediction jobs are stored as the camelCase spec document of a
TimeSeriesPrediction resource, keyed by namespace and name.
"""

from __future__ import annotations

from django.core.exceptions import ValidationError
from django.db import models

from analysis.prediction import (
    InvalidResourceError,
    TimeSeriesPrediction,
    parse_spec,
)


class PredictionJob(models.Model):
    """A stored forecasting job (TimeSeriesPrediction resource).

    Attributes:
        namespace: Namespace scoping the job name.
        name: Job name, unique within its namespace.
        spec: Raw resource spec document (camelCase keys).
        created_at: Timestamp when the job was first stored.
        updated_at: Timestamp of the last update.
    """

    namespace = models.CharField(max_length=253)
    name = models.CharField(max_length=253)
    spec = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Prediction Job"
        verbose_name_plural = "Prediction Jobs"
        ordering = ["namespace", "name"]
        constraints = [
            models.UniqueConstraint(fields=["namespace", "name"], name="uniq_prediction_job_namespace_name"),
        ]

    def __str__(self) -> str:
        """Return a concise display string for admin/debug usage."""

        return f"PredictionJob({self.namespace}/{self.name})"

    def clean(self) -> None:
        """Reject spec documents that do not parse as a TimeSeriesPrediction spec."""

        try:
            parse_spec(self.spec)
        except InvalidResourceError as exc:
            raise ValidationError({"spec": str(exc)}) from exc

    def to_resource(self) -> TimeSeriesPrediction:
        """Return the typed resource for this row.

        Raises:
            InvalidResourceError: When the stored spec is malformed.
        """

        return TimeSeriesPrediction(namespace=self.namespace, name=self.name, spec=parse_spec(self.spec))
