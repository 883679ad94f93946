"""Collaborator interfaces for the prediction debug view and their wiring.

The view receives its collaborators through its constructor. `build_backends`
resolves the configured dotted paths from `settings.PREDICTION_DEBUG_BACKENDS`
so that a missing collaborator fails when the handler is built.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from django.db import DatabaseError
from django.utils.module_loading import import_string

from analysis.prediction import InvalidResourceError, TimeSeriesPrediction
from analysis.signals import DebugSignals
from core.cancellation import Deadline
from core.errors import JobConfigError, JobLookupError
from core.models import PredictionJob
from core.prediction_context import InternalConfig, MetricNamer, SelectorFetcher


class JobStore(Protocol):
    """Looks up prediction jobs by namespace and name."""

    def get(self, namespace: str, name: str) -> TimeSeriesPrediction | None: ...


class PredictorManager(Protocol):
    """Hands out predictor instances by algorithm type."""

    def get_predictor(self, algorithm_type: str) -> Any: ...


class DebugEngine(Protocol):
    """The forecasting engine's debug entrypoint."""

    def debug(
        self,
        predictor: Any,
        namer: MetricNamer,
        config: InternalConfig,
        *,
        deadline: Deadline,
    ) -> DebugSignals: ...


class DatabaseJobStore:
    """JobStore backed by the `core.PredictionJob` table."""

    def get(self, namespace: str, name: str) -> TimeSeriesPrediction | None:
        """Return the job, or None when it does not exist.

        Raises:
            JobLookupError: When the database query fails.
            JobConfigError: When the stored spec is malformed.
        """

        try:
            row = PredictionJob.objects.filter(namespace=namespace, name=name).first()
        except DatabaseError as exc:
            raise JobLookupError(f"Failed to fetch prediction job {namespace}/{name}: {exc}") from exc
        if row is None:
            return None
        try:
            return row.to_resource()
        except InvalidResourceError as exc:
            raise JobConfigError(f"Prediction job {namespace}/{name} has an invalid spec: {exc}") from exc


@dataclass(frozen=True, slots=True)
class DebugBackends:
    """Resolved collaborator instances for the debug view."""

    job_store: JobStore
    predictor_manager: PredictorManager
    selector_fetcher: SelectorFetcher
    engine: DebugEngine


def build_backends(config: dict[str, str | None] | None = None) -> DebugBackends:
    """Instantiate collaborators from dotted paths.

    Args:
        config: Mapping with JOB_STORE, PREDICTOR_MANAGER, SELECTOR_FETCHER and
            ENGINE dotted paths. Defaults to `settings.PREDICTION_DEBUG_BACKENDS`.

    Raises:
        ImproperlyConfigured: When a path is missing or cannot be imported.
    """

    config = settings.PREDICTION_DEBUG_BACKENDS if config is None else config
    return DebugBackends(
        job_store=_load(config, "JOB_STORE"),
        predictor_manager=_load(config, "PREDICTOR_MANAGER"),
        selector_fetcher=_load(config, "SELECTOR_FETCHER"),
        engine=_load(config, "ENGINE"),
    )


def _load(config: dict[str, str | None], key: str) -> Any:
    path = config.get(key)
    if not path:
        raise ImproperlyConfigured(f"PREDICTION_DEBUG_BACKENDS[{key!r}] is not configured.")
    try:
        factory = import_string(path)
    except ImportError as exc:
        raise ImproperlyConfigured(f"PREDICTION_DEBUG_BACKENDS[{key!r}] could not be imported: {exc}") from exc
    return factory()
