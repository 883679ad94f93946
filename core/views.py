"""Views for the prediction debug page."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from functools import lru_cache

from django.conf import settings
from django.http import HttpRequest, HttpResponse
from django.views.decorators.http import require_GET

from analysis.prediction import ALGORITHM_TYPE_DSP, PredictionMetric, TimeSeriesPrediction
from analysis.signals import DebugSignals
from core.backends import DebugEngine, JobStore, PredictorManager, build_backends
from core.cancellation import Deadline
from core.charting.page import compose_page
from core.charting.render import check_overlay_alignment, render_overlay_chart, render_signal_chart
from core.charting.schema import ChartOverrides
from core.errors import EngineError, PredictionDebugError
from core.prediction_context import MetricContext, SelectorFetcher
from core.responses import write_error_response

logger = logging.getLogger(__name__)

HISTORY_SERIES_NAME = "history"
HISTORY_SERIES_COLOR = "green"
OVERLAY_SERIES_NAMES = ("actual", "forecasted")
OVERLAY_TITLE = "actual/forecasted"


class PredictionDebugView:
    """Render history and actual/forecast charts for one prediction job.

    Outcomes:
        - 400 with an empty body for missing identifiers, unknown jobs, jobs
          without metrics, or jobs whose first metric is not DSP-configured.
        - A structured JSON error for lookup, config, engine or deadline failures.
        - 200 with a self-contained HTML page otherwise.
    """

    def __init__(
        self,
        *,
        job_store: JobStore,
        predictor_manager: PredictorManager,
        selector_fetcher: SelectorFetcher,
        engine: DebugEngine,
        timeout_seconds: float = 30.0,
        chart_width: str = "3000px",
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.job_store = job_store
        self.predictor_manager = predictor_manager
        self.selector_fetcher = selector_fetcher
        self.engine = engine
        self.timeout_seconds = timeout_seconds
        self.chart_width = chart_width
        self.clock = clock

    @classmethod
    def from_settings(cls) -> PredictionDebugView:
        """Build the view from `settings.PREDICTION_DEBUG_*`.

        Raises:
            ImproperlyConfigured: When a collaborator is not configured.
        """

        backends = build_backends()
        return cls(
            job_store=backends.job_store,
            predictor_manager=backends.predictor_manager,
            selector_fetcher=backends.selector_fetcher,
            engine=backends.engine,
            timeout_seconds=settings.PREDICTION_DEBUG_TIMEOUT_SECONDS,
            chart_width=settings.PREDICTION_DEBUG_CHART_WIDTH,
        )

    def __call__(self, request: HttpRequest, namespace: str = "", tsp: str = "") -> HttpResponse:
        if not namespace or not tsp:
            return _bad_request("missing namespace or job name", namespace=namespace, tsp=tsp)

        try:
            job = self.job_store.get(namespace, tsp)
        except Exception as exc:
            return write_error_response(exc)
        if job is None:
            return _bad_request("job not found", namespace=namespace, tsp=tsp)

        metric = _supported_metric(job)
        if metric is None:
            return _bad_request("no DSP-configured prediction metric", namespace=namespace, tsp=tsp)

        try:
            signals = self._debug_signals(job, metric)
            check_overlay_alignment((signals.test, signals.estimate), OVERLAY_SERIES_NAMES)
        except Exception as exc:
            return write_error_response(exc)

        return self._render(signals, title=f"{namespace}/{tsp}")

    def _debug_signals(self, job: TimeSeriesPrediction, metric: PredictionMetric) -> DebugSignals:
        """Convert the metric config and run the engine's debug entrypoint."""

        context = MetricContext(job, self.selector_fetcher)
        config = context.convert_metric_to_internal_config(metric)
        namer = context.metric_namer(metric)
        predictor = self.predictor_manager.get_predictor(ALGORITHM_TYPE_DSP)
        deadline = Deadline.after(self.timeout_seconds, clock=self.clock)
        try:
            signals = self.engine.debug(predictor, namer, config, deadline=deadline)
        except PredictionDebugError:
            raise
        except Exception as exc:
            raise EngineError(f"Debug entrypoint failed for {namer.build_unique_key()}: {exc}") from exc
        deadline.check()
        return signals

    def _render(self, signals: DebugSignals, *, title: str) -> HttpResponse:
        history_chart = render_signal_chart(
            signals.history,
            HISTORY_SERIES_NAME,
            HISTORY_SERIES_COLOR,
            ChartOverrides(title=HISTORY_SERIES_NAME),
            width=self.chart_width,
        )
        overlay_chart = render_overlay_chart(
            (signals.test, signals.estimate),
            OVERLAY_SERIES_NAMES,
            ChartOverrides(title=OVERLAY_TITLE),
            width=self.chart_width,
        )
        page = compose_page((history_chart, overlay_chart), title=title)

        response = HttpResponse(content_type="text/html; charset=utf-8")
        page.render(response)
        return response


def _supported_metric(job: TimeSeriesPrediction) -> PredictionMetric | None:
    """Return the first prediction metric when it is DSP-configured."""

    if not job.spec.prediction_metrics:
        return None
    metric = job.spec.prediction_metrics[0]
    if metric.algorithm.algorithm_type != ALGORITHM_TYPE_DSP or metric.algorithm.dsp is None:
        return None
    return metric


def _bad_request(reason: str, *, namespace: str, tsp: str) -> HttpResponse:
    logger.debug("Rejecting prediction debug request namespace=%r tsp=%r: %s", namespace, tsp, reason)
    return HttpResponse(status=400)


@lru_cache(maxsize=1)
def default_debug_view() -> PredictionDebugView:
    """Return the settings-configured view, built once per process.

    The WSGI and ASGI entry points call this at import time and `core.checks`
    builds the same backends, so missing collaborators fail before serving.
    """

    return PredictionDebugView.from_settings()


@require_GET
def prediction_debug(request: HttpRequest, namespace: str, tsp: str) -> HttpResponse:
    """Display debug charts for the TimeSeriesPrediction `namespace/tsp`."""

    return default_debug_view()(request, namespace, tsp)
