"""Convert prediction job metrics into the engine's internal configuration.

`MetricContext` binds one job to the selector fetcher so that each metric can be
turned into an `InternalConfig` (what to predict and how) and a `MetricNamer`
(how the engine keys the metric's series).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Final, Protocol

from analysis.prediction import (
    ALGORITHM_TYPE_DSP,
    DSPConfig,
    PredictionMetric,
    TargetRef,
    TimeSeriesPrediction,
)
from core.errors import JobConfigError

DEFAULT_SAMPLE_INTERVAL: Final = "60s"
DEFAULT_HISTORY_LENGTH: Final = "3d"

_DURATION_RE: Final = re.compile(r"(\d+(?:\.\d+)?)(ms|s|m|h|d)")
_UNIT_SECONDS: Final = {"ms": 0.001, "s": 1.0, "m": 60.0, "h": 3600.0, "d": 86400.0}


class SelectorFetcher(Protocol):
    """Resolves a workload reference to its pod label selector."""

    def fetch(self, target_ref: TargetRef) -> str: ...


@dataclass(frozen=True, slots=True)
class MaxValueEstimator:
    margin_fraction: float


@dataclass(frozen=True, slots=True)
class FFTEstimator:
    margin_fraction: float
    low_amplitude_threshold: float
    high_frequency_threshold: float
    min_num_of_spectrum_items: int
    max_num_of_spectrum_items: int


@dataclass(frozen=True, slots=True)
class DSPInternalConfig:
    """Parsed DSP settings with durations in seconds."""

    sample_interval_seconds: float
    history_length_seconds: float
    max_value_estimators: tuple[MaxValueEstimator, ...] = ()
    fft_estimators: tuple[FFTEstimator, ...] = ()


@dataclass(frozen=True, slots=True)
class InternalConfig:
    """The engine-facing description of one prediction metric.

    Attributes:
        metric_name: Resource identifier of the metric.
        query_type: One of ResourceQuery, ExpressionQuery, RawQuery.
        query: The expression, raw query or resource name to fetch.
        selector: Workload label selector (ResourceQuery only).
        dsp: Parsed DSP settings when the metric uses the DSP algorithm.
    """

    metric_name: str
    query_type: str
    query: str
    selector: str = ""
    dsp: DSPInternalConfig | None = None


@dataclass(frozen=True, slots=True)
class MetricNamer:
    """Identifies a metric's series inside the engine."""

    namespace: str
    job_name: str
    metric_name: str
    query_type: str
    query: str
    selector: str = ""

    def build_unique_key(self) -> str:
        return f"{self.namespace}/{self.job_name}/{self.metric_name}"

    def __str__(self) -> str:
        described = f"{self.query_type}({self.query})"
        if self.selector:
            described += f"{{{self.selector}}}"
        return f"{self.build_unique_key()} {described}"


class MetricContext:
    """Per-job context used to build engine configs for the job's metrics."""

    def __init__(self, job: TimeSeriesPrediction, selector_fetcher: SelectorFetcher) -> None:
        self.job = job
        self.selector_fetcher = selector_fetcher
        self._selector: str | None = None

    def convert_metric_to_internal_config(self, metric: PredictionMetric) -> InternalConfig:
        """Build the engine's InternalConfig for `metric`.

        Raises:
            JobConfigError: When the metric lacks a query or its DSP block has
                unparseable durations or numbers.
        """

        query = self._query_for(metric)
        dsp: DSPInternalConfig | None = None
        if metric.algorithm.algorithm_type == ALGORITHM_TYPE_DSP and metric.algorithm.dsp is not None:
            dsp = convert_dsp_config(metric.algorithm.dsp)
        return InternalConfig(
            metric_name=metric.resource_identifier,
            query_type=metric.type,
            query=query,
            selector=self._selector_for(metric),
            dsp=dsp,
        )

    def metric_namer(self, metric: PredictionMetric) -> MetricNamer:
        """Return the MetricNamer for `metric`."""

        return MetricNamer(
            namespace=self.job.namespace,
            job_name=self.job.name,
            metric_name=metric.resource_identifier,
            query_type=metric.type,
            query=self._query_for(metric),
            selector=self._selector_for(metric),
        )

    def _query_for(self, metric: PredictionMetric) -> str:
        if metric.type == "ResourceQuery":
            query = metric.resource_query
        elif metric.type == "RawQuery":
            query = metric.query_expr
        else:
            query = metric.expression
        if not query:
            raise JobConfigError(f"Metric {metric.resource_identifier!r} has no query for type {metric.type}.")
        return query

    def _selector_for(self, metric: PredictionMetric) -> str:
        """Return the workload selector for resource metrics, fetching it once per context."""

        if metric.type != "ResourceQuery":
            return ""
        if self._selector is None:
            self._selector = self.selector_fetcher.fetch(self.job.spec.target_ref)
        return self._selector


def convert_dsp_config(config: DSPConfig) -> DSPInternalConfig:
    """Parse a DSP resource block, applying default durations."""

    return DSPInternalConfig(
        sample_interval_seconds=parse_duration(config.sample_interval or DEFAULT_SAMPLE_INTERVAL),
        history_length_seconds=parse_duration(config.history_length or DEFAULT_HISTORY_LENGTH),
        max_value_estimators=tuple(
            MaxValueEstimator(margin_fraction=_float(item.margin_fraction, default=0.0))
            for item in config.estimators.max_value
        ),
        fft_estimators=tuple(
            FFTEstimator(
                margin_fraction=_float(item.margin_fraction, default=0.0),
                low_amplitude_threshold=_float(item.low_amplitude_threshold, default=1.0),
                high_frequency_threshold=_float(item.high_frequency_threshold, default=0.05),
                min_num_of_spectrum_items=(
                    3 if item.min_num_of_spectrum_items is None else item.min_num_of_spectrum_items
                ),
                max_num_of_spectrum_items=(
                    100 if item.max_num_of_spectrum_items is None else item.max_num_of_spectrum_items
                ),
            )
            for item in config.estimators.fft
        ),
    )


def parse_duration(raw: str) -> float:
    """Parse durations like "15s", "1h30m" or "3d" into seconds.

    Raises:
        JobConfigError: When `raw` is empty, malformed or not positive.
    """

    text = raw.strip()
    position = 0
    total = 0.0
    for match in _DURATION_RE.finditer(text):
        if match.start() != position:
            break
        total += float(match.group(1)) * _UNIT_SECONDS[match.group(2)]
        position = match.end()
    if not text or position != len(text) or total <= 0:
        raise JobConfigError(f"Invalid duration {raw!r}.")
    return total


def _float(raw: str, *, default: float) -> float:
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise JobConfigError(f"Invalid number {raw!r}.") from exc
