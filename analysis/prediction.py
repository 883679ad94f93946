"""Typed view of the TimeSeriesPrediction job resource.

The resource is stored and exchanged as a camelCase document (the shape used by
the prediction API). `TimeSeriesPrediction.from_dict` validates that document
and returns frozen dataclasses that the debug view consumes.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Final

ALGORITHM_TYPE_DSP: Final = "dsp"

_QUERY_TYPES: Final = ("ResourceQuery", "ExpressionQuery", "RawQuery")


class InvalidResourceError(ValueError):
    """Raised when a prediction resource document cannot be parsed."""


@dataclass(frozen=True, slots=True)
class TargetRef:
    """Reference to the workload whose metrics are predicted."""

    kind: str = ""
    namespace: str = ""
    name: str = ""
    api_version: str = ""


@dataclass(frozen=True, slots=True)
class MaxValueEstimatorConfig:
    """Max-value estimator settings for the DSP algorithm."""

    margin_fraction: str = ""


@dataclass(frozen=True, slots=True)
class FFTEstimatorConfig:
    """FFT estimator settings for the DSP algorithm."""

    margin_fraction: str = ""
    low_amplitude_threshold: str = ""
    high_frequency_threshold: str = ""
    min_num_of_spectrum_items: int | None = None
    max_num_of_spectrum_items: int | None = None


@dataclass(frozen=True, slots=True)
class DSPEstimators:
    """Estimator lists configured for the DSP algorithm."""

    max_value: tuple[MaxValueEstimatorConfig, ...] = ()
    fft: tuple[FFTEstimatorConfig, ...] = ()


@dataclass(frozen=True, slots=True)
class DSPConfig:
    """The DSP algorithm configuration block.

    Durations are kept as the raw strings found in the resource (e.g. "15s",
    "3d"); they are parsed when converted to the engine's internal config.
    """

    sample_interval: str = ""
    history_length: str = ""
    estimators: DSPEstimators = DSPEstimators()


@dataclass(frozen=True, slots=True)
class PercentileConfig:
    """The percentile algorithm configuration block."""

    sample_interval: str = ""
    history_length: str = ""
    percentile: str = ""
    margin_fraction: str = ""


@dataclass(frozen=True, slots=True)
class Algorithm:
    """Algorithm descriptor for a prediction metric."""

    algorithm_type: str
    dsp: DSPConfig | None = None
    percentile: PercentileConfig | None = None


@dataclass(frozen=True, slots=True)
class PredictionMetric:
    """A single metric configured for prediction.

    Attributes:
        resource_identifier: Stable identifier of the metric within the job.
        type: Query kind used to fetch the metric.
        algorithm: Algorithm descriptor.
        resource_query: Resource name for `ResourceQuery` metrics (e.g. "cpu").
        expression: Metric expression for `ExpressionQuery` metrics.
        query_expr: Raw query for `RawQuery` metrics.
    """

    resource_identifier: str
    type: str
    algorithm: Algorithm
    resource_query: str | None = None
    expression: str | None = None
    query_expr: str | None = None


@dataclass(frozen=True, slots=True)
class TimeSeriesPredictionSpec:
    """The spec section of a TimeSeriesPrediction."""

    target_ref: TargetRef = TargetRef()
    prediction_window_seconds: int = 0
    prediction_metrics: tuple[PredictionMetric, ...] = ()


@dataclass(frozen=True, slots=True)
class TimeSeriesPrediction:
    """A forecasting job: identity plus spec."""

    namespace: str
    name: str
    spec: TimeSeriesPredictionSpec

    @classmethod
    def from_dict(cls, document: Mapping[str, Any]) -> TimeSeriesPrediction:
        """Parse a resource document.

        Args:
            document: Mapping with `metadata` (namespace, name) and `spec` keys.

        Returns:
            Parsed TimeSeriesPrediction.

        Raises:
            InvalidResourceError: When required fields are missing or mistyped.
        """

        metadata = _mapping(document.get("metadata"), "metadata")
        namespace = _string(metadata.get("namespace"), "metadata.namespace", required=True)
        name = _string(metadata.get("name"), "metadata.name", required=True)
        return cls(namespace=namespace, name=name, spec=parse_spec(document.get("spec") or {}))


def parse_spec(raw: object) -> TimeSeriesPredictionSpec:
    """Parse a TimeSeriesPrediction `spec` mapping.

    Args:
        raw: The camelCase `spec` mapping.

    Returns:
        Parsed spec with metrics in their declared order.
    """

    spec = _mapping(raw, "spec")
    raw_target = _mapping(spec.get("targetRef") or {}, "spec.targetRef")
    target_ref = TargetRef(
        kind=_string(raw_target.get("kind"), "spec.targetRef.kind"),
        namespace=_string(raw_target.get("namespace"), "spec.targetRef.namespace"),
        name=_string(raw_target.get("name"), "spec.targetRef.name"),
        api_version=_string(raw_target.get("apiVersion"), "spec.targetRef.apiVersion"),
    )
    raw_metrics = spec.get("predictionMetrics") or []
    if not isinstance(raw_metrics, list):
        raise InvalidResourceError("spec.predictionMetrics must be a list.")
    metrics = tuple(
        _parse_metric(item, path=f"spec.predictionMetrics[{index}]") for index, item in enumerate(raw_metrics)
    )
    return TimeSeriesPredictionSpec(
        target_ref=target_ref,
        prediction_window_seconds=_int(spec.get("predictionWindowSeconds"), "spec.predictionWindowSeconds") or 0,
        prediction_metrics=metrics,
    )


def _parse_metric(raw: object, *, path: str) -> PredictionMetric:
    """Parse one entry of `spec.predictionMetrics`."""

    metric = _mapping(raw, path)
    query_type = _string(metric.get("type"), f"{path}.type") or "ExpressionQuery"
    if query_type not in _QUERY_TYPES:
        raise InvalidResourceError(f"{path}.type must be one of {', '.join(_QUERY_TYPES)}; got {query_type!r}.")

    expression_query = _mapping(metric.get("expressionQuery") or {}, f"{path}.expressionQuery")
    prom = _mapping(metric.get("prom") or {}, f"{path}.prom")
    return PredictionMetric(
        resource_identifier=_string(metric.get("resourceIdentifier"), f"{path}.resourceIdentifier", required=True),
        type=query_type,
        algorithm=_parse_algorithm(metric.get("algorithm"), path=f"{path}.algorithm"),
        resource_query=_string(metric.get("resourceQuery"), f"{path}.resourceQuery") or None,
        expression=_string(expression_query.get("expression"), f"{path}.expressionQuery.expression") or None,
        query_expr=_string(prom.get("queryExpr"), f"{path}.prom.queryExpr") or None,
    )


def _parse_algorithm(raw: object, *, path: str) -> Algorithm:
    """Parse an algorithm descriptor; unknown algorithm types are kept verbatim."""

    algorithm = _mapping(raw, path)
    algorithm_type = _string(algorithm.get("algorithmType"), f"{path}.algorithmType", required=True)

    dsp: DSPConfig | None = None
    if algorithm.get("dsp") is not None:
        raw_dsp = _mapping(algorithm["dsp"], f"{path}.dsp")
        raw_estimators = _mapping(raw_dsp.get("estimators") or {}, f"{path}.dsp.estimators")
        dsp = DSPConfig(
            sample_interval=_string(raw_dsp.get("sampleInterval"), f"{path}.dsp.sampleInterval"),
            history_length=_string(raw_dsp.get("historyLength"), f"{path}.dsp.historyLength"),
            estimators=DSPEstimators(
                max_value=tuple(
                    MaxValueEstimatorConfig(
                        margin_fraction=_string(item.get("marginFraction"), f"{path}.dsp.estimators.maxValue"),
                    )
                    for item in _mapping_list(raw_estimators.get("maxValue"), f"{path}.dsp.estimators.maxValue")
                ),
                fft=tuple(
                    _parse_fft_estimator(item, path=f"{path}.dsp.estimators.fft")
                    for item in _mapping_list(raw_estimators.get("fft"), f"{path}.dsp.estimators.fft")
                ),
            ),
        )

    percentile: PercentileConfig | None = None
    if algorithm.get("percentile") is not None:
        raw_percentile = _mapping(algorithm["percentile"], f"{path}.percentile")
        percentile = PercentileConfig(
            sample_interval=_string(raw_percentile.get("sampleInterval"), f"{path}.percentile.sampleInterval"),
            history_length=_string(raw_percentile.get("historyLength"), f"{path}.percentile.historyLength"),
            percentile=_string(raw_percentile.get("percentile"), f"{path}.percentile.percentile"),
            margin_fraction=_string(raw_percentile.get("marginFraction"), f"{path}.percentile.marginFraction"),
        )

    return Algorithm(algorithm_type=algorithm_type, dsp=dsp, percentile=percentile)


def _parse_fft_estimator(item: Mapping[str, Any], *, path: str) -> FFTEstimatorConfig:
    """Parse one FFT estimator entry."""

    return FFTEstimatorConfig(
        margin_fraction=_string(item.get("marginFraction"), f"{path}.marginFraction"),
        low_amplitude_threshold=_string(item.get("lowAmplitudeThreshold"), f"{path}.lowAmplitudeThreshold"),
        high_frequency_threshold=_string(item.get("highFrequencyThreshold"), f"{path}.highFrequencyThreshold"),
        min_num_of_spectrum_items=_int(item.get("minNumOfSpectrumItems"), f"{path}.minNumOfSpectrumItems"),
        max_num_of_spectrum_items=_int(item.get("maxNumOfSpectrumItems"), f"{path}.maxNumOfSpectrumItems"),
    )


def _mapping(value: object, path: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise InvalidResourceError(f"{path} must be a mapping.")
    return value


def _mapping_list(value: object, path: str) -> list[Mapping[str, Any]]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise InvalidResourceError(f"{path} must be a list.")
    return [_mapping(item, f"{path}[{index}]") for index, item in enumerate(value)]


def _string(value: object, path: str, *, required: bool = False) -> str:
    """Coerce scalar values to str; numbers are accepted since YAML may yield them."""

    if value is None or value == "":
        if required:
            raise InvalidResourceError(f"{path} is required.")
        return ""
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise InvalidResourceError(f"{path} must be a string.")
    return str(value)


def _int(value: object, path: str) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidResourceError(f"{path} must be an integer.")
    return value
