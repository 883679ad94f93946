"""Pytest fixtures shared across prediction debug tests."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import pytest

from analysis.prediction import TimeSeriesPrediction
from analysis.signals import DebugSignals, Signal


def prediction_document(
    *,
    namespace: str = "default",
    name: str = "web-cpu",
    algorithm_type: str = "dsp",
    with_dsp: bool = True,
    metrics: list[dict[str, Any]] | None = None,
) -> dict[str, Any]:
    """Return a camelCase TimeSeriesPrediction document for tests."""

    algorithm: dict[str, Any] = {"algorithmType": algorithm_type}
    if with_dsp:
        algorithm["dsp"] = {
            "sampleInterval": "60s",
            "historyLength": "3d",
            "estimators": {
                "maxValue": [{"marginFraction": "0.1"}],
                "fft": [{"marginFraction": "0.2", "lowAmplitudeThreshold": "1.0", "highFrequencyThreshold": "0.05"}],
            },
        }
    if metrics is None:
        metrics = [
            {
                "resourceIdentifier": "cpu",
                "type": "ExpressionQuery",
                "expressionQuery": {"expression": 'sum(rate(container_cpu_usage_seconds_total{pod=~"web-.*"}[3m]))'},
                "algorithm": algorithm,
            }
        ]
    return {
        "apiVersion": "prediction.crane.io/v1alpha1",
        "kind": "TimeSeriesPrediction",
        "metadata": {"namespace": namespace, "name": name},
        "spec": {
            "targetRef": {"kind": "Deployment", "namespace": namespace, "name": "web", "apiVersion": "apps/v1"},
            "predictionWindowSeconds": 3600,
            "predictionMetrics": metrics,
        },
    }


@pytest.fixture
def make_document():
    """Return the `prediction_document` factory."""

    return prediction_document


@pytest.fixture
def dsp_job() -> TimeSeriesPrediction:
    """Return a job whose first metric uses the DSP algorithm."""

    return TimeSeriesPrediction.from_dict(prediction_document())


@pytest.fixture
def debug_signals() -> DebugSignals:
    """Return aligned history/test/estimate signals."""

    return DebugSignals(
        history=Signal(samples=(1.0, 2.0, 3.0, 4.0), sample_rate=1.0, label="history 4 samples"),
        test=Signal(samples=(5.0, 6.0), sample_rate=1.0),
        estimate=Signal(samples=(5.5, 5.9), sample_rate=1.0),
    )


def pytest_collection_modifyitems(items: Sequence[pytest.Item]) -> None:
    """Enforce that every test has exactly one speed marker.

    - `unit`: pure, fast tests with no database access.
    - `integration`: tests touching Django, database, views, commands, or IO.
    """

    invalid: list[str] = []
    for item in items:
        has_unit = item.get_closest_marker("unit") is not None
        has_integration = item.get_closest_marker("integration") is not None
        if has_unit == has_integration:
            markers = []
            if has_unit:
                markers.append("unit")
            if has_integration:
                markers.append("integration")
            invalid.append(f"{item.nodeid} (markers={markers or 'none'})")

    if invalid:
        joined = "\n".join(f"- {nodeid}" for nodeid in invalid)
        raise pytest.UsageError(
            "Each test must have exactly one speed marker: `@pytest.mark.unit` or "
            "`@pytest.mark.integration`.\n"
            f"Offending tests:\n{joined}"
        )
