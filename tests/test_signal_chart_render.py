"""Unit tests for single-signal chart rendering."""

from __future__ import annotations

import json

import pytest

from analysis.signals import Signal
from core.charting.render import render_signal_chart, time_axis_labels
from core.charting.schema import ChartOverrides, LegendOptions, TooltipOptions

pytestmark = pytest.mark.unit


def test_labels_are_sample_times_with_one_decimal() -> None:
    """Samples at rate 2 map to half-unit labels, one per sample."""

    chart = render_signal_chart(Signal(samples=(1, 2, 3), sample_rate=2), "history", "green")

    assert chart.x_labels == ("0.0", "0.5", "1.0")
    assert chart.series[0].values == (1, 2, 3)
    assert list(chart.series[0].points(chart.x_labels)) == [("0.0", 1), ("0.5", 2), ("1.0", 3)]


def test_empty_signal_renders_empty_chart() -> None:
    """A zero-length signal yields no labels and no points, without raising."""

    chart = render_signal_chart(Signal(samples=(), sample_rate=1.0), "history", "green")

    assert chart.x_labels == ()
    assert len(chart.series) == 1
    assert chart.series[0].values == ()


def test_series_is_line_only_with_requested_color() -> None:
    """Single-series charts hide point symbols and use no area fill."""

    chart = render_signal_chart(Signal(samples=(1.0,), sample_rate=1.0), "history", "green")
    series = chart.series[0]

    assert series.name == "history"
    assert series.color == "green"
    assert series.show_symbol is False
    assert series.area_opacity is None
    assert chart.legend == LegendOptions(show=True, data=("history",))
    assert chart.tooltip == TooltipOptions(show=True, trigger="axis", trigger_on="mousemove")
    assert chart.theme == "roma"


def test_default_title_is_signal_label() -> None:
    """Without overrides the title is the producer-supplied signal label."""

    labelled = render_signal_chart(Signal(samples=(1.0,), sample_rate=1.0, label="cpu history"), "h", "green")
    unlabelled = render_signal_chart(Signal(samples=(1.0, 2.0), sample_rate=4.0), "h", "green")

    assert labelled.title == "cpu history"
    assert unlabelled.title == "SampleRate: 4.00000Hz, Samples: 2, Duration: 0.5s"


def test_overrides_replace_title_legend_and_tooltip() -> None:
    """Overrides replace only the fields they set."""

    overrides = ChartOverrides(
        title="history",
        tooltip=TooltipOptions(show=False),
    )
    chart = render_signal_chart(Signal(samples=(1.0,), sample_rate=1.0, label="x"), "h", "green", overrides)

    assert chart.title == "history"
    assert chart.tooltip.show is False
    assert chart.legend.data == ("h",)


def test_rendering_is_deterministic() -> None:
    """Rendering the same inputs twice produces byte-identical payloads."""

    signal = Signal(samples=(0.25, 1.5, -3.0), sample_rate=3.0, label="s")
    first = json.dumps(render_signal_chart(signal, "history", "green").to_payload(), sort_keys=True)
    second = json.dumps(render_signal_chart(signal, "history", "green").to_payload(), sort_keys=True)

    assert first == second


def test_time_axis_labels_round_to_one_decimal() -> None:
    """Labels are formatted with one decimal place even for fractional steps."""

    assert time_axis_labels(Signal(samples=(0, 0, 0, 0), sample_rate=3.0)) == ("0.0", "0.3", "0.7", "1.0")


def test_signal_rejects_non_positive_sample_rate() -> None:
    """Signals require a positive sample rate."""

    with pytest.raises(ValueError):
        Signal(samples=(1.0,), sample_rate=0)


def test_signal_normalizes_samples_to_tuple() -> None:
    """Lists passed as samples are stored as immutable tuples."""

    signal = Signal(samples=[1.0, 2.0], sample_rate=1.0)  # type: ignore[arg-type]

    assert signal.samples == (1.0, 2.0)
    assert signal.num() == 2
    assert signal.duration == 2.0
