"""Render forecasting signals into chart descriptors."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace

from analysis.signals import Signal
from core.errors import SignalAlignmentError

from .schema import ChartDescriptor, ChartOverrides, ChartSeries, LegendOptions, TooltipOptions

OVERLAY_AREA_OPACITY = 0.1

DEFAULT_CHART_WIDTH = "3000px"


def time_axis_labels(signal: Signal) -> tuple[str, ...]:
    """Return one x-label per sample, in time units with one decimal place."""

    return tuple(f"{i / signal.sample_rate:.1f}" for i in range(signal.num()))


def render_signal_chart(
    signal: Signal,
    name: str,
    color: str,
    overrides: ChartOverrides | None = None,
    *,
    width: str = DEFAULT_CHART_WIDTH,
) -> ChartDescriptor:
    """Render a single signal as a line-only chart.

    Args:
        signal: Signal to plot; an empty signal yields an empty chart.
        name: Series name used for the legend.
        color: Line color.
        overrides: Optional title/legend/tooltip overrides.
        width: CSS width of the chart.

    Returns:
        ChartDescriptor titled after the signal unless overridden.
    """

    chart = ChartDescriptor(
        title=str(signal),
        x_labels=time_axis_labels(signal),
        series=(ChartSeries(name=name, values=signal.samples, color=color),),
        legend=LegendOptions(show=True, data=(name,)),
        tooltip=TooltipOptions(show=True, trigger="axis", trigger_on="mousemove"),
        width=width,
        theme="roma",
    )
    return _apply_overrides(chart, overrides)


def render_overlay_chart(
    signals: Sequence[Signal],
    names: Sequence[str],
    overrides: ChartOverrides | None = None,
    *,
    width: str = DEFAULT_CHART_WIDTH,
) -> ChartDescriptor | None:
    """Render several aligned signals on one shared time axis.

    The first signal defines the axis. Every series is drawn as a low-opacity
    filled area so overlapping actual/forecast regions stay distinguishable.

    Args:
        signals: Signals to overlay, in legend order.
        names: Series names paired positionally with `signals`.
        overrides: Optional title/legend/tooltip overrides.
        width: CSS width of the chart.

    Returns:
        ChartDescriptor, or None when `signals` is empty.

    Raises:
        SignalAlignmentError: When names and signals differ in count, or any
            signal differs from the first in sample count or sample rate.
    """

    if not signals:
        return None
    check_overlay_alignment(signals, names)

    canonical = signals[0]
    chart = ChartDescriptor(
        title="",
        x_labels=time_axis_labels(canonical),
        series=tuple(
            ChartSeries(name=name, values=signal.samples, area_opacity=OVERLAY_AREA_OPACITY)
            for signal, name in zip(signals, names)
        ),
        legend=LegendOptions(show=True, data=tuple(names)),
        tooltip=TooltipOptions(show=True, trigger="axis", trigger_on="mousemove"),
        width=width,
        theme="shine",
    )
    return _apply_overrides(chart, overrides)


def check_overlay_alignment(signals: Sequence[Signal], names: Sequence[str]) -> None:
    """Raise SignalAlignmentError unless signals share one axis and names pair up."""

    if len(names) != len(signals):
        raise SignalAlignmentError(f"Got {len(signals)} signals but {len(names)} names.")
    if not signals:
        return
    canonical = signals[0]
    for index, signal in enumerate(signals[1:], start=1):
        if signal.num() != canonical.num():
            raise SignalAlignmentError(
                f"Signal {index} ({names[index]}) has {signal.num()} samples; expected {canonical.num()}."
            )
        if signal.sample_rate != canonical.sample_rate:
            raise SignalAlignmentError(
                f"Signal {index} ({names[index]}) has sample rate {signal.sample_rate}; "
                f"expected {canonical.sample_rate}."
            )


def _apply_overrides(chart: ChartDescriptor, overrides: ChartOverrides | None) -> ChartDescriptor:
    if overrides is None:
        return chart
    return replace(
        chart,
        title=overrides.title if overrides.title is not None else chart.title,
        legend=overrides.legend if overrides.legend is not None else chart.legend,
        tooltip=overrides.tooltip if overrides.tooltip is not None else chart.tooltip,
    )
