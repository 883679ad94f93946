"""Schema types for prediction debug charts.

Chart descriptors are plain, frozen data. Renderers build them from signals and
the page composer turns them into plotly figures, so descriptors stay free of
any plotting-library objects and can be compared or serialized directly.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Literal, TypedDict, get_args

ChartTheme = Literal["roma", "shine"]

TooltipTrigger = Literal["axis", "item", "none"]

TooltipTriggerOn = Literal["mousemove", "none"]


@dataclass(frozen=True, slots=True)
class LegendOptions:
    """Legend presentation.

    Args:
        show: Whether the legend is drawn.
        data: Series names listed in the legend; unlisted series are omitted.
    """

    show: bool = True
    data: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class TooltipOptions:
    """Tooltip presentation.

    Args:
        show: Whether hover tooltips are enabled.
        trigger: "axis" shows all series at the hovered x; "item" shows one point.
        trigger_on: Pointer event that opens the tooltip. Plotly figures only open
            tooltips on hover, so "mousemove" and "none" are the accepted values.

    Raises:
        ValueError: When `trigger` or `trigger_on` is not a supported value.
    """

    show: bool = True
    trigger: TooltipTrigger = "axis"
    trigger_on: TooltipTriggerOn = "mousemove"

    def __post_init__(self) -> None:
        if self.trigger not in get_args(TooltipTrigger):
            raise ValueError(f"Unsupported tooltip trigger: {self.trigger!r}")
        if self.trigger_on not in get_args(TooltipTriggerOn):
            raise ValueError(f"Unsupported tooltip trigger_on: {self.trigger_on!r}")


@dataclass(frozen=True, slots=True)
class ChartOverrides:
    """Optional chart-level presentation overrides applied after defaults."""

    title: str | None = None
    legend: LegendOptions | None = None
    tooltip: TooltipOptions | None = None


@dataclass(frozen=True, slots=True)
class ChartSeries:
    """A named series of y-values aligned to its chart's x-labels.

    Args:
        name: Series name (legend entry).
        values: One y-value per x-label.
        color: Optional line color; None falls back to the theme palette.
        visible: Whether the series is drawn initially.
        show_symbol: Whether point markers are drawn.
        area_opacity: Fill opacity below the line; None renders line-only.
    """

    name: str
    values: tuple[float, ...]
    color: str | None = None
    visible: bool = True
    show_symbol: bool = False
    area_opacity: float | None = None

    def points(self, x_labels: tuple[str, ...]) -> Iterator[tuple[str, float]]:
        """Yield (x-label, y-value) pairs."""

        return zip(x_labels, self.values)


class ChartSeriesPayload(TypedDict):
    """JSON payload for one chart series."""

    name: str
    data: list[float]
    color: str | None
    visible: bool
    showSymbol: bool
    areaOpacity: float | None


class ChartPayload(TypedDict):
    """JSON payload for a full chart descriptor."""

    title: str
    width: str
    theme: str
    labels: list[str]
    legend: dict[str, object]
    tooltip: dict[str, object]
    series: list[ChartSeriesPayload]


@dataclass(frozen=True, slots=True)
class ChartDescriptor:
    """A fully resolved line chart.

    Args:
        title: Chart title.
        x_labels: Shared x-axis labels.
        series: Series drawn against `x_labels`, in legend order.
        legend: Legend options.
        tooltip: Tooltip options.
        width: CSS width of the rendered chart.
        theme: Palette name used for series without an explicit color.
    """

    title: str
    x_labels: tuple[str, ...]
    series: tuple[ChartSeries, ...]
    legend: LegendOptions = LegendOptions()
    tooltip: TooltipOptions = TooltipOptions()
    width: str = "3000px"
    theme: ChartTheme = "roma"

    def to_payload(self) -> ChartPayload:
        """Return a JSON-serializable payload for the descriptor."""

        return {
            "title": self.title,
            "width": self.width,
            "theme": self.theme,
            "labels": list(self.x_labels),
            "legend": {"show": self.legend.show, "data": list(self.legend.data)},
            "tooltip": {
                "show": self.tooltip.show,
                "trigger": self.tooltip.trigger,
                "triggerOn": self.tooltip.trigger_on,
            },
            "series": [
                {
                    "name": s.name,
                    "data": list(s.values),
                    "color": s.color,
                    "visible": s.visible,
                    "showSymbol": s.show_symbol,
                    "areaOpacity": s.area_opacity,
                }
                for s in self.series
            ],
        }
