"""Compose chart descriptors into a self-contained HTML debug page.

Each descriptor becomes a plotly figure. The plotly.js bundle is inlined once in
the page head, so the document renders without fetching any external assets.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

import plotly.graph_objects as go
import plotly.io as pio
from django.template.loader import render_to_string
from django.utils.safestring import SafeString, mark_safe
from plotly.colors import hex_to_rgb
from plotly.offline import get_plotlyjs

from .schema import ChartDescriptor, ChartSeries
from .themes import palette_for

logger = logging.getLogger(__name__)

PAGE_TEMPLATE = "core/prediction_debug.html"

_PLOTLY_CONFIG = {"displaylogo": False, "responsive": True}


class TextStream(Protocol):
    """Minimal writable text stream (HttpResponse, StringIO, open file)."""

    def write(self, content: str, /) -> object: ...


@dataclass(frozen=True, slots=True)
class DebugPage:
    """An ordered set of charts rendered as one HTML document."""

    title: str
    charts: tuple[ChartDescriptor, ...]

    def to_html(self) -> str:
        """Return the full HTML document."""

        fragments: list[SafeString] = [
            mark_safe(chart_fragment(chart, div_id=f"chart-{index}")) for index, chart in enumerate(self.charts)
        ]
        return render_to_string(
            PAGE_TEMPLATE,
            {
                "page_title": self.title,
                "plotly_js": mark_safe(get_plotlyjs()),
                "chart_fragments": fragments,
            },
        )

    def render(self, stream: TextStream) -> bool:
        """Write the page to `stream`.

        Write failures are logged, not raised: by the time the body is being
        written the response status may already be committed.

        Returns:
            True when the page was written, False when writing failed.
        """

        html = self.to_html()
        try:
            stream.write(html)
        except (OSError, ValueError):
            logger.exception("Failed to display debug time series")
            return False
        return True


def compose_page(charts: Sequence[ChartDescriptor | None], *, title: str = "Prediction debug") -> DebugPage:
    """Assemble charts into a DebugPage, skipping absent (None) charts."""

    return DebugPage(title=title, charts=tuple(chart for chart in charts if chart is not None))


def build_figure(chart: ChartDescriptor) -> go.Figure:
    """Convert a ChartDescriptor into a plotly Figure."""

    palette = palette_for(chart.theme)
    figure = go.Figure()
    for index, series in enumerate(chart.series):
        color = series.color or palette[index % len(palette)]
        figure.add_trace(_series_trace(series, chart=chart, color=color))

    figure.update_layout(
        title={"text": chart.title},
        showlegend=chart.legend.show,
        hovermode=_hovermode(chart),
        colorway=list(palette),
        template="plotly_white",
        xaxis={"type": "category"},
        margin={"l": 60, "r": 30, "t": 60, "b": 40},
    )
    return figure


def chart_fragment(chart: ChartDescriptor, *, div_id: str) -> str:
    """Render one chart as an HTML fragment without the plotly.js bundle."""

    return pio.to_html(
        build_figure(chart),
        config=_PLOTLY_CONFIG,
        include_plotlyjs=False,
        full_html=False,
        default_width=chart.width,
        default_height="500px",
        div_id=div_id,
    )


def _series_trace(series: ChartSeries, *, chart: ChartDescriptor, color: str) -> go.Scatter:
    trace = go.Scatter(
        x=list(chart.x_labels),
        y=list(series.values),
        name=series.name,
        mode="lines+markers" if series.show_symbol else "lines",
        line={"color": color},
        visible=True if series.visible else "legendonly",
        showlegend=chart.legend.show and series.name in chart.legend.data,
    )
    if series.area_opacity is not None:
        trace.fill = "tozeroy"
        fill_color = _rgba(color, series.area_opacity)
        if fill_color is not None:
            trace.fillcolor = fill_color
    return trace


def _hovermode(chart: ChartDescriptor) -> str | bool:
    tooltip = chart.tooltip
    if not tooltip.show or tooltip.trigger == "none" or tooltip.trigger_on == "none":
        return False
    return "x unified" if tooltip.trigger == "axis" else "closest"


def _rgba(color: str, opacity: float) -> str | None:
    """Return an rgba() string for a #RRGGBB color, or None for other color forms."""

    if not (color.startswith("#") and len(color) == 7):
        return None
    red, green, blue = hex_to_rgb(color)
    return f"rgba({red}, {green}, {blue}, {opacity})"
