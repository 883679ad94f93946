"""Named color palettes for debug charts."""

from __future__ import annotations

from typing import Final

from .schema import ChartTheme

ROMA: Final = (
    "#E01F54",
    "#001852",
    "#F5E8C8",
    "#B8D2C7",
    "#C6B38E",
    "#A4D8C2",
    "#F3D999",
    "#D3758F",
    "#DCC392",
    "#2E4783",
)

SHINE: Final = (
    "#C12E34",
    "#E6B600",
    "#0098D9",
    "#2B821D",
    "#005EAA",
    "#339CA8",
    "#CDA819",
    "#32A487",
)

PALETTES: Final[dict[str, tuple[str, ...]]] = {"roma": ROMA, "shine": SHINE}


def palette_for(theme: ChartTheme) -> tuple[str, ...]:
    """Return the palette for `theme`, falling back to ROMA for unknown names."""

    return PALETTES.get(theme, ROMA)
