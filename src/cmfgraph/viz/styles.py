"""Visual constants for the graph drawing.

Colors, sizes and offsets live here so the HTML surface and any other
renderer draw the same picture.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

# Categorical 10-color palette, assigned to groups in order of first use
CATEGORY10: tuple[str, ...] = (
    "#1f77b4",
    "#ff7f0e",
    "#2ca02c",
    "#d62728",
    "#9467bd",
    "#8c564b",
    "#e377c2",
    "#7f7f7f",
    "#bcbd22",
    "#17becf",
)


@dataclass(frozen=True)
class GraphStyle:
    """Sizes and strokes for nodes, links and labels."""

    node_radius: float = 8.0
    node_stroke: str = "#fff"
    node_stroke_width: float = 1.5
    link_stroke: str = "#aaa"
    link_stroke_width: float = 1.5
    link_opacity: float = 0.6
    label_dx: float = 14.0
    label_dy: float = 4.0
    label_size: int = 10
    label_fill: str = "#333"
    zoom_extent: tuple[float, float] = (0.1, 4.0)


DEFAULT_STYLE = GraphStyle()


class GroupPalette:
    """Ordinal color scale: each new group takes the next palette color.

    Example:
        >>> palette = GroupPalette()
        >>> palette.color("strategy")
        '#1f77b4'
        >>> palette.color("operations")
        '#ff7f0e'
        >>> palette.color("strategy")
        '#1f77b4'
    """

    def __init__(self, colors: tuple[str, ...] = CATEGORY10) -> None:
        self._colors = colors
        self._assigned: dict[str, str] = {}

    def color(self, group: Any) -> str:
        key = repr(group)
        if key not in self._assigned:
            self._assigned[key] = self._colors[len(self._assigned) % len(self._colors)]
        return self._assigned[key]
