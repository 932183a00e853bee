"""Static HTML snapshot of the dashboard.

:class:`HtmlSurface` records commands like any surface and can then
render a self-contained HTML page: an SVG of the graph at the latest
layout tick, with current highlight classes and view transform, next to
the four detail panels and the search box mount point.
"""

from __future__ import annotations

import html
from pathlib import Path
from typing import TYPE_CHECKING

from cmfgraph.commands.types import ElementKey, ElementKind, HighlightClass, PanelId, ViewTransform
from cmfgraph.panels import DetailPanelController
from cmfgraph.surface import RecordingSurface
from cmfgraph.viz.styles import DEFAULT_STYLE, GraphStyle, GroupPalette
from cmfgraph.viz.widget import NotebookWidget

if TYPE_CHECKING:
    from cmfgraph.layout.adapter import LayoutSettings, Position
    from cmfgraph.tables import DataTables

_CSS = """
body { margin: 0; font-family: system-ui, -apple-system, sans-serif; display: flex; height: 100vh; }
#main { flex: 1; display: flex; flex-direction: column; }
#searchBar { padding: 8px; border-bottom: 1px solid #ddd; }
#nodeSearch { width: 280px; padding: 4px 8px; }
#graph { flex: 1; overflow: hidden; }
#sidebar { width: 360px; overflow-y: auto; border-left: 1px solid #ddd; padding: 0 12px; }
.panel { border-bottom: 1px solid #eee; padding-bottom: 8px; }
.panel h2 { font-size: 15px; }
.cbb-item, .obj-item, .artifact-item { margin: 6px 0; font-size: 13px; }
.node.highlighted { stroke: #000; stroke-width: 2.5px; }
.link.highlighted { stroke: #555; stroke-opacity: 1; stroke-width: 2.5px; }
.label.highlighted { font-weight: bold; }
.node.faded, .label.faded { opacity: 0.15; }
.link.faded { stroke-opacity: 0.05; }
"""


def _class_attr(base: str, extra: str | None) -> str:
    return f"{base} {extra}" if extra else base


class HtmlSurface(RecordingSurface):
    """Recording surface that renders its state as an HTML page.

    The page is a static snapshot: it carries no script, so the search
    box and the drawn elements are inert. Interaction goes through
    :class:`cmfgraph.Dashboard` and a fresh render.

    Pan/zoom transforms are clamped to the style's zoom extent. A notice
    is shown until the next highlight or panel change replaces it.
    """

    def __init__(
        self,
        tables: DataTables,
        settings: LayoutSettings,
        *,
        style: GraphStyle = DEFAULT_STYLE,
        title: str = "IT-CMF Dashboard",
    ) -> None:
        super().__init__()
        self._tables = tables
        self._settings = settings
        self._style = style
        self._title = title
        self.notice: str | None = None

    # ------------------------------------------------------------------
    # Surface
    # ------------------------------------------------------------------

    def set_panel_html(self, panel: PanelId, html: str) -> None:
        self.notice = None
        super().set_panel_html(panel, html)

    def set_element_class(self, element: ElementKey, css_class: HighlightClass | None) -> None:
        self.notice = None
        super().set_element_class(element, css_class)

    def apply_transform(self, transform: ViewTransform, duration_ms: int) -> None:
        super().apply_transform(transform.clamped(*self._style.zoom_extent), duration_ms)

    def notify(self, message: str) -> None:
        super().notify(message)
        self.notice = message

    # ------------------------------------------------------------------
    # SVG
    # ------------------------------------------------------------------

    def _class_for(self, kind: ElementKind, key: str) -> str | None:
        css_class = self.classes.get(ElementKey(kind, key))
        return None if css_class is None else css_class.value

    def _svg(self, positions: dict[str, Position]) -> str:
        s = self._style
        width, height = self._settings.width, self._settings.height
        palette = GroupPalette()
        lines = []
        for i, edge in enumerate(self._tables.edges):
            a, b = positions[edge.source], positions[edge.target]
            css = _class_attr("link", self._class_for(ElementKind.EDGE, str(i)))
            lines.append(
                f'<line class="{css}" x1="{a.x:.2f}" y1="{a.y:.2f}" x2="{b.x:.2f}" y2="{b.y:.2f}" '
                f'stroke="{s.link_stroke}" stroke-width="{s.link_stroke_width}" stroke-opacity="{s.link_opacity}"/>'
            )
        circles = []
        labels = []
        for node in self._tables.nodes:
            p = positions[node.id]
            node_id = html.escape(node.id, quote=True)
            css = _class_attr("node", self._class_for(ElementKind.NODE, node.id))
            circles.append(
                f'<circle class="{css}" data-id="{node_id}" cx="{p.x:.2f}" cy="{p.y:.2f}" r="{s.node_radius:g}" '
                f'fill="{palette.color(node.group)}" stroke="{s.node_stroke}" stroke-width="{s.node_stroke_width}">'
                f"<title>{html.escape(node.name)}</title></circle>"
            )
            css = _class_attr("label", self._class_for(ElementKind.LABEL, node.id))
            labels.append(
                f'<text class="{css}" x="{p.x + s.label_dx:.2f}" y="{p.y + s.label_dy:.2f}" '
                f'font-size="{s.label_size}" fill="{s.label_fill}">{html.escape(node.label)}</text>'
            )
        return (
            f'<svg width="{width:g}" height="{height:g}">'
            f'<g transform="{self.transform.to_svg()}">'
            f'<g class="links">{"".join(lines)}</g>'
            f'<g class="nodes">{"".join(circles)}</g>'
            f'<g class="labels">{"".join(labels)}</g>'
            f"</g></svg>"
        )

    # ------------------------------------------------------------------
    # Page
    # ------------------------------------------------------------------

    def _panel_html(self, panel: PanelId) -> str:
        content = self.panels.get(panel)
        if content is None:
            content = DetailPanelController.placeholder(panel).to_html()
        return f'<div id="{panel.value}" class="panel">{content}</div>'

    def render(self, positions: dict[str, Position] | None = None) -> str:
        """Render the page.

        Args:
            positions: Node positions to draw; defaults to the latest tick
        """
        positions = positions if positions is not None else self.positions
        if self._tables.nodes and not positions:
            raise ValueError("No layout positions yet: pass positions or tick the layout first")
        panels = "".join(self._panel_html(panel) for panel in PanelId)
        notice = f'<p class="notice">{html.escape(self.notice)}</p>' if self.notice else ""
        return (
            "<!DOCTYPE html>\n"
            '<html lang="en"><head><meta charset="UTF-8">'
            f"<title>{html.escape(self._title)}</title><style>{_CSS}</style></head>"
            '<body><div id="main">'
            f'<div id="searchBar"><input id="nodeSearch" type="text" placeholder="Search nodes…">{notice}</div>'
            f'<div id="graph">{self._svg(positions)}</div>'
            f'</div><div id="sidebar">{panels}</div></body></html>\n'
        )

    def write(self, filepath: str | Path, positions: dict[str, Position] | None = None) -> Path:
        """Render and save the page. Adds an ``.html`` suffix if missing."""
        path = Path(filepath)
        if path.suffix != ".html":
            path = path.with_name(path.name + ".html")
        path.write_text(self.render(positions), encoding="utf-8")
        return path

    def widget(self, positions: dict[str, Position] | None = None) -> NotebookWidget:
        return NotebookWidget.for_viewport(self.render(positions), self._settings.width, self._settings.height)
