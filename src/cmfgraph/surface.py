"""Drawing surface abstraction.

The interactive core needs only a handful of capabilities from whatever
draws the graph: set a panel's HTML, set an element's highlight class,
animate the pan/zoom transform, show a notice, and receive fresh
positions on each layout tick. :class:`SurfaceProcessor` translates
commands into those calls.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from cmfgraph.commands.processor import TypedCommandProcessor
from cmfgraph.commands.types import (
    ElementKey,
    ElementKind,
    HighlightClass,
    PanelId,
    ViewTransform,
)

if TYPE_CHECKING:
    from cmfgraph.commands.types import Notify, RenderPanel, SetHighlight, TransformView
    from cmfgraph.layout.adapter import Position


@runtime_checkable
class Surface(Protocol):
    """Capabilities the core requires from a drawing surface."""

    def set_panel_html(self, panel: PanelId, html: str) -> None: ...

    def set_element_class(self, element: ElementKey, css_class: HighlightClass | None) -> None: ...

    def apply_transform(self, transform: ViewTransform, duration_ms: int) -> None: ...

    def notify(self, message: str) -> None: ...

    def update_positions(self, positions: dict[str, Position]) -> None: ...


class RecordingSurface:
    """In-memory surface that keeps the latest state of every mount point.

    Useful headless: tests, the terminal, and as the base of
    :class:`cmfgraph.viz.HtmlSurface`.
    """

    def __init__(self) -> None:
        self.panels: dict[PanelId, str] = {}
        self.classes: dict[ElementKey, HighlightClass] = {}
        self.transform = ViewTransform()
        self.notices: list[str] = []
        self.positions: dict[str, Position] = {}
        self.ticks = 0

    def set_panel_html(self, panel: PanelId, html: str) -> None:
        self.panels[panel] = html

    def set_element_class(self, element: ElementKey, css_class: HighlightClass | None) -> None:
        if css_class is None:
            self.classes.pop(element, None)
        else:
            self.classes[element] = css_class

    def apply_transform(self, transform: ViewTransform, duration_ms: int) -> None:
        # A newer transform supersedes any still animating
        self.transform = transform

    def notify(self, message: str) -> None:
        self.notices.append(message)

    def update_positions(self, positions: dict[str, Position]) -> None:
        self.positions = positions
        self.ticks += 1

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def class_of(self, kind: ElementKind, key: str) -> HighlightClass | None:
        return self.classes.get(ElementKey(kind, key))

    def with_class(self, css_class: HighlightClass) -> set[ElementKey]:
        return {key for key, value in self.classes.items() if value is css_class}


class SurfaceProcessor(TypedCommandProcessor):
    """Applies commands to a :class:`Surface`."""

    def __init__(self, surface: Surface) -> None:
        self.surface = surface

    def __repr__(self) -> str:
        return f"SurfaceProcessor({type(self.surface).__name__})"

    def on_set_highlight(self, command: SetHighlight) -> None:
        for element, css_class in command.classes.items():
            self.surface.set_element_class(element, css_class)

    def on_render_panel(self, command: RenderPanel) -> None:
        self.surface.set_panel_html(command.panel, command.content.to_html())

    def on_transform_view(self, command: TransformView) -> None:
        self.surface.apply_transform(command.transform, command.duration_ms)

    def on_notify(self, command: Notify) -> None:
        self.surface.notify(command.message)
