"""Dashboard: wires tables, layout, selection and a drawing surface.

Every user action goes through the selection state machine; the commands
it returns are applied to the surface in order by a best-effort
dispatcher. Layout ticks flow straight from the layout adapter to the
surface.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from cmfgraph.commands.dispatcher import CommandDispatcher
from cmfgraph.exceptions import UnknownNodeError
from cmfgraph.layout.adapter import LayoutAdapter, LayoutSettings
from cmfgraph.loader import load_tables, load_tables_async
from cmfgraph.model import Node, normalize_id
from cmfgraph.selection import Focus, SelectionStateMachine, Transition
from cmfgraph.surface import Surface, SurfaceProcessor
from cmfgraph.viz.html import HtmlSurface

if TYPE_CHECKING:
    from cmfgraph.commands.processor import CommandProcessor
    from cmfgraph.tables import DataTables
    from cmfgraph.viz.widget import NotebookWidget

logger = logging.getLogger(__name__)


class Dashboard:
    """Interactive capability graph over a set of loaded tables.

    Args:
        tables: The lookup tables to explore
        surface: Drawing surface; defaults to an :class:`HtmlSurface`
        settings: Layout and viewport settings
        strict: Propagate surface failures instead of logging them
        seed: Seed for the layout simulation

    Example:
        >>> dashboard = Dashboard.from_directory("data/")
        >>> _ = dashboard.layout.warm_up(300)
        >>> _ = dashboard.search("governance")
        >>> dashboard.focus.node_id
        '7'
    """

    def __init__(
        self,
        tables: DataTables,
        *,
        surface: Surface | None = None,
        settings: LayoutSettings | None = None,
        strict: bool = False,
        seed: int | None = 0,
    ) -> None:
        self.tables = tables
        self.settings = settings or LayoutSettings()
        self.layout = LayoutAdapter(tables, self.settings, seed=seed)
        self.surface = surface if surface is not None else HtmlSurface(tables, self.settings)
        self.selection = SelectionStateMachine.from_tables(
            tables,
            settings=self.settings,
            position_of=self.layout.position,
        )
        self._dispatcher = CommandDispatcher([SurfaceProcessor(self.surface)], strict=strict)
        self.layout.subscribe(self.surface.update_positions)
        self._dispatcher.emit_all(self.selection.initial_commands())

    @classmethod
    def from_directory(cls, data_dir: str | Path, **kwargs) -> Dashboard:
        """Load the JSON sources in ``data_dir`` and build a dashboard.

        Raises:
            DataLoadError: If any source fails; no dashboard is built.
        """
        return cls(load_tables(data_dir), **kwargs)

    @classmethod
    async def from_directory_async(cls, data_dir: str | Path, **kwargs) -> Dashboard:
        return cls(await load_tables_async(data_dir), **kwargs)

    @property
    def focus(self) -> Focus:
        return self.selection.focus

    def add_processor(self, processor: CommandProcessor) -> None:
        """Receive every command applied from now on."""
        self._dispatcher.add(processor)

    def _apply(self, transition: Transition) -> Transition:
        failures = self._dispatcher.emit_all(transition.commands)
        if failures:
            logger.warning("%d of %d commands failed to apply", failures, len(transition.commands))
        return transition

    def _resolve(self, node: Node | str | int) -> Node:
        if isinstance(node, Node):
            return node
        found = self.tables.node(node)
        if found is None:
            raise UnknownNodeError(normalize_id(node))
        return found

    # ------------------------------------------------------------------
    # User events
    # ------------------------------------------------------------------

    def click_node(self, node: Node | str | int) -> Transition:
        """Click on a node, given as a record or an id."""
        return self._apply(self.selection.click_node(self._resolve(node)))

    def click_background(self) -> Transition:
        return self._apply(self.selection.click_background())

    def search(self, text: str) -> Transition:
        """Search box input. A miss leaves focus, highlight and panels untouched."""
        return self._apply(self.selection.search(text))

    def tick(self) -> bool:
        return self.layout.step()

    def drag_start(self, node: Node | str | int, pointer_id: int = 0) -> None:
        self.layout.drag_start(self._resolve(node).id, pointer_id)

    def drag_move(self, x: float, y: float, pointer_id: int = 0) -> None:
        self.layout.drag_move(x, y, pointer_id)

    def drag_end(self, pointer_id: int = 0) -> None:
        self.layout.drag_end(pointer_id)

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def _html_surface(self) -> HtmlSurface:
        if not isinstance(self.surface, HtmlSurface):
            raise TypeError(f"HTML output needs an HtmlSurface, got {type(self.surface).__name__}")
        return self.surface

    def render_html(self) -> str:
        return self._html_surface().render(self.layout.positions())

    def save_html(self, filepath: str | Path) -> Path:
        return self._html_surface().write(filepath, self.layout.positions())

    def visualize(self) -> NotebookWidget:
        return self._html_surface().widget(self.layout.positions())
