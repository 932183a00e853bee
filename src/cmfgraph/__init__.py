"""cmfgraph - Interactive exploration of IT-CMF capability graphs."""

from cmfgraph.commands import (
    CommandDispatcher,
    CommandProcessor,
    ElementKey,
    ElementKind,
    HighlightClass,
    PanelId,
    TypedCommandProcessor,
    ViewTransform,
)
from cmfgraph.dashboard import Dashboard
from cmfgraph.exceptions import DataLoadError, UnknownNodeError
from cmfgraph.highlight import HighlightProjector, connected_ids
from cmfgraph.layout import LayoutAdapter, LayoutSettings, Position
from cmfgraph.loader import load_tables, load_tables_async
from cmfgraph.model import CbbEntry, Edge, Node, normalize_id
from cmfgraph.panels import DetailPanelController, PanelContent, format_definition
from cmfgraph.search import SearchMatch, SearchMiss, SearchResolver
from cmfgraph.selection import IDLE, Focus, SelectionStateMachine, Transition
from cmfgraph.surface import RecordingSurface, Surface
from cmfgraph.tables import DataTables

__all__ = [
    # Data
    "Node",
    "Edge",
    "CbbEntry",
    "DataTables",
    "normalize_id",
    "load_tables",
    "load_tables_async",
    # Layout
    "LayoutAdapter",
    "LayoutSettings",
    "Position",
    # Selection
    "Focus",
    "IDLE",
    "SelectionStateMachine",
    "Transition",
    "HighlightProjector",
    "connected_ids",
    "DetailPanelController",
    "PanelContent",
    "format_definition",
    "SearchResolver",
    "SearchMatch",
    "SearchMiss",
    # Commands and surfaces
    "CommandDispatcher",
    "CommandProcessor",
    "TypedCommandProcessor",
    "ElementKey",
    "ElementKind",
    "HighlightClass",
    "PanelId",
    "ViewTransform",
    "Surface",
    "RecordingSurface",
    "Dashboard",
    # Errors
    "DataLoadError",
    "UnknownNodeError",
]
