"""Highlight projection: which elements stand out for a focused node."""

from __future__ import annotations

from typing import TYPE_CHECKING

from cmfgraph.commands.types import ElementKey, ElementKind, HighlightClass, SetHighlight

if TYPE_CHECKING:
    from cmfgraph.tables import DataTables


def connected_ids(tables: DataTables, node_id: str) -> frozenset[str]:
    """The focused node plus every node one edge away from it.

    Example:
        >>> tables = DataTables.from_records(
        ...     nodes=[{"id": "a"}, {"id": "b"}, {"id": "c"}],
        ...     links=[{"source": "a", "target": "b"}],
        ... )
        >>> sorted(connected_ids(tables, "a"))
        ['a', 'b']
    """
    return frozenset({node_id}) | tables.neighbors(node_id)


def element_keys(tables: DataTables) -> list[ElementKey]:
    """Every drawn element: one node and one label per node, one line per edge."""
    keys = [ElementKey(ElementKind.NODE, node.id) for node in tables.nodes]
    keys.extend(ElementKey(ElementKind.EDGE, str(i)) for i in range(len(tables.edges)))
    keys.extend(ElementKey(ElementKind.LABEL, node.id) for node in tables.nodes)
    return keys


class HighlightProjector:
    """Computes total highlight assignments from a focus decision.

    Nodes and labels in the connected neighborhood are highlighted, edges
    incident to the focused node are highlighted, and everything else is
    faded. A reset assigns no class to any element.
    """

    def __init__(self, tables: DataTables) -> None:
        self._tables = tables
        self._keys = element_keys(tables)

    def project(self, node_id: str) -> SetHighlight:
        connected = connected_ids(self._tables, node_id)
        incident = {str(i) for i in self._tables.incident_edges(node_id)}
        classes: dict[ElementKey, HighlightClass | None] = {}
        for key in self._keys:
            if key.kind is ElementKind.EDGE:
                member = key.key in incident
            else:
                member = key.key in connected
            classes[key] = HighlightClass.HIGHLIGHTED if member else HighlightClass.FADED
        return SetHighlight(classes)

    def reset(self) -> SetHighlight:
        return SetHighlight({key: None for key in self._keys})
