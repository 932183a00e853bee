"""Lookup tables built once from loaded records.

``DataTables`` is the read-only data source every interactive component
queries: the ordered node and edge lists, the three per-node detail
tables, and the graph topology (a NetworkX graph over node ids).
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any

import networkx as nx

from cmfgraph.exceptions import DataLoadError
from cmfgraph.model import CbbEntry, Edge, Node, normalize_id

Record = Mapping[str, Any]


def _record_id(record: Any, source: str, position: int) -> str:
    if not isinstance(record, Mapping):
        raise DataLoadError(source, f"record {position} is not an object")
    if record.get("id") is None:
        raise DataLoadError(source, f"record {position} has no 'id'")
    return normalize_id(record["id"])


def _index_by_id(
    records: Iterable[Record] | None,
    source: str,
    field: str,
    convert,
) -> dict[str, tuple]:
    """Map node id -> converted items in one pass. Later records win."""
    table: dict[str, tuple] = {}
    for position, record in enumerate(records or ()):
        node_id = _record_id(record, source, position)
        items = record.get(field) or []
        if not isinstance(items, list):
            raise DataLoadError(source, f"record {position} '{field}' is not a list")
        try:
            table[node_id] = tuple(convert(item) for item in items)
        except TypeError as e:
            raise DataLoadError(source, f"record {position} has a malformed '{field}' entry: {e}") from e
    return table


class DataTables:
    """Node/edge lists plus per-node CBB, objective and artifact lookups.

    Build with :meth:`from_records`. Every lookup is total: a node without
    detail records yields an empty tuple, never ``None``.

    Example:
        >>> tables = DataTables.from_records(
        ...     nodes=[{"id": 1, "name": "Alpha"}, {"id": "2", "name": "Beta"}],
        ...     links=[{"source": "1", "target": 2}],
        ...     objectives=[{"id": 1, "objectives": ["Reduce cost"]}],
        ... )
        >>> tables.objectives_for("1")
        ('Reduce cost',)
        >>> sorted(tables.neighbors("2"))
        ['1']
    """

    def __init__(
        self,
        nodes: Iterable[Node],
        edges: Iterable[Edge],
        *,
        cbbs: Mapping[str, tuple[CbbEntry, ...]] | None = None,
        objectives: Mapping[str, tuple[str, ...]] | None = None,
        artifacts: Mapping[str, tuple[str, ...]] | None = None,
    ) -> None:
        self._nodes = self._dedupe_nodes(nodes)
        self._index = {node.id: i for i, node in enumerate(self._nodes)}
        self._edges = tuple(edges)
        self._cbbs = MappingProxyType(dict(cbbs or {}))
        self._objectives = MappingProxyType(dict(objectives or {}))
        self._artifacts = MappingProxyType(dict(artifacts or {}))
        self._validate_edges()
        self._nx_graph = self._build_graph()

    @classmethod
    def from_records(
        cls,
        nodes: Iterable[Record],
        links: Iterable[Record],
        cbblinks: Iterable[Record] | None = None,
        objectives: Iterable[Record] | None = None,
        artifacts: Iterable[Record] | None = None,
    ) -> DataTables:
        """Build tables from raw JSON-like records.

        Ids of every kind (node ids, edge endpoints, lookup keys) are
        normalized to strings before use. Missing lookup sources default
        to empty tables.

        Raises:
            DataLoadError: If a record has no id, a detail list is not a
                list of the expected entries, or an edge endpoint does not
                name a known node.
        """
        node_list = []
        for position, record in enumerate(nodes):
            _record_id(record, "nodes", position)
            node_list.append(Node.from_record(record))

        edge_list = []
        for position, record in enumerate(links):
            if not isinstance(record, Mapping) or "source" not in record or "target" not in record:
                raise DataLoadError("links", f"record {position} needs 'source' and 'target'")
            edge_list.append(Edge.from_record(record))

        return cls(
            node_list,
            edge_list,
            cbbs=_index_by_id(cbblinks, "cbblinks", "cbbs", CbbEntry.from_record),
            objectives=_index_by_id(objectives, "objectives", "objectives", str),
            artifacts=_index_by_id(artifacts, "artifacts", "artifacts", str),
        )

    @staticmethod
    def _dedupe_nodes(nodes: Iterable[Node]) -> tuple[Node, ...]:
        # Later duplicates replace earlier ones but keep the first position
        by_id: dict[str, Node] = {}
        for node in nodes:
            by_id[node.id] = node
        return tuple(by_id.values())

    def _validate_edges(self) -> None:
        for position, edge in enumerate(self._edges):
            for endpoint in (edge.source, edge.target):
                if endpoint not in self._index:
                    raise DataLoadError(
                        "links",
                        f"record {position} references unknown node '{endpoint}'",
                    )

    def _build_graph(self) -> nx.Graph:
        G = nx.Graph()
        G.add_nodes_from(node.id for node in self._nodes)
        G.add_edges_from((edge.source, edge.target) for edge in self._edges)
        return G

    # ------------------------------------------------------------------
    # Nodes and edges
    # ------------------------------------------------------------------

    @property
    def nodes(self) -> tuple[Node, ...]:
        """Nodes in their stored order."""
        return self._nodes

    @property
    def edges(self) -> tuple[Edge, ...]:
        """Edges in their stored order; position is the edge's identity."""
        return self._edges

    @property
    def nx_graph(self) -> nx.Graph:
        """Underlying NetworkX graph over node ids."""
        return self._nx_graph

    def node(self, node_id: Any) -> Node | None:
        """Look up a node by (raw or canonical) id."""
        index = self._index.get(normalize_id(node_id))
        return None if index is None else self._nodes[index]

    def index_of(self, node_id: str) -> int:
        """Position of a node in the stored order. Raises KeyError if absent."""
        return self._index[node_id]

    def __contains__(self, node_id: object) -> bool:
        return normalize_id(node_id) in self._index

    def neighbors(self, node_id: str) -> frozenset[str]:
        """Ids of nodes reachable via exactly one edge."""
        if node_id not in self._nx_graph:
            return frozenset()
        return frozenset(self._nx_graph.neighbors(node_id))

    def incident_edges(self, node_id: str) -> list[int]:
        """Positions of edges with ``node_id`` as an endpoint."""
        return [i for i, edge in enumerate(self._edges) if edge.touches(node_id)]

    def group_counts(self) -> dict[str, int]:
        """Number of nodes per group, in order of first appearance."""
        return dict(Counter(str(node.group) if node.group is not None else "—" for node in self._nodes))

    # ------------------------------------------------------------------
    # Detail lookups
    # ------------------------------------------------------------------

    def cbbs_for(self, node_id: Any) -> tuple[CbbEntry, ...]:
        return self._cbbs.get(normalize_id(node_id), ())

    def objectives_for(self, node_id: Any) -> tuple[str, ...]:
        return self._objectives.get(normalize_id(node_id), ())

    def artifacts_for(self, node_id: Any) -> tuple[str, ...]:
        return self._artifacts.get(normalize_id(node_id), ())

    def summary(self) -> dict[str, int]:
        """Record counts for each table."""
        return {
            "nodes": len(self._nodes),
            "edges": len(self._edges),
            "cbbs": len(self._cbbs),
            "objectives": len(self._objectives),
            "artifacts": len(self._artifacts),
        }
