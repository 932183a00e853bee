"""Records that make up the capability graph.

Nodes, edges and CBB entries are built once from loaded JSON records and
never mutated afterwards. Layout positions are not stored here: the layout
adapter is the single writer of positions (see ``cmfgraph.layout``).
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


def normalize_id(value: Any) -> str:
    """Coerce a raw identifier to the canonical string id space.

    Input data may mix numeric and string identifiers for the same logical
    node. Integral floats are rendered without a fractional part so that
    ``1``, ``1.0`` and ``"1"`` all map to ``"1"``.

    Examples:
        >>> normalize_id(1)
        '1'
        >>> normalize_id("1")
        '1'
        >>> normalize_id(2.0)
        '2'
    """
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


@dataclass(frozen=True, eq=False)
class Node:
    """A capability in the framework.

    Attributes:
        id: Canonical string id, unique and stable across the session
        name: Display name
        name_short: Short code (may be empty)
        group: Categorical value that drives node color
        overview: Free-text overview, if any
        goal: Free-text goal, if any
        definitions: Free text that may embed an enumerated list
    """

    id: str
    name: str = ""
    name_short: str = ""
    group: Any = None
    overview: Any = None
    goal: Any = None
    definitions: Any = None

    @property
    def label(self) -> str:
        """Text drawn next to the node: short code, falling back to the name."""
        return self.name_short or self.name

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> Node:
        return cls(
            id=normalize_id(record["id"]),
            name=_text(record.get("name")),
            name_short=_text(record.get("name_short")),
            group=record.get("group"),
            overview=record.get("overview"),
            goal=record.get("goal"),
            definitions=record.get("definitions"),
        )

    def __repr__(self) -> str:
        return f"Node(id={self.id!r}, name={self.name!r})"


@dataclass(frozen=True)
class Edge:
    """An undirected link between two nodes, referenced by id."""

    source: str
    target: str

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> Edge:
        return cls(
            source=normalize_id(record["source"]),
            target=normalize_id(record["target"]),
        )

    def touches(self, node_id: str) -> bool:
        """True if either endpoint is ``node_id``."""
        return self.source == node_id or self.target == node_id


@dataclass(frozen=True)
class CbbEntry:
    """A Core Building Block: a named sub-capability with its definition."""

    cbb: str
    definition: str

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> CbbEntry:
        if not isinstance(record, Mapping):
            raise TypeError(f"CBB entry must be an object, got {type(record).__name__}")
        return cls(
            cbb=_text(record.get("cbb")),
            definition=_text(record.get("definition")),
        )
