"""Free-text node search."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

from cmfgraph.commands.types import ViewTransform

if TYPE_CHECKING:
    from cmfgraph.layout.adapter import LayoutSettings, Position
    from cmfgraph.model import Node
    from cmfgraph.tables import DataTables

CENTER_DURATION_MS = 750


def normalize_query(text: str) -> str:
    """Trim and lower-case raw search box text."""
    return text.strip().lower()


@dataclass(frozen=True)
class SearchMatch:
    query: str
    node: Node


@dataclass(frozen=True)
class SearchMiss:
    query: str

    @property
    def notice(self) -> str:
        return f'No matching node found for "{self.query}". Try a different name or short code.'


@dataclass(frozen=True)
class EmptyQuery:
    pass


SearchResult = Union[SearchMatch, SearchMiss, EmptyQuery]


class SearchResolver:
    """Maps a query to at most one node.

    Scans nodes in stored order and returns the first whose name or short
    name contains the query, case-insensitively. First match, not best
    match.

    Example:
        >>> resolver = SearchResolver(tables)
        >>> resolver.resolve("  ALPH ")
        SearchMatch(query='alph', node=Node(id='1', name='Alpha'))
    """

    def __init__(self, tables: DataTables) -> None:
        self._tables = tables

    def resolve(self, text: str) -> SearchResult:
        query = normalize_query(text)
        if not query:
            return EmptyQuery()
        for node in self._tables.nodes:
            if query in node.name.lower() or query in node.name_short.lower():
                return SearchMatch(query, node)
        return SearchMiss(query)


def center_on(position: Position, settings: LayoutSettings) -> ViewTransform:
    """Transform that puts ``position`` at the center of the viewport."""
    cx, cy = settings.center
    return ViewTransform(x=cx - position.x, y=cy - position.y, k=1.0)
