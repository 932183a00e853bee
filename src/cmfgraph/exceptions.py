"""Exceptions for cmfgraph data loading and interaction."""

from __future__ import annotations


class DataLoadError(Exception):
    """A data source could not be loaded into lookup tables.

    Raised when any of the input sources fails to read or parse, has the
    wrong shape, is empty where records are required, or references a node
    that does not exist. Load failures are terminal: no partial tables or
    interactive state are produced.

    Attributes:
        source: Name of the failing source (e.g. "nodes", "links")
        reason: Short description of what went wrong
        message: Human-readable error message
    """

    def __init__(
        self,
        source: str,
        reason: str,
        message: str | None = None,
    ) -> None:
        self.source = source
        self.reason = reason
        self.message = message or self._default_message()
        super().__init__(self.message)

    def _default_message(self) -> str:
        return f"Failed to load '{self.source}': {self.reason}"


class UnknownNodeError(Exception):
    """A node id was requested that is not present in the node table.

    Attributes:
        node_id: The normalized id that could not be resolved
        message: Human-readable error message
    """

    def __init__(self, node_id: str, message: str | None = None) -> None:
        self.node_id = node_id
        self.message = message or f"Unknown node id: '{node_id}'"
        super().__init__(self.message)
