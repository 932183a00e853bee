"""Detail panels for the focused node.

Four panels describe a node: its own fields, its CBBs, its objectives and
its artifacts. Each is rendered independently from the lookup tables into
a :class:`PanelContent`, which can be turned into HTML for the dashboard
or plain text for the terminal.
"""

from __future__ import annotations

import html
import logging
import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Union

from cmfgraph.commands.types import PanelId, RenderPanel

if TYPE_CHECKING:
    from cmfgraph.model import Node
    from cmfgraph.tables import DataTables

logger = logging.getLogger(__name__)

NOT_AVAILABLE = "N/A"

# Split before each enumeration marker such as "1)" or "12)"
_MARKER_SPLIT_RE = re.compile(r"(?<!\d)(?=\d+\))")
_LEADING_MARKER_RE = re.compile(r"^\d+\)\s*")


# =============================================================================
# Content blocks
# =============================================================================


@dataclass(frozen=True)
class FormattedDefinition:
    """Definition text split into intro prose and an ordered list."""

    intro: str = ""
    items: tuple[str, ...] = ()
    available: bool = True

    def to_html(self) -> str:
        if not self.available:
            return f"<p>{NOT_AVAILABLE}</p>"
        parts = []
        if self.intro:
            parts.append(f"<p>{html.escape(self.intro)}</p>")
        if self.items:
            items = "".join(f"<li>{html.escape(item)}</li>" for item in self.items)
            parts.append(f"<ol>{items}</ol>")
        return "".join(parts)

    def to_text(self) -> str:
        if not self.available:
            return NOT_AVAILABLE
        lines = [self.intro] if self.intro else []
        lines.extend(f"  {i}. {item}" for i, item in enumerate(self.items, start=1))
        return "\n".join(lines)


def format_definition(text: Any) -> FormattedDefinition:
    """Split free text with an embedded enumerated list.

    Text before the first ``<digits>)`` marker becomes the intro; each
    following fragment becomes one list item with its marker stripped and
    whitespace trimmed. Non-string or blank input is "not available".

    Examples:
        >>> format_definition("Intro text. 1) first point 2) second point")
        FormattedDefinition(intro='Intro text.', items=('first point', 'second point'), available=True)
        >>> format_definition(None).available
        False
    """
    if not isinstance(text, str) or not text.strip():
        return FormattedDefinition(available=False)

    intro, *fragments = _MARKER_SPLIT_RE.split(text)
    items = tuple(_LEADING_MARKER_RE.sub("", fragment).strip() for fragment in fragments)
    return FormattedDefinition(intro=intro.strip(), items=items)


@dataclass(frozen=True)
class Field:
    """A labelled value, e.g. ``Goal: ...``."""

    label: str
    value: str | FormattedDefinition


@dataclass(frozen=True)
class Item:
    """A list entry, optionally with a bold title above its text."""

    text: str
    css_class: str
    title: str | None = None


@dataclass(frozen=True)
class Message:
    """A single line of prose: placeholders and empty states."""

    text: str


Block = Union[Field, Item, Message]


@dataclass(frozen=True)
class PanelContent:
    """Title plus body blocks of one panel."""

    title: str
    blocks: tuple[Block, ...] = ()
    css_class: str | None = None

    def to_html(self) -> str:
        body = "".join(_block_html(block) for block in self.blocks)
        inner = f"<h2>{html.escape(self.title)}</h2>{body}"
        if self.css_class:
            return f'<div class="{self.css_class}">{inner}</div>'
        return inner

    def to_text(self) -> str:
        lines = [self.title, "─" * len(self.title)]
        lines.extend(_block_text(block) for block in self.blocks)
        return "\n".join(lines)


def _block_html(block: Block) -> str:
    if isinstance(block, Message):
        return f"<p>{html.escape(block.text)}</p>"
    if isinstance(block, Field):
        if isinstance(block.value, FormattedDefinition):
            value = block.value.to_html()
        else:
            value = html.escape(block.value)
        return f"<p><strong>{html.escape(block.label)}:</strong> {value}</p>"
    title = f"<strong>{html.escape(block.title)}</strong>" if block.title is not None else ""
    text = f"<p>{html.escape(block.text)}</p>" if block.title is not None else html.escape(block.text)
    return f'<div class="{block.css_class}">{title}{text}</div>'


def _block_text(block: Block) -> str:
    if isinstance(block, Message):
        return block.text
    if isinstance(block, Field):
        if isinstance(block.value, FormattedDefinition):
            return f"{block.label}:\n{block.value.to_text()}"
        return f"{block.label}: {block.value}"
    if block.title is not None:
        return f"• {block.title}\n  {block.text}"
    return f"• {block.text}"


# =============================================================================
# Panel controller
# =============================================================================

# Panel -> (title, placeholder shown while nothing is focused)
PLACEHOLDERS: dict[PanelId, tuple[str, str]] = {
    PanelId.NODE_DETAILS: ("Node Details", "Click a node to view details."),
    PanelId.CBB_DETAILS: ("CBB Details", "Click a node to view details."),
    PanelId.OBJECTIVES: ("Objectives", "Click a node to view objectives."),
    PanelId.ARTIFACTS: ("Artifacts", "Click a node to view artifacts."),
}

EMPTY_STATES: dict[PanelId, str] = {
    PanelId.NODE_DETAILS: "No data found for this node.",
    PanelId.CBB_DETAILS: "No CBB data found.",
    PanelId.OBJECTIVES: "No objectives listed for this node.",
    PanelId.ARTIFACTS: "No artifacts listed for this node.",
}


def _or_na(value: Any) -> str:
    if value is None or value == "":
        return NOT_AVAILABLE
    return str(value)


class DetailPanelController:
    """Renders the four detail panels for a node from the lookup tables.

    Rendering is a pure function of the node and the tables. Panels are
    independent: if building one fails, that panel shows its empty state
    and the others still render.
    """

    def __init__(self, tables: DataTables) -> None:
        self._tables = tables
        self._renderers: list[tuple[PanelId, Callable[[Node], PanelContent]]] = [
            (PanelId.NODE_DETAILS, self.node_details),
            (PanelId.CBB_DETAILS, self.cbb_details),
            (PanelId.OBJECTIVES, self.objectives),
            (PanelId.ARTIFACTS, self.artifacts),
        ]

    def node_details(self, node: Node) -> PanelContent:
        # The authoritative record wins; the clicked object is the fallback
        data = self._tables.node(node.id) or node
        return PanelContent(
            title=data.name,
            css_class="node-data",
            blocks=(
                Field("ID", data.id),
                Field("Group", _or_na(data.group)),
                Field("Overview", _or_na(data.overview)),
                Field("Goal", _or_na(data.goal)),
                Field("Definition", format_definition(data.definitions)),
            ),
        )

    def cbb_details(self, node: Node) -> PanelContent:
        entries = self._tables.cbbs_for(node.id)
        if not entries:
            return self.empty(PanelId.CBB_DETAILS)
        return PanelContent(
            title=PLACEHOLDERS[PanelId.CBB_DETAILS][0],
            blocks=tuple(Item(entry.definition, "cbb-item", title=entry.cbb) for entry in entries),
        )

    def objectives(self, node: Node) -> PanelContent:
        items = self._tables.objectives_for(node.id)
        if not items:
            return self.empty(PanelId.OBJECTIVES)
        return PanelContent(
            title=PLACEHOLDERS[PanelId.OBJECTIVES][0],
            blocks=tuple(Item(item, "obj-item") for item in items),
        )

    def artifacts(self, node: Node) -> PanelContent:
        items = self._tables.artifacts_for(node.id)
        if not items:
            return self.empty(PanelId.ARTIFACTS)
        return PanelContent(
            title=PLACEHOLDERS[PanelId.ARTIFACTS][0],
            blocks=tuple(Item(item, "artifact-item") for item in items),
        )

    @staticmethod
    def empty(panel: PanelId) -> PanelContent:
        return PanelContent(title=PLACEHOLDERS[panel][0], blocks=(Message(EMPTY_STATES[panel]),))

    @staticmethod
    def placeholder(panel: PanelId) -> PanelContent:
        title, text = PLACEHOLDERS[panel]
        return PanelContent(title=title, blocks=(Message(text),))

    def render(self, node: Node) -> list[RenderPanel]:
        """Render all four panels for ``node``, in mount order."""
        commands = []
        for panel, renderer in self._renderers:
            try:
                content = renderer(node)
            except Exception:
                logger.warning("Rendering %s for node %s failed", panel.value, node.id, exc_info=True)
                content = self.empty(panel)
            commands.append(RenderPanel(panel, content))
        return commands

    def placeholders(self) -> list[RenderPanel]:
        """Placeholder contents for all four panels."""
        return [RenderPanel(panel, self.placeholder(panel)) for panel, _ in self._renderers]
