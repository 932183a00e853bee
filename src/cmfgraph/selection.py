"""Selection state machine: what, if anything, is focused.

Focus is the only piece of interaction state. Handlers are plain
functions of (event data, current focus, context) that return a
:class:`Transition`: the new focus plus the ordered side-effect commands
that bring highlight and panels in line with it. Nothing here touches a
drawing surface, so the whole machine runs headless.

Transitions:

    Idle        --click d-->          Focused(d)
    Focused(d)  --click d-->          Idle            (toggle off)
    Focused(a)  --click b-->          Focused(b)      (single step, no reset)
    Focused(*)  --background-->       Idle
    Idle        --background-->       Idle            (no-op)
    any         --search hit m-->     Focused(m)      (reset, then focus, then center)
    any         --search miss-->      unchanged       (notice only)
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Union

from cmfgraph.commands.types import Command, Notify, TransformView
from cmfgraph.highlight import HighlightProjector
from cmfgraph.layout.adapter import LayoutSettings
from cmfgraph.panels import DetailPanelController
from cmfgraph.search import (
    CENTER_DURATION_MS,
    SearchMatch,
    SearchMiss,
    SearchResolver,
    center_on,
)

if TYPE_CHECKING:
    from cmfgraph.layout.adapter import Position
    from cmfgraph.model import Node
    from cmfgraph.tables import DataTables

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Focus:
    """Zero or one focused node."""

    node: Node | None = None

    @property
    def idle(self) -> bool:
        return self.node is None

    @property
    def node_id(self) -> str | None:
        return None if self.node is None else self.node.id

    def is_on(self, node: Node) -> bool:
        return self.node is not None and self.node.id == node.id


IDLE = Focus()


@dataclass(frozen=True)
class Transition:
    """Outcome of one user event."""

    focus: Focus
    commands: tuple[Command, ...] = ()


# =============================================================================
# Events
# =============================================================================


@dataclass(frozen=True)
class NodeClicked:
    node: Node


@dataclass(frozen=True)
class BackgroundClicked:
    pass


@dataclass(frozen=True)
class SearchEntered:
    text: str


Event = Union[NodeClicked, BackgroundClicked, SearchEntered]


# =============================================================================
# Handler context and pipelines
# =============================================================================


@dataclass(frozen=True)
class FocusContext:
    """Read-only collaborators the handlers derive commands from.

    Attributes:
        projector: Highlight projector over the tables
        panels: Detail panel controller over the tables
        resolver: Search resolver over the tables
        settings: Viewport settings used for search centering
        position_of: Latest position of a node; search centering is
            skipped when no position source is available
    """

    projector: HighlightProjector
    panels: DetailPanelController
    resolver: SearchResolver
    settings: LayoutSettings = field(default_factory=LayoutSettings)
    position_of: Callable[[str], Position] | None = None

    @classmethod
    def from_tables(
        cls,
        tables: DataTables,
        *,
        settings: LayoutSettings | None = None,
        position_of: Callable[[str], Position] | None = None,
    ) -> FocusContext:
        return cls(
            projector=HighlightProjector(tables),
            panels=DetailPanelController(tables),
            resolver=SearchResolver(tables),
            settings=settings or LayoutSettings(),
            position_of=position_of,
        )


def focus_commands(node: Node, ctx: FocusContext) -> list[Command]:
    """Highlight first, then the four panels in mount order."""
    return [ctx.projector.project(node.id), *ctx.panels.render(node)]


def reset_commands(ctx: FocusContext) -> list[Command]:
    """Panels back to placeholders, then every highlight class cleared."""
    return [*ctx.panels.placeholders(), ctx.projector.reset()]


# =============================================================================
# Handlers
# =============================================================================


def on_node_click(node: Node, focus: Focus, ctx: FocusContext) -> Transition:
    if focus.is_on(node):
        return Transition(IDLE, tuple(reset_commands(ctx)))
    # Switching focus overwrites the previous highlight in one step
    return Transition(Focus(node), tuple(focus_commands(node, ctx)))


def on_background_click(focus: Focus, ctx: FocusContext) -> Transition:
    if focus.idle:
        return Transition(focus)
    return Transition(IDLE, tuple(reset_commands(ctx)))


def on_search(text: str, focus: Focus, ctx: FocusContext) -> Transition:
    result = ctx.resolver.resolve(text)
    if isinstance(result, SearchMiss):
        return Transition(focus, (Notify(result.notice),))
    if not isinstance(result, SearchMatch):
        return Transition(focus)

    node = result.node
    # No toggle-off here: a hit always refocuses, even on the current node
    commands: list[Command] = [ctx.projector.reset(), *focus_commands(node, ctx)]
    if ctx.position_of is not None:
        transform = center_on(ctx.position_of(node.id), ctx.settings)
        commands.append(TransformView(transform, CENTER_DURATION_MS))
    return Transition(Focus(node), tuple(commands))


class SelectionStateMachine:
    """Owns the current :class:`Focus` and applies handler transitions.

    Other components read :attr:`focus`; only this object changes it.
    """

    def __init__(self, ctx: FocusContext) -> None:
        self._ctx = ctx
        self._focus = IDLE

    @classmethod
    def from_tables(cls, tables: DataTables, **kwargs) -> SelectionStateMachine:
        return cls(FocusContext.from_tables(tables, **kwargs))

    @property
    def focus(self) -> Focus:
        return self._focus

    @property
    def context(self) -> FocusContext:
        return self._ctx

    def handle(self, event: Event) -> Transition:
        """Apply one event and return the transition taken."""
        if isinstance(event, NodeClicked):
            transition = on_node_click(event.node, self._focus, self._ctx)
        elif isinstance(event, BackgroundClicked):
            transition = on_background_click(self._focus, self._ctx)
        elif isinstance(event, SearchEntered):
            transition = on_search(event.text, self._focus, self._ctx)
        else:
            raise TypeError(f"Unsupported event: {type(event).__name__}")

        if transition.focus != self._focus:
            logger.debug("Focus %s -> %s", self._focus.node_id, transition.focus.node_id)
        self._focus = transition.focus
        return transition

    def click_node(self, node: Node) -> Transition:
        return self.handle(NodeClicked(node))

    def click_background(self) -> Transition:
        return self.handle(BackgroundClicked())

    def search(self, text: str) -> Transition:
        return self.handle(SearchEntered(text))

    def initial_commands(self) -> list[Command]:
        """Commands that bring a fresh surface to the idle baseline."""
        return reset_commands(self._ctx)
