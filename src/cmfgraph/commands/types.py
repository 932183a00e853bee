"""Side-effect commands produced by interaction handlers.

Handlers never touch the drawing surface directly. They return commands
describing what should change, and a :class:`CommandDispatcher` applies
them in order.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, NamedTuple, Union

if TYPE_CHECKING:
    from cmfgraph.panels import PanelContent


class ElementKind(Enum):
    """Kinds of drawn elements that carry highlight classes.

    Values are the CSS classes of the drawn elements.
    """

    NODE = "node"
    EDGE = "link"
    LABEL = "label"


class HighlightClass(Enum):
    """Visual classification of an element while a node is focused."""

    HIGHLIGHTED = "highlighted"
    FADED = "faded"


class ElementKey(NamedTuple):
    """Identity of a drawn element.

    Nodes and labels are keyed by node id, edges by their position in the
    edge list (as a string).
    """

    kind: ElementKind
    key: str


class PanelId(Enum):
    """Detail panel mount points, in render order."""

    NODE_DETAILS = "nodeDetails"
    CBB_DETAILS = "cbbDetails"
    OBJECTIVES = "summaryDetails"
    ARTIFACTS = "extraPanel"


@dataclass(frozen=True)
class ViewTransform:
    """Pan/zoom transform: translate by (x, y), then scale by k."""

    x: float = 0.0
    y: float = 0.0
    k: float = 1.0

    def to_svg(self) -> str:
        return f"translate({self.x:g},{self.y:g}) scale({self.k:g})"

    def clamped(self, k_min: float, k_max: float) -> ViewTransform:
        """Same translation with the scale held inside [k_min, k_max]."""
        k = min(max(self.k, k_min), k_max)
        return self if k == self.k else ViewTransform(self.x, self.y, k)


@dataclass(frozen=True, eq=False)
class SetHighlight:
    """Assign a highlight class (or none) to every element.

    The mapping is total over all drawn elements, so applying it never
    depends on classes left behind by an earlier focus.
    """

    classes: Mapping[ElementKey, HighlightClass | None]

    def members(self, css_class: HighlightClass) -> frozenset[ElementKey]:
        return frozenset(key for key, value in self.classes.items() if value is css_class)

    @property
    def is_reset(self) -> bool:
        return all(value is None for value in self.classes.values())


@dataclass(frozen=True)
class RenderPanel:
    """Replace the contents of one detail panel."""

    panel: PanelId
    content: PanelContent


@dataclass(frozen=True)
class TransformView:
    """Animate the viewport to a new pan/zoom transform. Visual only."""

    transform: ViewTransform
    duration_ms: int = 750


@dataclass(frozen=True)
class Notify:
    """Show a user-visible notice."""

    message: str


Command = Union[SetHighlight, RenderPanel, TransformView, Notify]
