"""Side-effect commands and the dispatcher that applies them."""

from cmfgraph.commands.dispatcher import CommandDispatcher
from cmfgraph.commands.processor import CommandProcessor, TypedCommandProcessor
from cmfgraph.commands.types import (
    Command,
    ElementKey,
    ElementKind,
    HighlightClass,
    Notify,
    PanelId,
    RenderPanel,
    SetHighlight,
    TransformView,
    ViewTransform,
)

__all__ = [
    "Command",
    "CommandDispatcher",
    "CommandProcessor",
    "ElementKey",
    "ElementKind",
    "HighlightClass",
    "Notify",
    "PanelId",
    "RenderPanel",
    "SetHighlight",
    "TransformView",
    "TypedCommandProcessor",
    "ViewTransform",
]
