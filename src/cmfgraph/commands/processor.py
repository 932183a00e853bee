"""Command processor base classes."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cmfgraph.commands.types import (
        Command,
        Notify,
        RenderPanel,
        SetHighlight,
        TransformView,
    )


# Mapping from command class name to handler method name.
_COMMAND_METHOD_MAP: dict[str, str] = {
    "SetHighlight": "on_set_highlight",
    "RenderPanel": "on_render_panel",
    "TransformView": "on_transform_view",
    "Notify": "on_notify",
}


class CommandProcessor:
    """Base class for command consumers.

    Subclass and override ``on_command`` to receive all commands,
    or use ``TypedCommandProcessor`` for per-type dispatch.
    """

    def on_command(self, command: Command) -> None:
        """Called for every command. Override in subclasses."""


class TypedCommandProcessor(CommandProcessor):
    """Dispatches ``on_command`` to typed handler methods automatically.

    Override any of the ``on_*`` methods below to handle specific command
    types. Unhandled command types are silently ignored.
    """

    def on_command(self, command: Command) -> None:
        method_name = _COMMAND_METHOD_MAP.get(type(command).__name__)
        if method_name is not None:
            method = getattr(self, method_name, None)
            if method is not None:
                method(command)

    def on_set_highlight(self, command: SetHighlight) -> None: ...
    def on_render_panel(self, command: RenderPanel) -> None: ...
    def on_transform_view(self, command: TransformView) -> None: ...
    def on_notify(self, command: Notify) -> None: ...
