"""Command dispatcher that fans out commands to processors."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from cmfgraph.commands.processor import CommandProcessor

if TYPE_CHECKING:
    from cmfgraph.commands.types import Command

logger = logging.getLogger(__name__)


class CommandDispatcher:
    """Applies commands, in order, to a list of processors.

    By default, dispatch is best-effort: a processor failing on one
    command never stops the remaining commands (so a broken panel mount
    cannot block the other panels). With ``strict=True``, exceptions
    propagate immediately.
    """

    def __init__(
        self,
        processors: list[CommandProcessor] | None = None,
        *,
        strict: bool = False,
    ) -> None:
        self._processors: list[CommandProcessor] = list(processors) if processors else []
        self._strict = strict

    @property
    def active(self) -> bool:
        """True if there is at least one registered processor."""
        return len(self._processors) > 0

    def add(self, processor: CommandProcessor) -> None:
        self._processors.append(processor)

    def emit(self, command: Command) -> bool:
        """Send ``command`` to every processor.

        Returns:
            True if every processor handled the command without raising.
        """
        ok = True
        for processor in self._processors:
            try:
                processor.on_command(command)
            except Exception:
                if self._strict:
                    raise
                ok = False
                logger.warning(
                    "CommandProcessor %s failed on %s",
                    processor,
                    type(command).__name__,
                    exc_info=True,
                )
        return ok

    def emit_all(self, commands: Iterable[Command]) -> int:
        """Send each command in order. Returns the number of failed commands."""
        failures = 0
        for command in commands:
            if not self.emit(command):
                failures += 1
        return failures
