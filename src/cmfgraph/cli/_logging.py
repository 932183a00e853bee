"""Logging setup for the CLI. The library itself never configures handlers."""

from __future__ import annotations

import logging
from typing import Annotated

import typer


def configure_logging(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log debug output to stderr")] = False,
):
    """Explore IT-CMF capability graphs from the terminal."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
