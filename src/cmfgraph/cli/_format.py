"""Output helpers shared by the CLI commands.

Commands either print aligned plain-text tables or, with ``--json``, a
versioned envelope that scripts can rely on.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

# Bump on breaking changes to the JSON structure
SCHEMA_VERSION = 1

MAX_LINES = 100


def json_envelope(command: str, data: Any) -> dict[str, Any]:
    """Wrap command output with schema version and timestamp."""
    return {
        "schema_version": SCHEMA_VERSION,
        "command": command,
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "data": data,
    }


def print_json(command: str, data: Any, output: str | None = None) -> None:
    """Emit the envelope on stdout, or save it to ``output``."""
    payload = json.dumps(json_envelope(command, data), indent=2, ensure_ascii=False, default=str)
    if not output:
        print(payload)
        return
    path = Path(output)
    path.write_text(payload, encoding="utf-8")
    print(f"Wrote {command} output to {path} ({path.stat().st_size / 1024:.1f}KB)")


def truncate(text: str, max_chars: int = 60) -> str:
    """Collapse whitespace and cut ``text`` to fit a table cell."""
    flat = " ".join(text.split())
    return flat if len(flat) <= max_chars else flat[: max_chars - 1] + "…"


def print_table(
    headers: Sequence[str],
    rows: Sequence[Sequence[str]],
    *,
    numeric: Sequence[str] = ("Nodes", "Count"),
    indent: int = 2,
) -> list[str]:
    """Lay out ``rows`` under ``headers`` in aligned columns.

    Columns named in ``numeric`` are right-aligned. Returns the lines
    instead of printing them.
    """
    if not rows:
        return []

    widths = [max(len(header), *(len(row[col]) for row in rows)) for col, header in enumerate(headers)]
    right = [header in numeric for header in headers]

    def fmt(cells: Sequence[str]) -> str:
        padded = (
            cell.rjust(width) if align_right else cell.ljust(width)
            for cell, width, align_right in zip(cells, widths, right)
        )
        return " " * indent + "  ".join(padded)

    header_line = " " * indent + "  ".join(h.ljust(w) for h, w in zip(headers, widths))
    rule = " " * indent + "  ".join("─" * w for w in widths)
    return [header_line, rule, *(fmt(row) for row in rows)]


def print_lines(lines: list[str], max_lines: int = MAX_LINES) -> None:
    """Print up to ``max_lines`` lines, then say how many were left out."""
    if lines:
        print("\n".join(lines[:max_lines]))
    hidden = len(lines) - max_lines
    if hidden > 0:
        print(f"\n  # ... {hidden} more lines")
