"""Progress display for layout warm-up.

Uses a Rich progress bar on a TTY and plain milestone lines otherwise
(CI, piped output).
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from cmfgraph.layout.adapter import LayoutAdapter

# Percentages reported in non-TTY mode
_MILESTONES = (25, 50, 75, 100)


def _require_rich() -> None:
    """Raise a clear error if rich is not installed."""
    try:
        import rich  # noqa: F401
    except ImportError:
        raise ImportError(
            "The 'rich' package is required for progress bars. Install it with: pip install 'cmfgraph[progress]' or pip install rich"
        ) from None


def _is_tty() -> bool:
    """Check if stdout is a TTY."""
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def warm_up(
    layout: LayoutAdapter,
    ticks: int,
    *,
    force_mode: Literal["tty", "non-tty", "auto"] = "auto",
) -> int:
    """Run the layout for up to ``ticks`` frames while reporting progress.

    Returns:
        Number of frames that ticked before the layout settled.
    """
    tty = _is_tty() if force_mode == "auto" else force_mode == "tty"
    if ticks <= 0:
        return 0

    if tty:
        _require_rich()
        from rich.progress import BarColumn, MofNCompleteColumn, Progress, TextColumn, TimeElapsedColumn

        with Progress(
            TextColumn("{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            TimeElapsedColumn(),
            transient=True,
        ) as progress:
            task = progress.add_task("Settling layout", total=ticks)
            done = layout.warm_up(ticks, progress=lambda n: progress.update(task, completed=n))
        return done

    reported: set[int] = set()

    def report(n: int) -> None:
        percent = n * 100 // ticks
        for milestone in _MILESTONES:
            if percent >= milestone and milestone not in reported:
                reported.add(milestone)
                print(f"Settling layout: {milestone}% ({n}/{ticks})")

    done = layout.warm_up(ticks, progress=report)
    if done < ticks:
        print(f"Layout settled after {done} ticks")
    return done
