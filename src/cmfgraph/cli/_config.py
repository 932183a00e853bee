"""Defaults for the CLI from ``[tool.cmfgraph]`` in pyproject.toml.

Example::

    [tool.cmfgraph]
    data_dir = "data"     # relative to this pyproject.toml
    width = 1200
    height = 800
    ticks = 400
"""

from __future__ import annotations

import sys
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class CmfgraphConfig:
    """Data directory and viewport defaults for the CLI."""

    data_dir: Path | None = None
    width: float = 960.0
    height: float = 600.0
    ticks: int = 300

    @classmethod
    def from_section(cls, section: Mapping[str, Any], root: Path) -> CmfgraphConfig:
        """Build from a parsed ``[tool.cmfgraph]`` table located in ``root``."""
        data_dir = section.get("data_dir")
        return cls(
            data_dir=root / data_dir if data_dir else None,
            width=float(section.get("width", cls.width)),
            height=float(section.get("height", cls.height)),
            ticks=int(section.get("ticks", cls.ticks)),
        )


def find_pyproject(start: Path | None = None) -> Path | None:
    """Nearest pyproject.toml at or above ``start`` (default: cwd)."""
    here = (start or Path.cwd()).resolve()
    return next(
        (d / "pyproject.toml" for d in (here, *here.parents) if (d / "pyproject.toml").is_file()),
        None,
    )


def _parse_toml(path: Path) -> dict[str, Any] | None:
    if sys.version_info >= (3, 11):
        import tomllib
    else:
        try:
            import tomli as tomllib
        except ImportError:
            return None
    with open(path, "rb") as f:
        return tomllib.load(f)


def load_config(start: Path | None = None) -> CmfgraphConfig:
    """Read the CLI defaults, falling back to built-ins when unset.

    A relative ``data_dir`` resolves against the pyproject.toml location.
    """
    path = find_pyproject(start)
    data = _parse_toml(path) if path is not None else None
    section = (data or {}).get("tool", {}).get("cmfgraph")
    if not section:
        return CmfgraphConfig()
    return CmfgraphConfig.from_section(section, path.parent)
