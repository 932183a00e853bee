"""Load the dashboard's JSON sources into :class:`DataTables`.

All five sources are read concurrently and collected as a unit. A failure
in any one of them aborts the whole load with a single ``DataLoadError``;
callers never see partially built tables.
"""

from __future__ import annotations

import asyncio
import json
import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Any

from cmfgraph.exceptions import DataLoadError
from cmfgraph.tables import DataTables

logger = logging.getLogger(__name__)

# Source name -> file name inside the data directory
SOURCES: dict[str, str] = {
    "nodes": "nodes.json",
    "links": "links.json",
    "cbblinks": "cbblinks.json",
    "objectives": "objectives_grouped.json",
    "artifacts": "artifacts_grouped.json",
}

REQUIRED_SOURCES = frozenset({"nodes", "links"})


def _read_json(path: Path, source: str) -> list[Any]:
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise DataLoadError(source, f"cannot read {path}: {e.strerror or e}") from e
    except json.JSONDecodeError as e:
        raise DataLoadError(source, f"invalid JSON in {path}: {e.msg} (line {e.lineno})") from e
    except UnicodeDecodeError as e:
        raise DataLoadError(source, f"{path} is not valid UTF-8 (byte {e.start})") from e

    if not isinstance(data, list):
        raise DataLoadError(source, f"expected a JSON array in {path}, got {type(data).__name__}")
    if source in REQUIRED_SOURCES and not data:
        raise DataLoadError(source, f"{path} contains no records")
    return data


async def load_records_async(data_dir: str | Path) -> dict[str, list[Any]]:
    """Read every source concurrently and return the raw record lists.

    Raises:
        DataLoadError: On the first source that fails to load.
    """
    directory = Path(data_dir)
    names = list(SOURCES)
    results = await asyncio.gather(
        *(asyncio.to_thread(_read_json, directory / SOURCES[name], name) for name in names)
    )
    return dict(zip(names, results))


def load_records(data_dir: str | Path) -> dict[str, list[Any]]:
    """Thread-pool counterpart of :func:`load_records_async`.

    Never starts an event loop, so it is safe to call from notebooks and
    other code already running inside one.
    """
    directory = Path(data_dir)
    names = list(SOURCES)
    with ThreadPoolExecutor(max_workers=len(names)) as pool:
        futures = [pool.submit(_read_json, directory / SOURCES[name], name) for name in names]
        for future in as_completed(futures):
            error = future.exception()
            if error is not None:
                for pending in futures:
                    pending.cancel()
                raise error
        return {name: future.result() for name, future in zip(names, futures)}


def _build_tables(records: dict[str, list[Any]]) -> DataTables:
    tables = DataTables.from_records(
        nodes=records["nodes"],
        links=records["links"],
        cbblinks=records["cbblinks"],
        objectives=records["objectives"],
        artifacts=records["artifacts"],
    )
    logger.info("Data loaded: %d nodes, %d links", len(tables.nodes), len(tables.edges))
    logger.info(
        "Objectives: %d, Artifacts: %d",
        len(records["objectives"]),
        len(records["artifacts"]),
    )
    return tables


async def load_tables_async(data_dir: str | Path) -> DataTables:
    """Load all sources from ``data_dir`` and build the lookup tables."""
    return _build_tables(await load_records_async(data_dir))


def load_tables(data_dir: str | Path) -> DataTables:
    """Synchronous :func:`load_tables_async`; reads in a thread pool."""
    return _build_tables(load_records(data_dir))
