"""Shared fixtures: a small capability graph and its data directory."""

from __future__ import annotations

import json

import pytest

from cmfgraph import Dashboard, DataTables, RecordingSurface

NODES = [
    {
        "id": 1,
        "name": "Alpha",
        "name_short": "ALP",
        "group": "strategy",
        "overview": "Sets direction",
        "goal": "Align IT with the business",
        "definitions": "Intro text. 1) first point 2) second point",
    },
    {"id": "2", "name": "Alphabet", "name_short": "ABC", "group": "strategy"},
    {"id": 3.0, "name": "Beta Core", "name_short": "BC", "group": "operations"},
    {"id": 4, "name": "Isolated", "group": None},
]

LINKS = [
    {"source": 1, "target": "2"},
    {"source": "2", "target": 3},
]

CBBLINKS = [
    {
        "id": 1,
        "cbbs": [
            {"cbb": "CBB A1", "definition": "First block"},
            {"cbb": "CBB A2", "definition": "Second block"},
        ],
    },
]

OBJECTIVES = [
    {"id": "1", "objectives": ["Reduce cost", "Improve agility"]},
    {"id": 3, "objectives": ["Stabilize operations"]},
]

ARTIFACTS = [
    {"id": 2, "artifacts": ["Roadmap"]},
]


@pytest.fixture
def records():
    return {
        "nodes": NODES,
        "links": LINKS,
        "cbblinks": CBBLINKS,
        "objectives": OBJECTIVES,
        "artifacts": ARTIFACTS,
    }


@pytest.fixture
def tables(records) -> DataTables:
    return DataTables.from_records(**records)


@pytest.fixture
def data_dir(tmp_path, records):
    """Directory holding the five JSON sources."""
    files = {
        "nodes.json": records["nodes"],
        "links.json": records["links"],
        "cbblinks.json": records["cbblinks"],
        "objectives_grouped.json": records["objectives"],
        "artifacts_grouped.json": records["artifacts"],
    }
    for name, payload in files.items():
        (tmp_path / name).write_text(json.dumps(payload), encoding="utf-8")
    return tmp_path


@pytest.fixture
def surface() -> RecordingSurface:
    return RecordingSurface()


@pytest.fixture
def dashboard(tables, surface) -> Dashboard:
    return Dashboard(tables, surface=surface)
