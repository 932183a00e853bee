"""Tests for loading the JSON sources from a data directory."""

import asyncio
import json
import logging

import pytest

from cmfgraph import DataLoadError, load_tables, load_tables_async
from cmfgraph.loader import SOURCES, load_records, load_records_async


class TestLoadTables:
    def test_loads_all_sources(self, data_dir):
        tables = load_tables(data_dir)
        assert tables.summary() == {"nodes": 4, "edges": 2, "cbbs": 1, "objectives": 2, "artifacts": 1}

    def test_accepts_str_path(self, data_dir):
        assert len(load_tables(str(data_dir)).nodes) == 4

    def test_async_variant(self, data_dir):
        tables = asyncio.run(load_tables_async(data_dir))
        assert tables.neighbors("2") == frozenset({"1", "3"})

    def test_raw_records_keyed_by_source(self, data_dir):
        records = asyncio.run(load_records_async(data_dir))
        assert set(records) == set(SOURCES)
        assert records["artifacts"] == [{"id": 2, "artifacts": ["Roadmap"]}]

    def test_logs_counts(self, data_dir, caplog):
        with caplog.at_level(logging.INFO, logger="cmfgraph.loader"):
            load_tables(data_dir)
        assert "Data loaded: 4 nodes, 2 links" in caplog.text
        assert "Objectives: 2, Artifacts: 1" in caplog.text


class TestLoadFailures:
    """Any failing source aborts the whole load."""

    def test_missing_file(self, data_dir):
        (data_dir / "cbblinks.json").unlink()
        with pytest.raises(DataLoadError, match="cannot read") as exc_info:
            load_tables(data_dir)
        assert exc_info.value.source == "cbblinks"

    def test_invalid_json(self, data_dir):
        (data_dir / "links.json").write_text("[{", encoding="utf-8")
        with pytest.raises(DataLoadError, match="invalid JSON") as exc_info:
            load_tables(data_dir)
        assert exc_info.value.source == "links"

    def test_not_an_array(self, data_dir):
        (data_dir / "objectives_grouped.json").write_text(json.dumps({"id": 1}), encoding="utf-8")
        with pytest.raises(DataLoadError, match="expected a JSON array"):
            load_tables(data_dir)

    def test_empty_nodes(self, data_dir):
        (data_dir / "nodes.json").write_text("[]", encoding="utf-8")
        (data_dir / "links.json").write_text("[]", encoding="utf-8")
        with pytest.raises(DataLoadError, match="contains no records"):
            load_tables(data_dir)

    def test_empty_optional_source_is_fine(self, data_dir):
        (data_dir / "artifacts_grouped.json").write_text("[]", encoding="utf-8")
        assert load_tables(data_dir).artifacts_for(2) == ()

    def test_dangling_link(self, data_dir):
        links = [{"source": 1, "target": 99}]
        (data_dir / "links.json").write_text(json.dumps(links), encoding="utf-8")
        with pytest.raises(DataLoadError, match="unknown node '99'"):
            load_tables(data_dir)

    def test_missing_directory(self, tmp_path):
        with pytest.raises(DataLoadError):
            load_tables(tmp_path / "nope")

    def test_error_message_names_source(self, data_dir):
        (data_dir / "nodes.json").write_text("not json", encoding="utf-8")
        with pytest.raises(DataLoadError) as exc_info:
            load_tables(data_dir)
        assert str(exc_info.value).startswith("Failed to load 'nodes':")

    def test_invalid_utf8(self, data_dir):
        (data_dir / "artifacts_grouped.json").write_bytes(b'[{"id": 1, "artifacts": ["\xff\xfe"]}]')
        with pytest.raises(DataLoadError, match="not valid UTF-8") as exc_info:
            load_tables(data_dir)
        assert exc_info.value.source == "artifacts"

    def test_cbb_entry_not_an_object(self, data_dir):
        (data_dir / "cbblinks.json").write_text(json.dumps([{"id": 1, "cbbs": ["not an object"]}]), encoding="utf-8")
        with pytest.raises(DataLoadError, match="malformed 'cbbs' entry") as exc_info:
            load_tables(data_dir)
        assert exc_info.value.source == "cbblinks"

    def test_detail_field_not_a_list(self, data_dir):
        (data_dir / "objectives_grouped.json").write_text(
            json.dumps([{"id": 1, "objectives": "Reduce cost"}]), encoding="utf-8"
        )
        with pytest.raises(DataLoadError, match="'objectives' is not a list"):
            load_tables(data_dir)

    def test_async_variant_reports_same_error(self, data_dir):
        (data_dir / "cbblinks.json").write_text(json.dumps([{"id": 1, "cbbs": [3]}]), encoding="utf-8")
        with pytest.raises(DataLoadError, match="cbblinks"):
            asyncio.run(load_tables_async(data_dir))


class TestLoadInsideEventLoop:
    """The sync loader must work where an event loop is already running."""

    def test_load_tables_from_coroutine(self, data_dir):
        async def notebook_cell():
            return load_tables(data_dir)

        tables = asyncio.run(notebook_cell())
        assert len(tables.nodes) == 4

    def test_load_records_matches_async(self, data_dir):
        assert load_records(data_dir) == asyncio.run(load_records_async(data_dir))

    def test_failure_from_coroutine(self, data_dir):
        (data_dir / "links.json").unlink()

        async def notebook_cell():
            return load_tables(data_dir)

        with pytest.raises(DataLoadError, match="cannot read"):
            asyncio.run(notebook_cell())
