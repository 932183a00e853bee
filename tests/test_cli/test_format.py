"""Tests for CLI formatting utilities."""

from cmfgraph.cli._format import json_envelope, print_lines, print_table, truncate


class TestTruncate:
    def test_short_value(self):
        assert truncate("hello") == "hello"

    def test_long_value(self):
        result = truncate("x" * 300, max_chars=50)
        assert len(result) == 50
        assert result.endswith("…")

    def test_collapses_whitespace(self):
        assert truncate("a\n  b") == "a b"


class TestJsonEnvelope:
    def test_structure(self):
        env = json_envelope("inspect", {"key": "value"})
        assert env["schema_version"] == 1
        assert env["command"] == "inspect"
        assert "generated_at" in env
        assert env["data"] == {"key": "value"}


class TestPrintTable:
    def test_empty_rows(self):
        assert print_table(["Group", "Nodes"], []) == []

    def test_alignment(self):
        lines = print_table(["Group", "Nodes"], [["strategy", "2"], ["ops", "10"]])
        assert lines[0] == "  Group     Nodes"
        assert lines[2] == "  strategy      2"
        assert lines[3] == "  ops          10"


class TestPrintLines:
    def test_truncates(self, capsys):
        print_lines([str(i) for i in range(5)], max_lines=2)
        out = capsys.readouterr().out
        assert out.startswith("0\n1\n")
        assert "3 more lines" in out
