"""Tests for highlight projection."""

from cmfgraph import DataTables, HighlightProjector, connected_ids
from cmfgraph.commands import ElementKey, ElementKind, HighlightClass
from cmfgraph.highlight import element_keys

HL = HighlightClass.HIGHLIGHTED
FADED = HighlightClass.FADED


def _ids(keys, kind):
    return {key.key for key in keys if key.kind is kind}


class TestConnectedIds:
    def test_includes_self_and_neighbors(self, tables):
        assert connected_ids(tables, "2") == frozenset({"1", "2", "3"})

    def test_isolated_node(self, tables):
        assert connected_ids(tables, "4") == frozenset({"4"})

    def test_self_loop(self):
        tables = DataTables.from_records(nodes=[{"id": "a"}], links=[{"source": "a", "target": "a"}])
        assert connected_ids(tables, "a") == frozenset({"a"})


class TestElementKeys:
    def test_nodes_edges_labels(self, tables):
        keys = element_keys(tables)
        assert len(keys) == 4 + 2 + 4
        assert keys[0] == ElementKey(ElementKind.NODE, "1")
        assert ElementKey(ElementKind.EDGE, "1") in keys
        assert keys[-1] == ElementKey(ElementKind.LABEL, "4")


class TestProject:
    def test_assignment_is_total(self, tables):
        projection = HighlightProjector(tables).project("1")
        assert set(projection.classes) == set(element_keys(tables))
        assert all(value in (HL, FADED) for value in projection.classes.values())

    def test_focus_on_leaf(self, tables):
        projection = HighlightProjector(tables).project("1")
        highlighted = projection.members(HL)
        assert _ids(highlighted, ElementKind.NODE) == {"1", "2"}
        assert _ids(highlighted, ElementKind.LABEL) == {"1", "2"}
        assert _ids(highlighted, ElementKind.EDGE) == {"0"}
        assert _ids(projection.members(FADED), ElementKind.NODE) == {"3", "4"}

    def test_focus_on_hub(self, tables):
        projection = HighlightProjector(tables).project("2")
        highlighted = projection.members(HL)
        assert _ids(highlighted, ElementKind.NODE) == {"1", "2", "3"}
        assert _ids(highlighted, ElementKind.EDGE) == {"0", "1"}

    def test_edge_between_neighbors_is_faded(self):
        # a-b, a-c, b-c: focus a, edge b-c is between neighbors but not incident
        tables = DataTables.from_records(
            nodes=[{"id": "a"}, {"id": "b"}, {"id": "c"}],
            links=[
                {"source": "a", "target": "b"},
                {"source": "a", "target": "c"},
                {"source": "b", "target": "c"},
            ],
        )
        projection = HighlightProjector(tables).project("a")
        assert projection.classes[ElementKey(ElementKind.EDGE, "2")] is FADED
        assert _ids(projection.members(HL), ElementKind.NODE) == {"a", "b", "c"}

    def test_isolated_focus_still_highlighted(self, tables):
        projection = HighlightProjector(tables).project("4")
        assert _ids(projection.members(HL), ElementKind.NODE) == {"4"}
        assert _ids(projection.members(HL), ElementKind.EDGE) == set()

    def test_not_a_reset(self, tables):
        assert not HighlightProjector(tables).project("1").is_reset


class TestReset:
    def test_clears_every_element(self, tables):
        reset = HighlightProjector(tables).reset()
        assert reset.is_reset
        assert set(reset.classes) == set(element_keys(tables))
        assert reset.members(HL) == frozenset()
