"""Tests for the selection state machine."""

import pytest

from cmfgraph import IDLE, Focus, SelectionStateMachine
from cmfgraph.commands import (
    HighlightClass,
    Notify,
    PanelId,
    RenderPanel,
    SetHighlight,
    TransformView,
    ViewTransform,
)
from cmfgraph.layout import LayoutSettings, Position
from cmfgraph.selection import BackgroundClicked, NodeClicked, SearchEntered


@pytest.fixture
def machine(tables):
    return SelectionStateMachine.from_tables(tables)


@pytest.fixture
def centered_machine(tables):
    positions = {"1": Position(10, 20), "2": Position(30, 40), "3": Position(50, 60), "4": Position(0, 0)}
    return SelectionStateMachine.from_tables(
        tables,
        settings=LayoutSettings(width=200, height=100),
        position_of=positions.__getitem__,
    )


def _kinds(transition):
    return [type(c).__name__ for c in transition.commands]


def _highlights(transition):
    return [c for c in transition.commands if isinstance(c, SetHighlight)]


class TestFocus:
    def test_idle(self):
        assert IDLE.idle
        assert IDLE.node_id is None

    def test_is_on(self, tables):
        focus = Focus(tables.node("1"))
        assert focus.is_on(tables.node("1"))
        assert not focus.is_on(tables.node("2"))
        assert not IDLE.is_on(tables.node("1"))


class TestNodeClick:
    def test_click_focuses(self, machine, tables):
        transition = machine.click_node(tables.node("1"))
        assert machine.focus.node_id == "1"
        assert transition.focus.node_id == "1"
        assert _kinds(transition) == ["SetHighlight"] + ["RenderPanel"] * 4

    def test_highlight_before_panels(self, machine, tables):
        transition = machine.click_node(tables.node("1"))
        assert isinstance(transition.commands[0], SetHighlight)
        assert [c.panel for c in transition.commands[1:]] == list(PanelId)

    def test_second_click_toggles_off(self, machine, tables):
        machine.click_node(tables.node("1"))
        transition = machine.click_node(tables.node("1"))
        assert machine.focus == IDLE
        assert _kinds(transition) == ["RenderPanel"] * 4 + ["SetHighlight"]
        assert transition.commands[-1].is_reset

    def test_toggle_matches_by_id(self, machine, tables):
        from cmfgraph.model import Node

        machine.click_node(tables.node("1"))
        machine.click_node(Node("1", name="Alpha copy"))
        assert machine.focus.idle

    def test_switch_focus_is_single_step(self, machine, tables):
        machine.click_node(tables.node("1"))
        transition = machine.click_node(tables.node("3"))
        assert machine.focus.node_id == "3"
        highlights = _highlights(transition)
        # No intermediate reset: one total assignment
        assert len(highlights) == 1
        assert not highlights[0].is_reset

    def test_focus_consistent_with_highlight(self, machine, tables):
        transition = machine.click_node(tables.node("2"))
        highlighted = {k.key for k in transition.commands[0].members(HighlightClass.HIGHLIGHTED)}
        assert machine.focus.node_id in highlighted

    def test_panels_describe_focused_node(self, machine, tables):
        transition = machine.click_node(tables.node("2"))
        details = next(c for c in transition.commands if isinstance(c, RenderPanel) and c.panel is PanelId.NODE_DETAILS)
        assert details.content.title == "Alphabet"

    def test_idempotent_double_toggle(self, machine, tables):
        before = machine.focus
        machine.click_node(tables.node("2"))
        machine.click_node(tables.node("2"))
        assert machine.focus == before


class TestBackgroundClick:
    def test_noop_when_idle(self, machine):
        transition = machine.click_background()
        assert transition.focus == IDLE
        assert transition.commands == ()

    def test_resets_when_focused(self, machine, tables):
        machine.click_node(tables.node("1"))
        transition = machine.click_background()
        assert machine.focus.idle
        assert _kinds(transition) == ["RenderPanel"] * 4 + ["SetHighlight"]
        assert "Click a node" in transition.commands[0].content.to_text()


class TestSearch:
    def test_hit_focuses(self, machine):
        transition = machine.search("beta")
        assert machine.focus.node_id == "3"
        # Reset, then highlight, then four panels; no centering without positions
        assert _kinds(transition) == ["SetHighlight", "SetHighlight"] + ["RenderPanel"] * 4
        assert transition.commands[0].is_reset
        assert not transition.commands[1].is_reset

    def test_hit_centers_view(self, centered_machine):
        transition = centered_machine.search("alphabet")
        last = transition.commands[-1]
        assert isinstance(last, TransformView)
        assert last.transform == ViewTransform(100 - 30, 50 - 40, 1.0)
        assert last.duration_ms == 750

    def test_search_never_toggles_off(self, machine):
        machine.search("alpha")
        machine.search("alpha")
        assert machine.focus.node_id == "1"

    def test_search_after_click_same_node_stays_focused(self, machine, tables):
        machine.click_node(tables.node("1"))
        machine.search("ALP")
        assert machine.focus.node_id == "1"

    def test_miss_leaves_state_untouched(self, machine, tables):
        machine.click_node(tables.node("2"))
        transition = machine.search("nothing like it")
        assert machine.focus.node_id == "2"
        assert transition.commands == (Notify('No matching node found for "nothing like it". Try a different name or short code.'),)

    def test_miss_when_idle(self, machine):
        transition = machine.search("zzz")
        assert machine.focus.idle
        assert _kinds(transition) == ["Notify"]

    def test_empty_query_does_nothing(self, machine, tables):
        machine.click_node(tables.node("1"))
        transition = machine.search("   ")
        assert transition.commands == ()
        assert machine.focus.node_id == "1"


class TestHandle:
    def test_dispatches_events(self, machine, tables):
        machine.handle(NodeClicked(tables.node("1")))
        assert machine.focus.node_id == "1"
        machine.handle(BackgroundClicked())
        assert machine.focus.idle
        machine.handle(SearchEntered("beta"))
        assert machine.focus.node_id == "3"

    def test_unknown_event(self, machine):
        with pytest.raises(TypeError, match="Unsupported event: str"):
            machine.handle("click")

    def test_initial_commands_are_reset(self, machine):
        commands = machine.initial_commands()
        assert [type(c).__name__ for c in commands] == ["RenderPanel"] * 4 + ["SetHighlight"]
        assert commands[-1].is_reset
