# tests/core_test/test_selection_service.py

from dataclasses import replace

import pytest

from explorer_api.models.session import EdgeTypeFilter, SessionState
from explorer_api.types import NodeEmphasis, SelectionState
from explorer_core.services.filter_service import FilterService
from explorer_core.services.selection_service import SelectionStateMachine


@pytest.fixture
def machine():
    return SelectionStateMachine()


def _emphasis(machine, store, state):
    visible = FilterService().visible_for(store, state)
    return {nid: v.emphasis for nid, v in machine.classify_nodes(store, state, visible).items()}


F, R, D, N = (NodeEmphasis.FOCUSED, NodeEmphasis.RELATED,
              NodeEmphasis.DIMMED, NodeEmphasis.NORMAL)


# ── Transitions ──────────────────────────────────────────────────

class TestTransitions:

    def test_select_node(self, machine, store, state):
        new = machine.select_node(store, state, "n2")
        assert new.selected_node_id == "n2"
        assert new.selection_state is SelectionState.NODE_SELECTED
        assert state.selected_node_id is None

    def test_select_edge_clears_node(self, machine, store, state):
        new = machine.select_edge(store, machine.select_node(store, state, "n2"), "e2")
        assert (new.selected_node_id, new.selected_edge_id) == (None, "e2")

    def test_select_node_clears_edge(self, machine, store, state):
        new = machine.select_node(store, machine.select_edge(store, state, "e2"), "n5")
        assert (new.selected_node_id, new.selected_edge_id) == ("n5", None)

    def test_clear_selection(self, machine, store, state):
        new = machine.clear_selection(machine.select_node(store, state, "n2"))
        assert new.selection_state is SelectionState.NONE

    def test_unknown_ids_are_noops(self, machine, store, state, caplog):
        assert machine.select_node(store, state, "zz") is state
        assert machine.select_edge(store, state, "zz") is state
        assert machine.set_hover(store, state, "zz") is state
        assert "unknown" in caplog.text

    def test_hover_is_independent(self, machine, store, state):
        selected = machine.select_node(store, state, "n2")
        hovered = machine.set_hover(store, selected, "n7")
        assert hovered.selected_node_id == "n2"
        assert hovered.hovered_node_id == "n7"
        assert machine.set_hover(store, hovered, None).hovered_node_id is None

    def test_both_selected_is_rejected(self):
        with pytest.raises(ValueError):
            SessionState(selected_node_id="n1", selected_edge_id="e1")


# ── Classification ───────────────────────────────────────────────

class TestClassification:

    def test_idle_is_normal(self, machine, store, state):
        assert set(_emphasis(machine, store, state).values()) == {N}

    def test_node_selected(self, machine, store, state):
        selected = machine.select_node(store, state, "n2")
        assert _emphasis(machine, store, selected) == {
            "n1": R, "n2": F, "n3": R, "n4": R, "n5": D, "n6": D, "n7": D,
        }

    def test_neighbors_only_through_visible_edges(self, machine, store, state):
        # e3 (0.92) falls below the threshold, so PI3K is no longer related
        selected = replace(machine.select_node(store, state, "n2"), min_confidence=0.95)
        emphasis = _emphasis(machine, store, selected)
        assert emphasis["n3"] is R
        assert emphasis["n4"] is D

    def test_edge_selected(self, machine, store, state):
        selected = machine.select_edge(store, state, "e2")
        assert _emphasis(machine, store, selected) == {
            "n1": D, "n2": R, "n3": R, "n4": D, "n5": D, "n6": D, "n7": D,
        }

    def test_hidden_selected_edge_still_relates_endpoints(self, machine, store, state):
        selected = replace(machine.select_edge(store, state, "e6"),
                           active_types=EdgeTypeFilter.causal_only())
        emphasis = _emphasis(machine, store, selected)
        assert (emphasis["n6"], emphasis["n7"]) == (R, R)

    def test_hover_without_selection(self, machine, store, state):
        hovered = machine.set_hover(store, state, "n7")
        visible = FilterService().visible_for(store, hovered)
        visuals = machine.classify_nodes(store, hovered, visible)
        assert visuals["n7"].emphasis is F and visuals["n7"].soft
        assert visuals["n4"].emphasis is R and visuals["n6"].emphasis is R
        assert visuals["n1"].emphasis is D
        assert visuals["n1"].blurred and visuals["n1"].desaturated

    def test_selection_wins_over_hover(self, machine, store, state):
        both = machine.set_hover(store, machine.select_node(store, state, "n2"), "n7")
        emphasis = _emphasis(machine, store, both)
        assert emphasis["n2"] is F
        assert emphasis["n7"] is D

    def test_selection_dimming_is_not_blurred(self, machine, store, state):
        selected = machine.select_node(store, state, "n2")
        visible = FilterService().visible_for(store, selected)
        visual = machine.classify_node(store, selected, visible, "n7")
        assert visual.desaturated and not visual.blurred and not visual.soft

    def test_classify_unknown_node(self, machine, store, state):
        assert machine.classify_node(store, state, store.edges, "zz") is None

    def test_exactly_one_focused_node(self, machine, store, state):
        for node in store.nodes:
            selected = machine.select_node(store, state, node.id)
            values = list(_emphasis(machine, store, selected).values())
            assert values.count(F) == 1
