# tests/cli_test/test_cli.py
"""
CLI tests — commands, command processor, parsing, edge cases.
"""
import pytest

from explorer_api.models.session import SessionState, Viewport
from explorer_api.types import EdgeType, SelectionState

from explorer_core.explorer_platform.cli.commands import (
    CommandResult,
    ConfidenceCommand,
    HoverCommand,
    InfoCommand,
    ListCommand,
    SaveViewCommand,
    SearchCommand,
    SelectNodeCommand,
    ToggleTypeCommand,
)
from explorer_core.explorer_platform.cli.command_processor import CommandProcessor


@pytest.fixture
def processor():
    return CommandProcessor()


@pytest.fixture
def run(processor, workspace):
    """Execute one CLI line against the shared workspace."""
    def _run(text: str) -> CommandResult:
        return processor.process(text, workspace)
    return _run


# ═════════════════════════════════════════════════════════════════
#  CommandResult
# ═════════════════════════════════════════════════════════════════

class TestCommandResult:

    def test_default_fields(self):
        r = CommandResult(True, "ok")
        assert r.success is True
        assert r.message == "ok"
        assert r.state is None
        assert r.data == {}

    def test_with_state_and_data(self):
        state = SessionState()
        r = CommandResult(False, "fail", state, {"key": 1})
        assert r.state is state
        assert r.data == {"key": 1}


# ═════════════════════════════════════════════════════════════════
#  COMMANDS (direct execution)
# ═════════════════════════════════════════════════════════════════

class TestSelectionCommands:

    def test_select_node_reports_related(self, workspace):
        r = SelectNodeCommand("n2").execute(workspace)
        assert r.success
        assert r.state.selected_node_id == "n2"
        assert r.data['related'] == ["n1", "n3", "n4"]

    def test_select_unknown_node(self, workspace):
        r = SelectNodeCommand("zz").execute(workspace)
        assert not r.success
        assert "not found" in r.message
        assert r.state == SessionState()

    def test_hover_and_clear(self, workspace):
        assert HoverCommand("n7").execute(workspace).state.hovered_node_id == "n7"
        assert HoverCommand(None).execute(workspace).state.hovered_node_id is None


class TestFilterCommands:

    def test_toggle_type(self, workspace):
        r = ToggleTypeCommand(EdgeType.INHIBITS).execute(workspace)
        assert "hidden" in r.message
        assert not r.state.active_types.is_active(EdgeType.INHIBITS)

    @pytest.mark.parametrize("value,expected", [
        (0.5, 0.5),
        (1.0, 0.99),
        (-0.2, 0.0),
    ])
    def test_confidence_is_clamped(self, workspace, value, expected):
        r = ConfidenceCommand(value).execute(workspace)
        assert r.state.min_confidence == pytest.approx(expected)


class TestSearchCommand:

    def test_matches_in_data(self, workspace):
        r = SearchCommand("protein").execute(workspace)
        assert r.data['matches'] == ["n2", "n3", "n4", "n5", "n6"]
        assert r.state.search_query == "protein"

    def test_blank_query(self, workspace):
        assert SearchCommand("").execute(workspace).data['matches'] == []


class TestSaveViewCommand:

    def test_suggested_name_used(self, workspace):
        r = SaveViewCommand().execute(workspace)
        assert r.success
        assert r.data['view']['name'] == "View 2"

    def test_blank_name_fails(self, workspace):
        r = SaveViewCommand("   ").execute(workspace)
        assert not r.success
        assert len(workspace.list_views()) == 1
        assert workspace.pending_save is None


class TestInfoAndList:

    def test_info_summary(self, workspace):
        r = InfoCommand().execute(workspace)
        assert "7 node(s)" in r.message
        assert "3 cluster(s)" in r.message

    def test_info_selection(self, workspace):
        workspace.select_edge("e1")
        r = InfoCommand().execute(workspace)
        assert r.data['kind'] == "edge"
        assert "99%" in r.message
        assert "PMC6858556" in r.message

    def test_info_node_links(self, workspace):
        r = InfoCommand("node", "n1").execute(workspace)
        assert "PubChem" in r.message

    def test_list_edges_visible_only(self, workspace):
        workspace.apply_causal_only()
        r = ListCommand("edges").execute(workspace)
        assert "Edges (5 of 7)" in r.message
        assert "[e6]" not in r.message


# ═════════════════════════════════════════════════════════════════
#  COMMAND PROCESSOR
# ═════════════════════════════════════════════════════════════════

class TestProcessor:

    def test_empty_command(self, run):
        r = run("   ")
        assert not r.success
        assert "Empty command" in r.message

    def test_comment_only(self, run):
        assert not run("# nothing here").success

    def test_inline_comment(self, run):
        r = run("select node n2   # KRAS")
        assert r.success
        assert r.state.selected_node_id == "n2"

    def test_hash_inside_quotes_is_kept(self, run):
        r = run("save 'view #1'")
        assert r.data['view']['name'] == "view #1"

    def test_unknown_command(self, run):
        r = run("explode")
        assert not r.success
        assert r.message.startswith("Parse error")

    @pytest.mark.parametrize("raw", ["nan", "inf", "-inf", "NaN"])
    def test_non_finite_confidence_rejected(self, run, workspace, raw):
        r = run(f"confidence {raw}")
        assert not r.success
        assert "Not a number" in r.message
        assert workspace.state.min_confidence == 0.7
        assert len(workspace.visible_edges()) == 7

    def test_verbs_are_case_insensitive(self, run):
        assert run("SELECT NODE n3").state.selected_node_id == "n3"

    @pytest.mark.parametrize("text", [
        "select n2",
        "select vertex n2",
        "hover",
        "toggle BINDS",
        "confidence high",
        "zoom",
        "list things",
        "info node",
        "info cluster c1",
    ])
    def test_usage_errors(self, run, text):
        r = run(text)
        assert not r.success
        assert r.message.startswith("Parse error")


class TestSession:

    def test_explore_then_reset(self, run, workspace):
        run("select node n2")
        run("confidence 0.95")
        run("causal")
        assert [e.id for e in workspace.visible_edges()] == ["e1", "e2", "e4", "e5"]

        state = run("reset").state
        assert state.selection_state is SelectionState.NONE
        assert state.min_confidence == 0.95

    def test_toggle_lowercase_type(self, run):
        r = run("toggle associated_with")
        assert not r.state.active_types.is_active(EdgeType.ASSOCIATED_WITH)

    def test_search_then_focus(self, run):
        r = run("search 'MEK1/2'")
        assert r.data['matches'] == ["n5"]
        state = run("focus n5").state
        assert state.selected_node_id == "n5"
        assert state.search_query == ""
        assert state.viewport == Viewport(-900, -100, 2.0)

    def test_zoom_reports_viewport(self, run):
        r = run("zoom n2")
        assert r.data['viewport'] == {'x': -100, 'y': -300, 'scale': 2.0}

    def test_save_load_delete(self, run, workspace):
        run("select edge e6")
        saved = run("save 'ERK to tumour'")
        view_id = saved.data['view']['id']

        run("clear")
        run("clusters")
        state = run(f"load {view_id}").state
        assert state.selected_edge_id == "e6"
        assert state.show_clusters is True

        assert run(f"delete {view_id}").success
        assert not run("delete default").success
        assert not run(f"load {view_id}").success

    def test_views_listing(self, run):
        run("save First")
        r = run("views")
        assert [v['name'] for v in r.data['views']] == ["Default Overview", "First"]

    def test_hover_none(self, run):
        run("hover n4")
        assert run("hover none").state.hovered_node_id is None

    def test_help(self, run):
        r = run("help")
        assert r.success
        assert "select node <id>" in r.message

    def test_list_all(self, run):
        message = run("list").message
        assert "Nodes (7)" in message
        assert "Edges (7 of 7)" in message
        assert "Clusters (3)" in message
