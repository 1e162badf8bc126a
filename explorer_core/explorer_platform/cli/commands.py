"""
    CLI Commands — concrete command implementations.

    Design Pattern: Command
    ───────────────────────
    Each command encapsulates one explorer interaction as an object with
    ``execute(workspace) → CommandResult``. Commands never mutate the
    session in place; the workspace swaps in a new ``SessionState``.

    Supported commands:
    ───────────────────
        select node <id>  |  select edge <id>
        clear
        hover <id>  |  hover none
        toggle <ACTIVATES|INHIBITS|ASSOCIATED_WITH>
        confidence <value>
        causal
        clusters
        search <text>
        focus <id>
        zoom <id>
        reset
        save [<name>]
        load <view_id>
        delete <view_id>
        views
        info [node|edge <id>]
        list [nodes|edges|clusters]
        help
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from explorer_api.models.session import MAX_MIN_CONFIDENCE, SessionState
from explorer_api.types import EdgeType

from ..workspace import Workspace

logger = logging.getLogger(__name__)


# ── Result wrapper ───────────────────────────────────────────────

@dataclass
class CommandResult:
    """
    Value object returned by every command execution.

    Attributes:
        success:  Whether the command completed without error.
        message:  Human-readable output.
        state:    The session state after the command.
        data:     Optional structured data for programmatic consumers.
    """
    success: bool
    message: str
    state: Optional[SessionState] = None
    data: Optional[Dict[str, Any]] = field(default_factory=dict)


# ── Abstract base ────────────────────────────────────────────────

class Command(ABC):
    """
    Abstract base for all CLI commands.

    Design Pattern: Command
    """

    @abstractmethod
    def execute(self, workspace: Workspace) -> CommandResult:
        """Execute the command against the given workspace."""
        ...


def _not_found(kind: str, entity_id: str, workspace: Workspace) -> CommandResult:
    return CommandResult(False, f"{kind} '{entity_id}' not found.", workspace.state)


# ═════════════════════════════════════════════════════════════════
#  SELECTION COMMANDS
# ═════════════════════════════════════════════════════════════════

class SelectNodeCommand(Command):
    """
    Syntax:
        select node <id>
    """

    def __init__(self, node_id: str):
        self._node_id = node_id

    def execute(self, workspace: Workspace) -> CommandResult:
        node = workspace.store.get_node(self._node_id)
        if node is None:
            return _not_found("Node", self._node_id, workspace)
        state = workspace.select_node(self._node_id)
        related = workspace.store.neighbors(self._node_id, workspace.visible_edges())
        return CommandResult(
            True,
            f"Selected node '{node.label}' ({len(related)} related node(s)).",
            state,
            data={'related': [n.id for n in related]},
        )


class SelectEdgeCommand(Command):
    """
    Syntax:
        select edge <id>
    """

    def __init__(self, edge_id: str):
        self._edge_id = edge_id

    def execute(self, workspace: Workspace) -> CommandResult:
        edge = workspace.store.get_edge(self._edge_id)
        if edge is None:
            return _not_found("Edge", self._edge_id, workspace)
        state = workspace.select_edge(self._edge_id)
        return CommandResult(True, f"Selected edge {edge}.", state)


class ClearSelectionCommand(Command):
    """
    Syntax:
        clear
    """

    def execute(self, workspace: Workspace) -> CommandResult:
        return CommandResult(True, "Selection cleared.", workspace.clear_selection())


class HoverCommand(Command):
    """
    Syntax:
        hover <id>
        hover none
    """

    def __init__(self, node_id: Optional[str]):
        self._node_id = node_id

    def execute(self, workspace: Workspace) -> CommandResult:
        if self._node_id is None:
            return CommandResult(True, "Hover cleared.", workspace.set_hover(None))
        if not workspace.store.has_node(self._node_id):
            return _not_found("Node", self._node_id, workspace)
        return CommandResult(True, f"Hovering '{self._node_id}'.",
                             workspace.set_hover(self._node_id))


# ═════════════════════════════════════════════════════════════════
#  FILTER COMMANDS
# ═════════════════════════════════════════════════════════════════

class ToggleTypeCommand(Command):
    """
    Syntax:
        toggle ACTIVATES
    """

    def __init__(self, edge_type: EdgeType):
        self._edge_type = edge_type

    def execute(self, workspace: Workspace) -> CommandResult:
        state = workspace.toggle_type(self._edge_type)
        enabled = state.active_types.is_active(self._edge_type)
        return CommandResult(
            True,
            f"{self._edge_type.value} {'shown' if enabled else 'hidden'}: "
            f"{len(workspace.visible_edges())} edge(s) visible.",
            state,
        )


class ConfidenceCommand(Command):
    """
    Set the minimum confidence. Values are clamped into [0, 0.99].

    Syntax:
        confidence 0.9
    """

    def __init__(self, value: float):
        self._value = min(max(value, 0.0), MAX_MIN_CONFIDENCE)

    def execute(self, workspace: Workspace) -> CommandResult:
        state = workspace.set_min_confidence(self._value)
        return CommandResult(
            True,
            f"Minimum confidence {self._value:.2f}: "
            f"{len(workspace.visible_edges())} edge(s) visible.",
            state,
        )


class CausalOnlyCommand(Command):
    """
    Syntax:
        causal
    """

    def execute(self, workspace: Workspace) -> CommandResult:
        state = workspace.apply_causal_only()
        return CommandResult(
            True,
            f"Causal edges only: {len(workspace.visible_edges())} edge(s) visible.",
            state,
        )


class ToggleClustersCommand(Command):
    """
    Syntax:
        clusters
    """

    def execute(self, workspace: Workspace) -> CommandResult:
        state = workspace.toggle_clusters()
        return CommandResult(
            True, f"Clusters {'shown' if state.show_clusters else 'hidden'}.", state)


# ═════════════════════════════════════════════════════════════════
#  SEARCH / VIEWPORT COMMANDS
# ═════════════════════════════════════════════════════════════════

class SearchCommand(Command):
    """
    Type into the search box and list the suggestions.

    Syntax:
        search kras
    """

    def __init__(self, query: str):
        self._query = query

    def execute(self, workspace: Workspace) -> CommandResult:
        state = workspace.set_search_query(self._query)
        matches = workspace.search_suggestions()
        lines = [f"Search '{self._query}': {len(matches)} match(es)."]
        lines.extend(f"  [{n.id}] {n.label} ({n.type.value})" for n in matches)
        return CommandResult(True, "\n".join(lines), state,
                             data={'matches': [n.id for n in matches]})


class FocusCommand(Command):
    """
    Pick a search result: select, clear the search box and zoom in.

    Syntax:
        focus <id>
    """

    def __init__(self, node_id: str):
        self._node_id = node_id

    def execute(self, workspace: Workspace) -> CommandResult:
        if not workspace.store.has_node(self._node_id):
            return _not_found("Node", self._node_id, workspace)
        state = workspace.focus_search_result(self._node_id)
        return CommandResult(True, f"Focused '{self._node_id}'.", state)


class ZoomCommand(Command):
    """
    Syntax:
        zoom <id>
    """

    def __init__(self, node_id: str):
        self._node_id = node_id

    def execute(self, workspace: Workspace) -> CommandResult:
        if not workspace.store.has_node(self._node_id):
            return _not_found("Node", self._node_id, workspace)
        state = workspace.zoom_to_node(self._node_id)
        vp = state.viewport
        return CommandResult(
            True,
            f"Zoomed to '{self._node_id}' (x={vp.x:g}, y={vp.y:g}, scale={vp.scale:g}).",
            state,
            data={'viewport': vp.to_dict()},
        )


class ResetCommand(Command):
    """
    Default viewport and no selection.

    Syntax:
        reset
    """

    def execute(self, workspace: Workspace) -> CommandResult:
        return CommandResult(True, "View reset.", workspace.reset())


# ═════════════════════════════════════════════════════════════════
#  SAVED VIEW COMMANDS
# ═════════════════════════════════════════════════════════════════

class SaveViewCommand(Command):
    """
    Save the current view. Without a name the suggested one is used.

    Syntax:
        save 'RAF axis'
        save
    """

    def __init__(self, name: Optional[str] = None):
        self._name = name

    def execute(self, workspace: Workspace) -> CommandResult:
        intent = workspace.begin_save()
        view = workspace.confirm_save(self._name if self._name is not None
                                      else intent.suggested_name)
        if view is None:
            return CommandResult(False, "A view needs a non-blank name.", workspace.state)
        return CommandResult(True, f"Saved view '{view.name}' as {view.id}.",
                             workspace.state, data={'view': view.to_dict()})


class LoadViewCommand(Command):
    """
    Syntax:
        load <view_id>
    """

    def __init__(self, view_id: str):
        self._view_id = view_id

    def execute(self, workspace: Workspace) -> CommandResult:
        view = workspace.bookmarks.get(self._view_id)
        if view is None:
            return _not_found("View", self._view_id, workspace)
        return CommandResult(True, f"Loaded view '{view.name}'.",
                             workspace.load_view(self._view_id))


class DeleteViewCommand(Command):
    """
    Syntax:
        delete <view_id>
    """

    def __init__(self, view_id: str):
        self._view_id = view_id

    def execute(self, workspace: Workspace) -> CommandResult:
        if workspace.delete_view(self._view_id):
            return CommandResult(True, f"View '{self._view_id}' deleted.", workspace.state)
        return CommandResult(False, f"View '{self._view_id}' cannot be deleted.",
                             workspace.state)


class ViewsCommand(Command):
    """
    Syntax:
        views
    """

    def execute(self, workspace: Workspace) -> CommandResult:
        views = workspace.list_views()
        lines = [f"── Saved views ({len(views)}) ──"]
        lines.extend(f"  [{v.id}] {v.name}  ({v.timestamp})" for v in views)
        return CommandResult(True, "\n".join(lines), workspace.state,
                             data={'views': [v.to_dict() for v in views]})


# ═════════════════════════════════════════════════════════════════
#  INFORMATIONAL COMMANDS (no state change)
# ═════════════════════════════════════════════════════════════════

class InfoCommand(Command):
    """
    Display details about a node, an edge or the current selection.

    Syntax:
        info node <id>
        info edge <id>
        info   (selection details, or a graph summary)
    """

    def __init__(self, target_type: Optional[str] = None,
                 target_id: Optional[str] = None):
        self._target_type = target_type      # "node", "edge", or None
        self._target_id = target_id

    def execute(self, workspace: Workspace) -> CommandResult:
        store = workspace.store

        if self._target_type == "node":
            node = store.get_node(self._target_id)
            if node is None:
                return _not_found("Node", self._target_id, workspace)
            return CommandResult(True, self._describe_node(workspace, node.id),
                                 workspace.state, data=node.to_dict())

        if self._target_type == "edge":
            edge = store.get_edge(self._target_id)
            if edge is None:
                return _not_found("Edge", self._target_id, workspace)
            return CommandResult(True, self._describe_edge(edge), workspace.state,
                                 data=edge.to_dict())

        details = workspace.inspect()
        if details is None:
            msg = (
                f"Graph '{store.graph_id}': "
                f"{store.get_number_of_nodes()} node(s), "
                f"{store.get_number_of_edges()} edge(s), "
                f"{len(workspace.visible_edges())} visible, "
                f"{len(store.clusters)} cluster(s)"
            )
            return CommandResult(True, msg, workspace.state)

        if details['kind'] == 'node':
            msg = self._describe_node(workspace, details['id'])
        else:
            msg = self._describe_edge(store.get_edge(details['id']))
        return CommandResult(True, msg, workspace.state, data=details)

    @staticmethod
    def _describe_node(workspace: Workspace, node_id: str) -> str:
        node = workspace.store.get_node(node_id)
        lines = [f"Node '{node.id}': {node.label} ({node.type.value})"]
        if node.description:
            lines.append(f"  {node.description}")
        lines.extend(f"  {link.name}: {link.url}" for link in workspace.external_links(node.id))
        return "\n".join(lines)

    @staticmethod
    def _describe_edge(edge) -> str:
        prov = edge.provenance
        lines = [
            f"Edge '{edge.id}': {edge} [{edge.type.nature}]",
            f"  confidence = {edge.confidence:.0%}",
        ]
        if prov.paper_title:
            lines.append(f"  {prov.paper_title}, {prov.author} {prov.year}")
        if prov.url:
            lines.append(f"  {prov.url}")
        return "\n".join(lines)


class ListCommand(Command):
    """
    List nodes, edges (visible only) or clusters.

    Syntax:
        list nodes
        list edges
        list clusters
        list   (all three)
    """

    def __init__(self, target: Optional[str] = None):
        self._target = target

    def execute(self, workspace: Workspace) -> CommandResult:
        store = workspace.store
        lines: List[str] = []

        if self._target in (None, "nodes"):
            lines.append(f"── Nodes ({store.get_number_of_nodes()}) ──")
            for node in store.nodes:
                lines.append(f"  [{node.id}] {node.label} ({node.type.value})")

        if self._target in (None, "edges"):
            visible = workspace.visible_edges()
            lines.append(f"── Edges ({len(visible)} of {store.get_number_of_edges()}) ──")
            for edge in visible:
                lines.append(f"  [{edge.id}] {edge}  ({edge.confidence:.2f})")

        if self._target in (None, "clusters"):
            lines.append(f"── Clusters ({len(store.clusters)}) ──")
            for cluster in store.clusters:
                lines.append(f"  [{cluster.id}] {cluster.label}: {', '.join(cluster.node_ids)}")

        return CommandResult(True, "\n".join(lines), workspace.state)


class HelpCommand(Command):
    """
    Syntax:
        help
    """

    def execute(self, workspace: Workspace) -> CommandResult:
        help_text = """
Available commands:
───────────────────────────────────────────────────────
  select node <id>   |   select edge <id>
      Select a node or an edge (selecting one clears the other).

  clear
      Clear the selection.

  hover <id>   |   hover none
      Set or clear the hovered node.

  toggle <ACTIVATES|INHIBITS|ASSOCIATED_WITH>
      Show or hide an edge type.

  confidence <value>
      Minimum edge confidence, clamped into [0, 0.99].

  causal
      Show causal edge types only.

  clusters
      Show or hide cluster boxes.

  search <text>
      Search nodes by id, label or type.

  focus <id>
      Select a node, clear the search and zoom to it.

  zoom <id>
      Centre the view on a node.

  reset
      Default view, no selection.

  save [<name>]   |   load <view_id>   |   delete <view_id>   |   views
      Manage saved views.

  info [node|edge <id>]
      Details of an entity, the selection or the graph.

  list [nodes|edges|clusters]
      List graph entities (edges: visible only).

  help
      Show this help text.
───────────────────────────────────────────────────────
""".strip()
        return CommandResult(True, help_text, workspace.state)
