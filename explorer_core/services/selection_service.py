# explorer_core/services/selection_service.py
"""
    SelectionStateMachine — exclusive node / edge selection, transient hover,
    and the per-node visual classification derived from them.

    States:  NONE  ──select_node──▶  NODE_SELECTED
             NONE  ──select_edge──▶  EDGE_SELECTED
             NODE_SELECTED ◀──────▶ EDGE_SELECTED   (selecting one clears the other)
             any   ──clear──────▶   NONE

    Hover is orthogonal. It only affects node visuals while nothing is
    selected; an active selection always wins.
"""
import logging
from dataclasses import dataclass, replace
from typing import Dict, Iterable, List, Optional, Set

from explorer_api.models.edge import GraphEdge
from explorer_api.models.graph import GraphStore
from explorer_api.models.session import SessionState
from explorer_api.types import NodeEmphasis, SelectionState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NodeVisual:
    """
    Visual class of one node.

    Attributes:
        emphasis:    FOCUSED / RELATED / DIMMED / NORMAL.
        soft:        Derived from hover rather than from a selection.
        desaturated: Drawn in grayscale.
        blurred:     Drawn slightly out of focus (hover dimming only).
    """
    emphasis: NodeEmphasis
    soft: bool = False
    desaturated: bool = False
    blurred: bool = False

    def to_dict(self) -> Dict[str, object]:
        return {
            'emphasis': self.emphasis.value,
            'soft': self.soft,
            'desaturated': self.desaturated,
            'blurred': self.blurred,
        }


NORMAL = NodeVisual(NodeEmphasis.NORMAL)
FOCUSED = NodeVisual(NodeEmphasis.FOCUSED)
RELATED = NodeVisual(NodeEmphasis.RELATED)
DIMMED = NodeVisual(NodeEmphasis.DIMMED, desaturated=True)
HOVER_FOCUSED = NodeVisual(NodeEmphasis.FOCUSED, soft=True)
HOVER_RELATED = NodeVisual(NodeEmphasis.RELATED, soft=True)
HOVER_DIMMED = NodeVisual(NodeEmphasis.DIMMED, soft=True, desaturated=True, blurred=True)


class SelectionStateMachine:
    """Pure transitions over ``SessionState`` plus node classification."""

    # ── Transitions ──────────────────────────────────────────────

    def select_node(self, store: GraphStore, state: SessionState,
                    node_id: str) -> SessionState:
        """Select a node and drop any edge selection. Unknown ids are ignored."""
        if not store.has_node(node_id):
            logger.warning("select_node: unknown node '%s' ignored.", node_id)
            return state
        return replace(state, selected_node_id=node_id, selected_edge_id=None)

    def select_edge(self, store: GraphStore, state: SessionState,
                    edge_id: str) -> SessionState:
        """Select an edge and drop any node selection. Unknown ids are ignored."""
        if not store.has_edge(edge_id):
            logger.warning("select_edge: unknown edge '%s' ignored.", edge_id)
            return state
        return replace(state, selected_node_id=None, selected_edge_id=edge_id)

    def clear_selection(self, state: SessionState) -> SessionState:
        return replace(state, selected_node_id=None, selected_edge_id=None)

    def set_hover(self, store: GraphStore, state: SessionState,
                  node_id: Optional[str]) -> SessionState:
        """Set or clear (``None``) the hovered node."""
        if node_id is not None and not store.has_node(node_id):
            logger.warning("set_hover: unknown node '%s' ignored.", node_id)
            return state
        return replace(state, hovered_node_id=node_id)

    # ── Classification ───────────────────────────────────────────

    def classify_nodes(self, store: GraphStore, state: SessionState,
                       visible_edges: Iterable[GraphEdge]) -> Dict[str, NodeVisual]:
        """
        Visual class of every node, in store order.

        Args:
            store:         Graph being displayed.
            state:         Session snapshot to classify against.
            visible_edges: Edges that survive the current filter; only
                           these make two nodes neighbours.
        """
        visible_edges = list(visible_edges)
        selection = state.selection_state

        if selection is SelectionState.NODE_SELECTED:
            focus = state.selected_node_id
            related = self._neighbor_ids(store, focus, visible_edges)
            return {n.id: self._pick(n.id, focus, related, FOCUSED, RELATED, DIMMED)
                    for n in store.nodes}

        if selection is SelectionState.EDGE_SELECTED:
            edge = store.get_edge(state.selected_edge_id)
            related = {edge.source_id, edge.target_id} if edge is not None else set()
            return {n.id: RELATED if n.id in related else DIMMED for n in store.nodes}

        hovered = state.hovered_node_id
        if hovered is not None and store.has_node(hovered):
            related = self._neighbor_ids(store, hovered, visible_edges)
            return {n.id: self._pick(n.id, hovered, related,
                                     HOVER_FOCUSED, HOVER_RELATED, HOVER_DIMMED)
                    for n in store.nodes}

        return {n.id: NORMAL for n in store.nodes}

    def classify_node(self, store: GraphStore, state: SessionState,
                      visible_edges: Iterable[GraphEdge],
                      node_id: str) -> Optional[NodeVisual]:
        """Visual class of a single node, or None for an unknown id."""
        if not store.has_node(node_id):
            return None
        return self.classify_nodes(store, state, visible_edges)[node_id]

    # ── Helpers ──────────────────────────────────────────────────

    @staticmethod
    def _neighbor_ids(store: GraphStore, node_id: str,
                      visible_edges: List[GraphEdge]) -> Set[str]:
        return {n.id for n in store.neighbors(node_id, visible_edges)}

    @staticmethod
    def _pick(node_id: str, focus: str, related: Set[str],
              focused: NodeVisual, rel: NodeVisual, dimmed: NodeVisual) -> NodeVisual:
        if node_id == focus:
            return focused
        if node_id in related:
            return rel
        return dimmed
