"""
    Workspace — a loaded graph combined with its interaction state.

    Design Pattern: State (immutable value + pure transitions)
    ──────────────────────────────────────────────────────────
    The session is one ``SessionState`` value. Every command computes a
    new value through the engine services and replaces the old one as a
    whole; derived visuals are recomputed from that single snapshot.

    Each workspace holds:
        • store          – the immutable graph from the data source
        • state          – the current SessionState
        • bookmarks      – saved views (in-memory, per workspace)
        • pending save   – the SaveIntent of a save awaiting its name
"""
import uuid
import logging
from dataclasses import replace
from typing import Any, Dict, List, Optional, Tuple

from explorer_api.models.cluster import ClusterBounds, GraphCluster
from explorer_api.models.edge import GraphEdge
from explorer_api.models.graph import GraphStore
from explorer_api.models.node import GraphNode
from explorer_api.models.session import SavedView, SaveIntent, SessionState
from explorer_api.plugins.base import ReferenceLink, ReferenceLinkProvider
from explorer_api.types import EdgeType

from explorer_core.services.bookmark_service import ViewBookmarkManager
from explorer_core.services.cluster_service import ClusterBoundsCalculator
from explorer_core.services.filter_service import FilterService
from explorer_core.services.reference_links import DefaultReferenceLinks
from explorer_core.services.search_service import SearchService
from explorer_core.services.selection_service import NodeVisual, SelectionStateMachine
from explorer_core.services.style_service import EdgeStyle, EdgeStyler
from explorer_core.services.viewport_service import ViewportController

from .config import PlatformConfig

logger = logging.getLogger(__name__)


class Workspace:
    """
    Encapsulates one loaded graph and the session state driven over it.

    Attributes:
        workspace_id: Unique identifier.
        name:         Human-readable label.
        data_source:  Name of the data-source plugin that produced the graph.
        file_path:    Path / URI of the loaded data file.
    """

    def __init__(
        self,
        store: GraphStore,
        data_source: str = "",
        file_path: str = "",
        name: Optional[str] = None,
        config: Optional[PlatformConfig] = None,
        link_provider: Optional[ReferenceLinkProvider] = None,
        bookmarks: Optional[ViewBookmarkManager] = None,
    ):
        config = config or PlatformConfig()

        self.workspace_id: str = str(uuid.uuid4())
        self.name: str = name or f"Workspace-{self.workspace_id[:8]}"
        self.data_source: str = data_source
        self.file_path: str = file_path

        self._store: GraphStore = store
        self._state: SessionState = SessionState()
        self._pending_save: Optional[SaveIntent] = None

        # Services (injected by default; can be replaced for testing)
        self._filter_service = FilterService()
        self._search_service = SearchService()
        self._cluster_calculator = ClusterBoundsCalculator()
        self._selection = SelectionStateMachine()
        self._styler = EdgeStyler()
        self._viewport = ViewportController(
            config.viewport.canvas_width,
            config.viewport.canvas_height,
            config.viewport.focus_scale,
        )
        self._links: ReferenceLinkProvider = link_provider or DefaultReferenceLinks()
        self._bookmarks = bookmarks or ViewBookmarkManager(store, config.timestamp_format)

    # ── Properties ───────────────────────────────────────────────

    @property
    def store(self) -> GraphStore:
        return self._store

    @property
    def state(self) -> SessionState:
        """The current session snapshot (immutable)."""
        return self._state

    @property
    def bookmarks(self) -> ViewBookmarkManager:
        return self._bookmarks

    @property
    def pending_save(self) -> Optional[SaveIntent]:
        return self._pending_save

    def _commit(self, new_state: SessionState, command: str) -> SessionState:
        if new_state != self._state:
            logger.debug("Workspace %s: %s -> %s", self.workspace_id[:8], command,
                         new_state.selection_state.value)
        self._state = new_state
        return new_state

    # ── Derived views ────────────────────────────────────────────

    def visible_edges(self) -> List[GraphEdge]:
        """Edges passing the current confidence threshold and type toggles."""
        return self._filter_service.visible_for(self._store, self._state)

    def cluster_bounds(self, cluster_id: str) -> Optional[ClusterBounds]:
        cluster = self._store.get_cluster(cluster_id)
        if cluster is None:
            return None
        return self._cluster_calculator.bounds(self._store, cluster)

    def visible_cluster_bounds(self) -> List[Tuple[GraphCluster, ClusterBounds]]:
        return self._cluster_calculator.visible_bounds(self._store, self._state.show_clusters)

    def cluster_color(self, cluster_id: str) -> Optional[str]:
        cluster = self._store.get_cluster(cluster_id)
        return self._cluster_calculator.color_for(cluster) if cluster else None

    def classify_node(self, node_id: str) -> Optional[NodeVisual]:
        return self._selection.classify_node(
            self._store, self._state, self.visible_edges(), node_id)

    def classify_nodes(self) -> Dict[str, NodeVisual]:
        return self._selection.classify_nodes(self._store, self._state, self.visible_edges())

    def node_color(self, node_id: str) -> Optional[str]:
        node = self._store.get_node(node_id)
        return self._styler.node_color(node.type) if node else None

    def style_edge(self, edge_id: str) -> Optional[EdgeStyle]:
        edge = self._store.get_edge(edge_id)
        if edge is None:
            return None
        return self._styler.style(edge, self._state)

    def edge_styles(self) -> List[Tuple[GraphEdge, EdgeStyle]]:
        """Style of every visible edge, in store order."""
        state = self._state
        return [(edge, self._styler.style(edge, state)) for edge in self.visible_edges()]

    def search(self, query: Optional[str]) -> List[GraphNode]:
        return self._search_service.search(self._store, query)

    def search_suggestions(self) -> List[GraphNode]:
        """Search results for the text currently in the search box."""
        return self.search(self._state.search_query)

    def external_links(self, node_id: str) -> List[ReferenceLink]:
        node = self._store.get_node(node_id)
        if node is None:
            return []
        return self._links.links_for(node)

    def inspect(self) -> Optional[Dict[str, Any]]:
        """
        Details of the selected node or edge for an inspector panel.

        Returns:
            A dict with a 'kind' of "node" or "edge", or None when nothing
            is selected.
        """
        node = self._store.get_node(self._state.selected_node_id)
        if node is not None:
            details = node.to_dict()
            details.update({
                'kind': 'node',
                'color': self._styler.node_color(node.type),
                'links': [{'name': link.name, 'url': link.url}
                          for link in self._links.links_for(node)],
                'neighbors': [n.id for n in self._store.neighbors(node.id, self.visible_edges())],
            })
            return details

        edge = self._store.get_edge(self._state.selected_edge_id)
        if edge is not None:
            details = edge.to_dict()
            details.update({
                'kind': 'edge',
                'nature': edge.type.nature,
                'sourceLabel': self._store.get_node(edge.source_id).label,
                'targetLabel': self._store.get_node(edge.target_id).label,
                'confidencePercent': round(edge.confidence * 100),
                'provenanceUrl': edge.provenance.url,
            })
            return details

        return None

    # ── Selection / hover ────────────────────────────────────────

    def select_node(self, node_id: str) -> SessionState:
        return self._commit(
            self._selection.select_node(self._store, self._state, node_id), "select_node")

    def select_edge(self, edge_id: str) -> SessionState:
        return self._commit(
            self._selection.select_edge(self._store, self._state, edge_id), "select_edge")

    def clear_selection(self) -> SessionState:
        return self._commit(self._selection.clear_selection(self._state), "clear_selection")

    def set_hover(self, node_id: Optional[str]) -> SessionState:
        return self._commit(
            self._selection.set_hover(self._store, self._state, node_id), "set_hover")

    # ── Filters ──────────────────────────────────────────────────

    def toggle_type(self, edge_type: EdgeType) -> SessionState:
        types = self._state.active_types.toggled(edge_type)
        return self._commit(replace(self._state, active_types=types), "toggle_type")

    def apply_causal_only(self) -> SessionState:
        return self._commit(
            replace(self._state, active_types=self._filter_service.causal_only()),
            "apply_causal_only")

    def set_min_confidence(self, value: float) -> SessionState:
        """Set the confidence threshold. Callers keep ``value`` within [0, 0.99]."""
        return self._commit(replace(self._state, min_confidence=value), "set_min_confidence")

    def toggle_clusters(self) -> SessionState:
        return self._commit(
            replace(self._state, show_clusters=not self._state.show_clusters),
            "toggle_clusters")

    # ── Search ───────────────────────────────────────────────────

    def set_search_query(self, text: str) -> SessionState:
        return self._commit(replace(self._state, search_query=text), "set_search_query")

    def focus_search_result(self, node_id: str) -> SessionState:
        """Pick a search suggestion: select it, clear the query and zoom to it."""
        node = self._store.get_node(node_id)
        if node is None:
            logger.warning("Workspace %s: unknown node '%s' ignored.",
                           self.workspace_id[:8], node_id)
            return self._state

        state = self._selection.select_node(self._store, self._state, node_id)
        state = self._viewport.zoom_to_node(replace(state, search_query=""), node)
        return self._commit(state, "focus_search_result")

    # ── Viewport ─────────────────────────────────────────────────

    def zoom_to_node(self, node_id: str) -> SessionState:
        node = self._store.get_node(node_id)
        if node is None:
            logger.warning("Workspace %s: cannot zoom to unknown node '%s'.",
                           self.workspace_id[:8], node_id)
            return self._state
        return self._commit(self._viewport.zoom_to_node(self._state, node), "zoom_to_node")

    def reset(self) -> SessionState:
        """Default viewport and no selection. Filters and hover are kept."""
        state = self._commit(self._viewport.reset(self._state), "reset")
        logger.info("Workspace %s: view reset.", self.workspace_id[:8])
        return state

    # ── Saved views ──────────────────────────────────────────────

    def save_view(self, name: Optional[str]) -> Optional[SavedView]:
        return self._bookmarks.save(name, self._state)

    def begin_save(self) -> SaveIntent:
        """Capture the current state; the name is supplied to ``confirm_save``."""
        self._pending_save = self._bookmarks.begin_save(self._state)
        return self._pending_save

    def confirm_save(self, name: Optional[str]) -> Optional[SavedView]:
        if self._pending_save is None:
            logger.warning("Workspace %s: no save in progress.", self.workspace_id[:8])
            return None
        intent, self._pending_save = self._pending_save, None
        return self._bookmarks.confirm_save(intent, name)

    def cancel_save(self) -> None:
        self._pending_save = None

    def load_view(self, view_id: str) -> SessionState:
        return self._commit(self._bookmarks.load(view_id, self._state), "load_view")

    def delete_view(self, view_id: str) -> bool:
        return self._bookmarks.delete(view_id)

    def list_views(self) -> List[SavedView]:
        return self._bookmarks.list_views()

    # ── Serialization helpers ────────────────────────────────────

    def to_dict(self) -> dict:
        """Summary metadata (used by the platform's workspace listing)."""
        return {
            'workspace_id': self.workspace_id,
            'name': self.name,
            'data_source': self.data_source,
            'file_path': self.file_path,
            'node_count': self._store.get_number_of_nodes(),
            'edge_count': self._store.get_number_of_edges(),
            'visible_edge_count': len(self.visible_edges()),
            'saved_views': len(self._bookmarks),
            'selection': self._state.selection_state.value,
        }

    def __repr__(self) -> str:
        return (
            f"Workspace(id={self.workspace_id[:8]}, name='{self.name}', "
            f"nodes={self._store.get_number_of_nodes()}, "
            f"edges={self._store.get_number_of_edges()})"
        )
