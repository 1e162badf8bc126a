"""
    ExplorerPlatform — the central orchestrator of the application.

    Design Patterns applied
    ───────────────────────
    • Singleton          – one platform instance per process
                           (via ``ExplorerPlatform.get_instance()``).
    • Strategy           – pluggable data sources and reference-link providers.
    • Repository         – ``_workspaces`` dict hides storage details.
    • Facade             – single entry-point for a front end; hides plugin
                           loading, workspace management, session commands
                           and serialization.
    • Observer (hooks)   – ``_listeners`` dict; views subscribe to state
                           changes instead of polling.

    Genericity
    ──────────
    • Uses ``PluginLoader[TPlugin]`` for type-safe plugin discovery.
    • Uses ``GraphQueryService[TQuery, TItem]`` in services.
    • ``GraphSerializer`` accepts any ``SerializationConfig`` strategy.
"""
import logging
from typing import Any, Callable, Dict, List, Optional

from explorer_api.models.graph import GraphStore
from explorer_api.models.session import SavedView, SaveIntent, SessionState
from explorer_api.plugins.base import DataSourcePlugin
from explorer_api.types import EdgeType

from .config import PlatformConfig, SerializationConfig
from .workspace import Workspace
from .plugin_loader import PluginLoader, create_data_source_loader

logger = logging.getLogger(__name__)


# ── Observer event types ─────────────────────────────────────────
EVENT_WORKSPACE_CREATED = "workspace_created"
EVENT_WORKSPACE_SWITCHED = "workspace_switched"
EVENT_WORKSPACE_REMOVED = "workspace_removed"
EVENT_STATE_CHANGED = "state_changed"
EVENT_VIEW_SAVED = "view_saved"
EVENT_VIEW_DELETED = "view_deleted"


class ExplorerPlatform:
    """
    Central orchestrator — Facade for the entire platform.

    Manages:
        • Plugin discovery and loading.
        • Workspace lifecycle (create, switch, remove, list).
        • Session commands on the active workspace.
        • Serialization with configurable fields.
        • Observer hooks for view synchronization.
    """

    _instance: Optional['ExplorerPlatform'] = None

    # ── Singleton ────────────────────────────────────────────────

    @classmethod
    def get_instance(cls, config: Optional[PlatformConfig] = None) -> 'ExplorerPlatform':
        """
        Return the singleton platform instance, creating it on first call.

        Args:
            config: Optional custom config (only used on first call).
        """
        if cls._instance is None:
            cls._instance = cls(config or PlatformConfig())
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Destroy the singleton (useful for testing)."""
        cls._instance = None

    # ── Constructor ──────────────────────────────────────────────

    def __init__(self, config: Optional[PlatformConfig] = None):
        """
        Initialize the platform. Prefer ``get_instance()`` for singleton access.

        Args:
            config: Platform configuration (viewport, serialization, defaults).
        """
        self._config: PlatformConfig = config or PlatformConfig()

        self._ds_loader: PluginLoader[DataSourcePlugin] = create_data_source_loader()

        # Workspace repository
        self._workspaces: Dict[str, Workspace] = {}
        self._active_workspace_id: Optional[str] = None

        # Imported here to avoid circular imports
        from explorer_core.services.serialization_service import GraphSerializer
        self._serializer = GraphSerializer(self._config.serialization)

        # Observer listeners: event_name → [callback, ...]
        self._listeners: Dict[str, List[Callable[..., Any]]] = {}

        logger.info("ExplorerPlatform initialized.")

    # ── Configuration ────────────────────────────────────────────

    @property
    def config(self) -> PlatformConfig:
        return self._config

    @property
    def serialization_config(self) -> SerializationConfig:
        return self._config.serialization

    @serialization_config.setter
    def serialization_config(self, value: SerializationConfig) -> None:
        self._config.serialization = value
        self._serializer.config = value

    # ── Plugin discovery ─────────────────────────────────────────

    def get_data_source_plugins(self) -> Dict[str, DataSourcePlugin]:
        """Return all discovered data-source plugins {name: instance}."""
        return self._ds_loader.load_all()

    def get_data_source_names(self) -> List[str]:
        """Sorted list of installed data-source plugin names."""
        return self._ds_loader.get_names()

    def get_data_source(self, name: str) -> Optional[DataSourcePlugin]:
        return self._ds_loader.get(name)

    def register_data_source(self, name: str, plugin: DataSourcePlugin) -> None:
        """Register a data source that is not installed as an entry point."""
        self._ds_loader.register(name, plugin)
        logger.info("Registered data source '%s' (%s)", name, plugin.get_plugin_name())

    def reload_plugins(self) -> None:
        self._ds_loader.reload()
        logger.info("Plugins reloaded: %d data sources", len(self._ds_loader))

    # ── Graph loading ────────────────────────────────────────────

    def load_graph(self, file_path: str, plugin_name: Optional[str] = None,
                   workspace_name: Optional[str] = None) -> Workspace:
        """
        Load a graph from a data source and create a new workspace.

        Args:
            file_path:      Path / URI to load.
            plugin_name:    Entry-point name of the data-source plugin;
                            defaults to ``config.default_data_source``.
            workspace_name: Optional human-readable workspace name.

        Returns:
            The newly created Workspace.

        Raises:
            ValueError:          If the plugin is not found.
            DataSourceError:     If the plugin cannot read the file.
            GraphIntegrityError: If the loaded data is inconsistent.
        """
        name = plugin_name or self._config.default_data_source
        plugin = self._ds_loader.get(name) if name else None
        if plugin is None:
            raise ValueError(
                f"Data source plugin '{name}' not found. "
                f"Available: {self._ds_loader.get_names()}"
            )

        store = plugin.parse(file_path)
        ws = self.create_workspace(
            store,
            data_source=name,
            file_path=file_path,
            name=workspace_name,
        )
        logger.info("Graph loaded via '%s' from '%s' → workspace %s",
                    name, file_path, ws.workspace_id[:8])
        return ws

    # ── Workspace management ─────────────────────────────────────

    def create_workspace(
        self,
        store: GraphStore,
        data_source: str = "",
        file_path: str = "",
        name: Optional[str] = None,
    ) -> Workspace:
        """
        Create a workspace from an already-constructed store and activate it.
        """
        ws = Workspace(
            store,
            data_source=data_source,
            file_path=file_path,
            name=name,
            config=self._config,
        )
        self._workspaces[ws.workspace_id] = ws
        self._active_workspace_id = ws.workspace_id
        logger.info("Workspace %s created (%s).", ws.workspace_id[:8], ws.name)
        self._notify(EVENT_WORKSPACE_CREATED, workspace=ws)
        return ws

    def get_workspace(self, workspace_id: str) -> Optional[Workspace]:
        return self._workspaces.get(workspace_id)

    def get_active_workspace(self) -> Optional[Workspace]:
        if self._active_workspace_id is None:
            return None
        return self._workspaces.get(self._active_workspace_id)

    def set_active_workspace(self, workspace_id: str) -> Workspace:
        """
        Switch the active workspace.

        Raises:
            ValueError: If the workspace ID does not exist.
        """
        if workspace_id not in self._workspaces:
            raise ValueError(f"Workspace '{workspace_id}' not found.")
        self._active_workspace_id = workspace_id
        ws = self._workspaces[workspace_id]
        self._notify(EVENT_WORKSPACE_SWITCHED, workspace=ws)
        return ws

    def remove_workspace(self, workspace_id: str) -> None:
        if workspace_id not in self._workspaces:
            return
        del self._workspaces[workspace_id]
        if self._active_workspace_id == workspace_id:
            self._active_workspace_id = next(iter(self._workspaces), None)
        logger.info("Workspace %s removed.", workspace_id[:8])
        self._notify(EVENT_WORKSPACE_REMOVED, workspace_id=workspace_id)

    def list_workspaces(self) -> List[dict]:
        return [ws.to_dict() for ws in self._workspaces.values()]

    # ── Session commands on the active workspace ─────────────────

    def select_node(self, node_id: str, workspace_id: Optional[str] = None) -> SessionState:
        return self._run(workspace_id, lambda ws: ws.select_node(node_id))

    def select_edge(self, edge_id: str, workspace_id: Optional[str] = None) -> SessionState:
        return self._run(workspace_id, lambda ws: ws.select_edge(edge_id))

    def clear_selection(self, workspace_id: Optional[str] = None) -> SessionState:
        return self._run(workspace_id, lambda ws: ws.clear_selection())

    def set_hover(self, node_id: Optional[str],
                  workspace_id: Optional[str] = None) -> SessionState:
        return self._run(workspace_id, lambda ws: ws.set_hover(node_id))

    def toggle_type(self, edge_type: EdgeType,
                    workspace_id: Optional[str] = None) -> SessionState:
        return self._run(workspace_id, lambda ws: ws.toggle_type(edge_type))

    def apply_causal_only(self, workspace_id: Optional[str] = None) -> SessionState:
        return self._run(workspace_id, lambda ws: ws.apply_causal_only())

    def set_min_confidence(self, value: float,
                           workspace_id: Optional[str] = None) -> SessionState:
        return self._run(workspace_id, lambda ws: ws.set_min_confidence(value))

    def toggle_clusters(self, workspace_id: Optional[str] = None) -> SessionState:
        return self._run(workspace_id, lambda ws: ws.toggle_clusters())

    def set_search_query(self, text: str, workspace_id: Optional[str] = None) -> SessionState:
        return self._run(workspace_id, lambda ws: ws.set_search_query(text))

    def focus_search_result(self, node_id: str,
                            workspace_id: Optional[str] = None) -> SessionState:
        return self._run(workspace_id, lambda ws: ws.focus_search_result(node_id))

    def zoom_to_node(self, node_id: str, workspace_id: Optional[str] = None) -> SessionState:
        return self._run(workspace_id, lambda ws: ws.zoom_to_node(node_id))

    def reset_view(self, workspace_id: Optional[str] = None) -> SessionState:
        return self._run(workspace_id, lambda ws: ws.reset())

    def load_view(self, view_id: str, workspace_id: Optional[str] = None) -> SessionState:
        return self._run(workspace_id, lambda ws: ws.load_view(view_id))

    # ── Saved views ──────────────────────────────────────────────

    def save_view(self, name: Optional[str],
                  workspace_id: Optional[str] = None) -> Optional[SavedView]:
        ws = self._resolve_workspace(workspace_id)
        view = ws.save_view(name)
        if view is not None:
            self._notify(EVENT_VIEW_SAVED, workspace=ws, view=view)
        return view

    def begin_save(self, workspace_id: Optional[str] = None) -> SaveIntent:
        return self._resolve_workspace(workspace_id).begin_save()

    def confirm_save(self, name: Optional[str],
                     workspace_id: Optional[str] = None) -> Optional[SavedView]:
        ws = self._resolve_workspace(workspace_id)
        view = ws.confirm_save(name)
        if view is not None:
            self._notify(EVENT_VIEW_SAVED, workspace=ws, view=view)
        return view

    def cancel_save(self, workspace_id: Optional[str] = None) -> None:
        self._resolve_workspace(workspace_id).cancel_save()

    def delete_view(self, view_id: str, workspace_id: Optional[str] = None) -> bool:
        ws = self._resolve_workspace(workspace_id)
        removed = ws.delete_view(view_id)
        if removed:
            self._notify(EVENT_VIEW_DELETED, workspace=ws, view_id=view_id)
        return removed

    def list_views(self, workspace_id: Optional[str] = None) -> List[SavedView]:
        return self._resolve_workspace(workspace_id).list_views()

    # ── Serialization ────────────────────────────────────────────

    @property
    def serializer(self):
        """Access the graph serializer (configurable via ``serialization_config``)."""
        return self._serializer

    def serialize_graph(self, workspace_id: Optional[str] = None) -> dict:
        ws = self._resolve_workspace(workspace_id)
        return self._serializer.serialize(ws.store)

    def serialize_graph_json(self, workspace_id: Optional[str] = None) -> str:
        ws = self._resolve_workspace(workspace_id)
        return self._serializer.to_json(ws.store)

    def serialize_scene(self, workspace_id: Optional[str] = None) -> dict:
        """Render model of the (active or specified) workspace."""
        ws = self._resolve_workspace(workspace_id)
        return self._serializer.serialize_scene(ws)

    def deserialize_graph(self, data: dict) -> GraphStore:
        return self._serializer.deserialize(data)

    def deserialize_graph_json(self, json_str: str) -> GraphStore:
        return self._serializer.from_json(json_str)

    # ── Observer pattern ─────────────────────────────────────────

    def subscribe(self, event: str, callback: Callable[..., Any]) -> None:
        """
        Register a callback for a platform event.

        Events:
            - workspace_created
            - workspace_switched
            - workspace_removed
            - state_changed
            - view_saved
            - view_deleted
        """
        self._listeners.setdefault(event, []).append(callback)

    def unsubscribe(self, event: str, callback: Callable[..., Any]) -> None:
        listeners = self._listeners.get(event, [])
        if callback in listeners:
            listeners.remove(callback)

    def _notify(self, event: str, **kwargs: Any) -> None:
        """Fire all callbacks registered for the given event."""
        for cb in self._listeners.get(event, []):
            try:
                cb(**kwargs)
            except Exception as exc:
                logger.error("Observer callback failed for '%s': %s", event, exc)

    # ── Internal helpers ─────────────────────────────────────────

    def _run(self, workspace_id: Optional[str],
             command: Callable[[Workspace], SessionState]) -> SessionState:
        """Apply a session command and notify observers if the state changed."""
        ws = self._resolve_workspace(workspace_id)
        before = ws.state
        after = command(ws)
        if after != before:
            self._notify(EVENT_STATE_CHANGED, workspace=ws, previous=before, state=after)
        return after

    def _resolve_workspace(self, workspace_id: Optional[str] = None) -> Workspace:
        """
        Return the requested workspace or the active one.

        Raises:
            RuntimeError: If no workspace can be resolved.
        """
        wid = workspace_id or self._active_workspace_id
        if wid is None:
            raise RuntimeError("No active workspace. Load a graph first.")
        ws = self._workspaces.get(wid)
        if ws is None:
            raise RuntimeError(f"Workspace '{wid}' not found.")
        return ws

    def __repr__(self) -> str:
        return (
            f"ExplorerPlatform(workspaces={len(self._workspaces)}, "
            f"data_sources={len(self._ds_loader)})"
        )
