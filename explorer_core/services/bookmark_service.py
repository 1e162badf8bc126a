# explorer_core/services/bookmark_service.py
"""
    ViewBookmarkManager — named, in-memory snapshots of a session.

    Saving is a two-step command: ``begin_save`` captures the snapshot and
    proposes a name, ``confirm_save`` stores it under the chosen name.
    Dropping the intent cancels. ``save`` does both steps at once.

    The "default" entry is always present and cannot be deleted.
"""
import logging
import uuid
from dataclasses import replace
from datetime import datetime
from typing import Callable, List, Optional

from explorer_api.models.graph import GraphStore
from explorer_api.models.session import SavedView, SaveIntent, SessionState, ViewSnapshot

logger = logging.getLogger(__name__)

DEFAULT_VIEW_ID = "default"
DEFAULT_VIEW = SavedView(
    id=DEFAULT_VIEW_ID,
    name="Default Overview",
    timestamp="Preset",
    snapshot=ViewSnapshot(),
)


def _short_id() -> str:
    return uuid.uuid4().hex[:9]


class ViewBookmarkManager:
    """
    Ordered collection of ``SavedView`` entries for one workspace.

    Views live for the lifetime of the manager only.
    """

    def __init__(self, store: GraphStore, timestamp_format: str = "%H:%M",
                 id_factory: Optional[Callable[[], str]] = None,
                 clock: Optional[Callable[[], datetime]] = None):
        """
        Args:
            store:            Graph the views refer to; used to drop stale ids on load.
            timestamp_format: strftime format of the creation timestamp.
            id_factory:       Produces fresh view ids (tests inject a counter).
            clock:            Produces the creation time (tests inject a fixed one).
        """
        self._store = store
        self._timestamp_format = timestamp_format
        self._id_factory = id_factory or _short_id
        self._clock = clock or datetime.now
        self._views: List[SavedView] = [DEFAULT_VIEW]

    # ── Saving ───────────────────────────────────────────────────

    def begin_save(self, state: SessionState) -> SaveIntent:
        """Capture the state now and suggest "View <n+1>"."""
        return SaveIntent(
            suggested_name=f"View {len(self._views) + 1}",
            snapshot=ViewSnapshot.of(state),
        )

    def confirm_save(self, intent: SaveIntent, name: Optional[str]) -> Optional[SavedView]:
        """Store the intent's snapshot under ``name``. Blank names save nothing."""
        return self._append(name, intent.snapshot)

    def save(self, name: Optional[str], state: SessionState) -> Optional[SavedView]:
        """Single-step save of the current state."""
        return self._append(name, ViewSnapshot.of(state))

    def _append(self, name: Optional[str], snapshot: ViewSnapshot) -> Optional[SavedView]:
        if name is None or not name.strip():
            logger.warning("Blank view name; nothing saved.")
            return None

        view = SavedView(
            id=self._new_id(),
            name=name.strip(),
            timestamp=self._clock().strftime(self._timestamp_format),
            snapshot=snapshot,
        )
        self._views.append(view)
        logger.info("Saved view '%s' (%s).", view.name, view.id)
        return view

    def _new_id(self) -> str:
        view_id = self._id_factory()
        while self.get(view_id) is not None:
            view_id = self._id_factory()
        return view_id

    # ── Loading ──────────────────────────────────────────────────

    def load(self, view_id: str, state: SessionState) -> SessionState:
        """
        Apply a saved snapshot to ``state``.

        Hover and the search text are not part of a view and are kept.
        Selected ids that no longer resolve in the store are dropped.
        Unknown view ids leave ``state`` unchanged.
        """
        view = self.get(view_id)
        if view is None:
            logger.warning("Unknown view '%s'; state unchanged.", view_id)
            return state

        snap = view.snapshot
        node_id = snap.selected_node_id if self._store.has_node(snap.selected_node_id) else None
        edge_id = snap.selected_edge_id if self._store.has_edge(snap.selected_edge_id) else None

        logger.debug("Loading view '%s' (%s).", view.name, view.id)
        return replace(
            state,
            viewport=snap.viewport,
            selected_node_id=node_id,
            selected_edge_id=edge_id,
            min_confidence=snap.min_confidence,
            active_types=snap.active_types,
            show_clusters=snap.show_clusters,
        )

    # ── Housekeeping ─────────────────────────────────────────────

    def delete(self, view_id: str) -> bool:
        """Remove a view. The default view and unknown ids are left alone."""
        if view_id == DEFAULT_VIEW_ID:
            logger.debug("The default view cannot be deleted.")
            return False

        for index, view in enumerate(self._views):
            if view.id == view_id:
                del self._views[index]
                logger.info("Deleted view '%s' (%s).", view.name, view.id)
                return True

        logger.debug("Unknown view '%s'; nothing deleted.", view_id)
        return False

    def get(self, view_id: Optional[str]) -> Optional[SavedView]:
        for view in self._views:
            if view.id == view_id:
                return view
        return None

    def list_views(self) -> List[SavedView]:
        return list(self._views)

    def __len__(self) -> int:
        return len(self._views)
