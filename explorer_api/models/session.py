"""
    Session model - the explorer's interaction state as immutable values.

    A session is one ``SessionState`` value; every user command produces a
    new value instead of mutating the old one, so derived visuals can always
    be recomputed from a single consistent snapshot.
"""
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional

from ..types import EdgeType, SelectionState

DEFAULT_MIN_CONFIDENCE = 0.7
MAX_MIN_CONFIDENCE = 0.99


@dataclass(frozen=True)
class Viewport:
    """Pan / zoom transform: translate by (x, y), then scale."""
    x: float = 0.0
    y: float = 0.0
    scale: float = 1.0

    def __post_init__(self):
        if self.scale <= 0:
            raise ValueError(f"Viewport scale must be positive, got {self.scale}")

    def to_dict(self) -> Dict[str, float]:
        return {'x': self.x, 'y': self.y, 'scale': self.scale}


@dataclass(frozen=True)
class EdgeTypeFilter:
    """Which edge types are enabled. Immutable; toggling returns a copy."""
    activates: bool = True
    inhibits: bool = True
    associated_with: bool = True

    _FIELDS = {
        EdgeType.ACTIVATES: 'activates',
        EdgeType.INHIBITS: 'inhibits',
        EdgeType.ASSOCIATED_WITH: 'associated_with',
    }

    @classmethod
    def all_enabled(cls) -> 'EdgeTypeFilter':
        return cls(True, True, True)

    @classmethod
    def causal_only(cls) -> 'EdgeTypeFilter':
        return cls(activates=True, inhibits=True, associated_with=False)

    @classmethod
    def from_dict(cls, data: Dict[Any, bool]) -> 'EdgeTypeFilter':
        """Build from a {EdgeType or name: bool} mapping; missing types stay enabled."""
        values = {}
        for key, enabled in data.items():
            edge_type = key if isinstance(key, EdgeType) else EdgeType(str(key))
            values[cls._FIELDS[edge_type]] = bool(enabled)
        return cls(**values)

    def is_active(self, edge_type: EdgeType) -> bool:
        return getattr(self, self._FIELDS[edge_type])

    def __getitem__(self, edge_type: EdgeType) -> bool:
        return self.is_active(edge_type)

    def toggled(self, edge_type: EdgeType) -> 'EdgeTypeFilter':
        name = self._FIELDS[edge_type]
        return replace(self, **{name: not getattr(self, name)})

    def as_dict(self) -> Dict[EdgeType, bool]:
        return {edge_type: self.is_active(edge_type) for edge_type in EdgeType}

    def to_dict(self) -> Dict[str, bool]:
        return {edge_type.value: enabled for edge_type, enabled in self.as_dict().items()}


@dataclass(frozen=True)
class SessionState:
    """
    Complete interaction state of one explorer session.

    Attributes:
        viewport:          Current pan / zoom transform.
        selected_node_id:  Selected node, mutually exclusive with an edge.
        selected_edge_id:  Selected edge, mutually exclusive with a node.
        hovered_node_id:   Transient hover, independent of selection.
        min_confidence:    Edge confidence threshold, expected in [0, 0.99].
        active_types:      Enabled edge types.
        show_clusters:     Whether cluster boxes are drawn.
        search_query:      Text typed into the search box.
    """
    viewport: Viewport = field(default_factory=Viewport)
    selected_node_id: Optional[str] = None
    selected_edge_id: Optional[str] = None
    hovered_node_id: Optional[str] = None
    min_confidence: float = DEFAULT_MIN_CONFIDENCE
    active_types: EdgeTypeFilter = field(default_factory=EdgeTypeFilter.all_enabled)
    show_clusters: bool = True
    search_query: str = ""

    def __post_init__(self):
        if self.selected_node_id is not None and self.selected_edge_id is not None:
            raise ValueError(
                "A session cannot select node "
                f"'{self.selected_node_id}' and edge '{self.selected_edge_id}' at once")

    @property
    def selection_state(self) -> SelectionState:
        if self.selected_node_id is not None:
            return SelectionState.NODE_SELECTED
        if self.selected_edge_id is not None:
            return SelectionState.EDGE_SELECTED
        return SelectionState.NONE

    @property
    def has_selection(self) -> bool:
        return self.selection_state is not SelectionState.NONE

    def to_dict(self) -> Dict[str, Any]:
        return {
            'viewport': self.viewport.to_dict(),
            'selectedNodeId': self.selected_node_id,
            'selectedEdgeId': self.selected_edge_id,
            'hoveredNodeId': self.hovered_node_id,
            'minConfidence': self.min_confidence,
            'activeTypes': self.active_types.to_dict(),
            'showClusters': self.show_clusters,
            'searchQuery': self.search_query,
        }


@dataclass(frozen=True)
class ViewSnapshot:
    """The part of a session a saved view restores."""
    viewport: Viewport = field(default_factory=Viewport)
    selected_node_id: Optional[str] = None
    selected_edge_id: Optional[str] = None
    min_confidence: float = DEFAULT_MIN_CONFIDENCE
    active_types: EdgeTypeFilter = field(default_factory=EdgeTypeFilter.all_enabled)
    show_clusters: bool = True

    @classmethod
    def of(cls, state: SessionState) -> 'ViewSnapshot':
        # Every field is itself immutable, so copying references is a deep copy
        return cls(
            viewport=state.viewport,
            selected_node_id=state.selected_node_id,
            selected_edge_id=state.selected_edge_id,
            min_confidence=state.min_confidence,
            active_types=state.active_types,
            show_clusters=state.show_clusters,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'viewport': self.viewport.to_dict(),
            'selectedNodeId': self.selected_node_id,
            'selectedEdgeId': self.selected_edge_id,
            'minConfidence': self.min_confidence,
            'activeTypes': self.active_types.to_dict(),
            'showClusters': self.show_clusters,
        }


@dataclass(frozen=True)
class SavedView:
    """A named bookmark of a ``ViewSnapshot``."""
    id: str
    name: str
    timestamp: str
    snapshot: ViewSnapshot

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'timestamp': self.timestamp,
            'state': self.snapshot.to_dict(),
        }


@dataclass(frozen=True)
class SaveIntent:
    """First half of a two-step save: the snapshot and a suggested name."""
    suggested_name: str
    snapshot: ViewSnapshot
