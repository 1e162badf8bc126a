"""
Causal Graph Explorer API — immutable models and plugin contracts.
"""
from .types import NodeType, EdgeType, SelectionState, NodeEmphasis
from .exceptions import GraphIntegrityError, DataSourceError
from .models.node import GraphNode, Position
from .models.edge import GraphEdge, Provenance
from .models.cluster import GraphCluster, ClusterBounds
from .models.graph import GraphStore
from .models.session import (
    Viewport,
    EdgeTypeFilter,
    SessionState,
    ViewSnapshot,
    SavedView,
    SaveIntent,
)
from .plugins.base import DataSourcePlugin, ReferenceLink, ReferenceLinkProvider

__all__ = [
    'NodeType',
    'EdgeType',
    'SelectionState',
    'NodeEmphasis',
    'GraphIntegrityError',
    'DataSourceError',
    'GraphNode',
    'Position',
    'GraphEdge',
    'Provenance',
    'GraphCluster',
    'ClusterBounds',
    'GraphStore',
    'Viewport',
    'EdgeTypeFilter',
    'SessionState',
    'ViewSnapshot',
    'SavedView',
    'SaveIntent',
    'DataSourcePlugin',
    'ReferenceLink',
    'ReferenceLinkProvider',
]
