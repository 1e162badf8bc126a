from .node import GraphNode, Position
from .edge import GraphEdge, Provenance
from .cluster import GraphCluster, ClusterBounds
from .graph import GraphStore
from .session import (
    Viewport,
    EdgeTypeFilter,
    SessionState,
    ViewSnapshot,
    SavedView,
    SaveIntent,
)
