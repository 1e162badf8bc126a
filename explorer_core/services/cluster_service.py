# explorer_core/services/cluster_service.py
"""
    ClusterBoundsCalculator — padded bounding boxes around cluster members.
"""
from typing import List, Optional, Tuple

from explorer_api.models.cluster import ClusterBounds, GraphCluster
from explorer_api.models.graph import GraphStore

# Horizontal padding on each side; vertical padding reserves label space above
PADDING_X = 80
PADDING_Y = 50

CLUSTER_COLORS = {
    'emerald': '#10b981',
    'blue': '#3b82f6',
    'red': '#ef4444',
    'purple': '#a855f7',
}
DEFAULT_CLUSTER_COLOR = '#94a3b8'


class ClusterBoundsCalculator:
    """Geometry of cluster boxes. Node positions are fixed input data."""

    def bounds(self, store: GraphStore, cluster: GraphCluster) -> Optional[ClusterBounds]:
        """
        :param store: Store used to resolve member positions
        :param cluster: Cluster to measure
        :return: Padded rectangle, or None when no member resolves
        """
        members = store.cluster_members(cluster)
        if not members:
            return None

        xs = [node.x for node in members]
        ys = [node.y for node in members]
        min_x, max_x = min(xs), max(xs)
        min_y, max_y = min(ys), max(ys)

        return ClusterBounds(
            x=min_x - PADDING_X,
            y=min_y - PADDING_Y,
            width=(max_x - min_x) + 2 * PADDING_X,
            height=(max_y - min_y) + 2 * PADDING_Y,
        )

    def visible_bounds(self, store: GraphStore,
                       show_clusters: bool) -> List[Tuple[GraphCluster, ClusterBounds]]:
        """Clusters to draw with their bounds; empty while clusters are hidden."""
        if not show_clusters:
            return []
        result = []
        for cluster in store.clusters:
            box = self.bounds(store, cluster)
            if box is not None:
                result.append((cluster, box))
        return result

    @staticmethod
    def color_for(cluster: GraphCluster) -> str:
        return CLUSTER_COLORS.get(cluster.color_tag, DEFAULT_CLUSTER_COLOR)
