"""
    Cluster model - a named visual grouping of nodes.
    Advisory only; clusters do not constrain edges.
"""
from dataclasses import dataclass
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class GraphCluster:
    id: str
    label: str
    node_ids: Tuple[str, ...]
    color_tag: str = "slate"

    def __post_init__(self):
        # Accept any iterable of ids but store an immutable tuple
        object.__setattr__(self, 'node_ids', tuple(self.node_ids))

    def __contains__(self, node_id: str) -> bool:
        return node_id in self.node_ids

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'label': self.label,
            'nodeIds': list(self.node_ids),
            'colorTag': self.color_tag,
        }


@dataclass(frozen=True)
class ClusterBounds:
    """Padded bounding rectangle of a cluster on the logical canvas."""
    x: float
    y: float
    width: float
    height: float

    def to_dict(self) -> Dict[str, float]:
        return {'x': self.x, 'y': self.y, 'width': self.width, 'height': self.height}
