"""
    GraphStore - immutable repository of nodes, edges and clusters.
    Validates referential integrity once, at construction.
"""
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from ..exceptions import GraphIntegrityError
from .cluster import GraphCluster
from .edge import GraphEdge
from .node import GraphNode


class GraphStore:
    """
        Read-only store of one biomedical graph.
        Entities keep the order in which the data source supplied them;
        every query that returns several entities preserves that order.
    """

    def __init__(
            self,
            nodes: Iterable[GraphNode],
            edges: Iterable[GraphEdge] = (),
            clusters: Iterable[GraphCluster] = (),
            graph_id: str = "graph",
    ):
        """
        Build and validate the store.

        Args:
            nodes:    Graph nodes (ids must be unique)
            edges:    Edges whose endpoints reference existing node ids
            clusters: Non-empty groupings of existing node ids
            graph_id: Identifier of the graph (usually the source path)

        Raises:
            GraphIntegrityError: If any id is duplicated, any reference
                                 dangles, or a confidence is out of range.
        """
        self.graph_id = graph_id
        self._nodes: Tuple[GraphNode, ...] = tuple(nodes)
        self._edges: Tuple[GraphEdge, ...] = tuple(edges)
        self._clusters: Tuple[GraphCluster, ...] = tuple(clusters)

        self._node_index: Dict[str, GraphNode] = self._index(self._nodes, "Node")
        self._edge_index: Dict[str, GraphEdge] = self._index(self._edges, "Edge")
        self._cluster_index: Dict[str, GraphCluster] = self._index(self._clusters, "Cluster")

        # node_id -> [incident edges], built while validating endpoints
        self._adjacency_list: Dict[str, List[GraphEdge]] = {n.id: [] for n in self._nodes}
        self._order: Dict[str, int] = {n.id: i for i, n in enumerate(self._nodes)}

        for edge in self._edges:
            self._validate_edge(edge)
            self._adjacency_list[edge.source_id].append(edge)
            if edge.source_id != edge.target_id:
                self._adjacency_list[edge.target_id].append(edge)

        for cluster in self._clusters:
            self._validate_cluster(cluster)

    # ── Validation ───────────────────────────────────────────────

    @staticmethod
    def _index(items: Sequence, kind: str) -> Dict:
        index = {}
        for item in items:
            if item.id in index:
                raise GraphIntegrityError(f"{kind} with id {item.id} already exists")
            index[item.id] = item
        return index

    def _validate_edge(self, edge: GraphEdge) -> None:
        if edge.source_id not in self._node_index:
            raise GraphIntegrityError(
                f"Edge {edge.id}: source node {edge.source_id} not in graph")
        if edge.target_id not in self._node_index:
            raise GraphIntegrityError(
                f"Edge {edge.id}: target node {edge.target_id} not in graph")
        if not 0.0 <= edge.confidence <= 1.0:
            raise GraphIntegrityError(
                f"Edge {edge.id}: confidence {edge.confidence} outside [0, 1]")

    def _validate_cluster(self, cluster: GraphCluster) -> None:
        if not cluster.node_ids:
            raise GraphIntegrityError(f"Cluster {cluster.id} has no member nodes")
        missing = [nid for nid in cluster.node_ids if nid not in self._node_index]
        if missing:
            raise GraphIntegrityError(
                f"Cluster {cluster.id} references unknown nodes {missing}")

    # ── Lookup ───────────────────────────────────────────────────

    def get_node(self, node_id: Optional[str]) -> Optional[GraphNode]:
        return self._node_index.get(node_id)

    def get_edge(self, edge_id: Optional[str]) -> Optional[GraphEdge]:
        return self._edge_index.get(edge_id)

    def get_cluster(self, cluster_id: Optional[str]) -> Optional[GraphCluster]:
        return self._cluster_index.get(cluster_id)

    def has_node(self, node_id: Optional[str]) -> bool:
        return node_id in self._node_index

    def has_edge(self, edge_id: Optional[str]) -> bool:
        return edge_id in self._edge_index

    @property
    def nodes(self) -> Tuple[GraphNode, ...]:
        return self._nodes

    @property
    def edges(self) -> Tuple[GraphEdge, ...]:
        return self._edges

    @property
    def clusters(self) -> Tuple[GraphCluster, ...]:
        return self._clusters

    # ── Adjacency ────────────────────────────────────────────────

    def incident_edges(self, node_id: str) -> List[GraphEdge]:
        """All edges touching the node, in store order."""
        return list(self._adjacency_list.get(node_id, []))

    def neighbors(self, node_id: str, edges: Iterable[GraphEdge]) -> List[GraphNode]:
        """
        Nodes reachable from node_id in one hop using only the given edges.
        Direction is ignored. Result follows store order.
        """
        found = set()
        for edge in edges:
            other = edge.get_other_end(node_id)
            if other is not None:
                found.add(other)
        return sorted(
            (self._node_index[nid] for nid in found if nid in self._node_index),
            key=lambda n: self._order[n.id],
        )

    def cluster_members(self, cluster: GraphCluster) -> List[GraphNode]:
        """Member nodes of a cluster that resolve in this store."""
        return [self._node_index[nid] for nid in cluster.node_ids if nid in self._node_index]

    # ── Convenience ──────────────────────────────────────────────

    def get_number_of_nodes(self) -> int:
        return len(self._nodes)

    def get_number_of_edges(self) -> int:
        return len(self._edges)

    def __repr__(self) -> str:
        return (f"GraphStore({self.graph_id}, nodes={len(self._nodes)}, "
                f"edges={len(self._edges)}, clusters={len(self._clusters)})")

    def to_dict(self) -> Dict:
        return {
            'id': self.graph_id,
            'nodes': [node.to_dict() for node in self._nodes],
            'edges': [edge.to_dict() for edge in self._edges],
            'clusters': [cluster.to_dict() for cluster in self._clusters],
        }
