"""
    Serialization and deserialization service for GraphStore models.

    Supports configurable field inclusion via ``SerializationConfig``.

    Design Pattern: Strategy (serialization strategy is configurable)
    ─────────────────────────────────────────────────────────────────
    The ``SerializationConfig`` acts as a strategy that decides whether
    node descriptions and edge provenance are written out.

    Also provides Factory Method for deserialization:
        explorer document  →  GraphSerializer.deserialize  →  GraphStore

    Document format:
        {
          "id": "...",
          "nodes":    [{"id", "label", "type", "x", "y", "description"}],
          "edges":    [{"id", "source", "target", "type", "confidence",
                        "provenance": {"paperTitle", "author", "year",
                                       "externalId", "snippet"}}],
          "clusters": [{"id", "label", "nodeIds", "colorTag"}]
        }
"""
import json
from typing import Any, Dict, Optional

from explorer_api.exceptions import DataSourceError
from explorer_api.models.cluster import GraphCluster
from explorer_api.models.edge import GraphEdge, Provenance
from explorer_api.models.graph import GraphStore
from explorer_api.models.node import GraphNode, Position
from explorer_api.types import EdgeType, NodeType

from explorer_core.explorer_platform.config import SerializationConfig


class GraphSerializer:
    """
    Serialize / deserialize ``GraphStore`` instances with configurable field control.

    Usage:
        config = SerializationConfig(include_provenance=False)
        serializer = GraphSerializer(config)
        data = serializer.serialize(store)       # → dict
        json_str = serializer.to_json(store)     # → str
        store = serializer.deserialize(data)     # → GraphStore
        store = serializer.from_json(json_str)   # → GraphStore
    """

    def __init__(self, config: Optional[SerializationConfig] = None):
        self._config = config or SerializationConfig()

    @property
    def config(self) -> SerializationConfig:
        return self._config

    @config.setter
    def config(self, value: SerializationConfig) -> None:
        self._config = value

    # ── Serialization ────────────────────────────────────────────

    def serialize(self, store: GraphStore) -> Dict[str, Any]:
        """
        Convert a GraphStore to a plain dictionary respecting the
        current SerializationConfig.

        Returns:
            dict with keys 'id', 'nodes', 'edges', 'clusters'.
        """
        return {
            'id': store.graph_id,
            'nodes': [self._serialize_node(n) for n in store.nodes],
            'edges': [self._serialize_edge(e) for e in store.edges],
            'clusters': [c.to_dict() for c in store.clusters],
        }

    def to_json(self, store: GraphStore, *, indent: Optional[int] = None) -> str:
        """Serialize a GraphStore directly to a JSON string."""
        if indent is None:
            indent = self._config.indent
        return json.dumps(self.serialize(store), indent=indent)

    def _serialize_node(self, node: GraphNode) -> Dict[str, Any]:
        result = node.to_dict()
        if not self._config.include_descriptions:
            del result['description']
        return result

    def _serialize_edge(self, edge: GraphEdge) -> Dict[str, Any]:
        result = edge.to_dict()
        if not self._config.include_provenance:
            del result['provenance']
        return result

    # ── Scene (render model) ─────────────────────────────────────

    def serialize_scene(self, workspace) -> Dict[str, Any]:
        """
        Everything a rendering layer needs to draw one frame of a workspace,
        computed from a single state snapshot.

        Args:
            workspace: A ``Workspace`` (typed loosely to avoid an import cycle).
        """
        state = workspace.state
        visuals = workspace.classify_nodes()

        nodes = []
        for node in workspace.store.nodes:
            entry = self._serialize_node(node)
            entry['color'] = workspace.node_color(node.id)
            entry['visual'] = visuals[node.id].to_dict()
            nodes.append(entry)

        edges = []
        for edge, style in workspace.edge_styles():
            entry = self._serialize_edge(edge)
            entry['style'] = style.to_dict()
            edges.append(entry)

        clusters = []
        for cluster, bounds in workspace.visible_cluster_bounds():
            entry = cluster.to_dict()
            entry['color'] = workspace.cluster_color(cluster.id)
            entry['bounds'] = bounds.to_dict()
            clusters.append(entry)

        return {
            'id': workspace.store.graph_id,
            'state': state.to_dict(),
            'selection': state.selection_state.value,
            'nodes': nodes,
            'edges': edges,
            'clusters': clusters,
        }

    def scene_to_json(self, workspace, *, indent: Optional[int] = None) -> str:
        if indent is None:
            indent = self._config.indent
        return json.dumps(self.serialize_scene(workspace), indent=indent)

    # ── Deserialization ──────────────────────────────────────────

    def deserialize(self, data: Dict[str, Any], graph_id: Optional[str] = None) -> GraphStore:
        """
        Reconstruct a GraphStore from a dictionary (inverse of ``serialize``).

        Args:
            data:     Dictionary in the explorer document format.
            graph_id: Overrides the document's own 'id'.

        Returns:
            Validated GraphStore.

        Raises:
            DataSourceError:     On missing keys, unknown enum values or
                                 malformed numbers.
            GraphIntegrityError: If the document references unknown nodes.
        """
        if not isinstance(data, dict):
            raise DataSourceError(
                f"Expected a JSON object at the top level, got {type(data).__name__}")

        try:
            nodes = [self._restore_node(n) for n in data.get('nodes', [])]
            edges = [self._restore_edge(e) for e in data.get('edges', [])]
            clusters = [self._restore_cluster(c) for c in data.get('clusters', [])]
        except (KeyError, ValueError, TypeError, AttributeError) as exc:
            raise DataSourceError(f"Malformed graph document: {exc!r}") from exc

        return GraphStore(
            nodes,
            edges,
            clusters,
            graph_id=graph_id or str(data.get('id', 'deserialized')),
        )

    def from_json(self, json_str: str, graph_id: Optional[str] = None) -> GraphStore:
        """Deserialize a GraphStore from a JSON string."""
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as exc:
            raise DataSourceError(f"Invalid JSON: {exc}") from exc
        return self.deserialize(data, graph_id)

    @staticmethod
    def _restore_node(data: Dict[str, Any]) -> GraphNode:
        # Accept flat x/y or a nested "position" object
        position = data.get('position') or {'x': data['x'], 'y': data['y']}
        return GraphNode(
            id=str(data['id']),
            label=str(data.get('label', data['id'])),
            type=NodeType(data['type']),
            position=Position(float(position['x']), float(position['y'])),
            description=str(data.get('description', '')),
        )

    @staticmethod
    def _restore_edge(data: Dict[str, Any]) -> GraphEdge:
        raw = data.get('provenance') or {}
        provenance = Provenance(
            paper_title=str(raw.get('paperTitle', '')),
            author=str(raw.get('author', '')),
            year=str(raw.get('year', '')),
            external_id=str(raw.get('externalId', raw.get('pmcid', ''))),
            snippet=str(raw.get('snippet', '')),
        )
        return GraphEdge(
            id=str(data['id']),
            source_id=str(data['source']),
            target_id=str(data['target']),
            type=EdgeType(data['type']),
            confidence=float(data['confidence']),
            provenance=provenance,
        )

    @staticmethod
    def _restore_cluster(data: Dict[str, Any]) -> GraphCluster:
        return GraphCluster(
            id=str(data['id']),
            label=str(data.get('label', data['id'])),
            node_ids=tuple(str(nid) for nid in data['nodeIds']),
            color_tag=str(data.get('colorTag', data.get('color', 'slate'))),
        )
