from typing import Dict, List, Optional, Tuple

from lxml import etree

from explorer_api.exceptions import DataSourceError
from explorer_api.models.cluster import GraphCluster
from explorer_api.models.edge import GraphEdge, Provenance
from explorer_api.models.graph import GraphStore
from explorer_api.models.node import GraphNode, Position
from explorer_api.plugins import DataSourcePlugin
from explorer_api.types import EdgeType, NodeType

GRAPHML_NS = "http://graphml.graphdrawing.org/xmlns"
NS = {"g": GRAPHML_NS}


class GraphMLDataSourcePlugin(DataSourcePlugin):
    """
    DataSourcePlugin for GraphML files.

    Plain ``<node>`` elements become graph nodes. A ``<node>`` that wraps a
    nested ``<graph>`` is a group: it becomes a cluster whose members are
    the plain nodes inside it. ``<data>`` values are looked up through the
    ``<key attr.name=...>`` declarations, so key ids are free-form.

    Node data:    label, type, x, y, description
    Edge data:    type, confidence, paperTitle, author, year, externalId, snippet
    Group data:   label, color
    """

    def get_plugin_name(self) -> str:
        return "GraphML Parser"

    def parse(self, file_path: str) -> GraphStore:
        parser = etree.XMLParser(resolve_entities=False, no_network=True, remove_comments=True)
        try:
            tree = etree.parse(file_path, parser)
        except (OSError, etree.XMLSyntaxError) as exc:
            raise DataSourceError(f"Cannot parse GraphML file '{file_path}': {exc}") from exc

        root = tree.getroot()
        top = root.find("g:graph", NS)
        if top is None:
            raise DataSourceError(f"'{file_path}' has no <graph> element.")

        keys = self._read_keys(root)
        nodes: List[GraphNode] = []
        clusters: List[GraphCluster] = []
        try:
            self._walk(top, keys, nodes, clusters)
            edges = [self._build_edge(el, keys) for el in root.iter(f"{{{GRAPHML_NS}}}edge")]
        except (KeyError, ValueError) as exc:
            raise DataSourceError(f"Malformed GraphML in '{file_path}': {exc}") from exc

        graph_id = top.get("id") or file_path
        return GraphStore(nodes, edges, clusters, graph_id=graph_id)

    # ── Structure ────────────────────────────────────────────────

    def _walk(self, graph_el: etree._Element, keys: Dict[Tuple[str, str], str],
              nodes: List[GraphNode], clusters: List[GraphCluster]) -> List[str]:
        """
        Collect nodes and clusters below ``graph_el`` in document order.
        Returns the ids of every plain node found, nested ones included.
        """
        found: List[str] = []
        for node_el in graph_el.findall("g:node", NS):
            nested = node_el.find("g:graph", NS)
            if nested is None:
                node = self._build_node(node_el, keys)
                nodes.append(node)
                found.append(node.id)
                continue

            # Reserve the cluster's slot so outer groups precede inner ones
            index = len(clusters)
            clusters.append(None)
            members = self._walk(nested, keys, nodes, clusters)
            data = self._data(node_el, keys, "node")
            cluster_id = self._required_attr(node_el, "id")
            clusters[index] = GraphCluster(
                id=cluster_id,
                label=data.get("label", cluster_id),
                node_ids=tuple(members),
                color_tag=data.get("color", "slate"),
            )
            found.extend(members)
        return found

    def _build_node(self, node_el: etree._Element, keys: Dict[Tuple[str, str], str]) -> GraphNode:
        node_id = self._required_attr(node_el, "id")
        data = self._data(node_el, keys, "node")
        return GraphNode(
            id=node_id,
            label=data.get("label", node_id),
            type=NodeType(data["type"]),
            position=Position(float(data["x"]), float(data["y"])),
            description=data.get("description", ""),
        )

    def _build_edge(self, edge_el: etree._Element, keys: Dict[Tuple[str, str], str]) -> GraphEdge:
        data = self._data(edge_el, keys, "edge")
        source = self._required_attr(edge_el, "source")
        target = self._required_attr(edge_el, "target")
        return GraphEdge(
            id=edge_el.get("id") or f"{source}->{target}",
            source_id=source,
            target_id=target,
            type=EdgeType(data["type"]),
            confidence=float(data["confidence"]),
            provenance=Provenance(
                paper_title=data.get("paperTitle", ""),
                author=data.get("author", ""),
                year=data.get("year", ""),
                external_id=data.get("externalId", ""),
                snippet=data.get("snippet", ""),
            ),
        )

    # ── Keys / data ──────────────────────────────────────────────

    @staticmethod
    def _read_keys(root: etree._Element) -> Dict[Tuple[str, str], str]:
        """
        Map (domain, key id) to attribute name. Keys declared ``for="all"``
        are registered for both nodes and edges.
        """
        keys = {}
        for key_el in root.findall("g:key", NS):
            key_id = key_el.get("id")
            name = key_el.get("attr.name") or key_id
            domain = key_el.get("for", "all")
            for target in (("node", "edge") if domain == "all" else (domain,)):
                keys[(target, key_id)] = name
        return keys

    @staticmethod
    def _data(element: etree._Element, keys: Dict[Tuple[str, str], str],
              domain: str) -> Dict[str, str]:
        """Direct ``<data>`` children of an element, by attribute name."""
        values = {}
        for data_el in element.findall("g:data", NS):
            key_id = data_el.get("key")
            name = keys.get((domain, key_id), key_id)
            values[name] = (data_el.text or "").strip()
        return values

    @staticmethod
    def _required_attr(element: etree._Element, name: str) -> str:
        value: Optional[str] = element.get(name)
        if not value:
            raise KeyError(f"<{etree.QName(element.tag).localname}> without '{name}' "
                           f"at line {element.sourceline}")
        return value
