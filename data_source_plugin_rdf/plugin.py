import re
from typing import List, Optional

from rdflib import Graph as RDFGraph, Literal, Namespace, URIRef
from rdflib.exceptions import ParserError
from rdflib.namespace import RDF

from explorer_api.exceptions import DataSourceError
from explorer_api.models.cluster import GraphCluster
from explorer_api.models.edge import GraphEdge, Provenance
from explorer_api.models.graph import GraphStore
from explorer_api.models.node import GraphNode, Position
from explorer_api.plugins import DataSourcePlugin
from explorer_api.types import EdgeType, NodeType

KG = Namespace("https://causal-graph-explorer.org/schema#")


def _natural_key(text: str):
    """Sort key that orders "n2" before "n10"."""
    return [int(part) if part.isdigit() else part for part in re.split(r"(\d+)", text)]


class RDFTurtleDataSourcePlugin(DataSourcePlugin):
    """
    DataSourcePlugin for RDF Turtle (.ttl) descriptions of a knowledge graph.

    Vocabulary (``kg:`` = https://causal-graph-explorer.org/schema#):
        <node>     a kg:Node ;     kg:label, kg:nodeType, kg:x, kg:y, kg:description
        <edge>     a kg:Relation ; kg:source <node>, kg:target <node>,
                                   kg:relationType, kg:confidence,
                                   kg:paperTitle, kg:author, kg:year,
                                   kg:externalId, kg:snippet
        <cluster>  a kg:Cluster ;  kg:label, kg:color, kg:member <node> ...

    Entity ids are the local names of their URIs. Triples are unordered,
    so entities are sorted by id in natural order.
    """

    def get_plugin_name(self) -> str:
        return "RDF Turtle Parser"

    def parse(self, file_path: str) -> GraphStore:
        rdf_graph = RDFGraph()
        try:
            rdf_graph.parse(file_path, format="turtle")
        except (OSError, ParserError, SyntaxError) as exc:
            raise DataSourceError(f"Cannot parse Turtle file '{file_path}': {exc}") from exc

        try:
            nodes = [self._build_node(rdf_graph, uri)
                     for uri in self._subjects_of(rdf_graph, KG.Node)]
            edges = [self._build_edge(rdf_graph, uri)
                     for uri in self._subjects_of(rdf_graph, KG.Relation)]
            clusters = [self._build_cluster(rdf_graph, uri)
                        for uri in self._subjects_of(rdf_graph, KG.Cluster)]
        except (KeyError, ValueError) as exc:
            raise DataSourceError(f"Malformed knowledge graph in '{file_path}': {exc}") from exc

        return GraphStore(nodes, edges, clusters, graph_id=file_path)

    # ── Entity builders ──────────────────────────────────────────

    def _build_node(self, rdf_graph: RDFGraph, uri: URIRef) -> GraphNode:
        node_id = self._local_name(str(uri))
        return GraphNode(
            id=node_id,
            label=self._literal(rdf_graph, uri, KG.label, default=node_id),
            type=NodeType(self._required(rdf_graph, uri, KG.nodeType)),
            position=Position(
                float(self._required(rdf_graph, uri, KG.x)),
                float(self._required(rdf_graph, uri, KG.y)),
            ),
            description=self._literal(rdf_graph, uri, KG.description, default=""),
        )

    def _build_edge(self, rdf_graph: RDFGraph, uri: URIRef) -> GraphEdge:
        return GraphEdge(
            id=self._local_name(str(uri)),
            source_id=self._local_name(self._required(rdf_graph, uri, KG.source)),
            target_id=self._local_name(self._required(rdf_graph, uri, KG.target)),
            type=EdgeType(self._required(rdf_graph, uri, KG.relationType)),
            confidence=float(self._required(rdf_graph, uri, KG.confidence)),
            provenance=Provenance(
                paper_title=self._literal(rdf_graph, uri, KG.paperTitle, default=""),
                author=self._literal(rdf_graph, uri, KG.author, default=""),
                year=self._literal(rdf_graph, uri, KG.year, default=""),
                external_id=self._literal(rdf_graph, uri, KG.externalId, default=""),
                snippet=self._literal(rdf_graph, uri, KG.snippet, default=""),
            ),
        )

    def _build_cluster(self, rdf_graph: RDFGraph, uri: URIRef) -> GraphCluster:
        cluster_id = self._local_name(str(uri))
        members = sorted((self._local_name(str(m)) for m in rdf_graph.objects(uri, KG.member)),
                         key=_natural_key)
        return GraphCluster(
            id=cluster_id,
            label=self._literal(rdf_graph, uri, KG.label, default=cluster_id),
            node_ids=tuple(members),
            color_tag=self._literal(rdf_graph, uri, KG.color, default="slate"),
        )

    # ── helpers ──────────────────────────────────────────────────

    def _subjects_of(self, rdf_graph: RDFGraph, rdf_class: URIRef) -> List[URIRef]:
        subjects = {s for s in rdf_graph.subjects(RDF.type, rdf_class) if isinstance(s, URIRef)}
        return sorted(subjects, key=lambda s: _natural_key(self._local_name(str(s))))

    def _literal(self, rdf_graph: RDFGraph, uri: URIRef, predicate: URIRef,
                 default: Optional[str] = None) -> Optional[str]:
        value = rdf_graph.value(uri, predicate)
        if not isinstance(value, Literal):
            return default
        return str(value)

    def _required(self, rdf_graph: RDFGraph, uri: URIRef, predicate: URIRef) -> str:
        value = rdf_graph.value(uri, predicate)
        if value is None:
            raise KeyError(f"{self._local_name(str(uri))} has no {self._local_name(str(predicate))}")
        return str(value)

    def _local_name(self, uri: str) -> str:
        """Extract the local fragment from a URI (after # or last /)."""
        if "#" in uri:
            return uri.split("#")[-1]
        return uri.rstrip("/").split("/")[-1]
