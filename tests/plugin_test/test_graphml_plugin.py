import pytest

from data_source_plugin_xml import GraphMLDataSourcePlugin
from explorer_api.exceptions import DataSourceError, GraphIntegrityError
from explorer_api.models.graph import GraphStore
from explorer_api.plugins.base import DataSourcePlugin
from explorer_api.types import EdgeType, NodeType

HEADER = '<graphml xmlns="http://graphml.graphdrawing.org/xmlns">'
KEYS = (
    '<key id="t" for="node" attr.name="type"/>'
    '<key id="x" for="node" attr.name="x"/>'
    '<key id="y" for="node" attr.name="y"/>'
)


@pytest.fixture
def plugin():
    return GraphMLDataSourcePlugin()


@pytest.fixture
def parsed(plugin, graphml_path):
    return plugin.parse(graphml_path)


def _write(tmp_path, body: str) -> str:
    path = tmp_path / "graph.graphml"
    path.write_text(HEADER + body + "</graphml>", encoding="utf-8")
    return str(path)


def _node(node_id: str, node_type: str = "PROTEIN") -> str:
    return (f'<node id="{node_id}"><data key="t">{node_type}</data>'
            f'<data key="x">0</data><data key="y">0</data></node>')


# ── Plugin metadata ───────────────────────────────────────────────────────────

class TestPluginMetadata:

    def test_plugin_name(self, plugin):
        assert plugin.get_plugin_name() == "GraphML Parser"

    def test_plugin_is_data_source_plugin(self, plugin):
        assert isinstance(plugin, DataSourcePlugin)


# ── Graph structure ───────────────────────────────────────────────────────────

class TestGraphStructure:

    def test_returns_store(self, parsed):
        assert isinstance(parsed, GraphStore)

    def test_counts(self, parsed):
        assert parsed.get_number_of_nodes() == 7
        assert parsed.get_number_of_edges() == 7
        assert len(parsed.clusters) == 3

    def test_graph_id_from_graph_element(self, parsed):
        assert parsed.graph_id == "kras_g12c"

    def test_graph_id_falls_back_to_path(self, plugin, tmp_path):
        path = _write(tmp_path, KEYS + "<graph>" + _node("a") + "</graph>")
        assert plugin.parse(path).graph_id == path

    def test_group_nodes_are_not_graph_nodes(self, parsed):
        assert not parsed.has_node("c1")
        assert [n.id for n in parsed.nodes] == ["n1", "n2", "n3", "n4", "n5", "n6", "n7"]


# ── Entities ──────────────────────────────────────────────────────────────────

class TestEntities:

    def test_node_fields(self, parsed):
        node = parsed.get_node("n1")
        assert node.label == "AMG-510 (Sotorasib)"
        assert node.type is NodeType.COMPOUND
        assert (node.x, node.y) == (100.0, 300.0)
        assert node.description.startswith("First-in-class")

    def test_label_defaults_to_id(self, parsed):
        assert parsed.get_node("n7").label == "n7"

    def test_edge_fields(self, parsed):
        edge = parsed.get_edge("e1")
        assert edge.type is EdgeType.INHIBITS
        assert edge.confidence == pytest.approx(0.99)
        assert edge.provenance.external_id == "PMC6858556"

    def test_edge_without_id(self, parsed):
        edge = parsed.get_edge("n4->n7")
        assert edge.type is EdgeType.ASSOCIATED_WITH

    def test_clusters_from_groups(self, parsed):
        c2 = parsed.get_cluster("c2")
        assert c2.label == "Signal Transduction"
        assert c2.node_ids == ("n3", "n4", "n5", "n6")
        assert c2.color_tag == "blue"
        assert parsed.get_cluster("c3").color_tag == "slate"

    def test_nested_groups(self, plugin, tmp_path):
        body = (KEYS + "<graph>"
                + '<node id="outer"><graph>'
                + _node("a")
                + '<node id="inner"><graph>' + _node("b") + "</graph></node>"
                + "</graph></node>"
                + "</graph>")
        store = plugin.parse(_write(tmp_path, body))
        assert [c.id for c in store.clusters] == ["outer", "inner"]
        assert store.get_cluster("outer").node_ids == ("a", "b")
        assert store.get_cluster("inner").node_ids == ("b",)


# ── Errors ────────────────────────────────────────────────────────────────────

class TestErrors:

    def test_missing_file(self, plugin, tmp_path):
        with pytest.raises(DataSourceError):
            plugin.parse(str(tmp_path / "missing.graphml"))

    def test_malformed_xml(self, plugin, tmp_path):
        with pytest.raises(DataSourceError):
            plugin.parse(_write(tmp_path, "<graph><node id='a'>"))

    def test_no_graph_element(self, plugin, tmp_path):
        with pytest.raises(DataSourceError):
            plugin.parse(_write(tmp_path, KEYS))

    def test_node_without_type(self, plugin, tmp_path):
        with pytest.raises(DataSourceError):
            plugin.parse(_write(tmp_path, KEYS + '<graph><node id="a"/></graph>'))

    def test_dangling_edge(self, plugin, tmp_path):
        body = (KEYS + '<key id="r" for="edge" attr.name="type"/>'
                + '<key id="c" for="edge" attr.name="confidence"/>'
                + "<graph>" + _node("a")
                + '<edge source="a" target="b"><data key="r">INHIBITS</data>'
                + '<data key="c">0.5</data></edge>'
                + "</graph>")
        with pytest.raises(GraphIntegrityError):
            plugin.parse(_write(tmp_path, body))
