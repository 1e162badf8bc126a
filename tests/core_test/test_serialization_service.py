# tests/core_test/test_serialization_service.py

import json

import pytest

from explorer_api.exceptions import DataSourceError, GraphIntegrityError
from explorer_api.types import EdgeType, NodeType
from explorer_core.explorer_platform.config import SerializationConfig
from explorer_core.services.serialization_service import GraphSerializer


@pytest.fixture
def serializer():
    return GraphSerializer()


class TestSerialize:

    def test_document_shape(self, serializer, store):
        data = serializer.serialize(store)
        assert data['id'] == "kras_g12c"
        assert [n['id'] for n in data['nodes']] == ["n1", "n2", "n3", "n4", "n5", "n6", "n7"]
        assert [e['id'] for e in data['edges']] == ["e1", "e2", "e3", "e4", "e5", "e6", "e7"]
        assert data['clusters'][1]['nodeIds'] == ["n3", "n4", "n5", "n6"]

    def test_edge_fields(self, serializer, store):
        edge = serializer.serialize(store)['edges'][0]
        assert edge['source'] == "n1"
        assert edge['type'] == "INHIBITS"
        assert edge['provenance']['externalId'] == "PMC6858556"

    def test_optional_fields_dropped(self, store):
        config = SerializationConfig(include_descriptions=False, include_provenance=False)
        data = GraphSerializer(config).serialize(store)
        assert 'description' not in data['nodes'][0]
        assert 'provenance' not in data['edges'][0]

    def test_to_json_uses_configured_indent(self, store):
        text = GraphSerializer(SerializationConfig(indent=None)).to_json(store)
        assert "\n" not in text
        assert json.loads(text)['id'] == "kras_g12c"

    def test_round_trip(self, serializer, store):
        restored = serializer.from_json(serializer.to_json(store))
        assert restored.to_dict() == store.to_dict()


class TestDeserialize:

    def test_nested_position_and_aliases(self, serializer):
        store = serializer.deserialize({
            'id': "mini",
            'nodes': [
                {'id': "a", 'label': "A", 'type': "PROTEIN", 'position': {'x': 1, 'y': 2}},
                {'id': "b", 'type': "PHENOTYPE", 'x': 3, 'y': 4},
            ],
            'edges': [
                {'id': "e", 'source': "a", 'target': "b", 'type': "ACTIVATES",
                 'confidence': 0.5, 'provenance': {'pmcid': "PMC1"}},
            ],
            'clusters': [{'id': "c", 'label': "C", 'nodeIds': ["a", "b"], 'color': "blue"}],
        })
        assert (store.get_node("a").x, store.get_node("a").y) == (1.0, 2.0)
        assert store.get_node("b").label == "b"
        assert store.get_node("b").type is NodeType.PHENOTYPE
        assert store.get_edge("e").type is EdgeType.ACTIVATES
        assert store.get_edge("e").provenance.external_id == "PMC1"
        assert store.get_cluster("c").color_tag == "blue"

    def test_graph_id_override(self, serializer, store):
        restored = serializer.deserialize(serializer.serialize(store), graph_id="other")
        assert restored.graph_id == "other"

    @pytest.mark.parametrize("data", [
        [],
        {'nodes': [{'id': "a", 'type': "PROTEIN"}]},
        {'nodes': [{'id': "a", 'type': "GENE", 'x': 0, 'y': 0}]},
        {'nodes': [{'id': "a", 'type': "PROTEIN", 'x': "left", 'y': 0}]},
    ])
    def test_malformed_documents(self, serializer, data):
        with pytest.raises(DataSourceError):
            serializer.deserialize(data)

    def test_invalid_json(self, serializer):
        with pytest.raises(DataSourceError):
            serializer.from_json("{not json")

    def test_dangling_edge(self, serializer):
        with pytest.raises(GraphIntegrityError):
            serializer.deserialize({
                'nodes': [{'id': "a", 'type': "PROTEIN", 'x': 0, 'y': 0}],
                'edges': [{'id': "e", 'source': "a", 'target': "zz",
                           'type': "INHIBITS", 'confidence': 0.5}],
            })


class TestScene:

    def test_idle_scene(self, serializer, workspace):
        scene = serializer.serialize_scene(workspace)
        assert scene['selection'] == "none"
        assert len(scene['nodes']) == 7
        assert len(scene['edges']) == 7
        assert [c['id'] for c in scene['clusters']] == ["c1", "c2", "c3"]
        assert scene['clusters'][0]['bounds'] == {'x': 20, 'y': 250, 'width': 360, 'height': 100}
        assert scene['clusters'][0]['color'] == "#10b981"

    def test_scene_follows_session(self, serializer, workspace):
        workspace.select_node("n2")
        workspace.set_min_confidence(0.95)
        workspace.toggle_clusters()
        scene = serializer.serialize_scene(workspace)

        visuals = {n['id']: n['visual']['emphasis'] for n in scene['nodes']}
        assert visuals["n2"] == "focused"
        assert visuals["n4"] == "dimmed"
        assert [e['id'] for e in scene['edges']] == ["e1", "e2", "e4", "e5"]
        assert scene['clusters'] == []
        assert scene['state']['selectedNodeId'] == "n2"

    def test_scene_edge_style(self, serializer, workspace):
        scene = serializer.serialize_scene(workspace)
        e6 = next(e for e in scene['edges'] if e['id'] == "e6")
        assert e6['style']['dash'] == pytest.approx([7.1, 5.75])
        assert e6['style']['linecap'] == "butt"

    def test_scene_json(self, serializer, workspace):
        data = json.loads(serializer.scene_to_json(workspace))
        assert data['id'] == "kras_g12c"
        assert data['nodes'][0]['color'] == "#10b981"
