# tests/core_test/test_viewport_service.py

import pytest

from explorer_api.models.session import SessionState, Viewport
from explorer_core.services.viewport_service import ViewportController


@pytest.fixture
def controller():
    return ViewportController()


class TestZoom:

    def test_zoom_target(self, controller, store):
        assert controller.zoom_target(store.get_node("n2")) == Viewport(-100, -300, 2.0)

    @pytest.mark.parametrize("node_id,expected", [
        ("n1", Viewport(300, -300, 2.0)),
        ("n6", Viewport(-1300, -100, 2.0)),
        ("n7", Viewport(-1300, -500, 2.0)),
    ])
    def test_zoom_targets(self, controller, store, node_id, expected):
        assert controller.zoom_target(store.get_node(node_id)) == expected

    def test_zoom_is_independent_of_current_viewport(self, controller, store):
        node = store.get_node("n3")
        once = controller.zoom_to_node(SessionState(), node)
        twice = controller.zoom_to_node(once, node)
        assert once.viewport == twice.viewport

    def test_zoom_keeps_selection(self, controller, store):
        state = SessionState(selected_node_id="n4")
        assert controller.zoom_to_node(state, store.get_node("n4")).selected_node_id == "n4"

    def test_zoom_to_missing_node(self, controller):
        state = SessionState()
        assert controller.zoom_to_node(state, None) is state

    def test_custom_canvas(self, store):
        controller = ViewportController(canvas_width=800, canvas_height=400, focus_scale=3.0)
        assert controller.zoom_target(store.get_node("n1")) == Viewport(100, -700, 3.0)


class TestReset:

    def test_reset_restores_default(self, controller, store):
        state = controller.zoom_to_node(SessionState(selected_node_id="n2"), store.get_node("n2"))
        reset = controller.reset(state)
        assert reset.viewport == Viewport(0, 0, 1)
        assert reset.selected_node_id is None
        assert reset.selected_edge_id is None

    def test_reset_is_idempotent(self, controller):
        state = SessionState(viewport=Viewport(10, 20, 3), selected_edge_id="e1")
        assert controller.reset(controller.reset(state)) == controller.reset(state)

    def test_reset_keeps_filters_and_hover(self, controller):
        state = SessionState(min_confidence=0.9, show_clusters=False, hovered_node_id="n3")
        reset = controller.reset(state)
        assert reset.min_confidence == 0.9
        assert reset.show_clusters is False
        assert reset.hovered_node_id == "n3"

    def test_non_positive_scale_rejected(self):
        with pytest.raises(ValueError):
            Viewport(0, 0, 0)
