# explorer_core/services/viewport_service.py
"""
    ViewportController — pan / zoom target computation.

    Only target states are computed here. Animating toward a target is the
    rendering layer's job. Targets depend on the node alone, never on the
    current viewport, so repeating a command cannot accumulate drift.
"""
from dataclasses import replace
from typing import Optional, Tuple

from explorer_api.models.node import GraphNode
from explorer_api.models.session import SessionState, Viewport

DEFAULT_CANVAS_WIDTH = 1000.0
DEFAULT_CANVAS_HEIGHT = 600.0
DEFAULT_FOCUS_SCALE = 2.0


class ViewportController:

    def __init__(self, canvas_width: float = DEFAULT_CANVAS_WIDTH,
                 canvas_height: float = DEFAULT_CANVAS_HEIGHT,
                 focus_scale: float = DEFAULT_FOCUS_SCALE):
        """
        Args:
            canvas_width:  Width of the logical coordinate space.
            canvas_height: Height of the logical coordinate space.
            focus_scale:   Scale applied when zooming to a node.
        """
        self._canvas_width = canvas_width
        self._canvas_height = canvas_height
        self._focus_scale = focus_scale

    @property
    def center(self) -> Tuple[float, float]:
        return self._canvas_width / 2, self._canvas_height / 2

    @staticmethod
    def default_viewport() -> Viewport:
        return Viewport(0.0, 0.0, 1.0)

    def zoom_target(self, node: GraphNode) -> Viewport:
        """Viewport that puts the node at the canvas centre at focus scale."""
        cx, cy = self.center
        k = self._focus_scale
        return Viewport(x=cx - node.x * k, y=cy - node.y * k, scale=k)

    def zoom_to_node(self, state: SessionState, node: Optional[GraphNode]) -> SessionState:
        if node is None:
            return state
        return replace(state, viewport=self.zoom_target(node))

    def reset(self, state: SessionState) -> SessionState:
        """Restore the default viewport. Reset also clears the selection."""
        return replace(
            state,
            viewport=self.default_viewport(),
            selected_node_id=None,
            selected_edge_id=None,
        )
