# explorer_core/services/style_service.py
"""
    EdgeStyler — derives the drawing style of an edge from its evidence and
    from the session's selection / hover.

    Width grows with the cube of confidence so only near-certain edges read
    as thick. Associative edges are dashed; higher confidence gives longer
    dashes and smaller gaps.
"""
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from explorer_api.models.edge import GraphEdge
from explorer_api.models.session import SessionState
from explorer_api.types import EdgeType, NodeType

HIGH_CONFIDENCE = 0.9
BADGE_CONFIDENCE = 0.85
EMPHASIS_EXTRA_WIDTH = 3
HOVER_DIM_OPACITY = 0.1

# (base width, width range, min opacity, max opacity)
_CAUSAL_PROFILE = (2, 5, 0.5, 1.0)
_ASSOCIATIVE_PROFILE = (1, 2, 0.3, 0.7)

EDGE_COLORS = {
    EdgeType.INHIBITS: '#ef4444',
    EdgeType.ACTIVATES: '#0ea5e9',
    EdgeType.ASSOCIATED_WITH: '#94a3b8',
}

EDGE_MARKERS = {
    EdgeType.INHIBITS: 'arrow-inhibits',
    EdgeType.ACTIVATES: 'arrow-activates',
    EdgeType.ASSOCIATED_WITH: 'arrow-associated',
}

NODE_COLORS = {
    NodeType.PROTEIN: '#3b82f6',
    NodeType.COMPOUND: '#10b981',
    NodeType.PATHWAY: '#a855f7',
    NodeType.PHENOTYPE: '#ef4444',
}


@dataclass(frozen=True)
class EdgeStyle:
    """
    Rendering-agnostic style of one edge.

    Attributes:
        width:      Stroke width in canvas units.
        opacity:    Stroke opacity in [0, 1].
        dash:       (dash length, gap length), or None for a solid line.
        glow:       Whether the edge gets the glow effect.
        color:      Stroke color for the edge type.
        marker:     End marker id for the edge type.
        linecap:    "round" for causal edges, "butt" otherwise.
        show_badge: Whether the mid-edge type badge is shown.
    """
    width: float
    opacity: float
    dash: Optional[Tuple[float, float]]
    glow: bool
    color: str
    marker: str
    linecap: str
    show_badge: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            'width': self.width,
            'opacity': self.opacity,
            'dash': list(self.dash) if self.dash is not None else None,
            'glow': self.glow,
            'color': self.color,
            'marker': self.marker,
            'linecap': self.linecap,
            'showBadge': self.show_badge,
        }


class EdgeStyler:

    def style(self, edge: GraphEdge, state: SessionState) -> EdgeStyle:
        is_causal = edge.is_causal
        is_high_confidence = edge.confidence > HIGH_CONFIDENCE
        is_selected = state.selected_edge_id == edge.id
        hovered = state.hovered_node_id
        is_incident_to_hover = hovered is not None and edge.touches(hovered)

        base_width, width_range, min_opacity, max_opacity = (
            _CAUSAL_PROFILE if is_causal else _ASSOCIATIVE_PROFILE)

        width = base_width + edge.confidence ** 3 * width_range
        if is_selected or is_incident_to_hover:
            width += EMPHASIS_EXTRA_WIDTH

        if is_selected:
            opacity = 1.0
        else:
            opacity = min_opacity + edge.confidence * (max_opacity - min_opacity)
        if hovered is not None and not state.has_selection:
            opacity = 1.0 if is_incident_to_hover else HOVER_DIM_OPACITY

        dash = None
        if not is_causal:
            dash = (2 + edge.confidence * 6, 10 - edge.confidence * 5)

        return EdgeStyle(
            width=width,
            opacity=opacity,
            dash=dash,
            glow=(is_causal and is_high_confidence) or is_incident_to_hover,
            color=EDGE_COLORS[edge.type],
            marker=EDGE_MARKERS[edge.type],
            linecap='round' if is_causal else 'butt',
            show_badge=(is_selected
                        or (is_causal and edge.confidence > BADGE_CONFIDENCE)
                        or is_incident_to_hover),
        )

    @staticmethod
    def node_color(node_type: NodeType) -> str:
        return NODE_COLORS[node_type]
