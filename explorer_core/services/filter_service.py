# explorer_core/services/filter_service.py
"""
    FilterService — computes the visible edge subset.

    Extends ``GraphQueryService[EdgeFilter, GraphEdge]`` (Template Method + Genericity).
"""
from dataclasses import dataclass
from typing import Iterable, List, Optional

from explorer_api.models.edge import GraphEdge
from explorer_api.models.graph import GraphStore
from explorer_api.models.session import EdgeTypeFilter, SessionState
from .base_service import GraphQueryService


@dataclass(frozen=True)
class EdgeFilter:
    """
    Visibility criteria for edges.

    ``min_confidence`` is expected in [0, 0.99]; callers clamp it.
    """
    min_confidence: float
    active_types: EdgeTypeFilter

    @classmethod
    def of(cls, state: SessionState) -> 'EdgeFilter':
        return cls(state.min_confidence, state.active_types)


class FilterService(GraphQueryService[EdgeFilter, GraphEdge]):
    """
    An edge is visible when
        edge.confidence >= min_confidence  AND  active_types[edge.type]

    The result keeps the store's edge order, so raising the threshold can
    only remove edges from the result, never reorder or add them.
    """

    # ── Public API ───────────────────────────────────────────────

    def visible_edges(self, store: GraphStore, min_confidence: float,
                      active_types: EdgeTypeFilter) -> List[GraphEdge]:
        """
        :param store: Graph whose edges are filtered
        :param min_confidence: Inclusive confidence threshold
        :param active_types: Enabled edge types
        :return: Visible edges in store order
        """
        return self.execute(store, EdgeFilter(min_confidence, active_types))

    def visible_for(self, store: GraphStore, state: SessionState) -> List[GraphEdge]:
        """Visible edges under the filter settings of a session."""
        return self.execute(store, EdgeFilter.of(state))

    @staticmethod
    def causal_only() -> EdgeTypeFilter:
        """Preset: mechanistic relationships only. Leaves the threshold alone."""
        return EdgeTypeFilter.causal_only()

    # ── Template Method hooks ────────────────────────────────────

    def _prepare_query(self, query: EdgeFilter) -> Optional[EdgeFilter]:
        return query

    def _candidates(self, store: GraphStore) -> Iterable[GraphEdge]:
        return store.edges

    def _matches(self, item: GraphEdge, query: EdgeFilter) -> bool:
        return (item.confidence >= query.min_confidence
                and query.active_types.is_active(item.type))
