# explorer_core/services/search_service.py
"""
    SearchService — substring search over node id, label and type.

    Extends ``GraphQueryService[str, GraphNode]`` (Template Method + Genericity).
"""
from typing import Iterable, List, Optional

from explorer_api.models.graph import GraphStore
from explorer_api.models.node import GraphNode
from .base_service import GraphQueryService


class SearchService(GraphQueryService[str, GraphNode]):
    """
    Case-insensitive search:
    - "kras"     → nodes whose id, label or type contains "kras"
    - "protein"  → every PROTEIN node (type names are searchable)
    - "" / "  "  → no suggestions (an empty list, not every node)
    """

    def search(self, store: GraphStore, query: Optional[str]) -> List[GraphNode]:
        """
        :param store: Graph to search
        :param query: Text as typed by the user
        :return: Matching nodes in store order
        """
        return self.execute(store, query)

    def _prepare_query(self, query: Optional[str]) -> Optional[str]:
        if query is None or not query.strip():
            return None
        # Matched as typed; only the blank check ignores surrounding whitespace
        return query.lower()

    def _candidates(self, store: GraphStore) -> Iterable[GraphNode]:
        return store.nodes

    def _matches(self, item: GraphNode, query: str) -> bool:
        return item.contains_text(query)
