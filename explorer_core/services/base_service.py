"""
    Generic base service for graph query operations.

    Design Pattern: Template Method
    ─────────────────────────────────
    Defines the skeleton of a graph query (prepare → scan → keep matches),
    letting concrete subclasses (FilterService, SearchService) override
    specific steps.

    Genericity:
    ─────────────────────────
    Uses Generic[TQuery, TItem] so each service explicitly declares its
    query type and the kind of entity it returns.
"""
from abc import ABC, abstractmethod
from typing import Generic, Iterable, List, Optional, TypeVar

from explorer_api.models.graph import GraphStore

TQuery = TypeVar('TQuery')
TItem = TypeVar('TItem')


class GraphQueryService(ABC, Generic[TQuery, TItem]):
    """
    Abstract generic base for services that select an ordered subset of
    a store's entities.

    Concrete subclasses must implement:
        - _prepare_query(query)    → normalized query, or None for "no result"
        - _candidates(store)       → entities to scan, in store order
        - _matches(item, query)    → whether one entity satisfies the query
    """

    def execute(self, store: GraphStore, query: TQuery) -> List[TItem]:
        """
        Template Method: prepare → scan candidates → keep matches.

        Args:
            store:  The graph to query.
            query:  Query object (type depends on the concrete service).

        Returns:
            Matching entities, in the order the store holds them.
        """
        prepared = self._prepare_query(query)
        if prepared is None:
            return []
        return [item for item in self._candidates(store) if self._matches(item, prepared)]

    @abstractmethod
    def _prepare_query(self, query: TQuery) -> Optional[TQuery]:
        ...

    @abstractmethod
    def _candidates(self, store: GraphStore) -> Iterable[TItem]:
        ...

    @abstractmethod
    def _matches(self, item: TItem, query: TQuery) -> bool:
        ...
