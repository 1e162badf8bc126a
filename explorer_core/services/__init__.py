"""
Core services — filter, search, geometry, selection, styling, viewport,
bookmarks, reference links and base abstractions.

Note: GraphSerializer is intentionally NOT imported eagerly to avoid
circular imports with ``explorer_core.explorer_platform.config``.  Import it
directly: ``from explorer_core.services.serialization_service import GraphSerializer``.
"""
from .base_service import GraphQueryService
from .filter_service import FilterService, EdgeFilter
from .search_service import SearchService
from .cluster_service import ClusterBoundsCalculator
from .selection_service import SelectionStateMachine, NodeVisual
from .style_service import EdgeStyler, EdgeStyle
from .viewport_service import ViewportController
from .bookmark_service import ViewBookmarkManager, DEFAULT_VIEW, DEFAULT_VIEW_ID
from .reference_links import DefaultReferenceLinks

__all__ = [
    'GraphQueryService',
    'FilterService',
    'EdgeFilter',
    'SearchService',
    'ClusterBoundsCalculator',
    'SelectionStateMachine',
    'NodeVisual',
    'EdgeStyler',
    'EdgeStyle',
    'ViewportController',
    'ViewBookmarkManager',
    'DEFAULT_VIEW',
    'DEFAULT_VIEW_ID',
    'DefaultReferenceLinks',
]
