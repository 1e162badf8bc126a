"""
    Edge model - a typed, evidence-backed relationship between two nodes.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ..types import EdgeType

PMC_ARTICLE_URL = "https://www.ncbi.nlm.nih.gov/pmc/articles/{external_id}"


@dataclass(frozen=True)
class Provenance:
    """Literature citation backing an edge's claim."""
    paper_title: str = ""
    author: str = ""
    year: str = ""
    external_id: str = ""
    snippet: str = ""

    @property
    def url(self) -> Optional[str]:
        """Link to the cited article, or None when no identifier is known."""
        if not self.external_id:
            return None
        return PMC_ARTICLE_URL.format(external_id=self.external_id)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'paperTitle': self.paper_title,
            'author': self.author,
            'year': self.year,
            'externalId': self.external_id,
            'snippet': self.snippet,
        }


@dataclass(frozen=True)
class GraphEdge:
    """
        Immutable directed edge between two nodes.
        ``confidence`` quantifies evidential strength in [0, 1].
    """
    id: str
    source_id: str
    target_id: str
    type: EdgeType
    confidence: float
    provenance: Provenance = field(default_factory=Provenance)

    @property
    def is_causal(self) -> bool:
        return self.type.is_causal

    def touches(self, node_id: str) -> bool:
        """True if node_id is either endpoint."""
        return node_id == self.source_id or node_id == self.target_id

    def get_other_end(self, node_id: str) -> Optional[str]:
        """Return the opposite endpoint, or None if node_id is not an endpoint."""
        if node_id == self.source_id:
            return self.target_id
        if node_id == self.target_id:
            return self.source_id
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'source': self.source_id,
            'target': self.target_id,
            'type': self.type.value,
            'confidence': self.confidence,
            'provenance': self.provenance.to_dict(),
        }

    def __str__(self) -> str:
        return f"{self.source_id} --[{self.type.value}]--> {self.target_id}"
