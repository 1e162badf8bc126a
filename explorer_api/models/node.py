"""
    Node model - an entity of the biomedical graph (protein, compound, ...).
"""
from dataclasses import dataclass
from typing import Any, Dict

from ..types import NodeType


@dataclass(frozen=True)
class Position:
    """Fixed layout coordinates of a node on the logical canvas."""
    x: float
    y: float


@dataclass(frozen=True)
class GraphNode:
    """
    Immutable graph node.

    Positions come from the data source; the engine never lays nodes out.
    """
    id: str
    label: str
    type: NodeType
    position: Position
    description: str = ""

    @property
    def x(self) -> float:
        return self.position.x

    @property
    def y(self) -> float:
        return self.position.y

    def contains_text(self, query: str) -> bool:
        """
        Check if query occurs in the id, label or type.
        Case-insensitive search.
        """
        needle = query.lower()
        return (
            needle in self.id.lower()
            or needle in self.label.lower()
            or needle in self.type.value.lower()
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'label': self.label,
            'type': self.type.value,
            'x': self.position.x,
            'y': self.position.y,
            'description': self.description,
        }

    def __str__(self) -> str:
        return f"{self.label} ({self.id})"
