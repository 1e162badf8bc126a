"""
    Enumerations shared by the data model and the engine.
"""
from enum import Enum


class NodeType(Enum):
    """Biological entity kind of a graph node"""
    PROTEIN = "PROTEIN"
    COMPOUND = "COMPOUND"
    PATHWAY = "PATHWAY"
    PHENOTYPE = "PHENOTYPE"


class EdgeType(Enum):
    """Relationship kind of a graph edge"""
    ACTIVATES = "ACTIVATES"
    INHIBITS = "INHIBITS"
    ASSOCIATED_WITH = "ASSOCIATED_WITH"

    @property
    def is_causal(self) -> bool:
        """ACTIVATES / INHIBITS imply a directional mechanistic effect."""
        return self in (EdgeType.ACTIVATES, EdgeType.INHIBITS)

    @property
    def nature(self) -> str:
        return "CAUSAL" if self.is_causal else "CORRELATIONAL"


class SelectionState(Enum):
    NONE = "none"
    NODE_SELECTED = "node_selected"
    EDGE_SELECTED = "edge_selected"


class NodeEmphasis(Enum):
    """Visual class of a node derived from selection / hover."""
    FOCUSED = "focused"
    RELATED = "related"
    DIMMED = "dimmed"
    NORMAL = "normal"
