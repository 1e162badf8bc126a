"""
    Abstract base classes for plugins and collaborators.
    Defines the "Contract" that all implementations must follow.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List

from ..models.graph import GraphStore
from ..models.node import GraphNode


class DataSourcePlugin(ABC):
    """
        Abstract base class for Data Source plugins.
        Pattern: Strategy (for data loading).
    """

    @abstractmethod
    def get_plugin_name(self) -> str:
        """
            Returns the unique name of the plugin.
            Example: "JSON Graph Loader"
        """
        pass

    @abstractmethod
    def parse(self, file_path: str) -> GraphStore:
        """
        Main method: Parses a file and returns a validated GraphStore.

        Args:
            file_path: Path to the file to be loaded.

        Returns:
            GraphStore: store populated with nodes, edges and clusters.

        Raises:
            DataSourceError: If the file cannot be interpreted.
            GraphIntegrityError: If the data references unknown nodes.
        """
        pass


@dataclass(frozen=True)
class ReferenceLink:
    """An external database link shown next to a node."""
    name: str
    url: str


class ReferenceLinkProvider(ABC):
    """
        Collaborator that maps a node to external reference links.
        Pure string templating, no network validation.
    """

    @abstractmethod
    def links_for(self, node: GraphNode) -> List[ReferenceLink]:
        """Return a fixed, ordered list of links for the node."""
        pass
