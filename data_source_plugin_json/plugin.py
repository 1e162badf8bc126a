import json

from explorer_api.exceptions import DataSourceError
from explorer_api.models.graph import GraphStore
from explorer_api.plugins import DataSourcePlugin

from explorer_core.services.serialization_service import GraphSerializer


class JsonDataSourcePlugin(DataSourcePlugin):
    """
    DataSourcePlugin for explorer JSON documents:
    {"id", "nodes", "edges", "clusters"}, the format GraphSerializer writes.
    """

    def __init__(self):
        self._serializer = GraphSerializer()

    def get_plugin_name(self) -> str:
        return "JSON Parser"

    def parse(self, file_path: str) -> GraphStore:
        try:
            with open(file_path, "r", encoding="utf-8") as fh:
                data = json.load(fh)
        except OSError as exc:
            raise DataSourceError(f"Cannot read '{file_path}': {exc}") from exc
        except json.JSONDecodeError as exc:
            raise DataSourceError(f"'{file_path}' is not valid JSON: {exc}") from exc

        # Documents without their own id are named after the file
        graph_id = None if isinstance(data, dict) and data.get('id') else file_path
        return self._serializer.deserialize(data, graph_id=graph_id)
