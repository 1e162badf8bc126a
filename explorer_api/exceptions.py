# explorer_api/exceptions.py

class GraphIntegrityError(ValueError):
    """Raised when reference data points at entities that do not exist."""
    pass


class DataSourceError(Exception):
    """Raised when a data source plugin cannot interpret its input."""
    pass
