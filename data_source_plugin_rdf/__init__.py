from .plugin import RDFTurtleDataSourcePlugin

__all__ = ['RDFTurtleDataSourcePlugin']
