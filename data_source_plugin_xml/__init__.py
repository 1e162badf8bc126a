from .plugin import GraphMLDataSourcePlugin

__all__ = ['GraphMLDataSourcePlugin']
