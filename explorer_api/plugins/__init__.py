from .base import DataSourcePlugin, ReferenceLink, ReferenceLinkProvider

__all__ = ['DataSourcePlugin', 'ReferenceLink', 'ReferenceLinkProvider']
