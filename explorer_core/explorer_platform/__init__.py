"""
Explorer Platform — core package.

Public API:
    ExplorerPlatform    – central orchestrator (Facade / Singleton)
    Workspace           – loaded graph + session state
    PlatformConfig      – top-level configuration
    ViewportConfig      – logical canvas geometry
    SerializationConfig – serialization field control
    PluginLoader        – generic plugin discovery
"""
from .config import PlatformConfig, SerializationConfig, ViewportConfig
from .core import ExplorerPlatform
from .workspace import Workspace
from .plugin_loader import PluginLoader, create_data_source_loader

__all__ = [
    'ExplorerPlatform',
    'Workspace',
    'PlatformConfig',
    'ViewportConfig',
    'SerializationConfig',
    'PluginLoader',
    'create_data_source_loader',
]
