"""
    Platform configuration — canvas geometry, serialization fields, defaults.

    Provides typed configuration objects that control the logical canvas
    used for zoom targets, which optional fields are serialized, and how
    saved views are stamped.
"""
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class ViewportConfig:
    """
    Logical canvas the zoom targets are computed for.

    Attributes:
        canvas_width:  Width of the coordinate space nodes are placed in.
        canvas_height: Height of the coordinate space nodes are placed in.
        focus_scale:   Scale applied when zooming to a node.
    """
    canvas_width: float = 1000.0
    canvas_height: float = 600.0
    focus_scale: float = 2.0


@dataclass
class SerializationConfig:
    """
    Controls which fields appear in serialized output.

    Attributes:
        include_descriptions: Whether node descriptions are written out.
        include_provenance:   Whether edge citations are written out.
        indent:               JSON indentation used by ``to_json``.
    """
    include_descriptions: bool = True
    include_provenance: bool = True
    indent: Optional[int] = 2


@dataclass
class PlatformConfig:
    """
    Top-level configuration for the Explorer Platform.

    Attributes:
        viewport:            Canvas geometry for zoom targets.
        serialization:       Controls serialization / deserialization.
        default_data_source: Entry-point name of the default data source plugin.
        timestamp_format:    strftime format stamped on saved views.
    """
    viewport: ViewportConfig = field(default_factory=ViewportConfig)
    serialization: SerializationConfig = field(default_factory=SerializationConfig)
    default_data_source: Optional[str] = None
    timestamp_format: str = "%H:%M"
