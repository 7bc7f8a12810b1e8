"""Exporter framework for resolved configurations.

This package provides:
- Exporter Protocol: Defines the interface for all exporters
- ExporterRegistry: Central registry for format discovery
- ExportManager: Coordinates multi-format export operations

Registered exporters:
- dxf: Front elevation or cut outlines for CNC machining
- json: Segments, visibility and price breakdown
- stl: 3D mesh of the visible panels
- svg: Front elevation drawing

Usage:
    manager = ExportManager(output_dir=Path("./output"))
    results = manager.export_all(["json", "svg"], output, project_name="sideboard")
"""

from carcass.infrastructure.exporters.base import (
    Exporter,
    ExporterRegistry,
    ExportManager,
    UnknownFormatError,
)

# Import exporters to trigger registration
from carcass.infrastructure.exporters.dxf import DxfExporter
from carcass.infrastructure.exporters.json_exporter import (
    JsonExporter,
    quote_to_dict,
    segment_to_dict,
)
from carcass.infrastructure.exporters.stl import StlLayoutExporter
from carcass.infrastructure.exporters.svg import SvgExporter

__all__ = [
    # Framework
    "Exporter",
    "ExporterRegistry",
    "ExportManager",
    "UnknownFormatError",
    # Registered exporters
    "DxfExporter",
    "JsonExporter",
    "StlLayoutExporter",
    "SvgExporter",
    # Serialization helpers
    "quote_to_dict",
    "segment_to_dict",
]
