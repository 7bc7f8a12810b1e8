"""Infrastructure layer - exporters and formatters."""

from .elevation_renderer import ElevationRenderer
from .exporters import (
    DxfExporter,
    Exporter,
    ExporterRegistry,
    ExportManager,
    JsonExporter,
    StlLayoutExporter,
    SvgExporter,
)
from .formatters import PriceBreakdownFormatter, SegmentTableFormatter
from .stl_exporter import StlExporter, StlMeshBuilder

__all__ = [
    "DxfExporter",
    "ElevationRenderer",
    "ExportManager",
    "Exporter",
    "ExporterRegistry",
    "JsonExporter",
    "PriceBreakdownFormatter",
    "SegmentTableFormatter",
    "StlExporter",
    "StlLayoutExporter",
    "StlMeshBuilder",
    "SvgExporter",
]
