"""STL format exporter for carcass panels."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar

from carcass.infrastructure.exporters.base import ExporterRegistry
from carcass.infrastructure.stl_exporter import StlExporter as StlExporterImpl
from carcass.infrastructure.stl_exporter import StlMeshBuilder

if TYPE_CHECKING:
    from carcass.application.dtos import ConfigurationOutput


logger = logging.getLogger(__name__)


@ExporterRegistry.register
class StlLayoutExporter:
    """Exports the visible panels to STL for 3D viewing or printing.

    Attributes:
        format_name: "stl"
        file_extension: "stl"
    """

    format_name: ClassVar[str] = "stl"
    file_extension: ClassVar[str] = "stl"
    media_type: ClassVar[str] = "application/octet-stream"

    def __init__(self, mesh_builder: StlMeshBuilder | None = None) -> None:
        self._exporter = StlExporterImpl(mesh_builder=mesh_builder)

    @staticmethod
    def _check(output: ConfigurationOutput) -> None:
        if not output.is_valid:
            raise ValueError(
                f"Cannot export STL for an invalid configuration: {'; '.join(output.errors)}"
            )

    def render(self, output: ConfigurationOutput) -> bytes:
        """Binary STL of the visible segments.

        Raises:
            ValueError: If the configuration could not be resolved.
        """
        self._check(output)
        return self._exporter.export_to_bytes(output.visible_segments)

    def export(self, output: ConfigurationOutput, path: Path) -> None:
        """Write the visible segments as one mesh.

        Raises:
            ValueError: If the configuration could not be resolved.
        """
        self._check(output)
        self._exporter.export_to_file(output.visible_segments, path)
        logger.info(f"Exported STL to {path}")


__all__ = ["StlLayoutExporter", "StlExporterImpl", "StlMeshBuilder"]
