"""SVG exporter for front elevation drawings."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar

from carcass.infrastructure.elevation_renderer import ElevationRenderer
from carcass.infrastructure.exporters.base import ExporterRegistry

if TYPE_CHECKING:
    from carcass.application.dtos import ConfigurationOutput


logger = logging.getLogger(__name__)


@ExporterRegistry.register
class SvgExporter:
    """SVG exporter for the front elevation of a carcass.

    Attributes:
        format_name: Identifier for this export format.
        file_extension: File extension for SVG files.
    """

    format_name: ClassVar[str] = "svg"
    file_extension: ClassVar[str] = "svg"
    media_type: ClassVar[str] = "image/svg+xml"

    def __init__(
        self,
        scale: float = 0.5,
        show_hidden: bool = True,
        show_labels: bool = False,
    ) -> None:
        """Initialize the SVG exporter.

        Args:
            scale: Pixels per millimetre (default 0.5).
            show_hidden: Whether hidden segments are drawn as dashed outlines.
            show_labels: Whether segment ids are written on the boards.
        """
        self.renderer = ElevationRenderer(
            scale=scale, show_hidden=show_hidden, show_labels=show_labels
        )

    def render(self, output: ConfigurationOutput) -> bytes:
        return self.export_string(output).encode("utf-8")

    def export(self, output: ConfigurationOutput, path: Path) -> None:
        path.write_text(self.export_string(output), encoding="utf-8")
        logger.info(f"Exported SVG elevation to {path}")

    def export_string(self, output: ConfigurationOutput) -> str:
        return self.renderer.render_svg(output)
