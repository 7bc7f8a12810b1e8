"""DXF format exporter for carcass panels.

Generates 2D DXF files (R2010 format). Two modes are supported:

- ``elevation``: the front view, every segment drawn at its position
- ``panels``: one cut outline per visible segment, laid out in a grid with
  its id and cut size
"""

from __future__ import annotations

import logging
from io import StringIO
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar, cast

import ezdxf

from carcass.domain.value_objects import PanelKind
from carcass.infrastructure.exporters.base import ExporterRegistry

if TYPE_CHECKING:
    from ezdxf.document import Drawing
    from ezdxf.layouts import Modelspace

    from carcass.application.dtos import ConfigurationOutput
    from carcass.domain import PanelSegment


logger = logging.getLogger(__name__)


# Layer configuration for DXF output
LAYERS = {
    "CASING": {"color": 7, "linetype": "CONTINUOUS"},  # White - sides, top, bottom
    "BACK": {"color": 8, "linetype": "CONTINUOUS"},  # Gray - back panels
    "SEPARATORS": {"color": 2, "linetype": "CONTINUOUS"},  # Yellow - separators
    "HIDDEN": {"color": 9, "linetype": "DASHED"},  # Light gray - hidden panels
    "LABELS": {"color": 5, "linetype": "CONTINUOUS"},  # Blue - text labels
}

KIND_LAYERS = {
    PanelKind.LEFT: "CASING",
    PanelKind.RIGHT: "CASING",
    PanelKind.TOP: "CASING",
    PanelKind.BOTTOM: "CASING",
    PanelKind.BACK: "BACK",
    PanelKind.SEPARATOR: "SEPARATORS",
}


def cut_size(segment: PanelSegment) -> tuple[float, float]:
    """Length and width of the board to cut, largest first."""
    length, width, _ = sorted(segment.size, reverse=True)
    return length, width


@ExporterRegistry.register
class DxfExporter:
    """Exports carcass panels to DXF.

    Attributes:
        format_name: "dxf"
        file_extension: "dxf"
    """

    format_name: ClassVar[str] = "dxf"
    file_extension: ClassVar[str] = "dxf"
    media_type: ClassVar[str] = "application/dxf"

    def __init__(
        self,
        mode: str = "elevation",
        include_hidden: bool = True,
        panel_spacing: float = 50.0,
        panels_per_row: int = 4,
    ) -> None:
        """Initialize the DXF exporter.

        Args:
            mode: "elevation" for the front view, "panels" for cut outlines.
            include_hidden: Whether hidden segments are drawn (elevation
                mode only) on the HIDDEN layer.
            panel_spacing: Space between outlines in panels mode, in mm.
            panels_per_row: Number of outlines per row in panels mode.
        """
        if mode not in ("elevation", "panels"):
            raise ValueError(f"Invalid mode: {mode}. Must be 'elevation' or 'panels'")
        self.mode = mode
        self.include_hidden = include_hidden
        self.panel_spacing = panel_spacing
        self.panels_per_row = panels_per_row

    def render(self, output: ConfigurationOutput) -> bytes:
        # R2010 drawings are always UTF-8
        return self.export_string(output).encode("utf-8")

    def export(self, output: ConfigurationOutput, path: Path) -> None:
        doc = self._build_document(output)
        doc.saveas(path)
        logger.info(f"Exported {self.mode} DXF to {path}")

    def export_string(self, output: ConfigurationOutput) -> str:
        doc = self._build_document(output)
        stream = StringIO()
        doc.write(stream)
        return stream.getvalue()

    def _build_document(self, output: ConfigurationOutput) -> Drawing:
        doc = ezdxf.new("R2010")
        self._setup_layers(doc)
        msp = doc.modelspace()
        if self.mode == "elevation":
            self._draw_elevation(msp, output)
        else:
            self._draw_panels(msp, list(output.visible_segments))
        return doc

    def _setup_layers(self, doc: Drawing) -> None:
        for name, props in LAYERS.items():
            layer = doc.layers.add(name, color=cast(int, props["color"]))
            if props["linetype"] == "DASHED":
                if "DASHED" not in doc.linetypes:
                    doc.linetypes.add(
                        "DASHED",
                        pattern=[10.0, 6.0, -4.0],
                        description="Dashed line",
                    )
                layer.dxf.linetype = "DASHED"

    def _draw_elevation(self, msp: Modelspace, output: ConfigurationOutput) -> None:
        visibility = output.visibility
        for segment in output.segments:
            visible = visibility is None or visibility.is_visible(segment.id)
            if not visible and not self.include_hidden:
                continue
            layer = KIND_LAYERS[segment.kind] if visible else "HIDDEN"
            self._draw_rect(
                msp, segment.x, segment.y, segment.width, segment.height, layer
            )

    def _draw_panels(self, msp: Modelspace, segments: list[PanelSegment]) -> None:
        """Lay out cut outlines left to right, rows growing downward."""
        x = 0.0
        y = 0.0
        row_height = 0.0
        for index, segment in enumerate(segments):
            if index and index % self.panels_per_row == 0:
                x = 0.0
                y -= row_height + self.panel_spacing
                row_height = 0.0
            length, width = cut_size(segment)
            self._draw_rect(msp, x, y - width, length, width, KIND_LAYERS[segment.kind])
            self._draw_label(msp, segment, x, y - width, length, width)
            x += length + self.panel_spacing
            row_height = max(row_height, width)

    def _draw_rect(
        self,
        msp: Modelspace,
        x: float,
        y: float,
        width: float,
        height: float,
        layer: str,
    ) -> None:
        points = [
            (x, y),
            (x + width, y),
            (x + width, y + height),
            (x, y + height),
        ]
        msp.add_lwpolyline(points, close=True, dxfattribs={"layer": layer})

    def _draw_label(
        self,
        msp: Modelspace,
        segment: PanelSegment,
        x: float,
        y: float,
        width: float,
        height: float,
    ) -> None:
        """Write the segment id and cut size centered in its outline."""
        length, board_width = cut_size(segment)
        text_height = max(4.0, min(25.0, min(width, height) * 0.2))
        msp.add_mtext(
            f"{segment.id}\n{length:.1f} x {board_width:.1f} mm",
            dxfattribs={
                "layer": "LABELS",
                "char_height": text_height,
                "insert": (x + width / 2, y + height / 2),
                "attachment_point": 5,  # MIDDLE_CENTER
            },
        )


__all__ = ["DxfExporter", "KIND_LAYERS", "LAYERS", "cut_size"]
