"""JSON exporter for resolved configurations.

The document carries the envelope, the descriptor, every panel segment
with its visibility, and the price breakdown. Consumers that render or
machine the carcass read segment positions from it instead of solving the
layout themselves.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, ClassVar

from carcass.infrastructure.exporters.base import ExporterRegistry

if TYPE_CHECKING:
    from carcass.application.dtos import ConfigurationOutput
    from carcass.domain import PanelSegment, PanelVisibility
    from carcass.domain.services import PriceQuote


logger = logging.getLogger(__name__)

FORMAT_VERSION = "1.0"


def segment_to_dict(
    segment: PanelSegment, visibility: PanelVisibility | None = None
) -> dict[str, Any]:
    """Serialize one segment, with its hidden reason when hidden."""
    data: dict[str, Any] = {
        "id": segment.id,
        "kind": segment.kind.value,
        "position": {"x": segment.x, "y": segment.y, "z": segment.z},
        "size": {
            "width": segment.width,
            "height": segment.height,
            "depth": segment.depth,
        },
    }
    if segment.orientation is not None:
        data["orientation"] = segment.orientation.value
    if segment.zone_id is not None:
        data["zone_id"] = segment.zone_id
    if visibility is not None:
        data["visible"] = visibility.is_visible(segment.id)
        if segment.id in visibility.deleted:
            data["hidden_reason"] = "deleted"
        elif segment.id in visibility.auto_hidden:
            data["hidden_reason"] = "auto"
    return data


def quote_to_dict(quote: PriceQuote) -> dict[str, Any]:
    """Serialize a quote with rounded subtotals and its line items."""
    breakdown = quote.breakdown
    return {
        "total": quote.total,
        "subtotals": {
            name: round(amount, 2) for name, amount in breakdown.subtotals().items()
        },
        "lines": [
            {
                "category": line.category.value,
                "label": line.label,
                "amount": round(line.amount, 2),
                "ref": line.ref,
            }
            for line in breakdown.lines
        ],
        "anomalies": list(quote.anomalies),
    }


@ExporterRegistry.register
class JsonExporter:
    """Exports resolved configurations as JSON.

    Attributes:
        format_name: "json"
        file_extension: "json"
    """

    format_name: ClassVar[str] = "json"
    file_extension: ClassVar[str] = "json"
    media_type: ClassVar[str] = "application/json"

    def __init__(
        self,
        include_hidden: bool = True,
        include_price: bool = True,
        indent: int = 2,
    ) -> None:
        """Initialize the JSON exporter.

        Args:
            include_hidden: Whether deleted and auto-hidden segments are listed.
            include_price: Whether the price breakdown is included.
            indent: JSON indentation level (default 2 spaces).
        """
        self.include_hidden = include_hidden
        self.include_price = include_price
        self.indent = indent

    def render(self, output: ConfigurationOutput) -> bytes:
        return self.export_string(output).encode("utf-8")

    def export(self, output: ConfigurationOutput, path: Path) -> None:
        path.write_text(self.export_string(output), encoding="utf-8")
        logger.info(f"Exported JSON to {path}")

    def export_string(self, output: ConfigurationOutput) -> str:
        return json.dumps(self.build(output), indent=self.indent)

    def build(self, output: ConfigurationOutput) -> dict[str, Any]:
        """Build the JSON structure of a resolved configuration."""
        data: dict[str, Any] = {"format_version": FORMAT_VERSION}

        envelope = output.envelope
        if envelope is not None:
            data["envelope"] = {
                "width": envelope.width,
                "height": envelope.height,
                "depth": envelope.depth,
                "thickness": envelope.thickness,
                "back_thickness": envelope.effective_back_thickness,
                "socle_height": envelope.socle_height,
            }

        data["descriptor"] = output.descriptor
        segments = output.segments if self.include_hidden else output.visible_segments
        data["segments"] = [
            segment_to_dict(segment, output.visibility) for segment in segments
        ]

        if self.include_price and output.quote is not None:
            data["price"] = quote_to_dict(output.quote)
        if output.corrections:
            data["corrections"] = list(output.corrections)
        if output.errors:
            data["errors"] = list(output.errors)
        return data
