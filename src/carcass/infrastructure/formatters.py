"""Text formatters for terminal output."""

from __future__ import annotations

from collections.abc import Sequence

from carcass.domain import PanelSegment, PanelVisibility
from carcass.domain.services import PriceCategory, PriceQuote


class SegmentTableFormatter:
    """Formats panel segments as a table."""

    def format(
        self,
        segments: Sequence[PanelSegment],
        visibility: PanelVisibility | None = None,
    ) -> str:
        if not segments:
            return "No panel segments."

        lines = [
            "PANEL SEGMENTS",
            "=" * 96,
            f"{'Id':<34} {'Kind':<10} {'X':>8} {'Y':>8} "
            f"{'Width':>8} {'Height':>8} {'Depth':>7}  Status",
            "-" * 96,
        ]

        total_area = 0.0
        for segment in segments:
            status = self._status(segment, visibility)
            lines.append(
                f"{segment.id:<34} {segment.kind.value:<10} {segment.x:>8.1f} "
                f"{segment.y:>8.1f} {segment.width:>8.1f} {segment.height:>8.1f} "
                f"{segment.depth:>7.1f}  {status}"
            )
            if status == "visible":
                total_area += segment.face_area_m2

        lines.append("-" * 96)
        lines.append(f"{len(segments)} segment(s), visible board area {total_area:.3f} m2")
        return "\n".join(lines)

    @staticmethod
    def _status(segment: PanelSegment, visibility: PanelVisibility | None) -> str:
        if visibility is None:
            return "visible"
        if segment.id in visibility.deleted:
            return "deleted"
        if segment.id in visibility.auto_hidden:
            return "auto-hidden"
        return "visible"


class PriceBreakdownFormatter:
    """Formats a price quote as a report."""

    def __init__(self, show_lines: bool = True) -> None:
        self._show_lines = show_lines

    def format(self, quote: PriceQuote) -> str:
        lines = [
            "PRICE ESTIMATE",
            "=" * 60,
        ]

        breakdown = quote.breakdown
        for category in PriceCategory:
            category_lines = [line for line in breakdown.lines if line.category is category]
            if not category_lines:
                continue
            lines.append(f"{category.value.title():<44} {breakdown.subtotal(category):>15.2f}")
            if self._show_lines:
                for line in category_lines:
                    label = line.label if line.ref is None else f"{line.label} [{line.ref}]"
                    lines.append(f"  {label:<42} {line.amount:>15.2f}")

        lines.append("-" * 60)
        lines.append(f"{'TOTAL':<44} {quote.total:>15d}")

        if quote.anomalies:
            lines.append("")
            lines.append("Anomalies (counted as 0):")
            for anomaly in quote.anomalies:
                lines.append(f"  - {anomaly}")

        return "\n".join(lines)
