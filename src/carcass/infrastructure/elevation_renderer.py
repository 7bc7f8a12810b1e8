"""Front elevation rendering of panel segments.

This module renders the segments of a resolved configuration as an SVG
front view: back panels behind, casing and separators in front, hidden
segments as dashed outlines.
"""

from __future__ import annotations

from html import escape
from typing import TYPE_CHECKING

from carcass.domain.value_objects import PanelKind

if TYPE_CHECKING:
    from carcass.application.dtos import ConfigurationOutput
    from carcass.domain import PanelSegment

# Color mapping for panel kinds
PANEL_KIND_COLORS: dict[PanelKind, str] = {
    PanelKind.LEFT: "#90EE90",  # Light green
    PanelKind.RIGHT: "#90EE90",  # Light green
    PanelKind.TOP: "#DDA0DD",  # Plum
    PanelKind.BOTTOM: "#DDA0DD",  # Plum
    PanelKind.BACK: "#D3D3D3",  # Light gray
    PanelKind.SEPARATOR: "#F0E68C",  # Khaki
}

# Backs first so the boards in front are drawn over them
_DRAW_ORDER = {
    PanelKind.BACK: 0,
    PanelKind.SEPARATOR: 1,
    PanelKind.TOP: 2,
    PanelKind.BOTTOM: 2,
    PanelKind.LEFT: 3,
    PanelKind.RIGHT: 3,
}


class ElevationRenderer:
    """Renders segments as an SVG front elevation.

    Attributes:
        scale: Pixels per millimetre.
        margin: Blank border around the drawing, in pixels.
        stroke: Outline color.
        show_hidden: Whether deleted and auto-hidden segments are outlined.
        show_labels: Whether segment ids are written on boards large enough.
    """

    def __init__(
        self,
        scale: float = 0.5,
        margin: float = 20.0,
        stroke: str = "#000000",
        text_color: str = "#000000",
        show_hidden: bool = True,
        show_labels: bool = False,
    ) -> None:
        self.scale = scale
        self.margin = margin
        self.stroke = stroke
        self.text_color = text_color
        self.show_hidden = show_hidden
        self.show_labels = show_labels

    def render_svg(self, output: ConfigurationOutput) -> str:
        """Render a resolved configuration.

        Returns:
            SVG document; an empty drawing with the errors as header text
            when the configuration could not be resolved.
        """
        envelope = output.envelope
        header_height = 30.0
        if envelope is None:
            width, height = 400.0, 0.0
        else:
            width = envelope.width * self.scale + 2 * self.margin
            height = envelope.height * self.scale + 2 * self.margin

        svg_height = height + header_height
        parts: list[str] = [
            f'<svg width="{width:.1f}" height="{svg_height:.1f}" '
            f'xmlns="http://www.w3.org/2000/svg">',
            f'  <rect x="0" y="0" width="{width:.1f}" height="{svg_height:.1f}" '
            f'fill="white"/>',
            self._render_header(output, width, header_height),
        ]

        if envelope is not None:
            visibility = output.visibility
            ordered = sorted(output.segments, key=lambda s: _DRAW_ORDER[s.kind])
            parts.append("  <!-- Panels -->")
            for segment in ordered:
                visible = visibility is None or visibility.is_visible(segment.id)
                if not visible and not self.show_hidden:
                    continue
                parts.append(
                    self._render_segment(
                        segment, envelope.height, header_height, visible
                    )
                )

        parts.append("</svg>")
        return "\n".join(parts)

    def _render_header(
        self, output: ConfigurationOutput, svg_width: float, header_height: float
    ) -> str:
        if output.errors:
            text = "; ".join(output.errors)
        elif output.envelope is not None:
            env = output.envelope
            text = f"{env.width:g} x {env.height:g} x {env.depth:g} mm"
            if output.descriptor:
                text += f" - {output.descriptor}"
        else:
            text = ""
        return (
            f'  <rect x="0" y="0" width="{svg_width:.1f}" height="{header_height}" '
            f'fill="#E0E0E0"/>\n'
            f'  <text x="10" y="{header_height - 10}" '
            f'font-family="Arial, sans-serif" font-size="12" '
            f'fill="{self.text_color}">{escape(text)}</text>'
        )

    def _render_segment(
        self,
        segment: PanelSegment,
        total_height: float,
        header_height: float,
        visible: bool,
    ) -> str:
        # SVG y grows downward; segments are measured up from the floor
        x = self.margin + segment.x * self.scale
        y = (
            header_height
            + self.margin
            + (total_height - segment.y - segment.height) * self.scale
        )
        w = segment.width * self.scale
        h = segment.height * self.scale

        if visible:
            style = f'fill="{PANEL_KIND_COLORS[segment.kind]}" stroke="{self.stroke}"'
        else:
            style = 'fill="none" stroke="#999999" stroke-dasharray="4,3"'

        rect = (
            f'    <rect x="{x:.2f}" y="{y:.2f}" width="{w:.2f}" height="{h:.2f}" '
            f'{style}/>'
        )
        lines = [f'  <g id="{escape(segment.id)}">', rect]

        font_size = min(10.0, min(w, h) / 2)
        if self.show_labels and visible and font_size >= 6:
            rotate = ""
            if h > w:
                rotate = f' transform="rotate(-90 {x + w / 2:.2f} {y + h / 2:.2f})"'
            lines.append(
                f'    <text x="{x + w / 2:.2f}" y="{y + h / 2:.2f}" '
                f'text-anchor="middle" dominant-baseline="middle" '
                f'font-family="Arial, sans-serif" font-size="{font_size:.1f}" '
                f'fill="{self.text_color}"{rotate}>{escape(segment.id)}</text>'
            )
        lines.append("  </g>")
        return "\n".join(lines)
