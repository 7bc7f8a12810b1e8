"""Map panel segments to 3D boxes.

Segments are expressed in the front elevation (x right, y up, z from the
front face to the back). 3D consumers work in Z-up space:

- Origin: front-bottom-left corner of the furniture
- X: width (left to right)
- Y: depth (front to back)
- Z: height (bottom to top)
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from ..value_objects import BoundingBox3D, PanelKind, PanelSegment, Position3D

__all__ = ["MappedPanel", "SegmentScene3DMapper"]


@dataclass(frozen=True)
class MappedPanel:
    """A segment placed in 3D space."""

    segment_id: str
    kind: PanelKind
    box: BoundingBox3D


class SegmentScene3DMapper:
    """Maps segments to Z-up bounding boxes for mesh exporters.

    The mapper holds no geometry of its own: every box is a direct
    translation of one segment.
    """

    def map_segment(self, segment: PanelSegment) -> BoundingBox3D:
        """Convert one segment into a Z-up box."""
        return BoundingBox3D(
            origin=Position3D(x=segment.x, y=segment.z, z=segment.y),
            size_x=segment.width,
            size_y=segment.depth,
            size_z=segment.height,
        )

    def map_segments(self, segments: Iterable[PanelSegment]) -> list[MappedPanel]:
        """Convert segments, keeping their ids and order."""
        return [
            MappedPanel(segment_id=segment.id, kind=segment.kind, box=self.map_segment(segment))
            for segment in segments
        ]
