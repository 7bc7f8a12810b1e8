"""Resolve a zone tree into absolute grid cells.

The solver reserves one panel thickness between consecutive children of
every split, then shares the remaining span according to the split
ratios. The same arithmetic is used by the separator resolver and by
pricing through ``split_extents`` and ``child_frames``, so geometry and
price can never disagree.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from .value_objects import DimensionError, Rect, StructuralPath, ZoneKind
from .zone import Zone

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GridCell:
    """Resolved rectangle of one leaf.

    Attributes:
        zone_id: Id of the leaf.
        x: Horizontal centre.
        y: Vertical centre.
        width: Extent along x.
        height: Extent along y.
        path: Split choices from the root to the leaf.
    """

    zone_id: str
    x: float
    y: float
    width: float
    height: float
    path: StructuralPath

    @property
    def left(self) -> float:
        return self.x - self.width / 2

    @property
    def right(self) -> float:
        return self.x + self.width / 2

    @property
    def bottom(self) -> float:
        return self.y - self.height / 2

    @property
    def top(self) -> float:
        return self.y + self.height / 2

    @property
    def area(self) -> float:
        return self.width * self.height

    @property
    def col_path(self) -> tuple[int, ...]:
        return self.path.col_path

    @property
    def row_path(self) -> tuple[int, ...]:
        return self.path.row_path


@dataclass(frozen=True)
class ZoneFrame:
    """Any zone of the tree together with its resolved rectangle."""

    zone: Zone
    rect: Rect
    path: StructuralPath


def split_extents(
    extent: float, ratios: Sequence[float], thickness: float
) -> list[tuple[float, float]]:
    """Share a span between children separated by panels.

    Args:
        extent: Span of the split zone along its split axis.
        ratios: Percentages summing to 100, one per child.
        thickness: Separator thickness reserved between children.

    Returns:
        ``(offset, length)`` per child, offsets measured from the start of
        the span.

    Raises:
        DimensionError: If the separators leave no room for the children.

    Example:
        >>> [(round(o, 1), round(n, 1)) for o, n in split_extents(1200, [30, 70], 19)]
        [(0.0, 354.3), (373.3, 826.7)]
    """
    count = len(ratios)
    available = extent - (count - 1) * thickness
    if not available > 0:
        raise DimensionError(
            f"A span of {extent:.1f}mm cannot hold {count} children "
            f"separated by {thickness}mm panels"
        )

    spans: list[tuple[float, float]] = []
    cursor = 0.0
    for ratio in ratios:
        length = available * ratio / 100.0
        spans.append((cursor, length))
        cursor += length + thickness
    return spans


def child_frames(frame: ZoneFrame, thickness: float) -> list[ZoneFrame]:
    """Resolve the rectangles of the children of a split frame.

    Vertical splits lay children out left to right; horizontal splits
    stack them from the top down.
    """
    zone = frame.zone
    if zone.is_leaf:
        return []

    rect = frame.rect
    ratios = zone.resolved_ratios()
    frames: list[ZoneFrame] = []

    if zone.kind is ZoneKind.VERTICAL:
        spans = split_extents(rect.width, ratios, thickness)
        for index, (child, (offset, length)) in enumerate(zip(zone.children, spans)):
            frames.append(
                ZoneFrame(
                    zone=child,
                    rect=Rect(rect.x + offset, rect.y, length, rect.height),
                    path=frame.path.child(zone.kind, index),
                )
            )
    else:
        spans = split_extents(rect.height, ratios, thickness)
        for index, (child, (offset, length)) in enumerate(zip(zone.children, spans)):
            frames.append(
                ZoneFrame(
                    zone=child,
                    rect=Rect(rect.x, rect.top - offset - length, rect.width, length),
                    path=frame.path.child(zone.kind, index),
                )
            )
    return frames


def iter_frames(root: Zone, content: Rect, thickness: float) -> Iterator[ZoneFrame]:
    """Yield every zone with its rectangle, depth first in document order."""
    stack = [ZoneFrame(zone=root, rect=content, path=StructuralPath())]
    while stack:
        frame = stack.pop()
        yield frame
        stack.extend(reversed(child_frames(frame, thickness)))


def _check_content(content_width: float, content_height: float, thickness: float) -> None:
    if not content_width > 0 or not content_height > 0:
        raise DimensionError(
            f"Content area must be positive (got {content_width} x {content_height})"
        )
    if thickness < 0:
        raise DimensionError(f"Panel thickness cannot be negative (got {thickness})")


def solve_partition(
    root: Zone,
    content_width: float,
    content_height: float,
    thickness: float,
    origin: tuple[float, float] = (0.0, 0.0),
) -> list[GridCell]:
    """Resolve every leaf of a tree into an absolute grid cell.

    Args:
        root: Root of the zone tree.
        content_width: Width inside the side panels.
        content_height: Height between the top and bottom panels.
        thickness: Separator thickness.
        origin: Bottom-left corner of the content area.

    Returns:
        One GridCell per leaf in document order.

    Raises:
        DimensionError: If the content area or any split span is empty.
            Nothing is returned in that case.
    """
    _check_content(content_width, content_height, thickness)
    content = Rect(origin[0], origin[1], content_width, content_height)

    cells = [
        GridCell(
            zone_id=frame.zone.id,
            x=frame.rect.center_x,
            y=frame.rect.center_y,
            width=frame.rect.width,
            height=frame.rect.height,
            path=frame.path,
        )
        for frame in iter_frames(root, content, thickness)
        if frame.zone.is_leaf
    ]
    logger.debug(
        f"Solved {len(cells)} cell(s) in {content_width:.1f} x {content_height:.1f}"
    )
    return cells
