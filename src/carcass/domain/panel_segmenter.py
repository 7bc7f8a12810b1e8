"""Cut the carcass into stable, selectable panel segments.

The segmenter is the single source of panel geometry and identity. Both
the 3D and the 2D exporters, the deletion rules and the pricing engine
read its output; none of them recompute panel extents.

Construction model:
    - Sides run the full carcass height, from the socle plane to the top,
      and own the four corners.
    - Top and bottom boards sit between the sides, one segment per column
      of cells touching them.
    - Vertical separators that reach the top or bottom of the content run
      through to the outer faces, splitting the top and bottom per column.
    - Horizontal separators run between whatever boards bound their split.
    - The back covers each cell and reaches the envelope edges it touches.

Identifiers depend only on the tree shape:
    - ``panel-left-<i>`` / ``panel-right-<i>`` (i = 0 at the top)
    - ``panel-top-<i>`` / ``panel-bottom-<i>`` (i = 0 at the left)
    - ``panel-back-c<colPath>-r<rowPath>``
    - ``separator-v-<seed>-<j>`` (j = 0 at the top)
    - ``separator-h-<seed>-<j>`` (j = 0 at the left)
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from .partition_solver import GridCell, solve_partition
from .separator_resolver import Separator, resolve_separators
from .value_objects import (
    Envelope,
    PanelKind,
    PanelSegment,
    SeparatorOrientation,
)
from .zone import Zone

logger = logging.getLogger(__name__)


# Breakpoints closer than this fraction of their span are the same point.
COINCIDENT_FRACTION = 1e-9


def _merge_points(
    points: Sequence[float], start: float, end: float
) -> list[float]:
    """Sort points and drop those coinciding with the previous one.

    Points are compared as fractions of ``[start, end]``, so whether two
    points merge does not depend on the length of the span.
    """
    span = end - start
    merged: list[float] = []
    for point in sorted(points):
        if not merged or (point - merged[-1]) / span > COINCIDENT_FRACTION:
            merged.append(point)
    return merged


def _gap_midpoints(spans: Sequence[tuple[float, float]]) -> list[float]:
    """Midpoints of the gaps left between consecutive disjoint spans."""
    ordered = sorted(spans)
    return [
        (previous_end + start) / 2
        for (_, previous_end), (start, _) in zip(ordered, ordered[1:])
    ]


def _tile(
    start: float, end: float, breakpoints: Sequence[float], tolerance: float
) -> list[tuple[float, float]]:
    """Split ``[start, end]`` at the given breakpoints, in ascending order."""
    inner = [
        p
        for p in _merge_points(breakpoints, start, end)
        if start + tolerance < p < end - tolerance
    ]
    edges = [start, *inner, end]
    return list(zip(edges, edges[1:]))


class PanelSegmenter:
    """Turns a zone tree into panel segments for one envelope.

    Attributes:
        envelope: Outer dimensions, thickness, socle and tolerance.
    """

    def __init__(self, envelope: Envelope) -> None:
        self.envelope = envelope

    @property
    def _tolerance(self) -> float:
        return self.envelope.tolerance

    @property
    def _front_depth(self) -> float:
        """Depth of every board in front of the back panel."""
        return self.envelope.depth - self.envelope.effective_back_thickness

    def _near(self, a: float, b: float) -> bool:
        return abs(a - b) <= self._tolerance

    def _overlaps(self, a0: float, a1: float, b0: float, b1: float) -> bool:
        return a1 > b0 + self._tolerance and a0 < b1 - self._tolerance

    def solve(self, tree: Zone) -> tuple[list[GridCell], list[Separator]]:
        """Resolve grid cells and nominal separators inside the envelope."""
        content = self.envelope.content_rect
        thickness = self.envelope.thickness
        cells = solve_partition(
            tree,
            content.width,
            content.height,
            thickness,
            origin=(content.x, content.y),
        )
        separators = resolve_separators(tree, content, thickness)
        return cells, separators

    def segment(self, tree: Zone) -> list[PanelSegment]:
        """Compute every panel segment of the carcass.

        Args:
            tree: Root of the zone tree.

        Returns:
            Segments ordered left, right, top, bottom, back, then
            separators in tree order.

        Raises:
            DimensionError: If the envelope cannot hold the tree.
        """
        cells, separators = self.solve(tree)

        segments: list[PanelSegment] = []
        segments.extend(self._side_segments(cells, PanelKind.LEFT))
        segments.extend(self._side_segments(cells, PanelKind.RIGHT))
        segments.extend(self._cap_segments(cells, PanelKind.TOP))
        segments.extend(self._cap_segments(cells, PanelKind.BOTTOM))
        segments.extend(self._back_segments(cells))
        for separator in separators:
            segments.extend(self._separator_segments(separator, cells))

        logger.debug(
            f"Segmented {len(cells)} cell(s) and {len(separators)} separator(s) "
            f"into {len(segments)} panel segment(s)"
        )
        return segments

    def _side_segments(self, cells: list[GridCell], kind: PanelKind) -> list[PanelSegment]:
        env = self.envelope
        content = env.content_rect
        if kind is PanelKind.LEFT:
            touching = [c for c in cells if self._near(c.left, content.x)]
            x = 0.0
        else:
            touching = [c for c in cells if self._near(c.right, content.right)]
            x = env.width - env.thickness

        # The topmost segment reaches the carcass top, the bottommost the
        # socle plane; in between, segments meet halfway across each shelf.
        spans = [(c.bottom, c.top) for c in touching]
        intervals = _tile(
            env.socle_height, env.height, _gap_midpoints(spans), self._tolerance
        )
        intervals.reverse()

        return [
            PanelSegment(
                id=f"panel-{kind.value}-{index}",
                kind=kind,
                x=x,
                y=low,
                z=0.0,
                width=env.thickness,
                height=high - low,
                depth=self._front_depth,
                seed=str(index),
            )
            for index, (low, high) in enumerate(intervals)
        ]

    def _cap_segments(self, cells: list[GridCell], kind: PanelKind) -> list[PanelSegment]:
        env = self.envelope
        content = env.content_rect
        if kind is PanelKind.TOP:
            touching = [c for c in cells if self._near(c.top, content.top)]
            y = env.height - env.thickness
        else:
            touching = [c for c in cells if self._near(c.bottom, content.y)]
            y = env.socle_height

        columns: list[tuple[float, float]] = []
        for cell in sorted(touching, key=lambda c: c.left):
            if columns and self._near(columns[-1][0], cell.left):
                start, end = columns[-1]
                columns[-1] = (start, max(end, cell.right))
            else:
                columns.append((cell.left, cell.right))

        return [
            PanelSegment(
                id=f"panel-{kind.value}-{index}",
                kind=kind,
                x=start,
                y=y,
                z=0.0,
                width=end - start,
                height=env.thickness,
                depth=self._front_depth,
                seed=str(index),
            )
            for index, (start, end) in enumerate(columns)
        ]

    def _back_segments(self, cells: list[GridCell]) -> list[PanelSegment]:
        env = self.envelope
        content = env.content_rect
        t = env.thickness
        back = env.effective_back_thickness

        segments: list[PanelSegment] = []
        for cell in cells:
            left = cell.left - t if self._near(cell.left, content.x) else cell.left
            right = cell.right + t if self._near(cell.right, content.right) else cell.right
            top = cell.top + t if self._near(cell.top, content.top) else cell.top
            bottom = env.socle_height if self._near(cell.bottom, content.y) else cell.bottom
            segments.append(
                PanelSegment(
                    id=cell.path.back_panel_id(),
                    kind=PanelKind.BACK,
                    x=left,
                    y=bottom,
                    z=env.depth - back,
                    width=right - left,
                    height=top - bottom,
                    depth=back,
                    zone_id=cell.zone_id,
                    seed=cell.path.token,
                )
            )
        return segments

    def _separator_segments(
        self, separator: Separator, cells: list[GridCell]
    ) -> list[PanelSegment]:
        env = self.envelope
        content = env.content_rect
        rect = separator.rect
        vertical = separator.orientation is SeparatorOrientation.VERTICAL

        if vertical:
            start, end = rect.y, rect.top
            beside = [c for c in cells if self._overlaps(c.bottom, c.top, start, end)]
            before = [(c.bottom, c.top) for c in beside if self._near(c.right, rect.x)]
            after = [(c.bottom, c.top) for c in beside if self._near(c.left, rect.right)]
        else:
            start, end = rect.x, rect.right
            beside = [c for c in cells if self._overlaps(c.left, c.right, start, end)]
            before = [(c.left, c.right) for c in beside if self._near(c.bottom, rect.top)]
            after = [(c.left, c.right) for c in beside if self._near(c.top, rect.y)]

        adjacent = bool(before or after)
        if adjacent:
            intervals = _tile(
                start,
                end,
                _gap_midpoints(before) + _gap_midpoints(after),
                self._tolerance,
            )
        else:
            logger.warning(
                f"Separator '{separator.seed}' has no adjacent cells, "
                f"keeping its nominal extent"
            )
            intervals = [(start, end)]

        marker = separator.orientation.marker
        segments: list[PanelSegment] = []
        if vertical:
            for index, (low, high) in enumerate(reversed(intervals)):
                if adjacent and self._near(high, content.top):
                    high = env.height
                if adjacent and self._near(low, content.y):
                    low = env.socle_height
                segments.append(
                    PanelSegment(
                        id=f"separator-{marker}-{separator.seed}-{index}",
                        kind=PanelKind.SEPARATOR,
                        x=rect.x,
                        y=low,
                        z=0.0,
                        width=rect.width,
                        height=high - low,
                        depth=self._front_depth,
                        orientation=separator.orientation,
                        zone_id=separator.zone_id,
                        seed=separator.seed,
                    )
                )
        else:
            for index, (low, high) in enumerate(intervals):
                segments.append(
                    PanelSegment(
                        id=f"separator-{marker}-{separator.seed}-{index}",
                        kind=PanelKind.SEPARATOR,
                        x=low,
                        y=rect.y,
                        z=0.0,
                        width=high - low,
                        height=rect.height,
                        depth=self._front_depth,
                        orientation=separator.orientation,
                        zone_id=separator.zone_id,
                        seed=separator.seed,
                    )
                )
        return segments


def segment_panels(tree: Zone, envelope: Envelope) -> list[PanelSegment]:
    """Compute the panel segments of ``tree`` inside ``envelope``."""
    return PanelSegmenter(envelope).segment(tree)
