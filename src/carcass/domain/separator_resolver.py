"""Resolve the internal separators between sibling zones."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .partition_solver import ZoneFrame, child_frames, iter_frames
from .value_objects import Rect, SeparatorOrientation, StructuralPath, ZoneKind
from .zone import Zone

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Separator:
    """Nominal board between child ``index`` and ``index + 1`` of a split.

    The rectangle spans the split zone across its split axis and one
    thickness along it.
    """

    zone_id: str
    path: StructuralPath
    index: int
    orientation: SeparatorOrientation
    rect: Rect

    @property
    def seed(self) -> str:
        """Identity seed such as ``v0`` or ``c1-h0``."""
        kind = (
            ZoneKind.VERTICAL
            if self.orientation is SeparatorOrientation.VERTICAL
            else ZoneKind.HORIZONTAL
        )
        return self.path.boundary_token(kind, self.index)


def separators_between(frame: ZoneFrame, children: list[ZoneFrame], thickness: float) -> list[Separator]:
    """Separators of one split frame given its resolved children."""
    zone = frame.zone
    separators: list[Separator] = []

    for index, (before, _after) in enumerate(zip(children, children[1:])):
        if zone.kind is ZoneKind.VERTICAL:
            rect = Rect(before.rect.right, frame.rect.y, thickness, frame.rect.height)
            orientation = SeparatorOrientation.VERTICAL
        else:
            rect = Rect(frame.rect.x, before.rect.y - thickness, frame.rect.width, thickness)
            orientation = SeparatorOrientation.HORIZONTAL
        separators.append(
            Separator(
                zone_id=zone.id,
                path=frame.path,
                index=index,
                orientation=orientation,
                rect=rect,
            )
        )
    return separators


def resolve_separators(root: Zone, content: Rect, thickness: float) -> list[Separator]:
    """Walk the tree and emit every separator in document order.

    Single-child splits have no boundary and emit nothing.

    Args:
        root: Root of the zone tree.
        content: Usable content rectangle.
        thickness: Separator thickness.

    Returns:
        Separators ordered by split zone, then by boundary index.
    """
    separators: list[Separator] = []
    for frame in iter_frames(root, content, thickness):
        if frame.zone.is_leaf or len(frame.zone.children) < 2:
            continue
        separators.extend(
            separators_between(frame, child_frames(frame, thickness), thickness)
        )
    logger.debug(f"Resolved {len(separators)} separator(s)")
    return separators
