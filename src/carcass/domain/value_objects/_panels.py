"""Panel segment value objects."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class PanelKind(str, Enum):
    """Role of a physical board in the carcass."""

    LEFT = "left"
    RIGHT = "right"
    TOP = "top"
    BOTTOM = "bottom"
    BACK = "back"
    SEPARATOR = "separator"

    @property
    def is_casing(self) -> bool:
        """Sides, top and bottom."""
        return self in (PanelKind.LEFT, PanelKind.RIGHT, PanelKind.TOP, PanelKind.BOTTOM)


class SeparatorOrientation(str, Enum):
    """Direction a separator board runs in.

    A vertical split is divided by vertical separators and a horizontal
    split by horizontal ones (shelves).
    """

    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"

    @property
    def marker(self) -> str:
        return "v" if self is SeparatorOrientation.VERTICAL else "h"


@dataclass(frozen=True)
class PanelSegment:
    """One selectable, priced and renderable board.

    Position is the minimum corner: x from the left edge, y from the floor,
    z from the front face toward the back.

    Attributes:
        id: Stable identifier derived from the kind, the structural path and
            the index of the segment within its group.
        kind: Role of the board.
        x: Left edge.
        y: Bottom edge.
        z: Front face.
        width: Extent along x.
        height: Extent along y.
        depth: Extent along z.
        orientation: Direction of separator boards, None for other kinds.
        zone_id: Leaf owning a back segment, or split zone owning a separator.
        seed: Structural token the id was built from.
    """

    id: str
    kind: PanelKind
    x: float
    y: float
    z: float
    width: float
    height: float
    depth: float
    orientation: SeparatorOrientation | None = None
    zone_id: str | None = None
    seed: str = ""

    @property
    def position(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)

    @property
    def size(self) -> tuple[float, float, float]:
        return (self.width, self.height, self.depth)

    @property
    def face_area(self) -> float:
        """Area of the largest face in square millimetres.

        A separator is measured along its length, which can be shorter than
        the board thickness on a short segment.
        """
        if self.orientation is not None:
            return self.length * self.depth
        a, b, _ = sorted(self.size, reverse=True)
        return a * b

    @property
    def face_area_m2(self) -> float:
        return self.face_area / 1e6

    @property
    def length(self) -> float:
        """Extent along the board's running direction."""
        if self.orientation is SeparatorOrientation.VERTICAL:
            return self.height
        if self.orientation is SeparatorOrientation.HORIZONTAL:
            return self.width
        return max(self.width, self.height)
