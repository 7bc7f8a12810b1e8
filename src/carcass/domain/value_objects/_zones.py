"""Zone kinds, contents and finishing options."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ZoneKind(str, Enum):
    """How a zone arranges its space.

    Attributes:
        LEAF: Holds content, no children.
        HORIZONTAL: Children stacked as rows, index 0 at the top, divided
            by horizontal separators.
        VERTICAL: Children side by side as columns, index 0 at the left,
            divided by vertical separators.
    """

    LEAF = "leaf"
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class ZoneContent(str, Enum):
    """Content that can be placed in a leaf, or as a door on any zone."""

    EMPTY = "empty"
    DRAWER = "drawer"
    PUSH_DRAWER = "push_drawer"
    DRESSING = "dressing"
    SHELF = "shelf"
    GLASS_SHELF = "glass_shelf"
    DOOR = "door"
    DOOR_RIGHT = "door_right"
    DOOR_DOUBLE = "door_double"
    MIRROR_DOOR = "mirror_door"
    MIRROR_DOOR_RIGHT = "mirror_door_right"
    PUSH_DOOR = "push_door"
    PUSH_DOOR_RIGHT = "push_door_right"

    @property
    def is_door(self) -> bool:
        return self in DOOR_CONTENTS

    @property
    def is_drawer(self) -> bool:
        return self in DRAWER_CONTENTS


DOOR_CONTENTS = frozenset(
    {
        ZoneContent.DOOR,
        ZoneContent.DOOR_RIGHT,
        ZoneContent.DOOR_DOUBLE,
        ZoneContent.MIRROR_DOOR,
        ZoneContent.MIRROR_DOOR_RIGHT,
        ZoneContent.PUSH_DOOR,
        ZoneContent.PUSH_DOOR_RIGHT,
    }
)

DRAWER_CONTENTS = frozenset({ZoneContent.DRAWER, ZoneContent.PUSH_DRAWER})


class HandleType(str, Enum):
    """Handle fitted on a door or drawer front."""

    VERTICAL_BAR = "vertical_bar"
    HORIZONTAL_BAR = "horizontal_bar"
    KNOB = "knob"
    RECESSED = "recessed"

    @property
    def code(self) -> str:
        """Single digit used in the compact descriptor."""
        return _HANDLE_CODES[self]


_HANDLE_CODES = {
    HandleType.VERTICAL_BAR: "1",
    HandleType.HORIZONTAL_BAR: "2",
    HandleType.KNOB: "3",
    HandleType.RECESSED: "4",
}


class SocleKind(str, Enum):
    """Base under the carcass."""

    NONE = "none"
    METAL = "metal"
    WOOD = "wood"


class GlobalDoorType(str, Enum):
    """Doors covering the whole front rather than a single zone."""

    NONE = "none"
    SINGLE = "single"
    DOUBLE = "double"


@dataclass(frozen=True)
class ZoneColor:
    """Colour override for the visible faces of one zone."""

    color_id: int | None = None
    hex: str | None = None
    image_url: str | None = None
