"""Zone tree nodes and split ratio arithmetic.

A zone tree is an immutable value. Mutation goes through the operators in
``carcass.domain.operators``, which always return a new tree; unchanged
subtrees are shared between the old and new values.
"""

from __future__ import annotations

import math
from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from .value_objects import (
    HandleType,
    StructuralPath,
    ZoneColor,
    ZoneContent,
    ZoneKind,
)

ROOT_ZONE_ID = "root"

# Ratio sums further than this from 100 are rescaled proportionally;
# closer sums only get their last entry adjusted.
RATIO_RESCALE_THRESHOLD = 1.0


def default_ratios(count: int) -> tuple[float, ...]:
    """Equal shares for ``count`` children, summing to exactly 100.

    Each share is ``100 / count`` rounded half up; the rounding remainder
    goes to the last child.

    Example:
        >>> default_ratios(3)
        (33.0, 33.0, 34.0)
    """
    if count < 1:
        raise ValueError("At least one child is required")
    share = float(math.floor(100 / count + 0.5))
    ratios = [share] * count
    ratios[-1] = 100.0 - share * (count - 1)
    return tuple(ratios)


def normalize_ratios(ratios: Sequence[float]) -> tuple[float, ...]:
    """Renormalize split ratios so they sum to 100.

    Non-positive or non-finite entries fall back to equal shares. A sum
    off by more than ``RATIO_RESCALE_THRESHOLD`` is rescaled
    proportionally; any remaining drift is absorbed by the last entry.

    Args:
        ratios: Percentages, one per child.

    Returns:
        Corrected ratios as a tuple.
    """
    values = [float(r) for r in ratios]
    if not values:
        return ()
    if any(not math.isfinite(r) or r <= 0 for r in values):
        return default_ratios(len(values))

    total = sum(values)
    if abs(total - 100.0) > RATIO_RESCALE_THRESHOLD:
        values = [r * 100.0 / total for r in values]

    values[-1] = 100.0 - sum(values[:-1])
    if values[-1] <= 0:
        return default_ratios(len(values))
    return tuple(values)


@dataclass(frozen=True)
class Zone:
    """Node of the zone tree.

    Attributes:
        id: Identifier derived from the root and child index path.
        kind: Leaf, horizontal split (rows) or vertical split (columns).
        children: Ordered children; empty for a leaf.
        split_ratios: One percentage per child, summing to 100.
        content: Leaf content.
        door_content: Door whose face spans this zone; allowed on splits.
        handle_type: Handle on the door or drawer front.
        has_light: LED strip along the zone width.
        has_cable_hole: Cable pass-through.
        has_dressing: Wardrobe rod without dressing content.
        glass_shelf_count: Number of glass shelves (1 to 5).
        glass_shelf_positions: Shelf heights as percentages of the zone height.
        zone_color: Colour override for the zone faces.
        is_open_space: No back panel behind this leaf.
    """

    id: str
    kind: ZoneKind = ZoneKind.LEAF
    children: tuple[Zone, ...] = ()
    split_ratios: tuple[float, ...] = ()
    content: ZoneContent = ZoneContent.EMPTY
    door_content: ZoneContent | None = None
    handle_type: HandleType | None = None
    has_light: bool = False
    has_cable_hole: bool = False
    has_dressing: bool = False
    glass_shelf_count: int | None = None
    glass_shelf_positions: tuple[float, ...] = ()
    zone_color: ZoneColor | None = None
    is_open_space: bool = False

    def __post_init__(self) -> None:
        if self.kind is ZoneKind.LEAF and self.children:
            raise ValueError(f"Leaf zone '{self.id}' cannot have children")
        if self.kind is not ZoneKind.LEAF and not self.children:
            raise ValueError(f"Split zone '{self.id}' must have children")

    @property
    def is_leaf(self) -> bool:
        return self.kind is ZoneKind.LEAF

    @property
    def is_split(self) -> bool:
        return self.kind is not ZoneKind.LEAF

    def resolved_ratios(self) -> tuple[float, ...]:
        """Ratios used for layout.

        Falls back to equal shares when the stored ratios do not match the
        child count.
        """
        if len(self.split_ratios) == len(self.children):
            return self.split_ratios
        return default_ratios(len(self.children))

    def walk(self) -> Iterator[Zone]:
        """Iterate over this zone and all descendants, depth first."""
        yield self
        for child in self.children:
            yield from child.walk()

    def walk_with_paths(
        self, path: StructuralPath | None = None
    ) -> Iterator[tuple[Zone, StructuralPath]]:
        """Iterate depth first, pairing each zone with its structural path."""
        current = path or StructuralPath()
        yield self, current
        for index, child in enumerate(self.children):
            yield from child.walk_with_paths(current.child(self.kind, index))

    def leaves(self) -> list[Zone]:
        return [zone for zone in self.walk() if zone.is_leaf]

    def find(self, zone_id: str) -> Zone | None:
        for zone in self.walk():
            if zone.id == zone_id:
                return zone
        return None

    def find_parent(self, zone_id: str) -> Zone | None:
        for zone in self.walk():
            if any(child.id == zone_id for child in zone.children):
                return zone
        return None

    def zone_ids(self) -> set[str]:
        return {zone.id for zone in self.walk()}

    def effective_door(self) -> ZoneContent | None:
        """Door shown on this zone: its door content, else a door leaf content."""
        if self.door_content is not None and self.door_content.is_door:
            return self.door_content
        if self.is_leaf and self.content.is_door:
            return self.content
        return None

    def has_zone_door(self) -> bool:
        """True when any zone of the tree carries a door."""
        return any(zone.effective_door() is not None for zone in self.walk())
