"""Pure edit operators over the zone tree.

Every operator takes a tree and returns a new tree. Operators addressed
to an unknown zone id return the input tree unchanged, except ``group``
which reports invalid selections with ``ZoneGroupError``.

Example:
    >>> tree = Zone(id="root")
    >>> tree = split(tree, "root", ZoneKind.VERTICAL, 2)
    >>> tree = set_ratios(tree, "root", [30, 70])
    >>> tree = set_content(tree, "root-1", ZoneContent.DRAWER)
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, replace

from .value_objects import HandleType, ZoneColor, ZoneContent, ZoneKind
from .zone import (
    ROOT_ZONE_ID,
    Zone,
    default_ratios,
    normalize_ratios,
)

logger = logging.getLogger(__name__)

MAX_GLASS_SHELVES = 5
MIN_DIVIDER_SHARE = 5.0
RATIO_EPSILON = 1e-6


class ZoneGroupError(ValueError):
    """Raised when a group request does not name adjacent siblings."""

    pass


def new_tree() -> Zone:
    """Return the default tree: a single empty leaf."""
    return Zone(id=ROOT_ZONE_ID)


def _transform(zone: Zone, zone_id: str, fn: Callable[[Zone], Zone]) -> Zone:
    """Apply ``fn`` to the zone with ``zone_id``, sharing untouched subtrees."""
    if zone.id == zone_id:
        return fn(zone)
    if zone.is_leaf:
        return zone

    children = tuple(_transform(child, zone_id, fn) for child in zone.children)
    if all(new is old for new, old in zip(children, zone.children)):
        return zone
    return replace(zone, children=children)


def _leaf_only(fn: Callable[[Zone], Zone]) -> Callable[[Zone], Zone]:
    def apply(zone: Zone) -> Zone:
        return fn(zone) if zone.is_leaf else zone

    return apply


def split(tree: Zone, zone_id: str, direction: ZoneKind | str, count: int) -> Zone:
    """Split a zone into ``count`` equal empty leaves.

    Children are named ``<zone_id>-0`` to ``<zone_id>-<count-1>``. Leaf
    attributes of the target are cleared; a door on it is kept and now
    spans the new children.

    Args:
        tree: Root of the tree.
        zone_id: Zone to split.
        direction: ``horizontal`` for rows or ``vertical`` for columns.
        count: Number of children, at least 2.

    Returns:
        The new tree, or ``tree`` when ``zone_id`` is unknown.

    Raises:
        ValueError: If the direction is not a split kind or count < 2.
    """
    kind = ZoneKind(direction)
    if kind is ZoneKind.LEAF:
        raise ValueError("Split direction must be 'horizontal' or 'vertical'")
    if count < 2:
        raise ValueError(f"Split count must be at least 2, got {count}")

    def _split(zone: Zone) -> Zone:
        return Zone(
            id=zone.id,
            kind=kind,
            children=tuple(Zone(id=f"{zone.id}-{i}") for i in range(count)),
            split_ratios=default_ratios(count),
            door_content=zone.door_content,
            handle_type=zone.handle_type,
            zone_color=zone.zone_color,
        )

    return _transform(tree, zone_id, _split)


def set_content(tree: Zone, zone_id: str, content: ZoneContent | str) -> Zone:
    """Set the content of a leaf. Split zones are left unchanged."""
    value = ZoneContent(content)

    def _apply(zone: Zone) -> Zone:
        updated = replace(zone, content=value)
        if value is ZoneContent.GLASS_SHELF and zone.glass_shelf_count is None:
            updated = replace(updated, glass_shelf_count=1)
        return updated

    return _transform(tree, zone_id, _leaf_only(_apply))


def set_door_content(
    tree: Zone, zone_id: str, content: ZoneContent | str | None
) -> Zone:
    """Put a door on any zone; ``empty`` or None removes it.

    On a split zone the door face spans the whole zone rectangle.

    Raises:
        ValueError: If ``content`` is not a door.
    """
    value = None if content is None else ZoneContent(content)
    if value is ZoneContent.EMPTY:
        value = None
    if value is not None and not value.is_door:
        raise ValueError(f"'{value.value}' is not a door content")

    return _transform(tree, zone_id, lambda zone: replace(zone, door_content=value))


def set_ratios(tree: Zone, zone_id: str, ratios: Sequence[float]) -> Zone:
    """Replace the split ratios of a split zone.

    Ratios are renormalized here so drift never accumulates across edits.

    Raises:
        ValueError: If the ratio count differs from the child count.
    """

    def _apply(zone: Zone) -> Zone:
        if zone.is_leaf:
            return zone
        if len(ratios) != len(zone.children):
            raise ValueError(
                f"Zone '{zone.id}' has {len(zone.children)} children, "
                f"got {len(ratios)} ratios"
            )
        return replace(zone, split_ratios=normalize_ratios(ratios))

    return _transform(tree, zone_id, _apply)


def move_divider(
    tree: Zone,
    zone_id: str,
    index: int,
    delta: float,
    min_share: float = MIN_DIVIDER_SHARE,
) -> Zone:
    """Move the divider after child ``index`` by ``delta`` percent.

    The two neighbouring children trade area so the total stays at 100;
    neither drops below ``min_share``.
    """

    def _apply(zone: Zone) -> Zone:
        if zone.is_leaf:
            return zone
        if not 0 <= index < len(zone.children) - 1:
            raise ValueError(
                f"Zone '{zone.id}' has no divider at index {index}"
            )
        ratios = list(zone.resolved_ratios())
        pair = ratios[index] + ratios[index + 1]
        first = min(max(ratios[index] + delta, min_share), pair - min_share)
        ratios[index] = first
        ratios[index + 1] = pair - first
        return replace(zone, split_ratios=normalize_ratios(ratios))

    return _transform(tree, zone_id, _apply)


def _find_common_parent(tree: Zone, zone_ids: list[str]) -> Zone | None:
    wanted = set(zone_ids)
    for zone in tree.walk():
        if wanted <= {child.id for child in zone.children}:
            return zone
    return None


def _unique_group_id(tree: Zone, parent_id: str, start: int) -> str:
    existing = tree.zone_ids()
    base = f"{parent_id}-g{start}"
    candidate = base
    suffix = 1
    while candidate in existing:
        candidate = f"{base}-{suffix}"
        suffix += 1
    return candidate


def group(
    tree: Zone,
    zone_ids: Iterable[str],
    force_content: ZoneContent | str | None = None,
) -> Zone:
    """Wrap a run of adjacent siblings into a synthetic group zone.

    The group takes the parent's split kind, keeps the original children
    with their ratios rescaled to sum 100, and occupies the sum of their
    former ratios in the parent. ``force_content`` becomes the group's door.
    When the run covers every child, no group is created and the door goes
    on the parent itself.

    Args:
        tree: Root of the tree.
        zone_ids: At least two sibling ids with consecutive indices.
        force_content: Optional door spanning the group.

    Returns:
        The new tree.

    Raises:
        ZoneGroupError: If fewer than two zones are given, they do not share
            a parent, or they are not adjacent.
    """
    ids = list(dict.fromkeys(zone_ids))
    if len(ids) < 2:
        raise ZoneGroupError("Select at least two zones to group")

    parent = _find_common_parent(tree, ids)
    if parent is None:
        raise ZoneGroupError("Zones must belong to the same group to be grouped")

    indices = sorted(i for i, child in enumerate(parent.children) if child.id in ids)
    start, end = indices[0], indices[-1]
    if indices != list(range(start, end + 1)):
        raise ZoneGroupError("Zones must be adjacent to be grouped")

    door = None if force_content is None else ZoneContent(force_content)
    if door is ZoneContent.EMPTY:
        door = None
    if door is not None and not door.is_door:
        raise ZoneGroupError(f"'{door.value}' cannot be forced on a group")

    if start == 0 and end == len(parent.children) - 1:
        logger.debug(f"Grouped every child of '{parent.id}', door set on the parent")
        return _transform(tree, parent.id, lambda zone: replace(zone, door_content=door))

    ratios = parent.resolved_ratios()
    grouped_ratios = ratios[start : end + 1]
    total = sum(grouped_ratios)

    group_zone = Zone(
        id=_unique_group_id(tree, parent.id, start),
        kind=parent.kind,
        children=parent.children[start : end + 1],
        split_ratios=normalize_ratios([r / total * 100.0 for r in grouped_ratios]),
        door_content=door,
    )
    children = parent.children[:start] + (group_zone,) + parent.children[end + 1 :]
    parent_ratios = ratios[:start] + (total,) + ratios[end + 1 :]

    logger.debug(
        f"Grouped {ids} under '{group_zone.id}' in '{parent.id}' "
        f"(share {total:.2f}%)"
    )
    return _transform(
        tree,
        parent.id,
        lambda zone: replace(
            zone, children=children, split_ratios=normalize_ratios(parent_ratios)
        ),
    )


def reset_zone(tree: Zone, zone_id: str) -> Zone:
    """Turn a zone back into an empty leaf, dropping its descendants.

    Door, light, cable and dressing options are cleared; the colour
    override is kept.
    """
    return _transform(
        tree, zone_id, lambda zone: Zone(id=zone.id, zone_color=zone.zone_color)
    )


def set_handle_type(
    tree: Zone, zone_id: str, handle_type: HandleType | str | None
) -> Zone:
    value = None if handle_type is None else HandleType(handle_type)
    return _transform(tree, zone_id, lambda zone: replace(zone, handle_type=value))


def set_light(tree: Zone, zone_id: str, enabled: bool) -> Zone:
    return _transform(
        tree, zone_id, _leaf_only(lambda zone: replace(zone, has_light=enabled))
    )


def set_cable_hole(tree: Zone, zone_id: str, enabled: bool) -> Zone:
    return _transform(
        tree, zone_id, _leaf_only(lambda zone: replace(zone, has_cable_hole=enabled))
    )


def set_dressing(tree: Zone, zone_id: str, enabled: bool) -> Zone:
    return _transform(
        tree, zone_id, _leaf_only(lambda zone: replace(zone, has_dressing=enabled))
    )


def set_open_space(tree: Zone, zone_id: str, enabled: bool) -> Zone:
    return _transform(
        tree, zone_id, _leaf_only(lambda zone: replace(zone, is_open_space=enabled))
    )


def set_zone_color(tree: Zone, zone_id: str, color: ZoneColor | None) -> Zone:
    return _transform(tree, zone_id, lambda zone: replace(zone, zone_color=color))


def set_glass_shelves(
    tree: Zone,
    zone_id: str,
    count: int,
    positions: Sequence[float] = (),
) -> Zone:
    """Set the glass shelf count and optional heights of a leaf.

    Raises:
        ValueError: If count is outside 1..5 or a position is outside 0..100.
    """
    if not 1 <= count <= MAX_GLASS_SHELVES:
        raise ValueError(
            f"Glass shelf count must be between 1 and {MAX_GLASS_SHELVES}, got {count}"
        )
    if any(not 0 <= p <= 100 for p in positions):
        raise ValueError("Glass shelf positions must be percentages between 0 and 100")

    return _transform(
        tree,
        zone_id,
        _leaf_only(
            lambda zone: replace(
                zone,
                glass_shelf_count=count,
                glass_shelf_positions=tuple(float(p) for p in positions),
            )
        ),
    )


@dataclass(frozen=True)
class NormalizationResult:
    """Outcome of ``normalize_tree``.

    Attributes:
        tree: The corrected tree.
        corrections: One message per corrected zone.
    """

    tree: Zone
    corrections: tuple[str, ...] = ()

    @property
    def was_corrected(self) -> bool:
        return bool(self.corrections)


def _normalize_zone(zone: Zone, corrections: list[str]) -> Zone:
    if zone.is_leaf:
        return zone

    children = tuple(_normalize_zone(child, corrections) for child in zone.children)
    ratios = zone.split_ratios

    if len(ratios) != len(children):
        fixed = default_ratios(len(children))
        corrections.append(
            f"{zone.id}: {len(ratios)} ratio(s) for {len(children)} children, "
            f"using equal shares"
        )
    else:
        fixed = normalize_ratios(ratios)
        if any(abs(a - b) > RATIO_EPSILON for a, b in zip(fixed, ratios)):
            corrections.append(
                f"{zone.id}: split ratios {[round(r, 4) for r in ratios]} "
                f"renormalized to {[round(r, 4) for r in fixed]}"
            )

    if fixed == ratios and all(new is old for new, old in zip(children, zone.children)):
        return zone
    return replace(zone, children=children, split_ratios=fixed)


def normalize_tree(tree: Zone) -> NormalizationResult:
    """Correct structural inconsistencies in a tree without raising.

    Ratio lists whose length differs from the child count become equal
    shares, and ratio lists that do not sum to 100 are renormalized.

    Returns:
        The corrected tree with a message per correction, so the caller
        can decide to persist the corrected tree.
    """
    corrections: list[str] = []
    fixed = _normalize_zone(tree, corrections)
    for message in corrections:
        logger.warning(f"Corrected zone tree: {message}")
    return NormalizationResult(tree=fixed, corrections=tuple(corrections))
