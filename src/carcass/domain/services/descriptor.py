"""Compact textual descriptor of a zone tree.

The descriptor is what generator back ends consume, e.g.
``H[60,40](T,Pg(V2(T,T)))``:

- ``H`` / ``V`` split with ``[r1,r2,...]`` ratios; horizontal splits list
  their rows bottom first. An ``I`` suffix marks a split without
  separators (drawer stack, or every separator hidden).
- Leaf codes: ``T`` drawer, ``To`` push drawer, ``D`` dressing, ``v`` or
  ``vN`` glass shelves, then ``c`` for a cable hole and ``D`` for a rod.
- Door codes: ``Pg`` left door (omitted on the root), ``Pd`` right door,
  ``P2`` double door, ``Pm`` mirror door, ``Po`` push door, followed by a
  handle digit. A door on a split wraps its code: ``Pg(V2(T,T))``.
"""

from __future__ import annotations

import math
from collections.abc import Collection

from ..value_objects import StructuralPath, ZoneContent, ZoneKind
from ..zone import ROOT_ZONE_ID, Zone

__all__ = ["encode_descriptor"]

_DOOR_CODES = {
    ZoneContent.DOOR: "Pg",
    ZoneContent.DOOR_RIGHT: "Pd",
    ZoneContent.DOOR_DOUBLE: "P2",
    ZoneContent.MIRROR_DOOR: "Pm",
    ZoneContent.PUSH_DOOR: "Po",
}

# Doors whose code carries the handle digit; push doors have no handle.
_HANDLED_DOORS = frozenset(
    {
        ZoneContent.DOOR,
        ZoneContent.DOOR_RIGHT,
        ZoneContent.DOOR_DOUBLE,
        ZoneContent.MIRROR_DOOR,
    }
)


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _door_code(zone: Zone) -> str:
    door = zone.effective_door()
    if door is None:
        return ""
    if door is ZoneContent.DOOR and zone.id == ROOT_ZONE_ID:
        return ""
    code = _DOOR_CODES.get(door, "")
    if code and door in _HANDLED_DOORS and zone.handle_type is not None:
        code += zone.handle_type.code
    return code


def _leaf_code(zone: Zone) -> str:
    content = zone.content
    if content is ZoneContent.DRAWER:
        code = "T" + (zone.handle_type.code if zone.handle_type else "")
    elif content is ZoneContent.PUSH_DRAWER:
        code = "To"
    elif content is ZoneContent.DRESSING:
        code = "D"
    elif content is ZoneContent.GLASS_SHELF:
        count = zone.glass_shelf_count or 1
        code = f"v{count}" if count > 1 else "v"
    else:
        code = ""

    code = _door_code(zone) + code
    if zone.has_cable_hole:
        code += "c"
    if zone.has_dressing and content is not ZoneContent.DRESSING:
        code += "D"
    return code


def _encode(zone: Zone, path: StructuralPath, hidden_seeds: Collection[str]) -> str:
    if zone.is_leaf:
        return _leaf_code(zone)

    horizontal = zone.kind is ZoneKind.HORIZONTAL
    count = len(zone.children)
    children = [
        _encode(child, path.child(zone.kind, index), hidden_seeds)
        for index, child in enumerate(zone.children)
    ]
    ratios = [_round_half_up(r) for r in zone.resolved_ratios()]
    if count == 2:
        ratios[1] = 100 - ratios[0]
    if horizontal:
        children.reverse()
        ratios.reverse()

    prefix = "H" if horizontal else "V"
    all_drawers = count >= 2 and all(
        child.is_leaf and child.content.is_drawer for child in zone.children
    )
    boundaries = [path.boundary_token(zone.kind, i) for i in range(count - 1)]
    if (horizontal and all_drawers) or (
        boundaries and all(seed in hidden_seeds for seed in boundaries)
    ):
        prefix += "I"

    if count >= 2:
        code = f"{prefix}[{','.join(str(r) for r in ratios)}]({','.join(children)})"
    else:
        code = f"{prefix}{count}({','.join(children)})"

    door = _door_code(zone)
    return f"{door}({code})" if door else code


def encode_descriptor(tree: Zone, hidden_separator_seeds: Collection[str] = ()) -> str:
    """Encode a tree as a compact descriptor.

    Args:
        tree: Root of the zone tree.
        hidden_separator_seeds: Seeds of separators with no visible segment,
            see ``carcass.domain.panel_deletion.hidden_separator_seeds``.

    Returns:
        The descriptor string; an empty string for an empty single leaf.
    """
    return _encode(tree, StructuralPath(), frozenset(hidden_separator_seeds))
