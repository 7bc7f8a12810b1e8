"""Value objects for the carcass domain.

This module provides immutable data types used throughout the engine.
All classes are re-exported from sub-modules for convenience.
"""

from __future__ import annotations

# Envelope geometry and 3D boxes
from ._geometry import (
    DEFAULT_SOCLE_HEIGHT,
    DEFAULT_THICKNESS,
    DEFAULT_TOLERANCE,
    BoundingBox3D,
    DimensionError,
    Dimensions,
    Envelope,
    Position3D,
    Rect,
    validate_envelope,
)

# Zone kinds and contents
from ._zones import (
    DOOR_CONTENTS,
    DRAWER_CONTENTS,
    GlobalDoorType,
    HandleType,
    SocleKind,
    ZoneColor,
    ZoneContent,
    ZoneKind,
)

# Structural paths
from ._paths import PathStep, StructuralPath

# Panel segments
from ._panels import PanelKind, PanelSegment, SeparatorOrientation

__all__ = [
    # Geometry
    "BoundingBox3D",
    "DEFAULT_SOCLE_HEIGHT",
    "DEFAULT_THICKNESS",
    "DEFAULT_TOLERANCE",
    "DimensionError",
    "Dimensions",
    "Envelope",
    "Position3D",
    "Rect",
    "validate_envelope",
    # Zones
    "DOOR_CONTENTS",
    "DRAWER_CONTENTS",
    "GlobalDoorType",
    "HandleType",
    "SocleKind",
    "ZoneColor",
    "ZoneContent",
    "ZoneKind",
    # Paths
    "PathStep",
    "StructuralPath",
    # Panels
    "PanelKind",
    "PanelSegment",
    "SeparatorOrientation",
]
