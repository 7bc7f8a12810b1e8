"""Domain layer - zone tree, geometry, segmentation and pricing."""

from .history import ZoneHistory
from .operators import (
    NormalizationResult,
    ZoneGroupError,
    group,
    move_divider,
    new_tree,
    normalize_tree,
    reset_zone,
    set_cable_hole,
    set_content,
    set_door_content,
    set_dressing,
    set_glass_shelves,
    set_handle_type,
    set_light,
    set_open_space,
    set_ratios,
    set_zone_color,
    split,
)
from .panel_deletion import (
    PanelDeletionStore,
    PanelVisibility,
    auto_hidden_panel_ids,
    hidden_separator_seeds,
    resolve_visibility,
)
from .panel_segmenter import PanelSegmenter, segment_panels
from .partition_solver import GridCell, solve_partition, split_extents
from .separator_resolver import Separator, resolve_separators
from .value_objects import (
    DimensionError,
    Dimensions,
    Envelope,
    GlobalDoorType,
    HandleType,
    PanelKind,
    PanelSegment,
    SeparatorOrientation,
    SocleKind,
    StructuralPath,
    ZoneColor,
    ZoneContent,
    ZoneKind,
)
from .zone import ROOT_ZONE_ID, Zone, default_ratios, normalize_ratios

__all__ = [
    "DimensionError",
    "Dimensions",
    "Envelope",
    "GlobalDoorType",
    "GridCell",
    "HandleType",
    "NormalizationResult",
    "PanelDeletionStore",
    "PanelKind",
    "PanelSegment",
    "PanelSegmenter",
    "PanelVisibility",
    "ROOT_ZONE_ID",
    "Separator",
    "SeparatorOrientation",
    "SocleKind",
    "StructuralPath",
    "Zone",
    "ZoneColor",
    "ZoneContent",
    "ZoneGroupError",
    "ZoneHistory",
    "ZoneKind",
    "auto_hidden_panel_ids",
    "default_ratios",
    "group",
    "hidden_separator_seeds",
    "move_divider",
    "new_tree",
    "normalize_ratios",
    "normalize_tree",
    "reset_zone",
    "resolve_separators",
    "resolve_visibility",
    "segment_panels",
    "set_cable_hole",
    "set_content",
    "set_door_content",
    "set_dressing",
    "set_glass_shelves",
    "set_handle_type",
    "set_light",
    "set_open_space",
    "set_ratios",
    "set_zone_color",
    "solve_partition",
    "split",
    "split_extents",
]
