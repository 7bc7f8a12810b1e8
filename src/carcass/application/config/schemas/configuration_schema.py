"""Persisted configuration schemas.

These models read and write the JSON document a configurator saves:
dimensions, zone tree, deleted panel ids, material selection and the
global options. Keys are camelCase on the wire and snake_case in Python;
either spelling is accepted on input.

Zone ``content``, ``doorContent`` and ``handleType`` are kept as plain
strings so that documents written by other versions still load. The
adapter maps unknown values to safe defaults and reports a correction.
"""

from __future__ import annotations

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from carcass.domain.value_objects import (
    DEFAULT_THICKNESS,
    GlobalDoorType,
    SocleKind,
    ZoneKind,
)


class ZoneColorSchema(BaseModel):
    """Colour override attached to a zone."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    color_id: int | None = Field(default=None, alias="colorId")
    hex: str | None = Field(default=None, description="CSS colour, e.g. #c8a27a")
    image_url: str | None = Field(default=None, alias="imageUrl")


class ZoneSchema(BaseModel):
    """One node of the persisted zone tree.

    Two-child splits are written with ``splitRatio`` (the first child's
    share), wider splits with ``splitRatios``. Both are accepted on input;
    ``splitRatios`` wins when it matches the child count.

    Boolean flags default to None and are only written when set.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    id: str = Field(..., min_length=1)
    type: ZoneKind = ZoneKind.LEAF
    content: str = "empty"
    door_content: str | None = Field(default=None, alias="doorContent")
    children: list[ZoneSchema] | None = None
    split_ratio: float | None = Field(default=None, alias="splitRatio")
    split_ratios: list[float] | None = Field(default=None, alias="splitRatios")
    handle_type: str | None = Field(default=None, alias="handleType")
    has_light: bool | None = Field(default=None, alias="hasLight")
    has_cable_hole: bool | None = Field(default=None, alias="hasCableHole")
    has_dressing: bool | None = Field(default=None, alias="hasDressing")
    glass_shelf_count: int | None = Field(
        default=None, ge=1, le=5, alias="glassShelfCount"
    )
    glass_shelf_positions: list[float] | None = Field(
        default=None, alias="glassShelfPositions"
    )
    zone_color: ZoneColorSchema | None = Field(default=None, alias="zoneColor")
    is_open_space: bool | None = Field(default=None, alias="isOpenSpace")

    @field_validator("glass_shelf_positions")
    @classmethod
    def validate_shelf_positions(cls, v: list[float] | None) -> list[float] | None:
        """Shelf positions are percentages of the zone height."""
        if v is None:
            return v
        for position in v:
            if not 0 <= position <= 100:
                raise ValueError(
                    f"Glass shelf position {position} must be between 0 and 100"
                )
        return v


class DimensionsSchema(BaseModel):
    """Outer furniture dimensions in millimetres."""

    model_config = ConfigDict(extra="forbid")

    width: float = Field(..., gt=0, description="Outer width in mm")
    height: float = Field(..., gt=0, description="Outer height in mm, socle included")
    depth: float = Field(..., gt=0, description="Outer depth in mm")


class ComponentColorSchema(BaseModel):
    """Colour chosen for one component in multi-colour mode.

    Extra keys written by the configurator (labels, swatches) are kept.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    color_id: int | None = Field(default=None, alias="colorId")
    hex: str | None = None
    price_per_m2: float | None = Field(default=None, ge=0, alias="pricePerM2")


class MaterialSelectionSchema(BaseModel):
    """Material and colour choice.

    ``componentColors`` is keyed by component: ``structure``, ``back``,
    ``doors`` and ``drawers``. Unknown keys are preserved on round trip.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    finish: str | None = None
    color_id: int | None = Field(default=None, alias="colorId")
    price_per_m2: float | None = Field(default=None, ge=0, alias="pricePerM2")
    use_multi_color: bool = Field(default=False, alias="useMultiColor")
    component_colors: dict[str, ComponentColorSchema] = Field(
        default_factory=dict, alias="componentColors"
    )


class ConfigurationSchema(BaseModel):
    """Root model of a saved furniture configuration.

    Example:
        >>> config = ConfigurationSchema.model_validate(
        ...     {"dimensions": {"width": 1200, "height": 730, "depth": 400}}
        ... )
        >>> config.zone_tree.id
        'root'
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    dimensions: DimensionsSchema
    zone_tree: ZoneSchema = Field(
        default_factory=lambda: ZoneSchema(id="root"), alias="zoneTree"
    )
    deleted_panel_ids: list[str] = Field(
        default_factory=list, alias="deletedPanelIds"
    )
    material_selection: MaterialSelectionSchema = Field(
        default_factory=MaterialSelectionSchema, alias="materialSelection"
    )
    thickness: float = Field(
        default=DEFAULT_THICKNESS, gt=0, le=100, description="Board thickness in mm"
    )
    back_thickness: float | None = Field(
        default=None, gt=0, le=100, alias="backThickness"
    )
    socle: SocleKind = SocleKind.NONE
    socle_height: float | None = Field(default=None, ge=0, alias="socleHeight")
    door_type: GlobalDoorType = Field(default=GlobalDoorType.NONE, alias="doorType")

    @field_validator("deleted_panel_ids")
    @classmethod
    def deduplicate_deleted_ids(cls, v: list[str]) -> list[str]:
        """Keep the first occurrence of every id, in order."""
        return list(dict.fromkeys(v))

    @model_validator(mode="after")
    def validate_root_id(self) -> ConfigurationSchema:
        """The tree root must carry the root id."""
        if self.zone_tree.id != "root":
            raise ValueError(
                f"zoneTree root id must be 'root', got '{self.zone_tree.id}'"
            )
        return self


ZoneSchema.model_rebuild()
