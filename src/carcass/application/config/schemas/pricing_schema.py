"""Pricing parameter schemas.

The rate tables mirror the admin-editable pricing document. Every table
and every field is optional; missing values take the engine defaults.

Example document::

    {
      "casing": {"full": {"coefficient": 1.2}},
      "bases": {"metal": {"price_per_foot": 20, "foot_interval": 2000}},
      "doors": {"simple": {"coefficient": 0.00004, "hinge_count": 2}},
      "hinges": {"standard": {"price_per_unit": 5}},
      "handles": {"knob": {"price_per_unit": 4}},
      "drawers": {"standard": {"base_price": 35, "coefficient": 0.0001}},
      "shelves": {"glass": {"price_per_m2": 250}, "wood": {"price_per_m2": 80}},
      "wardrobe": {"rod": {"price_per_linear_meter": 20}},
      "cables": {"pass_cable": {"fixed_price": 10}},
      "lighting": {"led": {"price_per_linear_meter": 15}}
    }
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from carcass.domain.value_objects import DOOR_CONTENTS, HandleType

DOOR_RATE_KEYS: frozenset[str] = frozenset({"simple", "double", "glass", "push"})


class _RateTable(BaseModel):
    model_config = ConfigDict(extra="forbid")


class CoefficientSchema(_RateTable):
    coefficient: float | None = Field(default=None, ge=0)


class FixedPriceSchema(_RateTable):
    fixed_price: float | None = Field(default=None, ge=0)


class UnitPriceSchema(_RateTable):
    price_per_unit: float | None = Field(default=None, ge=0)


class AreaPriceSchema(_RateTable):
    price_per_m2: float | None = Field(default=None, ge=0)


class LinearPriceSchema(_RateTable):
    price_per_linear_meter: float | None = Field(default=None, ge=0)


class CasingRatesSchema(_RateTable):
    full: CoefficientSchema = Field(default_factory=CoefficientSchema)


class MetalBaseSchema(_RateTable):
    price_per_foot: float | None = Field(default=None, ge=0)
    foot_interval: float | None = Field(
        default=None, gt=0, description="Width covered by one pair of feet, mm"
    )


class WoodBaseSchema(_RateTable):
    price_per_m3: float | None = Field(default=None, ge=0)
    height: float | None = Field(default=None, gt=0, description="Plinth height, mm")
    coefficient: float | None = Field(default=None, ge=0)
    fixed_price: float | None = Field(default=None, ge=0)


class BasesSchema(_RateTable):
    none: FixedPriceSchema = Field(default_factory=FixedPriceSchema)
    metal: MetalBaseSchema = Field(default_factory=MetalBaseSchema)
    wood: WoodBaseSchema = Field(default_factory=WoodBaseSchema)


class DoorRateSchema(_RateTable):
    coefficient: float | None = Field(default=None, ge=0)
    hinge_count: int | None = Field(default=None, ge=0, le=10)


class HingesSchema(_RateTable):
    standard: UnitPriceSchema = Field(default_factory=UnitPriceSchema)


class DrawerRateSchema(_RateTable):
    base_price: float | None = Field(default=None, ge=0)
    coefficient: float | None = Field(default=None, ge=0)


class ShelvesSchema(_RateTable):
    glass: AreaPriceSchema = Field(default_factory=AreaPriceSchema)
    wood: AreaPriceSchema = Field(default_factory=AreaPriceSchema)


class WardrobeSchema(_RateTable):
    rod: LinearPriceSchema = Field(default_factory=LinearPriceSchema)


class CablesSchema(_RateTable):
    pass_cable: FixedPriceSchema = Field(default_factory=FixedPriceSchema)


class LightingSchema(_RateTable):
    led: LinearPriceSchema = Field(default_factory=LinearPriceSchema)


class PricingParametersSchema(_RateTable):
    """Root model of a pricing parameter document.

    ``doors`` is keyed by door category (``simple``, ``double``, ``glass``,
    ``push``) or by an exact door content name such as ``mirror_door``,
    which takes precedence over its category.
    """

    casing: CasingRatesSchema = Field(default_factory=CasingRatesSchema)
    bases: BasesSchema = Field(default_factory=BasesSchema)
    doors: dict[str, DoorRateSchema] = Field(default_factory=dict)
    hinges: HingesSchema = Field(default_factory=HingesSchema)
    handles: dict[HandleType, UnitPriceSchema] = Field(default_factory=dict)
    drawers: dict[str, DrawerRateSchema] = Field(default_factory=dict)
    shelves: ShelvesSchema = Field(default_factory=ShelvesSchema)
    wardrobe: WardrobeSchema = Field(default_factory=WardrobeSchema)
    cables: CablesSchema = Field(default_factory=CablesSchema)
    lighting: LightingSchema = Field(default_factory=LightingSchema)
    volume_price_per_m3: float | None = Field(
        default=None, ge=0, description="Casing price by volume without a material"
    )

    @field_validator("doors")
    @classmethod
    def validate_door_keys(
        cls, v: dict[str, DoorRateSchema]
    ) -> dict[str, DoorRateSchema]:
        """Door keys are categories or door content names."""
        allowed = DOOR_RATE_KEYS | {door.value for door in DOOR_CONTENTS}
        unknown = sorted(set(v) - allowed)
        if unknown:
            raise ValueError(
                f"Unknown door rate key(s) {unknown}. Allowed: {sorted(allowed)}"
            )
        return v

    @field_validator("drawers")
    @classmethod
    def validate_drawer_keys(
        cls, v: dict[str, DrawerRateSchema]
    ) -> dict[str, DrawerRateSchema]:
        unknown = sorted(set(v) - {"standard", "push"})
        if unknown:
            raise ValueError(
                f"Unknown drawer rate key(s) {unknown}. Allowed: ['push', 'standard']"
            )
        return v
