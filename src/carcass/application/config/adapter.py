"""Adapters between the configuration schemas and domain objects.

Loading is lenient: the persisted tree is converted into a valid ``Zone``
tree, and every repair (unknown content, leaf with children, split ratios
that do not match the children) is reported as a correction message
rather than raised.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import TypeVar

from carcass.application.config.schemas import (
    ConfigurationSchema,
    DimensionsSchema,
    MaterialSelectionSchema,
    PricingParametersSchema,
    ZoneColorSchema,
    ZoneSchema,
)
from carcass.domain import normalize_tree
from carcass.domain.services import (
    DoorRates,
    DrawerRates,
    MaterialRates,
    PricingParameters,
    SocleRates,
)
from carcass.domain.value_objects import (
    DEFAULT_SOCLE_HEIGHT,
    Dimensions,
    Envelope,
    GlobalDoorType,
    HandleType,
    SocleKind,
    ZoneColor,
    ZoneContent,
    ZoneKind,
)
from carcass.domain.zone import Zone, default_ratios

logger = logging.getLogger(__name__)

EnumT = TypeVar("EnumT", bound=Enum)
T = TypeVar("T")


@dataclass(frozen=True)
class TreeConversion:
    """A domain tree built from its persisted form.

    Attributes:
        tree: The valid, normalized tree.
        corrections: One message per repair made while converting.
    """

    tree: Zone
    corrections: tuple[str, ...] = ()

    @property
    def was_corrected(self) -> bool:
        return bool(self.corrections)


def _parse_enum(
    enum_cls: type[EnumT],
    raw: str,
    zone_id: str,
    field_name: str,
    default: T,
    corrections: list[str],
) -> EnumT | T:
    try:
        return enum_cls(raw)
    except ValueError:
        label = default.value if isinstance(default, Enum) else "none"
        message = f"{zone_id}: unknown {field_name} '{raw}', using '{label}'"
        logger.warning(f"Corrected zone tree: {message}")
        corrections.append(message)
        return default


def _schema_ratios(schema: ZoneSchema, count: int) -> tuple[float, ...]:
    if schema.split_ratios is not None and len(schema.split_ratios) == count:
        return tuple(schema.split_ratios)
    if schema.split_ratio is not None and count == 2:
        return (schema.split_ratio, 100.0 - schema.split_ratio)
    if schema.split_ratios is not None:
        # Mismatched length is repaired by normalize_tree
        return tuple(schema.split_ratios)
    return default_ratios(count)


def _schema_to_zone(schema: ZoneSchema, corrections: list[str]) -> Zone:
    content = _parse_enum(
        ZoneContent, schema.content, schema.id, "content", ZoneContent.EMPTY, corrections
    )

    door_content: ZoneContent | None = None
    if schema.door_content not in (None, "", ZoneContent.EMPTY.value):
        door_content = _parse_enum(
            ZoneContent, schema.door_content, schema.id, "door content", None, corrections
        )
        if door_content is not None and not door_content.is_door:
            corrections.append(
                f"{schema.id}: door content '{door_content.value}' is not a door, removed"
            )
            door_content = None

    handle_type = None
    if schema.handle_type:
        handle_type = _parse_enum(
            HandleType, schema.handle_type, schema.id, "handle type", None, corrections
        )

    kind = schema.type
    children_schemas = schema.children or []
    if kind is ZoneKind.LEAF and children_schemas:
        corrections.append(
            f"{schema.id}: leaf zone with {len(children_schemas)} children, children dropped"
        )
        children_schemas = []
    elif kind is not ZoneKind.LEAF and not children_schemas:
        corrections.append(f"{schema.id}: {kind.value} split without children, made a leaf")
        kind = ZoneKind.LEAF

    children = tuple(_schema_to_zone(child, corrections) for child in children_schemas)
    ratios = _schema_ratios(schema, len(children)) if children else ()

    zone_color = None
    if schema.zone_color is not None:
        zone_color = ZoneColor(
            color_id=schema.zone_color.color_id,
            hex=schema.zone_color.hex,
            image_url=schema.zone_color.image_url,
        )

    return Zone(
        id=schema.id,
        kind=kind,
        children=children,
        split_ratios=ratios,
        content=content,
        door_content=door_content,
        handle_type=handle_type,
        has_light=bool(schema.has_light),
        has_cable_hole=bool(schema.has_cable_hole),
        has_dressing=bool(schema.has_dressing),
        glass_shelf_count=schema.glass_shelf_count,
        glass_shelf_positions=tuple(schema.glass_shelf_positions or ()),
        zone_color=zone_color,
        is_open_space=bool(schema.is_open_space),
    )


def schema_to_tree(schema: ZoneSchema) -> TreeConversion:
    """Convert a persisted tree into a valid, normalized domain tree."""
    corrections: list[str] = []
    tree = _schema_to_zone(schema, corrections)
    normalized = normalize_tree(tree)
    return TreeConversion(
        tree=normalized.tree, corrections=tuple(corrections) + normalized.corrections
    )


def config_to_tree(config: ConfigurationSchema) -> TreeConversion:
    return schema_to_tree(config.zone_tree)


def zone_to_schema(zone: Zone) -> ZoneSchema:
    """Convert a domain tree to its persisted form.

    Two-child splits write ``splitRatio``, wider splits ``splitRatios``.
    """
    children = None
    split_ratio = None
    split_ratios = None
    if zone.is_split:
        children = [zone_to_schema(child) for child in zone.children]
        ratios = list(zone.resolved_ratios())
        if len(ratios) == 2:
            split_ratio = ratios[0]
        else:
            split_ratios = ratios

    zone_color = None
    if zone.zone_color is not None:
        zone_color = ZoneColorSchema(
            color_id=zone.zone_color.color_id,
            hex=zone.zone_color.hex,
            image_url=zone.zone_color.image_url,
        )

    return ZoneSchema(
        id=zone.id,
        type=zone.kind,
        content=zone.content.value,
        door_content=zone.door_content.value if zone.door_content else None,
        children=children,
        split_ratio=split_ratio,
        split_ratios=split_ratios,
        handle_type=zone.handle_type.value if zone.handle_type else None,
        has_light=zone.has_light or None,
        has_cable_hole=zone.has_cable_hole or None,
        has_dressing=zone.has_dressing or None,
        glass_shelf_count=zone.glass_shelf_count,
        glass_shelf_positions=list(zone.glass_shelf_positions) or None,
        zone_color=zone_color,
        is_open_space=zone.is_open_space or None,
    )


def resolve_socle_height(socle: SocleKind, socle_height: float | None) -> float:
    """Socle plane height: explicit value, else the default for the socle kind."""
    if socle_height is not None:
        return socle_height
    return 0.0 if socle is SocleKind.NONE else DEFAULT_SOCLE_HEIGHT


def config_to_envelope(config: ConfigurationSchema) -> Envelope:
    """Build the envelope of a configuration.

    Raises:
        DimensionError: If the dimensions cannot hold a carcass.
    """
    dims = config.dimensions
    return Envelope(
        dimensions=Dimensions(dims.width, dims.height, dims.depth),
        thickness=config.thickness,
        socle_height=resolve_socle_height(config.socle, config.socle_height),
        back_thickness=config.back_thickness,
    )


def config_to_material_rates(
    selection: MaterialSelectionSchema,
    sample_prices: Mapping[int, float] | None = None,
) -> MaterialRates | None:
    """Resolve per-square-metre material rates from a material selection.

    A colour's price is its ``pricePerM2`` when present, else the price of
    its ``colorId`` in ``sample_prices``. In multi-colour mode the
    ``structure`` component defaults to the main selection, and the
    back, doors and drawers fall back to the structure.

    Returns:
        The rates, or None when no structure price can be found.
    """
    prices = sample_prices or {}

    def lookup(price: float | None, color_id: int | None) -> float | None:
        if price is not None:
            return price
        if color_id is not None:
            return prices.get(color_id)
        return None

    base = lookup(selection.price_per_m2, selection.color_id)
    if not selection.use_multi_color:
        return None if base is None else MaterialRates.single(base)

    def component(name: str) -> float | None:
        color = selection.component_colors.get(name)
        if color is None:
            return None
        return lookup(color.price_per_m2, color.color_id)

    structure = component("structure")
    if structure is None:
        structure = base
    if structure is None:
        return None
    return MaterialRates(
        structure=structure,
        back=component("back"),
        doors=component("doors"),
        drawers=component("drawers"),
    )


def _pick(value: T | None, default: T) -> T:
    return default if value is None else value


def pricing_to_parameters(schema: PricingParametersSchema) -> PricingParameters:
    """Merge a pricing document over the engine defaults."""
    defaults = PricingParameters()
    socle_defaults = defaults.socle
    bases = schema.bases

    socle = SocleRates(
        none_price=_pick(bases.none.fixed_price, socle_defaults.none_price),
        metal_price_per_foot=_pick(
            bases.metal.price_per_foot, socle_defaults.metal_price_per_foot
        ),
        metal_foot_interval=_pick(
            bases.metal.foot_interval, socle_defaults.metal_foot_interval
        ),
        wood_price_per_m3=bases.wood.price_per_m3,
        wood_height=_pick(bases.wood.height, socle_defaults.wood_height),
        wood_coefficient=bases.wood.coefficient,
        wood_fallback_price=_pick(
            bases.wood.fixed_price, socle_defaults.wood_fallback_price
        ),
    )

    doors = dict(defaults.doors)
    for key, rate in schema.doors.items():
        base = doors.get(key, DoorRates())
        doors[key] = DoorRates(
            coefficient=_pick(rate.coefficient, base.coefficient),
            hinge_count=_pick(rate.hinge_count, base.hinge_count),
        )

    drawers = dict(defaults.drawers)
    for key, rate in schema.drawers.items():
        base = drawers.get(key, DrawerRates())
        drawers[key] = DrawerRates(
            base_price=_pick(rate.base_price, base.base_price),
            coefficient=_pick(rate.coefficient, base.coefficient),
        )

    handles = {
        handle: price.price_per_unit
        for handle, price in schema.handles.items()
        if price.price_per_unit is not None
    }

    return PricingParameters(
        casing_coefficient=_pick(
            schema.casing.full.coefficient, defaults.casing_coefficient
        ),
        socle=socle,
        doors=doors,
        hinge_price=_pick(schema.hinges.standard.price_per_unit, defaults.hinge_price),
        handles=handles,
        drawers=drawers,
        glass_shelf_price_per_m2=_pick(
            schema.shelves.glass.price_per_m2, defaults.glass_shelf_price_per_m2
        ),
        shelf_price_per_m2=_pick(
            schema.shelves.wood.price_per_m2, defaults.shelf_price_per_m2
        ),
        rod_price_per_linear_meter=_pick(
            schema.wardrobe.rod.price_per_linear_meter,
            defaults.rod_price_per_linear_meter,
        ),
        cable_hole_price=_pick(
            schema.cables.pass_cable.fixed_price, defaults.cable_hole_price
        ),
        light_price_per_linear_meter=_pick(
            schema.lighting.led.price_per_linear_meter,
            defaults.light_price_per_linear_meter,
        ),
        volume_price_per_m3=_pick(
            schema.volume_price_per_m3, defaults.volume_price_per_m3
        ),
    )


def domain_to_config(
    tree: Zone,
    envelope: Envelope,
    deleted_panel_ids: Iterable[str] = (),
    material_selection: MaterialSelectionSchema | None = None,
    socle: SocleKind = SocleKind.NONE,
    door_type: GlobalDoorType = GlobalDoorType.NONE,
) -> ConfigurationSchema:
    """Assemble the persisted configuration of an edited carcass.

    The socle height is only written when it differs from the default of
    the socle kind.
    """
    socle_height = None
    if envelope.socle_height != resolve_socle_height(socle, None):
        socle_height = envelope.socle_height

    return ConfigurationSchema(
        dimensions=DimensionsSchema(
            width=envelope.width, height=envelope.height, depth=envelope.depth
        ),
        zone_tree=zone_to_schema(tree),
        deleted_panel_ids=sorted(deleted_panel_ids),
        material_selection=material_selection or MaterialSelectionSchema(),
        thickness=envelope.thickness,
        back_thickness=envelope.back_thickness,
        socle=socle,
        socle_height=socle_height,
        door_type=door_type,
    )
