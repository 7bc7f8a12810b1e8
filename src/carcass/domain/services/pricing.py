"""Manufacturing price of a carcass.

The engine prices the visible panel segments produced by the segmenter
and walks the zone tree with the solver's own frame arithmetic, so a
price always matches the geometry it describes.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum

from ..panel_deletion import PanelDeletionStore, resolve_visibility
from ..panel_segmenter import PanelSegmenter
from ..partition_solver import ZoneFrame, iter_frames
from ..value_objects import (
    Envelope,
    GlobalDoorType,
    HandleType,
    PanelKind,
    PanelSegment,
    SocleKind,
    ZoneContent,
)
from ..zone import Zone

__all__ = [
    "DoorRates",
    "DrawerRates",
    "MaterialRates",
    "PriceBreakdown",
    "PriceCategory",
    "PriceLine",
    "PriceQuote",
    "PricingEngine",
    "PricingParameters",
    "SocleRates",
    "calculate_price",
    "door_rate_key",
]

logger = logging.getLogger(__name__)


class PriceCategory(str, Enum):
    """Sections of the price breakdown."""

    CASING = "casing"
    BACK = "back"
    SOCLE = "socle"
    EQUIPMENT = "equipment"
    SEPARATORS = "separators"
    DOORS = "doors"


@dataclass(frozen=True)
class MaterialRates:
    """Panel material prices per square metre.

    In single-colour mode every component uses ``structure``. In
    multi-colour mode the back, doors and drawers can carry their own
    rates; a missing rate falls back to ``structure``.
    """

    structure: float
    back: float | None = None
    doors: float | None = None
    drawers: float | None = None

    @classmethod
    def single(cls, rate: float) -> MaterialRates:
        return cls(structure=rate)

    @property
    def back_rate(self) -> float:
        return self.structure if self.back is None else self.back

    @property
    def door_rate(self) -> float:
        return self.structure if self.doors is None else self.doors

    @property
    def drawer_rate(self) -> float:
        return self.structure if self.drawers is None else self.drawers


@dataclass(frozen=True)
class DoorRates:
    """Fabrication rates for one door type."""

    coefficient: float = 0.00004
    hinge_count: int = 2


@dataclass(frozen=True)
class DrawerRates:
    """Fabrication rates for one drawer type."""

    base_price: float = 35.0
    coefficient: float = 0.0001


@dataclass(frozen=True)
class SocleRates:
    """Rates for the base under the carcass.

    A wood socle is priced by volume when ``wood_price_per_m3`` is set,
    else by ``wood_coefficient`` times its footprint, else at
    ``wood_fallback_price``.
    """

    none_price: float = 0.0
    metal_price_per_foot: float = 20.0
    metal_foot_interval: float = 2000.0
    wood_price_per_m3: float | None = None
    wood_height: float = 80.0
    wood_coefficient: float | None = None
    wood_fallback_price: float = 60.0


def _default_door_rates() -> dict[str, DoorRates]:
    return {key: DoorRates() for key in ("simple", "double", "glass", "push")}


def _default_drawer_rates() -> dict[str, DrawerRates]:
    return {"standard": DrawerRates(), "push": DrawerRates()}


@dataclass(frozen=True)
class PricingParameters:
    """Rate tables used by the pricing engine.

    Attributes:
        casing_coefficient: Fabrication multiplier on casing and back area.
        socle: Socle rates.
        doors: Door rates keyed by category (``simple``, ``double``,
            ``glass``, ``push``) or by exact content name.
        hinge_price: Price of one hinge.
        handles: Flat price per handle type.
        drawers: Drawer rates keyed by ``standard`` or ``push``.
        glass_shelf_price_per_m2: Glass shelf price.
        shelf_price_per_m2: Price of separator boards.
        rod_price_per_linear_meter: Wardrobe rod price.
        cable_hole_price: Flat cable pass-through price.
        light_price_per_linear_meter: LED strip price.
        volume_price_per_m3: Casing price by volume when no material rate
            is known.
    """

    casing_coefficient: float = 1.2
    socle: SocleRates = field(default_factory=SocleRates)
    doors: Mapping[str, DoorRates] = field(default_factory=_default_door_rates)
    hinge_price: float = 5.0
    handles: Mapping[HandleType, float] = field(default_factory=dict)
    drawers: Mapping[str, DrawerRates] = field(default_factory=_default_drawer_rates)
    glass_shelf_price_per_m2: float = 250.0
    shelf_price_per_m2: float = 80.0
    rod_price_per_linear_meter: float = 20.0
    cable_hole_price: float = 10.0
    light_price_per_linear_meter: float = 15.0
    volume_price_per_m3: float = 1500.0

    def door_rates(self, door: ZoneContent) -> DoorRates:
        """Rates for a door, preferring an exact content-name entry."""
        if door.value in self.doors:
            return self.doors[door.value]
        return self.doors.get(door_rate_key(door), DoorRates())

    def drawer_rates(self, drawer: ZoneContent) -> DrawerRates:
        key = "push" if drawer is ZoneContent.PUSH_DRAWER else "standard"
        return self.drawers.get(key, DrawerRates())


def door_rate_key(door: ZoneContent) -> str:
    """Category of a door content in the door rate table."""
    if door is ZoneContent.DOOR_DOUBLE:
        return "double"
    if door in (ZoneContent.MIRROR_DOOR, ZoneContent.MIRROR_DOOR_RIGHT):
        return "glass"
    if door in (ZoneContent.PUSH_DOOR, ZoneContent.PUSH_DOOR_RIGHT):
        return "push"
    return "simple"


@dataclass(frozen=True)
class PriceLine:
    """One priced item.

    Attributes:
        category: Breakdown section.
        label: Human-readable description.
        amount: Price of the item, unrounded.
        ref: Zone id or panel id the item belongs to, if any.
    """

    category: PriceCategory
    label: str
    amount: float
    ref: str | None = None


@dataclass(frozen=True)
class PriceBreakdown:
    """Itemized price."""

    lines: tuple[PriceLine, ...] = ()

    def subtotal(self, category: PriceCategory) -> float:
        return sum(line.amount for line in self.lines if line.category is category)

    def subtotals(self) -> dict[str, float]:
        return {category.value: self.subtotal(category) for category in PriceCategory}

    def for_ref(self, ref: str) -> list[PriceLine]:
        return [line for line in self.lines if line.ref == ref]

    @property
    def casing(self) -> float:
        return self.subtotal(PriceCategory.CASING)

    @property
    def back(self) -> float:
        return self.subtotal(PriceCategory.BACK)

    @property
    def socle(self) -> float:
        return self.subtotal(PriceCategory.SOCLE)

    @property
    def equipment(self) -> float:
        return self.subtotal(PriceCategory.EQUIPMENT)

    @property
    def separators(self) -> float:
        return self.subtotal(PriceCategory.SEPARATORS)

    @property
    def doors(self) -> float:
        return self.subtotal(PriceCategory.DOORS)


@dataclass(frozen=True)
class PriceQuote:
    """Result of a pricing run.

    Attributes:
        total: Sum of all lines rounded to the nearest unit.
        breakdown: Itemized lines.
        anomalies: Items whose computation was not a finite number and
            were counted as zero.
    """

    total: int
    breakdown: PriceBreakdown
    anomalies: tuple[str, ...] = ()

    @property
    def has_anomalies(self) -> bool:
        return bool(self.anomalies)


class _Ledger:
    """Collects price lines, replacing non-finite amounts with zero."""

    def __init__(self) -> None:
        self.lines: list[PriceLine] = []
        self.anomalies: list[str] = []

    def add(
        self,
        category: PriceCategory,
        label: str,
        amount: float,
        ref: str | None = None,
    ) -> None:
        if not math.isfinite(amount):
            message = f"{label} ({ref or category.value}) evaluated to {amount}"
            logger.warning(f"Pricing anomaly: {message}, counted as 0")
            self.anomalies.append(message)
            amount = 0.0
        self.lines.append(PriceLine(category, label, amount, ref))

    def quote(self) -> PriceQuote:
        total = sum(line.amount for line in self.lines)
        return PriceQuote(
            total=math.floor(total + 0.5),
            breakdown=PriceBreakdown(tuple(self.lines)),
            anomalies=tuple(self.anomalies),
        )


class PricingEngine:
    """Computes the price of a carcass from its tree and envelope.

    Example:
        >>> engine = PricingEngine()
        >>> quote = engine.price(tree, Envelope.of(1200, 730, 400),
        ...                      MaterialRates.single(150.0))
        >>> quote.total, quote.breakdown.casing
    """

    def __init__(self, parameters: PricingParameters | None = None) -> None:
        self.parameters = parameters or PricingParameters()

    def price(
        self,
        tree: Zone,
        envelope: Envelope,
        rates: MaterialRates | None = None,
        deletions: PanelDeletionStore | Iterable[str] = (),
        socle: SocleKind = SocleKind.NONE,
        global_door: GlobalDoorType = GlobalDoorType.NONE,
    ) -> PriceQuote:
        """Price a carcass.

        Args:
            tree: Root of the zone tree.
            envelope: Outer envelope; invalid envelopes fail on construction.
            rates: Material prices per square metre; None prices the casing
                by volume and ignores material surcharges.
            deletions: Deleted panel ids, excluded from structural cost.
            socle: Kind of base under the carcass.
            global_door: Doors covering the whole front.

        Returns:
            The rounded total with its breakdown.

        Raises:
            DimensionError: If the envelope cannot hold the tree.
        """
        segments = PanelSegmenter(envelope).segment(tree)
        visibility = resolve_visibility(segments, deletions, tree)
        ledger = _Ledger()

        self._price_casing(visibility.visible, envelope, rates, ledger)
        self._price_socle(envelope, socle, ledger)
        for frame in iter_frames(tree, envelope.content_rect, envelope.thickness):
            self._price_zone(frame, envelope, rates, ledger)
        self._price_separators(visibility.visible, ledger)
        self._price_global_doors(tree, envelope, rates, global_door, ledger)

        quote = ledger.quote()
        logger.debug(
            f"Priced {len(ledger.lines)} line(s), total {quote.total} "
            f"({len(visibility.hidden)} hidden panel(s))"
        )
        return quote

    def _price_casing(
        self,
        visible: tuple[PanelSegment, ...],
        envelope: Envelope,
        rates: MaterialRates | None,
        ledger: _Ledger,
    ) -> None:
        params = self.parameters
        if rates is None:
            ledger.add(
                PriceCategory.CASING,
                "Casing (volume estimate)",
                envelope.dimensions.volume_m3 * params.volume_price_per_m3,
            )
            return

        for segment in visible:
            if segment.kind.is_casing:
                ledger.add(
                    PriceCategory.CASING,
                    f"{segment.kind.value.capitalize()} panel",
                    segment.face_area_m2 * rates.structure * params.casing_coefficient,
                    segment.id,
                )
            elif segment.kind is PanelKind.BACK:
                ledger.add(
                    PriceCategory.BACK,
                    "Back panel",
                    segment.face_area_m2 * rates.back_rate * params.casing_coefficient,
                    segment.id,
                )

    def _price_socle(self, envelope: Envelope, socle: SocleKind, ledger: _Ledger) -> None:
        rates = self.parameters.socle
        width, depth = envelope.width, envelope.depth

        if socle is SocleKind.METAL:
            feet = math.ceil(width / rates.metal_foot_interval) * 2
            ledger.add(
                PriceCategory.SOCLE,
                f"Metal feet x{feet}",
                feet * rates.metal_price_per_foot,
            )
        elif socle is SocleKind.WOOD:
            if rates.wood_price_per_m3 is not None:
                volume = width * depth * rates.wood_height / 1e9
                amount = rates.wood_price_per_m3 * volume
            elif rates.wood_coefficient is not None:
                amount = rates.wood_coefficient * width * depth
            else:
                amount = rates.wood_fallback_price
            ledger.add(PriceCategory.SOCLE, "Wood socle", amount)
        else:
            ledger.add(PriceCategory.SOCLE, "No socle", rates.none_price)

    def _door_amount(
        self, door: ZoneContent, width: float, height: float, rates: MaterialRates | None
    ) -> float:
        door_rates = self.parameters.door_rates(door)
        surcharge = rates.door_rate * width * height / 1e6 if rates is not None else 0.0
        return (
            door_rates.coefficient * width * height
            + door_rates.hinge_count * self.parameters.hinge_price
            + surcharge
        )

    def _price_zone(
        self,
        frame: ZoneFrame,
        envelope: Envelope,
        rates: MaterialRates | None,
        ledger: _Ledger,
    ) -> None:
        params = self.parameters
        zone = frame.zone
        width, height = frame.rect.width, frame.rect.height
        depth = envelope.depth

        door = zone.effective_door()
        if door is not None:
            ledger.add(
                PriceCategory.DOORS,
                f"Door ({door.value})",
                self._door_amount(door, width, height, rates),
                zone.id,
            )

        has_front = door is not None or (zone.is_leaf and zone.content.is_drawer)
        if zone.handle_type is not None and has_front:
            ledger.add(
                PriceCategory.EQUIPMENT,
                f"Handle ({zone.handle_type.value})",
                params.handles.get(zone.handle_type, 0.0),
                zone.id,
            )

        if not zone.is_leaf:
            return

        content = zone.content
        if content.is_drawer:
            drawer = params.drawer_rates(content)
            surcharge = rates.drawer_rate * width * height / 1e6 if rates is not None else 0.0
            ledger.add(
                PriceCategory.EQUIPMENT,
                f"Drawer ({content.value})",
                drawer.base_price + drawer.coefficient * width * depth + surcharge,
                zone.id,
            )
        elif content is ZoneContent.GLASS_SHELF:
            count = zone.glass_shelf_count or 1
            ledger.add(
                PriceCategory.EQUIPMENT,
                f"Glass shelves x{count}",
                params.glass_shelf_price_per_m2 * width * depth / 1e6 * count,
                zone.id,
            )

        if content is ZoneContent.DRESSING or zone.has_dressing:
            ledger.add(
                PriceCategory.EQUIPMENT,
                "Wardrobe rod",
                params.rod_price_per_linear_meter * width / 1000,
                zone.id,
            )
        if zone.has_cable_hole:
            ledger.add(
                PriceCategory.EQUIPMENT, "Cable pass-through", params.cable_hole_price, zone.id
            )
        if zone.has_light:
            ledger.add(
                PriceCategory.EQUIPMENT,
                "LED lighting",
                params.light_price_per_linear_meter * width / 1000,
                zone.id,
            )

    def _price_separators(self, visible: tuple[PanelSegment, ...], ledger: _Ledger) -> None:
        rate = self.parameters.shelf_price_per_m2
        for segment in visible:
            if segment.kind is PanelKind.SEPARATOR:
                ledger.add(
                    PriceCategory.SEPARATORS,
                    f"Separator ({segment.orientation.value})",
                    rate * segment.face_area_m2,
                    segment.id,
                )

    def _price_global_doors(
        self,
        tree: Zone,
        envelope: Envelope,
        rates: MaterialRates | None,
        global_door: GlobalDoorType,
        ledger: _Ledger,
    ) -> None:
        if global_door is GlobalDoorType.NONE:
            return
        if tree.has_zone_door():
            logger.debug("Zone doors present, global doors not priced")
            return

        door = (
            ZoneContent.DOOR_DOUBLE
            if global_door is GlobalDoorType.DOUBLE
            else ZoneContent.DOOR
        )
        ledger.add(
            PriceCategory.DOORS,
            f"Front doors ({global_door.value})",
            self._door_amount(door, envelope.width, envelope.carcass_height, rates),
        )


def calculate_price(
    tree: Zone,
    envelope: Envelope,
    rates: MaterialRates | None = None,
    deletions: PanelDeletionStore | Iterable[str] = (),
    parameters: PricingParameters | None = None,
    socle: SocleKind = SocleKind.NONE,
    global_door: GlobalDoorType = GlobalDoorType.NONE,
) -> PriceQuote:
    """Function form of ``PricingEngine.price``."""
    return PricingEngine(parameters).price(
        tree, envelope, rates, deletions, socle=socle, global_door=global_door
    )
