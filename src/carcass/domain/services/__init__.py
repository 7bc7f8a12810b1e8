"""Domain services built on the panel segmentation.

This package provides:
- Pricing of a carcass from its tree, envelope and material rates
- The compact descriptor encoder
- A memoizing segmentation cache
- Mapping of segments to 3D boxes
"""

from .descriptor import encode_descriptor
from .layout_cache import LayoutCache
from .panel_mapper import MappedPanel, SegmentScene3DMapper
from .pricing import (
    DoorRates,
    DrawerRates,
    MaterialRates,
    PriceBreakdown,
    PriceCategory,
    PriceLine,
    PriceQuote,
    PricingEngine,
    PricingParameters,
    SocleRates,
    calculate_price,
    door_rate_key,
)

__all__ = [
    "DoorRates",
    "DrawerRates",
    "LayoutCache",
    "MappedPanel",
    "MaterialRates",
    "PriceBreakdown",
    "PriceCategory",
    "PriceLine",
    "PriceQuote",
    "PricingEngine",
    "PricingParameters",
    "SegmentScene3DMapper",
    "SocleRates",
    "calculate_price",
    "door_rate_key",
    "encode_descriptor",
]
