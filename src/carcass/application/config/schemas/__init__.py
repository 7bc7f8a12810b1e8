"""Pydantic schema models for configuration and pricing documents.

- configuration_schema.py: Saved furniture configuration
- pricing_schema.py: Pricing rate tables
"""

from carcass.application.config.schemas.configuration_schema import (
    ComponentColorSchema as ComponentColorSchema,
    ConfigurationSchema as ConfigurationSchema,
    DimensionsSchema as DimensionsSchema,
    MaterialSelectionSchema as MaterialSelectionSchema,
    ZoneColorSchema as ZoneColorSchema,
    ZoneSchema as ZoneSchema,
)
from carcass.application.config.schemas.pricing_schema import (
    DOOR_RATE_KEYS as DOOR_RATE_KEYS,
    BasesSchema as BasesSchema,
    DoorRateSchema as DoorRateSchema,
    DrawerRateSchema as DrawerRateSchema,
    PricingParametersSchema as PricingParametersSchema,
)
