"""Pydantic request schemas for the REST API."""

from typing import Any

from pydantic import BaseModel, Field


class ConfigurationRequest(BaseModel):
    """Request carrying a saved configuration document."""

    config: dict[str, Any] = Field(..., description="Saved configuration JSON")


class SegmentsRequest(ConfigurationRequest):
    """Request for the panel segments of a configuration."""

    visible_only: bool = Field(
        default=False, description="Skip deleted and auto-hidden segments"
    )


class PriceRequest(ConfigurationRequest):
    """Request for pricing a configuration."""

    pricing: dict[str, Any] | None = Field(
        default=None, description="Pricing parameters JSON; engine defaults if omitted"
    )
    sample_prices: dict[int, float] | None = Field(
        default=None,
        description="Material price per m2 keyed by colour id, used when the "
        "material selection carries no price",
    )
