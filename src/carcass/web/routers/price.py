"""Pricing endpoints."""

from fastapi import APIRouter

from carcass.application import ResolveConfigurationCommand
from carcass.application.config import (
    load_config_from_dict,
    load_pricing_from_dict,
    pricing_to_parameters,
)
from carcass.domain.services import PricingEngine
from carcass.infrastructure.exporters import quote_to_dict
from carcass.web.dependencies import LayoutCacheDep
from carcass.web.exceptions import ResolutionError
from carcass.web.schemas.requests import PriceRequest
from carcass.web.schemas.responses import PriceResponseSchema

router = APIRouter(prefix="/price", tags=["price"])


@router.post("", response_model=PriceResponseSchema)
async def price_configuration(
    request: PriceRequest,
    cache: LayoutCacheDep,
) -> PriceResponseSchema:
    """Price a configuration with an itemized breakdown."""
    config = load_config_from_dict(request.config)
    pricing = load_pricing_from_dict(request.pricing or {})

    command = ResolveConfigurationCommand(
        pricing_engine=PricingEngine(pricing_to_parameters(pricing)),
        layout_cache=cache,
    )
    output = command.execute(config, sample_prices=request.sample_prices)
    if not output.is_valid or output.quote is None:
        raise ResolutionError(output.errors)

    return PriceResponseSchema(
        **quote_to_dict(output.quote),
        corrections=output.corrections,
    )
