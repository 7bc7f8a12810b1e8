"""Pydantic schemas for the REST API."""

from carcass.web.schemas.requests import (
    ConfigurationRequest,
    PriceRequest,
    SegmentsRequest,
)
from carcass.web.schemas.responses import (
    ErrorResponseSchema,
    ExportFormatsSchema,
    PanelSegmentSchema,
    PriceLineSchema,
    PriceResponseSchema,
    SegmentsResponseSchema,
    ValidationResultSchema,
)

__all__ = [
    # Requests
    "ConfigurationRequest",
    "PriceRequest",
    "SegmentsRequest",
    # Responses
    "ErrorResponseSchema",
    "ExportFormatsSchema",
    "PanelSegmentSchema",
    "PriceLineSchema",
    "PriceResponseSchema",
    "SegmentsResponseSchema",
    "ValidationResultSchema",
]
