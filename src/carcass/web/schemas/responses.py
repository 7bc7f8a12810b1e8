"""Pydantic response schemas for the REST API."""

from typing import Any

from pydantic import BaseModel, Field


class PositionSchema(BaseModel):
    x: float
    y: float
    z: float


class SizeSchema(BaseModel):
    width: float
    height: float
    depth: float


class PanelSegmentSchema(BaseModel):
    """One panel segment in millimetres."""

    id: str = Field(..., description="Stable segment id")
    kind: str = Field(..., description="left, right, top, bottom, back or separator")
    position: PositionSchema = Field(..., description="Minimum corner")
    size: SizeSchema
    orientation: str | None = Field(default=None, description="Separator direction")
    zone_id: str | None = Field(default=None, description="Owning zone")
    visible: bool = True
    hidden_reason: str | None = Field(
        default=None, description="'deleted' or 'auto' for hidden segments"
    )


class SegmentsResponseSchema(BaseModel):
    """Response for segment listing."""

    segments: list[PanelSegmentSchema]
    descriptor: str = Field(..., description="Compact descriptor of the tree")
    corrections: list[str] = Field(
        default_factory=list, description="Repairs made while loading the tree"
    )
    stale_panel_ids: list[str] = Field(
        default_factory=list, description="Deleted ids matching no segment"
    )


class PriceLineSchema(BaseModel):
    category: str
    label: str
    amount: float
    ref: str | None = None


class PriceResponseSchema(BaseModel):
    """Response for pricing."""

    total: int = Field(..., description="Total rounded to the nearest unit")
    subtotals: dict[str, float] = Field(..., description="Subtotal per category")
    lines: list[PriceLineSchema] = Field(default_factory=list)
    anomalies: list[str] = Field(
        default_factory=list, description="Items counted as 0 because not finite"
    )
    corrections: list[str] = Field(default_factory=list)


class ValidationResultSchema(BaseModel):
    """Response for configuration validation."""

    is_valid: bool = Field(..., description="Whether configuration is valid")
    errors: list[dict[str, Any]] = Field(
        default_factory=list, description="Validation errors"
    )
    warnings: list[dict[str, Any]] = Field(
        default_factory=list, description="Validation warnings"
    )


class ExportFormatsSchema(BaseModel):
    """Response for listing export formats."""

    formats: list[str] = Field(..., description="Available export formats")


class ErrorResponseSchema(BaseModel):
    """Standard error response."""

    error: str = Field(..., description="Error message")
    error_type: str = Field(..., description="Error category")
    details: Any = Field(default=None, description="Additional error details")
