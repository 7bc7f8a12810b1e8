"""Panel segment endpoints."""

from fastapi import APIRouter

from carcass.application.config import load_config_from_dict
from carcass.infrastructure.exporters import segment_to_dict
from carcass.web.dependencies import ResolveCommandDep
from carcass.web.exceptions import ResolutionError
from carcass.web.schemas.requests import SegmentsRequest
from carcass.web.schemas.responses import PanelSegmentSchema, SegmentsResponseSchema

router = APIRouter(prefix="/segments", tags=["segments"])


@router.post("", response_model=SegmentsResponseSchema)
async def list_segments(
    request: SegmentsRequest,
    command: ResolveCommandDep,
) -> SegmentsResponseSchema:
    """Resolve a configuration into its panel segments.

    Hidden segments are listed with ``visible: false`` and the reason,
    unless ``visible_only`` is set.
    """
    config = load_config_from_dict(request.config)
    output = command.execute(config, include_price=False)
    if not output.is_valid:
        raise ResolutionError(output.errors)

    listed = output.visible_segments if request.visible_only else output.segments
    return SegmentsResponseSchema(
        segments=[
            PanelSegmentSchema.model_validate(segment_to_dict(segment, output.visibility))
            for segment in listed
        ],
        descriptor=output.descriptor,
        corrections=output.corrections,
        stale_panel_ids=sorted(output.stale_panel_ids),
    )
