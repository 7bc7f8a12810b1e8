"""Export format endpoints."""

from fastapi import APIRouter
from fastapi.responses import Response

from carcass.application.config import load_config_from_dict
from carcass.infrastructure.exporters import ExporterRegistry
from carcass.web.dependencies import ResolveCommandDep
from carcass.web.exceptions import ResolutionError, UnsupportedFormatError
from carcass.web.schemas.requests import ConfigurationRequest
from carcass.web.schemas.responses import ExportFormatsSchema

router = APIRouter(prefix="/export", tags=["export"])


@router.get("/formats", response_model=ExportFormatsSchema)
async def list_export_formats() -> ExportFormatsSchema:
    """List all available export formats."""
    return ExportFormatsSchema(formats=ExporterRegistry.available_formats())


@router.post("/{format_name}")
async def export_configuration(
    format_name: str,
    request: ConfigurationRequest,
    command: ResolveCommandDep,
) -> Response:
    """Export a configuration as a file download."""
    if not ExporterRegistry.is_registered(format_name):
        raise UnsupportedFormatError(format_name, ExporterRegistry.available_formats())

    config = load_config_from_dict(request.config)
    output = command.execute(config)
    if not output.is_valid:
        raise ResolutionError(output.errors)

    exporter = ExporterRegistry.get(format_name)()
    filename = f"carcass.{exporter.file_extension}"
    return Response(
        content=exporter.render(output),
        media_type=exporter.media_type,
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )
