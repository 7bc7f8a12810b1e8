"""Configuration validation endpoints."""

from fastapi import APIRouter

from carcass.application.config import load_config_from_dict, validate_config
from carcass.web.schemas.requests import ConfigurationRequest
from carcass.web.schemas.responses import ValidationResultSchema

router = APIRouter(prefix="/validate", tags=["validate"])


@router.post("", response_model=ValidationResultSchema)
async def validate_configuration(
    request: ConfigurationRequest,
) -> ValidationResultSchema:
    """Validate a configuration without resolving it.

    Schema errors are returned as a 422 error response; errors and
    warnings of a schema-valid configuration are returned here.
    """
    config = load_config_from_dict(request.config)
    result = validate_config(config)

    return ValidationResultSchema(
        is_valid=result.is_valid,
        errors=[{"message": e.message, "path": e.path} for e in result.errors],
        warnings=[
            {"message": w.message, "path": w.path, "suggestion": w.suggestion}
            for w in result.warnings
        ],
    )
