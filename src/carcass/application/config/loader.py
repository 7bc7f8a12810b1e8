"""Configuration file loader with comprehensive error handling.

This module loads and writes the JSON documents of the engine: saved
furniture configurations and pricing parameter tables. File system
errors, JSON syntax errors and Pydantic validation errors are all raised
as ``ConfigError`` with clear, actionable messages.
"""

import json
import logging
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from carcass.application.config.schemas import (
    ConfigurationSchema,
    PricingParametersSchema,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class ConfigError(Exception):
    """Exception raised for configuration-related errors.

    Attributes:
        message: The primary error message
        error_type: Category of error (file_not_found, permission_denied,
            file_read_error, json_parse, validation)
        path: Path to the configuration file (if applicable)
        details: Additional error details (line/column for JSON, validation errors, etc.)
    """

    def __init__(
        self,
        message: str,
        error_type: str = "unknown",
        path: Path | None = None,
        details: list[dict[str, Any]] | None = None,
    ) -> None:
        self.message = message
        self.error_type = error_type
        self.path = path
        self.details = details or []
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


def _format_json_path(loc: tuple[str | int, ...]) -> str:
    """Format a Pydantic location tuple as a JSON path string.

    Examples:
        >>> _format_json_path(("zoneTree", "children", 1, "content"))
        'zoneTree.children[1].content'
        >>> _format_json_path(("dimensions", "width"))
        'dimensions.width'
    """
    parts: list[str] = []
    for segment in loc:
        if isinstance(segment, int):
            if parts:
                parts[-1] = f"{parts[-1]}[{segment}]"
            else:
                parts.append(f"[{segment}]")
        else:
            parts.append(str(segment))
    return ".".join(parts)


def _extract_validation_errors(
    error: PydanticValidationError,
) -> list[dict[str, Any]]:
    """Turn Pydantic errors into ``{path, message, value, error_type}`` dicts."""
    details: list[dict[str, Any]] = []
    for err in error.errors():
        details.append(
            {
                "path": _format_json_path(err["loc"]),
                "message": err["msg"],
                "value": err.get("input"),
                "error_type": err["type"],
            }
        )
    return details


def _format_validation_error_message(
    details: list[dict[str, Any]], subject: str = "Configuration"
) -> str:
    lines = [f"{subject} validation failed:"]
    for detail in details:
        path = detail["path"]
        message = detail["message"]
        value = detail.get("value")
        # Whole sub-documents are too noisy to echo back
        if value is not None and not isinstance(value, (dict, list)):
            lines.append(f"  - {path}: {message} (got: {value!r})")
        else:
            lines.append(f"  - {path}: {message}")
    return "\n".join(lines)


def _read_json(path: Path, subject: str) -> Any:
    if not path.exists():
        raise ConfigError(
            message=f"{subject} file not found: {path}",
            error_type="file_not_found",
            path=path,
        )

    try:
        content = path.read_text(encoding="utf-8")
    except PermissionError:
        raise ConfigError(
            message=f"Permission denied reading {subject.lower()} file: {path}",
            error_type="permission_denied",
            path=path,
        )
    except OSError as e:
        raise ConfigError(
            message=f"Error reading {subject.lower()} file: {path}: {e}",
            error_type="file_read_error",
            path=path,
        )

    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigError(
            message=(
                f"Invalid JSON in {subject.lower()} file: {path} "
                f"(line {e.lineno}, column {e.colno}): {e.msg}"
            ),
            error_type="json_parse",
            path=path,
            details=[{"line": e.lineno, "column": e.colno, "message": e.msg}],
        )


def _validate(
    model: type[ModelT], data: Any, subject: str, path: Path | None = None
) -> ModelT:
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        details = _extract_validation_errors(e)
        raise ConfigError(
            message=_format_validation_error_message(details, subject),
            error_type="validation",
            path=path,
            details=details,
        )


def load_config(path: Path) -> ConfigurationSchema:
    """Load and validate a saved configuration from a JSON file.

    Args:
        path: Path to the JSON configuration file

    Returns:
        A validated ConfigurationSchema instance. The zone tree is not
        normalized yet; see ``config_to_tree``.

    Raises:
        ConfigError: If the file cannot be loaded or validated.

    Example:
        >>> try:
        ...     config = load_config(Path("wardrobe.json"))
        ... except ConfigError as e:
        ...     for detail in e.details:
        ...         print(f"  {detail['path']}: {detail['message']}")
    """
    data = _read_json(path, "Config")
    config = _validate(ConfigurationSchema, data, "Configuration", path)
    logger.debug(f"Loaded configuration from {path}")
    return config


def load_config_from_dict(data: dict[str, Any]) -> ConfigurationSchema:
    """Load and validate a configuration from a dictionary.

    Raises:
        ConfigError: If the data fails validation.
    """
    return _validate(ConfigurationSchema, data, "Configuration")


def load_pricing(path: Path | None = None) -> PricingParametersSchema:
    """Load pricing parameters from a JSON file.

    Args:
        path: Path to the pricing document; None returns the defaults.

    Raises:
        ConfigError: If the file cannot be loaded or validated.
    """
    if path is None:
        return PricingParametersSchema()
    data = _read_json(path, "Pricing")
    pricing = _validate(PricingParametersSchema, data, "Pricing parameters", path)
    logger.debug(f"Loaded pricing parameters from {path}")
    return pricing


def load_pricing_from_dict(data: dict[str, Any]) -> PricingParametersSchema:
    return _validate(PricingParametersSchema, data, "Pricing parameters")


def dump_config(config: ConfigurationSchema) -> dict[str, Any]:
    """Serialize a configuration to its camelCase JSON shape.

    Unset optional values are omitted so that a loaded document is written
    back in the shape it was read.
    """
    return config.model_dump(mode="json", by_alias=True, exclude_none=True)


def save_config(config: ConfigurationSchema, path: Path) -> None:
    """Write a configuration as indented JSON."""
    path.write_text(json.dumps(dump_config(config), indent=2) + "\n", encoding="utf-8")
    logger.info(f"Saved configuration to {path}")
