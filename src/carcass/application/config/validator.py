"""Validation structures and configuration checks.

Validation never raises: blocking problems (an envelope that cannot hold
a carcass, a tree that does not fit) are errors, and repairs made while
loading (unknown content, mismatched ratios, stale panel deletions) are
warnings.
"""

from dataclasses import dataclass, field
from typing import Any

from carcass.application.config.adapter import (
    config_to_envelope,
    config_to_tree,
    resolve_socle_height,
)
from carcass.application.config.schemas import ConfigurationSchema
from carcass.domain import PanelSegmenter
from carcass.domain.value_objects import (
    DimensionError,
    Dimensions,
    ZoneContent,
    validate_envelope,
)


@dataclass
class ValidationError:
    """Represents a blocking validation error.

    Attributes:
        path: JSON path to the invalid field (e.g., "dimensions")
        message: Human-readable description of the error
        value: The invalid value that caused the error
    """

    path: str
    message: str
    value: Any = None


@dataclass
class ValidationWarning:
    """Represents a non-blocking validation warning.

    Attributes:
        path: JSON path to the concerning field
        message: Human-readable description of the concern
        suggestion: Optional suggested remediation
    """

    path: str
    message: str
    suggestion: str | None = None


@dataclass
class ValidationResult:
    """Container for validation errors and warnings.

    Attributes:
        errors: List of blocking validation errors
        warnings: List of non-blocking validation warnings
    """

    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[ValidationWarning] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """Check if the configuration has no blocking errors."""
        return len(self.errors) == 0

    @property
    def has_warnings(self) -> bool:
        return len(self.warnings) > 0

    @property
    def exit_code(self) -> int:
        """Get the CLI exit code based on validation status.

        Returns:
            0 if valid with no warnings
            1 if there are errors
            2 if valid but has warnings
        """
        if self.errors:
            return 1
        if self.warnings:
            return 2
        return 0

    def add_error(
        self, path: str, message: str, value: Any = None
    ) -> "ValidationResult":
        """Add a validation error and return self for chaining."""
        self.errors.append(ValidationError(path=path, message=message, value=value))
        return self

    def add_warning(
        self, path: str, message: str, suggestion: str | None = None
    ) -> "ValidationResult":
        """Add a validation warning and return self for chaining."""
        self.warnings.append(
            ValidationWarning(path=path, message=message, suggestion=suggestion)
        )
        return self

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)
        return self


CORRECTION_SUGGESTION = "Save the configuration to persist the corrected tree"


def check_envelope(config: ConfigurationSchema) -> ValidationResult:
    """Check that the dimensions, thickness and socle leave room for content."""
    result = ValidationResult()
    dims = config.dimensions
    for message in validate_envelope(
        Dimensions(dims.width, dims.height, dims.depth),
        config.thickness,
        resolve_socle_height(config.socle, config.socle_height),
        config.back_thickness,
    ):
        result.add_error("dimensions", message)
    return result


def check_glass_shelves(config: ConfigurationSchema) -> ValidationResult:
    """Warn about glass shelf settings that the renderer will ignore."""
    result = ValidationResult()
    tree = config_to_tree(config).tree
    for zone in tree.walk():
        positions = zone.glass_shelf_positions
        if not positions:
            continue
        if zone.content is not ZoneContent.GLASS_SHELF:
            result.add_warning(
                "zoneTree",
                f"{zone.id}: glass shelf positions on '{zone.content.value}' content",
                suggestion="Set the content to glass_shelf or clear the positions",
            )
        elif len(positions) != (zone.glass_shelf_count or 1):
            result.add_warning(
                "zoneTree",
                f"{zone.id}: {len(positions)} shelf position(s) for "
                f"{zone.glass_shelf_count or 1} glass shelf(s)",
            )
    return result


def validate_config(config: ConfigurationSchema) -> ValidationResult:
    """Perform full validation of a loaded configuration.

    Args:
        config: A configuration that passed schema validation.

    Returns:
        ValidationResult with errors for unbuildable configurations and
        warnings for every correction applied on load.
    """
    result = check_envelope(config)
    if not result.is_valid:
        return result

    conversion = config_to_tree(config)
    for correction in conversion.corrections:
        result.add_warning("zoneTree", correction, suggestion=CORRECTION_SUGGESTION)

    try:
        segments = PanelSegmenter(config_to_envelope(config)).segment(conversion.tree)
    except DimensionError as e:
        return result.add_error("zoneTree", str(e))

    known = {segment.id for segment in segments}
    for panel_id in config.deleted_panel_ids:
        if panel_id not in known:
            result.add_warning(
                "deletedPanelIds",
                f"Deleted panel '{panel_id}' matches no panel of the current layout",
                suggestion="It is dropped when the configuration is saved",
            )

    return result.merge(check_glass_shelves(config))
