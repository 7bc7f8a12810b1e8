"""Configuration schema and loading system.

This package provides JSON-based loading and validation of saved
furniture configurations and pricing parameters.

Public API:
    - ConfigurationSchema: Root configuration model
    - PricingParametersSchema: Pricing rate tables
    - load_config / load_config_from_dict: Load a configuration
    - load_pricing / load_pricing_from_dict: Load pricing parameters
    - dump_config / save_config: Write a configuration back
    - ConfigError: Exception for configuration errors
    - validate_config: Perform full configuration validation
    - config_to_tree, config_to_envelope, config_to_material_rates,
      pricing_to_parameters, domain_to_config: Schema/domain adapters

Example:
    >>> from pathlib import Path
    >>> from carcass.application.config import load_config, ConfigError
    >>>
    >>> try:
    ...     config = load_config(Path("sideboard.json"))
    ...     print(f"{config.dimensions.width} x {config.dimensions.height}")
    ... except ConfigError as e:
    ...     print(f"Error: {e}")
"""

from carcass.application.config.adapter import (
    TreeConversion,
    config_to_envelope,
    config_to_material_rates,
    config_to_tree,
    domain_to_config,
    pricing_to_parameters,
    resolve_socle_height,
    schema_to_tree,
    zone_to_schema,
)
from carcass.application.config.loader import (
    ConfigError,
    dump_config,
    load_config,
    load_config_from_dict,
    load_pricing,
    load_pricing_from_dict,
    save_config,
)
from carcass.application.config.schemas import (
    ComponentColorSchema,
    ConfigurationSchema,
    DimensionsSchema,
    MaterialSelectionSchema,
    PricingParametersSchema,
    ZoneColorSchema,
    ZoneSchema,
)
from carcass.application.config.validator import (
    ValidationError,
    ValidationResult,
    ValidationWarning,
    validate_config,
)

__all__ = [
    "ComponentColorSchema",
    "ConfigError",
    "ConfigurationSchema",
    "DimensionsSchema",
    "MaterialSelectionSchema",
    "PricingParametersSchema",
    "TreeConversion",
    "ValidationError",
    "ValidationResult",
    "ValidationWarning",
    "ZoneColorSchema",
    "ZoneSchema",
    "config_to_envelope",
    "config_to_material_rates",
    "config_to_tree",
    "domain_to_config",
    "dump_config",
    "load_config",
    "load_config_from_dict",
    "load_pricing",
    "load_pricing_from_dict",
    "pricing_to_parameters",
    "resolve_socle_height",
    "save_config",
    "schema_to_tree",
    "validate_config",
    "zone_to_schema",
]
