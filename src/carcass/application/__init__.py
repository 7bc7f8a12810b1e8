"""Application layer - use cases over saved configurations."""

from carcass.application.commands import ResolveConfigurationCommand
from carcass.application.dtos import ConfigurationOutput

__all__ = [
    "ConfigurationOutput",
    "ResolveConfigurationCommand",
]
