"""CLI command implementations for the carcass application.

This package contains subcommands for the carcass CLI, including:
- validate: Validate a configuration file
"""

from carcass.cli.commands.validate import display_load_error, validate_command

__all__ = ["display_load_error", "validate_command"]
