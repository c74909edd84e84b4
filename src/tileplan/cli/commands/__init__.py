"""CLI command implementations for the tileplan application.

This package contains subcommands for the tileplan CLI, including:
- validate: Validate a configuration file
"""

from tileplan.cli.commands.validate import validate_command

__all__ = ["validate_command"]
