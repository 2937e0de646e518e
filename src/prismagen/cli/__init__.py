"""CLI command implementations for prismagen."""

from prismagen.cli.errors import CLIError
from prismagen.cli.generate import generate_command
from prismagen.cli.inspect import check_command, inspect_command

__all__ = [
    "CLIError",
    "check_command",
    "generate_command",
    "inspect_command",
]
