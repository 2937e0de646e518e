"""Shared CLI setup: configuration resolution and generator construction."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from prismagen.cli.errors import CLIError
from prismagen.config import GeneratorConfig, load_config_file
from prismagen.errors import ConfigError
from prismagen.generator import SchemaGenerator
from prismagen.logging import setup_logging

logger = logging.getLogger(__name__)


def configure_logging(log_level: str, verbose: bool = False) -> None:
    """Set up logging, with ``--verbose`` forcing DEBUG."""
    setup_logging(level="DEBUG" if verbose else log_level)


def resolve_config(
    command: str, config_file: Path | None = None, **overrides: Any  # noqa: ANN401
) -> GeneratorConfig:
    """Build the effective configuration for a command.

    File values (when a file is given) are applied first, then every
    command line option that was actually supplied.

    Args:
        command: CLI command name for error context
        config_file: Optional YAML/JSON configuration file
        **overrides: Command line values; ``None`` means "not given"

    Returns:
        Validated configuration

    Raises:
        CLIError: If the file or the merged values are invalid

    """
    try:
        base = (
            load_config_file(config_file)
            if config_file is not None
            else GeneratorConfig()
        )
        config = base.with_overrides(**overrides)
    except ConfigError as e:
        raise CLIError.from_exception(e, command=command) from e

    logger.debug("Effective configuration: %s", config.model_dump())
    return config


def build_generator(config: GeneratorConfig) -> SchemaGenerator:
    """Create a generator wired with the default filesystem provider."""
    return SchemaGenerator(config)
