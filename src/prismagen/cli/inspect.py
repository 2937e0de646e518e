"""CLI command implementations for inspecting and checking the schema."""

from __future__ import annotations

import difflib
import logging
from pathlib import Path

import typer

from prismagen.cli.errors import cli_error_handler
from prismagen.cli.formatting import OutputFormatter
from prismagen.cli.infrastructure import (
    build_generator,
    configure_logging,
    resolve_config,
)
from prismagen.renderer import strip_generation_timestamp

logger = logging.getLogger(__name__)


def inspect_command(
    root_dir: Path | None = None,
    config_file: Path | None = None,
    log_level: str = "INFO",
    verbose: bool = False,
) -> None:
    """CLI command implementation for listing extracted models.

    Args:
        root_dir: Directory scanned for TypeScript sources
        config_file: YAML/JSON configuration file
        log_level: Logging level
        verbose: Show the source file of each model

    """
    configure_logging(log_level, verbose)

    with cli_error_handler("inspect", "Inspection failed"):
        config = resolve_config("inspect", config_file, root_dir=root_dir)
        registry, scanned, _ = build_generator(config).build_registry()
        OutputFormatter().format_inspection(registry, scanned, verbose)


def schema_diff(existing: str | None, generated: str, output_path: Path) -> list[str]:
    """Diff the existing schema against fresh output, ignoring the timestamp.

    Returns:
        Unified diff lines; empty when the two match

    """
    before = strip_generation_timestamp(existing) if existing is not None else ""
    after = strip_generation_timestamp(generated)
    if existing is not None and before == after:
        return []
    return list(
        difflib.unified_diff(
            before.splitlines(keepends=True),
            after.splitlines(keepends=True),
            fromfile=str(output_path),
            tofile=f"{output_path} (generated)",
        )
    )


def check_command(
    root_dir: Path | None = None,
    output_path: Path | None = None,
    config_file: Path | None = None,
    log_level: str = "INFO",
) -> None:
    """CLI command implementation for verifying the schema is current.

    Exits with status 1 when the schema file is missing or differs from
    what generation would produce.

    Args:
        root_dir: Directory scanned for TypeScript sources
        output_path: Schema file to compare against
        config_file: YAML/JSON configuration file
        log_level: Logging level

    """
    configure_logging(log_level)

    with cli_error_handler("check", "Schema check failed"):
        config = resolve_config(
            "check", config_file, root_dir=root_dir, output_path=output_path
        )
        result = build_generator(config).generate()

        try:
            existing = config.output_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.warning("Schema file %s does not exist", config.output_path)
            existing = None

        diff_lines = schema_diff(existing, result.schema_text, config.output_path)
        up_to_date = existing is not None and not diff_lines
        OutputFormatter().format_check_result(
            config.output_path, up_to_date, diff_lines
        )

    if not up_to_date:
        raise typer.Exit(1)
