"""CLI command implementation for generating the Prisma schema."""

from __future__ import annotations

import logging
from pathlib import Path

from prismagen.cli.errors import CLIError, cli_error_handler
from prismagen.cli.formatting import OutputFormatter
from prismagen.cli.infrastructure import (
    build_generator,
    configure_logging,
    resolve_config,
)
from prismagen.errors import OutputWriteError, WatchStartError
from prismagen.generator import SchemaGenerator
from prismagen.models import GenerationResult
from prismagen.watcher import SchemaWatcher

logger = logging.getLogger(__name__)


def _run_once(generator: SchemaGenerator) -> GenerationResult:
    """Run a single pass, turning a write failure into a CLI error.

    Raises:
        CLIError: If the schema file cannot be written

    """
    try:
        return generator.run_pass()
    except OutputWriteError as e:
        raise CLIError.from_exception(e, command="generate") from e


def _run_watch(generator: SchemaGenerator, formatter: OutputFormatter) -> None:
    """Run the initial pass and keep regenerating until interrupted."""
    watcher = SchemaWatcher(generator, on_result=formatter.format_generation_result)
    formatter.show_watch_started(generator.config.root_dir)
    try:
        watcher.run()
    except WatchStartError as e:
        logger.error("Watch mode unavailable: %s", e)
        formatter.show_watch_unavailable(str(e))


def generate_command(  # noqa: PLR0913 - Matches CLI entry point signature
    root_dir: Path | None = None,
    output_path: Path | None = None,
    db_provider: str | None = None,
    watch: bool | None = None,
    config_file: Path | None = None,
    exclude_patterns: list[str] | None = None,
    preserve_preamble: bool | None = None,
    include_comments: bool | None = None,
    log_level: str = "INFO",
    verbose: bool = False,
) -> None:
    """CLI command implementation for schema generation.

    Options left as ``None`` fall back to the configuration file (if any)
    and then to the built-in defaults.

    Args:
        root_dir: Directory scanned for TypeScript sources
        output_path: Schema file to write
        db_provider: Datasource provider for the default preamble
        watch: Keep running and regenerate on changes
        config_file: YAML/JSON configuration file
        exclude_patterns: Path substrings to skip
        preserve_preamble: Keep generator/datasource blocks from the existing file
        include_comments: Copy doc comments into the schema
        log_level: Logging level
        verbose: Enable verbose output

    """
    configure_logging(log_level, verbose)
    formatter = OutputFormatter()

    with cli_error_handler("generate", "Schema generation failed"):
        config = resolve_config(
            "generate",
            config_file,
            root_dir=root_dir,
            output_path=output_path,
            db_provider=db_provider,
            watch=watch,
            exclude_patterns=exclude_patterns or None,
            preserve_preamble=preserve_preamble,
            include_comments=include_comments,
        )
        formatter.show_startup_banner(config, "DEBUG" if verbose else log_level)
        generator = build_generator(config)

        if config.watch:
            _run_watch(generator, formatter)
            return

        result = _run_once(generator)
        formatter.format_generation_result(result)
