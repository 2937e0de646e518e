"""Main entry point for prismagen.

This module provides the command-line interface for generating a Prisma
schema from TypeScript type declarations, including commands for:
- Generating the schema once or continuously in watch mode
- Inspecting the models and relationships found in the sources
- Checking that a committed schema is up to date
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv

from prismagen.cli import check_command, generate_command, inspect_command

load_dotenv()

app = typer.Typer(
    name="prismagen",
    help="Generate a Prisma schema from TypeScript interfaces and type aliases.",
)

ConfigFileOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="YAML or JSON configuration file; command line options override it",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
]
RootDirOption = Annotated[
    Path | None,
    typer.Option(
        "--dir",
        "-d",
        help="Directory to scan for TypeScript sources",
        show_default="./src",
        file_okay=False,
        dir_okay=True,
    ),
]
OutputOption = Annotated[
    Path | None,
    typer.Option(
        "--output",
        "-o",
        help="Schema file to write",
        show_default="./prisma/schema.prisma",
        file_okay=True,
        dir_okay=False,
    ),
]
LogLevelOption = Annotated[
    str,
    typer.Option(
        "--log-level",
        help="Set logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        case_sensitive=False,
    ),
]
VerboseOption = Annotated[
    bool,
    typer.Option(
        "--verbose",
        "-v",
        help="Enable verbose output (sets log level to DEBUG)",
    ),
]


@app.command()
def generate(  # noqa: PLR0913 - CLI entry point with many options
    root_dir: RootDirOption = None,
    output: OutputOption = None,
    db: Annotated[
        str | None,
        typer.Option(
            "--db",
            help="Datasource provider used when no preamble is preserved",
            show_default="sqlite",
        ),
    ] = None,
    watch: Annotated[
        bool | None,
        typer.Option(
            "--watch/--no-watch",
            help="Keep running and regenerate when source files change",
            show_default=False,
        ),
    ] = None,
    config: ConfigFileOption = None,
    exclude: Annotated[
        list[str] | None,
        typer.Option(
            "--exclude",
            "-e",
            help="Skip paths containing this text (repeatable)",
            show_default="node_modules, .next, dist",
        ),
    ] = None,
    preserve_preamble: Annotated[
        bool | None,
        typer.Option(
            "--preserve-preamble/--no-preserve-preamble",
            help="Keep generator and datasource blocks from the existing schema",
            show_default=False,
            rich_help_panel="Output",
        ),
    ] = None,
    comments: Annotated[
        bool | None,
        typer.Option(
            "--comments/--no-comments",
            help="Copy doc comments from the sources into the schema",
            show_default=False,
            rich_help_panel="Output",
        ),
    ] = None,
    log_level: LogLevelOption = "INFO",
    verbose: VerboseOption = False,
) -> None:
    """Generate the Prisma schema from TypeScript types.

    Example:
        prismagen generate --dir ./src --output ./prisma/schema.prisma
        prismagen generate --watch --db postgresql

    """
    generate_command(
        root_dir=root_dir,
        output_path=output,
        db_provider=db,
        watch=watch,
        config_file=config,
        exclude_patterns=exclude,
        preserve_preamble=preserve_preamble,
        include_comments=comments,
        log_level=log_level,
        verbose=verbose,
    )


@app.command()
def inspect(
    root_dir: RootDirOption = None,
    config: ConfigFileOption = None,
    log_level: LogLevelOption = "WARNING",
    verbose: VerboseOption = False,
) -> None:
    """Show the models and relationships extracted from the sources."""
    inspect_command(
        root_dir=root_dir, config_file=config, log_level=log_level, verbose=verbose
    )


@app.command()
def check(
    root_dir: RootDirOption = None,
    output: OutputOption = None,
    config: ConfigFileOption = None,
    log_level: LogLevelOption = "WARNING",
) -> None:
    """Exit non-zero if the schema file is missing or out of date."""
    check_command(
        root_dir=root_dir, output_path=output, config_file=config, log_level=log_level
    )


if __name__ == "__main__":
    app()
