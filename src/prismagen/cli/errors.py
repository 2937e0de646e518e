"""Uniform failure reporting for prismagen commands."""

from __future__ import annotations

import logging
from collections.abc import Generator
from contextlib import contextmanager
from typing import Self, override

import typer
from rich.console import Console
from rich.panel import Panel

logger = logging.getLogger(__name__)
console = Console()

EXIT_FAILURE = 1


class CLIError(Exception):
    """A command failure, tagged with the command that hit it.

    Library errors (configuration, output writes) are wrapped so the user
    sees one consistent message format regardless of where the failure
    started.
    """

    def __init__(
        self,
        message: str,
        command: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        """Initialise the error.

        Args:
            message: What went wrong
            command: Command name shown in the message, e.g. ``generate``
            original_error: Library exception being wrapped

        """
        super().__init__(message)
        self.command = command
        self.original_error = original_error

    @classmethod
    def from_exception(cls, error: Exception, command: str | None = None) -> Self:
        """Wrap an arbitrary exception, keeping it as ``original_error``."""
        return cls(str(error), command=command, original_error=error)

    @property
    def cause_name(self) -> str | None:
        """Class name of the wrapped exception, if there is one."""
        if self.original_error is None:
            return None
        return type(self.original_error).__name__

    @override
    def __str__(self) -> str:
        message = super().__str__()
        if self.command:
            return f"CLI command '{self.command}' failed: {message}"
        return message


def _report(title: str, error: CLIError) -> None:
    logger.error("%s: %s", title, error)
    console.print(
        Panel(
            f"[red]{error}[/red]",
            title=f"❌ {title}",
            subtitle=error.cause_name,
            border_style="red",
        )
    )


@contextmanager
def cli_error_handler(command: str, title: str) -> Generator[None]:
    """Report any failure inside the block as an error panel and exit 1.

    ``typer.Exit`` raised inside the block (a deliberate exit code) is left
    alone.

    Args:
        command: Command name used when wrapping raw exceptions
        title: Title of the error panel

    """
    try:
        yield
    except typer.Exit:
        raise
    except CLIError as e:
        _report(title, e)
        raise typer.Exit(EXIT_FAILURE) from e
    except Exception as e:
        wrapped = CLIError.from_exception(e, command=command)
        _report(title, wrapped)
        raise typer.Exit(EXIT_FAILURE) from wrapped
