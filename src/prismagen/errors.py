"""Error classes for prismagen.

This module provides:
- PrismagenError: Base exception class for all generator errors
- SourceReadError: A source file could not be read or decoded
- ParserError: Parser-related exception
- OutputWriteError: The schema file could not be written
- WatchStartError: The filesystem watcher could not be started
- ConfigError: Invalid generator configuration
"""


class PrismagenError(Exception):
    """Base exception for all prismagen errors."""

    pass


class SourceReadError(PrismagenError):
    """Raised when a source file cannot be read or decoded."""

    def __init__(self, message: str, path: str | None = None) -> None:
        """Initialise with the offending file path.

        Args:
            message: Human-readable error message
            path: Path of the file that could not be read

        """
        super().__init__(message)
        self.path = path


class ParserError(PrismagenError):
    """Base exception for parser-related errors."""

    pass


class OutputWriteError(PrismagenError):
    """Raised when the generated schema cannot be written to disk."""

    pass


class WatchStartError(PrismagenError):
    """Raised when the filesystem watcher fails to initialise."""

    pass


class ConfigError(PrismagenError):
    """Raised when generator configuration is invalid."""

    pass
