"""Source set providers.

A provider discovers candidate TypeScript files and reads their text. The
generator never walks directories itself; it only asks a provider for paths
and contents, one file at a time.
"""

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Protocol, runtime_checkable

from prismagen.errors import SourceReadError
from prismagen.extraction.parser import TypeScriptParser

logger = logging.getLogger(__name__)

DEFAULT_EXCLUDE_PATTERNS = ("node_modules", ".next", "dist")

_DEFAULT_ENCODING = "utf-8"


def normalise_exclude_pattern(pattern: str) -> str:
    """Reduce a ``**/name/**`` glob to the plain substring ``name``."""
    return pattern.replace("**/", "").replace("/**", "").strip()


@runtime_checkable
class SourceProvider(Protocol):
    """Supplies ``(path, text)`` pairs for candidate source files."""

    def discover(self) -> list[str]:
        """Return candidate file paths in a stable order."""
        ...

    def read(self, path: str) -> str:
        """Return the text of one file.

        Raises:
            SourceReadError: If the file cannot be read or decoded

        """
        ...


class FilesystemSourceProvider:
    """Discovers TypeScript files under a root directory.

    Handles:
    - Recursive traversal in sorted path order
    - ``.ts``/``.tsx`` selection, skipping ``.d.ts`` declaration files
    - Exclusion of files whose directory contains one of the exclude substrings
    """

    def __init__(
        self,
        root_dir: Path,
        exclude_patterns: Iterable[str] = DEFAULT_EXCLUDE_PATTERNS,
        encoding: str = _DEFAULT_ENCODING,
    ) -> None:
        """Initialise the provider.

        Args:
            root_dir: Directory to scan
            exclude_patterns: Substrings (or ``**/name/**`` globs) to skip
            encoding: Text encoding used when reading files

        """
        self._root_dir = root_dir
        self._exclude = [
            p for p in (normalise_exclude_pattern(x) for x in exclude_patterns) if p
        ]
        self._encoding = encoding

    @property
    def root_dir(self) -> Path:
        """Directory being scanned."""
        return self._root_dir

    def is_excluded(self, path: Path) -> bool:
        """Check whether a path falls under an excluded directory.

        Only the directory part of the path relative to the root is matched,
        so ``types/distributor.ts`` is not caught by the ``dist`` exclude.
        """
        try:
            relative = path.relative_to(self._root_dir)
        except ValueError:
            relative = path
        directory = relative.parent.as_posix()
        if directory == ".":
            return False
        return any(pattern in directory for pattern in self._exclude)

    def is_candidate(self, path: Path) -> bool:
        """Check whether a path is a non-excluded TypeScript source file."""
        return TypeScriptParser.is_supported_file(path) and not self.is_excluded(path)

    def discover(self) -> list[str]:
        """Collect candidate files; a missing root yields an empty list."""
        if not self._root_dir.is_dir():
            logger.warning("Source directory %s does not exist", self._root_dir)
            return []

        files = [
            str(file_path)
            for file_path in sorted(self._root_dir.rglob("*"))
            if file_path.is_file() and self.is_candidate(file_path)
        ]
        logger.debug("Collected %d files from %s", len(files), self._root_dir)
        return files

    def read(self, path: str) -> str:
        """Read a file's text.

        Raises:
            SourceReadError: If the file cannot be read or decoded

        """
        try:
            return Path(path).read_text(encoding=self._encoding)
        except (OSError, UnicodeDecodeError) as e:
            raise SourceReadError(f"Failed to read {path}: {e}", path=path) from e


class InMemorySourceProvider:
    """Serves source text from a mapping of path to content."""

    def __init__(self, sources: Mapping[str, str]) -> None:
        self._sources = dict(sources)

    def discover(self) -> list[str]:
        """Return paths in mapping order."""
        return list(self._sources)

    def read(self, path: str) -> str:
        """Return the stored text for ``path``."""
        if path not in self._sources:
            raise SourceReadError(f"No source registered for {path}", path=path)
        return self._sources[path]
