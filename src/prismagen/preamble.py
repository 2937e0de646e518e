"""Preservation of the generator/datasource header of an existing schema.

Only the configuration blocks are carried over between runs; every model
block is regenerated. Extraction is a narrow text match kept behind the
``PreambleExtractor`` protocol so a real Prisma schema parser can replace it
without touching extraction, resolution or rendering.
"""

import logging
import re
from pathlib import Path
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)

DEFAULT_DATABASE_URL_ENV = "DATABASE_URL"

_DIRECTIVE_PATTERN = re.compile(r"(generator|datasource)\s+\w+\s+\{[^}]*\}", re.DOTALL)


@runtime_checkable
class PreambleExtractor(Protocol):
    """Pulls configuration blocks out of existing schema text."""

    def extract(self, schema_text: str) -> str | None:
        """Return the preserved header text, or None if nothing was found."""
        ...


class RegexPreambleExtractor:
    """Finds ``generator`` and ``datasource`` blocks with a regular expression.

    Blocks are returned verbatim, in file order, separated by a blank line.
    Nested braces inside a block are not supported.
    """

    def extract(self, schema_text: str) -> str | None:
        """Return the configuration blocks followed by a blank line, if any."""
        blocks = [match.group(0) for match in _DIRECTIVE_PATTERN.finditer(schema_text)]
        if not blocks:
            return None
        return "\n\n".join(blocks) + "\n\n"


def default_preamble(
    db_provider: str, database_url_env: str = DEFAULT_DATABASE_URL_ENV
) -> str:
    """Build the generator and datasource blocks for a new schema.

    Args:
        db_provider: Prisma datasource provider (sqlite, postgresql, ...)
        database_url_env: Environment variable holding the connection string

    """
    return (
        "generator client {\n"
        '  provider = "prisma-client-js"\n'
        "}\n"
        "\n"
        "datasource db {\n"
        f'  provider = "{db_provider}"\n'
        f'  url      = env("{database_url_env}")\n'
        "}\n"
        "\n"
    )


def load_preamble(
    output_path: Path,
    db_provider: str,
    database_url_env: str = DEFAULT_DATABASE_URL_ENV,
    extractor: PreambleExtractor | None = None,
) -> str:
    """Recover the preamble from an existing schema file or build the default.

    A missing file, an unreadable file or a file without configuration
    blocks all fall back to the default preamble.

    Args:
        output_path: Path of the previously generated schema
        db_provider: Provider used when a default preamble is needed
        database_url_env: Connection string variable for the default preamble
        extractor: Strategy used to find configuration blocks

    Returns:
        Preamble text ending with a blank line

    """
    extractor = extractor or RegexPreambleExtractor()

    if output_path.is_file():
        try:
            existing = output_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Could not read existing schema %s: %s", output_path, e)
        else:
            preserved = extractor.extract(existing)
            if preserved is not None:
                logger.debug("Preserved configuration blocks from %s", output_path)
                return preserved
            logger.debug("No configuration blocks in %s, using default", output_path)

    return default_preamble(db_provider, database_url_env)
