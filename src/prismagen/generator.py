"""One generation pass, end to end.

Every pass starts from an empty registry: discover sources, extract models
file by file, resolve relationships over the whole registry, render the
schema and write it. Nothing is carried over from a previous pass except
the preamble recovered from the previously written file.
"""

import logging
import os
import stat
import tempfile
import time
from pathlib import Path

from prismagen.config import GeneratorConfig
from prismagen.errors import OutputWriteError, ParserError, SourceReadError
from prismagen.extraction import (
    MarkerCommentClassifier,
    ModelClassifier,
    NamingConventionClassifier,
    TypeScriptTypeExtractor,
)
from prismagen.models import GenerationResult, SourceFile
from prismagen.preamble import PreambleExtractor, default_preamble, load_preamble
from prismagen.registry import TypeRegistry
from prismagen.relationships import RelationshipResolver
from prismagen.renderer import SchemaRenderer
from prismagen.sources import FilesystemSourceProvider, SourceProvider

logger = logging.getLogger(__name__)

_NEW_FILE_MODE = 0o666


def build_classifier(config: GeneratorConfig) -> ModelClassifier:
    """Create the model classifier selected by the configuration."""
    if config.classifier == "marker":
        return MarkerCommentClassifier(config.marker_comment)
    return NamingConventionClassifier(
        config.pinned_models,
        strict_interface_prefix=config.strict_interface_prefix,
    )


def _schema_file_mode(output_path: Path) -> int:
    """Mode for the written schema: the existing file's, else the umask default."""
    try:
        return stat.S_IMODE(output_path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return _NEW_FILE_MODE & ~umask


def write_schema(output_path: Path, schema_text: str) -> None:
    """Atomically replace the schema file.

    The text goes to a temporary sibling file that is renamed over the
    target, so a failed write leaves the previous schema untouched. The
    target keeps its permission bits across the rename.

    Raises:
        OutputWriteError: If the directory or file cannot be written

    """
    tmp_name: str | None = None
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=output_path.parent, prefix=f".{output_path.name}.", suffix=".tmp"
        )
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
            f.write(schema_text)
        os.chmod(tmp_name, _schema_file_mode(output_path))
        os.replace(tmp_name, output_path)
    except OSError as e:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise OutputWriteError(f"Failed to write schema to {output_path}: {e}") from e


class SchemaGenerator:
    """Runs extraction, resolution and rendering for one configuration."""

    def __init__(
        self,
        config: GeneratorConfig,
        source_provider: SourceProvider | None = None,
        extractor: TypeScriptTypeExtractor | None = None,
        renderer: SchemaRenderer | None = None,
        preamble_extractor: PreambleExtractor | None = None,
    ) -> None:
        """Initialise the generator.

        Args:
            config: Validated generator configuration
            source_provider: Supplier of source files (filesystem by default)
            extractor: Type extractor (built from the configured classifier
                by default)
            renderer: Schema renderer (built from the configuration by default)
            preamble_extractor: Strategy for recovering configuration blocks

        """
        self._config = config
        self._source_provider = source_provider or FilesystemSourceProvider(
            config.root_dir, config.exclude_patterns
        )
        self._extractor = extractor or TypeScriptTypeExtractor(
            classifier=build_classifier(config)
        )
        self._renderer = renderer or SchemaRenderer(
            include_comments=config.include_comments,
            unique_fields=config.unique_fields,
        )
        self._preamble_extractor = preamble_extractor
        self._resolver = RelationshipResolver()

    @property
    def config(self) -> GeneratorConfig:
        """Configuration used by this generator."""
        return self._config

    def build_registry(self) -> tuple[TypeRegistry, int, int]:
        """Extract every discovered file into a fresh, resolved registry.

        Returns:
            Tuple of (registry, files scanned, files that failed)

        """
        registry = TypeRegistry()
        files = self._source_provider.discover()
        failed = 0

        for path in files:
            try:
                content = self._source_provider.read(path)
                self._extractor.extract_into(
                    SourceFile(path=path, content=content), registry
                )
            except (SourceReadError, ParserError) as e:
                failed += 1
                logger.warning("Skipping %s: %s", path, e)

        self._resolver.resolve(registry)
        logger.debug(
            "Extracted %d models from %d files (%d failed)",
            len(registry),
            len(files),
            failed,
        )
        return registry, len(files), failed

    def resolve_preamble(self) -> str:
        """Return the preamble for the next output."""
        if not self._config.preserve_preamble:
            return default_preamble(
                self._config.db_provider, self._config.database_url_env
            )
        return load_preamble(
            self._config.output_path,
            self._config.db_provider,
            self._config.database_url_env,
            self._preamble_extractor,
        )

    def generate(self) -> GenerationResult:
        """Run a full pass in memory without writing the output file."""
        start = time.monotonic()
        preamble = self.resolve_preamble()
        registry, scanned, failed = self.build_registry()
        schema_text = self._renderer.render(registry, preamble)

        return GenerationResult(
            files_scanned=scanned,
            files_failed=failed,
            models=registry.names(),
            schema_text=schema_text,
            output_path=self._config.output_path,
            duration_seconds=time.monotonic() - start,
        )

    def run_pass(self) -> GenerationResult:
        """Run a full pass and write the schema file.

        Raises:
            OutputWriteError: If the schema cannot be written; the previous
                file is left untouched

        """
        result = self.generate()
        write_schema(self._config.output_path, result.schema_text)
        logger.info(
            "Wrote %d models to %s", len(result.models), self._config.output_path
        )
        return result.model_copy(update={"written": True})
