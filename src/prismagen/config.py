"""Configuration for the schema generator."""

import os
from pathlib import Path
from typing import Any, Literal, Self, cast

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from prismagen.errors import ConfigError
from prismagen.extraction.classifiers import DEFAULT_MODEL_MARKER, DEFAULT_PINNED_MODELS
from prismagen.preamble import DEFAULT_DATABASE_URL_ENV
from prismagen.renderer import DEFAULT_UNIQUE_FIELDS
from prismagen.sources import DEFAULT_EXCLUDE_PATTERNS

DB_PROVIDER_ENV_VAR = "PRISMAGEN_DB_PROVIDER"
_DEFAULT_DB_PROVIDER = "sqlite"


def _default_db_provider() -> str:
    return os.getenv(DB_PROVIDER_ENV_VAR) or _DEFAULT_DB_PROVIDER


class GeneratorConfig(BaseModel):
    """Configuration for a generation run with Pydantic validation.

    Immutable once created. Values usually come from a YAML configuration
    file merged with command line overrides.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    root_dir: Path = Field(
        default=Path("./src"),
        description="Directory scanned for TypeScript sources",
    )
    output_path: Path = Field(
        default=Path("./prisma/schema.prisma"),
        description="Schema file written by each pass",
    )
    db_provider: str = Field(
        default_factory=_default_db_provider,
        description="Datasource provider used when no preamble is preserved",
    )
    database_url_env: str = Field(
        default=DEFAULT_DATABASE_URL_ENV,
        description="Environment variable referenced by the default datasource",
    )
    preserve_preamble: bool = Field(
        default=True,
        description="Keep generator/datasource blocks from the existing schema",
    )
    include_comments: bool = Field(
        default=True,
        description="Copy doc comments from source into the schema",
    )
    watch: bool = Field(
        default=False,
        description="Keep running and regenerate on file changes",
    )
    exclude_patterns: list[str] = Field(
        default_factory=lambda: list(DEFAULT_EXCLUDE_PATTERNS),
        description="Path substrings skipped during discovery",
    )
    pinned_models: list[str] = Field(
        default_factory=lambda: list(DEFAULT_PINNED_MODELS),
        description="Type names always treated as models",
    )
    unique_fields: list[str] = Field(
        default_factory=lambda: list(DEFAULT_UNIQUE_FIELDS),
        description="String field names rendered with @unique",
    )
    classifier: Literal["naming", "marker"] = Field(
        default="naming",
        description="Model classification strategy",
    )
    strict_interface_prefix: bool = Field(
        default=False,
        description="Reject every name starting with 'I', not just IName",
    )
    marker_comment: str = Field(
        default=DEFAULT_MODEL_MARKER,
        description="Doc comment marker used by the 'marker' classifier",
    )
    debounce_ms: int = Field(
        default=300,
        description="Quiet period before a batch of file changes triggers a pass",
        gt=0,
    )

    @field_validator("db_provider", "database_url_env", "marker_comment")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Reject empty identifiers."""
        if not v.strip():
            raise ValueError("value must not be empty")
        return v.strip()

    @classmethod
    def from_properties(cls, properties: dict[str, Any]) -> Self:
        """Create configuration from a properties dictionary.

        Raises:
            ConfigError: If validation fails

        """
        try:
            return cls.model_validate(properties)
        except ValidationError as e:
            raise ConfigError(f"Invalid generator configuration: {e}") from e

    def with_overrides(self, **overrides: Any) -> Self:  # noqa: ANN401
        """Return a copy with the given non-None values replaced and revalidated."""
        updates = {k: v for k, v in overrides.items() if v is not None}
        if not updates:
            return self
        return self.from_properties({**self.model_dump(), **updates})


def load_config_file(path: Path) -> GeneratorConfig:
    """Load generator configuration from a YAML (or JSON) file.

    Args:
        path: Configuration file path

    Returns:
        Validated configuration

    Raises:
        ConfigError: If the file cannot be read, parsed or validated

    """
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise ConfigError(f"Configuration file not found: {path}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read configuration file {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration in {path} must be a mapping")

    return GeneratorConfig.from_properties(cast(dict[str, Any], data))
