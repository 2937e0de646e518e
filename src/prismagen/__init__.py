"""Generate Prisma schemas from TypeScript type declarations."""

from prismagen.config import GeneratorConfig, load_config_file
from prismagen.errors import (
    ConfigError,
    OutputWriteError,
    ParserError,
    PrismagenError,
    SourceReadError,
    WatchStartError,
)
from prismagen.generator import SchemaGenerator
from prismagen.models import (
    GenerationResult,
    PropertyDefinition,
    RelationshipKind,
    SourceFile,
    TypeDefinition,
)
from prismagen.registry import TypeRegistry
from prismagen.watcher import RegenerationScheduler, SchemaWatcher

__all__ = [
    "ConfigError",
    "GenerationResult",
    "GeneratorConfig",
    "OutputWriteError",
    "ParserError",
    "PrismagenError",
    "PropertyDefinition",
    "RegenerationScheduler",
    "RelationshipKind",
    "SchemaGenerator",
    "SchemaWatcher",
    "SourceFile",
    "SourceReadError",
    "TypeDefinition",
    "TypeRegistry",
    "WatchStartError",
    "load_config_file",
]
