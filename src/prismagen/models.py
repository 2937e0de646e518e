"""Data models for extraction and generation results."""

from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel


class RelationshipKind(StrEnum):
    """How a property relates to another model."""

    NONE = "none"
    ONE_TO_MANY = "oneToMany"
    ONE_TO_ONE = "oneToOne"
    MANY_TO_ONE = "manyToOne"


class PropertyDefinition(BaseModel):
    """A typed member of an extracted model."""

    name: str
    raw_type: str  # source spelling, never evaluated
    prisma_type: str
    is_optional: bool = False
    is_id: bool = False
    relationship_kind: RelationshipKind = RelationshipKind.NONE
    relates_to: str = ""
    relationship_field: str = ""  # filled by the relationship resolver
    doc_comment: str = ""

    @property
    def is_relation(self) -> bool:
        """Whether this property is rendered as a relation rather than a scalar."""
        return self.relationship_kind is not RelationshipKind.NONE


class TypeDefinition(BaseModel):
    """A model-shaped type declaration extracted from source code."""

    name: str
    properties: list[PropertyDefinition] = []
    source_file: str = ""
    doc_comment: str = ""

    def find_property(self, name: str) -> PropertyDefinition | None:
        """Return the first property with exactly this name."""
        return next((p for p in self.properties if p.name == name), None)


class SourceFile(BaseModel):
    """A source file path and its text, as supplied by a source provider."""

    path: str
    content: str


class GenerationResult(BaseModel):
    """Outcome of one generation pass."""

    files_scanned: int = 0
    files_failed: int = 0
    models: list[str] = []
    schema_text: str = ""
    output_path: Path | None = None
    written: bool = False
    duration_seconds: float = 0.0
