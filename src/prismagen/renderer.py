"""Prisma schema rendering.

Turns a resolved type registry and a preamble into schema text. The output
depends only on its inputs plus the banner timestamp, which
``strip_generation_timestamp`` removes for byte-for-byte comparisons.
"""

import re
from collections.abc import Callable, Iterable
from datetime import UTC, datetime

from prismagen.models import PropertyDefinition, RelationshipKind, TypeDefinition
from prismagen.registry import TypeRegistry

DEFAULT_UNIQUE_FIELDS = ("email", "memberId", "phoneNumber")

_INDENT = "  "
_GENERATED_ON_PREFIX = "// Generated on "
_GENERATED_ON_LINE = re.compile(r"^// Generated on .*\n?", re.MULTILINE)


def _utc_timestamp() -> str:
    """Return the current UTC time as an ISO-8601 string with milliseconds."""
    timestamp = datetime.now(UTC).isoformat(timespec="milliseconds")
    return timestamp.replace("+00:00", "Z")


def strip_generation_timestamp(schema_text: str) -> str:
    """Remove the ``Generated on`` banner line from schema text."""
    return _GENERATED_ON_LINE.sub("", schema_text)


def foreign_key_name(prop: PropertyDefinition) -> str:
    """Return the foreign-key column name for a many-to-one property."""
    return prop.name if prop.name.endswith("Id") else f"{prop.name}Id"


def _format_doc(doc_comment: str, indent: str = "") -> str:
    """Render a doc comment as ``///`` lines."""
    return "".join(f"{indent}/// {line}\n" for line in doc_comment.split("\n"))


class SchemaRenderer:
    """Renders resolved type definitions as a Prisma schema document."""

    def __init__(
        self,
        include_comments: bool = True,
        unique_fields: Iterable[str] = DEFAULT_UNIQUE_FIELDS,
        clock: Callable[[], str] = _utc_timestamp,
    ) -> None:
        """Initialise the renderer.

        Args:
            include_comments: Emit doc comments from source as ``///`` lines
            unique_fields: String field names that receive ``@unique``
            clock: Returns the timestamp written into the banner

        """
        self._include_comments = include_comments
        self._unique_fields = frozenset(unique_fields)
        self._clock = clock

    def render(self, registry: TypeRegistry, preamble: str) -> str:
        """Render the full schema document.

        Args:
            registry: Registry after relationship resolution
            preamble: Generator/datasource header text

        Returns:
            Schema text ending with exactly one newline

        """
        parts = [preamble, self._render_banner()]
        parts.extend(self._render_model(type_def) for type_def in registry)
        return "".join(parts).rstrip() + "\n"

    def _render_banner(self) -> str:
        return (
            "// This schema was automatically generated from TypeScript types\n"
            f"{_GENERATED_ON_PREFIX}{self._clock()}\n"
            "// DO NOT EDIT THIS FILE DIRECTLY\n"
            "\n"
        )

    def _render_model(self, type_def: TypeDefinition) -> str:
        """Render one ``model`` block."""
        back_refs = [
            p
            for p in type_def.properties
            if p.relationship_kind is RelationshipKind.MANY_TO_ONE
        ]
        fields = [
            p
            for p in type_def.properties
            if p.relationship_kind is not RelationshipKind.MANY_TO_ONE
        ]
        foreign_keys = {foreign_key_name(p) for p in back_refs}
        emitted_names = {p.name for p in fields}

        block = ""
        if self._include_comments and type_def.doc_comment:
            block += _format_doc(type_def.doc_comment)
        block += f"model {type_def.name} {{\n"

        if not any(p.is_id for p in type_def.properties):
            block += f"{_INDENT}id String @id @default(cuid())\n"

        for prop in fields:
            if self._include_comments and prop.doc_comment:
                block += _format_doc(prop.doc_comment, _INDENT)
            block += f"{_INDENT}{self._render_field(prop, foreign_keys)}\n"

        for prop in back_refs:
            fk = foreign_key_name(prop)
            optional = "?" if prop.is_optional else ""
            if fk not in emitted_names:
                block += f"{_INDENT}{fk} String{optional}\n"
                emitted_names.add(fk)
            block += (
                f"{_INDENT}{prop.relates_to.lower()} {prop.relates_to}{optional} "
                f"@relation(fields: [{fk}], references: [id])\n"
            )

        for prop in back_refs:
            block += f"{_INDENT}@@index([{foreign_key_name(prop)}])\n"

        return block + "}\n\n"

    def _render_field(self, prop: PropertyDefinition, foreign_keys: set[str]) -> str:
        """Render a scalar or forward relation field line (without indent)."""
        if prop.relationship_kind is RelationshipKind.ONE_TO_MANY:
            return f"{prop.name} {prop.relates_to}[]"
        if prop.relationship_kind is RelationshipKind.ONE_TO_ONE:
            return f"{prop.name} {prop.relates_to}"

        line = f"{prop.name} {prop.prisma_type}"
        if prop.is_optional:
            line += "?"
        if prop.is_id:
            line += " @id @default(cuid())"
        if prop.name == "createdAt":
            line += " @default(now())"
        if prop.name == "updatedAt":
            line += " @updatedAt"
        if (
            prop.name in self._unique_fields
            and prop.prisma_type == "String"
            and prop.name not in foreign_keys
        ):
            line += " @unique"
        return line
