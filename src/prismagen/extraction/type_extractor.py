"""TypeScript model declaration extraction.

This module finds interfaces and object-shaped type aliases in TypeScript
source and turns the ones accepted by a model classifier into
``TypeDefinition`` records.
"""

import logging

from tree_sitter import Node

from prismagen.extraction.base import (
    find_child_by_type,
    find_nodes_by_types,
    get_node_text,
)
from prismagen.extraction.classifiers import (
    ModelClassifier,
    NamingConventionClassifier,
)
from prismagen.extraction.helpers import (
    INTERFACE_TYPE,
    LINE_INDEX_OFFSET,
    OBJECT_BODY_TYPES,
    PROPERTY_SIGNATURE_TYPE,
    TYPE_ALIAS_TYPE,
    TYPE_REFERENCE_TYPES,
    UTILITY_TYPE_NAMES,
    get_doc_comment,
)
from prismagen.extraction.parser import TypeScriptParser
from prismagen.models import PropertyDefinition, SourceFile, TypeDefinition
from prismagen.registry import TypeRegistry
from prismagen.type_mapper import map_type_to_prisma

logger = logging.getLogger(__name__)

_ALIAS_PLACEHOLDER_DOC = "Automatically added ID field"
_ID_FIELD = "id"


class TypeScriptTypeExtractor:
    """Extracts model candidates from TypeScript source code.

    Handles extraction of:
    - Interfaces with typed property signatures
    - Type aliases to an inline object type
    - Type aliases to a single named type (recorded with a placeholder id)
    """

    def __init__(
        self,
        classifier: ModelClassifier | None = None,
        parser: TypeScriptParser | None = None,
    ) -> None:
        """Initialise the extractor.

        Args:
            classifier: Strategy deciding which declarations are models
            parser: Parser to reuse across files

        """
        self._classifier = classifier or NamingConventionClassifier()
        self._parser = parser or TypeScriptParser()

    def extract(self, source_file: SourceFile) -> list[TypeDefinition]:
        """Extract model declarations from one file, in document order.

        Args:
            source_file: The file path and its text

        Returns:
            Type definitions accepted by the classifier

        Raises:
            ParserError: If the file cannot be parsed

        """
        parsed = self._parser.parse(source_file.content, source_file.path)
        type_definitions: list[TypeDefinition] = []

        for node in find_nodes_by_types(
            parsed.root_node, (INTERFACE_TYPE, TYPE_ALIAS_TYPE)
        ):
            if node.type == INTERFACE_TYPE:
                type_def = self._extract_interface(
                    node, parsed.source, source_file.path
                )
            else:
                type_def = self._extract_type_alias(
                    node, parsed.source, source_file.path
                )
            if type_def:
                type_definitions.append(type_def)

        return type_definitions

    def extract_into(self, source_file: SourceFile, registry: TypeRegistry) -> int:
        """Extract declarations from one file and add them to ``registry``.

        Returns:
            Number of type definitions added

        """
        type_definitions = self.extract(source_file)
        for type_def in type_definitions:
            logger.debug("Found %s in %s", type_def.name, source_file.path)
            registry.add(type_def)
        return len(type_definitions)

    def _extract_interface(
        self, node: Node, source: bytes, file_path: str
    ) -> TypeDefinition | None:
        """Extract a model from an interface declaration node."""
        try:
            name = self._get_type_name(node, source)
            doc_comment = get_doc_comment(node, source)
            if not self._classifier.is_model(name, doc_comment):
                return None

            body = self._get_object_body(node)
            return TypeDefinition(
                name=name,
                properties=self._get_properties(body, source) if body else [],
                source_file=file_path,
                doc_comment=doc_comment,
            )
        except Exception:
            logger.debug(
                "Failed to extract interface at %s:%d",
                file_path,
                node.start_point[0] + LINE_INDEX_OFFSET,
                exc_info=True,
            )
            return None

    def _extract_type_alias(
        self, node: Node, source: bytes, file_path: str
    ) -> TypeDefinition | None:
        """Extract a model from a type alias with an object or reference value."""
        try:
            value = node.child_by_field_name("value")
            if value is None:
                return None

            if value.type == "object_type":
                properties_source = value
            elif self._is_model_reference(value, source):
                properties_source = None
            else:
                return None

            name = self._get_type_name(node, source)
            doc_comment = get_doc_comment(node, source)
            if not self._classifier.is_model(name, doc_comment):
                return None

            if properties_source is not None:
                properties = self._get_properties(properties_source, source)
            else:
                # Alias chains are not followed; a placeholder id stands in
                properties = [
                    PropertyDefinition(
                        name=_ID_FIELD,
                        raw_type="string",
                        prisma_type="String",
                        is_id=True,
                        doc_comment=_ALIAS_PLACEHOLDER_DOC,
                    )
                ]

            return TypeDefinition(
                name=name,
                properties=properties,
                source_file=file_path,
                doc_comment=doc_comment,
            )
        except Exception:
            logger.debug(
                "Failed to extract type alias at %s:%d",
                file_path,
                node.start_point[0] + LINE_INDEX_OFFSET,
                exc_info=True,
            )
            return None

    def _is_model_reference(self, value: Node, source: bytes) -> bool:
        """Check whether an alias value is a reference to another named type."""
        if value.type not in TYPE_REFERENCE_TYPES:
            return False
        if value.type == "generic_type":
            base = value.child_by_field_name("name") or value.children[0]
            return get_node_text(base, source) not in UTILITY_TYPE_NAMES
        return True

    def _get_type_name(self, node: Node, source: bytes) -> str:
        """Extract the declared interface or alias name."""
        name_node = node.child_by_field_name("name") or find_child_by_type(
            node, "type_identifier"
        )
        if name_node is None:
            raise ValueError("declaration has no name")
        return get_node_text(name_node, source)

    def _get_object_body(self, node: Node) -> Node | None:
        """Return the member body of an interface declaration."""
        body = node.child_by_field_name("body")
        if body is not None:
            return body
        for body_type in OBJECT_BODY_TYPES:
            body = find_child_by_type(node, body_type)
            if body is not None:
                return body
        return None

    def _get_properties(self, body: Node, source: bytes) -> list[PropertyDefinition]:
        """Extract typed property signatures from an object body."""
        properties: list[PropertyDefinition] = []
        for child in body.children:
            if child.type != PROPERTY_SIGNATURE_TYPE:
                continue
            prop = self._extract_property(child, source)
            if prop:
                properties.append(prop)
        return properties

    def _extract_property(
        self, node: Node, source: bytes
    ) -> PropertyDefinition | None:
        """Extract one property signature; untyped members yield None."""
        name_node = node.child_by_field_name("name") or find_child_by_type(
            node, "property_identifier"
        )
        if name_node is None:
            return None

        type_annotation = node.child_by_field_name("type") or find_child_by_type(
            node, "type_annotation"
        )
        if type_annotation is None or len(type_annotation.children) < 2:
            return None

        name = get_node_text(name_node, source).strip("'\"")
        raw_type = get_node_text(type_annotation.children[-1], source).strip()

        return PropertyDefinition(
            name=name,
            raw_type=raw_type,
            prisma_type=map_type_to_prisma(raw_type),
            is_optional=any(c.type == "?" for c in node.children),
            is_id=name == _ID_FIELD,
            doc_comment=get_doc_comment(node, source),
        )
