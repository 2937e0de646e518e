"""Shared helpers for TypeScript type extraction."""

import re

from tree_sitter import Node

from prismagen.extraction.base import get_node_text, is_trivial_node

# TypeScript file extensions and the grammar used for each
TS_EXTENSIONS = {
    ".ts": "typescript",
    ".mts": "typescript",
    ".cts": "typescript",
    ".tsx": "tsx",
}
DECLARATION_FILE_SUFFIX = ".d.ts"

# TypeScript AST node types
INTERFACE_TYPE = "interface_declaration"
TYPE_ALIAS_TYPE = "type_alias_declaration"
PROPERTY_SIGNATURE_TYPE = "property_signature"
COMMENT_TYPE = "comment"
EXPORT_STATEMENT_TYPE = "export_statement"
OBJECT_BODY_TYPES = ("interface_body", "object_type")
TYPE_REFERENCE_TYPES = ("type_identifier", "nested_type_identifier", "generic_type")

# Generic references that never denote another model
UTILITY_TYPE_NAMES = frozenset({"Array", "Record", "Partial", "Pick", "Omit"})

# Line index offset (tree-sitter uses 0-based, we want 1-based)
LINE_INDEX_OFFSET = 1

_BLOCK_COMMENT_OPEN = re.compile(r"^/\*+")
_BLOCK_COMMENT_CLOSE = re.compile(r"\*+/$")


def clean_comment(text: str) -> str:
    """Strip comment delimiters and leading asterisks from a comment.

    Args:
        text: Raw comment text including ``//`` or ``/* */`` delimiters

    Returns:
        The comment body, one non-empty line per source line

    """
    text = text.strip()
    if text.startswith("//"):
        lines = [text.lstrip("/")]
    else:
        text = _BLOCK_COMMENT_CLOSE.sub("", _BLOCK_COMMENT_OPEN.sub("", text))
        lines = [line.strip().lstrip("*") for line in text.splitlines()]

    return "\n".join(line.strip() for line in lines if line.strip())


def get_doc_comment(node: Node, source: bytes) -> str:
    """Extract the comments directly preceding a declaration or member.

    Comments above a wrapping ``export`` statement belong to the exported
    declaration. A comment that trails the previous sibling on the same line
    is not treated as documentation.

    Args:
        node: The AST node to find documentation for
        source: The encoded source code

    Returns:
        Cleaned comment text joined by newlines, or an empty string

    """
    anchor = node
    if anchor.parent is not None and anchor.parent.type == EXPORT_STATEMENT_TYPE:
        anchor = anchor.parent

    comments: list[Node] = []
    sibling = anchor.prev_sibling
    while sibling is not None:
        if sibling.type == COMMENT_TYPE:
            comments.append(sibling)
        elif not is_trivial_node(sibling):
            break
        sibling = sibling.prev_sibling

    if (
        sibling is not None
        and comments
        and comments[-1].start_point[0] == sibling.end_point[0]
    ):
        comments.pop()

    cleaned = (clean_comment(get_node_text(c, source)) for c in reversed(comments))
    return "\n".join(text for text in cleaned if text)
