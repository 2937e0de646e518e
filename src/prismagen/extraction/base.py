"""Base utility functions for AST traversal.

Thin helpers over tree-sitter nodes shared by the parser and the type
extractor.
"""

from collections.abc import Collection

from tree_sitter import Node

_DEFAULT_ENCODING = "utf-8"

# Node types that may sit between a declaration and its leading comment
_TRIVIAL_NODE_TYPES = frozenset(
    {
        "\n",
        " ",
        "\t",
        ";",
        ",",
    }
)


def get_node_text(node: Node, source: bytes) -> str:
    """Get the text content of an AST node.

    Args:
        node: Tree-sitter node with start_byte and end_byte attributes
        source: The encoded source the tree was parsed from

    Returns:
        Text content of the node

    """
    return source[node.start_byte : node.end_byte].decode(_DEFAULT_ENCODING)


def find_nodes_by_types(node: Node, node_types: Collection[str]) -> list[Node]:
    """Find all descendant nodes whose type is one of ``node_types``.

    Args:
        node: Root node to search from
        node_types: Types of nodes to find

    Returns:
        List of matching nodes in document (depth-first, pre-order) order

    """
    results: list[Node] = []
    _collect_nodes_by_types(node, frozenset(node_types), results)
    return results


def find_child_by_type(node: Node, child_type: str) -> Node | None:
    """Find the first direct child of a specific type.

    Args:
        node: Parent node to search in
        child_type: Type of child node to find

    Returns:
        First matching child node or None

    """
    for child in node.children:
        if child.type == child_type:
            return child
    return None


def is_trivial_node(node: Node) -> bool:
    """Check if a node represents whitespace or a separator."""
    return node.type in _TRIVIAL_NODE_TYPES


def _collect_nodes_by_types(
    node: Node, node_types: frozenset[str], results: list[Node]
) -> None:
    """Recursively collect nodes whose type is in ``node_types``."""
    if node.type in node_types:
        results.append(node)

    for child in node.children:
        _collect_nodes_by_types(child, node_types, results)
