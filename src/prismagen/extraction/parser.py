"""TypeScript source parser using tree-sitter."""

from pathlib import PurePath

import tree_sitter_typescript
from tree_sitter import Language, Node, Parser

from prismagen.errors import ParserError
from prismagen.extraction.helpers import DECLARATION_FILE_SUFFIX, TS_EXTENSIONS

# Grammar registry: plain TypeScript and TSX
_LANGUAGE_REGISTRY: dict[str, Language] = {
    "typescript": Language(tree_sitter_typescript.language_typescript()),
    "tsx": Language(tree_sitter_typescript.language_tsx()),
}

_DEFAULT_GRAMMAR = "typescript"
_DEFAULT_ENCODING = "utf-8"


def _get_tree_sitter_language(name: str) -> Language:
    """Get a tree-sitter Language object for the specified grammar.

    Raises:
        ParserError: If the grammar is not registered

    """
    if name not in _LANGUAGE_REGISTRY:
        raise ParserError(
            f"Grammar '{name}' not supported. Available: {list(_LANGUAGE_REGISTRY)}"
        )
    return _LANGUAGE_REGISTRY[name]


class ParsedSource:
    """A parsed file: the root node plus the exact bytes it was parsed from."""

    def __init__(self, root_node: Node, source: bytes) -> None:
        self.root_node = root_node
        self.source = source


class TypeScriptParser:
    """Parser for TypeScript and TSX source using tree-sitter.

    ``.tsx`` files are parsed with the TSX grammar, everything else with the
    plain TypeScript grammar so that angle-bracket type assertions and
    generic arrow functions parse correctly.
    """

    def __init__(self) -> None:
        """Initialise one tree-sitter parser per grammar."""
        self._parsers: dict[str, Parser] = {}
        for name in _LANGUAGE_REGISTRY:
            parser = Parser()
            parser.language = _get_tree_sitter_language(name)
            self._parsers[name] = parser

    @staticmethod
    def grammar_for(file_path: str | PurePath) -> str:
        """Return the grammar name used for a file path."""
        extension = PurePath(file_path).suffix.lower()
        return TS_EXTENSIONS.get(extension, _DEFAULT_GRAMMAR)

    @staticmethod
    def is_supported_file(file_path: str | PurePath) -> bool:
        """Check if a file is a TypeScript source (declaration files excluded).

        Args:
            file_path: Path to check

        Returns:
            True if the extension is a TypeScript extension and the file is
            not a ``.d.ts`` declaration file

        """
        path = PurePath(file_path)
        if path.name.lower().endswith(DECLARATION_FILE_SUFFIX):
            return False
        return path.suffix.lower() in TS_EXTENSIONS

    def parse(self, source_code: str, file_path: str | PurePath = "") -> ParsedSource:
        """Parse source code.

        Args:
            source_code: Source code to parse
            file_path: Path used to choose between the TypeScript and TSX grammar

        Returns:
            The parsed source

        Raises:
            ParserError: If the source cannot be encoded or parsed

        """
        try:
            source = source_code.encode(_DEFAULT_ENCODING)
            tree = self._parsers[self.grammar_for(file_path)].parse(source)
        except (UnicodeEncodeError, ValueError) as e:
            raise ParserError(f"Failed to parse {file_path or '<source>'}: {e}") from e

        return ParsedSource(tree.root_node, source)
