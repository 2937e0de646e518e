"""Type registry for one generation pass.

A fresh registry is created at the start of every pass and handed to each
stage in turn: the extractor fills it, the relationship resolver mutates it
in place and the renderer reads it.
"""

import logging
from collections.abc import Iterator

from prismagen.models import TypeDefinition

logger = logging.getLogger(__name__)


class TypeRegistry:
    """Ordered mapping of type name to extracted definition.

    Iteration follows first-insertion order. Adding a name that is already
    registered replaces the definition but keeps its original position.
    """

    def __init__(self) -> None:
        """Initialise an empty registry."""
        self._types: dict[str, TypeDefinition] = {}

    def add(self, type_def: TypeDefinition) -> None:
        """Register a type definition, overwriting any previous one of that name.

        Args:
            type_def: The extracted type definition

        """
        existing = self._types.get(type_def.name)
        if existing is not None and existing.source_file != type_def.source_file:
            logger.warning(
                "Type %s declared in %s overrides declaration in %s",
                type_def.name,
                type_def.source_file,
                existing.source_file,
            )
        self._types[type_def.name] = type_def

    def get(self, name: str) -> TypeDefinition | None:
        """Return the definition registered under ``name``, if any."""
        return self._types.get(name)

    def names(self) -> list[str]:
        """Return registered type names in insertion order."""
        return list(self._types)

    def clear(self) -> None:
        """Remove every registered type."""
        self._types.clear()

    def __contains__(self, name: object) -> bool:
        return name in self._types

    def __iter__(self) -> Iterator[TypeDefinition]:
        return iter(self._types.values())

    def __len__(self) -> int:
        return len(self._types)
