"""Cross-type relationship inference.

Relationships can only be resolved once every file of a pass has been
extracted, so the resolver always runs over the complete registry:

1. Candidate detection marks properties whose raw type looks like a
   reference to another model (``Visit[]``, ``Array<Visit>`` or ``Visit``).
2. Promotion keeps candidates whose target is a registered model, resets the
   rest to plain scalars and pairs each one-to-many field with the matching
   back reference on the target model.
"""

import logging
import re

from prismagen.extraction.classifiers import has_non_model_suffix
from prismagen.models import PropertyDefinition, RelationshipKind, TypeDefinition
from prismagen.registry import TypeRegistry

logger = logging.getLogger(__name__)

_ARRAY_PATTERN = re.compile(r"Array<(\w+)>|(\w+)\[\]")
_BARE_IDENTIFIER = re.compile(r"^[A-Z]\w*$")
_BUILTIN_REFERENCE_NAMES = frozenset({"String", "Number", "Boolean", "Date"})


def detect_candidate(prop: PropertyDefinition) -> None:
    """Mark a property as a relationship candidate based on its raw type.

    Args:
        prop: Property to inspect; updated in place

    """
    type_text = prop.raw_type
    array_match = _ARRAY_PATTERN.search(type_text)
    if array_match:
        related = array_match.group(1) or array_match.group(2)
        if related[:1].isupper() and not has_non_model_suffix(related):
            prop.relationship_kind = RelationshipKind.ONE_TO_MANY
            prop.relates_to = related
    elif (
        _BARE_IDENTIFIER.match(type_text)
        and type_text not in _BUILTIN_REFERENCE_NAMES
    ):
        prop.relationship_kind = RelationshipKind.ONE_TO_ONE
        prop.relates_to = type_text


def _find_back_reference(
    owner: TypeDefinition, related: TypeDefinition
) -> PropertyDefinition | None:
    """Find the field on ``related`` that points back to ``owner``."""
    for candidate in (owner.name.lower(), f"{owner.name.lower()}id"):
        for prop in related.properties:
            if prop.name.lower() == candidate:
                return prop
    return None


class RelationshipResolver:
    """Two-pass relationship analysis over a complete type registry."""

    def resolve(self, registry: TypeRegistry) -> None:
        """Detect, promote and pair relationships in place.

        Args:
            registry: The fully extracted registry for this pass

        """
        for type_def in registry:
            for prop in type_def.properties:
                detect_candidate(prop)

        for type_def in registry:
            for prop in type_def.properties:
                if not prop.is_relation or prop.relationship_kind is (
                    RelationshipKind.MANY_TO_ONE
                ):
                    continue

                related = registry.get(prop.relates_to)
                if related is None:
                    logger.debug(
                        "%s.%s references unknown type %s, keeping scalar %s",
                        type_def.name,
                        prop.name,
                        prop.relates_to,
                        prop.prisma_type,
                    )
                    prop.relationship_kind = RelationshipKind.NONE
                    prop.relates_to = ""
                    continue

                if prop.relationship_kind is RelationshipKind.ONE_TO_MANY:
                    self._pair_back_reference(type_def, prop, related)

    def _pair_back_reference(
        self,
        owner: TypeDefinition,
        forward: PropertyDefinition,
        related: TypeDefinition,
    ) -> None:
        """Repoint the back reference on ``related`` to a many-to-one relation."""
        back_ref = _find_back_reference(owner, related)
        if back_ref is None:
            return

        back_ref.relationship_kind = RelationshipKind.MANY_TO_ONE
        back_ref.relates_to = owner.name
        forward.relationship_field = back_ref.name
        logger.debug(
            "Paired %s.%s with %s.%s",
            owner.name,
            forward.name,
            related.name,
            back_ref.name,
        )
