"""Tests for the per-pass type registry."""

import logging

import pytest

from prismagen.models import PropertyDefinition, TypeDefinition
from prismagen.registry import TypeRegistry


def _type(name: str, source_file: str = "a.ts", *fields: str) -> TypeDefinition:
    return TypeDefinition(
        name=name,
        source_file=source_file,
        properties=[
            PropertyDefinition(name=f, raw_type="string", prisma_type="String")
            for f in fields
        ],
    )


class TestTypeRegistry:
    """Insertion order, lookup and overwrite semantics."""

    def test_iterates_in_insertion_order(self) -> None:
        registry = TypeRegistry()
        for name in ("Visit", "Member", "Reward"):
            registry.add(_type(name))

        assert registry.names() == ["Visit", "Member", "Reward"]
        assert [t.name for t in registry] == ["Visit", "Member", "Reward"]
        assert len(registry) == 3

    def test_lookup_and_membership(self) -> None:
        registry = TypeRegistry()
        member = _type("Member")
        registry.add(member)

        assert "Member" in registry
        assert "Visit" not in registry
        assert registry.get("Member") is member
        assert registry.get("Visit") is None

    def test_duplicate_name_last_wins_and_keeps_position(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        registry = TypeRegistry()
        registry.add(_type("Member", "a.ts", "name"))
        registry.add(_type("Visit", "b.ts"))

        with caplog.at_level(logging.WARNING, logger="prismagen.registry"):
            registry.add(_type("Member", "c.ts", "email"))

        member = registry.get("Member")
        assert member is not None
        assert member.source_file == "c.ts"
        assert [p.name for p in member.properties] == ["email"]
        assert registry.names() == ["Member", "Visit"]
        assert "overrides declaration in a.ts" in caplog.text

    def test_redeclaring_in_same_file_does_not_warn(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        registry = TypeRegistry()
        registry.add(_type("Member", "a.ts"))

        with caplog.at_level(logging.WARNING, logger="prismagen.registry"):
            registry.add(_type("Member", "a.ts"))

        assert caplog.text == ""

    def test_clear_empties_registry(self) -> None:
        registry = TypeRegistry()
        registry.add(_type("Member"))

        registry.clear()

        assert len(registry) == 0
        assert registry.names() == []
