"""Tests for preamble recovery and the default preamble."""

from pathlib import Path

from prismagen.preamble import (
    PreambleExtractor,
    RegexPreambleExtractor,
    default_preamble,
    load_preamble,
)

EXISTING_SCHEMA = """generator client {
  provider = "prisma-client-js"
  previewFeatures = ["fullTextSearch"]
}

datasource db {
  provider = "cockroachdb"
  url      = env("CUSTOM_URL")
}

// This schema was automatically generated from TypeScript types
model Member {
  id String @id @default(cuid())
}
"""


class TestRegexPreambleExtractor:
    """Finding configuration blocks in existing schema text."""

    def test_extracts_generator_and_datasource_blocks_verbatim(self) -> None:
        preamble = RegexPreambleExtractor().extract(EXISTING_SCHEMA)

        assert preamble == (
            "generator client {\n"
            '  provider = "prisma-client-js"\n'
            '  previewFeatures = ["fullTextSearch"]\n'
            "}\n"
            "\n"
            "datasource db {\n"
            '  provider = "cockroachdb"\n'
            '  url      = env("CUSTOM_URL")\n'
            "}\n"
            "\n"
        )

    def test_model_blocks_are_not_preserved(self) -> None:
        preamble = RegexPreambleExtractor().extract(EXISTING_SCHEMA)

        assert preamble is not None
        assert "model Member" not in preamble

    def test_returns_none_without_configuration_blocks(self) -> None:
        assert RegexPreambleExtractor().extract("model A {\n  id String\n}\n") is None

    def test_implements_protocol(self) -> None:
        assert isinstance(RegexPreambleExtractor(), PreambleExtractor)


class TestDefaultPreamble:
    """Preamble used for new schemas."""

    def test_default_preamble_uses_provider_and_url_variable(self) -> None:
        assert default_preamble("postgresql", "PG_URL") == (
            "generator client {\n"
            '  provider = "prisma-client-js"\n'
            "}\n"
            "\n"
            "datasource db {\n"
            '  provider = "postgresql"\n'
            '  url      = env("PG_URL")\n'
            "}\n"
            "\n"
        )

    def test_default_url_variable(self) -> None:
        assert 'env("DATABASE_URL")' in default_preamble("sqlite")


class TestLoadPreamble:
    """Choosing between a preserved and a default preamble."""

    def test_preserves_custom_provider_from_existing_file(self, tmp_path: Path) -> None:
        schema = tmp_path / "schema.prisma"
        schema.write_text(EXISTING_SCHEMA, encoding="utf-8")

        preamble = load_preamble(schema, "sqlite")

        assert 'provider = "cockroachdb"' in preamble
        assert "sqlite" not in preamble

    def test_missing_file_uses_default(self, tmp_path: Path) -> None:
        preamble = load_preamble(tmp_path / "missing.prisma", "mysql")

        assert preamble == default_preamble("mysql")

    def test_file_without_blocks_uses_default(self, tmp_path: Path) -> None:
        schema = tmp_path / "schema.prisma"
        schema.write_text("// nothing here\n", encoding="utf-8")

        assert load_preamble(schema, "sqlite") == default_preamble("sqlite")

    def test_undecodable_file_uses_default(self, tmp_path: Path) -> None:
        schema = tmp_path / "schema.prisma"
        schema.write_bytes(b"\xff\xfe\x00garbage")

        assert load_preamble(schema, "sqlite") == default_preamble("sqlite")

    def test_custom_extractor_is_used(self, tmp_path: Path) -> None:
        schema = tmp_path / "schema.prisma"
        schema.write_text(EXISTING_SCHEMA, encoding="utf-8")

        class FixedExtractor:
            def extract(self, schema_text: str) -> str | None:
                return "// custom header\n\n"

        assert load_preamble(schema, "sqlite", extractor=FixedExtractor()) == (
            "// custom header\n\n"
        )
