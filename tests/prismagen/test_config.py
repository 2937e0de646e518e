"""Tests for generator configuration."""

from pathlib import Path

import pytest

from prismagen.config import DB_PROVIDER_ENV_VAR, GeneratorConfig, load_config_file
from prismagen.errors import ConfigError


class TestGeneratorConfigDefaults:
    """Built-in defaults."""

    def test_defaults(self) -> None:
        config = GeneratorConfig()

        assert config.root_dir == Path("./src")
        assert config.output_path == Path("./prisma/schema.prisma")
        assert config.db_provider == "sqlite"
        assert config.database_url_env == "DATABASE_URL"
        assert config.preserve_preamble is True
        assert config.include_comments is True
        assert config.watch is False
        assert config.exclude_patterns == ["node_modules", ".next", "dist"]
        assert config.pinned_models == ["Member", "Visit", "Reward"]
        assert config.unique_fields == ["email", "memberId", "phoneNumber"]
        assert config.classifier == "naming"
        assert config.marker_comment == "@model"
        assert config.debounce_ms == 300
        assert config.strict_interface_prefix is False

    def test_provider_default_comes_from_environment(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv(DB_PROVIDER_ENV_VAR, "postgresql")

        assert GeneratorConfig().db_provider == "postgresql"

    def test_is_immutable(self) -> None:
        config = GeneratorConfig()

        with pytest.raises(ValueError):
            config.watch = True  # type: ignore[misc]


class TestGeneratorConfigValidation:
    """Validation through from_properties."""

    def test_from_properties_coerces_paths(self) -> None:
        config = GeneratorConfig.from_properties(
            {"root_dir": "app", "output_path": "db/schema.prisma"}
        )

        assert config.root_dir == Path("app")
        assert config.output_path == Path("db/schema.prisma")

    @pytest.mark.parametrize(
        "properties",
        [
            {"unknown_option": True},
            {"classifier": "regex"},
            {"debounce_ms": 0},
            {"db_provider": "   "},
        ],
        ids=["extra_field", "bad_classifier", "zero_debounce", "blank_provider"],
    )
    def test_invalid_properties_raise_config_error(
        self, properties: dict[str, object]
    ) -> None:
        with pytest.raises(ConfigError, match="Invalid generator configuration"):
            GeneratorConfig.from_properties(properties)

    def test_with_overrides_ignores_none(self) -> None:
        config = GeneratorConfig(db_provider="mysql")

        updated = config.with_overrides(db_provider=None, watch=True)

        assert updated.db_provider == "mysql"
        assert updated.watch is True
        assert config.watch is False

    def test_with_overrides_without_values_returns_same_instance(self) -> None:
        config = GeneratorConfig()

        assert config.with_overrides(root_dir=None) is config

    def test_with_overrides_validates(self) -> None:
        with pytest.raises(ConfigError):
            GeneratorConfig().with_overrides(classifier="magic")


class TestLoadConfigFile:
    """YAML and JSON configuration files."""

    def test_loads_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "prismagen.yaml"
        path.write_text(
            "root_dir: app/src\n"
            "db_provider: postgresql\n"
            "exclude_patterns:\n"
            "  - generated\n"
            "classifier: marker\n",
            encoding="utf-8",
        )

        config = load_config_file(path)

        assert config.root_dir == Path("app/src")
        assert config.db_provider == "postgresql"
        assert config.exclude_patterns == ["generated"]
        assert config.classifier == "marker"

    def test_loads_json(self, tmp_path: Path) -> None:
        path = tmp_path / ".prisma-ts-generator.json"
        path.write_text('{"watch": true, "include_comments": false}', encoding="utf-8")

        config = load_config_file(path)

        assert config.watch is True
        assert config.include_comments is False

    def test_empty_file_uses_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")

        assert load_config_file(path) == GeneratorConfig()

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="not found"):
            load_config_file(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.yaml"
        path.write_text("root_dir: [unclosed", encoding="utf-8")

        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config_file(path)

    def test_non_mapping_document(self, tmp_path: Path) -> None:
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")

        with pytest.raises(ConfigError, match="must be a mapping"):
            load_config_file(path)
