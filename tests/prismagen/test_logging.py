"""Tests for prismagen logging configuration and setup."""

import logging
from pathlib import Path

import pytest
import yaml

from prismagen.logging import (
    LOGGING_ENV_VAR,
    LoggingError,
    get_config_path,
    load_config,
    setup_logging,
)

# =============================================================================
# Configuration Loading
# =============================================================================


class TestLoggingConfiguration:
    """Test logging configuration lookup and loading."""

    def test_get_config_path_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv(LOGGING_ENV_VAR, raising=False)

        config_path = get_config_path()

        assert config_path.name == "logging.yaml"
        assert config_path.exists()

    def test_get_config_path_from_environment(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        custom = tmp_path / "custom.yaml"
        custom.write_text("version: 1\n", encoding="utf-8")
        monkeypatch.setenv(LOGGING_ENV_VAR, str(custom))

        assert get_config_path() == custom

    def test_get_config_path_nonexistent_raises_error(self) -> None:
        with pytest.raises(LoggingError, match="No logging configuration found"):
            get_config_path("does-not-exist")

    def test_bundled_config_is_valid(self) -> None:
        config = load_config(get_config_path("logging"))

        assert config["version"] == 1
        assert "prismagen" in config["loggers"]
        assert "console" in config["handlers"]

    def test_load_config_invalid_yaml_raises_error(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.yaml"
        path.write_text("invalid: yaml: content: [", encoding="utf-8")

        with pytest.raises(LoggingError, match="Failed to parse YAML config"):
            load_config(path)

    def test_load_config_nonexistent_file_raises_error(self, tmp_path: Path) -> None:
        with pytest.raises(LoggingError, match="Failed to read config file"):
            load_config(tmp_path / "missing.yaml")

    def test_load_config_non_mapping_raises_error(self, tmp_path: Path) -> None:
        path = tmp_path / "list.yaml"
        path.write_text("- one\n- two\n", encoding="utf-8")

        with pytest.raises(LoggingError, match="Invalid configuration format"):
            load_config(path)


# =============================================================================
# Logging Setup
# =============================================================================


def _write_config(path: Path, handler_level: str, logger_level: str) -> Path:
    config = {
        "version": 1,
        "disable_existing_loggers": False,
        "handlers": {
            "console": {"class": "logging.StreamHandler", "level": handler_level}
        },
        "loggers": {
            "prismagen_test": {"level": logger_level, "handlers": ["console"]}
        },
    }
    path.write_text(yaml.dump(config), encoding="utf-8")
    return path


class TestLoggingSetup:
    """Test logging setup and level override functionality."""

    def test_level_override_updates_loggers(self, tmp_path: Path) -> None:
        config_path = _write_config(tmp_path / "log.yaml", "INFO", "INFO")

        setup_logging(config_path=config_path, level="DEBUG")

        assert logging.getLogger("prismagen_test").level == logging.DEBUG

    def test_handler_level_is_lowered_for_verbose_override(
        self, tmp_path: Path
    ) -> None:
        config_path = _write_config(tmp_path / "log.yaml", "INFO", "INFO")

        setup_logging(config_path=str(config_path), level="debug")

        handler = logging.getLogger("prismagen_test").handlers[0]
        assert handler.level == logging.DEBUG

    def test_handler_level_is_not_raised(self, tmp_path: Path) -> None:
        config_path = _write_config(tmp_path / "log.yaml", "DEBUG", "DEBUG")

        setup_logging(config_path=config_path, level="WARNING")

        handler = logging.getLogger("prismagen_test").handlers[0]
        assert handler.level == logging.DEBUG

    def test_invalid_level_falls_back_to_basic_logging(self, tmp_path: Path) -> None:
        config_path = _write_config(tmp_path / "log.yaml", "INFO", "INFO")

        setup_logging(config_path=config_path, level="CHATTY")

        assert logging.getLogger().level == logging.INFO

    def test_missing_file_falls_back_to_basic_logging(self, tmp_path: Path) -> None:
        setup_logging(config_path=tmp_path / "missing.yaml", level="ERROR")

        assert logging.getLogger().level == logging.ERROR

    def test_force_basic(self) -> None:
        setup_logging(level="WARNING", force_basic=True)

        assert logging.getLogger().level == logging.WARNING

    def test_bundled_config_applies(self) -> None:
        setup_logging(level="DEBUG")

        assert logging.getLogger("prismagen").level == logging.DEBUG
