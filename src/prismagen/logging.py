"""Logging setup for prismagen.

The bundled ``resources/logging.yaml`` is fed to ``logging.config.dictConfig``
and sends ``prismagen`` records through a Rich console handler. Point
``PRISMAGEN_LOGGING_CONFIG`` at another YAML file to replace it. When no
usable file can be applied, plain ``basicConfig`` logging to stderr is used
instead so the CLI never fails because of logging.
"""

from __future__ import annotations

import logging
import logging.config
import os
import sys
from pathlib import Path
from typing import Any, cast

import yaml

CONFIG_DIR = Path(__file__).parent / "resources"
LOGGING_ENV_VAR = "PRISMAGEN_LOGGING_CONFIG"

_DEFAULT_CONFIG_NAME = "logging"
_FALLBACK_LEVEL = "INFO"
_FALLBACK_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


class LoggingError(Exception):
    """A logging configuration file could not be found, read or applied."""

    pass


def get_config_path(config_name: str | None = None) -> Path:
    """Locate the YAML file to configure logging from.

    A bundled file picked by name wins; otherwise the environment variable,
    otherwise the default bundled file.

    Raises:
        LoggingError: If the chosen file does not exist

    """
    env_path = os.getenv(LOGGING_ENV_VAR)
    if config_name:
        path = CONFIG_DIR / f"{config_name}.yaml"
    elif env_path:
        path = Path(env_path)
    else:
        path = CONFIG_DIR / f"{_DEFAULT_CONFIG_NAME}.yaml"

    if not path.exists():
        raise LoggingError(f"No logging configuration found. Expected at: {path}")
    return path


def load_config(config_path: Path) -> dict[str, Any]:
    """Read a dictConfig mapping from YAML.

    Raises:
        LoggingError: If the file is unreadable, not YAML or not a mapping

    """
    try:
        text = config_path.read_text(encoding="utf-8")
    except OSError as e:
        raise LoggingError(f"Failed to read config file {config_path}: {e}") from e

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise LoggingError(f"Failed to parse YAML config {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise LoggingError(f"Invalid configuration format in {config_path}")
    return cast(dict[str, Any], data)


def _level_number(level: str) -> int:
    number = logging.getLevelName(level.upper())
    if not isinstance(number, int):
        raise LoggingError(f"Invalid log level: {level}")
    return number


def _apply_level_override(config: dict[str, Any], level: str) -> None:
    """Force ``level`` onto every logger; lower handlers that would hide it."""
    wanted = _level_number(level)
    name = logging.getLevelName(wanted)

    logger_configs = list(config.get("loggers", {}).values())
    if isinstance(config.get("root"), dict):
        logger_configs.append(config["root"])
    for logger_config in logger_configs:
        logger_config["level"] = name

    for handler_config in config.get("handlers", {}).values():
        if not isinstance(handler_config, dict) or "level" not in handler_config:
            continue
        current = logging.getLevelName(str(handler_config["level"]).upper())
        if isinstance(current, int) and wanted < current:
            handler_config["level"] = name


def setup_logging(
    config_path: Path | str | None = None,
    level: str | None = None,
    force_basic: bool = False,
) -> None:
    """Configure logging for a CLI run.

    Args:
        config_path: YAML file to use instead of the default lookup
        level: Level applied to every configured logger, e.g. ``DEBUG``
        force_basic: Skip the YAML file and use basic stderr logging

    """
    if force_basic:
        _setup_basic_logging(level or _FALLBACK_LEVEL)
        return

    try:
        path = Path(config_path) if config_path is not None else get_config_path()
        config = load_config(path)
        if level:
            _apply_level_override(config, level)
        logging.config.dictConfig(config)
    except (LoggingError, ImportError, KeyError, ValueError) as e:
        fallback_level = level or _FALLBACK_LEVEL
        _setup_basic_logging(fallback_level)
        logging.getLogger(__name__).warning(
            "Logging configuration not applied (%s); "
            "using basic stderr logging at %s",
            e,
            fallback_level,
        )
        return

    logging.getLogger(__name__).debug("Logging configured from %s", path)


def _setup_basic_logging(level: str) -> None:
    """Install a single stderr handler on the root logger."""
    number = logging.getLevelName(level.upper())
    logging.basicConfig(
        level=number if isinstance(number, int) else logging.INFO,
        format=_FALLBACK_FORMAT,
        stream=sys.stderr,
        force=True,
    )
