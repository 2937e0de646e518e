"""Global test configuration for prismagen tests."""

import logging
from pathlib import Path

import pytest

from prismagen.config import DB_PROVIDER_ENV_VAR

MEMBER_SOURCE = """
/**
 * A loyalty programme member
 */
export interface Member {
  id: string;
  name: string;
  email: string;
  visits: Visit[];
  createdAt: Date;
}
"""

VISIT_SOURCE = """
export interface Visit {
  id: string;
  memberId: string;
  amount: number;
}
"""

FIXED_TIMESTAMP = "2024-01-01T00:00:00.000Z"


@pytest.fixture(autouse=True)
def clear_provider_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's environment out of default configuration."""
    monkeypatch.delenv(DB_PROVIDER_ENV_VAR, raising=False)


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo dictConfig changes so caplog sees prismagen records in every test."""
    root_level = logging.getLogger().level
    yield
    logging.getLogger().setLevel(root_level)
    package_logger = logging.getLogger("prismagen")
    package_logger.handlers.clear()
    package_logger.propagate = True
    package_logger.setLevel(logging.NOTSET)


@pytest.fixture
def fixed_clock():
    """Banner clock returning a constant timestamp."""
    return lambda: FIXED_TIMESTAMP


@pytest.fixture
def ts_project(tmp_path: Path) -> Path:
    """Create a small TypeScript project with Member and Visit models.

    Returns:
        The project root; sources live under ``src/`` and the schema is
        expected at ``prisma/schema.prisma``

    """
    src = tmp_path / "src"
    (src / "types").mkdir(parents=True)
    (src / "types" / "member.ts").write_text(MEMBER_SOURCE, encoding="utf-8")
    (src / "types" / "visit.ts").write_text(VISIT_SOURCE, encoding="utf-8")
    return tmp_path
