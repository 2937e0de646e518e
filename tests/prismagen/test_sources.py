"""Tests for source set providers."""

from pathlib import Path

import pytest

from prismagen.errors import SourceReadError
from prismagen.sources import (
    FilesystemSourceProvider,
    InMemorySourceProvider,
    SourceProvider,
    normalise_exclude_pattern,
)


def _touch(root: Path, relative: str, content: str = "") -> Path:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


class TestFilesystemDiscovery:
    """Selecting candidate files under a root directory."""

    def test_discovers_ts_and_tsx_in_sorted_order(self, tmp_path: Path) -> None:
        _touch(tmp_path, "types/visit.ts")
        _touch(tmp_path, "components/Card.tsx")
        _touch(tmp_path, "types/member.ts")

        files = FilesystemSourceProvider(tmp_path).discover()

        assert [Path(f).relative_to(tmp_path).as_posix() for f in files] == [
            "components/Card.tsx",
            "types/member.ts",
            "types/visit.ts",
        ]

    def test_skips_declaration_files_and_other_extensions(self, tmp_path: Path) -> None:
        _touch(tmp_path, "global.d.ts")
        _touch(tmp_path, "index.js")
        _touch(tmp_path, "notes.md")
        kept = _touch(tmp_path, "model.ts")

        assert FilesystemSourceProvider(tmp_path).discover() == [str(kept)]

    def test_default_excludes(self, tmp_path: Path) -> None:
        _touch(tmp_path, "node_modules/pkg/index.ts")
        _touch(tmp_path, ".next/types/app.ts")
        _touch(tmp_path, "dist/model.ts")
        kept = _touch(tmp_path, "app/model.ts")

        assert FilesystemSourceProvider(tmp_path).discover() == [str(kept)]

    def test_exclusion_is_substring_match(self, tmp_path: Path) -> None:
        _touch(tmp_path, "legacy_old/model.ts")
        kept = _touch(tmp_path, "current/model.ts")

        provider = FilesystemSourceProvider(tmp_path, exclude_patterns=["old"])

        assert provider.discover() == [str(kept)]

    def test_excludes_ignore_file_names(self, tmp_path: Path) -> None:
        distributor = _touch(tmp_path, "types/distributor.ts")
        distance = _touch(tmp_path, "models/distance.ts")
        root_file = _touch(tmp_path, "dist.ts")
        _touch(tmp_path, "dist/bundle.ts")

        files = FilesystemSourceProvider(tmp_path).discover()

        assert files == [str(root_file), str(distance), str(distributor)]

    def test_missing_root_yields_no_files(self, tmp_path: Path) -> None:
        provider = FilesystemSourceProvider(tmp_path / "missing")

        assert provider.discover() == []

    def test_parent_directory_names_do_not_trigger_excludes(
        self, tmp_path: Path
    ) -> None:
        root = tmp_path / "dist" / "project"
        kept = _touch(root, "model.ts")

        assert FilesystemSourceProvider(root).discover() == [str(kept)]


class TestReading:
    """Reading file contents."""

    def test_reads_utf8_text(self, tmp_path: Path) -> None:
        path = _touch(tmp_path, "model.ts", "interface Café { id: string; }")

        assert FilesystemSourceProvider(tmp_path).read(str(path)) == (
            "interface Café { id: string; }"
        )

    def test_undecodable_file_raises_source_read_error(self, tmp_path: Path) -> None:
        path = tmp_path / "binary.ts"
        path.write_bytes(b"\xff\xfe\xfa")

        with pytest.raises(SourceReadError) as exc_info:
            FilesystemSourceProvider(tmp_path).read(str(path))

        assert exc_info.value.path == str(path)

    def test_missing_file_raises_source_read_error(self, tmp_path: Path) -> None:
        with pytest.raises(SourceReadError, match="Failed to read"):
            FilesystemSourceProvider(tmp_path).read(str(tmp_path / "gone.ts"))


class TestInMemorySourceProvider:
    """Mapping-backed provider used for embedding and tests."""

    def test_serves_mapping_in_order(self) -> None:
        provider = InMemorySourceProvider({"b.ts": "B", "a.ts": "A"})

        assert provider.discover() == ["b.ts", "a.ts"]
        assert provider.read("a.ts") == "A"

    def test_unknown_path_raises(self) -> None:
        with pytest.raises(SourceReadError):
            InMemorySourceProvider({}).read("nope.ts")

    @pytest.mark.parametrize(
        "provider",
        [InMemorySourceProvider({}), FilesystemSourceProvider(Path("."))],
        ids=["memory", "filesystem"],
    )
    def test_implements_protocol(self, provider: object) -> None:
        assert isinstance(provider, SourceProvider)


@pytest.mark.parametrize(
    ("pattern", "expected"),
    [("**/node_modules/**", "node_modules"), ("dist", "dist"), ("**/.next", ".next")],
    ids=["glob_both_sides", "plain", "glob_prefix"],
)
def test_normalise_exclude_pattern(pattern: str, expected: str) -> None:
    assert normalise_exclude_pattern(pattern) == expected
