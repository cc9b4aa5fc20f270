"""Tests for fwalker.depth."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from fwalker.depth import canonicalize, component_count, relative_depth


class TestComponentCount:
    def test_equivalent_spellings_count_the_same(self, tmp_path: Path) -> None:
        (tmp_path / "a" / "b").mkdir(parents=True)
        plain = tmp_path / "a" / "b"
        dotted = tmp_path / "a" / "." / "b" / ".." / "b"
        assert component_count(plain) == component_count(dotted)

    def test_relative_path(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "a").mkdir()
        monkeypatch.chdir(tmp_path)
        assert component_count(Path("a")) == component_count(tmp_path / "a")

    @pytest.mark.skipif(os.name == "nt", reason="symlinks need privileges on Windows")
    def test_symlinked_parent_is_resolved(self, tmp_path: Path) -> None:
        (tmp_path / "real" / "deep").mkdir(parents=True)
        (tmp_path / "alias").symlink_to(tmp_path / "real")
        assert canonicalize(tmp_path / "alias" / "deep") == canonicalize(
            tmp_path / "real" / "deep"
        )

    def test_missing_path_raises(self, tmp_path: Path) -> None:
        with pytest.raises(OSError):
            component_count(tmp_path / "missing")


class TestRelativeDepth:
    @pytest.mark.parametrize(
        ("parts", "expected"),
        [
            ((), 0),
            (("a",), 1),
            (("a", "b"), 2),
            (("a", "b", ".."), 1),
        ],
    )
    def test_depth_below_origin(
        self, tmp_path: Path, parts: tuple[str, ...], expected: int
    ) -> None:
        (tmp_path / "a" / "b").mkdir(parents=True)
        origin_depth = component_count(tmp_path)
        assert relative_depth(tmp_path.joinpath(*parts), origin_depth) == expected
