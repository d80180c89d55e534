"""Tests for asset loading and key computation.

Tests for asset_embed.assets.loader and asset_embed.utils.fs path helpers:
    - Keys are relative to the base directory with forward slashes
    - Read failures and out-of-base files become Skipped values

Run:
    pytest tests/test_loader.py -v
"""

from __future__ import annotations

import os

import pytest

from asset_embed.assets import loader
from asset_embed.assets.entries import AssetEntry, ResolvedFile, Skipped
from asset_embed.utils import fs


class TestRelativeKey:
    def test_nested_key_uses_forward_slashes(self, make_tree) -> None:
        base = make_tree({"sub/dir/a.txt": b"a"})
        key = loader.relative_key(str(base), str(base / "sub" / "dir" / "a.txt"))
        assert key == "sub/dir/a.txt"

    def test_relative_base_directory(self, make_tree, monkeypatch) -> None:
        base = make_tree({"x/y.txt": b""})
        monkeypatch.chdir(base.parent)
        assert loader.relative_key("base", str(base / "x" / "y.txt")) == "x/y.txt"

    def test_outside_base_raises(self, make_tree, tmp_path) -> None:
        base = make_tree({"a.txt": b""})
        outside = tmp_path / "elsewhere.txt"
        outside.write_bytes(b"")
        with pytest.raises(ValueError, match="not under"):
            loader.relative_key(str(base), str(outside))

    def test_sibling_with_common_prefix_is_outside(self, tmp_path) -> None:
        (tmp_path / "base").mkdir()
        (tmp_path / "base2").mkdir()
        with pytest.raises(ValueError):
            loader.relative_key(str(tmp_path / "base"), str(tmp_path / "base2" / "f"))


class TestLoad:
    def test_reads_full_content(self, make_tree) -> None:
        data = bytes(range(256))
        base = make_tree({"bin/blob": data})
        out = loader.load(str(base), ResolvedFile(str(base / "bin" / "blob"), 0.0))
        assert out == AssetEntry("bin/blob", data)

    def test_unreadable_file_is_skipped(self, make_tree) -> None:
        base = make_tree({})
        out = loader.load(str(base), ResolvedFile(str(base / "vanished.txt"), 0.0))
        assert isinstance(out, Skipped)
        assert "Cannot read input file" in out.reason

    def test_out_of_base_file_is_skipped(self, make_tree, tmp_path) -> None:
        base = make_tree({})
        outside = tmp_path / "outside.txt"
        outside.write_bytes(b"x")
        out = loader.load(str(base), ResolvedFile(str(outside), 0.0))
        assert isinstance(out, Skipped)
        assert "relative path" in out.reason


class TestSlashConversion:
    def test_to_slash_on_backslash_host(self, monkeypatch) -> None:
        monkeypatch.setattr(fs.os, "sep", "\\")
        assert fs.to_slash("sub\\dir\\a.txt") == "sub/dir/a.txt"
        assert fs.from_slash("sub/dir/a.txt") == "sub\\dir\\a.txt"

    def test_identity_on_posix_host(self, monkeypatch) -> None:
        monkeypatch.setattr(fs.os, "sep", "/")
        assert fs.to_slash("sub/dir/a.txt") == "sub/dir/a.txt"
        assert fs.from_slash("sub/dir/a.txt") == "sub/dir/a.txt"


def test_directory_read_is_skipped(make_tree) -> None:
    base = make_tree({}, dirs=("d",))
    out = loader.load(str(base), ResolvedFile(os.path.join(str(base), "d"), 0.0))
    assert isinstance(out, Skipped)


def test_entry_repr_hides_content() -> None:
    assert repr(AssetEntry("a.txt", b"12345")) == "AssetEntry('a.txt', 5 bytes)"
