"""Unit tests for core/discover.py"""

import pytest

from mdblog.core.discover import discover_files


def test_discover_files_recursive(tmp_path):
    """discover_files finds .md files at every depth as relative POSIX paths."""
    (tmp_path / "top.md").write_text("x")
    (tmp_path / "css").mkdir()
    (tmp_path / "css" / "grid.md").write_text("x")
    (tmp_path / "css" / "deep").mkdir()
    (tmp_path / "css" / "deep" / "nested.md").write_text("x")
    assert sorted(discover_files(tmp_path)) == ["css/deep/nested.md", "css/grid.md", "top.md"]


def test_discover_files_is_depth_first_and_sorted(tmp_path):
    """Directories are walked depth-first in name order, independent of creation order."""
    for rel in ["wezterm/b.md", "css/z.md", "css/a.md", "a.md"]:
        path = tmp_path / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("x")
    assert discover_files(tmp_path) == ["a.md", "css/a.md", "css/z.md", "wezterm/b.md"]


def test_discover_files_skips_other_extensions(tmp_path):
    """Only names ending in .md are collected (.mdx and .txt are ignored)."""
    (tmp_path / "notes.txt").write_text("x")
    (tmp_path / "page.mdx").write_text("x")
    (tmp_path / "post.md").write_text("x")
    assert discover_files(tmp_path) == ["post.md"]


def test_discover_files_empty_dir(tmp_path):
    assert discover_files(tmp_path) == []


def test_discover_files_missing_root(tmp_path):
    """A missing content directory is an error, not an empty result."""
    with pytest.raises(FileNotFoundError, match="not found"):
        discover_files(tmp_path / "nope")


def test_discover_files_root_is_file(tmp_path):
    f = tmp_path / "post.md"
    f.write_text("x")
    with pytest.raises(NotADirectoryError):
        discover_files(f)
