"""Root test configuration: logging isolation and content tree fixtures"""

import logging
import os
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def restore_logging():
    """CLI runs reconfigure the root logger; put it back after every test."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    mdblog_level = logging.getLogger("mdblog").level
    yield
    root.handlers = handlers
    root.setLevel(level)
    logging.getLogger("mdblog").setLevel(mdblog_level)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    """Keep a developer's MDBLOG_* / VITE_* environment out of the tests."""
    for name in list(os.environ):
        if name.startswith("MDBLOG_") or name == "VITE_PRODUCTION_URL":
            monkeypatch.delenv(name, raising=False)


def _post_text(title, date, description, tags=None, body="Body text.\n") -> str:
    lines = ["---", f"title: {title}", f"date: {date}", f"description: {description}"]
    if tags is not None:
        lines.append(f"tags: [{', '.join(tags)}]")
    lines.append("---")
    return "\n".join(lines) + "\n" + body


@pytest.fixture(name="write_post")
def write_post_fixture(tmp_path):
    """Write a post file under tmp_path/content and return its path."""
    root = tmp_path / "content"

    def _write(rel: str, title="T", date="2024-01-01", description="d", tags=None, body="Body text.\n", raw=None) -> Path:
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(raw if raw is not None else _post_text(title, date, description, tags, body), encoding="utf-8")
        return path

    return _write


@pytest.fixture(name="content_dir")
def content_dir_fixture(tmp_path, write_post):
    """Two-post content tree: css/a.md (2024-01-01) and wezterm/b.md (2024-06-01)."""
    write_post("css/a.md", title="A", date="2024-01-01", description="d")
    write_post("wezterm/b.md", title="B", date="2024-06-01", description="d2", tags=["x"])
    return tmp_path / "content"
