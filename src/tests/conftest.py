"""Shared fixtures for blog tests."""

from pathlib import Path

import pytest


def make_article(title: str, date: str, tags: list[str] | None = None, body: str = "") -> str:
    """Build article source with a YAML frontmatter block."""
    lines = ["---", f"title: {title}", f"date: {date}"]
    if tags is not None:
        lines.append("tags:")
        lines.extend(f"  - {tag}" for tag in tags)
    lines.append("---")
    return "\n".join(lines) + "\n\n" + body


@pytest.fixture
def articles_dir(tmp_path) -> Path:
    path = tmp_path / "articles"
    path.mkdir()
    return path


@pytest.fixture
def write_article(articles_dir):
    """Write an article file into the temporary article directory."""

    def _write(filename: str, title: str = "Title", date: str = "2023-01-01", tags=None, body: str = "") -> Path:
        path = articles_dir / filename
        path.write_text(make_article(title, date, tags, body), encoding="utf-8")
        return path

    return _write
