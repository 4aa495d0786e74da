"""Shared pytest fixtures for managed bookmarks tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from managed_bookmarks.config import PolicyConfig
from managed_bookmarks.models import Row

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def config() -> PolicyConfig:
    """Configuration with the stock defaults and a fixed org unit."""
    return PolicyConfig(org_unit_id="orgunits/03ph8a2z1", toplevel_name="Company Bookmarks")


@pytest.fixture
def hr_rows() -> list[Row]:
    """Rows sharing the ``HR > Benefits`` prefix plus one shallower bookmark."""
    return [
        Row("HR > Benefits", "Dental", "http://a"),
        Row("HR > Benefits", "Vision", "http://b"),
        Row("HR", "Handbook", "http://c"),
    ]


@pytest.fixture
def sample_csv(tmp_path: Path) -> Path:
    """Create a small CSV sheet with a header row and one incomplete row."""
    content = (
        "Path,Name,URL\n"
        "HR > Benefits,Dental,http://a\n"
        ",Google,http://google.com\n"
        "IT,,http://missing-name\n"
    )
    p = tmp_path / "bookmarks.csv"
    p.write_text(content, encoding="utf-8")
    return p


@pytest.fixture
def sample_export_html(tmp_path: Path) -> Path:
    """Create a minimal synthetic bookmark export with one nested folder."""
    content = (
        "<!DOCTYPE NETSCAPE-Bookmark-file-1><HTML><H1>Bookmarks</H1><DL><p>"
        "<DT><H3>Work</H3><DL><p>"
        '<DT><A HREF="https://intranet.example">Intranet</A>'
        "</DL><p>"
        '<DT><A HREF="https://example.com">Example</A>'
        "</DL></HTML>"
    )
    p = tmp_path / "export.html"
    p.write_text(content, encoding="utf-8")
    return p
