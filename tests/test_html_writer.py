"""Tests for rendering the tree as bookmark HTML."""
from __future__ import annotations

from typing import TYPE_CHECKING

from managed_bookmarks import html_writer, sheet_reader
from managed_bookmarks.models import FolderNode, Row
from managed_bookmarks.tree_builder import build_tree

if TYPE_CHECKING:
    from pathlib import Path

    from managed_bookmarks.config import PolicyConfig


def test_html_keeps_tree_order_and_escapes(config: PolicyConfig) -> None:
    rows = [
        Row("Zeta", "Z & Co", "http://z?a=1&b=2"),
        Row("Alpha", "A", "http://a"),
    ]
    text = html_writer.render_html(build_tree(rows, config), config)
    if text.index("Zeta") > text.index("Alpha"):
        raise AssertionError("Folders should keep insertion order, not be sorted")
    if "Z &amp; Co" not in text or 'HREF="http://z?a=1&amp;b=2"' not in text:
        raise AssertionError("Names and URLs should be HTML-escaped")
    if "<H3>Company Bookmarks</H3>" not in text:
        raise AssertionError("Top-level folder should carry the configured name")


def test_written_html_reads_back_as_rows(
    tmp_path: Path, hr_rows: list[Row], config: PolicyConfig,
) -> None:
    out = tmp_path / "managed.html"
    html_writer.write_bookmark_html(build_tree(hr_rows, config), out, config)
    rows = sheet_reader.read_rows(out, config)
    expected = [
        Row("Company Bookmarks > HR > Benefits", "Dental", "http://a"),
        Row("Company Bookmarks > HR > Benefits", "Vision", "http://b"),
        Row("Company Bookmarks > HR", "Handbook", "http://c"),
    ]
    if rows != expected:
        msg = f"Unexpected rows from rendered HTML: {rows}"
        raise AssertionError(msg)


def test_empty_named_folder_survives_read_back(tmp_path: Path, config: PolicyConfig) -> None:
    out = tmp_path / "managed.html"
    tree = build_tree([Row("A >  > B", "Leaf", "http://leaf")], config)
    html_writer.write_bookmark_html(tree, out, config)
    rows = sheet_reader.read_rows(out, config)
    if rows != [Row("Company Bookmarks > A >  > B", "Leaf", "http://leaf")]:
        msg = f"Empty-named folder lost on read-back: {rows}"
        raise AssertionError(msg)
    top = build_tree(rows, config)[0]
    if not isinstance(top, FolderNode) or top.children[0].to_model() != tree[0].to_model():
        raise AssertionError("Rebuilt tree should match the rendered tree below the top folder")
