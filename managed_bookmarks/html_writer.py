"""Render the managed bookmarks tree as a Netscape bookmark HTML file."""

from __future__ import annotations

import html
from typing import TYPE_CHECKING

from .models import FolderNode

if TYPE_CHECKING:  # pragma: no cover
    from pathlib import Path

    from .config import PolicyConfig
    from .models import Node

HTML_HEADER = """<!DOCTYPE NETSCAPE-Bookmark-file-1>
<!-- This is an automatically generated file.
     It will be read and overwritten.
     DO NOT EDIT! -->
<META HTTP-EQUIV="Content-Type" CONTENT="text/html; charset=UTF-8">
<TITLE>Bookmarks</TITLE>
<H1>Bookmarks</H1>
"""


def render_html(tree: list[Node], config: PolicyConfig) -> str:
    """Render the tree under a folder named after the configured top-level name.

    Entries keep their tree order, matching what browsers show for the policy.
    """
    lines: list[str] = [HTML_HEADER.strip(), "<DL><p>"]
    _render_folder(FolderNode(name=config.toplevel_name, children=list(tree)), lines, 1)
    lines.append("</DL><p>")
    return "\n".join(lines)


def _render_folder(folder: FolderNode, output: list[str], depth: int) -> None:
    indent = "    " * depth
    output.append(f"{indent}<DT><H3>{html.escape(folder.name)}</H3>")
    output.append(f"{indent}<DL><p>")
    for child in folder.children:
        if isinstance(child, FolderNode):
            _render_folder(child, output, depth + 1)
        else:
            href = html.escape(child.url, quote=True)
            output.append(
                f'{indent}    <DT><A HREF="{href}" ADD_DATE="0">{html.escape(child.name)}</A>',
            )
    output.append(f"{indent}</DL><p>")


def write_bookmark_html(tree: list[Node], output_path: Path, config: PolicyConfig) -> None:
    """Write the tree to ``output_path`` as bookmark HTML."""
    output_path.write_text(render_html(tree, config) + "\n", encoding="utf-8")
