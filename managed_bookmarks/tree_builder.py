"""Build the managed bookmarks tree and its policy envelope from sheet rows."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .models import BookmarkNode, FolderNode, Node, get_or_create_folder

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Iterable

    from .config import PolicyConfig
    from .models import Row

LOGGER = logging.getLogger(__name__)


def build_tree(rows: Iterable[Row], config: PolicyConfig) -> list[Node]:
    """Build a tree of folders and bookmarks from rows, in row order.

    Rows without a name or url are dropped without error. Rows with an empty
    path land at the root. Path segments are split on the configured separator
    verbatim, so consecutive separators yield folders named ``""``.
    """
    root: list[Node] = []
    skipped = 0
    for row in rows:
        path = row.path.strip()
        name = row.name.strip()
        url = row.url.strip()

        if not name or not url:
            skipped += 1
            LOGGER.debug("Skipping row without name or url: %r", row)
            continue

        bookmark = BookmarkNode(name=name, url=url)
        if not path:
            root.append(bookmark)
            continue

        level = root
        for segment in path.split(config.path_separator):
            level = get_or_create_folder(level, segment).children
        level.append(bookmark)

    if skipped:
        LOGGER.debug("Dropped %d incomplete rows", skipped)
    return root


def build_envelope(tree: list[Node], config: PolicyConfig) -> list[dict[str, Any]]:
    """Wrap the tree in the two-element managed bookmarks envelope."""
    return [
        {"toplevel_name": config.toplevel_name},
        {"top": [node.to_model().model_dump() for node in tree]},
    ]


@dataclass(slots=True)
class TreeSummary:
    """Counts reported by the preview."""

    folders: int = 0
    bookmarks: int = 0
    max_depth: int = 0


def summarise_tree(tree: list[Node]) -> TreeSummary:
    """Count folders and bookmarks and measure folder nesting depth."""
    summary = TreeSummary()
    _walk(tree, 0, summary)
    return summary


def _walk(level: list[Node], depth: int, summary: TreeSummary) -> None:
    summary.max_depth = max(summary.max_depth, depth)
    for node in level:
        if isinstance(node, FolderNode):
            summary.folders += 1
            _walk(node.children, depth + 1, summary)
        else:
            summary.bookmarks += 1
