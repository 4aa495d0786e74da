"""CLI entry point for publishing Chrome managed bookmarks.

Reads path/name/url rows from a spreadsheet, CSV file or bookmark export,
builds the nested managed bookmarks tree and either previews it, renders it
as bookmark HTML, or pushes it to an organizational unit through the Chrome
Policy API after confirmation.
"""

from __future__ import annotations

# Standard library imports (alphabetical within groups)
import argparse
import json
import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING

# Third-party imports
from dotenv import load_dotenv

# Internal imports
from managed_bookmarks.config import PREVIEW_CHARS, PolicyConfig
from managed_bookmarks.html_writer import write_bookmark_html
from managed_bookmarks.policy_client import PolicyClient, build_request_body
from managed_bookmarks.sheet_reader import read_rows
from managed_bookmarks.tree_builder import build_envelope, build_tree, summarise_tree

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Callable

    from managed_bookmarks.models import Node

STAGES: dict[int, str] = {
    1: "Read bookmark rows",
    2: "Build bookmark tree",
    3: "Preview",
    4: "Push to Chrome",
}

_CONFIRM_ANSWERS = frozenset({"y", "yes"})


def configure_logging(*, verbose: bool) -> None:
    """Configure root logging (debug when verbose)."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )


def log_stage(stage_number: int, message: str, *args: object) -> None:
    """Log a message prefixed with a stage label."""
    stage_label = STAGES.get(stage_number, f"Stage {stage_number}")
    logger = logging.getLogger("managed_bookmarks")
    logger.info("[%s] %s", stage_label, message % args if args else message)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Publish spreadsheet bookmarks as Chrome managed bookmarks",
    )
    parser.add_argument(
        "--input",
        help=(
            "Path to the .xlsx/.csv sheet or bookmark HTML export. If omitted, the"
            " environment variable MANAGED_BOOKMARKS_SOURCE is used."
        ),
    )
    parser.add_argument("--sheet", help="Worksheet name (defaults to the active sheet)")
    parser.add_argument(
        "--mode",
        choices=("preview", "html", "push"),
        default="preview",
        help=(
            "Workflow: 'preview'→show the payload; 'html'→write bookmark HTML;"
            " 'push'→overwrite the managed bookmarks policy."
        ),
    )
    parser.add_argument("--org-unit", help="Target org unit, e.g. orgunits/03ph8a2z1")
    parser.add_argument("--toplevel-name", help="Name of the managed bookmarks folder")
    parser.add_argument("--separator", help="Folder separator used in the path column")
    parser.add_argument("--credentials", help="Service account key file for the Policy API")
    parser.add_argument("--json-output", type=Path, help="Write the preview payload here")
    parser.add_argument(
        "--html-output",
        type=Path,
        default=Path("managed_bookmarks.html"),
        help="Path to emit the bookmark HTML in 'html' mode",
    )
    parser.add_argument("--yes", action="store_true", help="Skip the push confirmation")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def _resolve_input(path_arg: str | None) -> Path:
    resolved = path_arg or os.getenv("MANAGED_BOOKMARKS_SOURCE")
    if not resolved:
        msg = "No input file provided. Supply --input or set MANAGED_BOOKMARKS_SOURCE in env."
        raise SystemExit(msg)
    return Path(resolved)


def _resolve_config(args: argparse.Namespace) -> PolicyConfig:
    try:
        return PolicyConfig.from_env().with_overrides(
            org_unit_id=args.org_unit,
            toplevel_name=args.toplevel_name,
            path_separator=args.separator,
            credentials_file=args.credentials,
        )
    except ValueError as exc:
        msg = f"Invalid configuration: {exc}"
        raise SystemExit(msg) from exc


def confirm_push(org_unit: str, prompt: Callable[[str], str] = input) -> bool:
    """Ask before overwriting the managed bookmarks of ``org_unit``."""
    answer = prompt(
        f"This will overwrite all Managed Bookmarks for OU: {org_unit}.\nAre you sure? [y/N] ",
    )
    return answer.strip().lower() in _CONFIRM_ANSWERS


def run_preview(tree: list[Node], config: PolicyConfig, json_output: Path | None) -> str:
    """Log the payload and return the truncated preview text."""
    envelope = build_envelope(tree, config)
    payload_text = json.dumps(envelope, indent=2, ensure_ascii=False)
    logging.getLogger("managed_bookmarks").debug("Payload:\n%s", payload_text)
    if json_output is not None:
        request_body = build_request_body(envelope, config.org_unit_id, config)
        json_output.write_text(
            json.dumps(request_body, indent=2, ensure_ascii=False) + "\n", encoding="utf-8",
        )
        log_stage(3, "Wrote request body to %s", json_output)

    summary = summarise_tree(tree)
    log_stage(
        3,
        "%d folders, %d bookmarks, depth %d",
        summary.folders,
        summary.bookmarks,
        summary.max_depth,
    )
    if len(payload_text) > PREVIEW_CHARS:
        return payload_text[:PREVIEW_CHARS] + "..."
    return payload_text


def run_push(tree: list[Node], config: PolicyConfig, client: PolicyClient) -> bool:
    """Push the tree; returns True only when the API accepted it."""
    result = client.submit(build_envelope(tree, config), config.org_unit_id)
    if result.success:
        log_stage(4, "Success! Managed bookmarks updated for %s", config.org_unit_id)
        return True

    logger = logging.getLogger("managed_bookmarks")
    if result.status_code:
        logger.error("Error (HTTP %d): %s", result.status_code, result.body_text)
    else:
        logger.error("Push error: %s", result.body_text)
    return False


def main(argv: list[str] | None = None) -> None:
    """Entry point for the managed bookmarks CLI."""
    load_dotenv()
    args = _parse_args(argv)
    input_path = _resolve_input(args.input)
    configure_logging(verbose=args.verbose)
    config = _resolve_config(args)

    log_stage(1, "Reading rows from %s", input_path)
    rows = read_rows(input_path, config, sheet_name=args.sheet)
    log_stage(2, "Building tree with separator %r", config.path_separator)
    tree = build_tree(rows, config)

    if args.mode == "preview":
        print(run_preview(tree, config, args.json_output))  # noqa: T201
        return
    if args.mode == "html":
        write_bookmark_html(tree, args.html_output, config)
        log_stage(3, "Wrote bookmark HTML to %s", args.html_output)
        return

    if not args.yes and not confirm_push(config.org_unit_id, input):
        log_stage(4, "Push cancelled; nothing was sent")
        return
    if not run_push(tree, config, PolicyClient(config)):
        raise SystemExit(1)


if __name__ == "__main__":
    main()
