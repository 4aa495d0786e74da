"""Read path/name/url rows from spreadsheets, CSV files or bookmark exports."""

from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import TYPE_CHECKING

from bs4 import BeautifulSoup, Tag
from openpyxl import load_workbook

from .models import Row

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Iterable

    from .config import PolicyConfig

LOGGER = logging.getLogger(__name__)

EXCEL_SUFFIXES = frozenset({".xlsx", ".xlsm"})
CSV_SUFFIXES = frozenset({".csv"})
HTML_SUFFIXES = frozenset({".html", ".htm"})

_COLUMNS = 3


def read_rows(
    source: Path | str,
    config: PolicyConfig,
    sheet_name: str | None = None,
) -> list[Row]:
    """Read rows from ``source``, skipping the header row of tabular files."""
    path = Path(source)
    if not path.exists():
        msg = f"Bookmark source not found: {path}"
        raise FileNotFoundError(msg)

    suffix = path.suffix.lower()
    LOGGER.debug("Reading bookmark rows from %s", path)
    if suffix in EXCEL_SUFFIXES:
        rows = read_excel_rows(path, sheet_name)
    elif suffix in CSV_SUFFIXES:
        rows = read_csv_rows(path)
    elif suffix in HTML_SUFFIXES:
        rows = read_bookmark_export_rows(path, config.path_separator)
    else:
        msg = f"Unsupported bookmark source type: {path.suffix or path.name}"
        raise ValueError(msg)

    LOGGER.info("Read %d rows from %s", len(rows), path)
    return rows


def read_excel_rows(path: Path, sheet_name: str | None = None) -> list[Row]:
    """Read the first three columns of a worksheet below its header row."""
    workbook = load_workbook(path, read_only=True, data_only=True)
    try:
        if sheet_name is None:
            sheet = workbook.active
        elif sheet_name in workbook.sheetnames:
            sheet = workbook[sheet_name]
        else:
            msg = f"Sheet {sheet_name!r} not found in {path}; available: {workbook.sheetnames}"
            raise ValueError(msg)
        if sheet is None:
            msg = f"Workbook {path} has no active sheet"
            raise ValueError(msg)
        return [
            _row_from_cells(cells)
            for cells in sheet.iter_rows(min_row=2, max_col=_COLUMNS, values_only=True)
        ]
    finally:
        workbook.close()


def read_csv_rows(path: Path) -> list[Row]:
    """Read the first three columns of a CSV file below its header row."""
    with path.open(encoding="utf-8-sig", newline="") as fh:
        reader = csv.reader(fh)
        next(reader, None)
        return [_row_from_cells(cells) for cells in reader]


def read_bookmark_export_rows(path: Path, separator: str) -> list[Row]:
    """Turn a Chrome/Brave bookmark HTML export into rows.

    Each anchor becomes a row whose path is the chain of enclosing folder
    names joined with ``separator``.
    """
    soup = BeautifulSoup(path.read_text(encoding="utf-8"), "html.parser")
    root_dl = soup.find("dl")
    if root_dl is None:
        msg = "Bookmark export is missing <DL> root element"
        raise ValueError(msg)

    rows: list[Row] = []
    for anchor in root_dl.find_all("a"):
        href = anchor.get("href")
        if not isinstance(href, str) or not href.strip():
            LOGGER.debug("Skipping anchor without href")
            continue
        segments = _folder_segments(anchor)
        rows.append(
            Row(
                path=separator.join(segments),
                name=anchor.get_text(strip=True),
                url=href.strip(),
            ),
        )
    return rows


def _folder_segments(anchor: Tag) -> list[str]:
    """Names of the folders enclosing ``anchor``, outermost first.

    A folder is a ``<DT>`` holding an ``<H3>`` and the ``<DL>`` of its
    entries; empty folder names are kept.
    """
    segments: list[str] = []
    level = anchor.find_parent("dl")
    while level is not None:
        folder = level.find_parent("dt")
        if folder is None:
            break
        header = folder.find("h3")
        if header is not None:
            segments.insert(0, header.get_text(strip=True))
        level = folder.find_parent("dl")
    return segments


def _row_from_cells(cells: Iterable[object]) -> Row:
    values = [cell_text(value) for value in cells][:_COLUMNS]
    values.extend([""] * (_COLUMNS - len(values)))
    path, name, url = values
    return Row(path=path, name=name, url=url)


def cell_text(value: object) -> str:
    """Coerce a cell value to text; empty cells become ``""``."""
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
