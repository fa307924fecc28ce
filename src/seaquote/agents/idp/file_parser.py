"""Tabular reader — turns an uploaded spreadsheet into header-keyed rows.

Only the first worksheet is read. The first non-blank row supplies the column
headers; every following non-blank row becomes a dict with one entry per
header, blank cells as "" so column lookups never see a missing key.
"""

from __future__ import annotations

import csv
import io
import logging
from datetime import date, datetime, time
from pathlib import PurePath
from typing import Any, Iterable

from openpyxl import load_workbook
from pydantic import BaseModel, Field

from seaquote.core.exceptions import SpreadsheetReadError, UnsupportedFileTypeError

logger = logging.getLogger(__name__)

EXCEL_EXTENSIONS = (".xlsx", ".xlsm")
CSV_EXTENSIONS = (".csv",)
SUPPORTED_EXTENSIONS = EXCEL_EXTENSIONS + CSV_EXTENSIONS


class SheetData(BaseModel):
    """Rows of the first sheet plus the workbook's sheet names.

    ``row_numbers[i]`` is the 1-based sheet row that ``rows[i]`` came from;
    blank rows are dropped, so the two drift apart after any gap.
    """

    sheet_names: list[str] = Field(default_factory=list)
    rows: list[dict[str, str]] = Field(default_factory=list)
    row_numbers: list[int] = Field(default_factory=list)


def file_extension(filename: str) -> str:
    return PurePath(filename).suffix.lower()


def ensure_supported(filename: str) -> str:
    """Return the lower-cased extension or raise UnsupportedFileTypeError."""
    ext = file_extension(filename)
    if ext not in SUPPORTED_EXTENSIONS:
        raise UnsupportedFileTypeError(filename)
    return ext


def cell_to_text(value: Any) -> str:
    """Normalize a native cell value to the text form the parser consumes."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, time):
        return value.isoformat()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def _unique(base: str, existing: list[str]) -> str:
    if base not in existing:
        return base
    n = 1
    while f"{base}_{n}" in existing:
        n += 1
    return f"{base}_{n}"


def _header_names(cells: Iterable[Any]) -> list[str]:
    """Build unique header names; blanks become __EMPTY, repeats get _1, _2."""
    names: list[str] = []
    for cell in cells:
        names.append(_unique(cell_to_text(cell) or "__EMPTY", names))
    return names


def rows_from_matrix(matrix: Iterable[Iterable[Any]]) -> SheetData:
    """Key each data row by the header row; drop fully blank rows."""
    headers: list[str] | None = None
    rows: list[dict[str, str]] = []
    numbers: list[int] = []
    for sheet_row, raw in enumerate(matrix, start=1):
        values = [cell_to_text(v) for v in raw]
        if not any(values):
            continue
        if headers is None:
            headers = _header_names(values)
            continue
        while len(headers) < len(values):
            headers.append(_unique("__EMPTY", headers))
        row = dict.fromkeys(headers, "")
        row.update(zip(headers, values))
        rows.append(row)
        numbers.append(sheet_row)
    return SheetData(rows=rows, row_numbers=numbers)


def _read_excel(data: bytes) -> SheetData:
    try:
        wb = load_workbook(io.BytesIO(data), read_only=True, data_only=True)
    except Exception as exc:
        raise SpreadsheetReadError(f"Could not open workbook: {exc}") from exc
    try:
        if not wb.sheetnames:
            return SheetData()
        ws = wb[wb.sheetnames[0]]
        sheet = rows_from_matrix(ws.iter_rows(values_only=True))
        sheet.sheet_names = list(wb.sheetnames)
        return sheet
    finally:
        wb.close()


def _read_csv(data: bytes, filename: str) -> SheetData:
    try:
        text = data.decode("utf-8-sig")
    except UnicodeDecodeError:
        text = data.decode("latin-1")
    reader = csv.reader(io.StringIO(text))
    sheet_name = PurePath(filename).stem or "Sheet1"
    sheet = rows_from_matrix(reader)
    sheet.sheet_names = [sheet_name]
    return sheet


def read_spreadsheet(data: bytes, filename: str) -> SheetData:
    """Read the first sheet of an .xlsx/.xlsm or .csv payload."""
    ext = ensure_supported(filename)
    sheet = _read_excel(data) if ext in EXCEL_EXTENSIONS else _read_csv(data, filename)
    logger.debug(
        "Read %d rows from %s (sheets: %s)", len(sheet.rows), filename, sheet.sheet_names,
        extra={"filename": filename},
    )
    return sheet
