"""Numeric and date coercion for resolved cell text."""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import Sequence

from seaquote.agents.idp.schema_matcher import get_string
from seaquote.core.exceptions import InvalidDateError, InvalidNumberError
from seaquote.core.types import Row

_LEADING_NUMBER = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_THOUSANDS = re.compile(r"(?<=\d),(?=\d{3}(?:\D|$))")


def parse_number(text: str) -> float | None:
    """Parse the leading number of a cell ("1,200 PCS" -> 1200.0).

    Returns None when the text does not start with a number.
    """
    cleaned = _THOUSANDS.sub("", text.strip())
    match = _LEADING_NUMBER.match(cleaned)
    if match is None:
        return None
    return float(match.group(0))


def get_number(row: Row, candidates: Sequence[str], required: bool = False,
               row_number: int | None = None) -> float:
    """Resolve a column and coerce it to float; 0.0 when optional and unusable."""
    text = get_string(row, candidates, required=required, row_number=row_number)
    if not text:
        return 0.0
    value = parse_number(text)
    if value is None:
        if required:
            raise InvalidNumberError(text, row_number=row_number)
        return 0.0
    return value


def parse_date(text: str, formats: Sequence[str]) -> date | None:
    """Parse ISO 8601 first, then each explicit format in order."""
    text = text.strip()
    if not text:
        return None
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        pass
    for fmt in formats:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def to_iso_date(text: str, formats: Sequence[str], required: bool = False) -> str:
    """Normalize a date string to YYYY-MM-DD; "" when optional and unparseable."""
    parsed = parse_date(text, formats)
    if parsed is None:
        if required:
            raise InvalidDateError(text)
        return ""
    return parsed.isoformat()


def get_date(row: Row, candidates: Sequence[str], formats: Sequence[str],
             required: bool = False) -> str:
    """Resolve a column and normalize it to an ISO date."""
    text = get_string(row, candidates, required=required)
    return to_iso_date(text, formats, required=required)
