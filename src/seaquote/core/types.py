"""Type aliases used across the SeaQuote platform."""

from __future__ import annotations

from typing import Mapping

# One spreadsheet data row: header name -> cell text
Row = Mapping[str, str]
