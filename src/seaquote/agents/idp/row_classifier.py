"""Row classification predicates over a row's flattened cell text.

These are content-sniffing heuristics: ERP templates repeat their column
titles mid-sheet and leave vendor/pricing columns in the same grid as the
requested items. Keyword tuples are data; add new noise patterns here.
"""

from __future__ import annotations

from seaquote.core.types import Row

# Each tuple is one header signature: all words must appear.
HEADER_SIGNATURES: tuple[tuple[str, ...], ...] = (
    ("description", "quantity"),
    ("item name", "qty"),
)

PRICING_KEYWORDS: tuple[str, ...] = (
    "quoted", "supplier", "vendor", "price", "discount", "total", "approval",
)


def row_text(row: Row) -> str:
    """Lower-cased cell values joined by spaces."""
    return " ".join(str(v) for v in row.values() if v is not None).lower()


def is_header_row(row: Row) -> bool:
    text = row_text(row)
    return any(all(word in text for word in signature) for signature in HEADER_SIGNATURES)


def is_pricing_row(row: Row) -> bool:
    text = row_text(row)
    return any(word in text for word in PRICING_KEYWORDS)


def classify_row(row: Row) -> str | None:
    """Return "header" or "pricing" for noise rows, None for candidate items."""
    if is_header_row(row):
        return "header"
    if is_pricing_row(row):
        return "pricing"
    return None
