"""Column-name resolution across ERP export synonyms.

Each canonical field maps to an ordered tuple of header strings seen in the
wild. Lookup is case-sensitive and exact: the first candidate whose cell is
non-blank wins. Supporting a new ERP layout means adding a header string here.
"""

from __future__ import annotations

from typing import Sequence

from seaquote.core.exceptions import MissingColumnError
from seaquote.core.types import Row

# --- Requisition header fields (scanned over the first few rows) ---
METADATA_COLUMNS: dict[str, tuple[str, ...]] = {
    "vessel_name": ("Vessel", "Vessel Name", "Ship", "Ship Name", "vessel_name"),
    "requisition_number": (
        "Requisition No", "Requisition No.", "Requisition Number", "Req No", "Req. No.",
        "Requisition", "requisition_number",
    ),
    "requisition_title": ("Requisition Title", "Title", "requisition_title"),
    "requisition_date": ("Requisition Date", "Req Date", "Order Date", "requisition_date"),
    "requisition_group": ("Requisition Group", "Group", "requisition_group"),
    "port_name": ("Port", "Port Name", "Delivery Port", "port_name"),
    "delivery_date": ("Delivery Date", "ETA", "Required Date", "Date Required", "delivery_date"),
    "currency": ("Currency", "CCY", "currency"),
}

# --- Header fields read from the first row only ---
FIRST_ROW_COLUMNS: dict[str, tuple[str, ...]] = {
    "vessel_imo": ("IMO", "IMO No", "IMO Number", "vessel_imo"),
    "notes": ("Notes", "notes"),
}

# --- Line item fields ---
ITEM_COLUMNS: dict[str, tuple[str, ...]] = {
    "description": (
        "Description", "Item Description", "Desc", "Item", "Item Name",
        "description", "item_description", "item_name",
    ),
    "quantity": ("Qty", "Quantity", "Req Qty", "Requested Qty", "Qty Requested", "quantity"),
    "item_number": (
        "Item No", "Item No.", "Item Number", "Item Code", "Code", "Part No", "Part Number",
        "item_number",
    ),
    "unit": ("Unit", "UoM", "UOM", "Unit of Measure", "unit"),
    "department": ("Department", "Dept", "Store", "Category", "department"),
    "specifications": ("Specifications", "Specs", "Specification", "specifications"),
    # A plain "Notes" cell on the first row also becomes the header notes
    "notes": ("Item Notes", "Remarks", "Comments", "item_notes", "Notes", "notes"),
}


def get_string(row: Row, candidates: Sequence[str], required: bool = False,
               row_number: int | None = None) -> str:
    """Return the trimmed value of the first candidate column with content.

    Raises:
        MissingColumnError: if required and no candidate has a value.
    """
    for name in candidates:
        value = row.get(name)
        if value is not None and str(value).strip() != "":
            return str(value).strip()
    if required:
        raise MissingColumnError(tuple(candidates), row_number=row_number)
    return ""


def scan_metadata(rows: Sequence[Row], candidates: Sequence[str], max_rows: int = 5) -> str:
    """First non-blank match across the leading rows; earlier rows win."""
    for row in rows[:max_rows]:
        value = get_string(row, candidates)
        if value:
            return value
    return ""
