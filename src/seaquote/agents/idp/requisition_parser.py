"""Requisition parser — header-keyed spreadsheet rows to a ParsedRequisition.

Two modes share one extraction loop:

* ``lenient`` (default): missing header fields get placeholders, rows that do
  not look like items are skipped and reported as warnings. Only an empty
  sheet or a sheet without a single usable item is fatal.
* ``strict``: vessel, port and delivery date are required, and an item row
  with a missing, malformed or non-positive quantity aborts the parse.

Item numbers, units and departments left blank on a row are inherited from the
previously accepted item, which is how ERP exports print grouped sub-rows.
"""

from __future__ import annotations

import logging
from datetime import date
from enum import StrEnum
from typing import Iterable, NamedTuple, Sequence

from seaquote.agents.idp import row_classifier
from seaquote.agents.idp.destring import parse_number, to_iso_date
from seaquote.agents.idp.file_parser import read_spreadsheet
from seaquote.agents.idp.schema_matcher import (
    FIRST_ROW_COLUMNS,
    ITEM_COLUMNS,
    METADATA_COLUMNS,
    get_string,
    scan_metadata,
)
from seaquote.core.config import ParserConfig
from seaquote.core.exceptions import (
    EmptyInputError,
    InvalidNumberError,
    InvalidQuantityError,
    MissingColumnError,
    NoValidItemsError,
)
from seaquote.core.types import Row
from seaquote.models.requisition import (
    ParsedRequisition,
    ParseWarning,
    Requisition,
    RequisitionItem,
)

logger = logging.getLogger(__name__)

ITEM_NAME_MAX_LENGTH = 200


class ParseMode(StrEnum):
    LENIENT = "lenient"
    STRICT = "strict"


class CarriedFields(NamedTuple):
    """Values the next row inherits when its own cells are blank."""

    item_number: str = ""
    unit: str = ""
    department: str = ""


class RowOutcome(NamedTuple):
    item: RequisitionItem | None
    carried: CarriedFields
    warning: ParseWarning | None


def sheet_row_number(row_index: int, row_numbers: Sequence[int] | None = None) -> int:
    """1-based spreadsheet row of a data row.

    Without the reader's row numbers the rows are assumed contiguous below a
    single title row.
    """
    if row_numbers is not None and row_index < len(row_numbers):
        return row_numbers[row_index]
    return row_index + 2


# ---------------------------------------------------------------------------
# Header
# ---------------------------------------------------------------------------

def extract_header(
    rows: Sequence[Row],
    *,
    mode: ParseMode,
    config: ParserConfig,
    today: date,
) -> tuple[Requisition, list[ParseWarning]]:
    """Resolve the requisition header from the leading rows."""
    strict = mode == ParseMode.STRICT
    warnings: list[ParseWarning] = []
    found = {
        field: scan_metadata(rows, candidates, max_rows=config.metadata_scan_rows)
        for field, candidates in METADATA_COLUMNS.items()
    }

    if strict:
        for field in ("vessel_name", "port_name", "delivery_date"):
            if not found[field]:
                raise MissingColumnError(METADATA_COLUMNS[field])

    delivery_date = to_iso_date(found["delivery_date"], config.date_formats, required=strict)
    if not delivery_date:
        delivery_date = today.isoformat()
        detail = f"unparseable {found['delivery_date']!r}" if found["delivery_date"] else "missing"
        warnings.append(ParseWarning(reason="defaulted_delivery_date", detail=detail))

    vessel_name = found["vessel_name"]
    if not vessel_name:
        vessel_name = config.unknown_vessel
        warnings.append(ParseWarning(reason="defaulted_vessel_name", detail="missing"))

    port_name = found["port_name"]
    if not port_name:
        port_name = config.unknown_port
        warnings.append(ParseWarning(reason="defaulted_port_name", detail="missing"))

    # Free text: normalized when it reads as a date, kept verbatim otherwise
    requisition_date = (
        to_iso_date(found["requisition_date"], config.date_formats) or found["requisition_date"]
    )

    first = rows[0]
    requisition = Requisition(
        vessel_name=vessel_name,
        vessel_imo=get_string(first, FIRST_ROW_COLUMNS["vessel_imo"]),
        requisition_number=found["requisition_number"],
        requisition_title=found["requisition_title"],
        requisition_date=requisition_date,
        requisition_group=found["requisition_group"],
        port_name=port_name,
        delivery_date=delivery_date,
        currency=(found["currency"] or config.default_currency).upper(),
        notes=get_string(first, FIRST_ROW_COLUMNS["notes"]),
    )
    return requisition, warnings


# ---------------------------------------------------------------------------
# Items
# ---------------------------------------------------------------------------

def _quantity(row: Row, row_number: int, strict: bool) -> tuple[float, str]:
    """Return (quantity, skip reason). A non-empty reason means the row is skipped."""
    text = get_string(row, ITEM_COLUMNS["quantity"])
    if not text:
        if strict:
            raise MissingColumnError(ITEM_COLUMNS["quantity"], row_number=row_number)
        return 0.0, "missing_quantity"
    value = parse_number(text)
    if value is None:
        if strict:
            raise InvalidNumberError(text, row_number=row_number)
        return 0.0, "invalid_quantity"
    if value <= 0:
        if strict:
            raise InvalidQuantityError(value, row_number)
        return value, "non_positive_quantity"
    return value, ""


def extract_item(
    row: Row,
    row_index: int,
    *,
    line_number: int,
    carried: CarriedFields,
    mode: ParseMode = ParseMode.LENIENT,
    row_number: int | None = None,
) -> RowOutcome:
    """Classify one row and build its item, threading the carried fields.

    ``row_number`` is the sheet row named in errors and warnings; it defaults
    to the position implied by ``row_index``.
    """
    if row_number is None:
        row_number = sheet_row_number(row_index)
    description = get_string(row, ITEM_COLUMNS["description"])
    if not description:
        return RowOutcome(None, carried, None)

    noise = row_classifier.classify_row(row)
    if noise is not None:
        return RowOutcome(None, carried, ParseWarning(
            row_index=row_index, row_number=row_number, reason=f"{noise}_row", detail=description,
        ))

    quantity, skip_reason = _quantity(row, row_number, mode == ParseMode.STRICT)
    if skip_reason:
        return RowOutcome(None, carried, ParseWarning(
            row_index=row_index, row_number=row_number, reason=skip_reason, detail=description,
        ))

    used = CarriedFields(
        item_number=get_string(row, ITEM_COLUMNS["item_number"]) or carried.item_number,
        unit=get_string(row, ITEM_COLUMNS["unit"]) or carried.unit,
        department=get_string(row, ITEM_COLUMNS["department"]) or carried.department,
    )
    item = RequisitionItem(
        line_number=line_number,
        item_number=used.item_number,
        item_name=description[:ITEM_NAME_MAX_LENGTH],
        item_description=description,
        quantity=quantity,
        unit=used.unit,
        department=used.department,
        specifications=get_string(row, ITEM_COLUMNS["specifications"]),
        notes=get_string(row, ITEM_COLUMNS["notes"]),
    )
    return RowOutcome(item, used, None)


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------

def parse_requisition_rows(
    rows: Iterable[Row],
    *,
    mode: ParseMode | str | None = None,
    settings: ParserConfig | None = None,
    today: date | None = None,
    row_numbers: Sequence[int] | None = None,
) -> ParsedRequisition:
    """Parse header-keyed rows into a requisition with its line items.

    Args:
        rows: One mapping per spreadsheet row, column title -> cell text.
        mode: "lenient" or "strict"; defaults to the configured mode.
        settings: Parser configuration (synonym-independent knobs).
        today: Date used when the delivery date is missing; defaults to today.
        row_numbers: Sheet row of each entry in ``rows``, as recorded by the
            reader; errors and warnings cite these.

    Raises:
        EmptyInputError: no rows.
        NoValidItemsError: no row qualified as an item.
        MissingColumnError, InvalidDateError, InvalidNumberError,
        InvalidQuantityError: strict mode only.
    """
    config = settings or ParserConfig()
    parse_mode = ParseMode(mode or config.mode)
    rows = list(rows)
    if not rows:
        raise EmptyInputError()

    requisition, warnings = extract_header(
        rows, mode=parse_mode, config=config, today=today or date.today(),
    )

    items: list[RequisitionItem] = []
    carried = CarriedFields()
    for index, row in enumerate(rows):
        outcome = extract_item(
            row, index, line_number=len(items) + 1, carried=carried, mode=parse_mode,
            row_number=sheet_row_number(index, row_numbers),
        )
        carried = outcome.carried
        if outcome.warning is not None:
            logger.debug("Skipping sheet row %d: %s", outcome.warning.row_number, outcome.warning.reason)
            warnings.append(outcome.warning)
        if outcome.item is not None:
            items.append(outcome.item)

    if not items:
        raise NoValidItemsError()

    logger.info(
        "Parsed requisition for %s: %d items, %d warnings",
        requisition.vessel_name, len(items), len(warnings),
        extra={"mode": parse_mode.value, "items": len(items), "warnings": len(warnings)},
    )
    return ParsedRequisition(requisition=requisition, items=items, warnings=warnings)


class RequisitionParser:
    """Configured parser bound to a mode."""

    def __init__(self, settings: ParserConfig | None = None, mode: ParseMode | str | None = None) -> None:
        self._settings = settings or ParserConfig()
        self._mode = ParseMode(mode or self._settings.mode)

    @property
    def mode(self) -> ParseMode:
        return self._mode

    def parse(self, rows: Iterable[Row], today: date | None = None,
              row_numbers: Sequence[int] | None = None) -> ParsedRequisition:
        return parse_requisition_rows(
            rows, mode=self._mode, settings=self._settings, today=today, row_numbers=row_numbers,
        )

    def parse_file(self, data: bytes, filename: str, today: date | None = None) -> ParsedRequisition:
        """Read the first sheet of a spreadsheet payload and parse it."""
        sheet = read_spreadsheet(data, filename)
        return self.parse(sheet.rows, today=today, row_numbers=sheet.row_numbers)
