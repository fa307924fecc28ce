"""SeaQuote exception hierarchy."""

from __future__ import annotations


class SeaQuoteError(Exception):
    """Base exception for all SeaQuote errors."""


class RequisitionParseError(SeaQuoteError):
    """A requisition spreadsheet could not be turned into a requisition."""


class EmptyInputError(RequisitionParseError):
    """The spreadsheet has no rows at all."""

    def __init__(self, message: str = "Excel file is empty") -> None:
        super().__init__(message)


class NoValidItemsError(RequisitionParseError):
    """Rows were present but none qualified as a line item."""

    def __init__(self, message: str = "No items found in Excel file") -> None:
        super().__init__(message)


class MissingColumnError(RequisitionParseError):
    """A required column was absent or blank."""

    def __init__(self, candidates: tuple[str, ...] | list[str], row_number: int | None = None) -> None:
        self.candidates = tuple(candidates)
        self.row_number = row_number
        where = f"Row {row_number}: " if row_number is not None else ""
        super().__init__(f"{where}Required column not found: {' or '.join(self.candidates)}")


class InvalidNumberError(RequisitionParseError):
    """A numeric cell could not be parsed."""

    def __init__(self, value: str, row_number: int | None = None) -> None:
        self.value = value
        self.row_number = row_number
        where = f"Row {row_number}: " if row_number is not None else ""
        super().__init__(f"{where}Invalid number: {value}")


class InvalidDateError(RequisitionParseError):
    """A date cell matched none of the accepted formats."""

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"Invalid date: {value}")


class InvalidQuantityError(RequisitionParseError):
    """An item row carries a zero or negative quantity."""

    def __init__(self, quantity: float, row_number: int) -> None:
        self.quantity = quantity
        self.row_number = row_number
        super().__init__(f"Row {row_number}: Quantity must be greater than 0")


class SpreadsheetReadError(RequisitionParseError):
    """The uploaded payload is not a readable spreadsheet."""


class UnsupportedFileTypeError(RequisitionParseError):
    """The uploaded file extension is not one we can read."""

    def __init__(self, filename: str) -> None:
        self.filename = filename
        super().__init__(f"Unsupported file type: {filename!r} (expected .xlsx, .xlsm or .csv)")


class RequisitionNotFoundError(SeaQuoteError):
    """No requisition stored under the given id."""


class InvalidStatusTransitionError(SeaQuoteError):
    """A requisition status change that the lifecycle does not allow."""

    def __init__(self, current: str, target: str) -> None:
        self.current = current
        self.target = target
        super().__init__(f"Cannot move requisition from {current!r} to {target!r}")


class CacheError(SeaQuoteError):
    """Redis cache operation failed."""


class StorageError(SeaQuoteError):
    """DynamoDB or S3 operation failed."""


class ModelResponseError(SeaQuoteError):
    """The text-generation model returned nothing usable."""


class RFQGenerationError(SeaQuoteError):
    """An RFQ draft could not be produced for a requisition."""


class EmptyRequisitionError(SeaQuoteError):
    """An RFQ was requested for a requisition without line items."""

    def __init__(self, message: str = "Requisition has no items") -> None:
        super().__init__(message)


class RFQNotFoundError(SeaQuoteError):
    """No RFQ with the given id exists for the requisition."""


class RFQNotEditableError(SeaQuoteError):
    """Only draft RFQs can be rewritten."""


class InvalidRecipientsError(SeaQuoteError):
    """Missing or malformed RFQ recipient addresses."""


class EmailDeliveryError(SeaQuoteError):
    """The email transport refused or failed to send a message."""
