"""Shared domain error messages and error types."""

from typing import Sequence


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity or dataset does not exist."""


class SchemaMismatchError(ValidationError):
    """Imported header set is missing required columns."""

    def __init__(self, missing: Sequence[str]):
        self.missing = list(missing)
        super().__init__(missing_columns(self.missing))


class ParseFailureError(DomainError):
    """The delimited-text parser could not read the input."""


class IndexOutOfRangeError(DomainError):
    """Row index outside the current row count."""


class PersistenceUnavailableError(RuntimeError):
    """The key-value store failed or returned unreadable content."""


class ValidationWarning(UserWarning):
    """Non-fatal validation notice; the offending value is kept."""


def missing_columns(missing: Sequence[str]) -> str:
    """Return message for an import missing required headers."""
    return f"CSV is missing required columns: {', '.join(missing)}."


def parse_failure(detail: str) -> str:
    """Return message for a delimited-text parser error."""
    return f"Parse error: {detail}"


def set_not_found(name: str) -> str:
    """Return message for a missing named dataset."""
    return f"Set '{name}' not found"


def row_out_of_range(index: int, row_count: int) -> str:
    """Return message for a row index outside the store."""
    return f"Row index {index} out of range (set has {row_count} row{'s' if row_count != 1 else ''})"


def invalid_choice(field_name: str, value: str, choices: Sequence[str]) -> str:
    """Return message for a value outside a field's vocabulary."""
    allowed = ", ".join(repr(c) for c in choices)
    return f"Invalid value {value!r} for {field_name}. Allowed: {allowed}"


def invalid_purchase_date(value: str) -> str:
    """Return message for a purchase date not in MM/DD/YYYY form."""
    return f"Invalid date: {value}. Use MM/DD/YYYY"
