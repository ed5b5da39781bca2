"""Field normalization from raw spreadsheet records to canonical rows.

Spreadsheets exported by hand are messy: owned flags spelled "y" or "TRUE",
prices with or without symbols, grades such as "8.7". Every coercion here is
best effort; a malformed cell degrades to blank (or is kept as typed) and
never aborts the row. Only a missing column fails a whole batch.
"""

import logging
import math
from typing import Any, Iterable, Mapping, Optional

from cardcatalog.domain.entities import (
    CanonicalRow,
    CardField,
    EXPECTED_HEADERS,
    GRADE_VALUES,
    GradingCompany,
    PURCHASED_FROM_MAX_LENGTH,
    RawGrade,
    YesNo,
)
from cardcatalog.domain.errors import SchemaMismatchError
from cardcatalog.utils.amount_parser import to_currency
from cardcatalog.utils.date_parser import reformat_purchase_date

logger = logging.getLogger(__name__)

YES_WORDS = frozenset({"yes", "y", "true", "1"})
NO_WORDS = frozenset({"no", "n", "false", "0"})


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _number(text: str) -> Optional[float]:
    # Underscore digit grouping ("1_000") is not a number here
    if "_" in text:
        return None
    try:
        return float(text)
    except ValueError:
        return None


def check_headers(headers: Iterable[str]) -> None:
    """Verify that every expected column is present.

    Args:
        headers: Header names of the incoming file (exact match, any order)

    Raises:
        SchemaMismatchError: Listing missing headers in column order
    """
    present = set(headers)
    missing = [h for h in EXPECTED_HEADERS if h not in present]
    if missing:
        raise SchemaMismatchError(missing)


def normalize_yes_no(value: Any) -> YesNo:
    """Map yes/no spellings to YesNo; anything else is blank."""
    word = _text(value).strip().lower()
    if word in YES_WORDS:
        return YesNo.YES
    if word in NO_WORDS:
        return YesNo.NO
    return YesNo.BLANK


def normalize_raw_grade(value: Any) -> RawGrade:
    """Keep a raw grade only when it exactly matches the vocabulary."""
    text = _text(value).strip()
    try:
        return RawGrade(text)
    except ValueError:
        return RawGrade.BLANK


def normalize_grading_company(value: Any) -> GradingCompany:
    """Keep a grading company only when it exactly matches the vocabulary."""
    text = _text(value).strip()
    try:
        return GradingCompany(text)
    except ValueError:
        return GradingCompany.BLANK


def normalize_grade(value: Any) -> str:
    """Snap a numeric grade to the half-point scale between 1 and 10.

    "7.3" -> "7.5", "11" -> "10", "0" -> "1", "9.0" -> "9". Text that is
    not a number is kept only if it is already a valid grade.
    """
    text = _text(value).strip()
    if not text:
        return ""
    number = _number(text)
    if number is None:
        return text if text in GRADE_VALUES else ""
    if not math.isfinite(number):
        return ""

    # clamp to 1..10, then half-up to the nearest 0.5
    clamped = min(10.0, max(1.0, number))
    rounded = math.floor(clamped * 2 + 0.5) / 2
    candidate = f"{rounded:.1f}".removesuffix(".0")
    return candidate if candidate in GRADE_VALUES else ""


def normalize_currency(value: Any) -> str:
    """Reformat a price as "$1,234.50", keeping unparseable text as typed."""
    text = _text(value)
    if not text.strip():
        return ""
    formatted = to_currency(text)
    return text if formatted is None else formatted


def normalize_purchase_date(value: Any) -> str:
    """Reformat an eight-digit date as MM/DD/YYYY; otherwise unchanged."""
    text = _text(value)
    if not text.strip():
        return ""
    return reformat_purchase_date(text.strip())


def normalize_card_number(value: Any) -> str:
    """Keep a card number only when it reads as a number."""
    text = _text(value).strip()
    if not text:
        return ""
    number = _number(text)
    return text if number is not None and math.isfinite(number) else ""


def normalize_record(record: Mapping[str, Any]) -> CanonicalRow:
    """Convert one header-keyed record into a CanonicalRow.

    Missing keys are read as blank, so this is also used to rebuild rows
    from stored payloads.
    """

    def cell(field: CardField) -> Any:
        return record.get(field.header)

    description = _text(cell(CardField.DESCRIPTION))
    return CanonicalRow(
        card_number=normalize_card_number(cell(CardField.CARD_NUMBER)),
        description=description if description.strip() else "",
        owned=normalize_yes_no(cell(CardField.OWNED)),
        raw_grade=normalize_raw_grade(cell(CardField.RAW_GRADE)),
        graded=normalize_yes_no(cell(CardField.GRADED)),
        grading_company=normalize_grading_company(cell(CardField.GRADING_COMPANY)),
        grade=normalize_grade(cell(CardField.GRADE)),
        cost=normalize_currency(cell(CardField.COST)),
        value=normalize_currency(cell(CardField.VALUE)),
        target_price=normalize_currency(cell(CardField.TARGET_PRICE)),
        sale_price=normalize_currency(cell(CardField.SALE_PRICE)),
        date_purchased=normalize_purchase_date(cell(CardField.DATE_PURCHASED)),
        purchased_from=_text(cell(CardField.PURCHASED_FROM))[:PURCHASED_FROM_MAX_LENGTH],
        image_refs=_text(cell(CardField.IMAGE_REFS)),
    )


def normalize_records(
    headers: Iterable[str], records: Iterable[Mapping[str, Any]]
) -> list[CanonicalRow]:
    """Validate headers and normalize a batch of records, preserving order.

    Raises:
        SchemaMismatchError: If any expected header is absent; no rows are
            produced in that case
    """
    check_headers(headers)
    rows = [normalize_record(record) for record in records]
    logger.debug("Normalized %d record(s)", len(rows))
    return rows
