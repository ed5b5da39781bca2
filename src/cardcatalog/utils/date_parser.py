"""Purchase date formatting utilities."""

import re

PURCHASE_DATE_PATTERN = re.compile(r"^\d{2}/\d{2}/\d{4}$")


def digits_only(value: str) -> str:
    """Return only the digits of a string."""
    return re.sub(r"[^0-9]", "", value or "")


def auto_slash_date(raw: str) -> str:
    """Insert slashes into a partially typed date.

    Keeps at most eight digits and places '/' after the month and day
    digits, so typing progresses "0", "01", "01/1", "01/15", "01/15/2",
    ... "01/15/2024". Partial input is never rejected.
    """
    digits = digits_only(raw)[:8]
    if len(digits) <= 2:
        return digits
    if len(digits) <= 4:
        return f"{digits[:2]}/{digits[2:]}"
    return f"{digits[:2]}/{digits[2:4]}/{digits[4:]}"


def reformat_purchase_date(value: str) -> str:
    """Reformat an imported date when it contains exactly eight digits.

    "1/2/2024" has seven digits and is returned unchanged; "01-02-2024"
    and "01022024" both become "01/02/2024".
    """
    digits = digits_only(value)
    if len(digits) == 8:
        return f"{digits[:2]}/{digits[2:4]}/{digits[4:]}"
    return value


def is_valid_purchase_date(value: str) -> bool:
    """Check whether a date is written exactly as MM/DD/YYYY."""
    return bool(PURCHASE_DATE_PATTERN.match(value))
