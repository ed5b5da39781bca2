"""Amount parsing and currency formatting utilities."""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, localcontext
import re

CENT = Decimal("0.01")

_NON_NUMERIC = re.compile(r"[^0-9.\-]")


def strip_currency(value: str) -> str:
    """Remove everything except digits, '.' and '-' from a currency string.

    Examples:
    - "$1,234.50" -> "1234.50"
    - "-$5.00" -> "-5.00"
    - "USD 12" -> "12"
    """
    return _NON_NUMERIC.sub("", value or "")


def parse_amount(amount_str: str) -> Decimal:
    """Parse a currency string into a Decimal.

    Handles the formats produced by spreadsheets and by format_currency:
    - "123.45"
    - "$123.45"
    - "-$123.45"
    - "1,234.56"

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If nothing numeric remains after stripping, or the
            remainder is not a number (e.g. "1.2.3")
    """
    stripped = strip_currency(amount_str)
    if not stripped:
        raise ValueError(f"Could not parse amount '{amount_str}': no digits")

    try:
        amount = Decimal(stripped)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str}'")
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")
    return amount


def format_currency(amount: Decimal) -> str:
    """Format an amount as US-dollar text with two decimals.

    Rounds half away from zero, groups thousands, and puts the sign in
    front of the symbol: Decimal("-1234.5") -> "-$1,234.50".
    """
    with localcontext() as ctx:
        # Keep every integer digit plus cents
        ctx.prec = max(ctx.prec, amount.adjusted() + 4)
        quantized = amount.quantize(CENT, rounding=ROUND_HALF_UP)
        if quantized == 0:
            quantized = abs(quantized)
        sign = "-" if quantized < 0 else ""
        return f"{sign}${abs(quantized):,.2f}"


def to_currency(value: str) -> str | None:
    """Reformat currency text, or return None if it is not a number."""
    try:
        return format_currency(parse_amount(value))
    except ValueError:
        return None
