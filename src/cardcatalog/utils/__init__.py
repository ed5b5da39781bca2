"""Utility functions for cardcatalog."""

from cardcatalog.utils.amount_parser import parse_amount, format_currency, strip_currency
from cardcatalog.utils.date_parser import auto_slash_date, is_valid_purchase_date
from cardcatalog.utils.slug import slugify

__all__ = [
    "parse_amount",
    "format_currency",
    "strip_currency",
    "auto_slash_date",
    "is_valid_purchase_date",
    "slugify",
]
