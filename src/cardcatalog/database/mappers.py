"""Mapper functions to convert between domain models and stored JSON payloads.

The stored layout matches what earlier versions of the editor wrote: a set
is {title, year, brand, desc, rows} with rows keyed by column header, and
the index is a list of camelCase entries with updatedAt in epoch
milliseconds. Parsing raises ValueError (or TypeError) on content that does
not have this shape.
"""

import math
from datetime import datetime, UTC
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from cardcatalog.domain import entities as domain
from cardcatalog.domain.normalizer import normalize_record
from cardcatalog.utils.amount_parser import CENT


def _year(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value or None
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip()) or None
    return None


def _money(value: Any) -> Optional[Decimal]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return Decimal(str(value)).quantize(CENT)
    except InvalidOperation:
        return None


def _number(value: Any, kind: type) -> Any:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    # json.loads accepts Infinity and NaN
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return kind(value)


def _timestamp(value: Any) -> datetime:
    try:
        millis = _number(value, float) or 0.0
        return datetime.fromtimestamp(millis / 1000, UTC)
    except (OverflowError, OSError) as e:
        raise ValueError(f"updatedAt {value!r} is out of range") from e


def card_set_to_payload(card_set: domain.CardSet) -> dict[str, Any]:
    """Convert a CardSet to its stored payload."""
    return {
        "title": card_set.title,
        "year": card_set.year if card_set.year is not None else "",
        "brand": card_set.brand,
        "desc": card_set.description,
        "rows": [row.to_record() for row in card_set.rows],
    }


def payload_to_card_set(slug: str, payload: Any) -> domain.CardSet:
    """Convert a stored payload to a CardSet.

    Rows are passed back through the normalizer so stored content that
    predates a rule (or was edited by hand) still meets the row invariants.
    """
    if not isinstance(payload, dict):
        raise ValueError(f"Set '{slug}' payload is not an object")
    rows = payload.get("rows") or []
    if not isinstance(rows, list) or not all(isinstance(r, dict) for r in rows):
        raise ValueError(f"Set '{slug}' rows are not a list of objects")

    return domain.CardSet(
        slug=slug,
        title=str(payload.get("title") or ""),
        year=_year(payload.get("year")),
        brand=str(payload.get("brand") or ""),
        description=str(payload.get("desc") or ""),
        rows=tuple(normalize_record(r) for r in rows),
    )


def index_entry_to_payload(entry: domain.IndexEntry) -> dict[str, Any]:
    """Convert an IndexEntry to its stored payload."""

    def money(value: Optional[Decimal]) -> Optional[float]:
        return None if value is None else float(value)

    return {
        "slug": entry.slug,
        "title": entry.title,
        "year": entry.year or 0,
        "brand": entry.brand,
        "desc": entry.description,
        "updatedAt": int(entry.updated_at.timestamp() * 1000),
        "rowCount": entry.row_count,
        "ownedCount": entry.owned_count,
        "ownedPct": entry.owned_pct,
        "totalCost": money(entry.total_cost),
        "totalValue": money(entry.total_value),
        "gainLoss": money(entry.gain_loss),
    }


def payload_to_index_entry(payload: Any) -> domain.IndexEntry:
    """Convert a stored index payload item to an IndexEntry.

    Missing statistics stay None; a missing updatedAt reads as the epoch.
    """
    if not isinstance(payload, dict) or not isinstance(payload.get("slug"), str):
        raise ValueError("Index entry has no slug")

    return domain.IndexEntry(
        slug=payload["slug"],
        title=str(payload.get("title") or ""),
        year=_year(payload.get("year")),
        brand=str(payload.get("brand") or ""),
        description=str(payload.get("desc") or ""),
        updated_at=_timestamp(payload.get("updatedAt")),
        row_count=_number(payload.get("rowCount"), int) or 0,
        owned_count=_number(payload.get("ownedCount"), int),
        owned_pct=_number(payload.get("ownedPct"), float),
        total_cost=_money(payload.get("totalCost")),
        total_value=_money(payload.get("totalValue")),
        gain_loss=_money(payload.get("gainLoss")),
    )
