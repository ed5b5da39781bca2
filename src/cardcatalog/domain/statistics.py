"""Aggregate statistics over a set's rows."""

from datetime import datetime, UTC
from decimal import Decimal
from typing import Optional, Sequence

from cardcatalog.domain.entities import (
    CanonicalRow,
    CardField,
    CardSet,
    Financials,
    IndexEntry,
    OwnedStats,
    YesNo,
)


def compute_owned_stats(rows: Sequence[CanonicalRow]) -> OwnedStats:
    """Count owned cards and the completion percentage.

    Args:
        rows: Rows of one set

    Returns:
        OwnedStats; owned_pct is 0 for an empty set
    """
    total = len(rows)
    owned = sum(1 for row in rows if row.owned == YesNo.YES)
    pct = (owned / total) * 100 if total else 0.0
    return OwnedStats(owned_count=owned, owned_pct=pct, total=total)


def _sum_field(rows: Sequence[CanonicalRow], field: CardField) -> Decimal:
    # Blank or unreadable prices count as zero
    return sum((row.amount(field) or Decimal("0") for row in rows), Decimal("0"))


def compute_financials(rows: Sequence[CanonicalRow]) -> Financials:
    """Total cost and value of a set and the resulting gain or loss."""
    total_cost = _sum_field(rows, CardField.COST)
    total_value = _sum_field(rows, CardField.VALUE)
    return Financials(
        total_cost=total_cost,
        total_value=total_value,
        gain_loss=total_value - total_cost,
    )


def build_index_entry(
    card_set: CardSet, updated_at: Optional[datetime] = None
) -> IndexEntry:
    """Project a set into an index entry with freshly computed statistics."""
    owned = compute_owned_stats(card_set.rows)
    money = compute_financials(card_set.rows)
    return IndexEntry(
        slug=card_set.slug,
        title=card_set.title,
        year=card_set.year,
        brand=card_set.brand,
        description=card_set.description,
        updated_at=updated_at or datetime.now(UTC),
        row_count=owned.total,
        owned_count=owned.owned_count,
        owned_pct=owned.owned_pct,
        total_cost=money.total_cost,
        total_value=money.total_value,
        gain_loss=money.gain_loss,
    )
