"""Sorted and filtered views over a set's rows.

Views never modify the rows they are built from. Each ViewRow keeps the
index of its row in the store so edits made through a view land on the
right row.
"""

from dataclasses import dataclass
from enum import StrEnum
from functools import cmp_to_key
from typing import Callable, Optional, Sequence

from cardcatalog.domain.entities import (
    CanonicalRow,
    CardField,
    CURRENCY_FIELDS,
    NUMERIC_FIELDS,
    ViewRow,
    YesNo,
)

RowPredicate = Callable[[CanonicalRow], bool]


class SortDirection(StrEnum):
    """Sort direction."""

    ASC = "asc"
    DESC = "desc"

    @property
    def sign(self) -> int:
        return 1 if self is SortDirection.ASC else -1

    def flipped(self) -> "SortDirection":
        return SortDirection.DESC if self is SortDirection.ASC else SortDirection.ASC


# Direction applied the first time a column is chosen
DEFAULT_DIRECTIONS: dict[CardField, SortDirection] = {
    CardField.GRADE: SortDirection.DESC,
    CardField.COST: SortDirection.DESC,
    CardField.VALUE: SortDirection.DESC,
    CardField.TARGET_PRICE: SortDirection.DESC,
}


@dataclass(frozen=True)
class SortSpec:
    """Column and direction to sort by."""

    field: CardField
    direction: SortDirection = SortDirection.ASC

    @classmethod
    def default_for(cls, field: CardField) -> "SortSpec":
        """Sort spec for a column using its default direction."""
        return cls(field, DEFAULT_DIRECTIONS.get(field, SortDirection.ASC))


def next_sort(current: Optional[SortSpec], field: CardField) -> SortSpec:
    """Return the sort that results from choosing a column header.

    Choosing a new column applies its default direction; choosing the
    current column again flips the direction.
    """
    if current is None or current.field is not field:
        return SortSpec.default_for(field)
    return SortSpec(field, current.direction.flipped())


def all_rows(row: CanonicalRow) -> bool:
    """Keep every row."""
    return True


def needed_only(row: CanonicalRow) -> bool:
    """Keep rows not marked as owned."""
    return row.owned != YesNo.YES


def _compare(a, b) -> int:
    return (a > b) - (a < b)


def _compare_currency(a: CanonicalRow, b: CanonicalRow, spec: SortSpec) -> int:
    an = a.amount(spec.field)
    bn = b.amount(spec.field)
    a_empty = an is None or an == 0
    b_empty = bn is None or bn == 0
    # blank and $0.00 go last in both directions
    if a_empty != b_empty:
        return 1 if a_empty else -1
    if a_empty:
        return 0
    return _compare(an, bn) * spec.direction.sign


def _compare_numeric(a: CanonicalRow, b: CanonicalRow, spec: SortSpec) -> int:
    an = a.numeric(spec.field)
    bn = b.numeric(spec.field)
    if an is None or bn is None:
        return (an is None) - (bn is None)
    return _compare(an, bn) * spec.direction.sign


def _compare_text(a: CanonicalRow, b: CanonicalRow, spec: SortSpec) -> int:
    at = a.text(spec.field).casefold()
    bt = b.text(spec.field).casefold()
    if not at or not bt:
        return (not at) - (not bt)
    return _compare(at, bt) * spec.direction.sign


def compare_rows(a: CanonicalRow, b: CanonicalRow, spec: SortSpec) -> int:
    """Three-way comparison of two rows under a sort spec."""
    if spec.field in CURRENCY_FIELDS:
        return _compare_currency(a, b, spec)
    if spec.field in NUMERIC_FIELDS:
        return _compare_numeric(a, b, spec)
    return _compare_text(a, b, spec)


def build_view(
    rows: Sequence[CanonicalRow],
    predicate: Optional[RowPredicate] = None,
    sort: Optional[SortSpec] = None,
) -> list[ViewRow]:
    """Filter and sort rows into a view.

    Args:
        rows: Rows in store order
        predicate: Rows failing it are left out; defaults to keeping all
        sort: Sort to apply; None keeps store order

    Returns:
        ViewRows in display order; sorting is stable, so rows that compare
        equal stay in store order
    """
    keep = predicate or all_rows
    view = [ViewRow(row=row, original_index=i) for i, row in enumerate(rows) if keep(row)]
    if sort is None:
        return view

    key = cmp_to_key(lambda a, b: compare_rows(a.row, b.row, sort))
    return sorted(view, key=key)
