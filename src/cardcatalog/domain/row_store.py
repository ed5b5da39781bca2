"""In-memory row store for the set being edited."""

import logging
from dataclasses import replace
from typing import Callable, Iterable, Optional

from cardcatalog.domain.entities import (
    CanonicalRow,
    CardField,
    CURRENCY_FIELDS,
    GRADE_VALUES,
    GradingCompany,
    PURCHASED_FROM_MAX_LENGTH,
    READ_ONLY_FIELDS,
    RawGrade,
    YesNo,
)
from cardcatalog.domain.errors import (
    IndexOutOfRangeError,
    ValidationError,
    ValidationWarning,
    invalid_choice,
    invalid_purchase_date,
    row_out_of_range,
)
from cardcatalog.domain.normalizer import normalize_currency
from cardcatalog.utils.date_parser import auto_slash_date, is_valid_purchase_date

logger = logging.getLogger(__name__)

ChangeListener = Callable[["RowStore"], None]

# Fields edited through a fixed choice list; values outside it are rejected
_CHOICES: dict[CardField, tuple[str, ...]] = {
    CardField.OWNED: tuple(m.value for m in YesNo),
    CardField.GRADED: tuple(m.value for m in YesNo),
    CardField.RAW_GRADE: tuple(m.value for m in RawGrade),
    CardField.GRADING_COMPANY: tuple(m.value for m in GradingCompany),
    CardField.GRADE: ("",) + GRADE_VALUES,
}

_CHOICE_TYPES = {
    CardField.OWNED: YesNo,
    CardField.GRADED: YesNo,
    CardField.RAW_GRADE: RawGrade,
    CardField.GRADING_COMPANY: GradingCompany,
}


class RowStore:
    """Ordered rows of one set, with field-aware single-cell edits.

    Every effective mutation notifies subscribed listeners, which is how the
    editor learns that an autosave is due.
    """

    def __init__(self, rows: Iterable[CanonicalRow] = ()):
        self._rows: list[CanonicalRow] = list(rows)
        self._listeners: list[ChangeListener] = []

    @property
    def rows(self) -> tuple[CanonicalRow, ...]:
        """Snapshot of the current rows."""
        return tuple(self._rows)

    def __len__(self) -> int:
        return len(self._rows)

    def __getitem__(self, index: int) -> CanonicalRow:
        return self._rows[self._check_index(index)]

    def subscribe(self, listener: ChangeListener) -> None:
        """Register a callback invoked after every mutation."""
        self._listeners.append(listener)

    def replace_all(self, rows: Iterable[CanonicalRow]) -> None:
        """Discard the current rows and take the given ones."""
        self._rows = list(rows)
        logger.debug("Replaced store contents with %d row(s)", len(self._rows))
        self._notify()

    def update_cell(self, index: int, field: CardField, value: str) -> None:
        """Store an edited value, applying the field's input policy.

        - Card # and Description are fixed after import; edits are ignored.
        - Purchased From is cut to 50 characters.
        - Date Purchased gets slashes inserted as digits are typed.
        - Prices are stored as typed until finalize_currency_edit.
        - Choice fields accept only their vocabulary (blank allowed).

        Args:
            index: Position in the store
            field: Field to edit
            value: New text

        Raises:
            IndexOutOfRangeError: If index is outside the store
            ValidationError: If a choice field gets a value outside its list
        """
        self._check_index(index)
        value = "" if value is None else str(value)

        if field in READ_ONLY_FIELDS:
            logger.debug("Ignoring edit of read-only field %s", field.header)
            return

        if field in _CHOICES:
            if value not in _CHOICES[field]:
                raise ValidationError(invalid_choice(field.header, value, _CHOICES[field]))
            stored = _CHOICE_TYPES[field](value) if field in _CHOICE_TYPES else value
        elif field is CardField.PURCHASED_FROM:
            stored = value[:PURCHASED_FROM_MAX_LENGTH]
        elif field is CardField.DATE_PURCHASED:
            stored = auto_slash_date(value)
        else:
            stored = value

        self._set(index, field, stored)

    def attach_images(self, index: int, refs: Iterable[str]) -> None:
        """Record transient image references for a row.

        References are local handles only and are not expected to resolve
        after the session ends.
        """
        refs = [r for r in refs if r]
        if not refs:
            return
        self.update_cell(index, CardField.IMAGE_REFS, "; ".join(refs))

    def finalize_currency_edit(self, index: int, field: CardField) -> None:
        """Reformat a price once editing of the cell is complete.

        Raises:
            IndexOutOfRangeError: If index is outside the store
            ValidationError: If field is not a price field
        """
        self._check_index(index)
        if field not in CURRENCY_FIELDS:
            raise ValidationError(f"{field.header} is not a currency field")
        current = self._rows[index].text(field)
        self._set(index, field, normalize_currency(current))

    def finalize_date_edit(self, index: int) -> Optional[ValidationWarning]:
        """Check the purchase date once editing of the cell is complete.

        The value is kept either way and listeners are not notified.

        Returns:
            A ValidationWarning when the date is non-blank and not in
            MM/DD/YYYY form, else None
        """
        self._check_index(index)
        current = self._rows[index].date_purchased
        warning = None
        if current and not is_valid_purchase_date(current):
            warning = ValidationWarning(invalid_purchase_date(current))
            logger.warning("Row %d: %s", index, warning)
        return warning

    def _set(self, index: int, field: CardField, value) -> None:
        self._rows[index] = replace(self._rows[index], **{field.attr: value})
        self._notify()

    def _check_index(self, index: int) -> int:
        if not 0 <= index < len(self._rows):
            raise IndexOutOfRangeError(row_out_of_range(index, len(self._rows)))
        return index

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)
