"""Editing session for one set."""

import logging
import threading
from pathlib import Path
from typing import Iterable, Optional

from cardcatalog.domain.autosave import AutosaveScheduler, DEFAULT_AUTOSAVE_DELAY, TimerFactory
from cardcatalog.domain.csv_import import CSVImportService, export_filename
from cardcatalog.domain.entities import (
    CardField,
    CardSet,
    IndexEntry,
    ViewRow,
    build_title,
)
from cardcatalog.domain.errors import ValidationError, ValidationWarning
from cardcatalog.domain.persistence import PersistenceBridge
from cardcatalog.domain.row_store import RowStore
from cardcatalog.domain.sort_filter import SortSpec, build_view, needed_only, next_sort
from cardcatalog.utils.slug import slugify

logger = logging.getLogger(__name__)

SET_DESCRIPTION_MAX_LENGTH = 60


class SetEditor:
    """Ties a RowStore to persistence with debounced autosave.

    A session starts unnamed (no slug) after a fresh import; autosave does
    nothing until name_set gives it a title and slug. Sessions opened from
    a saved set autosave straight away.
    """

    def __init__(
        self,
        bridge: PersistenceBridge,
        card_set: Optional[CardSet] = None,
        delay: float = DEFAULT_AUTOSAVE_DELAY,
        timer_factory: TimerFactory = threading.Timer,
    ):
        """Initialize editor.

        Args:
            bridge: Persistence bridge instance
            card_set: Saved set to edit; None starts an unnamed session
            delay: Autosave quiet period in seconds
            timer_factory: Timer factory passed to the autosave scheduler
        """
        self.bridge = bridge
        self.import_service = CSVImportService()
        self.slug: Optional[str] = None
        self.title = ""
        self.year: Optional[int] = None
        self.brand = ""
        self.description = ""
        self.store = RowStore()
        if card_set is not None:
            self.slug = card_set.slug
            self.title = card_set.title
            self.year = card_set.year
            self.brand = card_set.brand
            self.description = card_set.description
            self.store = RowStore(card_set.rows)

        self.sort: Optional[SortSpec] = None
        self.needed_only = False
        self.last_saved: Optional[IndexEntry] = None

        self.autosave = AutosaveScheduler(self.save, delay=delay, timer_factory=timer_factory)
        self.store.subscribe(lambda _store: self.autosave.schedule())

    @classmethod
    def open(cls, bridge: PersistenceBridge, slug: str, **kwargs) -> "SetEditor":
        """Open a saved set; an unknown slug gives an empty session under that slug."""
        card_set = bridge.load_set(slug)
        if card_set is None:
            logger.info("No saved data for '%s'; starting empty", slug)
            editor = cls(bridge, **kwargs)
            editor.slug = slug
            return editor
        return cls(bridge, card_set, **kwargs)

    @property
    def is_named(self) -> bool:
        """Whether the session has a slug and title to save under."""
        return bool(self.slug and self.title)

    def to_card_set(self) -> CardSet:
        """Snapshot of the session as a CardSet."""
        return CardSet(
            slug=self.slug or "",
            title=self.title,
            year=self.year,
            brand=self.brand,
            description=self.description,
            rows=self.store.rows,
        )

    def save(self) -> Optional[IndexEntry]:
        """Save the set and its index entry now; unnamed sessions are skipped."""
        if not self.is_named:
            logger.debug("Skipping save of unnamed set")
            return None
        self.last_saved = self.bridge.save_with_index(self.to_card_set())
        return self.last_saved

    def import_csv(self, csv_file_path: str) -> int:
        """Replace the rows with a CSV file's rows.

        Returns:
            Number of rows imported

        Raises:
            SchemaMismatchError, ParseFailureError: Rows are left unchanged
        """
        rows = self.import_service.import_csv(csv_file_path)
        self.store.replace_all(rows)
        return len(rows)

    def import_text(self, text: str) -> int:
        """Replace the rows with CSV content held in memory; see import_csv."""
        rows = self.import_service.import_text(text)
        self.store.replace_all(rows)
        return len(rows)

    def name_set(self, year: int, brand: str, description: str) -> str:
        """Title the set and save it immediately.

        An unnamed session gets a slug derived from the title, made unique
        against the index; a session that already has a slug keeps it.

        Returns:
            The set's slug

        Raises:
            ValidationError: If brand or description is blank, or the
                description is too long
        """
        description = (description or "").strip()
        if not (brand or "").strip():
            raise ValidationError("Brand is required")
        if not description:
            raise ValidationError("Description is required")
        if len(description) > SET_DESCRIPTION_MAX_LENGTH:
            raise ValidationError(
                f"Description must be at most {SET_DESCRIPTION_MAX_LENGTH} characters"
            )

        title = build_title(year, brand.strip(), description)
        if self.slug is None:
            self.slug = self.bridge.ensure_unique_slug(slugify(title))
        self.title = title
        self.year = year
        self.brand = brand.strip()
        self.description = description

        self.autosave.cancel()
        self.save()
        logger.info("Named set '%s' as %s", title, self.slug)
        return self.slug

    def update_cell(self, index: int, field: CardField, value: str) -> None:
        """Edit one cell; see RowStore.update_cell."""
        self.store.update_cell(index, field, value)

    def finalize_currency_edit(self, index: int, field: CardField) -> None:
        """Reformat a price after editing; see RowStore.finalize_currency_edit."""
        self.store.finalize_currency_edit(index, field)

    def finalize_date_edit(self, index: int) -> Optional[ValidationWarning]:
        """Check a purchase date after editing; see RowStore.finalize_date_edit."""
        return self.store.finalize_date_edit(index)

    def attach_images(self, index: int, refs: Iterable[str]) -> None:
        """Attach transient image references to a row."""
        self.store.attach_images(index, refs)

    def click_sort(self, field: CardField) -> SortSpec:
        """Sort by a column, flipping direction if it is already the sort column."""
        self.sort = next_sort(self.sort, field)
        return self.sort

    def view(self) -> list[ViewRow]:
        """Rows as currently filtered and sorted."""
        predicate = needed_only if self.needed_only else None
        return build_view(self.store.rows, predicate, self.sort)

    def export_csv(self, csv_file_path: Optional[str] = None) -> Path:
        """Write the rows to CSV, by default to a file named after the title.

        Raises:
            ValidationError: If the set has no rows
        """
        if not len(self.store):
            raise ValidationError("No data to export.")
        path = csv_file_path or export_filename(self.title)
        return self.import_service.export_csv(self.store.rows, path)

    def flush(self) -> bool:
        """Run a pending autosave now."""
        return self.autosave.flush()

    def close(self) -> None:
        """Flush any pending autosave."""
        self.flush()
