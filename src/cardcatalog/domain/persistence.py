"""Persistence of sets and of the global set index.

Reads degrade instead of failing: an absent or corrupt set loads as None
and a corrupt index reads as empty. Writes are best effort; a failed write
is logged and reported through the return value, since a lost autosave
costs at most the edits of one quiescence window.
"""

import logging
from dataclasses import replace
from datetime import datetime, UTC
from typing import Optional

from cardcatalog.database.base import CatalogRepository
from cardcatalog.database.mappers import (
    card_set_to_payload,
    index_entry_to_payload,
    payload_to_card_set,
    payload_to_index_entry,
)
from cardcatalog.domain.entities import CardSet, IndexEntry
from cardcatalog.domain.errors import PersistenceUnavailableError
from cardcatalog.domain.statistics import (
    build_index_entry,
    compute_financials,
    compute_owned_stats,
)

logger = logging.getLogger(__name__)


class PersistenceBridge:
    """Service for saving and loading sets and maintaining the index."""

    def __init__(self, repository: CatalogRepository):
        """Initialize persistence bridge.

        Args:
            repository: Catalog repository instance
        """
        self.repository = repository

    def save_set(self, card_set: CardSet) -> bool:
        """Write a full set, rows included, under its slug.

        Returns:
            True if the write succeeded
        """
        try:
            self.repository.write_set(card_set.slug, card_set_to_payload(card_set))
        except PersistenceUnavailableError as e:
            logger.warning("Could not save set '%s': %s", card_set.slug, e)
            return False
        logger.debug("Saved set '%s' (%d rows)", card_set.slug, len(card_set.rows))
        return True

    def load_set(self, slug: str) -> Optional[CardSet]:
        """Read a set back.

        Returns:
            The set, or None if it is absent or its content is unreadable
        """
        try:
            payload = self.repository.read_set(slug)
        except PersistenceUnavailableError as e:
            logger.warning("Could not load set '%s': %s", slug, e)
            return None
        if payload is None:
            return None
        try:
            return payload_to_card_set(slug, payload)
        except (ValueError, TypeError, ArithmeticError) as e:
            logger.warning("Ignoring corrupt set '%s': %s", slug, e)
            return None

    def load_index(self) -> list[IndexEntry]:
        """Read the index in stored order; unreadable content reads as empty."""
        try:
            payload = self.repository.read_index()
        except PersistenceUnavailableError as e:
            logger.warning("Could not load set index: %s", e)
            return []
        if not isinstance(payload, list):
            if payload is not None:
                logger.warning("Ignoring set index that is not a list")
            return []

        entries = []
        for item in payload:
            try:
                entries.append(payload_to_index_entry(item))
            except (ValueError, TypeError, ArithmeticError) as e:
                logger.warning("Skipping unreadable index entry: %s", e)
        return entries

    def upsert_index_entry(self, entry: IndexEntry) -> bool:
        """Replace the index entry with the same slug, or append it.

        Returns:
            True if the index was written
        """
        entries = self.load_index()
        for i, existing in enumerate(entries):
            if existing.slug == entry.slug:
                entries[i] = entry
                break
        else:
            entries.append(entry)

        try:
            self.repository.write_index([index_entry_to_payload(e) for e in entries])
        except PersistenceUnavailableError as e:
            logger.warning("Could not write set index: %s", e)
            return False
        return True

    def ensure_unique_slug(self, base: str) -> str:
        """Return base, or base-2, base-3, ... whichever is not yet in the index."""
        existing = {entry.slug for entry in self.load_index()}
        slug = base
        suffix = 2
        while slug in existing:
            slug = f"{base}-{suffix}"
            suffix += 1
        return slug

    def save_with_index(
        self, card_set: CardSet, updated_at: Optional[datetime] = None
    ) -> IndexEntry:
        """Save a set and upsert its index entry with recomputed statistics.

        Returns:
            The index entry that was written (or attempted)
        """
        entry = build_index_entry(card_set, updated_at or datetime.now(UTC))
        self.save_set(card_set)
        self.upsert_index_entry(entry)
        return entry

    def list_sets(self) -> list[IndexEntry]:
        """Index entries, most recently updated first.

        Entries stored without cached statistics get them computed from the
        stored rows (an absent set counts as empty).
        """
        entries = []
        for entry in self.load_index():
            if not entry.has_stats:
                entry = self._with_stats(entry)
            entries.append(entry)
        return sorted(entries, key=lambda e: e.updated_at, reverse=True)

    def _with_stats(self, entry: IndexEntry) -> IndexEntry:
        card_set = self.load_set(entry.slug)
        rows = card_set.rows if card_set is not None else ()
        owned = compute_owned_stats(rows)
        money = compute_financials(rows)
        return replace(
            entry,
            owned_count=owned.owned_count,
            owned_pct=owned.owned_pct,
            total_cost=money.total_cost,
            total_value=money.total_value,
            gain_loss=money.gain_loss,
        )
