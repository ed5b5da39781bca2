"""Catalog repository on top of a key-value store."""

import json
from typing import Any, Optional

from cardcatalog.database.base import CatalogRepository, KeyValueStore
from cardcatalog.domain.errors import PersistenceUnavailableError

INDEX_KEY = "sc_sets_index"
SET_KEY_PREFIX = "sc_set_"


def set_key(slug: str) -> str:
    """Return the store key of a set."""
    return f"{SET_KEY_PREFIX}{slug}"


class KeyValueCatalogRepository(CatalogRepository):
    """Keeps the index under one key and each set under its own key, as JSON."""

    def __init__(self, store: KeyValueStore):
        """Initialize repository.

        Args:
            store: Key-value store instance
        """
        self.store = store

    def read_index(self) -> Optional[Any]:
        return self._read(INDEX_KEY)

    def write_index(self, payload: list[dict[str, Any]]) -> None:
        self._write(INDEX_KEY, payload)

    def read_set(self, slug: str) -> Optional[Any]:
        return self._read(set_key(slug))

    def write_set(self, slug: str, payload: dict[str, Any]) -> None:
        self._write(set_key(slug), payload)

    def _read(self, key: str) -> Optional[Any]:
        raw = self.store.get(key)
        if raw is None:
            return None
        try:
            return json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise PersistenceUnavailableError(f"Unreadable content under '{key}': {e}") from e

    def _write(self, key: str, payload: Any) -> None:
        self.store.set(key, json.dumps(payload).encode("utf-8"))
