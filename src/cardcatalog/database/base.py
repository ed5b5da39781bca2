"""Abstract storage interfaces."""

from abc import ABC, abstractmethod
from typing import Any, Optional


class KeyValueStore(ABC):
    """Byte-oriented key-value store holding the catalog.

    Implementations raise PersistenceUnavailableError when the backing
    storage cannot be read or written.
    """

    @abstractmethod
    def connect(self) -> None:
        """Open the store."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Close the store."""
        pass

    @abstractmethod
    def get(self, key: str) -> Optional[bytes]:
        """Return the value stored under key, or None if absent."""
        pass

    @abstractmethod
    def set(self, key: str, value: bytes) -> None:
        """Store value under key, replacing any previous value."""
        pass


class CatalogRepository(ABC):
    """Storage of the set index and of individual sets as JSON payloads.

    Payloads are plain decoded JSON (lists and dicts). Reads return None
    for absent entries; unreadable or undecodable content raises
    PersistenceUnavailableError.
    """

    @abstractmethod
    def read_index(self) -> Optional[Any]:
        """Read the index payload (a list of entry dicts)."""
        pass

    @abstractmethod
    def write_index(self, payload: list[dict[str, Any]]) -> None:
        """Write the whole index payload."""
        pass

    @abstractmethod
    def read_set(self, slug: str) -> Optional[Any]:
        """Read one set payload."""
        pass

    @abstractmethod
    def write_set(self, slug: str, payload: dict[str, Any]) -> None:
        """Write one set payload."""
        pass
