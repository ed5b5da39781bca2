"""In-memory key-value store."""

from typing import Optional

from cardcatalog.database.base import KeyValueStore


class InMemoryKeyValueStore(KeyValueStore):
    """Dict-backed store; contents last as long as the instance."""

    def __init__(self, initial: Optional[dict[str, bytes]] = None):
        self.entries: dict[str, bytes] = dict(initial or {})

    def connect(self) -> None:
        pass

    def disconnect(self) -> None:
        pass

    def get(self, key: str) -> Optional[bytes]:
        return self.entries.get(key)

    def set(self, key: str, value: bytes) -> None:
        self.entries[key] = bytes(value)
