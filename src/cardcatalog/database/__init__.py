"""Storage layer for cardcatalog application."""

from cardcatalog.database.base import CatalogRepository, KeyValueStore
from cardcatalog.database.factories import create_sqlite_store
from cardcatalog.database.memory import InMemoryKeyValueStore
from cardcatalog.database.repository import KeyValueCatalogRepository

__all__ = [
    "CatalogRepository",
    "KeyValueStore",
    "InMemoryKeyValueStore",
    "KeyValueCatalogRepository",
    "create_sqlite_store",
]
