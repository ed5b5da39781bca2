"""SQLAlchemy key-value store implementation."""

import logging
from typing import Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from cardcatalog.database.base import KeyValueStore
from cardcatalog.database.models import StoreEntry, create_session_factory
from cardcatalog.domain.errors import PersistenceUnavailableError

logger = logging.getLogger(__name__)


class SQLAlchemyKeyValueStore(KeyValueStore):
    """SQLAlchemy-based implementation of KeyValueStore."""

    def __init__(self, database_url: str):
        """Initialize SQLAlchemy store.

        Args:
            database_url: SQLAlchemy database URL (e.g., 'sqlite:///path/to.db')

        Raises:
            PersistenceUnavailableError: If the database cannot be opened
        """
        self.database_url = database_url
        try:
            self.session_factory = create_session_factory(database_url)
        except SQLAlchemyError as e:
            raise PersistenceUnavailableError(f"Cannot open store {database_url}: {e}") from e
        self._session: Optional[Session] = None

    def _get_session(self) -> Session:
        """Get current session, creating one if needed."""
        if self._session is None:
            self._session = self.session_factory()
        return self._session

    def connect(self) -> None:
        """Connect to the database."""
        # Connection is lazy, so this is a no-op
        pass

    def disconnect(self) -> None:
        """Disconnect from the database."""
        if self._session is not None:
            self._session.close()
            self._session = None

    def get(self, key: str) -> Optional[bytes]:
        """Return the value stored under key, or None if absent."""
        session = self._get_session()
        try:
            entry = session.query(StoreEntry).filter(StoreEntry.key == key).first()
        except SQLAlchemyError as e:
            session.rollback()
            raise PersistenceUnavailableError(f"Cannot read '{key}': {e}") from e
        if entry is None:
            return None
        return bytes(entry.value)

    def set(self, key: str, value: bytes) -> None:
        """Store value under key, replacing any previous value."""
        session = self._get_session()
        try:
            entry = session.query(StoreEntry).filter(StoreEntry.key == key).first()
            if entry is None:
                session.add(StoreEntry(key=key, value=value))
            else:
                entry.value = value
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            raise PersistenceUnavailableError(f"Cannot write '{key}': {e}") from e
        logger.debug("Stored %d byte(s) under '%s'", len(value), key)
