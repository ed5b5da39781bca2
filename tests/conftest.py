"""Shared pytest fixtures for cardcatalog tests."""

import csv
import tempfile
import os
from pathlib import Path
import pytest

from cardcatalog.database.factories import create_sqlite_store
from cardcatalog.database.memory import InMemoryKeyValueStore
from cardcatalog.database.repository import KeyValueCatalogRepository
from cardcatalog.domain.entities import EXPECTED_HEADERS
from cardcatalog.domain.persistence import PersistenceBridge


class ManualTimer:
    """Timer double that fires only when told to."""

    def __init__(self, delay, callback):
        self.delay = delay
        self.callback = callback
        self.started = False
        self.cancelled = False

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def fire(self):
        self.callback()


class ManualTimerFactory:
    """Creates ManualTimers and remembers them."""

    def __init__(self):
        self.timers: list[ManualTimer] = []

    def __call__(self, delay, callback):
        timer = ManualTimer(delay, callback)
        self.timers.append(timer)
        return timer

    @property
    def last(self) -> ManualTimer:
        return self.timers[-1]


def make_record(**overrides) -> dict[str, str]:
    """Build a raw checklist record with every header present."""
    record = {header: "" for header in EXPECTED_HEADERS}
    record.update(overrides)
    return record


@pytest.fixture
def temp_store():
    """Create a temporary SQLite store for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    store = create_sqlite_store(database_path=db_path)
    # Store the path for tests that need it
    store.database_path = db_path
    store.connect()

    yield store

    # Cleanup
    store.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def memory_store():
    """Create an empty in-memory store."""
    return InMemoryKeyValueStore()


@pytest.fixture
def bridge(memory_store):
    """Create a PersistenceBridge over the in-memory store."""
    return PersistenceBridge(KeyValueCatalogRepository(memory_store))


@pytest.fixture
def timer_factory():
    """Create a factory of manually fired timers."""
    return ManualTimerFactory()


@pytest.fixture
def sample_records():
    """Raw records as they might come out of a hand-kept spreadsheet."""
    return [
        make_record(**{
            "Card #": "1",
            "Description": "Rickey Henderson",
            "Owned": "y",
            "Raw Grade": "NM",
            "Graded": "no",
            "Grade": "",
            "Cost": "$12",
            "Value": "25.5",
            "Date Purchased": "03152024",
            "Purchased From": "Card show",
        }),
        make_record(**{
            "Card #": "2",
            "Description": "Don Mattingly",
            "Owned": "TRUE",
            "Graded": "Yes",
            "Grading Company": "PSA",
            "Grade": "8.7",
            "Cost": "1,234.5",
            "Value": "$1,500.00",
        }),
        make_record(**{
            "Card #": "3",
            "Description": "Team Checklist",
            "Owned": "No",
            "Target Price": "4",
        }),
        make_record(**{
            "Card #": "",
            "Description": "Unnumbered insert",
            "Owned": "",
        }),
    ]


@pytest.fixture
def write_checklist(tmp_path):
    """Return a helper that writes records to a CSV file."""

    def _write(records, headers=EXPECTED_HEADERS, name="checklist.csv") -> Path:
        path = tmp_path / name
        with open(path, "w", encoding="utf-8", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=list(headers), extrasaction="ignore")
            writer.writeheader()
            for record in records:
                writer.writerow(record)
        return path

    return _write


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
