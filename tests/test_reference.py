"""Tests for reference datasets."""

import json

import pytest

from cardcatalog.domain.errors import NotFoundError
from cardcatalog.domain.reference import ReferenceDataService


@pytest.fixture
def service(tmp_path):
    (tmp_path / "sets.json").write_text(json.dumps(["1987-topps"]), encoding="utf-8")
    (tmp_path / "1987-topps.json").write_text(
        json.dumps([{"Card #": "1", "Description": "Rick Mahler"}]), encoding="utf-8"
    )
    return ReferenceDataService(tmp_path)


def test_catalog_listing(service):
    assert service.get() == ["1987-topps"]


def test_named_dataset(service):
    assert service.get("1987-topps") == [{"Card #": "1", "Description": "Rick Mahler"}]


@pytest.mark.parametrize("name", ["1988-topps", "../sets", "..", "sub/1987-topps"])
def test_unknown_dataset(service, name):
    """Unknown names and path tricks are not found."""
    with pytest.raises(NotFoundError, match="not found"):
        service.get(name)


def test_corrupt_file(service, tmp_path):
    (tmp_path / "broken.json").write_text("{", encoding="utf-8")
    with pytest.raises(ValueError):
        service.get("broken")


def test_missing_catalog(tmp_path):
    with pytest.raises(OSError):
        ReferenceDataService(tmp_path / "missing").get()
