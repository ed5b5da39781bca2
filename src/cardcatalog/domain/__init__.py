"""Domain layer for cardcatalog application."""

from cardcatalog.domain.csv_import import CSVImportService
from cardcatalog.domain.normalizer import normalize_records
from cardcatalog.domain.reference import ReferenceDataService
from cardcatalog.domain.row_store import RowStore
from cardcatalog.domain.sort_filter import build_view

__all__ = [
    "CSVImportService",
    "normalize_records",
    "ReferenceDataService",
    "RowStore",
    "build_view",
]
