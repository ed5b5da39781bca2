"""CSV import and export domain service."""

import csv
import io
import logging
from pathlib import Path
from typing import Iterable, TextIO

from cardcatalog.domain.entities import CanonicalRow, EXPECTED_HEADERS
from cardcatalog.domain.errors import ParseFailureError, parse_failure
from cardcatalog.domain.normalizer import normalize_records

logger = logging.getLogger(__name__)

DEFAULT_EXPORT_NAME = "sportscard-export"
SNIFF_DELIMITERS = ",\t;|"


class CSVImportService:
    """Service for reading card checklists from and writing them to CSV."""

    def read_csv(self, csv_file_path: str) -> tuple[list[str], list[dict[str, str]]]:
        """Read a CSV file into its header list and records.

        Args:
            csv_file_path: Path to CSV file

        Returns:
            Tuple of (headers, records); blank lines are skipped

        Raises:
            FileNotFoundError: If CSV file doesn't exist
            ParseFailureError: If the file cannot be parsed
        """
        csv_path = Path(csv_file_path)
        if not csv_path.exists():
            raise FileNotFoundError(f"CSV file not found: {csv_file_path}")

        try:
            with open(csv_path, "r", encoding="utf-8-sig", newline="") as f:
                return self._read(f)
        except UnicodeDecodeError as e:
            raise ParseFailureError(parse_failure(str(e))) from e

    def read_text(self, text: str) -> tuple[list[str], list[dict[str, str]]]:
        """Read CSV content held in memory; see read_csv."""
        return self._read(io.StringIO(text.removeprefix("\ufeff"), newline=""))

    def import_csv(self, csv_file_path: str) -> list[CanonicalRow]:
        """Read and normalize a CSV checklist file.

        Raises:
            FileNotFoundError: If CSV file doesn't exist
            ParseFailureError: If the file cannot be parsed
            SchemaMismatchError: If required columns are missing
        """
        headers, records = self.read_csv(csv_file_path)
        rows = normalize_records(headers, records)
        logger.info("Imported %d row(s) from %s", len(rows), csv_file_path)
        return rows

    def import_text(self, text: str) -> list[CanonicalRow]:
        """Read and normalize CSV content held in memory; see import_csv."""
        headers, records = self.read_text(text)
        return normalize_records(headers, records)

    def export_rows(self, rows: Iterable[CanonicalRow]) -> str:
        """Serialize rows as CSV text with the full header row."""
        out = io.StringIO()
        writer = csv.writer(out, lineterminator="\n")
        writer.writerow(EXPECTED_HEADERS)
        for row in rows:
            record = row.to_record()
            writer.writerow([record[h] for h in EXPECTED_HEADERS])
        return out.getvalue()

    def export_csv(self, rows: Iterable[CanonicalRow], csv_file_path: str) -> Path:
        """Write rows to a CSV file and return its path."""
        csv_path = Path(csv_file_path)
        csv_path.write_text(self.export_rows(rows), encoding="utf-8")
        logger.info("Exported set to %s", csv_path)
        return csv_path

    def _read(self, f: TextIO) -> tuple[list[str], list[dict[str, str]]]:
        try:
            # Try to detect delimiter
            sample = f.read(4096)
            f.seek(0)
            try:
                delimiter = csv.Sniffer().sniff(sample, delimiters=SNIFF_DELIMITERS).delimiter
            except csv.Error:
                delimiter = ","

            reader = csv.DictReader(f, delimiter=delimiter)
            headers = reader.fieldnames
            if not headers:
                raise ParseFailureError(parse_failure("file has no header row"))

            # Cells beyond the header row land under the None key; drop them
            records = [
                {k: v for k, v in record.items() if k is not None} for record in reader
            ]
        except csv.Error as e:
            raise ParseFailureError(parse_failure(str(e))) from e
        return list(headers), records


def export_filename(title: str) -> str:
    """Return the download file name for a set title."""
    name = title.strip() or DEFAULT_EXPORT_NAME
    return name if name.endswith(".csv") else f"{name}.csv"
