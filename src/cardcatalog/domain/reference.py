"""Read-only reference checklists served from static JSON files."""

import json
import logging
from pathlib import Path
from typing import Any, Optional

from cardcatalog.domain.errors import NotFoundError, set_not_found

logger = logging.getLogger(__name__)

CATALOG_FILE = "sets.json"


class ReferenceDataService:
    """Service for reading reference datasets from a data directory.

    The directory holds a catalog listing in sets.json and one
    <name>.json file per dataset.
    """

    def __init__(self, data_dir: str | Path):
        """Initialize reference data service.

        Args:
            data_dir: Directory containing the JSON files
        """
        self.data_dir = Path(data_dir)

    def get(self, set_name: Optional[str] = None) -> Any:
        """Return the catalog listing, or one named dataset.

        Args:
            set_name: Dataset name; None returns the full listing

        Raises:
            NotFoundError: If the named dataset does not exist
            OSError: If a file exists but cannot be read
            ValueError: If a file is not valid JSON
        """
        if not set_name:
            return self._read_json(self.data_dir / CATALOG_FILE)

        if Path(set_name).name != set_name or set_name in (".", ".."):
            raise NotFoundError(set_not_found(set_name))
        path = self.data_dir / f"{set_name}.json"
        if not path.is_file():
            raise NotFoundError(set_not_found(set_name))
        return self._read_json(path)

    def _read_json(self, path: Path) -> Any:
        logger.debug("Reading reference data %s", path)
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
