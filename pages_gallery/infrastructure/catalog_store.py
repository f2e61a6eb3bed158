"""JSON storage for the apps catalog."""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Union

from pages_gallery.domain.repository import Catalog

logger = logging.getLogger(__name__)


class CatalogReadError(Exception):
    """Raised when the catalog artifact is missing or malformed."""
    pass


class CatalogStore:
    """Reads and writes the catalog artifact shared by all phases."""

    def __init__(self, path: Union[str, Path] = "apps-data.json"):
        """
        Initialize catalog store.

        Args:
            path: Location of the catalog JSON file
        """
        self.path = Path(path)

    @property
    def base_dir(self) -> Path:
        """Directory that relative paths in the catalog are resolved against."""
        return self.path.resolve().parent

    def write(self, catalog: Catalog):
        """
        Replace the catalog file with `catalog`.

        The document is written to a temporary file next to the target and
        moved into place, so readers never observe a half-written file.
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(
            dir=str(self.path.parent), prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(catalog.to_dict(), f, indent=2, ensure_ascii=False)
                f.write("\n")
            os.replace(tmp_path, self.path)
        except Exception as e:
            logger.error(f"Error writing catalog to {self.path}: {e}")
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

        logger.info(f"Wrote {catalog.total_apps} apps to {self.path}")

    def read(self) -> Dict[str, Any]:
        """
        Load the raw catalog document.

        Raises:
            CatalogReadError: If the file is missing, not JSON, or has no `apps` list
        """
        if not self.path.exists():
            raise CatalogReadError(f"{self.path} not found")

        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise CatalogReadError(f"Could not read {self.path}: {e}") from e

        if not isinstance(data, dict) or not isinstance(data.get("apps"), list):
            raise CatalogReadError(f"{self.path} has no apps list")

        return data
