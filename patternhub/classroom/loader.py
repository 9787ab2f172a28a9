"""
CatalogLoader - Load the pattern catalog from its YAML file.

Provides read-only access to:
- Patterns and their categories
- Challenges with their point values
- Lesson file references
"""

import logging
from pathlib import Path
from typing import Optional

import yaml

from patternhub.config import DEFAULT_CATALOG_PATH
from patternhub.schemas import PatternCatalog


logger = logging.getLogger(__name__)


class CatalogLoader:
    """
    Load the static pattern catalog.

    The YAML file is parsed and validated once; later calls to load()
    return the same PatternCatalog instance.
    """

    def __init__(self, catalog_path: Optional[str | Path] = None):
        """
        Initialize loader with path to catalog.yaml.

        Args:
            catalog_path: Path to the catalog file (default: packaged catalog)
        """
        self.catalog_path = Path(catalog_path) if catalog_path else DEFAULT_CATALOG_PATH
        if not self.catalog_path.exists():
            raise FileNotFoundError(f"Pattern catalog not found: {self.catalog_path}")
        self._catalog: Optional[PatternCatalog] = None

    def load(self) -> PatternCatalog:
        """
        Parse and validate the catalog.

        Raises:
            yaml.YAMLError: If the file is not valid YAML
            pydantic.ValidationError: If the data does not match the schema
        """
        if self._catalog is None:
            with open(self.catalog_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
            self._catalog = PatternCatalog.model_validate(data)
            logger.debug(
                f"Loaded {len(self._catalog.patterns)} patterns "
                f"from {self.catalog_path}"
            )
        return self._catalog


def load_catalog(catalog_path: Optional[str | Path] = None) -> PatternCatalog:
    """Load and validate a catalog file in one call."""
    return CatalogLoader(catalog_path).load()
