import json
import logging
from typing import List, Optional

from pydantic import ValidationError

from src.application.ports import CatalogPort
from src.domain.catalog import validate_catalog
from src.domain.models import SignRecord
from src.infrastructure.catalog.static_catalog import StaticCatalogProvider
from src.infrastructure.config import Settings


logger = logging.getLogger(__name__)


class CatalogLoadError(Exception):
    """Raised when a sign catalog file cannot be read or is invalid."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Cannot load sign catalog from {path}: {reason}")
        self.path = path
        self.reason = reason


class JsonCatalogProvider(CatalogPort):
    """Loads the sign catalog from a JSON array of sign records, once."""

    def __init__(self, path: str):
        self.path = path
        self._signs: Optional[List[SignRecord]] = None

    def load_signs(self) -> List[SignRecord]:
        if self._signs is None:
            self._signs = self._read()
        return list(self._signs)

    def _read(self) -> List[SignRecord]:
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except FileNotFoundError:
            raise CatalogLoadError(self.path, "file not found")
        except json.JSONDecodeError as e:
            raise CatalogLoadError(self.path, f"invalid JSON ({e})")
        except (OSError, UnicodeDecodeError) as e:
            raise CatalogLoadError(self.path, str(e))

        if not isinstance(data, list):
            raise CatalogLoadError(self.path, "expected a JSON array of sign records")

        try:
            signs = [SignRecord(**item) for item in data]
            validate_catalog(signs)
        except (TypeError, ValidationError, ValueError) as e:
            logger.error("Invalid sign catalog %s: %s", self.path, e)
            raise CatalogLoadError(self.path, str(e))

        logger.info("Loaded %d signs from %s", len(signs), self.path)
        return signs


def provider_from_settings(settings: Settings | None = None) -> CatalogPort:
    settings = settings or Settings()
    if settings.catalog_path:
        return JsonCatalogProvider(settings.catalog_path)
    return StaticCatalogProvider()
