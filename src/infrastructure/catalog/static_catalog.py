from typing import List

from src.application.ports import CatalogPort
from src.domain.catalog import SIGN_CATALOG
from src.domain.models import SignRecord


class StaticCatalogProvider(CatalogPort):
    def load_signs(self) -> List[SignRecord]:
        return list(SIGN_CATALOG)
