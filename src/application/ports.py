from typing import List, Protocol
from src.domain.models import SignRecord


class CatalogPort(Protocol):
    def load_signs(self) -> List[SignRecord]:
        """
        Returns the ordered sign catalog. Callers treat it as read-only.
        """
        ...
