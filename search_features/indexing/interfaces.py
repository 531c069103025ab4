from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class MappingContributor(ABC):
    """Contributes analyzers and fields to the index mapping at index-creation time."""

    @abstractmethod
    def augment(self, mapping: Dict[str, Any]) -> Dict[str, Any]:
        pass


class SyncEnricher(ABC):
    """Adds derived fields to a document's outgoing sync payload."""

    @abstractmethod
    def enrich(self, fields: Dict[str, Any], document_id: Optional[Any] = None) -> Dict[str, Any]:
        pass
