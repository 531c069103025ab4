import copy
import logging
from typing import Any, Dict, List, Optional

from .analysis import missing_analyzers
from .interfaces import MappingContributor, SyncEnricher

logger = logging.getLogger(__name__)


class IndexingPipeline:
    """
    Ordered collection of mapping contributors and sync enrichers.

    Features register their capabilities here during setup; the index
    manager then asks the pipeline for the final mapping at index-creation
    time and for the outgoing payload of every document it syncs.
    Contributors and enrichers run in registration order.
    """

    def __init__(self):
        self.mapping_contributors: List[MappingContributor] = []
        self.sync_enrichers: List[SyncEnricher] = []

    def add_mapping_contributor(self, contributor: MappingContributor) -> None:
        self.mapping_contributors.append(contributor)

    def add_sync_enricher(self, enricher: SyncEnricher) -> None:
        self.sync_enrichers.append(enricher)

    def compute_mapping(self, base_mapping: Dict[str, Any]) -> Dict[str, Any]:
        """
        Run the base mapping through every registered contributor.

        Args:
            base_mapping: Mapping with ``settings`` and ``mappings`` sections

        Returns:
            A new mapping; ``base_mapping`` is left untouched
        """
        mapping = copy.deepcopy(base_mapping)
        for contributor in self.mapping_contributors:
            mapping = contributor.augment(mapping)

        missing = missing_analyzers(mapping)
        if missing:
            logger.warning(f"Mapping references undeclared analyzers: {', '.join(missing)}")

        return mapping

    def prepare_document(self, fields: Dict[str, Any], document_id: Optional[Any] = None) -> Dict[str, Any]:
        """Run one document's sync payload through every registered enricher."""
        for enricher in self.sync_enrichers:
            fields = enricher.enrich(fields, document_id)
        return fields
