from typing import Any, Dict, List, Optional

from search_features.indexing import SyncEnricher


def collect_term_names(fields: Dict[str, Any]) -> List[str]:
    """Names of every term in every taxonomy, in the order they appear."""
    names = []
    for terms in (fields.get("terms") or {}).values():
        for term in terms:
            names.append(term["name"])
    return names


def enrich(fields: Dict[str, Any]) -> Dict[str, Any]:
    """Add ``term_suggest`` to a sync payload when the document has terms."""
    suggest = collect_term_names(fields)
    if not suggest:
        return fields

    enriched = dict(fields)
    enriched["term_suggest"] = suggest
    return enriched


class TermSuggestEnricher(SyncEnricher):
    def enrich(self, fields: Dict[str, Any], document_id: Optional[Any] = None) -> Dict[str, Any]:
        return enrich(fields)
