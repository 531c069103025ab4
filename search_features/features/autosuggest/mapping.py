import copy
import logging
from typing import Any, Dict

from search_features.indexing import AnalyzerDefinition, MappingContributor

logger = logging.getLogger(__name__)

EDGE_NGRAM_ANALYZER_NAME = "edge_ngram_analyzer"

EDGE_NGRAM_ANALYZER = AnalyzerDefinition(
    tokenizer="standard",
    filter=("lowercase", "edge_ngram"),
)

# Indexed as prefixes, searched as whole words
SUGGEST_FIELD = {
    "type": "text",
    "analyzer": EDGE_NGRAM_ANALYZER_NAME,
    "search_analyzer": "standard",
}


def augment(mapping: Dict[str, Any], document_type: str = "post") -> Dict[str, Any]:
    """
    Add the autosuggest analyzer and suggest fields to an index mapping.

    Expects ``settings.analysis.analyzer`` and
    ``mappings.<document_type>.properties.post_title`` to exist and lets a
    KeyError escape otherwise. An existing analyzer with the same name is
    replaced, not merged.

    Args:
        mapping: Index mapping with ``settings`` and ``mappings`` sections
        document_type: Document type whose properties receive the fields

    Returns:
        A new mapping; the argument is not modified
    """
    mapping = copy.deepcopy(mapping)

    analyzers = mapping["settings"]["analysis"]["analyzer"]
    properties = mapping["mappings"][document_type]["properties"]

    previous = analyzers.get(EDGE_NGRAM_ANALYZER_NAME)
    if previous is not None and previous != EDGE_NGRAM_ANALYZER.as_dict():
        logger.warning(f"Replacing existing analyzer '{EDGE_NGRAM_ANALYZER_NAME}': {previous}")
    analyzers[EDGE_NGRAM_ANALYZER_NAME] = EDGE_NGRAM_ANALYZER.as_dict()

    properties["post_title"].setdefault("fields", {})["suggest"] = dict(SUGGEST_FIELD)
    properties["term_suggest"] = dict(SUGGEST_FIELD)

    return mapping


class AutosuggestMappingContributor(MappingContributor):
    def __init__(self, document_type: str = "post"):
        self.document_type = document_type

    def augment(self, mapping: Dict[str, Any]) -> Dict[str, Any]:
        return augment(mapping, self.document_type)
