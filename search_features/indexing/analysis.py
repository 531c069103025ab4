from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Set, Tuple

# Analyzers every cluster ships with; fields may reference these without
# declaring them under settings.analysis.analyzer.
BUILTIN_ANALYZERS = frozenset({
    "standard",
    "simple",
    "whitespace",
    "keyword",
    "stop",
    "pattern",
    "english",
    "fingerprint",
})


@dataclass(frozen=True)
class AnalyzerDefinition:
    """A named-by-its-owner text analysis chain: tokenizer followed by token filters."""

    tokenizer: str
    filter: Tuple[str, ...] = field(default_factory=tuple)
    type: str = "custom"

    def as_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "tokenizer": self.tokenizer,
            "filter": list(self.filter),
        }


def _walk_properties(properties: Dict[str, Any]) -> Iterator[Dict[str, Any]]:
    for definition in properties.values():
        yield definition
        # multi-fields (post_title.fields.suggest) and object fields
        yield from _walk_properties(definition.get("fields", {}))
        yield from _walk_properties(definition.get("properties", {}))


def referenced_analyzers(mapping: Dict[str, Any]) -> Set[str]:
    """Collect every analyzer name referenced by a field in any document type."""
    names: Set[str] = set()
    for document_type in mapping.get("mappings", {}).values():
        for definition in _walk_properties(document_type.get("properties", {})):
            for key in ("analyzer", "search_analyzer"):
                if key in definition:
                    names.add(definition[key])
    return names


def missing_analyzers(mapping: Dict[str, Any]) -> List[str]:
    """Analyzers referenced by fields but neither declared nor built in."""
    declared = set(
        mapping.get("settings", {}).get("analysis", {}).get("analyzer", {})
    )
    return sorted(referenced_analyzers(mapping) - declared - BUILTIN_ANALYZERS)
