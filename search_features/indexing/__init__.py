from .analysis import AnalyzerDefinition, missing_analyzers, referenced_analyzers
from .interfaces import MappingContributor, SyncEnricher
from .pipeline import IndexingPipeline

__all__ = [
    "AnalyzerDefinition",
    "IndexingPipeline",
    "MappingContributor",
    "SyncEnricher",
    "missing_analyzers",
    "referenced_analyzers",
]
