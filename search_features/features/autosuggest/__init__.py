from .assets import AutosuggestAssets, enqueue_assets
from .config import FeatureConfig, SelectionAction, resolve, sanitize_host
from .feature import AUTOSUGGEST_FEATURE
from .mapping import AutosuggestMappingContributor, augment
from .sync import TermSuggestEnricher, enrich

__all__ = [
    "AUTOSUGGEST_FEATURE",
    "AutosuggestAssets",
    "AutosuggestMappingContributor",
    "FeatureConfig",
    "SelectionAction",
    "TermSuggestEnricher",
    "augment",
    "enqueue_assets",
    "enrich",
    "resolve",
    "sanitize_host",
]
