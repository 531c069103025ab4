from .base import FeatureContext, FeatureDescriptor, FeatureRequirementsStatus, SettingsField
from .registry import FeatureRegistry, build_feature_registry

__all__ = [
    "FeatureContext",
    "FeatureDescriptor",
    "FeatureRegistry",
    "FeatureRequirementsStatus",
    "SettingsField",
    "build_feature_registry",
]
