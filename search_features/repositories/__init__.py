from .feature_settings import FeatureSettingsRepository

__all__ = ["FeatureSettingsRepository"]
