from .feature_settings import FeatureSettings

__all__ = ["FeatureSettings"]
