class RepositoryException(Exception):
    """Base exception for repository-related errors."""


class FeatureSettingsNotFound(RepositoryException):
    """Exception raised when no settings are stored for a feature."""


class FeatureSettingsNotSaved(RepositoryException):
    """Exception raised when feature settings could not be persisted."""


# Feature registry exceptions
class FeatureException(Exception):
    """Base exception for feature-related errors."""


class FeatureNotFound(FeatureException):
    """Exception raised when a feature slug is not registered."""


class FeatureAlreadyRegistered(FeatureException):
    """Exception raised when two features share a slug."""


class InvalidFeatureSettings(FeatureException):
    """Exception raised when submitted feature settings fail validation."""
