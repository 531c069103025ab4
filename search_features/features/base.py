from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from search_features.config import Settings
from search_features.indexing import IndexingPipeline

# Requirement status codes
STATUS_OK = 0
STATUS_USABLE = 1  # works, but the admin should read the messages
STATUS_UNAVAILABLE = 2


@dataclass
class FeatureRequirementsStatus:
    code: int = STATUS_OK
    messages: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class SettingsField:
    """One input of a feature's settings panel."""

    name: str
    label: str
    value: Any = ""
    type: str = "text"
    description: str = ""


@dataclass
class FeatureContext:
    """What a feature's setup callback gets to work with."""

    pipeline: IndexingPipeline
    config: Any
    settings: Optional[Settings] = None


def merge_settings(stored: Optional[Dict[str, Any]], defaults: Dict[str, Any]) -> Dict[str, Any]:
    """Overlay stored settings on defaults, key by key."""
    return {**defaults, **(stored or {})}


def _no_requirements(config: Any) -> FeatureRequirementsStatus:
    return FeatureRequirementsStatus()


def _no_settings_form(config: Any) -> List[SettingsField]:
    return []


def _no_defaults(settings: Settings) -> Dict[str, Any]:
    return {}


def _accept_settings(values: Dict[str, Any]) -> Dict[str, Any]:
    return dict(values)


@dataclass(frozen=True)
class FeatureDescriptor:
    """
    Everything the registry needs to know about a feature.

    Attributes:
        slug: Unique identifier, also the key settings are stored under
        title: Human readable name
        setup: Called with a FeatureContext when the feature is active
        settings_form: Builds the settings panel fields from resolved config
        requirements_status: Classifies whether the feature can run as configured
        default_settings: Builds default settings from application settings
        resolve_config: Turns (stored, defaults) into the feature's config object
        sanitize_settings: Validates and normalises settings posted from the panel
        requires_install_reindex: Whether turning the feature on needs a reindex
    """

    slug: str
    title: str
    setup: Callable[[FeatureContext], None]
    summary: str = ""
    long_description: str = ""
    settings_form: Callable[[Any], List[SettingsField]] = _no_settings_form
    requirements_status: Callable[[Any], FeatureRequirementsStatus] = _no_requirements
    default_settings: Callable[[Settings], Dict[str, Any]] = _no_defaults
    resolve_config: Callable[[Optional[Dict[str, Any]], Dict[str, Any]], Any] = merge_settings
    sanitize_settings: Callable[[Dict[str, Any]], Dict[str, Any]] = _accept_settings
    requires_install_reindex: bool = False
