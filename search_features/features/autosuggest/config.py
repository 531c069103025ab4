import logging
import re
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import AnyHttpUrl, BaseModel, ConfigDict, Field, TypeAdapter, ValidationError
from search_features.config import Settings
from search_features.exceptions import InvalidFeatureSettings
from search_features.features.base import STATUS_USABLE, FeatureRequirementsStatus, merge_settings

logger = logging.getLogger(__name__)

# Hosts run by the managed service are locked down for public read access
TRUSTED_HOST_PATTERN = re.compile(r"elasticpress\.io", re.IGNORECASE)

SCHEME_PATTERN = re.compile(r"^[a-z][a-z0-9+.-]*://", re.IGNORECASE)

UX_NOTICE = (
    "This feature modifies the default user experience of users by showing a dropdown "
    "of suggestions as users type in search boxes."
)
SECURITY_ADVISORY = (
    "You aren't using ElasticPress.io (https://elasticpress.io) so we can't be sure your "
    "host is properly secured. An insecure or misconfigured autosuggest host poses a "
    "severe security risk to your website."
)

_url_adapter = TypeAdapter(AnyHttpUrl)


class SelectionAction(str, Enum):
    """What the widget does when a suggestion is picked."""

    SEARCH = "search"
    NAVIGATE = "navigate"


class FeatureConfig(BaseModel):
    """Autosuggest configuration for the current request."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    host: str = ""
    post_type_filter: str = "all"
    search_fields: List[str] = Field(default=["post_title.suggest", "term_suggest"])
    selection_action: SelectionAction = SelectionAction.NAVIGATE

    @property
    def is_active(self) -> bool:
        """No host means nothing to point the widget at."""
        return bool(self.host)

    @property
    def is_trusted_host(self) -> bool:
        return bool(TRUSTED_HOST_PATTERN.search(self.host))


def autosuggest_defaults(settings: Settings) -> Dict[str, Any]:
    """Default settings; the host comes from the configured search cluster."""
    return {
        "host": settings.opensearch.host,
        "post_type_filter": settings.autosuggest.post_type,
        "search_fields": list(settings.autosuggest.search_fields),
        "selection_action": settings.autosuggest.action,
    }


def resolve(stored: Optional[Dict[str, Any]], defaults: Dict[str, Any]) -> FeatureConfig:
    """
    Build the request's config by overlaying stored settings on defaults.

    Keys present in ``stored`` win even when empty, so a stored blank host
    switches the feature off instead of falling back to the default host.
    Stored values that no longer validate are ignored in favour of the
    defaults.
    """
    try:
        return FeatureConfig(**merge_settings(stored, defaults))
    except ValidationError as e:
        invalid = {error["loc"][0] for error in e.errors() if error["loc"]}
        logger.warning(f"Ignoring invalid stored autosuggest settings: {', '.join(sorted(map(str, invalid)))}")
        usable = {key: value for key, value in (stored or {}).items() if key not in invalid}
        return FeatureConfig(**merge_settings(usable, defaults))


def sanitize_host(value: Optional[str]) -> str:
    """Normalise a host submitted from the settings panel."""
    if value is not None and not isinstance(value, str):
        raise InvalidFeatureSettings(f"Invalid autosuggest host {value!r}: expected a string")
    host = (value or "").strip()
    if not host:
        return ""
    if not SCHEME_PATTERN.match(host):
        host = f"http://{host}"
    try:
        _url_adapter.validate_python(host)
    except ValidationError as e:
        raise InvalidFeatureSettings(f"Invalid autosuggest host '{value}': {e.errors()[0]['msg']}") from e
    return host


def requirements_status(config: FeatureConfig) -> FeatureRequirementsStatus:
    """
    Classify the configured host.

    This is a string test on the host name only; nothing is fetched.
    """
    status = FeatureRequirementsStatus(code=STATUS_USABLE, messages=[UX_NOTICE])

    if config.host and not config.is_trusted_host:
        status.messages.append(SECURITY_ADVISORY)

    return status


def sanitize_settings(values: Dict[str, Any]) -> Dict[str, Any]:
    """
    Validate settings posted from the settings panel.

    Unknown keys and values of the wrong type are rejected. Only keys that
    were posted are returned so that everything else keeps following the
    defaults.
    """
    allowed = set(FeatureConfig.model_fields)
    unknown = sorted(set(values) - allowed)
    if unknown:
        raise InvalidFeatureSettings(f"Unknown autosuggest settings: {', '.join(unknown)}")

    cleaned = dict(values)
    if "host" in cleaned:
        cleaned["host"] = sanitize_host(cleaned["host"])
    if "selection_action" in cleaned:
        try:
            cleaned["selection_action"] = SelectionAction(cleaned["selection_action"]).value
        except ValueError:
            raise InvalidFeatureSettings(
                f"Invalid selection action '{cleaned['selection_action']}', expected 'search' or 'navigate'"
            ) from None

    try:
        validated = FeatureConfig.model_validate(cleaned)
    except ValidationError as e:
        error = e.errors()[0]
        name = error["loc"][0] if error["loc"] else "settings"
        raise InvalidFeatureSettings(f"Invalid autosuggest setting '{name}': {error['msg']}") from e

    dumped = validated.model_dump(mode="json")
    return {key: dumped[key] for key in cleaned}
