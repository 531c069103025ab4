import logging
from typing import Any, Callable, Dict, List, Optional, Sequence

from pydantic import BaseModel, Field
from search_features.config import Settings

from .config import FeatureConfig

logger = logging.getLogger(__name__)

ASSET_HANDLE = "elasticpress-autosuggest"
OPTIONS_OBJECT_NAME = "epas"

OptionFilter = Callable[[Dict[str, Any]], Dict[str, Any]]


class ScriptAsset(BaseModel):
    handle: str
    src: str
    deps: List[str] = Field(default_factory=list)
    version: str
    in_footer: bool = True


class StyleAsset(BaseModel):
    handle: str
    src: str
    deps: List[str] = Field(default_factory=list)
    version: str


class AutosuggestAssets(BaseModel):
    """Everything a page needs to boot the autosuggest widget."""

    script: ScriptAsset
    style: StyleAsset
    object_name: str = OPTIONS_OBJECT_NAME
    options: Dict[str, Any]


def build_script_options(config: FeatureConfig, index_name: str) -> Dict[str, Any]:
    """
    Options handed to the front-end widget.

    index: the index name
    host: the search host, without trailing slash
    postType: which post types to use for suggestions
    searchFields: fields the widget queries
    action: what to do when a suggestion is selected ("search" or "navigate")
    """
    return {
        "index": index_name,
        "host": config.host.rstrip("/"),
        "postType": config.post_type_filter,
        "searchFields": list(config.search_fields),
        "action": config.selection_action.value,
    }


def enqueue_assets(
    config: FeatureConfig,
    index_name: str,
    settings: Settings,
    option_filters: Sequence[OptionFilter] = (),
) -> Optional[AutosuggestAssets]:
    """
    Describe the autosuggest script, style and options for the current page.

    Returns None when no host is configured, in which case nothing should be
    served to the page.
    """
    if not config.is_active:
        logger.debug("Autosuggest host is empty, not enqueueing assets")
        return None

    base_url = settings.autosuggest.assets_base_url.rstrip("/")
    if settings.autosuggest.script_debug:
        js_url = f"{base_url}/js/src/autosuggest.js"
        css_url = f"{base_url}/css/autosuggest.css"
    else:
        js_url = f"{base_url}/js/autosuggest.min.js"
        css_url = f"{base_url}/css/autosuggest.min.css"

    options = build_script_options(config, index_name)
    for option_filter in option_filters:
        options = option_filter(options)

    return AutosuggestAssets(
        script=ScriptAsset(handle=ASSET_HANDLE, src=js_url, deps=["jquery"], version=settings.app_version),
        style=StyleAsset(handle=ASSET_HANDLE, src=css_url, version=settings.app_version),
        options=options,
    )
