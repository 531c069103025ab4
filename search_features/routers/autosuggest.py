import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query
from search_features.dependencies import (
    ActiveSlugsDep,
    AutosuggestConfigDep,
    OpenSearchClientDep,
    OptionFiltersDep,
    SettingsDep,
)
from search_features.features.autosuggest.assets import enqueue_assets
from search_features.schemas.autosuggest import AssetsResponse, SuggestResponse
from search_features.services.opensearch.index_config import get_index_name

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/autosuggest", tags=["autosuggest"])


@router.get("/assets", response_model=AssetsResponse)
def get_assets(
    config: AutosuggestConfigDep,
    active_slugs: ActiveSlugsDep,
    settings: SettingsDep,
    option_filters: OptionFiltersDep,
    site_id: Optional[int] = Query(None, ge=1, description="Site whose index the widget queries"),
) -> AssetsResponse:
    """Script, style and widget options for a front-end page, if autosuggest should run."""
    if "autosuggest" not in active_slugs:
        return AssetsResponse(enqueued=False)

    index_name = get_index_name(settings.opensearch, site_id)
    assets = enqueue_assets(config, index_name, settings, option_filters)
    return AssetsResponse(enqueued=assets is not None, assets=assets)


@router.get("/suggest", response_model=SuggestResponse)
def suggest(
    config: AutosuggestConfigDep,
    active_slugs: ActiveSlugsDep,
    opensearch_client: OpenSearchClientDep,
    q: str = Query(..., min_length=1, description="Text typed so far"),
    size: int = Query(5, ge=1, le=20),
) -> SuggestResponse:
    """Suggestions for the typed text, matched against the suggest fields."""
    if "autosuggest" not in active_slugs:
        raise HTTPException(status_code=404, detail="Autosuggest is not active")

    results = opensearch_client.search_suggestions(q, config, size=size)
    return SuggestResponse(query=q, **results)
