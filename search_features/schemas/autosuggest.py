from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field
from search_features.features.autosuggest.assets import AutosuggestAssets


class AssetsResponse(BaseModel):
    enqueued: bool
    assets: Optional[AutosuggestAssets] = None


class SuggestResponse(BaseModel):
    query: str
    total: int
    hits: List[Dict[str, Any]] = Field(default_factory=list)
    error: Optional[str] = None
