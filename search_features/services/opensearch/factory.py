from functools import lru_cache

from search_features.config import get_settings

from .client import OpenSearchClient


@lru_cache(maxsize=1)
def make_opensearch_client() -> OpenSearchClient:
    """Cached client for the cluster named in the environment."""
    settings = get_settings()
    return OpenSearchClient(host=settings.opensearch.host, settings=settings)
