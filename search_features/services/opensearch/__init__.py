from .client import OpenSearchClient
from .factory import make_opensearch_client

__all__ = ["OpenSearchClient", "make_opensearch_client"]
