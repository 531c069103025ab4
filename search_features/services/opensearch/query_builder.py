import logging
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_FIELDS = ["post_title.suggest", "term_suggest"]


class SuggestQueryBuilder:
    """
    Query builder for as-you-type suggestions.

    Builds OpenSearch queries with:
    - Multi-field match over the edge n-gram suggest fields
    - Published-only filtering
    - Optional post type filtering
    """

    def __init__(
        self,
        query: str,
        size: int = 5,
        search_fields: Optional[List[str]] = None,
        post_type: str = "all",
    ):
        """
        Initialize query builder.

        Args:
            query: Text typed so far
            size: Number of suggestions to return
            search_fields: Fields to match against
            post_type: "all", or a comma separated list of post types
        """
        self.query = query
        self.size = size
        self.search_fields = search_fields or DEFAULT_SEARCH_FIELDS
        self.post_types = self._parse_post_types(post_type)

    def build(self) -> Dict[str, Any]:
        """Build the complete OpenSearch query."""
        return {
            "query": self._build_query(),
            "size": self.size,
            "_source": self._build_source_fields(),
        }

    def _build_query(self) -> Dict[str, Any]:
        bool_query: Dict[str, Any] = {}

        if self.query.strip():
            bool_query["must"] = [self._build_text_query()]
        else:
            bool_query["must"] = [{"match_all": {}}]

        bool_query["filter"] = self._build_filters()

        return {"bool": bool_query}

    def _build_text_query(self) -> Dict[str, Any]:
        return {
            "multi_match": {
                "query": self.query,
                "fields": self.search_fields,
                "type": "best_fields",
                "operator": "and",  # every typed word must prefix-match
            }
        }

    def _build_filters(self) -> List[Dict[str, Any]]:
        """Build filter clauses (don't affect scoring)."""
        filters: List[Dict[str, Any]] = [{"term": {"post_status": "publish"}}]

        if self.post_types:
            filters.append({"terms": {"post_type": self.post_types}})

        return filters

    def _build_source_fields(self) -> List[str]:
        return ["post_id", "post_title", "post_type", "permalink"]

    @staticmethod
    def _parse_post_types(post_type: str) -> List[str]:
        if not post_type or post_type == "all":
            return []
        return [value.strip() for value in post_type.split(",") if value.strip()]


def build_suggest_query(
    query: str,
    size: int = 5,
    search_fields: Optional[List[str]] = None,
    post_type: str = "all",
) -> Dict[str, Any]:
    """Helper function to build a suggestion query."""
    builder = SuggestQueryBuilder(
        query=query,
        size=size,
        search_fields=search_fields,
        post_type=post_type,
    )
    return builder.build()
