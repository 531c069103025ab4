from typing import Any, Dict, Optional

from search_features.config import OpenSearchSettings

POSTS_INDEX = "wp-posts"
DOCUMENT_TYPE = "post"

DATE_FORMAT = "yyyy-MM-dd HH:mm:ss"


def base_posts_mapping(
    document_type: str = DOCUMENT_TYPE,
    number_of_shards: int = 1,
    number_of_replicas: int = 0,
) -> Dict[str, Any]:
    """
    Index mapping configuration for synced posts, before any feature
    contributes to it. Returns a fresh dict on every call.
    """
    return {
        "settings": {
            "number_of_shards": number_of_shards,
            "number_of_replicas": number_of_replicas,
            "analysis": {
                "analyzer": {
                    # Used for every text field without an explicit analyzer
                    "default": {
                        "type": "custom",
                        "tokenizer": "standard",
                        "filter": ["lowercase", "stop", "ewp_snowball"],
                    },
                    "shingle_analyzer": {
                        "type": "custom",
                        "tokenizer": "standard",
                        "filter": ["lowercase", "shingle_filter"],
                    },
                },
                "filter": {
                    "ewp_snowball": {"type": "snowball", "language": "english"},
                    # Prefixes of 3 to 10 characters for as-you-type matching
                    "edge_ngram": {"type": "edge_ngram", "min_gram": 3, "max_gram": 10},
                    "shingle_filter": {"type": "shingle", "min_shingle_size": 2, "max_shingle_size": 5},
                },
            },
        },
        "mappings": {
            document_type: {
                "date_detection": False,
                "properties": {
                    "post_id": {"type": "long"},
                    "ID": {"type": "long"},
                    "post_author": {
                        "type": "object",
                        "properties": {
                            "display_name": {"type": "text", "fields": {"raw": {"type": "keyword"}}},
                            "login": {"type": "keyword"},
                            "id": {"type": "long"},
                        },
                    },
                    # Full-text searchable with keyword subfield for sorting
                    "post_title": {
                        "type": "text",
                        "fields": {
                            "raw": {"type": "keyword", "ignore_above": 10922},
                        },
                    },
                    "post_excerpt": {"type": "text"},
                    "post_content": {"type": "text"},
                    "post_name": {"type": "text", "fields": {"raw": {"type": "keyword"}}},
                    "post_status": {"type": "keyword"},
                    "post_type": {"type": "keyword"},
                    "post_mime_type": {"type": "keyword"},
                    "post_parent": {"type": "long"},
                    "permalink": {"type": "keyword"},
                    "guid": {"type": "keyword"},
                    "menu_order": {"type": "long"},
                    "comment_count": {"type": "long"},
                    "comment_status": {"type": "keyword"},
                    "ping_status": {"type": "keyword"},
                    # taxonomy name -> [{term_id, slug, name, parent}]
                    "terms": {"type": "object"},
                    "meta": {"type": "object", "enabled": False},
                    "post_date": {"type": "date", "format": DATE_FORMAT},
                    "post_date_gmt": {"type": "date", "format": DATE_FORMAT},
                    "post_modified": {"type": "date", "format": DATE_FORMAT},
                    "post_modified_gmt": {"type": "date", "format": DATE_FORMAT},
                },
            }
        },
    }


def get_index_name(settings: OpenSearchSettings, site_id: Optional[int] = None) -> str:
    """Index holding a site's posts; sites other than the main one get a suffix."""
    index_name = settings.index_name or POSTS_INDEX
    site_id = site_id if site_id is not None else settings.site_id
    if site_id and site_id > 1:
        return f"{index_name}-{site_id}"
    return index_name
