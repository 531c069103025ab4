import logging
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Optional, Tuple

from opensearchpy import OpenSearch
from opensearchpy.exceptions import NotFoundError, RequestError
from search_features.config import Settings, get_settings
from search_features.features.autosuggest.config import FeatureConfig
from search_features.indexing import IndexingPipeline

from .index_config import base_posts_mapping, get_index_name
from .query_builder import SuggestQueryBuilder

logger = logging.getLogger(__name__)


class OpenSearchClient:
    """
    Client for OpenSearch operations including index management, document
    sync and suggestion search.
    """

    def __init__(
        self,
        host: str = "http://localhost:9200",
        settings: Optional[Settings] = None,
        client: Optional[OpenSearch] = None,
    ):
        """Initialize OpenSearch client."""
        self.host = host
        self.settings = settings or get_settings()

        # Create the low-level client
        self.client = client or OpenSearch(
            hosts=[host],
            http_compress=True,
            use_ssl=host.startswith("https://"),
            verify_certs=False,
            ssl_assert_hostname=False,
            ssl_show_warn=False,
            timeout=self.settings.opensearch.timeout_seconds,
        )

        self.index_name = get_index_name(self.settings.opensearch)
        self.document_type = self.settings.opensearch.document_type
        logger.info(f"OpenSearch client initialized with host: {host}")

    # ============================================================
    # INDEX MANAGEMENT
    # ============================================================

    def build_mapping(self, pipeline: IndexingPipeline) -> Dict[str, Any]:
        """Base posts mapping with every active feature's contributions."""
        base = base_posts_mapping(
            document_type=self.document_type,
            number_of_shards=self.settings.opensearch.number_of_shards,
            number_of_replicas=self.settings.opensearch.number_of_replicas,
        )
        return pipeline.compute_mapping(base)

    def create_index(self, mapping: Dict[str, Any], force: bool = False) -> bool:
        """
        Create the posts index from a computed mapping.

        The mapping is keyed by document type; only that type's properties
        are sent, the cluster itself is typeless.

        Args:
            mapping: Mapping with ``settings`` and ``mappings.<document_type>``
            force: If True, delete existing index before creating

        Returns:
            True if index was created, False if it already exists
        """
        try:
            # Check if index exists
            if self.client.indices.exists(index=self.index_name):
                if force:
                    logger.info(f"Deleting existing index: {self.index_name}")
                    self.client.indices.delete(index=self.index_name)
                else:
                    logger.info(f"Index {self.index_name} already exists")
                    return False

            body = {
                "settings": mapping["settings"],
                "mappings": mapping["mappings"][self.document_type],
            }
            response = self.client.indices.create(index=self.index_name, body=body)

            if response.get("acknowledged"):
                logger.info(f"Successfully created index: {self.index_name}")
                return True
            else:
                logger.error(f"Failed to create index: {response}")
                return False

        except RequestError as e:
            logger.error(f"Error creating index: {e}")
            return False

    def setup_index(self, pipeline: IndexingPipeline, force: bool = False) -> bool:
        """Compute the mapping through the pipeline and create the index."""
        return self.create_index(self.build_mapping(pipeline), force=force)

    # ============================================================
    # DOCUMENT SYNC
    # ============================================================

    def index_document(self, document_id: Any, fields: Dict[str, Any]) -> bool:
        """
        Index a single document's sync payload.

        Args:
            document_id: Post ID, also used as the document ID
            fields: Outgoing payload, already enriched

        Returns:
            True if successful, False otherwise
        """
        try:
            body = dict(fields)
            if "post_modified_gmt" not in body:
                body["post_modified_gmt"] = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")

            response = self.client.index(
                index=self.index_name,
                id=str(document_id),
                body=body,
                refresh=True,  # Make immediately searchable
            )

            if response.get("result") in ["created", "updated"]:
                logger.debug(f"Indexed document: {document_id}")
                return True
            else:
                logger.error(f"Failed to index document: {response}")
                return False

        except Exception as e:
            logger.error(f"Error indexing document {document_id}: {e}")
            return False

    def sync_document(self, pipeline: IndexingPipeline, document_id: Any, fields: Dict[str, Any]) -> bool:
        """Run a document through the sync enrichers and index it."""
        return self.index_document(document_id, pipeline.prepare_document(fields, document_id))

    def bulk_sync_documents(
        self,
        pipeline: IndexingPipeline,
        documents: Iterable[Tuple[Any, Dict[str, Any]]],
    ) -> Dict[str, int]:
        """Sync multiple (document_id, fields) pairs."""
        results = {"success": 0, "failed": 0}

        for document_id, fields in documents:
            if self.sync_document(pipeline, document_id, fields):
                results["success"] += 1
            else:
                results["failed"] += 1

        logger.info(f"Bulk sync: {results['success']} success, {results['failed']} failed")
        return results

    # ============================================================
    # SUGGESTIONS
    # ============================================================

    def search_suggestions(self, query: str, config: FeatureConfig, size: int = 5) -> Dict[str, Any]:
        """
        Search the suggest fields the way the autosuggest widget does.

        Args:
            query: Text typed so far
            config: Resolved autosuggest config (fields and post type filter)
            size: Number of suggestions to return

        Returns:
            Search results with hits and metadata
        """
        try:
            search_body = SuggestQueryBuilder(
                query=query,
                size=size,
                search_fields=list(config.search_fields),
                post_type=config.post_type_filter,
            ).build()

            response = self.client.search(index=self.index_name, body=search_body)

            results = {
                "total": response["hits"]["total"]["value"],
                "hits": [],
            }

            for hit in response["hits"]["hits"]:
                suggestion = hit["_source"]
                suggestion["score"] = hit["_score"]
                results["hits"].append(suggestion)

            logger.info(f"Suggestions for '{query}' returned {results['total']} results")
            return results

        except NotFoundError:
            logger.error(f"Index {self.index_name} not found")
            return {"total": 0, "hits": [], "error": "Index not found"}
        except Exception as e:
            logger.error(f"Suggestion search error: {e}")
            return {"total": 0, "hits": [], "error": str(e)}

    # ============================================================
    # HEALTH & STATS
    # ============================================================

    def health_check(self) -> bool:
        """Check if OpenSearch is healthy and accessible."""
        try:
            health = self.client.cluster.health()
            return health["status"] in ["green", "yellow"]
        except Exception as e:
            logger.error(f"Health check failed: {e}")
            return False

    def get_index_stats(self) -> Dict[str, Any]:
        """Get statistics about the index."""
        try:
            stats = self.client.indices.stats(index=self.index_name)
            count = self.client.count(index=self.index_name)

            return {
                "index_name": self.index_name,
                "document_count": count["count"],
                "size_in_bytes": stats["indices"][self.index_name]["total"]["store"]["size_in_bytes"],
                "health": self.client.cluster.health(index=self.index_name)["status"],
            }
        except Exception as e:
            logger.error(f"Error getting index stats: {e}")
            return {"error": str(e)}
