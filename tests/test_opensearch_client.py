from opensearchpy.exceptions import NotFoundError

from search_features.features.autosuggest import AutosuggestMappingContributor, TermSuggestEnricher, resolve
from search_features.indexing import IndexingPipeline
from search_features.services.opensearch.client import OpenSearchClient

from .conftest import FakeOpenSearch


def _autosuggest_pipeline():
    pipeline = IndexingPipeline()
    pipeline.add_mapping_contributor(AutosuggestMappingContributor())
    pipeline.add_sync_enricher(TermSuggestEnricher())
    return pipeline


def test_setup_index_sends_typeless_mapping(opensearch_client, fake_opensearch):
    assert opensearch_client.setup_index(_autosuggest_pipeline()) is True

    index, body = fake_opensearch.indices.created[0]
    assert index == "wp-posts"
    assert "edge_ngram_analyzer" in body["settings"]["analysis"]["analyzer"]
    assert body["mappings"]["properties"]["term_suggest"]["analyzer"] == "edge_ngram_analyzer"
    assert "post" not in body["mappings"]


def test_existing_index_is_kept_without_force(settings):
    fake = FakeOpenSearch(exists=True)
    client = OpenSearchClient(settings=settings, client=fake)

    assert client.setup_index(IndexingPipeline()) is False
    assert fake.indices.created == []


def test_force_recreates_index(settings):
    fake = FakeOpenSearch(exists=True)
    client = OpenSearchClient(settings=settings, client=fake)

    assert client.setup_index(IndexingPipeline(), force=True) is True
    assert fake.indices.deleted == ["wp-posts"]
    assert len(fake.indices.created) == 1


def test_sync_document_enriches_payload(opensearch_client, fake_opensearch):
    fields = {"post_id": 12, "post_title": "Hello", "terms": {"category": [{"name": "News"}]}}

    assert opensearch_client.sync_document(_autosuggest_pipeline(), 12, fields) is True

    index, doc_id, body = fake_opensearch.indexed[0]
    assert (index, doc_id) == ("wp-posts", "12")
    assert body["term_suggest"] == ["News"]
    assert "post_modified_gmt" in body
    assert "term_suggest" not in fields


def test_bulk_sync_counts_results(opensearch_client):
    results = opensearch_client.bulk_sync_documents(
        _autosuggest_pipeline(),
        [(1, {"post_title": "One"}), (2, {"post_title": "Two"})],
    )
    assert results == {"success": 2, "failed": 0}


def test_index_document_failure_returns_false(opensearch_client, fake_opensearch):
    def broken_index(**kwargs):
        raise ConnectionError("cluster down")

    fake_opensearch.index = broken_index
    assert opensearch_client.index_document(3, {"post_title": "Three"}) is False


def test_search_suggestions_formats_hits(settings):
    fake = FakeOpenSearch(search_response={
        "hits": {
            "total": {"value": 1},
            "hits": [{"_score": 2.5, "_source": {"post_id": 5, "post_title": "Hello world"}}],
        }
    })
    client = OpenSearchClient(settings=settings, client=fake)
    config = resolve({"post_type_filter": "post"}, {"host": "https://suggest.example.com"})

    results = client.search_suggestions("hel", config, size=3)

    assert results == {"total": 1, "hits": [{"post_id": 5, "post_title": "Hello world", "score": 2.5}]}
    _, body = fake.searches[0]
    assert body["size"] == 3
    assert {"terms": {"post_type": ["post"]}} in body["query"]["bool"]["filter"]


def test_search_suggestions_missing_index(opensearch_client, fake_opensearch):
    def missing(**kwargs):
        raise NotFoundError(404, "index_not_found_exception", {})

    fake_opensearch.search = missing
    results = opensearch_client.search_suggestions("hel", resolve({}, {"host": "http://x.example"}))
    assert results == {"total": 0, "hits": [], "error": "Index not found"}


def test_health_check(settings):
    assert OpenSearchClient(settings=settings, client=FakeOpenSearch()).health_check() is True
    assert OpenSearchClient(settings=settings, client=FakeOpenSearch(cluster_status="red")).health_check() is False
    assert OpenSearchClient(settings=settings, client=FakeOpenSearch(cluster_error="down")).health_check() is False


def test_index_stats(opensearch_client):
    stats = opensearch_client.get_index_stats()
    assert stats == {"index_name": "wp-posts", "document_count": 0, "size_in_bytes": 2048, "health": "green"}
