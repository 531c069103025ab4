import logging

from fastapi import APIRouter, HTTPException, Query
from search_features.dependencies import IndexingPipelineDep, OpenSearchClientDep
from search_features.schemas.indexing import DocumentSyncRequest, DocumentSyncResponse, IndexSetupResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/index", tags=["index"])


@router.get("/mapping")
def get_computed_mapping(opensearch_client: OpenSearchClientDep, pipeline: IndexingPipelineDep) -> dict:
    """The mapping the index would be created with, given the active features."""
    return opensearch_client.build_mapping(pipeline)


@router.post("/setup", response_model=IndexSetupResponse)
def setup_index(
    opensearch_client: OpenSearchClientDep,
    pipeline: IndexingPipelineDep,
    force: bool = Query(False, description="Delete and recreate an existing index"),
) -> IndexSetupResponse:
    mapping = opensearch_client.build_mapping(pipeline)
    created = opensearch_client.create_index(mapping, force=force)
    return IndexSetupResponse(index_name=opensearch_client.index_name, created=created, mapping=mapping)


@router.post("/documents/{document_id}", response_model=DocumentSyncResponse)
def sync_document(
    document_id: str,
    request: DocumentSyncRequest,
    opensearch_client: OpenSearchClientDep,
    pipeline: IndexingPipelineDep,
) -> DocumentSyncResponse:
    """Enrich one document's sync payload and index it."""
    fields = pipeline.prepare_document(request.fields, document_id)
    if not opensearch_client.index_document(document_id, fields):
        raise HTTPException(status_code=502, detail=f"Could not index document {document_id}")
    return DocumentSyncResponse(document_id=document_id, indexed=True, fields=fields)
