from typing import Any, Dict

from pydantic import BaseModel, Field


class IndexSetupResponse(BaseModel):
    index_name: str
    created: bool
    mapping: Dict[str, Any]


class DocumentSyncRequest(BaseModel):
    fields: Dict[str, Any] = Field(default_factory=dict)


class DocumentSyncResponse(BaseModel):
    document_id: str
    indexed: bool
    fields: Dict[str, Any]
