import logging

from fastapi import APIRouter
from search_features.dependencies import OpenSearchClientDep, SettingsDep
from search_features.schemas.health import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/ping")
async def ping():
    return {"status": "ok", "message": "pong"}


@router.get("/health", response_model=HealthResponse)
def health_check(settings: SettingsDep, opensearch_client: OpenSearchClientDep) -> HealthResponse:
    """Service health, including whether the search cluster answers."""
    opensearch_healthy = opensearch_client.health_check()
    return HealthResponse(
        status="ok" if opensearch_healthy else "degraded",
        version=settings.app_version,
        environment=settings.environment,
        service_name=settings.service_name,
        services={"opensearch": "healthy" if opensearch_healthy else "unhealthy"},
    )
