from fastapi import APIRouter
from search_features.dependencies import (
    ActiveSlugsDep,
    FeatureRegistryDep,
    FeatureSettingsRepositoryDep,
    OpenSearchClientDep,
    SettingsDep,
)
from search_features.schemas.status_report import StatusReportResponse
from search_features.services.status_report import build_status_report, render_plain_text

router = APIRouter(tags=["status"])


@router.get("/status-report", response_model=StatusReportResponse)
def get_status_report(
    registry: FeatureRegistryDep,
    repository: FeatureSettingsRepositoryDep,
    active_slugs: ActiveSlugsDep,
    settings: SettingsDep,
    opensearch_client: OpenSearchClientDep,
) -> StatusReportResponse:
    reports = build_status_report(
        registry=registry,
        active_slugs=active_slugs,
        stored_settings={slug: repository.get_settings(slug) for slug in registry.slugs()},
        settings=settings,
        index_name=opensearch_client.index_name,
        index_stats=opensearch_client.get_index_stats(),
        cluster_healthy=opensearch_client.health_check(),
    )
    return StatusReportResponse(reports=reports, text=render_plain_text(reports))
