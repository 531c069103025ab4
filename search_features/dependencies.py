from typing import Annotated, Generator, List

from fastapi import Depends, Request
from sqlalchemy.orm import Session
from search_features.config import Settings
from search_features.db.interfaces.base import BaseDatabase
from search_features.features.autosuggest.assets import OptionFilter
from search_features.features.autosuggest.config import FeatureConfig
from search_features.features.registry import FeatureRegistry
from search_features.indexing import IndexingPipeline
from search_features.repositories.feature_settings import FeatureSettingsRepository
from search_features.services.opensearch.client import OpenSearchClient


def get_request_settings(request: Request) -> Settings:
    """Get settings from the request state."""
    return request.app.state.settings


def get_database(request: Request) -> BaseDatabase:
    """Get database from the request state."""
    return request.app.state.database


def get_db_session(database: Annotated[BaseDatabase, Depends(get_database)]) -> Generator[Session, None, None]:
    """Get database session dependency."""
    with database.get_session() as session:
        yield session


def get_feature_registry(request: Request) -> FeatureRegistry:
    """Get the feature registry assembled at startup."""
    return request.app.state.feature_registry


def get_feature_settings_repository(session: Annotated[Session, Depends(get_db_session)]) -> FeatureSettingsRepository:
    return FeatureSettingsRepository(session)


def get_opensearch_client(request: Request) -> OpenSearchClient:
    """Get OpenSearch client from app state."""
    return request.app.state.opensearch_client


def get_option_filters(request: Request) -> List[OptionFilter]:
    """Callables that may rewrite the autosuggest widget options."""
    return getattr(request.app.state, "autosuggest_option_filters", [])


def get_active_slugs(
    repository: Annotated[FeatureSettingsRepository, Depends(get_feature_settings_repository)],
    settings: Annotated[Settings, Depends(get_request_settings)],
) -> List[str]:
    return repository.active_slugs(settings.default_active_features)


def get_indexing_pipeline(
    registry: Annotated[FeatureRegistry, Depends(get_feature_registry)],
    repository: Annotated[FeatureSettingsRepository, Depends(get_feature_settings_repository)],
    active_slugs: Annotated[List[str], Depends(get_active_slugs)],
    settings: Annotated[Settings, Depends(get_request_settings)],
) -> IndexingPipeline:
    """Pipeline with the capabilities of every feature active for this request."""
    pipeline = IndexingPipeline()
    registry.activate(
        pipeline,
        active_slugs,
        lambda feature: registry.resolve_config(feature.slug, repository.get_settings(feature.slug), settings),
        settings=settings,
    )
    return pipeline


def get_autosuggest_config(
    registry: Annotated[FeatureRegistry, Depends(get_feature_registry)],
    repository: Annotated[FeatureSettingsRepository, Depends(get_feature_settings_repository)],
    settings: Annotated[Settings, Depends(get_request_settings)],
) -> FeatureConfig:
    return registry.resolve_config("autosuggest", repository.get_settings("autosuggest"), settings)


# Dependency type aliases for better type hints
SettingsDep = Annotated[Settings, Depends(get_request_settings)]
DatabaseDep = Annotated[BaseDatabase, Depends(get_database)]
SessionDep = Annotated[Session, Depends(get_db_session)]
FeatureRegistryDep = Annotated[FeatureRegistry, Depends(get_feature_registry)]
FeatureSettingsRepositoryDep = Annotated[FeatureSettingsRepository, Depends(get_feature_settings_repository)]
OpenSearchClientDep = Annotated[OpenSearchClient, Depends(get_opensearch_client)]
ActiveSlugsDep = Annotated[List[str], Depends(get_active_slugs)]
IndexingPipelineDep = Annotated[IndexingPipeline, Depends(get_indexing_pipeline)]
AutosuggestConfigDep = Annotated[FeatureConfig, Depends(get_autosuggest_config)]
OptionFiltersDep = Annotated[List[OptionFilter], Depends(get_option_filters)]
