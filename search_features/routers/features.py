import logging
from dataclasses import asdict
from typing import List

from fastapi import APIRouter, HTTPException
from search_features.dependencies import (
    ActiveSlugsDep,
    FeatureRegistryDep,
    FeatureSettingsRepositoryDep,
    SettingsDep,
)
from search_features.exceptions import FeatureNotFound, FeatureSettingsNotSaved, InvalidFeatureSettings
from search_features.features.base import FeatureDescriptor
from search_features.schemas.features import (
    FeatureDetail,
    FeatureSettingsResponse,
    FeatureSettingsUpdate,
    FeatureSummary,
    RequirementsStatusOut,
    SettingsFieldOut,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/features", tags=["features"])


def _get_feature(registry, slug: str) -> FeatureDescriptor:
    try:
        return registry.get(slug)
    except FeatureNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("", response_model=List[FeatureSummary])
def list_features(
    registry: FeatureRegistryDep,
    repository: FeatureSettingsRepositoryDep,
    active_slugs: ActiveSlugsDep,
    settings: SettingsDep,
) -> List[FeatureSummary]:
    """Every registered feature with its state and requirement status."""
    summaries = []
    for feature in registry:
        config = registry.resolve_config(feature.slug, repository.get_settings(feature.slug), settings)
        status = feature.requirements_status(config)
        summaries.append(
            FeatureSummary(
                slug=feature.slug,
                title=feature.title,
                active=feature.slug in active_slugs,
                summary=feature.summary,
                requires_install_reindex=feature.requires_install_reindex,
                requirements_status=RequirementsStatusOut(code=status.code, messages=status.messages),
            )
        )
    return summaries


@router.get("/{slug}", response_model=FeatureDetail)
def get_feature(
    slug: str,
    registry: FeatureRegistryDep,
    repository: FeatureSettingsRepositoryDep,
    active_slugs: ActiveSlugsDep,
    settings: SettingsDep,
) -> FeatureDetail:
    """A feature's resolved settings and the fields of its settings panel."""
    feature = _get_feature(registry, slug)
    config = registry.resolve_config(slug, repository.get_settings(slug), settings)
    status = feature.requirements_status(config)
    resolved = config.model_dump(mode="json") if hasattr(config, "model_dump") else dict(config)

    return FeatureDetail(
        slug=feature.slug,
        title=feature.title,
        active=slug in active_slugs,
        summary=feature.summary,
        long_description=feature.long_description,
        requires_install_reindex=feature.requires_install_reindex,
        requirements_status=RequirementsStatusOut(code=status.code, messages=status.messages),
        settings=resolved,
        settings_form=[SettingsFieldOut(**asdict(field)) for field in feature.settings_form(config)],
    )


@router.put("/{slug}/settings", response_model=FeatureSettingsResponse)
def update_feature_settings(
    slug: str,
    update: FeatureSettingsUpdate,
    registry: FeatureRegistryDep,
    repository: FeatureSettingsRepositoryDep,
    active_slugs: ActiveSlugsDep,
) -> FeatureSettingsResponse:
    """Save what the settings panel posted back, and optionally toggle the feature."""
    feature = _get_feature(registry, slug)

    # posted settings replace the stored ones; leaving them out keeps them
    cleaned = None
    if update.settings is not None:
        try:
            cleaned = feature.sanitize_settings(update.settings)
        except InvalidFeatureSettings as e:
            raise HTTPException(status_code=422, detail=str(e))

    was_active = slug in active_slugs
    # a feature saved for the first time keeps its default on/off state
    active = update.active if update.active is not None else was_active

    try:
        record = repository.save(slug, active=active, settings=cleaned)
    except FeatureSettingsNotSaved as e:
        logger.error(f"Saving settings for {slug} failed: {e}")
        raise HTTPException(status_code=500, detail="Could not save feature settings")

    reindex_required = feature.requires_install_reindex and record.active and not was_active
    if reindex_required:
        logger.info(f"Feature '{slug}' activated, index must be rebuilt")

    return FeatureSettingsResponse(
        slug=slug,
        active=record.active,
        settings=dict(record.settings or {}),
        reindex_required=reindex_required,
    )
