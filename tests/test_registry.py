import pytest

from search_features.exceptions import FeatureAlreadyRegistered, FeatureNotFound
from search_features.features import FeatureDescriptor, FeatureRegistry, build_feature_registry
from search_features.features.autosuggest import AUTOSUGGEST_FEATURE, FeatureConfig
from search_features.indexing import IndexingPipeline


def _noop_feature(slug, calls=None):
    def setup(context):
        if calls is not None:
            calls.append((slug, context.config))

    return FeatureDescriptor(slug=slug, title=slug.title(), setup=setup)


def test_build_registry_contains_autosuggest():
    registry = build_feature_registry()
    assert registry.slugs() == ["autosuggest"]
    assert registry.get("autosuggest") is AUTOSUGGEST_FEATURE
    assert AUTOSUGGEST_FEATURE.requires_install_reindex is True


def test_duplicate_slug_is_rejected():
    registry = FeatureRegistry([_noop_feature("facets")])
    with pytest.raises(FeatureAlreadyRegistered):
        registry.register(_noop_feature("facets"))


def test_unknown_slug_raises():
    with pytest.raises(FeatureNotFound):
        FeatureRegistry().get("related_posts")


def test_activate_only_runs_active_features_in_order():
    calls = []
    registry = FeatureRegistry([_noop_feature("a", calls), _noop_feature("b", calls), _noop_feature("c", calls)])

    activated = registry.activate(IndexingPipeline(), ["c", "a", "gone"], lambda feature: feature.slug.upper())

    assert activated == ["a", "c"]
    assert calls == [("a", "A"), ("c", "C")]


def test_activating_autosuggest_registers_capabilities(settings):
    registry = build_feature_registry()
    pipeline = IndexingPipeline()

    registry.activate(
        pipeline,
        ["autosuggest"],
        lambda feature: registry.resolve_config(feature.slug, None, settings),
        settings=settings,
    )

    assert len(pipeline.mapping_contributors) == 1
    assert len(pipeline.sync_enrichers) == 1


def test_resolve_config_overlays_stored_settings(settings):
    registry = build_feature_registry()
    config = registry.resolve_config("autosuggest", {"post_type_filter": "post,page"}, settings)

    assert isinstance(config, FeatureConfig)
    assert config.host == "http://search.internal:9200"
    assert config.post_type_filter == "post,page"


def test_generic_feature_merges_plain_dicts(settings):
    feature = FeatureDescriptor(
        slug="facets",
        title="Facets",
        setup=lambda context: None,
        default_settings=lambda app_settings: {"match_type": "all", "size": 10},
    )
    registry = FeatureRegistry([feature])

    assert registry.resolve_config("facets", {"size": 5}, settings) == {"match_type": "all", "size": 5}
