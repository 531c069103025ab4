import logging
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional

from search_features.config import Settings
from search_features.exceptions import FeatureAlreadyRegistered, FeatureNotFound
from search_features.indexing import IndexingPipeline

from .base import FeatureContext, FeatureDescriptor

logger = logging.getLogger(__name__)


class FeatureRegistry:
    """
    Explicit, ordered collection of feature descriptors.

    Built once at startup and handed to whatever needs to look features up
    or activate them; nothing registers itself as an import side effect.
    """

    def __init__(self, features: Iterable[FeatureDescriptor] = ()):
        self._features: Dict[str, FeatureDescriptor] = {}
        for feature in features:
            self.register(feature)

    def register(self, feature: FeatureDescriptor) -> None:
        if feature.slug in self._features:
            raise FeatureAlreadyRegistered(f"Feature '{feature.slug}' is already registered")
        self._features[feature.slug] = feature
        logger.debug(f"Registered feature: {feature.slug}")

    def get(self, slug: str) -> FeatureDescriptor:
        try:
            return self._features[slug]
        except KeyError:
            raise FeatureNotFound(f"Feature '{slug}' is not registered") from None

    def __contains__(self, slug: object) -> bool:
        return slug in self._features

    def __iter__(self) -> Iterator[FeatureDescriptor]:
        return iter(self._features.values())

    def __len__(self) -> int:
        return len(self._features)

    def slugs(self) -> List[str]:
        return list(self._features)

    def resolve_config(self, slug: str, stored: Optional[Dict[str, Any]], settings: Settings) -> Any:
        """Resolve a feature's config from its stored settings and its defaults."""
        feature = self.get(slug)
        return feature.resolve_config(stored, feature.default_settings(settings))

    def activate(
        self,
        pipeline: IndexingPipeline,
        active_slugs: Iterable[str],
        config_for: Callable[[FeatureDescriptor], Any],
        settings: Optional[Settings] = None,
    ) -> List[str]:
        """
        Run the setup callback of every active feature, in registration order.

        Args:
            pipeline: Pipeline the features register their capabilities on
            active_slugs: Slugs switched on for this request
            config_for: Resolves the config handed to a feature's setup
            settings: Application settings passed through to the features

        Returns:
            Slugs of the features that were set up
        """
        wanted = set(active_slugs)
        for slug in sorted(wanted - set(self._features)):
            logger.warning(f"Skipping unknown active feature: {slug}")

        activated = []
        for feature in self:
            if feature.slug not in wanted:
                continue
            feature.setup(FeatureContext(pipeline=pipeline, config=config_for(feature), settings=settings))
            activated.append(feature.slug)

        logger.debug(f"Activated features: {activated}")
        return activated


def build_feature_registry() -> FeatureRegistry:
    """Assemble the registry of every feature this service ships."""
    from .autosuggest import AUTOSUGGEST_FEATURE

    return FeatureRegistry([AUTOSUGGEST_FEATURE])
