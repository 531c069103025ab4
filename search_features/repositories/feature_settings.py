import logging
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from search_features.db.interfaces.base import BaseRepository
from search_features.exceptions import FeatureSettingsNotFound, FeatureSettingsNotSaved
from search_features.models.feature_settings import FeatureSettings

logger = logging.getLogger(__name__)


class FeatureSettingsRepository(BaseRepository):
    """Persists each feature's active flag and the settings an admin saved."""

    def create(self, key: str, data: Dict[str, Any]) -> FeatureSettings:
        record = FeatureSettings(
            slug=key,
            active=bool(data.get("active", False)),
            settings=dict(data.get("settings") or {}),
        )
        try:
            self.session.add(record)
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise FeatureSettingsNotSaved(f"Could not save settings for '{key}': {e}") from e
        self.session.refresh(record)
        return record

    def get(self, key: str) -> Optional[FeatureSettings]:
        return self.session.get(FeatureSettings, key)

    def update(self, key: str, data: Dict[str, Any]) -> Optional[FeatureSettings]:
        record = self.get(key)
        if record is None:
            return None

        if "active" in data and data["active"] is not None:
            record.active = bool(data["active"])
        if "settings" in data and data["settings"] is not None:
            # saved settings replace the stored ones; a new dict flags the JSON column dirty
            record.settings = dict(data["settings"])

        try:
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise FeatureSettingsNotSaved(f"Could not update settings for '{key}': {e}") from e
        self.session.refresh(record)
        return record

    def delete(self, key: str) -> bool:
        record = self.get(key)
        if record is None:
            return False
        self.session.delete(record)
        self.session.commit()
        return True

    def list(self, limit: int = 100, offset: int = 0) -> List[FeatureSettings]:
        stmt = select(FeatureSettings).order_by(FeatureSettings.slug).limit(limit).offset(offset)
        return list(self.session.scalars(stmt))

    def save(
        self,
        key: str,
        active: Optional[bool] = None,
        settings: Optional[Dict[str, Any]] = None,
    ) -> FeatureSettings:
        """Create or update a feature's record."""
        data = {"active": active, "settings": settings}
        record = self.update(key, data)
        if record is None:
            record = self.create(key, {"active": bool(active), "settings": settings or {}})
        logger.info(f"Saved settings for feature '{key}' (active={record.active})")
        return record

    def get_settings(self, key: str) -> Optional[Dict[str, Any]]:
        """Stored settings for a feature, or None if it was never saved."""
        record = self.get(key)
        if record is None:
            return None
        return dict(record.settings or {})

    def get_or_raise(self, key: str) -> FeatureSettings:
        record = self.get(key)
        if record is None:
            raise FeatureSettingsNotFound(f"No settings stored for '{key}'")
        return record

    def active_slugs(self, default_active: Iterable[str] = ()) -> List[str]:
        """
        Slugs switched on for this request.

        A stored record decides for its feature; features never saved fall
        back to ``default_active``.
        """
        stored = {record.slug: record.active for record in self.list(limit=1000)}
        slugs = [slug for slug, active in stored.items() if active]
        slugs.extend(slug for slug in default_active if slug not in stored)
        return slugs
