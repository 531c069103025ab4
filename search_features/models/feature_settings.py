from datetime import datetime, timezone

from sqlalchemy import JSON, Boolean, Column, DateTime, String
from search_features.db.interfaces.postgresql import Base


class FeatureSettings(Base):
    __tablename__ = "feature_settings"

    slug = Column(String, primary_key=True)
    active = Column(Boolean, default=False, nullable=False)
    settings = Column(JSON, nullable=False, default=dict)  # only keys the admin saved

    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime, default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))
