from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class RequirementsStatusOut(BaseModel):
    code: int
    messages: List[str] = Field(default_factory=list)


class SettingsFieldOut(BaseModel):
    name: str
    label: str
    value: Any = ""
    type: str = "text"
    description: str = ""


class FeatureSummary(BaseModel):
    slug: str
    title: str
    active: bool
    summary: str = ""
    requires_install_reindex: bool = False
    requirements_status: RequirementsStatusOut


class FeatureDetail(FeatureSummary):
    long_description: str = ""
    settings: Dict[str, Any] = Field(default_factory=dict)
    settings_form: List[SettingsFieldOut] = Field(default_factory=list)


class FeatureSettingsUpdate(BaseModel):
    """Body posted back from a feature's settings panel."""

    active: Optional[bool] = None
    settings: Optional[Dict[str, Any]] = None


class FeatureSettingsResponse(BaseModel):
    slug: str
    active: bool
    settings: Dict[str, Any]
    reindex_required: bool = False
