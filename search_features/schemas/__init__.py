from .autosuggest import AssetsResponse, SuggestResponse
from .features import (
    FeatureDetail,
    FeatureSettingsResponse,
    FeatureSettingsUpdate,
    FeatureSummary,
    RequirementsStatusOut,
    SettingsFieldOut,
)
from .health import HealthResponse
from .indexing import DocumentSyncRequest, DocumentSyncResponse, IndexSetupResponse
from .status_report import Report, ReportField, StatusReportResponse

__all__ = [
    "AssetsResponse",
    "DocumentSyncRequest",
    "DocumentSyncResponse",
    "FeatureDetail",
    "FeatureSettingsResponse",
    "FeatureSettingsUpdate",
    "FeatureSummary",
    "HealthResponse",
    "IndexSetupResponse",
    "Report",
    "ReportField",
    "RequirementsStatusOut",
    "SettingsFieldOut",
    "StatusReportResponse",
    "SuggestResponse",
]
