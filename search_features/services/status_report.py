import logging
from typing import Any, Dict, Iterable, List, Optional

from search_features.config import Settings
from search_features.features.autosuggest.config import FeatureConfig
from search_features.features.registry import FeatureRegistry
from search_features.schemas.status_report import Report, ReportField

logger = logging.getLogger(__name__)


def _yes_no(value: bool) -> str:
    return "yes" if value else "no"


def build_feature_report(registry: FeatureRegistry, active_slugs: Iterable[str]) -> Report:
    active = set(active_slugs)
    return Report(
        title="Features",
        fields=[
            ReportField(label=feature.title, value="active" if feature.slug in active else "inactive")
            for feature in registry
        ],
    )


def build_index_report(index_name: str, index_stats: Dict[str, Any], cluster_healthy: bool) -> Report:
    fields = [
        ReportField(label="Index name", value=index_name),
        ReportField(label="Cluster reachable", value=_yes_no(cluster_healthy)),
    ]
    if "error" in index_stats:
        fields.append(ReportField(label="Index stats", value=f"unavailable ({index_stats['error']})"))
    else:
        fields.extend([
            ReportField(label="Documents", value=str(index_stats.get("document_count", 0))),
            ReportField(label="Size in bytes", value=str(index_stats.get("size_in_bytes", 0))),
            ReportField(label="Index health", value=str(index_stats.get("health", "unknown"))),
        ])
    return Report(title="Index", fields=fields)


def build_autosuggest_report(config: FeatureConfig, active: bool, requirement_messages: List[str]) -> Report:
    return Report(
        title="Autosuggest",
        fields=[
            ReportField(label="Active", value=_yes_no(active)),
            ReportField(label="Host", value=config.host or "(none)"),
            ReportField(label="Managed host", value=_yes_no(config.is_trusted_host)),
            ReportField(label="Assets served", value=_yes_no(active and config.is_active)),
            ReportField(label="Post types", value=config.post_type_filter),
            ReportField(label="Search fields", value=", ".join(config.search_fields)),
            ReportField(label="Selection action", value=config.selection_action.value),
            ReportField(label="Notices", value=str(len(requirement_messages))),
        ],
    )


def build_status_report(
    registry: FeatureRegistry,
    active_slugs: List[str],
    stored_settings: Dict[str, Optional[Dict[str, Any]]],
    settings: Settings,
    index_name: str,
    index_stats: Dict[str, Any],
    cluster_healthy: bool,
) -> List[Report]:
    """
    Assemble the diagnostic report shown on the status page.

    Args:
        registry: Registered features
        active_slugs: Features switched on for this request
        stored_settings: Stored settings per feature slug (None if never saved)
        settings: Application settings, source of feature defaults
        index_name: Posts index name
        index_stats: Output of OpenSearchClient.get_index_stats
        cluster_healthy: Output of OpenSearchClient.health_check

    Returns:
        Report sections in display order
    """
    reports = [
        build_feature_report(registry, active_slugs),
        build_index_report(index_name, index_stats, cluster_healthy),
    ]

    if "autosuggest" in registry:
        feature = registry.get("autosuggest")
        config = registry.resolve_config("autosuggest", stored_settings.get("autosuggest"), settings)
        status = feature.requirements_status(config)
        reports.append(build_autosuggest_report(config, "autosuggest" in active_slugs, status.messages))

    logger.debug(f"Built status report with {len(reports)} sections")
    return reports


def render_plain_text(reports: List[Report]) -> str:
    """Plain text form of the report, for pasting into a support request."""
    sections = []
    for report in reports:
        lines = [f"## {report.title}"]
        lines.extend(f"{field.label}: {field.value}" for field in report.fields)
        sections.append("\n".join(lines))
    return "\n\n".join(sections) + "\n"
