from typing import List

from search_features.features.base import FeatureContext, FeatureDescriptor, SettingsField

from .config import FeatureConfig, autosuggest_defaults, requirements_status, resolve, sanitize_settings
from .mapping import AutosuggestMappingContributor
from .sync import TermSuggestEnricher

SUMMARY = "Suggest relevant content to users as they type search text."

LONG_DESCRIPTION = (
    'Input fields of type "search" or with the CSS class "search-field" or "ep-autosuggest" '
    "will be enhanced with autosuggest functionality. As users type, a dropdown will be shown "
    "containing results relevant to their current search. Clicking a suggestion will take a "
    "user directly to that piece of content."
)

HOST_FIELD_DESCRIPTION = (
    "For many hosting setups, a separate host should be used for autosuggest. "
    "Note that this address will be exposed to the public."
)


def setup(context: FeatureContext) -> None:
    document_type = context.settings.opensearch.document_type if context.settings else "post"
    context.pipeline.add_mapping_contributor(AutosuggestMappingContributor(document_type))
    context.pipeline.add_sync_enricher(TermSuggestEnricher())


def settings_form(config: FeatureConfig) -> List[SettingsField]:
    return [
        SettingsField(
            name="host",
            label="Host",
            value=config.host,
            description=HOST_FIELD_DESCRIPTION,
        ),
    ]


AUTOSUGGEST_FEATURE = FeatureDescriptor(
    slug="autosuggest",
    title="Autosuggest",
    setup=setup,
    summary=SUMMARY,
    long_description=LONG_DESCRIPTION,
    settings_form=settings_form,
    requirements_status=requirements_status,
    default_settings=autosuggest_defaults,
    resolve_config=resolve,
    sanitize_settings=sanitize_settings,
    requires_install_reindex=True,
)
