"""Addon descriptor served at /manifest.json."""

from translated_subs.config import APP_VERSION, Settings, get_language_name
from translated_subs.models import MediaKind

ADDON_ID = 'org.stremio.translated-subtitles'
ID_PREFIXES = ['tt']


def build_manifest(settings: Settings) -> dict:
    source = settings.source_language
    target = settings.target_language
    target_name = get_language_name(target)
    return {
        'id': ADDON_ID,
        'version': APP_VERSION,
        'name': f"{target_name} Subtitles Translator ({source.upper()} to {target.upper()})",
        'description': f"Provides {target_name} subtitles and translates if needed.",
        'resources': ['subtitles'],
        'types': [kind.value for kind in MediaKind],
        'idPrefixes': list(ID_PREFIXES),
        'catalogs': [],
    }
