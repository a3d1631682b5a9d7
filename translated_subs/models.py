"""
Request/response records for the subtitle pipeline and its upstream services.

Upstream bodies are parsed through explicit functions that enumerate the
required fields, so a malformed payload raises SchemaError at the boundary.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List

from translated_subs.exceptions import SchemaError, TranslationFailed


class MediaKind(str, Enum):
    MOVIE = 'movie'
    SERIES = 'series'

    @classmethod
    def parse(cls, value: str) -> 'MediaKind':
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f'Unsupported media kind: {value}') from None


@dataclass(frozen=True)
class LookupRequest:
    media_id: str
    media_kind: MediaKind


@dataclass(frozen=True)
class SubtitleEntry:
    """A subtitle file advertised by the index service."""
    source_url: str
    language_code: str


@dataclass(frozen=True)
class SubtitleRow:
    """One subtitle offered back to the addon host."""
    identifier: str
    language_code: str
    delivery_url: str
    display_title: str

    def to_dict(self) -> Dict[str, str]:
        return {
            'id': self.identifier,
            'lang': self.language_code,
            'url': self.delivery_url,
            'title': self.display_title,
        }


@dataclass(frozen=True)
class TranslationRequest:
    q: str
    source: str
    target: str
    format: str = 'text'

    def to_dict(self) -> Dict[str, str]:
        return {
            'q': self.q,
            'source': self.source,
            'target': self.target,
            'format': self.format,
        }


def parse_index_response(body: Any, language_code: str) -> List[SubtitleEntry]:
    """
    Parse an OpenSubtitles search response into entries.

    Expected shape:
        {"data": [{"attributes": {"url": "...", "language": "en"}}, ...]}

    Args:
        body: Decoded JSON body
        language_code: The language that was queried (used when an entry omits it)

    Raises:
        SchemaError: If the body or any entry lacks the required fields
    """
    if not isinstance(body, dict):
        raise SchemaError('Index response is not a JSON object')

    data = body.get('data')
    if not isinstance(data, list):
        raise SchemaError("Index response is missing the 'data' list")

    entries = []
    for position, item in enumerate(data):
        attributes = item.get('attributes') if isinstance(item, dict) else None
        if not isinstance(attributes, dict):
            raise SchemaError(f"Index entry {position} is missing 'attributes'")

        url = attributes.get('url')
        if not isinstance(url, str) or not url:
            raise SchemaError(f"Index entry {position} is missing 'attributes.url'")

        language = attributes.get('language')
        if not isinstance(language, str) or not language:
            language = language_code

        entries.append(SubtitleEntry(source_url=url, language_code=language))

    return entries


def parse_translation_response(body: Any) -> str:
    """
    Extract the translated text from a Cloud Translation v2 response.

    Expected shape:
        {"data": {"translations": [{"translatedText": "..."}]}}
    """
    try:
        translated = body['data']['translations'][0]['translatedText']
    except (KeyError, IndexError, TypeError):
        raise TranslationFailed('Translation response is missing data.translations[0].translatedText')

    if not isinstance(translated, str):
        raise TranslationFailed('translatedText is not a string')

    return translated
