"""
Subtitle resolution pipeline.

Prefers subtitles already in the target language. When none exist, the first
source-language subtitle is fetched, machine-translated as a single document
and returned inline as a base64 data URL.

Failure policy: every upstream failure is logged and turned into an empty
result. Addon hosts expect a (possibly empty) list, never an error, when
subtitles are only partially unavailable.
"""

import base64
import logging
from typing import List

from translated_subs.config import Settings, get_language_name
from translated_subs.exceptions import NoContentFound, SubtitleAddonError
from translated_subs.logging_config import log_with_context
from translated_subs.models import LookupRequest, MediaKind, SubtitleEntry, SubtitleRow
from translated_subs.services.index_client import SubtitleIndexClient
from translated_subs.services.translation_client import TranslationClient

logger = logging.getLogger('translated-subs')


def encode_data_url(text: str) -> str:
    """Embed text in a data: URL so the player needs no further fetch."""
    encoded = base64.b64encode(text.encode('utf-8')).decode('ascii')
    return f"data:text/plain;base64,{encoded}"


class SubtitleResolutionPipeline:
    def __init__(
        self,
        index_client: SubtitleIndexClient,
        translation_client: TranslationClient,
        target_language: str = 'he',
        source_language: str = 'en',
    ):
        self.index_client = index_client
        self.translation_client = translation_client
        self.target_language = target_language
        self.source_language = source_language

        target_name = get_language_name(target_language)
        self.original_title = f"{target_name} (Original)"
        self.translated_title = f"{target_name} (Translated)"
        self.translated_identifier = f"{target_name.lower()}-translation"

    @classmethod
    def from_settings(cls, settings: Settings) -> 'SubtitleResolutionPipeline':
        index_client = SubtitleIndexClient(
            api_key=settings.index_api_key,
            base_url=settings.index_api_url,
            timeout=settings.http_timeout,
            user_agent=settings.user_agent,
        )
        translation_client = TranslationClient(
            api_key=settings.translate_api_key,
            base_url=settings.translate_api_url,
            timeout=settings.http_timeout,
        )
        return cls(
            index_client,
            translation_client,
            target_language=settings.target_language,
            source_language=settings.source_language,
        )

    def resolve(self, media_id: str, media_kind: MediaKind) -> List[SubtitleRow]:
        """
        Resolve subtitles for one media item.

        Returns either the target-language entries from the index, a single
        translated entry, or an empty list when anything along the way fails.
        """
        log_with_context(logger, 'INFO', "Resolving subtitles",
                         media_id=media_id, media_kind=getattr(media_kind, 'value', media_kind))
        try:
            return self._run(media_id)
        except NoContentFound as e:
            log_with_context(logger, 'INFO', f"No subtitles available: {e}",
                             media_id=media_id, error_type=type(e).__name__)
        except SubtitleAddonError as e:
            log_with_context(logger, 'WARNING', f"Subtitle resolution failed: {e}",
                             media_id=media_id, error_type=type(e).__name__)
        except Exception as e:
            log_with_context(logger, 'ERROR', f"Unexpected error resolving subtitles: {e}",
                             exc_info=True, media_id=media_id, error_type=type(e).__name__)
        return []

    def resolve_request(self, lookup: LookupRequest) -> List[SubtitleRow]:
        return self.resolve(lookup.media_id, lookup.media_kind)

    def _run(self, media_id: str) -> List[SubtitleRow]:
        log_with_context(logger, 'DEBUG', "Checking for target-language subtitles",
                         media_id=media_id, stage='target_lookup', language=self.target_language)
        target_entries = self.index_client.search(media_id, self.target_language)
        if target_entries:
            log_with_context(logger, 'INFO', f"Returning {len(target_entries)} original subtitle(s)",
                             media_id=media_id, stage='target_lookup')
            return [self._original_row(entry) for entry in target_entries]

        log_with_context(logger, 'INFO', "No target-language subtitles, falling back to source language",
                         media_id=media_id, stage='source_lookup', language=self.source_language)
        source_entries = self.index_client.search(media_id, self.source_language)
        if not source_entries:
            raise NoContentFound(
                f"No {self.target_language} or {self.source_language} subtitles for {media_id}"
            )

        log_with_context(logger, 'DEBUG', "Fetching source subtitle text",
                         media_id=media_id, stage='fetch')
        source_text = self.index_client.fetch_text(source_entries[0])

        log_with_context(logger, 'DEBUG', "Translating source subtitle",
                         media_id=media_id, stage='translate')
        translated = self.translation_client.translate(
            source_text, self.source_language, self.target_language
        )
        log_with_context(logger, 'INFO', "Translation complete",
                         media_id=media_id, stage='translate')

        return [SubtitleRow(
            identifier=self.translated_identifier,
            language_code=self.target_language,
            delivery_url=encode_data_url(translated),
            display_title=self.translated_title,
        )]

    def _original_row(self, entry: SubtitleEntry) -> SubtitleRow:
        return SubtitleRow(
            identifier=entry.source_url,
            language_code=self.target_language,
            delivery_url=entry.source_url,
            display_title=self.original_title,
        )
