"""
OpenSubtitles index client.

Looks up subtitle entries for a media identifier and language, and fetches
the raw text of a single entry.
"""

import logging
from typing import List

import requests

from translated_subs.config import DEFAULT_HTTP_TIMEOUT, DEFAULT_OPENSUBTITLES_API_URL, DEFAULT_USER_AGENT
from translated_subs.exceptions import SchemaError, UpstreamUnavailable
from translated_subs.models import SubtitleEntry, parse_index_response

logger = logging.getLogger('translated-subs')


class SubtitleIndexClient:
    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_OPENSUBTITLES_API_URL,
        timeout: float = DEFAULT_HTTP_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        self.api_key = api_key
        self.base_url = base_url
        self.timeout = timeout
        self.user_agent = user_agent

    @property
    def headers(self) -> dict:
        return {
            'Api-Key': self.api_key,
            'User-Agent': self.user_agent,
            'Accept': 'application/json',
        }

    def search(self, media_id: str, language_code: str) -> List[SubtitleEntry]:
        """
        Query the index for subtitles of one media item in one language.

        Args:
            media_id: External media identifier (e.g. tt0111161)
            language_code: Language to filter on (e.g. 'he')

        Returns:
            Entries in the order the index returned them

        Raises:
            UpstreamUnavailable: Transport failure or non-2xx status
            SchemaError: Response body is not the expected shape
        """
        params = {'imdb_id': media_id, 'languages': language_code}
        logger.debug(f"Index search: imdb_id={media_id} languages={language_code}")

        try:
            res = requests.get(self.base_url, params=params, headers=self.headers, timeout=self.timeout)
        except requests.RequestException as e:
            raise UpstreamUnavailable(f"Subtitle index unreachable: {e}") from e

        if not res.ok:
            raise UpstreamUnavailable(f"Subtitle index returned status {res.status_code}")

        try:
            body = res.json()
        except ValueError as e:
            raise SchemaError("Subtitle index returned a non-JSON body") from e

        entries = parse_index_response(body, language_code)
        logger.info(f"Index returned {len(entries)} {language_code} subtitle(s) for {media_id}")
        return entries

    def fetch_text(self, entry: SubtitleEntry) -> str:
        """
        Download the raw subtitle text behind an index entry.

        Raises:
            UpstreamUnavailable: Transport failure or non-2xx status
        """
        try:
            res = requests.get(
                entry.source_url,
                headers={'User-Agent': self.user_agent},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise UpstreamUnavailable(f"Subtitle download failed: {e}") from e

        if not res.ok:
            raise UpstreamUnavailable(f"Subtitle download returned status {res.status_code}")

        # Subtitle hosts frequently omit the charset; requests would fall back to latin-1
        if not res.encoding or res.encoding.lower() == 'iso-8859-1':
            res.encoding = res.apparent_encoding or 'utf-8'

        logger.info(f"Fetched {len(res.content)} bytes of subtitle text")
        return res.text
