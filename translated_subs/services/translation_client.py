"""
Google Cloud Translation (v2) client.

The whole subtitle document is sent as a single `q` string with
format=text, so cue numbering and timestamps pass through untouched.
"""

import logging

import requests

from translated_subs.config import DEFAULT_GOOGLE_TRANSLATE_API_URL, DEFAULT_HTTP_TIMEOUT
from translated_subs.exceptions import TranslationFailed
from translated_subs.models import TranslationRequest, parse_translation_response

logger = logging.getLogger('translated-subs')


class TranslationClient:
    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_GOOGLE_TRANSLATE_API_URL,
        timeout: float = DEFAULT_HTTP_TIMEOUT,
    ):
        self.api_key = api_key
        self.base_url = base_url
        self.timeout = timeout

    def translate(self, text: str, source_lang: str, target_lang: str) -> str:
        """
        Translate text from source_lang to target_lang.

        Raises:
            TranslationFailed: Transport failure, non-2xx status, or a response
                without a usable translation
        """
        payload = TranslationRequest(q=text, source=source_lang, target=target_lang)
        logger.info(f"Translating {len(text)} chars ({source_lang} -> {target_lang})")

        try:
            res = requests.post(
                self.base_url,
                params={'key': self.api_key},
                json=payload.to_dict(),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise TranslationFailed(f"Translation service unreachable: {e}") from e

        if not res.ok:
            raise TranslationFailed(f"Translation service returned status {res.status_code}")

        try:
            body = res.json()
        except ValueError as e:
            raise TranslationFailed("Translation service returned a non-JSON body") from e

        translated = parse_translation_response(body)
        if text.strip() and not translated.strip():
            raise TranslationFailed("Translation service returned empty text")

        return translated
