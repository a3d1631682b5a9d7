import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from translated_subs.exceptions import ConfigError

# Load environment variables from .env file
load_dotenv()

APP_VERSION = '1.1.0'

# Logging
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
LOG_JSON = os.getenv('LOG_JSON', 'false').lower() == 'true'
LOG_FILE = os.getenv('LOG_FILE')

# Upstream services
DEFAULT_OPENSUBTITLES_API_URL = 'https://api.opensubtitles.com/api/v1/subtitles'
DEFAULT_GOOGLE_TRANSLATE_API_URL = 'https://translation.googleapis.com/language/translate/v2'
DEFAULT_USER_AGENT = f'TranslatedSubtitles v{APP_VERSION}'
DEFAULT_HTTP_TIMEOUT = 30.0

# Supported Languages
LANG_NAMES = {
    'en': 'English', 'he': 'Hebrew', 'ar': 'Arabic', 'ru': 'Russian',
    'es': 'Spanish', 'fr': 'French', 'de': 'German', 'pt': 'Portuguese',
    'it': 'Italian', 'nl': 'Dutch', 'pl': 'Polish', 'tr': 'Turkish',
    'ja': 'Japanese', 'ko': 'Korean', 'zh': 'Chinese',
}


def get_language_name(code: str) -> str:
    """Human-readable name for a language code, falling back to the code itself."""
    if code in LANG_NAMES:
        return LANG_NAMES[code]
    base_lang = code.split('-')[0]
    return LANG_NAMES.get(base_lang, code)


@dataclass(frozen=True)
class Settings:
    """Process configuration, built once at startup and passed to the app."""
    translate_api_key: str
    index_api_key: str
    port: int = 7000
    host: str = '0.0.0.0'
    index_api_url: str = DEFAULT_OPENSUBTITLES_API_URL
    translate_api_url: str = DEFAULT_GOOGLE_TRANSLATE_API_URL
    target_language: str = 'he'
    source_language: str = 'en'
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT


def _require(env, name: str) -> str:
    value = (env.get(name) or '').strip()
    if not value:
        raise ConfigError(f'{name} is required')
    return value


def _parse_int(env, name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw.strip() == '':
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f'{name} must be an integer, got {raw!r}') from None


def _parse_float(env, name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None or raw.strip() == '':
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ConfigError(f'{name} must be a number, got {raw!r}') from None
    if value <= 0:
        raise ConfigError(f'{name} must be positive, got {raw!r}')
    return value


def load_settings(env: Optional[dict] = None) -> Settings:
    """
    Build Settings from the environment.

    Args:
        env: Mapping to read from (defaults to os.environ)

    Raises:
        ConfigError: If an API key is missing or a numeric value is malformed
    """
    if env is None:
        env = os.environ

    target_language = (env.get('TARGET_LANGUAGE') or 'he').strip()
    source_language = (env.get('SOURCE_LANGUAGE') or 'en').strip()
    if target_language == source_language:
        raise ConfigError('TARGET_LANGUAGE and SOURCE_LANGUAGE must differ')

    return Settings(
        translate_api_key=_require(env, 'GOOGLE_TRANSLATE_API_KEY'),
        index_api_key=_require(env, 'OPENSUBTITLES_API_KEY'),
        port=_parse_int(env, 'PORT', 7000),
        host=env.get('HOST') or '0.0.0.0',
        index_api_url=env.get('OPENSUBTITLES_API_URL') or DEFAULT_OPENSUBTITLES_API_URL,
        translate_api_url=env.get('GOOGLE_TRANSLATE_API_URL') or DEFAULT_GOOGLE_TRANSLATE_API_URL,
        target_language=target_language,
        source_language=source_language,
        http_timeout=_parse_float(env, 'HTTP_TIMEOUT', DEFAULT_HTTP_TIMEOUT),
        user_agent=env.get('USER_AGENT') or DEFAULT_USER_AGENT,
    )
