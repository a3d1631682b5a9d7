import pytest

from translated_subs.config import (
    DEFAULT_GOOGLE_TRANSLATE_API_URL, DEFAULT_OPENSUBTITLES_API_URL, get_language_name, load_settings
)
from translated_subs.exceptions import ConfigError

BASE_ENV = {
    'GOOGLE_TRANSLATE_API_KEY': 'gt-key',
    'OPENSUBTITLES_API_KEY': 'os-key',
}


def test_load_settings_defaults():
    settings = load_settings(dict(BASE_ENV))

    assert settings.translate_api_key == 'gt-key'
    assert settings.index_api_key == 'os-key'
    assert settings.port == 7000
    assert settings.target_language == 'he'
    assert settings.source_language == 'en'
    assert settings.index_api_url == DEFAULT_OPENSUBTITLES_API_URL
    assert settings.translate_api_url == DEFAULT_GOOGLE_TRANSLATE_API_URL
    assert settings.http_timeout == 30.0


def test_load_settings_overrides():
    settings = load_settings({
        **BASE_ENV,
        'PORT': '8080',
        'HTTP_TIMEOUT': '12.5',
        'TARGET_LANGUAGE': 'ar',
        'OPENSUBTITLES_API_URL': 'http://localhost:9000/subs',
    })

    assert settings.port == 8080
    assert settings.http_timeout == 12.5
    assert settings.target_language == 'ar'
    assert settings.index_api_url == 'http://localhost:9000/subs'


@pytest.mark.parametrize('missing', ['GOOGLE_TRANSLATE_API_KEY', 'OPENSUBTITLES_API_KEY'])
def test_missing_api_key_fails_fast(missing):
    env = dict(BASE_ENV)
    del env[missing]

    with pytest.raises(ConfigError, match=missing):
        load_settings(env)


def test_blank_api_key_fails_fast():
    with pytest.raises(ConfigError):
        load_settings({**BASE_ENV, 'OPENSUBTITLES_API_KEY': '   '})


@pytest.mark.parametrize('name,value', [
    ('PORT', 'seven'),
    ('HTTP_TIMEOUT', 'soon'),
    ('HTTP_TIMEOUT', '0'),
])
def test_malformed_numbers(name, value):
    with pytest.raises(ConfigError, match=name):
        load_settings({**BASE_ENV, name: value})


def test_same_source_and_target_rejected():
    with pytest.raises(ConfigError):
        load_settings({**BASE_ENV, 'SOURCE_LANGUAGE': 'he'})


def test_get_language_name():
    assert get_language_name('he') == 'Hebrew'
    assert get_language_name('pt-BR') == 'Portuguese'
    assert get_language_name('xx') == 'xx'
