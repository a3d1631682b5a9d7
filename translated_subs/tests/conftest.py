import pytest
from unittest.mock import MagicMock

from translated_subs.app import create_app
from translated_subs.config import Settings
from translated_subs.services.index_client import SubtitleIndexClient
from translated_subs.services.pipeline import SubtitleResolutionPipeline
from translated_subs.services.translation_client import TranslationClient


@pytest.fixture
def settings():
    return Settings(
        translate_api_key='test-translate-key',
        index_api_key='test-index-key',
        port=7000,
    )


@pytest.fixture
def index_client():
    mock = MagicMock(spec=SubtitleIndexClient)
    mock.search.return_value = []
    return mock


@pytest.fixture
def translation_client():
    return MagicMock(spec=TranslationClient)


@pytest.fixture
def pipeline(index_client, translation_client):
    return SubtitleResolutionPipeline(index_client, translation_client,
                                      target_language='he', source_language='en')


@pytest.fixture
def app(settings, pipeline):
    flask_app = create_app(settings, pipeline=pipeline)
    flask_app.config.update({
        "TESTING": True,
    })
    yield flask_app


@pytest.fixture
def client(app):
    return app.test_client()
