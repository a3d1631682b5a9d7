import base64

import pytest

from translated_subs.exceptions import UpstreamUnavailable
from translated_subs.models import SubtitleEntry


def test_health_check(client):
    response = client.get('/health')
    assert response.status_code == 200
    data = response.get_json()
    assert data['status'] == 'ok'
    assert data['languages'] == {'source': 'en', 'target': 'he'}


def test_manifest(client):
    response = client.get('/manifest.json')
    assert response.status_code == 200
    data = response.get_json()
    assert data['id'] == 'org.stremio.translated-subtitles'
    assert data['version'] == '1.1.0'
    assert data['name'] == 'Hebrew Subtitles Translator (EN to HE)'
    assert data['resources'] == ['subtitles']
    assert data['types'] == ['movie', 'series']
    assert data['idPrefixes'] == ['tt']
    assert data['catalogs'] == []


def test_manifest_allows_cross_origin(client):
    response = client.get('/manifest.json', headers={'Origin': 'https://web.stremio.com'})
    assert response.headers.get('Access-Control-Allow-Origin') in ('*', 'https://web.stremio.com')


def test_subtitles_original(client, index_client, translation_client):
    index_client.search.return_value = [SubtitleEntry('http://x/he.srt', 'he')]

    response = client.get('/resource/subtitles/movie/tt0111161.json')

    assert response.status_code == 200
    assert response.get_json() == {'subtitles': [{
        'id': 'http://x/he.srt',
        'lang': 'he',
        'url': 'http://x/he.srt',
        'title': 'Hebrew (Original)',
    }]}
    index_client.search.assert_called_once_with('tt0111161', 'he')
    translation_client.translate.assert_not_called()


def test_subtitles_translated(client, index_client, translation_client):
    index_client.search.side_effect = lambda media_id, lang: (
        [] if lang == 'he' else [SubtitleEntry('http://x/en.srt', 'en')]
    )
    index_client.fetch_text.return_value = "Hello"
    translation_client.translate.return_value = "שלום"

    response = client.get('/resource/subtitles/movie/tt0111161.json')

    assert response.status_code == 200
    subtitles = response.get_json()['subtitles']
    assert len(subtitles) == 1
    assert subtitles[0]['id'] == 'hebrew-translation'
    assert subtitles[0]['title'] == 'Hebrew (Translated)'
    payload = subtitles[0]['url'].split(',', 1)[1]
    assert base64.b64decode(payload).decode('utf-8') == "שלום"


def test_subtitles_none_available(client, index_client):
    index_client.search.return_value = []

    response = client.get('/resource/subtitles/series/tt0903747:1:2.json')

    assert response.status_code == 200
    assert response.get_json() == {'subtitles': []}
    assert [c.args for c in index_client.search.call_args_list] == [
        ('tt0903747:1:2', 'he'), ('tt0903747:1:2', 'en'),
    ]


def test_subtitles_upstream_failure_is_empty_200(client, index_client, translation_client):
    index_client.search.side_effect = UpstreamUnavailable("down")

    response = client.get('/resource/subtitles/movie/tt1.json')

    assert response.status_code == 200
    assert response.get_json() == {'subtitles': []}
    index_client.fetch_text.assert_not_called()
    translation_client.translate.assert_not_called()


@pytest.mark.parametrize('path', [
    '/subtitles/movie/tt1.json',
    '/subtitles/movie/tt1/videoHash=abc&videoSize=123.json',
])
def test_sdk_route_shape(client, index_client, path):
    index_client.search.return_value = [SubtitleEntry('http://x/he.srt', 'he')]

    response = client.get(path)

    assert response.status_code == 200
    assert response.get_json()['subtitles'][0]['url'] == 'http://x/he.srt'
    index_client.search.assert_called_once_with('tt1', 'he')


def test_unsupported_resource(client, index_client):
    response = client.get('/resource/stream/movie/tt1.json')
    assert response.status_code == 404
    assert 'error' in response.get_json()
    index_client.search.assert_not_called()


def test_unsupported_media_kind(client, index_client):
    response = client.get('/resource/subtitles/channel/tt1.json')
    assert response.status_code == 400
    assert 'Unsupported media kind' in response.get_json()['error']
    index_client.search.assert_not_called()


def test_unknown_route_returns_json_404(client):
    response = client.get('/nope')
    assert response.status_code == 404
    assert response.get_json() == {'error': 'Not found'}


def test_request_id_is_echoed(client):
    response = client.get('/health', headers={'X-Request-ID': 'abc-123'})
    assert response.headers['X-Request-ID'] == 'abc-123'


def test_request_id_is_generated(client):
    response = client.get('/health')
    assert response.headers.get('X-Request-ID')
