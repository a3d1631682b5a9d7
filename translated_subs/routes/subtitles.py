import logging

from flask import Blueprint, current_app, jsonify

from translated_subs.models import LookupRequest, MediaKind

subtitles_bp = Blueprint('subtitles', __name__)
logger = logging.getLogger('translated-subs')

SUBTITLES_RESOURCE = 'subtitles'


def _subtitles_response(media_kind: str, media_id: str):
    try:
        kind = MediaKind.parse(media_kind)
    except ValueError as e:
        return jsonify({'error': str(e)}), 400

    pipeline = current_app.extensions['subtitle_pipeline']
    rows = pipeline.resolve_request(LookupRequest(media_id=media_id, media_kind=kind))
    return jsonify({'subtitles': [row.to_dict() for row in rows]})


@subtitles_bp.route('/resource/<resource>/<media_kind>/<media_id>.json', methods=['GET'])
def get_resource(resource, media_kind, media_id):
    """
    Addon resource endpoint.

    Only the subtitles resource is served. Pipeline failures still answer
    200 with an empty list.
    """
    logger.info(f"Resource request: resource={resource}, type={media_kind}, id={media_id}")
    if resource != SUBTITLES_RESOURCE:
        return jsonify({'error': f'Unsupported resource: {resource}'}), 404
    return _subtitles_response(media_kind, media_id)


@subtitles_bp.route('/subtitles/<media_kind>/<media_id>.json', methods=['GET'])
@subtitles_bp.route('/subtitles/<media_kind>/<media_id>/<extra>.json', methods=['GET'])
def get_subtitles(media_kind, media_id, extra=None):
    """Standard addon SDK route shape; the extra segment (hash, size...) is ignored."""
    return _subtitles_response(media_kind, media_id)
