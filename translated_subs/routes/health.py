from flask import Blueprint, current_app, jsonify

from translated_subs.config import APP_VERSION

health_bp = Blueprint('health', __name__)


@health_bp.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint for monitoring."""
    settings = current_app.config['SETTINGS']
    return jsonify({
        'status': 'ok',
        'service': 'translated-subtitles',
        'version': APP_VERSION,
        'languages': {
            'source': settings.source_language,
            'target': settings.target_language,
        },
    })
