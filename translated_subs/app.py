import logging
import sys
from typing import Optional

from flask import Flask, jsonify
from flask_cors import CORS

from translated_subs.config import LOG_FILE, LOG_JSON, LOG_LEVEL, Settings, load_settings
from translated_subs.exceptions import ConfigError
from translated_subs.logging_config import mask_api_key, setup_logging, setup_request_id_middleware
from translated_subs.manifest import build_manifest
from translated_subs.routes.health import health_bp
from translated_subs.routes.manifest import manifest_bp
from translated_subs.routes.subtitles import subtitles_bp
from translated_subs.services.pipeline import SubtitleResolutionPipeline

logger = logging.getLogger('translated-subs')


def create_app(settings: Settings, pipeline: Optional[SubtitleResolutionPipeline] = None) -> Flask:
    """
    Build the Flask application.

    Args:
        settings: Process configuration
        pipeline: Pre-built pipeline (tests pass one with stubbed clients);
            built from settings when omitted
    """
    app = Flask(__name__)
    CORS(app)
    setup_request_id_middleware(app)

    app.config['SETTINGS'] = settings
    app.config['ADDON_MANIFEST'] = build_manifest(settings)
    app.extensions['subtitle_pipeline'] = pipeline or SubtitleResolutionPipeline.from_settings(settings)

    app.register_blueprint(manifest_bp)
    app.register_blueprint(subtitles_bp)
    app.register_blueprint(health_bp)

    @app.errorhandler(404)
    def not_found(error):
        return jsonify({'error': 'Not found'}), 404

    @app.errorhandler(500)
    def internal_error(error):
        logger.error(f"Unhandled server error: {error}")
        return jsonify({'error': 'Internal server error'}), 500

    return app


def main():
    setup_logging(level=LOG_LEVEL, json_format=LOG_JSON, log_file=LOG_FILE)

    try:
        settings = load_settings()
    except ConfigError as e:
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)

    logger.info(
        f"Server Configuration: port={settings.port}, "
        f"languages={settings.source_language}->{settings.target_language}, "
        f"index_key={mask_api_key(settings.index_api_key)}, "
        f"translate_key={mask_api_key(settings.translate_api_key)}"
    )

    app = create_app(settings)
    logger.info(f"Addon running on http://localhost:{settings.port}/manifest.json")
    app.run(host=settings.host, port=settings.port, debug=False, threaded=True)


if __name__ == '__main__':
    main()
