from flask import Blueprint, current_app, jsonify

manifest_bp = Blueprint('manifest', __name__)


@manifest_bp.route('/manifest.json', methods=['GET'])
def get_manifest():
    """Static addon descriptor."""
    return jsonify(current_app.config['ADDON_MANIFEST'])
