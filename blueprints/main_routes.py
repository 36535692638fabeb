from flask import Blueprint, jsonify
import logging

logger = logging.getLogger(__name__)

main_bp = Blueprint('main', __name__)


@main_bp.route('/')
def index():
    """Describe the API"""
    logger.info('Serving index')
    return jsonify({
        'status': 'success',
        'service': 'consultation-translator',
        'endpoints': [
            '/api/conversations',
            '/api/messages',
            '/api/summary',
            '/api/transcribe'
        ]
    })


@main_bp.route('/health', methods=['GET'])
def health():
    """Simple route to verify Flask is working"""
    return jsonify({
        'status': 'success',
        'message': 'Flask server is running correctly'
    })
