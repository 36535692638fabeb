from flask import jsonify, request
from werkzeug.exceptions import HTTPException
import logging

from utils.exceptions import AppError

logger = logging.getLogger(__name__)


def register_error_handlers(app):
    """Register error handlers for the Flask application"""

    @app.errorhandler(AppError)
    def handle_app_error(e):
        if e.status_code >= 500:
            logger.error('%s: %s - Path: %s, Method: %s',
                         type(e).__name__, e.message, request.path, request.method,
                         exc_info=e.__cause__ or e)
        else:
            logger.warning('%s: %s - Path: %s, Method: %s',
                           type(e).__name__, e.message, request.path, request.method)
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(400)
    def handle_bad_request(e):
        logger.warning('400 error: %s - Path: %s, Method: %s',
                       e, request.path, request.method)
        return jsonify({
            'status': 'error',
            'error': 'bad_request',
            'message': 'Bad request. Please check your input.'
        }), 400

    @app.errorhandler(404)
    def handle_404(e):
        logger.warning('404 error: %s - Path: %s, Method: %s',
                       e, request.path, request.method)
        return jsonify({
            'status': 'error',
            'error': 'not_found',
            'message': f'Not Found: The requested URL {request.path} was not found on the server.'
        }), 404

    @app.errorhandler(405)
    def handle_method_not_allowed(e):
        logger.warning('405 error: %s - Path: %s, Method: %s',
                       e, request.path, request.method)
        return jsonify({
            'status': 'error',
            'error': 'method_not_allowed',
            'message': f'Method {request.method} is not allowed for {request.path}.'
        }), 405

    @app.errorhandler(HTTPException)
    def handle_http_exception(e):
        logger.warning('%s error: %s - Path: %s, Method: %s',
                       e.code, e, request.path, request.method)
        return jsonify({
            'status': 'error',
            'error': 'http_error',
            'message': e.name
        }), e.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(e):
        logger.error('Unexpected error: %s - Path: %s, Method: %s',
                     e, request.path, request.method, exc_info=True)
        return jsonify({
            'status': 'error',
            'error': 'internal_error',
            'message': 'An unexpected error occurred. Please try again later.'
        }), 500
