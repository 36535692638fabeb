"""
Application factory for the consultation translation service.

Builds the Flask app, wires the SQLite store and the language service, and
registers blueprints and error handlers.
"""

import logging

from flask import Flask, request

from config import config
from blueprints.api_routes import api_bp
from blueprints.main_routes import main_bp
from utils import database
from utils.error_handlers import register_error_handlers
from utils.groq_integration import GroqLanguageService

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def configure_logging(level='INFO', log_file='app.log'):
    """Configure root logging with a console handler and an optional log file"""
    handlers = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers
    )


def create_app(config_name='default', language_service=None, **overrides):
    """
    Create and configure the Flask application.

    Args:
        config_name: One of 'default', 'development', 'production', 'testing'
        language_service: Translation/transcription/summary backend; a
            GroqLanguageService built from the config is used when omitted
        **overrides: Config values that take precedence over the environment

    Returns:
        Flask: The configured application
    """
    app = Flask(__name__)
    app.config.from_object(config[config_name]())
    app.config.update(overrides)
    app.json.sort_keys = False

    configure_logging(app.config['LOG_LEVEL'], app.config.get('LOG_FILE'))

    database.DB_PATH = app.config['DATABASE_PATH']
    database.init_db()

    if language_service is None:
        # Client construction is deferred to the first call
        language_service = GroqLanguageService(
            api_key=app.config.get('GROQ_API_KEY'),
            chat_model=app.config['GROQ_CHAT_MODEL'],
            transcription_model=app.config['GROQ_TRANSCRIPTION_MODEL'],
            timeout=app.config['LANGUAGE_SERVICE_TIMEOUT']
        )
    app.extensions['language_service'] = language_service

    @app.before_request
    def log_request_info():
        logger.debug('Request: %s %s', request.method, request.path)

    register_error_handlers(app)
    app.register_blueprint(main_bp)
    app.register_blueprint(api_bp, url_prefix='/api')

    logger.info(f"Application created with '{config_name}' configuration")
    return app
