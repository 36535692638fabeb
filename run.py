#!/usr/bin/env python3
"""
Consultation Translator Entry Point
Uses application factory pattern for better modularity and testing
"""

import os
import sys
import argparse
import logging

from dotenv import load_dotenv

load_dotenv()

from app_factory import configure_logging, create_app
from utils.environment import EnvironmentConfig

logger = logging.getLogger(__name__)


def parse_arguments(argv=None):
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(
        description='Run the doctor-patient translation chat service'
    )
    parser.add_argument(
        '--port',
        type=int,
        default=5000,
        help='Port to run the app on (default: 5000)'
    )
    parser.add_argument(
        '--host',
        type=str,
        default='0.0.0.0',
        help='Host to bind to (default: 0.0.0.0)'
    )
    parser.add_argument(
        '--config',
        type=str,
        default='default',
        choices=['default', 'production', 'development'],
        help='Configuration environment (default: default)'
    )
    parser.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug mode'
    )

    return parser.parse_args(argv)


def validate_environment(env=None):
    """Validate required environment variables and setup"""
    env = env or EnvironmentConfig()
    is_valid, missing_vars = env.validate_environment()

    if not is_valid:
        logger.error(f"Missing required environment variables: {', '.join(missing_vars)}")
        logger.error("Please check your .env file or environment setup")
        return False

    # Log API key status (without revealing the key)
    logger.info(f'GROQ_API_KEY found - length: {len(env.groq_api_key)}')
    return True


def main(argv=None):
    """Main application entry point"""
    try:
        args = parse_arguments(argv)

        env = EnvironmentConfig()
        configure_logging('DEBUG' if args.debug else env.log_level, env.log_file)

        if not validate_environment(env):
            sys.exit(1)
        logger.info(env.get_environment_summary())

        config_name = 'development' if args.debug else args.config
        app = create_app(config_name)

        if args.debug:
            app.config['DEBUG'] = True

        # PORT from the environment wins (hosted deployments)
        port = int(os.environ.get('PORT', args.port))

        logger.info(f'Starting consultation translator on {args.host}:{port}')
        logger.info(f'Configuration: {config_name}')
        logger.info(f'Debug mode: {app.config.get("DEBUG", False)}')

        logger.debug("Registered URL Rules:")
        for rule in app.url_map.iter_rules():
            logger.debug(f"Route: {rule}, Endpoint: {rule.endpoint}")

        app.run(
            host=args.host,
            port=port,
            debug=app.config.get('DEBUG', False),
            threaded=True
        )

    except KeyboardInterrupt:
        logger.info("Application stopped by user")


if __name__ == '__main__':
    main()
