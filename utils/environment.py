import os
import logging
from typing import List, Optional, Tuple

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_DATABASE_PATH = os.path.join(os.path.dirname(os.path.dirname(__file__)), 'consultations.db')
DEFAULT_CHAT_MODEL = 'llama-3.3-70b-versatile'
DEFAULT_TRANSCRIPTION_MODEL = 'whisper-large-v3'
DEFAULT_TIMEOUT_SECONDS = 30.0

REQUIRED_ENV_VARS = ['GROQ_API_KEY']


def _parse_bool(value: Optional[str]) -> bool:
    if value is None:
        return False
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


def _parse_float(value: Optional[str], default: float) -> float:
    if value is None or not value.strip():
        return default
    try:
        parsed = float(value)
    except ValueError:
        logger.warning(f"Invalid numeric value '{value}', using default {default}")
        return default
    return parsed if parsed > 0 else default


class EnvironmentConfig:
    """
    Snapshot of the environment variables the service reads.

    Values are read once at construction; a missing GROQ_API_KEY is reported
    by validate_environment() but is not an error here. The language service
    fails on first use instead.
    """

    def __init__(self):
        self.groq_api_key = os.environ.get('GROQ_API_KEY') or None
        self.debug_mode = _parse_bool(os.environ.get('DEBUG_MODE'))
        self.database_path = os.environ.get('DATABASE_PATH') or DEFAULT_DATABASE_PATH
        self.chat_model = os.environ.get('GROQ_CHAT_MODEL') or DEFAULT_CHAT_MODEL
        self.transcription_model = os.environ.get('GROQ_TRANSCRIPTION_MODEL') or DEFAULT_TRANSCRIPTION_MODEL
        self.language_service_timeout = _parse_float(
            os.environ.get('LANGUAGE_SERVICE_TIMEOUT'), DEFAULT_TIMEOUT_SECONDS
        )
        self.log_level = (os.environ.get('LOG_LEVEL') or ('DEBUG' if self.debug_mode else 'INFO')).upper()
        self.log_file = os.environ.get('LOG_FILE', 'app.log')

    def validate_environment(self) -> Tuple[bool, List[str]]:
        """Return (is_valid, missing_variable_names)"""
        missing_vars = [var for var in REQUIRED_ENV_VARS if not self.get_api_key(var)]
        return len(missing_vars) == 0, missing_vars

    def get_api_key(self, name: str) -> Optional[str]:
        if name == 'GROQ_API_KEY':
            return self.groq_api_key
        return os.environ.get(name) or None

    def is_debug_mode(self) -> bool:
        return self.debug_mode

    def get_environment_summary(self) -> str:
        is_valid, _ = self.validate_environment()
        lines = [
            "Environment Configuration:",
            f"  Debug Mode: {self.debug_mode}",
            f"  API Keys Configured: {'Yes' if is_valid else 'No'}",
            f"  Database: {self.database_path}",
            f"  Chat Model: {self.chat_model}",
            f"  Transcription Model: {self.transcription_model}",
            f"  Language Service Timeout: {self.language_service_timeout}s",
        ]
        return "\n".join(lines)
