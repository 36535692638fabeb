import os
import logging
import pytest
from unittest.mock import patch

import run
from config import config
from utils.environment import DEFAULT_TIMEOUT_SECONDS, EnvironmentConfig


@pytest.fixture
def mock_env_vars():
    """Fixture for mock environment variables"""
    return {
        "GROQ_API_KEY": "test_api_key",
        "DEBUG_MODE": "true",
        "DATABASE_PATH": "/tmp/consultations-test.db",
        "LANGUAGE_SERVICE_TIMEOUT": "12.5",
    }


def test_environment_initialization(mock_env_vars):
    with patch.dict(os.environ, mock_env_vars, clear=True):
        env = EnvironmentConfig()

        assert env.groq_api_key == "test_api_key"
        assert env.debug_mode is True
        assert env.database_path == "/tmp/consultations-test.db"
        assert env.language_service_timeout == 12.5
        assert env.chat_model == "llama-3.3-70b-versatile"
        assert env.transcription_model == "whisper-large-v3"
        assert env.log_level == "DEBUG"


def test_missing_variables_use_defaults():
    with patch.dict(os.environ, {}, clear=True):
        env = EnvironmentConfig()

        assert env.groq_api_key is None
        assert env.debug_mode is False
        assert env.language_service_timeout == DEFAULT_TIMEOUT_SECONDS
        assert env.log_level == "INFO"


@pytest.mark.parametrize("value", ["invalid", "-3", "0", ""])
def test_invalid_timeout_falls_back(value):
    with patch.dict(os.environ, {"LANGUAGE_SERVICE_TIMEOUT": value}, clear=True):
        assert EnvironmentConfig().language_service_timeout == DEFAULT_TIMEOUT_SECONDS


def test_invalid_debug_mode():
    with patch.dict(os.environ, {"DEBUG_MODE": "invalid"}, clear=True):
        assert EnvironmentConfig().is_debug_mode() is False


def test_validate_environment(mock_env_vars):
    with patch.dict(os.environ, mock_env_vars, clear=True):
        is_valid, missing_vars = EnvironmentConfig().validate_environment()

        assert is_valid is True
        assert missing_vars == []


def test_validate_environment_missing_key():
    with patch.dict(os.environ, {}, clear=True):
        is_valid, missing_vars = EnvironmentConfig().validate_environment()

        assert is_valid is False
        assert missing_vars == ["GROQ_API_KEY"]


def test_get_api_key(mock_env_vars):
    with patch.dict(os.environ, mock_env_vars, clear=True):
        env = EnvironmentConfig()

        assert env.get_api_key("GROQ_API_KEY") == "test_api_key"
        assert env.get_api_key("NON_EXISTENT_KEY") is None


def test_get_environment_summary(mock_env_vars):
    with patch.dict(os.environ, mock_env_vars, clear=True):
        summary = EnvironmentConfig().get_environment_summary()

        assert "Environment Configuration" in summary
        assert "Debug Mode: True" in summary
        assert "API Keys Configured: Yes" in summary
        assert "test_api_key" not in summary


def test_flask_config_classes(mock_env_vars):
    with patch.dict(os.environ, mock_env_vars, clear=True):
        testing = config['testing']()
        production = config['production']()

        assert testing.TESTING is True
        assert testing.LOG_FILE is None
        assert production.DEBUG is False
        assert production.GROQ_API_KEY == "test_api_key"
        assert production.LANGUAGE_SERVICE_TIMEOUT == 12.5


def test_startup_logs_environment_summary(mock_env_vars, caplog):
    with patch.dict(os.environ, mock_env_vars, clear=True), \
            patch('run.configure_logging'), \
            patch('run.create_app') as mock_create_app:
        with caplog.at_level(logging.INFO, logger='run'):
            run.main(['--port', '5001'])

    assert "Environment Configuration" in caplog.text
    assert "test_api_key" not in caplog.text
    mock_create_app.return_value.run.assert_called_once()


def test_startup_exits_without_api_key():
    with patch.dict(os.environ, {}, clear=True), \
            patch('run.configure_logging'), \
            patch('run.create_app') as mock_create_app:
        with pytest.raises(SystemExit) as exc_info:
            run.main([])

    assert exc_info.value.code == 1
    mock_create_app.assert_not_called()
