import os
import json
import tempfile
import pytest
from unittest.mock import MagicMock

from utils import database


SAMPLE_SUMMARY = {
    "summary": "Patient reports three days of fever and a dry cough.",
    "medicalHighlights": {
        "symptoms": ["fever", "dry cough"],
        "diagnoses": ["suspected viral infection"],
        "medications": ["paracetamol 500mg"],
        "followUp": ["return if fever persists beyond 5 days"]
    }
}


@pytest.fixture
def test_db():
    """Point the store at a temporary SQLite file for the duration of a test"""
    fd, temp_path = tempfile.mkstemp(suffix='.db')
    os.close(fd)

    original_path = database.DB_PATH
    database.DB_PATH = temp_path
    database.init_db()

    yield temp_path

    database.DB_PATH = original_path
    os.unlink(temp_path)


@pytest.fixture
def mock_language_service():
    """Language service double; no network calls"""
    service = MagicMock()
    service.translate.return_value = "आप कैसा महसूस कर रहे हैं?"
    service.transcribe.return_value = "I have had a fever since Monday"
    service.summarize.return_value = json.dumps(SAMPLE_SUMMARY)
    return service


@pytest.fixture
def app(test_db, mock_language_service):
    from app_factory import create_app

    app = create_app('testing', language_service=mock_language_service, DATABASE_PATH=test_db)
    return app


@pytest.fixture
def client(app):
    with app.test_client() as client:
        yield client
