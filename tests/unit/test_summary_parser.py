import json
import pytest

from utils.summary_parser import parse_summary_response, strip_code_fences

PAYLOAD = '{"summary": "ok", "medicalHighlights": {"symptoms": [], "diagnoses": [], "medications": [], "followUp": []}}'


def test_strip_json_fence():
    assert strip_code_fences("```json\n" + PAYLOAD + "\n```") == PAYLOAD


def test_strip_bare_fence():
    assert strip_code_fences("```\n" + PAYLOAD + "\n```") == PAYLOAD


def test_unfenced_text_unchanged():
    assert strip_code_fences(PAYLOAD) == PAYLOAD


def test_parse_full_response():
    outcome = parse_summary_response(json.dumps({
        "summary": "Hypertension review",
        "medicalHighlights": {
            "symptoms": ["headache"],
            "diagnoses": ["hypertension"],
            "medications": ["amlodipine 5mg"],
            "followUp": ["recheck BP in 2 weeks"]
        }
    }))

    assert outcome.ok
    assert outcome.error is None
    assert outcome.result.to_dict() == {
        "summary": "Hypertension review",
        "medical_highlights": {
            "symptoms": ["headache"],
            "diagnoses": ["hypertension"],
            "medications": ["amlodipine 5mg"],
            "follow_up": ["recheck BP in 2 weeks"]
        }
    }


def test_empty_lists_are_valid():
    outcome = parse_summary_response(PAYLOAD)
    assert outcome.ok
    assert outcome.result.medical_highlights.diagnoses == []


@pytest.mark.parametrize("raw", [
    None,
    "",
    "not json at all",
    "[1, 2, 3]",
    '{"medicalHighlights": {}}',
    '{"summary": "", "medicalHighlights": {}}',
    '{"summary": "x"}',
    '{"summary": "x", "medicalHighlights": {"symptoms": "fever"}}',
    '{"summary": "x", "medicalHighlights": {"medications": [1, 2]}}',
])
def test_malformed_responses_fail(raw):
    outcome = parse_summary_response(raw)

    assert not outcome.ok
    assert outcome.result is None
    assert outcome.error
