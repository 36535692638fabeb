import re
import json
import logging
from dataclasses import dataclass
from typing import List, Optional

from models import MedicalHighlights, SummaryResult

logger = logging.getLogger(__name__)

_OPENING_FENCE = re.compile(r'^```(?:json)?[ \t]*\n?', re.IGNORECASE)
_CLOSING_FENCE = re.compile(r'\n?```$')

# JSON key -> MedicalHighlights attribute
HIGHLIGHT_FIELDS = {
    'symptoms': 'symptoms',
    'diagnoses': 'diagnoses',
    'medications': 'medications',
    'followUp': 'follow_up',
}


@dataclass
class SummaryParseOutcome:
    ok: bool
    result: Optional[SummaryResult] = None
    error: Optional[str] = None

    @classmethod
    def success(cls, result: SummaryResult) -> 'SummaryParseOutcome':
        return cls(ok=True, result=result)

    @classmethod
    def failure(cls, error: str) -> 'SummaryParseOutcome':
        return cls(ok=False, error=error)


def strip_code_fences(text: str) -> str:
    """Remove a markdown code fence (```json ... ```) wrapped around the text"""
    cleaned = text.strip()
    cleaned = _OPENING_FENCE.sub('', cleaned, count=1)
    cleaned = _CLOSING_FENCE.sub('', cleaned, count=1)
    return cleaned.strip()


def _string_list(value, key: str) -> List[str]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"'{key}' must be a list, got {type(value).__name__}")
    items = []
    for item in value:
        if not isinstance(item, str):
            raise ValueError(f"'{key}' must contain only strings")
        items.append(item)
    return items


def parse_summary_response(text: Optional[str]) -> SummaryParseOutcome:
    """
    Parse the summarizer's raw response into a SummaryResult.

    The response is expected to be a JSON object with a non-empty `summary`
    string and a `medicalHighlights` object. Missing highlight lists are
    treated as empty; lists holding anything but strings are rejected.
    """
    if not text or not text.strip():
        return SummaryParseOutcome.failure('Empty summary response')

    cleaned = strip_code_fences(text)

    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        return SummaryParseOutcome.failure(f'Summary response is not valid JSON: {e}')

    if not isinstance(data, dict):
        return SummaryParseOutcome.failure(
            f'Summary response must be a JSON object, got {type(data).__name__}'
        )

    summary = data.get('summary')
    if not isinstance(summary, str) or not summary.strip():
        return SummaryParseOutcome.failure("'summary' must be a non-empty string")

    highlights_data = data.get('medicalHighlights')
    if not isinstance(highlights_data, dict):
        return SummaryParseOutcome.failure("'medicalHighlights' must be an object")

    try:
        highlights = MedicalHighlights(**{
            attribute: _string_list(highlights_data.get(key), key)
            for key, attribute in HIGHLIGHT_FIELDS.items()
        })
    except ValueError as e:
        return SummaryParseOutcome.failure(str(e))

    return SummaryParseOutcome.success(SummaryResult(summary=summary.strip(), medical_highlights=highlights))
