from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

DEFAULT_CONVERSATION_TITLE = 'New Consultation'

ROLE_DOCTOR = 'DOCTOR'
ROLE_PATIENT = 'PATIENT'
ROLES = (ROLE_DOCTOR, ROLE_PATIENT)

LANGUAGE_NAMES = {
    'en': 'English',
    'hi': 'Hindi',
}
LANGUAGES = tuple(LANGUAGE_NAMES)


@dataclass
class Message:
    id: str
    conversation_id: str
    role: str
    original_text: str
    translated_text: Optional[str]
    original_lang: str
    target_lang: str
    audio_url: Optional[str]
    created_at: str

    @classmethod
    def from_row(cls, row) -> 'Message':
        return cls(
            id=row['id'],
            conversation_id=row['conversation_id'],
            role=row['role'],
            original_text=row['original_text'],
            translated_text=row['translated_text'],
            original_lang=row['original_lang'],
            target_lang=row['target_lang'],
            audio_url=row['audio_url'],
            created_at=row['created_at'],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'conversation_id': self.conversation_id,
            'role': self.role,
            'original_text': self.original_text,
            'translated_text': self.translated_text,
            'original_lang': self.original_lang,
            'target_lang': self.target_lang,
            'audio_url': self.audio_url,
            'created_at': self.created_at,
        }


@dataclass
class Conversation:
    id: str
    title: str
    created_at: str
    updated_at: str
    summary: Optional[str] = None
    latest_message: Optional[Message] = None
    messages: Optional[List[Message]] = None

    @classmethod
    def from_row(cls, row) -> 'Conversation':
        return cls(
            id=row['id'],
            title=row['title'],
            created_at=row['created_at'],
            updated_at=row['updated_at'],
            summary=row['summary'],
        )

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'id': self.id,
            'title': self.title,
            'summary': self.summary,
            'created_at': self.created_at,
            'updated_at': self.updated_at,
        }
        if self.messages is not None:
            data['messages'] = [message.to_dict() for message in self.messages]
        else:
            data['latest_message'] = self.latest_message.to_dict() if self.latest_message else None
        return data


@dataclass
class MedicalHighlights:
    symptoms: List[str] = field(default_factory=list)
    diagnoses: List[str] = field(default_factory=list)
    medications: List[str] = field(default_factory=list)
    follow_up: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, List[str]]:
        return {
            'symptoms': list(self.symptoms),
            'diagnoses': list(self.diagnoses),
            'medications': list(self.medications),
            'follow_up': list(self.follow_up),
        }


@dataclass
class SummaryResult:
    """Narrative summary plus highlights; only `summary` is persisted"""
    summary: str
    medical_highlights: MedicalHighlights = field(default_factory=MedicalHighlights)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'summary': self.summary,
            'medical_highlights': self.medical_highlights.to_dict(),
        }
