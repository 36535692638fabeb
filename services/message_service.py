import logging
from typing import List, Optional

from models import LANGUAGES, ROLES, Message
from utils import database
from utils.exceptions import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def requires_translation(source_lang: str, target_lang: str) -> bool:
    """Translating a language into itself is skipped."""
    return source_lang != target_lang


def _validate_language(value, field_name):
    if value not in LANGUAGES:
        raise ValidationError(f"{field_name} must be one of: {', '.join(LANGUAGES)}")
    return value


def _normalize_role(role):
    normalized = role.strip().upper() if isinstance(role, str) else ''
    if normalized not in ROLES:
        raise ValidationError(f"role must be one of: {', '.join(ROLES)}")
    return normalized


def create_message(language_service, conversation_id: str, role: str, text: str,
                   original_lang: str, target_lang: str, audio_url: Optional[str] = None) -> Message:
    """
    Store one conversation turn, translating it first when the languages differ.

    The message is written only after the translation has resolved. If the
    translation fails, TranslationError propagates and nothing is stored.

    Args:
        language_service: Object providing translate(text, source_lang, target_lang)
        conversation_id: Conversation the message belongs to
        role: DOCTOR or PATIENT (case-insensitive)
        text: The text as entered or transcribed
        original_lang: Language of `text` ("en" or "hi")
        target_lang: Language to translate into ("en" or "hi")
        audio_url: Set when the message came from a voice recording

    Returns:
        Message: The stored record
    """
    if not isinstance(conversation_id, str) or not conversation_id:
        raise ValidationError('Conversation ID required')
    if not isinstance(text, str) or not text.strip():
        raise ValidationError('Message text cannot be empty')
    role = _normalize_role(role)
    _validate_language(original_lang, 'original_lang')
    _validate_language(target_lang, 'target_lang')
    if audio_url is not None and not isinstance(audio_url, str):
        raise ValidationError('audio_url must be a string')

    if not database.conversation_exists(conversation_id):
        logger.warning(f"Message rejected: conversation {conversation_id} does not exist")
        raise NotFoundError(f'Conversation with ID {conversation_id} not found')

    translated_text = None
    if requires_translation(original_lang, target_lang):
        logger.debug(f"Translating {role} message for {conversation_id}: {original_lang} -> {target_lang}")
        translated_text = language_service.translate(text, original_lang, target_lang)

    message = database.add_message(
        conversation_id,
        role,
        text,
        translated_text,
        original_lang,
        target_lang,
        audio_url or None
    )
    logger.info(f"Stored message {message.id} in conversation {conversation_id} "
                f"(translated: {translated_text is not None})")
    return message


def list_messages(conversation_id: str, search: Optional[str] = None) -> List[Message]:
    """Messages oldest first; `search` filters on original or translated text, ignoring case."""
    if not isinstance(conversation_id, str) or not conversation_id:
        raise ValidationError('Conversation ID required')
    return database.get_messages(conversation_id, search or None)
