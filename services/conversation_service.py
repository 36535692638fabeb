import logging
from typing import List, Optional

from models import Conversation, DEFAULT_CONVERSATION_TITLE
from utils import database
from utils.exceptions import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def create_conversation(title: Optional[str] = None) -> Conversation:
    """Create a conversation, defaulting a missing or blank title to "New Consultation"."""
    if title is not None and not isinstance(title, str):
        raise ValidationError('Title must be a string')
    title = (title or '').strip() or DEFAULT_CONVERSATION_TITLE
    conversation = database.create_conversation(title)
    logger.info(f"Created conversation {conversation.id} ({title})")
    return conversation


def list_conversations() -> List[Conversation]:
    """All conversations newest first, each with its latest message as a preview."""
    return database.list_conversations()


def get_conversation(conversation_id: str) -> Conversation:
    if not isinstance(conversation_id, str) or not conversation_id:
        raise ValidationError('Conversation ID required')
    conversation = database.get_conversation(conversation_id, include_messages=True)
    if not conversation:
        raise NotFoundError(f'Conversation with ID {conversation_id} not found')
    return conversation


def rename_conversation(conversation_id: str, title: Optional[str]) -> Conversation:
    if not isinstance(conversation_id, str) or not conversation_id:
        raise ValidationError('Conversation ID required')
    if title is not None and not isinstance(title, str):
        raise ValidationError('Title must be a string')
    title = (title or '').strip()
    if not title:
        raise ValidationError('Title cannot be empty')

    if not database.update_conversation_title(conversation_id, title):
        raise NotFoundError(f'Conversation with ID {conversation_id} not found')
    logger.info(f"Renamed conversation {conversation_id} to {title}")
    return database.get_conversation(conversation_id)


def delete_conversation(conversation_id: str) -> None:
    if not isinstance(conversation_id, str) or not conversation_id:
        raise ValidationError('Conversation ID required')
    if not database.delete_conversation(conversation_id):
        raise NotFoundError(f'Conversation with ID {conversation_id} not found')
    logger.info(f"Deleted conversation {conversation_id} and its messages")
