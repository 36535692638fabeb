import logging
from typing import List

from models import Message, SummaryResult
from utils import database
from utils.exceptions import NotFoundError, SummaryFormatError, ValidationError
from utils.summary_parser import parse_summary_response

logger = logging.getLogger(__name__)


def build_transcript(messages: List[Message]) -> str:
    """Render messages as "<ROLE>: <text>" blocks separated by blank lines, in order."""
    return "\n\n".join(f"{message.role}: {message.original_text}" for message in messages)


def generate_summary(language_service, conversation_id: str) -> SummaryResult:
    """
    Summarize a conversation and store the narrative on it.

    Steps:
    1. Load every message for the conversation, oldest first
    2. Send the transcript to the language service
    3. Strip code fences and parse the response into a SummaryResult
    4. Overwrite the conversation's stored summary with the narrative

    Highlights are returned but not persisted. No retries are attempted.
    """
    if not isinstance(conversation_id, str) or not conversation_id:
        raise ValidationError('Conversation ID required')

    messages = database.get_messages(conversation_id)
    if not messages:
        logger.warning(f"Summary requested for conversation {conversation_id} with no messages")
        raise NotFoundError('No messages found for this conversation')

    transcript = build_transcript(messages)
    logger.info(f"Generating summary for conversation {conversation_id} from {len(messages)} messages")

    raw_response = language_service.summarize(transcript)

    outcome = parse_summary_response(raw_response)
    if not outcome.ok:
        logger.error(f"Unusable summary for conversation {conversation_id}: {outcome.error}")
        logger.debug(f"Summary response was: {raw_response}")
        raise SummaryFormatError('Failed to generate summary', details={'reason': outcome.error})

    result = outcome.result
    if not database.update_conversation_summary(conversation_id, result.summary):
        logger.warning(f"Conversation {conversation_id} was deleted before its summary could be stored")
        raise NotFoundError(f'Conversation with ID {conversation_id} not found')
    logger.info(f"Stored summary for conversation {conversation_id}")
    return result
