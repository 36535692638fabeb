import logging

from utils.exceptions import TranscriptionError, ValidationError

logger = logging.getLogger(__name__)


def transcribe_audio(language_service, audio_bytes, filename=None):
    """Transcribe one uploaded clip; an empty recognition result counts as a failure."""
    if not audio_bytes:
        raise ValidationError('No audio data received')

    text = language_service.transcribe(audio_bytes, filename=filename)
    if not text:
        logger.warning(f"Transcription produced no text for {len(audio_bytes)} bytes of audio")
        raise TranscriptionError('No speech could be recognized in the recording')

    logger.info(f"Transcribed audio clip ({len(audio_bytes)} bytes, {len(text)} characters)")
    return text
