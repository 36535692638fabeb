import os
import logging

from groq import Groq, GroqError
from dotenv import load_dotenv

from models import LANGUAGE_NAMES
from utils.exceptions import ConfigurationError, SummaryError, TranslationError
from utils.groq_transcribe import DEFAULT_AUDIO_FILENAME, transcribe_audio_data

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_CHAT_MODEL = "llama-3.3-70b-versatile"
DEFAULT_TRANSCRIPTION_MODEL = "whisper-large-v3"

TRANSLATION_SYSTEM_PROMPT = (
    "You are a professional medical translator specializing in English-Hindi translation. "
    "Provide accurate translations while preserving medical terminology. "
    "Only provide the translation, no explanations or extra text."
)

SUMMARY_SYSTEM_PROMPT = (
    "You are a medical AI assistant that analyzes doctor-patient conversations. "
    "Always respond with valid JSON only, no markdown, no backticks, no extra text."
)

SUMMARY_PROMPT_TEMPLATE = """Analyze this doctor-patient conversation and return ONLY a JSON object with this exact structure:
{{
  "summary": "Brief overview of the consultation",
  "medicalHighlights": {{
    "symptoms": ["symptom1", "symptom2"],
    "diagnoses": ["diagnosis1"],
    "medications": ["medication1"],
    "followUp": ["action1", "action2"]
  }}
}}

Conversation:
{transcript}"""


class GroqLanguageService:
    """
    Translation, transcription and summarization backed by the Groq API.

    The Groq client is built on first use, so a missing API key surfaces as a
    ConfigurationError from the first real call rather than at import or app
    construction. Every call is bounded by `timeout` and the SDK's automatic
    retries are disabled.
    """

    def __init__(self, api_key=None, chat_model=DEFAULT_CHAT_MODEL,
                 transcription_model=DEFAULT_TRANSCRIPTION_MODEL, timeout=30.0):
        self.api_key = api_key
        self.chat_model = chat_model
        self.transcription_model = transcription_model
        self.timeout = timeout
        self._client = None

    def _require_api_key(self):
        if not self.api_key:
            logger.error("GROQ_API_KEY is not set; language service unavailable")
            raise ConfigurationError("GROQ_API_KEY environment variable not set")
        return self.api_key

    @property
    def client(self):
        if self._client is None:
            api_key = self._require_api_key()
            self._client = Groq(api_key=api_key, timeout=self.timeout, max_retries=0)
            logger.info("Groq client initialized")
        return self._client

    def translate(self, text, source_lang, target_lang):
        """
        Translate `text` from `source_lang` to `target_lang` ("en" or "hi").

        Raises:
            TranslationError: If the API call fails or returns no text
        """
        client = self.client
        source_name = LANGUAGE_NAMES.get(source_lang, source_lang)
        target_name = LANGUAGE_NAMES.get(target_lang, target_lang)

        try:
            chat_completion = client.chat.completions.create(
                model=self.chat_model,
                messages=[
                    {"role": "system", "content": TRANSLATION_SYSTEM_PROMPT},
                    {"role": "user", "content": f"Translate the following {source_name} text to {target_name}:\n\n{text}"}
                ],
                temperature=0.3,
            )
        except GroqError as e:
            logger.error(f"Error during Groq translation call: {e}")
            raise TranslationError("Failed to translate message") from e

        translated = (chat_completion.choices[0].message.content or "").strip()
        if not translated:
            logger.error(f"Groq returned an empty translation ({source_lang} -> {target_lang})")
            raise TranslationError("Failed to translate message")
        return translated

    def summarize(self, transcript):
        """
        Ask the model for a JSON summary of the conversation transcript.

        Returns the raw response text; parsing is the caller's job.
        """
        client = self.client

        try:
            chat_completion = client.chat.completions.create(
                model=self.chat_model,
                messages=[
                    {"role": "system", "content": SUMMARY_SYSTEM_PROMPT},
                    {"role": "user", "content": SUMMARY_PROMPT_TEMPLATE.format(transcript=transcript)}
                ],
                temperature=0.5,
            )
        except GroqError as e:
            logger.error(f"Error during Groq summary call: {e}")
            raise SummaryError("Failed to generate summary") from e

        return (chat_completion.choices[0].message.content or "").strip()

    def transcribe(self, audio_bytes, filename=DEFAULT_AUDIO_FILENAME):
        api_key = self._require_api_key()
        return transcribe_audio_data(
            audio_bytes,
            api_key,
            model=self.transcription_model,
            timeout=self.timeout,
            filename=filename
        )


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Translate a sentence between English and Hindi with Groq")
    parser.add_argument("--text", type=str, required=True, help="Text to translate")
    parser.add_argument("--source", type=str, default="en", choices=sorted(LANGUAGE_NAMES))
    parser.add_argument("--target", type=str, default="hi", choices=sorted(LANGUAGE_NAMES))
    parser.add_argument("--model", type=str, default=DEFAULT_CHAT_MODEL, help="Groq model to use")

    args = parser.parse_args()

    service = GroqLanguageService(api_key=os.environ.get("GROQ_API_KEY"), chat_model=args.model)
    print(service.translate(args.text, args.source, args.target))
