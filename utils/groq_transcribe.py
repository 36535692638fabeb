import os
import logging
import requests
from dotenv import load_dotenv

from utils.exceptions import TranscriptionError

load_dotenv()

logger = logging.getLogger(__name__)

TRANSCRIPTION_URL = "https://api.groq.com/openai/v1/audio/transcriptions"
DEFAULT_AUDIO_FILENAME = "audio.webm"

AUDIO_CONTENT_TYPES = {
    ".webm": "audio/webm",
    ".wav": "audio/wav",
    ".mp3": "audio/mpeg",
    ".m4a": "audio/mp4",
    ".ogg": "audio/ogg",
    ".flac": "audio/flac",
}


def transcribe_audio_data(audio_bytes, api_key, model="whisper-large-v3", timeout=30.0,
                          filename=DEFAULT_AUDIO_FILENAME):
    """
    Transcribe a single compressed audio clip using the Groq API.

    Args:
        audio_bytes (bytes): Raw audio data in bytes
        api_key (str): Groq API key
        model (str): Groq Whisper model to use
        timeout (float): Seconds to wait for the API before giving up
        filename (str): Name sent with the upload; its extension tells the
            API the container format

    Returns:
        str: Transcribed text, stripped (may be empty when nothing was recognized)

    Raises:
        TranscriptionError: If the request fails or the API returns an error
    """
    filename = filename or DEFAULT_AUDIO_FILENAME
    extension = os.path.splitext(filename)[1].lower()
    content_type = AUDIO_CONTENT_TYPES.get(extension, "application/octet-stream")
    headers = {
        "Authorization": f"Bearer {api_key}"
    }
    files = {
        "file": (filename, audio_bytes, content_type),
        "model": (None, model),
        "response_format": (None, "json"),
        "temperature": (None, "0.0")
    }

    logger.info(f"Transcribing {len(audio_bytes)} bytes of audio with model: {model}")

    try:
        response = requests.post(TRANSCRIPTION_URL, headers=headers, files=files, timeout=timeout)
    except requests.RequestException as e:
        logger.error(f"Error calling Groq transcription API: {e}")
        raise TranscriptionError("Failed to transcribe audio") from e

    if response.status_code != 200:
        logger.error(f"Error from Groq API: Status {response.status_code}")
        logger.debug(f"Response: {response.text}")
        raise TranscriptionError(
            "Failed to transcribe audio",
            details={'upstream_status': response.status_code}
        )

    try:
        transcription_data = response.json()
    except ValueError as e:
        logger.error(f"Groq transcription response was not JSON: {e}")
        raise TranscriptionError("Failed to transcribe audio") from e

    return (transcription_data.get("text") or "").strip()


# Command-line usage for checking a recording by hand
if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Transcribe speech from an audio file using Groq API")
    parser.add_argument("--file", type=str, required=True,
                        help="Path to the audio file to transcribe")
    parser.add_argument("--model", type=str, default="whisper-large-v3",
                        choices=["whisper-large-v3-turbo", "whisper-large-v3"],
                        help="Groq Whisper model to use")

    args = parser.parse_args()

    with open(args.file, "rb") as f:
        audio_bytes = f.read()

    transcription = transcribe_audio_data(
        audio_bytes, os.environ.get("GROQ_API_KEY"), args.model,
        filename=os.path.basename(args.file)
    )

    if transcription:
        print(f"\nTranscription: {transcription}")
    else:
        print("\nNo transcription was produced.")
