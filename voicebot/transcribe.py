"""Speech-to-text via the OpenAI Whisper API."""

import logging

from voicebot.constants import TRANSCRIPTION_MODEL

logger = logging.getLogger(__name__)


async def transcribe(client, audio_path: str, model: str = TRANSCRIPTION_MODEL) -> str:
    """Transcribe an audio file with Whisper.

    Args:
        client: An ``openai.AsyncOpenAI`` client.
        audio_path: Path to an MP3 (or any format Whisper accepts).
        model: Transcription model name.

    Returns:
        The transcribed text, stripped. Empty if Whisper heard nothing.

    Raises:
        RuntimeError: If the Whisper API call fails. The API error is
            chained as ``__cause__``.
    """
    try:
        with open(audio_path, "rb") as audio_file:
            response = await client.audio.transcriptions.create(
                model=model,
                file=audio_file,
            )
    except Exception as exc:
        raise RuntimeError(f"Whisper transcription failed: {exc}") from exc

    text = (getattr(response, "text", "") or "").strip()
    logger.info("Transcribed %s: %d chars", audio_path, len(text))
    return text
