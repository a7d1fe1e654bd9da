"""TTS generation via edge-tts with retry logic."""

import asyncio
import logging
import os

import edge_tts

from voicebot.constants import TTS_RETRY_COUNT, TTS_RETRY_BASE_DELAY, TTS_RATE, WORK_DIR
from voicebot.models import Segment
from voicebot.voices import VoiceRoleManager
from voicebot.workdir import unique_audio_path

logger = logging.getLogger(__name__)


async def generate_single(text: str, voice: str, output_path: str, rate: str = TTS_RATE) -> None:
    """Generate a single TTS clip with retry logic.

    Retries on network errors, HTTP errors, or 0-byte output files. Rate is a
    relative string like "-10%".
    """
    last_error = None
    for attempt in range(TTS_RETRY_COUNT):
        try:
            communicate = edge_tts.Communicate(text, voice, rate=rate)
            await communicate.save(output_path)

            # Validate output: 0-byte file counts as failure
            if os.path.exists(output_path) and os.path.getsize(output_path) > 0:
                return

            last_error = RuntimeError(f"TTS produced 0-byte file for: {text[:50]}...")
        except Exception as e:
            last_error = e

        if attempt < TTS_RETRY_COUNT - 1:
            delay = TTS_RETRY_BASE_DELAY * (2 ** attempt)
            logger.warning(
                "Synthesis attempt %d/%d with %s failed: %s, retrying in %.1fs",
                attempt + 1, TTS_RETRY_COUNT, voice, last_error, delay,
            )
            await asyncio.sleep(delay)

    raise last_error


async def synthesize(text: str, voice: str, work_dir: str = WORK_DIR, rate: str = TTS_RATE) -> str:
    """Synthesize text with one voice. Returns the path of the new MP3."""
    output_path = unique_audio_path(work_dir)
    await generate_single(text, voice, output_path, rate=rate)
    logger.info("Synthesized %d chars with %s -> %s", len(text), voice, output_path)
    return output_path


async def synthesize_segments(
    segments: list[Segment],
    roles: VoiceRoleManager,
    chat_id: int,
    work_dir: str = WORK_DIR,
    rate: str = TTS_RATE,
) -> list[str]:
    """Synthesize every segment with the voice of its language.

    Strictly sequential: the role for a segment is selected immediately
    before its synthesis call. Fills Segment.voice and returns output paths
    in segment order.
    """
    total = len(segments)
    paths = []

    for i, seg in enumerate(segments):
        seg.voice = roles.select_for(chat_id, seg.language)
        logger.debug("Segment %d/%d (%s) with %s", i + 1, total, seg.language.value, seg.voice)
        paths.append(await synthesize(seg.text, seg.voice, work_dir, rate=rate))

    return paths
