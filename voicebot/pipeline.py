"""Turn reply text into one voice file: pick voices, synthesize, stitch."""

import asyncio
import logging

from voicebot.assembly import assemble
from voicebot.constants import TTS_RATE, WORK_DIR
from voicebot.segmenter import segment_text, dominant_language
from voicebot.tts import synthesize, synthesize_segments
from voicebot.voices import VoiceRoleManager

logger = logging.getLogger(__name__)

# Synthesis modes, named after the bot commands that use them
MODE_TTS = "tts"    # whole text, chat's active role
MODE_MTS = "mts"    # whole text, voice of its dominant language
MODE_MIX = "mix"    # one voice per language segment, stitched together
MODES = (MODE_TTS, MODE_MTS, MODE_MIX)


async def synthesize_mixed(
    text: str,
    roles: VoiceRoleManager,
    chat_id: int,
    work_dir: str = WORK_DIR,
    rate: str = TTS_RATE,
) -> str | None:
    """Voice every language segment of text and join the clips.

    Returns the MP3 path, or None when nothing in text can be voiced
    (digits, punctuation and whitespace are dropped by the segmenter).
    """
    segments = list(segment_text(text))
    if not segments:
        logger.info("No voiceable segments in %r", text[:50])
        return None

    paths = await synthesize_segments(segments, roles, chat_id, work_dir, rate=rate)
    return await asyncio.to_thread(assemble, segments, paths, work_dir)


async def synthesize_dominant(
    text: str,
    roles: VoiceRoleManager,
    chat_id: int,
    work_dir: str = WORK_DIR,
    rate: str = TTS_RATE,
) -> str:
    """Voice the whole text with the voice of its dominant language."""
    voice = roles.select_for(chat_id, dominant_language(text))
    return await synthesize(text, voice, work_dir, rate=rate)


async def speak(
    text: str,
    mode: str,
    roles: VoiceRoleManager,
    chat_id: int,
    work_dir: str = WORK_DIR,
    rate: str = TTS_RATE,
) -> str | None:
    """Synthesize text in the given mode. Returns the MP3 path or None."""
    if mode == MODE_TTS:
        return await synthesize(text, roles.active_role(chat_id), work_dir, rate=rate)
    if mode == MODE_MTS:
        return await synthesize_dominant(text, roles, chat_id, work_dir, rate=rate)
    if mode == MODE_MIX:
        return await synthesize_mixed(text, roles, chat_id, work_dir, rate=rate)
    raise ValueError(f"Unknown synthesis mode: {mode}")
