"""Fetch Telegram voice notes and convert them for transcription."""

import asyncio
import logging
import os

from pydub import AudioSegment

from voicebot.constants import WORK_DIR
from voicebot.workdir import unique_audio_path

logger = logging.getLogger(__name__)


def convert_to_mp3(source_path: str, output_path: str) -> str:
    """Convert an OGG/Opus voice note to MP3 (needs ffmpeg)."""
    AudioSegment.from_file(source_path, format="ogg").export(output_path, format="mp3")
    return output_path


async def download_voice_file(bot, file_id: str, work_dir: str = WORK_DIR) -> str:
    """Download a voice note by file id and convert it to MP3.

    Returns the MP3 path. The original .oga download stays next to it.
    """
    tg_file = await bot.get_file(file_id)
    oga_path = unique_audio_path(work_dir, ext="oga")
    await tg_file.download_to_drive(oga_path)

    mp3_path = os.path.splitext(oga_path)[0] + ".mp3"
    await asyncio.to_thread(convert_to_mp3, oga_path, mp3_path)
    logger.info("Downloaded voice %s -> %s", file_id, mp3_path)
    return mp3_path
