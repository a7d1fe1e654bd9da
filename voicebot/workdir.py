"""Work directory management and audio file naming."""

import os
import random
import time

from voicebot.constants import WORK_DIR


def init_work_dir(work_dir: str = WORK_DIR) -> str:
    """Create the work directory if missing. Returns its path."""
    os.makedirs(work_dir, exist_ok=True)
    return work_dir


def unique_audio_path(work_dir: str = WORK_DIR, ext: str = "mp3") -> str:
    """Build a fresh file path: <epoch-ms>_<random 0-9999>.<ext>.

    Files are never cleaned up.
    """
    stamp = int(time.time() * 1000)
    salt = random.randint(0, 9999)
    return os.path.join(work_dir, f"{stamp}_{salt}.{ext}")
