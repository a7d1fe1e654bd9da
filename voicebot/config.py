"""Runtime settings from the environment (and an optional .env file)."""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from voicebot.constants import (
    WORK_DIR,
    CHAT_MODEL,
    TRANSCRIPTION_MODEL,
    DEFAULT_VOICE,
    TTS_RATE,
    SYSTEM_PROMPT,
)

REQUIRED_KEYS = ("TELEGRAM_TOKEN", "OPENAI_API_KEY")


@dataclass
class Settings:
    telegram_token: str
    openai_api_key: str
    work_dir: str = WORK_DIR
    chat_model: str = CHAT_MODEL
    transcription_model: str = TRANSCRIPTION_MODEL
    default_voice: str = DEFAULT_VOICE
    tts_rate: str = TTS_RATE
    system_prompt: str = SYSTEM_PROMPT
    log_level: str = "INFO"


def load_settings(env_file: str | None = None) -> Settings:
    """Build Settings from .env plus the process environment.

    Variables already set in the environment win over the .env file.
    Raises RuntimeError naming every missing required variable.
    """
    load_dotenv(env_file)

    missing = [key for key in REQUIRED_KEYS if not os.environ.get(key)]
    if missing:
        raise RuntimeError(f"Missing required environment variables: {', '.join(missing)}")

    env = os.environ
    return Settings(
        telegram_token=env["TELEGRAM_TOKEN"],
        openai_api_key=env["OPENAI_API_KEY"],
        work_dir=env.get("VOICEBOT_WORK_DIR", WORK_DIR),
        chat_model=env.get("VOICEBOT_CHAT_MODEL", CHAT_MODEL),
        transcription_model=env.get("VOICEBOT_TRANSCRIPTION_MODEL", TRANSCRIPTION_MODEL),
        default_voice=env.get("VOICEBOT_DEFAULT_VOICE", DEFAULT_VOICE),
        tts_rate=env.get("VOICEBOT_TTS_RATE", TTS_RATE),
        system_prompt=env.get("VOICEBOT_SYSTEM_PROMPT", SYSTEM_PROMPT),
        log_level=env.get("VOICEBOT_LOG_LEVEL", "INFO").upper(),
    )
