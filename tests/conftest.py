"""Shared fixtures for voicebot tests."""

import os
from unittest.mock import AsyncMock, MagicMock

import pytest
from pydub import AudioSegment

from voicebot.chat import ChatModel
from voicebot.config import Settings
from voicebot.handlers import BotServices
from voicebot.models import Language, Segment
from voicebot.voices import VoiceRoleManager


@pytest.fixture
def tiny_mp3(tmp_path):
    """Generate a 100ms silent MP3 for testing."""
    path = tmp_path / "test.mp3"
    silence = AudioSegment.silent(duration=100)
    silence.export(str(path), format="mp3")
    return path


@pytest.fixture
def sample_segments():
    """Pre-built mixed-language segments."""
    return [
        Segment(text="Hello ", language=Language.EN),
        Segment(text="世界", language=Language.ZH),
        Segment(text="こんにちは", language=Language.JA),
    ]


@pytest.fixture
def settings(tmp_path):
    return Settings(
        telegram_token="123456:TEST",
        openai_api_key="sk-test",
        work_dir=str(tmp_path / "work"),
    )


@pytest.fixture
def services(settings):
    """BotServices with a mocked OpenAI client."""
    os.makedirs(settings.work_dir, exist_ok=True)
    client = MagicMock()
    client.chat.completions.create = AsyncMock()
    client.audio.transcriptions.create = AsyncMock()
    return BotServices(
        settings=settings,
        chat=ChatModel(client),
        roles=VoiceRoleManager(),
        openai_client=client,
    )
