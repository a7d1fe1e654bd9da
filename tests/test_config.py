"""Tests for environment configuration."""

import pytest

from voicebot.config import load_settings
from voicebot.constants import CHAT_MODEL, DEFAULT_VOICE, WORK_DIR

_ALL_KEYS = (
    "TELEGRAM_TOKEN",
    "OPENAI_API_KEY",
    "VOICEBOT_WORK_DIR",
    "VOICEBOT_CHAT_MODEL",
    "VOICEBOT_TRANSCRIPTION_MODEL",
    "VOICEBOT_DEFAULT_VOICE",
    "VOICEBOT_TTS_RATE",
    "VOICEBOT_SYSTEM_PROMPT",
    "VOICEBOT_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    # setenv first so teardown also removes values load_dotenv writes
    for key in _ALL_KEYS:
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)


def test_load_settings_defaults(monkeypatch, tmp_path):
    monkeypatch.setenv("TELEGRAM_TOKEN", "123:abc")
    monkeypatch.setenv("OPENAI_API_KEY", "sk-x")
    settings = load_settings(str(tmp_path / "missing.env"))
    assert settings.telegram_token == "123:abc"
    assert settings.openai_api_key == "sk-x"
    assert settings.work_dir == WORK_DIR
    assert settings.chat_model == CHAT_MODEL
    assert settings.default_voice == DEFAULT_VOICE
    assert settings.log_level == "INFO"


def test_load_settings_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("TELEGRAM_TOKEN", "123:abc")
    monkeypatch.setenv("OPENAI_API_KEY", "sk-x")
    monkeypatch.setenv("VOICEBOT_WORK_DIR", "/var/tmp/bot")
    monkeypatch.setenv("VOICEBOT_DEFAULT_VOICE", "ja-JP-NanamiNeural")
    monkeypatch.setenv("VOICEBOT_TTS_RATE", "-10%")
    monkeypatch.setenv("VOICEBOT_LOG_LEVEL", "debug")
    settings = load_settings(str(tmp_path / "missing.env"))
    assert settings.work_dir == "/var/tmp/bot"
    assert settings.default_voice == "ja-JP-NanamiNeural"
    assert settings.tts_rate == "-10%"
    assert settings.log_level == "DEBUG"


def test_load_settings_from_env_file(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("TELEGRAM_TOKEN=999:file\nOPENAI_API_KEY=sk-file\nVOICEBOT_CHAT_MODEL=gpt-4o\n")
    settings = load_settings(str(env_file))
    assert settings.telegram_token == "999:file"
    assert settings.chat_model == "gpt-4o"


def test_environment_wins_over_env_file(monkeypatch, tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("TELEGRAM_TOKEN=999:file\nOPENAI_API_KEY=sk-file\n")
    monkeypatch.setenv("TELEGRAM_TOKEN", "123:env")
    assert load_settings(str(env_file)).telegram_token == "123:env"


def test_load_settings_missing_keys(tmp_path):
    with pytest.raises(RuntimeError) as info:
        load_settings(str(tmp_path / "missing.env"))
    assert "TELEGRAM_TOKEN" in str(info.value)
    assert "OPENAI_API_KEY" in str(info.value)
