"""Tests for voice role selection."""

import pytest

from voicebot.constants import DEFAULT_VOICE
from voicebot.models import Language, Segment
from voicebot.voices import (
    AVAILABLE_ROLES,
    LANGUAGE_VOICES,
    VoiceRoleManager,
    resolve_voice,
)


def test_resolve_voice_table():
    assert resolve_voice(Language.EN) == "en-US-AriaNeural"
    assert resolve_voice(Language.ZH) == "zh-CN-XiaoxiaoNeural"
    assert resolve_voice(Language.JA) == "ja-JP-NanamiNeural"


def test_resolve_voice_unknown_uses_default():
    assert resolve_voice(Language.UNKNOWN) == DEFAULT_VOICE
    assert resolve_voice(Language.UNKNOWN, default="en-GB-SoniaNeural") == "en-GB-SoniaNeural"


def test_resolve_voice_custom_table_falls_back():
    voices = {Language.ZH: "zh-TW-HsiaoChenNeural"}
    assert resolve_voice(Language.ZH, voices) == "zh-TW-HsiaoChenNeural"
    assert resolve_voice(Language.JA, voices) == DEFAULT_VOICE


def test_manager_unknown_uses_configured_default():
    roles = VoiceRoleManager(default_voice="en-IE-EmilyNeural")
    assert roles.resolve(Language.UNKNOWN) == "en-IE-EmilyNeural"


def test_manager_table_is_copied():
    roles = VoiceRoleManager()
    roles.voices[Language.EN] = "en-GB-RyanNeural"
    assert LANGUAGE_VOICES[Language.EN] == "en-US-AriaNeural"


def test_active_role_defaults_and_updates():
    roles = VoiceRoleManager()
    assert roles.active_role(1) == DEFAULT_VOICE
    roles.update_role(1, "ja-JP-NanamiNeural")
    assert roles.active_role(1) == "ja-JP-NanamiNeural"
    assert roles.active_role(2) == DEFAULT_VOICE


def test_update_role_rejects_unknown():
    roles = VoiceRoleManager()
    with pytest.raises(ValueError, match="Unknown voice role"):
        roles.update_role(1, "xx-XX-NobodyNeural")
    assert roles.active_role(1) == DEFAULT_VOICE


def test_select_for_records_current_role():
    roles = VoiceRoleManager()
    assert roles.current_role(5) is None
    voice = roles.select_for(5, Language.ZH)
    assert voice == "zh-CN-XiaoxiaoNeural"
    assert roles.current_role(5) == voice


def test_select_for_keeps_settings_choice():
    """Per-segment selection does not overwrite the /settings role."""
    roles = VoiceRoleManager()
    roles.update_role(5, "ja-JP-NanamiNeural")
    roles.select_for(5, Language.EN)
    assert roles.active_role(5) == "ja-JP-NanamiNeural"


def test_assign_voices(sample_segments):
    roles = VoiceRoleManager()
    roles.assign_voices(sample_segments)
    assert [s.voice for s in sample_segments] == [
        "en-US-AriaNeural", "zh-CN-XiaoxiaoNeural", "ja-JP-NanamiNeural",
    ]


def test_assign_voices_unknown():
    segs = [Segment(text="???", language=Language.UNKNOWN)]
    VoiceRoleManager().assign_voices(segs)
    assert segs[0].voice == DEFAULT_VOICE


def test_available_roles_cover_languages():
    for voice in LANGUAGE_VOICES.values():
        assert voice in AVAILABLE_ROLES
