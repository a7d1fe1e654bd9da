"""Voice role selection: language → voice lookup and per-chat active roles."""

import logging

from voicebot.constants import DEFAULT_VOICE, EN_VOICE, ZH_VOICE, JA_VOICE
from voicebot.models import Language, Segment

logger = logging.getLogger(__name__)

LANGUAGE_VOICES = {
    Language.EN: EN_VOICE,
    Language.ZH: ZH_VOICE,
    Language.JA: JA_VOICE,
}

# Roles offered by /settings
AVAILABLE_ROLES = [
    "en-US-AriaNeural",
    "zh-CN-XiaoxiaoNeural",
    "ja-JP-NanamiNeural",
]


def resolve_voice(
    language: Language,
    voices: dict | None = None,
    default: str = DEFAULT_VOICE,
) -> str:
    """Look up the voice for a language, falling back to default."""
    if voices is None:
        voices = LANGUAGE_VOICES
    return voices.get(language) or default


class VoiceRoleManager:
    """Tracks which synthesis voice each chat is using.

    The active role of a chat is what /tts speaks with; /settings replaces it.
    The current role is the voice of the last segment sent to synthesis.
    select_for() records it right before each synthesis call and hands it
    back, so callers pass the voice explicitly instead of reading shared
    state afterwards.
    """

    def __init__(self, voices: dict | None = None, default_voice: str = DEFAULT_VOICE):
        self.voices = dict(LANGUAGE_VOICES if voices is None else voices)
        self.default_voice = default_voice
        # In memory only; entries accumulate per chat and are never evicted
        self._selected: dict[int, str] = {}
        self._current: dict[int, str] = {}

    def resolve(self, language: Language) -> str:
        return resolve_voice(language, self.voices, self.default_voice)

    def active_role(self, chat_id: int) -> str:
        return self._selected.get(chat_id, self.default_voice)

    def current_role(self, chat_id: int) -> str | None:
        return self._current.get(chat_id)

    def update_role(self, chat_id: int, role: str) -> None:
        """Set the active role for a chat. Raises ValueError for unknown roles."""
        if role not in AVAILABLE_ROLES:
            raise ValueError(f"Unknown voice role: {role}")
        self._selected[chat_id] = role
        logger.info("Chat %s voice role set to %s", chat_id, role)

    def select_for(self, chat_id: int, language: Language) -> str:
        """Resolve the voice for language and record it as the chat's current role."""
        voice = self.resolve(language)
        self._current[chat_id] = voice
        logger.debug("Chat %s switching to %s for %s segment", chat_id, voice, language.value)
        return voice

    def assign_voices(self, segments: list[Segment]) -> None:
        """Assign voices to all segments in-place, in order."""
        for seg in segments:
            seg.voice = self.resolve(seg.language)
