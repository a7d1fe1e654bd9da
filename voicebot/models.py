"""Data models for message segmentation and voicing."""

from dataclasses import dataclass
from enum import Enum


class Language(str, Enum):
    EN = "en"
    ZH = "zh"
    JA = "ja"
    UNKNOWN = "unknown"


@dataclass
class Segment:
    text: str
    language: Language
    voice: str = ""    # populated by VoiceRoleManager.assign_voices()


@dataclass(frozen=True)
class ChatTurn:
    role: str          # "user" or "assistant"
    content: str
