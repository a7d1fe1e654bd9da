"""Split reply text into script runs and tag each run with a detected language."""

import re
from enum import Enum

from voicebot.models import Language, Segment

# Inclusive code point ranges per script
HAN_RANGES = (
    (0x3400, 0x4DBF),    # CJK Unified Ideographs Extension A
    (0x4E00, 0x9FFF),    # CJK Unified Ideographs
    (0xF900, 0xFAFF),    # CJK Compatibility Ideographs
    (0x20000, 0x2A6DF),  # CJK Unified Ideographs Extension B
)

KANA_RANGES = (
    (0x3040, 0x309F),    # Hiragana
    (0x30A0, 0x30FF),    # Katakana
    (0x31F0, 0x31FF),    # Katakana Phonetic Extensions
    (0xFF66, 0xFF9F),    # Halfwidth Katakana
)

LATIN_RANGES = (
    (0x0041, 0x005A),    # A-Z
    (0x0061, 0x007A),    # a-z
    (0x00C0, 0x00D6),    # Latin-1 letters (skips U+00D7 multiplication sign)
    (0x00D8, 0x00F6),    # (skips U+00F7 division sign)
    (0x00F8, 0x00FF),
    (0x0100, 0x017F),    # Latin Extended-A
)


class Script(str, Enum):
    HAN = "han"
    KANA = "kana"
    LATIN = "latin"
    SPACE = "space"
    OTHER = "other"


def _char_class(ranges: tuple) -> str:
    """Render a range table as the body of a regex character class."""
    return "".join(f"\\U{lo:08X}-\\U{hi:08X}" for lo, hi in ranges)


_CJK_CLASS = _char_class(HAN_RANGES) + _char_class(KANA_RANGES)
_LATIN_CLASS = _char_class(LATIN_RANGES)

# Two alternated runs: Han/Kana, or Latin letters mixed with whitespace.
# Anything else (digits, punctuation, emoji) matches neither and is skipped.
_SEGMENT_RE = re.compile(rf"[{_CJK_CLASS}]+|[{_LATIN_CLASS}\s]+")


def _in_ranges(code: int, ranges: tuple) -> bool:
    return any(lo <= code <= hi for lo, hi in ranges)


def classify_char(ch: str) -> Script:
    """Classify a single character by Unicode script range."""
    code = ord(ch)
    if _in_ranges(code, HAN_RANGES):
        return Script.HAN
    if _in_ranges(code, KANA_RANGES):
        return Script.KANA
    if _in_ranges(code, LATIN_RANGES):
        return Script.LATIN
    if ch.isspace():
        return Script.SPACE
    return Script.OTHER


def detect_language(text: str) -> Language:
    """Detect the language of a string from the scripts it contains.

    Priority: any Han character → zh, else any Kana → ja, else any Latin
    letter → en, else unknown. Never raises.
    """
    scripts = {classify_char(ch) for ch in text}
    if Script.HAN in scripts:
        return Language.ZH
    if Script.KANA in scripts:
        return Language.JA
    if Script.LATIN in scripts:
        return Language.EN
    return Language.UNKNOWN


class Segmentation:
    """Lazy, finite, re-iterable sequence of Segments for one string.

    Each iteration re-scans the text, so the same object can be walked more
    than once. Whitespace-only runs are dropped.
    """

    def __init__(self, text: str):
        self.text = text

    def __iter__(self):
        for match in _SEGMENT_RE.finditer(self.text):
            span = match.group(0)
            if not span.strip():
                continue
            yield Segment(text=span, language=detect_language(span))

    def __repr__(self) -> str:
        return f"Segmentation({self.text!r})"


def segment_text(text: str) -> Segmentation:
    """Split text into ordered same-script Segments."""
    return Segmentation(text)


def dominant_language(text: str) -> Language:
    """Language covering the most characters in text.

    Ties go to the language seen first. Returns unknown when nothing in the
    text can be segmented.
    """
    totals: dict[Language, int] = {}
    for seg in segment_text(text):
        totals[seg.language] = totals.get(seg.language, 0) + len(seg.text.strip())
    if not totals:
        return Language.UNKNOWN
    return max(totals, key=totals.get)
