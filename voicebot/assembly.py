"""Stitch per-segment clips into a single voice reply."""

from pydub import AudioSegment

from voicebot.constants import (
    PAUSE_SAME_LANGUAGE_MS,
    PAUSE_LANGUAGE_CHANGE_MS,
    OUTPUT_BITRATE,
    WORK_DIR,
)
from voicebot.effects import normalize_levels
from voicebot.models import Segment
from voicebot.workdir import unique_audio_path


def _calculate_pause(prev: Segment, curr: Segment) -> int:
    """Pause between two segments: longer where the voice changes."""
    if prev.voice != curr.voice or prev.language != curr.language:
        return PAUSE_LANGUAGE_CHANGE_MS
    return PAUSE_SAME_LANGUAGE_MS


def concatenate_with_pauses(
    segments: list[Segment],
    clips: list[AudioSegment],
) -> AudioSegment:
    """Concatenate clips with voice-aware pauses."""
    if not clips:
        return AudioSegment.silent(duration=0)

    result = clips[0]
    for i in range(1, len(clips)):
        pause_ms = _calculate_pause(segments[i - 1], segments[i])
        result += AudioSegment.silent(duration=pause_ms) + clips[i]

    return result


def assemble(
    segments: list[Segment],
    paths: list[str],
    work_dir: str = WORK_DIR,
    normalize: bool = True,
) -> str:
    """Load segment clips, level them, join them and export one MP3.

    Returns the path of the assembled file. A single clip is returned as-is.
    """
    if len(paths) == 1:
        return paths[0]

    clips = [AudioSegment.from_file(p, format="mp3") for p in paths]
    if normalize:
        clips = normalize_levels(clips)

    joined = concatenate_with_pauses(segments, clips)
    output_path = unique_audio_path(work_dir)
    joined.export(output_path, format="mp3", bitrate=OUTPUT_BITRATE)
    return output_path
