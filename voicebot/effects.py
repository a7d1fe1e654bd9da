"""Loudness levelling so neighbouring voices sound alike."""

from pydub import AudioSegment

from voicebot.constants import TARGET_DBFS


def normalize_levels(
    clips: list[AudioSegment],
    target_dbfs: float = TARGET_DBFS,
) -> list[AudioSegment]:
    """Normalize volume levels across all clips.

    Adjusts each clip so its dBFS is close to target_dbfs.
    Silent clips (dBFS = -inf) are left unchanged.
    """
    result = []
    for audio in clips:
        if audio.dBFS == float("-inf"):
            result.append(audio)
            continue
        change = target_dbfs - audio.dBFS
        result.append(audio + change)
    return result
