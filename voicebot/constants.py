"""All magic numbers and configuration constants."""

WORK_DIR = "tmp"                              # downloaded and synthesized audio lands here
DEFAULT_VOICE = "en-US-AriaNeural"            # fallback voice for undetected languages
EN_VOICE = "en-US-AriaNeural"
ZH_VOICE = "zh-CN-XiaoxiaoNeural"
JA_VOICE = "ja-JP-NanamiNeural"
TTS_RETRY_COUNT = 3                           # max attempts per synthesis call
TTS_RETRY_BASE_DELAY = 1.0                    # seconds, base delay for exponential backoff
TTS_RATE = "+0%"                              # relative speech rate passed to edge-tts
PAUSE_SAME_LANGUAGE_MS = 120                  # ms pause between same-language segments
PAUSE_LANGUAGE_CHANGE_MS = 250                # ms pause where the voice changes
TARGET_DBFS = -20.0                           # loudness every segment is levelled to
OUTPUT_BITRATE = "64k"                        # voice reply bitrate
CHAT_MODEL = "gpt-4o-mini"
TRANSCRIPTION_MODEL = "whisper-1"
CHAT_MAX_HISTORY = 20                         # turns kept per chat (user + assistant)
CHAT_RETRY_COUNT = 4                          # retries after the first chat attempt
CHAT_RETRY_BASE_DELAY = 1.0                   # seconds
CHAT_RETRY_MAX_DELAY = 30.0                   # cap on a single chat backoff sleep
SYSTEM_PROMPT = (
    "You are a friendly assistant in a Telegram chat. Answer briefly. "
    "Reply in the language the user writes in; mixing English, Chinese and "
    "Japanese in one answer is fine."
)
ERROR_PLACEHOLDER = "Unable to extract error"
VERSION = "0.1.0"
