"""CLI interface: run the bot, or exercise segmentation and synthesis offline."""

import argparse
import asyncio
import logging
import shutil
import sys

from voicebot.bot import run as run_bot
from voicebot.config import load_settings
from voicebot.constants import DEFAULT_VOICE, TTS_RATE, WORK_DIR, VERSION
from voicebot.pipeline import speak, MODES, MODE_MIX
from voicebot.segmenter import segment_text
from voicebot.voices import AVAILABLE_ROLES, LANGUAGE_VOICES, VoiceRoleManager
from voicebot.workdir import init_work_dir

# Local chat id used for offline synthesis
CLI_CHAT_ID = 0

LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"

# Transport loggers that drown out the bot's own output at INFO
_NOISY_LOGGERS = ("httpx", "httpcore", "openai", "telegram.ext")


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging for the whole process."""
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def _check_ffmpeg():
    """Verify ffmpeg is installed."""
    if not shutil.which("ffmpeg"):
        print("Error: ffmpeg is required but not found.", file=sys.stderr)
        print("Install it with your package manager (e.g. apt install ffmpeg).", file=sys.stderr)
        raise SystemExit(1)


def cmd_run(args):
    """Start the Telegram bot."""
    try:
        settings = load_settings(args.env_file)
    except RuntimeError as e:
        print(f"Error: {e}", file=sys.stderr)
        raise SystemExit(1)

    configure_logging(settings.log_level)
    _check_ffmpeg()

    run_bot(settings)


def cmd_say(args):
    """Synthesize text to an MP3 without Telegram."""
    text = args.text.strip()
    if not text:
        print("Error: Nothing to say.", file=sys.stderr)
        raise SystemExit(1)

    if args.mode == MODE_MIX:
        _check_ffmpeg()

    roles = VoiceRoleManager()
    if args.voice:
        try:
            roles.update_role(CLI_CHAT_ID, args.voice)
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            raise SystemExit(1)

    work_dir = init_work_dir(args.work_dir)
    path = asyncio.run(speak(text, args.mode, roles, CLI_CHAT_ID, work_dir, rate=args.rate))
    if path is None:
        print("Error: Nothing in the text can be read out loud.", file=sys.stderr)
        raise SystemExit(1)

    if args.output:
        shutil.copyfile(path, args.output)
        path = args.output
    print(f"Wrote {path}")


def cmd_segments(args):
    """Print each segment with its detected language."""
    segments = list(segment_text(args.text))
    if not segments:
        print("No segments found.")
        return
    roles = VoiceRoleManager()
    roles.assign_voices(segments)
    for i, seg in enumerate(segments, start=1):
        print(f"  {i:>2}. [{seg.language.value}] {seg.text!r} -> {seg.voice}")


def cmd_voices(args):
    """List selectable roles and the language voice table."""
    filter_str = args.filter.lower() if args.filter else None
    voices = AVAILABLE_ROLES
    if filter_str:
        voices = [v for v in voices if filter_str in v.lower()]
    if not voices:
        print("No matching voices found.")
        return
    print("Available voices:")
    for v in voices:
        print(f"  {v}")
    print("Language voices:")
    for language, voice in LANGUAGE_VOICES.items():
        print(f"  {language.value}: {voice}")
    print(f"  unknown: {DEFAULT_VOICE}")


def main():
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="voicebot",
        description="Telegram voice bot with per-language speech synthesis",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # run
    run_parser = subparsers.add_parser("run", help="Start the Telegram bot")
    run_parser.add_argument("--env-file", help="Path to a .env file")
    run_parser.set_defaults(func=cmd_run)

    # say
    say_parser = subparsers.add_parser("say", help="Synthesize text to an MP3")
    say_parser.add_argument("text", help="Text to read")
    say_parser.add_argument("-o", "--output", help="Copy the result to this path")
    say_parser.add_argument("--mode", choices=MODES, default=MODE_MIX, help="Voice selection mode")
    say_parser.add_argument("--voice", help="Role used by --mode tts")
    say_parser.add_argument("--rate", default=TTS_RATE, help="Relative speech rate, e.g. --rate=-10%%")
    say_parser.add_argument("--work-dir", default=WORK_DIR, help="Directory for audio files")
    say_parser.set_defaults(func=cmd_say)

    # segments
    seg_parser = subparsers.add_parser("segments", help="Show language segments of a text")
    seg_parser.add_argument("text", help="Text to segment")
    seg_parser.set_defaults(func=cmd_segments)

    # voices
    voices_parser = subparsers.add_parser("voices", help="List available voices")
    voices_parser.add_argument("--filter", help="Filter voices by substring")
    voices_parser.set_defaults(func=cmd_voices)

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return

    args.func(args)
