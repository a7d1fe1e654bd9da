"""Telegram update handlers: command routing and the relay pipeline."""

import json
import logging
import os
import re
from dataclasses import dataclass
from typing import Any

from telegram import InlineKeyboardButton, InlineKeyboardMarkup, Update
from telegram.constants import ChatAction
from telegram.ext import ContextTypes

from voicebot.chat import ChatModel
from voicebot.config import Settings
from voicebot.constants import ERROR_PLACEHOLDER
from voicebot.download import download_voice_file
from voicebot.pipeline import speak, MODE_MIX
from voicebot.transcribe import transcribe
from voicebot.voices import AVAILABLE_ROLES, VoiceRoleManager

logger = logging.getLogger(__name__)

SET_ROLE_PATTERN = r"^set_role:(.+)$"

# "/tts hello", "/mix@my_bot 你好 world"; "/ttsx" is not a command
_COMMAND_RE = re.compile(r"^/(tts|mts|mix)(?:@\w+)?(?:\s+(.*))?$", re.DOTALL)

HELP_TEXT = (
    "Send me a message or a voice note and I will answer in text and speech.\n\n"
    "/tts <text> - read text with your selected voice\n"
    "/mts <text> - read text with the voice of its main language\n"
    "/mix <text> - read each English/Chinese/Japanese part with its own voice\n"
    "/settings - choose the voice used by /tts"
)


@dataclass
class BotServices:
    """Long-lived collaborators shared by every handler via bot_data."""

    settings: Settings
    chat: ChatModel
    roles: VoiceRoleManager
    openai_client: Any


def route_command(text: str) -> tuple[str | None, str]:
    """Split a message into (command, argument).

    command is "tts", "mts" or "mix", or None for plain chat text. The
    argument is the rest of the message, stripped.
    """
    match = _COMMAND_RE.match(text.strip())
    if not match:
        return None, text.strip()
    return match.group(1), (match.group(2) or "").strip()


def describe_error(exc: BaseException) -> str:
    """JSON fragment of an API error body for user-facing messages.

    Looks at the exception and its cause (client modules wrap API errors in
    RuntimeError). Falls back to a fixed placeholder.
    """
    for err in (exc, exc.__cause__):
        body = getattr(err, "body", None)
        if isinstance(body, dict):
            return json.dumps(body.get("error", body), ensure_ascii=False)
    return json.dumps(ERROR_PLACEHOLDER)


def role_keyboard() -> InlineKeyboardMarkup:
    """One button per selectable voice role."""
    return InlineKeyboardMarkup(
        [[InlineKeyboardButton(role, callback_data=f"set_role:{role}")] for role in AVAILABLE_ROLES]
    )


def _services(context: ContextTypes.DEFAULT_TYPE) -> BotServices:
    return context.bot_data["services"]


async def _send_action(update: Update, context: ContextTypes.DEFAULT_TYPE, action: str) -> None:
    await context.bot.send_chat_action(chat_id=update.effective_chat.id, action=action)


async def _reply_voice(update: Update, path: str) -> None:
    with open(path, "rb") as audio:
        await update.message.reply_voice(voice=audio, filename=os.path.basename(path))


# --- Commands ---

async def start(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    await update.message.reply_text("Welcome! Talk to me in English, Chinese or Japanese.")


async def help_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    await update.message.reply_text(HELP_TEXT)


async def settings_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    await update.message.reply_text("Please select a voice role:", reply_markup=role_keyboard())


async def set_role(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Callback for the /settings keyboard."""
    query = update.callback_query
    role = context.match.group(1)

    try:
        _services(context).roles.update_role(update.effective_chat.id, role)
        await query.answer(f"Voice role has been updated to: {role}")
    except Exception:
        logger.exception("Failed to update voice role to %s", role)
        await query.answer("Whoops! There was an error while updating the voice role.")


# --- Relay pipeline ---

async def speak_reply(update: Update, context: ContextTypes.DEFAULT_TYPE, text: str, mode: str = MODE_MIX) -> None:
    """Synthesize text and send it back as a voice note."""
    services = _services(context)
    await _send_action(update, context, ChatAction.RECORD_VOICE)

    try:
        path = await speak(
            text,
            mode,
            services.roles,
            update.effective_chat.id,
            services.settings.work_dir,
            rate=services.settings.tts_rate,
        )
    except Exception as exc:
        logger.exception("Speech synthesis failed")
        await update.message.reply_text(
            "Whoops! There was an error while synthesizing speech. Error: " + describe_error(exc)
        )
        return

    if path is None:
        await update.message.reply_text("There is nothing I can read out loud in that text.")
        return

    try:
        await _send_action(update, context, ChatAction.UPLOAD_VOICE)
        await _reply_voice(update, path)
    except Exception as exc:
        logger.exception("Sending voice reply failed")
        await update.message.reply_text(
            "Whoops! There was an error while sending the voice note. Error: " + describe_error(exc)
        )


async def chat_reply(update: Update, context: ContextTypes.DEFAULT_TYPE, text: str) -> None:
    """Ask the chat model, send its answer as text, then speak it."""
    services = _services(context)
    await _send_action(update, context, ChatAction.TYPING)

    try:
        response = await services.chat.call(update.effective_chat.id, text)
    except Exception as exc:
        logger.exception("Chat model call failed")
        await update.message.reply_text(
            "Whoops! There was an error while talking to OpenAI. Error: " + describe_error(exc)
        )
        return

    logger.info("Response: %s", response)
    if not response:
        await update.message.reply_text("I don't have an answer to that.")
        return

    try:
        await update.message.reply_text(response)
    except Exception as exc:
        logger.exception("Sending chat reply failed")
        await update.message.reply_text(
            "Whoops! There was an error while sending the answer. Error: " + describe_error(exc)
        )
        return

    await speak_reply(update, context, response, MODE_MIX)


async def handle_voice(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Voice note: download, transcribe, answer."""
    services = _services(context)
    await _send_action(update, context, ChatAction.TYPING)

    try:
        local_path = await download_voice_file(
            context.bot, update.message.voice.file_id, services.settings.work_dir
        )
    except Exception:
        logger.exception("Voice download failed")
        await update.message.reply_text(
            "Whoops! There was an error while downloading the voice file. Maybe ffmpeg is not installed?"
        )
        return

    try:
        transcription = await transcribe(
            services.openai_client, local_path, services.settings.transcription_model
        )
    except Exception as exc:
        logger.exception("Transcription failed")
        await update.message.reply_text(
            "Whoops! There was an error while transcribing the voice note. Error: " + describe_error(exc)
        )
        return

    if not transcription:
        await update.message.reply_text("I couldn't hear anything in that voice note.")
        return

    await update.message.reply_text(f"Transcription: {transcription}")
    await chat_reply(update, context, transcription)


async def handle_message(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Any other message: /tts, /mts, /mix, or chat."""
    text = update.message.text

    if not text:
        await update.message.reply_text("Please send a text message.")
        return

    logger.info("Input: %s", text)
    command, argument = route_command(text)

    if command is None:
        await chat_reply(update, context, argument)
        return

    if not argument:
        await update.message.reply_text(f"Please provide text after the '/{command}' command.")
        return

    await speak_reply(update, context, argument, command)


async def on_error(update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
    logger.error("Unhandled error while processing update", exc_info=context.error)
