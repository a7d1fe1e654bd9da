"""Application wiring: services, handler registration, polling."""

import logging

from openai import AsyncOpenAI
from telegram import Update
from telegram.ext import (
    Application,
    ApplicationBuilder,
    CallbackQueryHandler,
    CommandHandler,
    MessageHandler,
    filters,
)

from voicebot.chat import ChatModel
from voicebot.config import Settings
from voicebot.handlers import (
    BotServices,
    SET_ROLE_PATTERN,
    start,
    help_command,
    settings_command,
    set_role,
    handle_voice,
    handle_message,
    on_error,
)
from voicebot.voices import VoiceRoleManager
from voicebot.workdir import init_work_dir

logger = logging.getLogger(__name__)


def build_services(settings: Settings, openai_client=None) -> BotServices:
    if openai_client is None:
        openai_client = AsyncOpenAI(api_key=settings.openai_api_key)
    return BotServices(
        settings=settings,
        chat=ChatModel(openai_client, model=settings.chat_model, system_prompt=settings.system_prompt),
        roles=VoiceRoleManager(default_voice=settings.default_voice),
        openai_client=openai_client,
    )


def register_handlers(application: Application) -> None:
    """Register handlers in dispatch order: commands, callbacks, voice, the rest."""
    application.add_handler(CommandHandler("start", start))
    application.add_handler(CommandHandler("help", help_command))
    application.add_handler(CommandHandler("settings", settings_command))
    application.add_handler(CallbackQueryHandler(set_role, pattern=SET_ROLE_PATTERN))
    application.add_handler(MessageHandler(filters.VOICE, handle_voice))
    application.add_handler(MessageHandler(filters.UpdateType.MESSAGE, handle_message))
    application.add_error_handler(on_error)


def build_application(settings: Settings, openai_client=None) -> Application:
    """Create the Telegram application with services in bot_data."""
    init_work_dir(settings.work_dir)

    application = ApplicationBuilder().token(settings.telegram_token).build()
    application.bot_data["services"] = build_services(settings, openai_client)
    register_handlers(application)
    return application


def run(settings: Settings) -> None:
    """Start long polling. Blocks until SIGINT/SIGTERM."""
    application = build_application(settings)
    logger.info("Bot launched")
    application.run_polling(allowed_updates=Update.ALL_TYPES)
