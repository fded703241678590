"""Mindful Telegram Bot."""

import logging

from telegram import Update
from telegram.ext import (
    Application,
    CallbackQueryHandler,
    CommandHandler,
    MessageHandler,
    filters,
)

from .config import Config, load_config
from .controller import JournalController
from .telegram_handlers import (
    delete_handler,
    entries_handler,
    entry_handler,
    help_handler,
    is_authorized,
    mood_handler,
    mood_select_handler,
    start_handler,
    stats_handler,
    unauthorized_handler,
)
from .workflows import open_journal

logger = logging.getLogger(__name__)


class AuthFilter(filters.BaseFilter):
    """Filter to only allow authorized users."""

    def __init__(self, allowed_users: list[int]):
        super().__init__()
        self.allowed_users = allowed_users

    def check_update(self, update: Update) -> bool:
        return is_authorized(update, self.allowed_users)


def create_application(
    config: Config | None = None,
    journal: JournalController | None = None,
) -> Application:
    """Create and configure the Telegram bot application."""
    if config is None:
        config = load_config()

    if not config.telegram_bot_token:
        raise ValueError(
            "TELEGRAM_BOT_TOKEN not configured. "
            "Get a token from @BotFather on Telegram and add it to mindful.conf"
        )

    app = Application.builder().token(config.telegram_bot_token).build()

    # One controller owns the store for the life of the bot
    app.bot_data["journal"] = journal or open_journal(config)
    app.bot_data["allowed_users"] = config.telegram_allowed_users

    auth_filter = AuthFilter(config.telegram_allowed_users)

    app.add_handler(CommandHandler("start", start_handler, filters=auth_filter))
    app.add_handler(CommandHandler("help", help_handler, filters=auth_filter))
    app.add_handler(CommandHandler("mood", mood_handler, filters=auth_filter))
    app.add_handler(CommandHandler("entries", entries_handler, filters=auth_filter))
    app.add_handler(CommandHandler("stats", stats_handler, filters=auth_filter))

    # Callback queries are checked against the allowlist inside the handlers
    app.add_handler(CallbackQueryHandler(mood_select_handler, pattern=r"^mood:"))
    app.add_handler(CallbackQueryHandler(delete_handler, pattern=r"^delete:"))

    # Any other text becomes a moment
    app.add_handler(MessageHandler(filters.TEXT & ~filters.COMMAND & auth_filter, entry_handler))

    if config.telegram_allowed_users:
        app.add_handler(MessageHandler(~auth_filter & filters.ALL, unauthorized_handler))

    return app


def run_bot(debug: bool = False):
    """Run the Telegram bot."""
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.DEBUG if debug else logging.INFO,
    )

    config = load_config()
    app = create_application(config)

    if config.telegram_allowed_users:
        logger.info(f"Bot authorized for users: {config.telegram_allowed_users}")
    else:
        logger.warning("No TELEGRAM_ALLOWED_USERS configured - bot is open to anyone!")

    store_error = app.bot_data["journal"].store.last_load_error
    if store_error is not None:
        logger.warning(f"Starting with an empty journal: {store_error}")

    logger.info("Starting Mindful Telegram bot...")
    app.run_polling(allowed_updates=Update.ALL_TYPES)
