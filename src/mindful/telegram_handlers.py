"""Telegram command handlers."""

import logging

import telegramify_markdown
from telegram import InlineKeyboardButton, InlineKeyboardMarkup, Update
from telegram.ext import ContextTypes

from .adapters.json_entries import CorruptStoreError
from .controller import JournalController
from .core.entries import InvalidMoodError, Mood, count_by_mood, format_entry_line, mood_symbol

logger = logging.getLogger(__name__)

ENTRIES_PAGE_SIZE = 10
MESSAGE_LIMIT = 4000
UNREADABLE_MESSAGE = "Stored entries are unreadable. Nothing was changed; check the data file."

HELP_TEXT = (
    "Mindful Moments\n\n"
    "Send me any message and I'll save it as a moment.\n\n"
    "/mood - Pick how you're feeling\n"
    "/entries - Recent moments (tap to delete)\n"
    "/stats - Moments captured\n"
    "/help - Show all commands"
)


def is_authorized(update: Update, allowed_users: list[int]) -> bool:
    """No allowlist means anyone may use the bot."""
    if not allowed_users:
        return True
    user = update.effective_user
    if user is None:
        return False
    return user.id in allowed_users


def _journal(context: ContextTypes.DEFAULT_TYPE) -> JournalController:
    return context.bot_data["journal"]


def _allowed(update: Update, context: ContextTypes.DEFAULT_TYPE) -> bool:
    return is_authorized(update, context.bot_data.get("allowed_users", []))


async def _reload(journal: JournalController, reply) -> bool:
    """Pick up writes from other surfaces. False (after replying) if storage is unreadable."""
    try:
        journal.reload()
    except CorruptStoreError as e:
        logger.error(f"Stored entries are unreadable: {e}")
        await reply(UNREADABLE_MESSAGE)
        return False
    return True


def mood_keyboard(selected: Mood) -> InlineKeyboardMarkup:
    """One row with the five moods, the selected one bracketed."""
    row = [
        InlineKeyboardButton(
            f"[{mood.value}]" if mood is selected else mood.value,
            callback_data=f"mood:{mood.name}",
        )
        for mood in Mood
    ]
    return InlineKeyboardMarkup([row])


async def reply_markdown(message, text: str, reply_markup=None):
    """Reply with markdown converted to MarkdownV2, split to fit Telegram's limit."""
    converted = telegramify_markdown.markdownify(text)
    chunks = [converted[i : i + MESSAGE_LIMIT] for i in range(0, len(converted), MESSAGE_LIMIT)]
    for index, chunk in enumerate(chunks):
        markup = reply_markup if index == len(chunks) - 1 else None
        await message.reply_text(chunk, parse_mode="MarkdownV2", reply_markup=markup)


# ============== Simple Commands ==============


async def start_handler(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Handle /start command."""
    await update.message.reply_text(
        "Hey! How are you feeling today?",
        reply_markup=mood_keyboard(_journal(context).mood),
    )
    await update.message.reply_text(HELP_TEXT)


async def help_handler(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Handle /help command."""
    await update.message.reply_text(HELP_TEXT)


async def stats_handler(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Handle /stats command - entry count per mood."""
    journal = _journal(context)
    if not await _reload(journal, update.message.reply_text):
        return
    tally = "  ".join(
        f"{symbol} {count}" for symbol, count in count_by_mood(list(journal.entries)).items()
    )
    await update.message.reply_text(f"{journal.count} Moments Captured\n\n{tally}")


# ============== Mood Selection ==============


async def mood_handler(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Handle /mood command - show the mood picker."""
    await update.message.reply_text(
        "How are you feeling today?",
        reply_markup=mood_keyboard(_journal(context).mood),
    )


async def mood_select_handler(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Handle a tap on the mood picker."""
    query = update.callback_query
    if not _allowed(update, context):
        await query.answer("Unauthorized.")
        return

    journal = _journal(context)
    try:
        mood = journal.select_mood(query.data.removeprefix("mood:"))
    except InvalidMoodError:
        logger.warning(f"Unknown mood callback: {query.data!r}")
        await query.answer("Unknown mood.")
        return

    await query.answer(f"Feeling {mood.value}")
    await query.edit_message_text(
        f"Mood set to {mood.value}. Share what's on your mind...",
        reply_markup=mood_keyboard(mood),
    )


# ============== Entries ==============


async def entry_handler(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Handle non-command messages by saving them as a moment."""
    journal = _journal(context)
    if not await _reload(journal, update.message.reply_text):
        return
    journal.set_draft(update.message.text or "")

    entry = journal.add()
    if entry is None:
        await update.message.reply_text("Nothing to save.")
        return

    await update.message.reply_text(f"Saved.\n\n{format_entry_line(entry)}")


async def entries_handler(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Handle /entries command - recent moments with delete buttons."""
    journal = _journal(context)
    if not await _reload(journal, update.message.reply_text):
        return

    entries = journal.entries[:ENTRIES_PAGE_SIZE]
    if not entries:
        await update.message.reply_text("Your mindful journey starts here. Send me a message to save a moment.")
        return

    lines = [f"*{journal.count} Moments Captured*", ""]
    for number, entry in enumerate(entries, start=1):
        lines.append(f"*{number}.* {mood_symbol(entry.mood)} _{entry.date}_")
        lines.append(entry.text.strip())
        lines.append("")

    keyboard = [
        [InlineKeyboardButton(f"Delete {number}", callback_data=f"delete:{entry.id}")]
        for number, entry in enumerate(entries, start=1)
    ]
    await reply_markdown(update.message, "\n".join(lines), InlineKeyboardMarkup(keyboard))


async def delete_handler(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Handle a tap on a delete button."""
    query = update.callback_query
    if not _allowed(update, context):
        await query.answer("Unauthorized.")
        return

    try:
        entry_id = int(query.data.removeprefix("delete:"))
    except ValueError:
        logger.warning(f"Malformed delete callback: {query.data!r}")
        await query.answer("Unknown entry.")
        return

    journal = _journal(context)
    if not await _reload(journal, query.answer):
        return
    removed = journal.delete(entry_id)

    if removed:
        await query.answer("Deleted.")
        await query.edit_message_text(f"Deleted. {journal.count} moments left. Use /entries to refresh.")
    else:
        await query.answer("Already deleted.")


async def unauthorized_handler(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Reply to users outside TELEGRAM_ALLOWED_USERS."""
    user = update.effective_user
    if user is None:
        logger.warning("Unauthorized access attempt from an unknown user")
    else:
        logger.warning(f"Unauthorized access attempt from user {user.id} ({user.username})")
    if update.message:
        await update.message.reply_text(
            "Unauthorized. This bot is private.\n"
            "If you're the owner, add your Telegram user ID to TELEGRAM_ALLOWED_USERS in mindful.conf"
        )
