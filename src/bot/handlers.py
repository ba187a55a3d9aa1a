"""Telegram bot command handlers."""

import logging
import os
from datetime import date, datetime, timedelta
from typing import Optional

from telegram import Update, InlineKeyboardMarkup, CallbackQuery
from telegram.error import BadRequest
from telegram.ext import Application, CommandHandler, MessageHandler, ContextTypes, filters, CallbackQueryHandler
import pytz

from ..config import config
from ..utils.error_handlers import DateSelectionError, ERROR_MESSAGES, handler_error_wrapper
from ..utils.semester_logic import (
    SELECTABLE_YEAR,
    USM_SEMESTER,
    classify,
    is_selectable,
    parse_date,
)
from .conversations import DEFAULT_TITLE, format_week_info, format_semester_overview
from .keyboards import get_week_keyboard, get_back_to_week_keyboard

logger = logging.getLogger(__name__)

# Malaysia timezone
MY_TZ = pytz.timezone(config.TIMEZONE)

# Per-chat state key in context.chat_data (shared by everyone in a group); None means "today"
SELECTED_DATE_KEY = "selected_date"

WELCOME_MESSAGE = """
{title}

Hi {name}! 👋

I tell you which USM semester week any date falls in.

/week - Week info for today (or your selected date)
/date YYYY-MM-DD - Look at another date in {year}
/reset - Go back to today
/semester - Semester dates, break and study week
/source - Open on GitHub
/help - Show this message
"""


def get_today() -> date:
    """Get current date (or test date if TEST_DATE is set)."""
    env_date = os.getenv("TEST_DATE")
    if env_date:
        try:
            return datetime.strptime(env_date, "%Y-%m-%d").date()
        except ValueError:
            logger.warning(f"Ignoring invalid TEST_DATE: {env_date}")
    return datetime.now(MY_TZ).date()


def get_selected_date(context: ContextTypes.DEFAULT_TYPE) -> Optional[date]:
    """Get the explicitly selected date for this chat, if any."""
    return context.chat_data.get(SELECTED_DATE_KEY)


def get_effective_date(context: ContextTypes.DEFAULT_TYPE) -> date:
    """The date to show: the selected one, or today."""
    return get_selected_date(context) or get_today()


def set_selected_date(context: ContextTypes.DEFAULT_TYPE, selected: Optional[date]) -> None:
    """
    Store the selected date for this chat.

    Selecting today clears the selection. Dates outside SELECTABLE_YEAR
    raise DateSelectionError and leave the previous selection untouched.
    """
    if selected is None or selected == get_today():
        context.chat_data[SELECTED_DATE_KEY] = None
        return
    if not is_selectable(selected):
        raise DateSelectionError(selected, SELECTABLE_YEAR)
    context.chat_data[SELECTED_DATE_KEY] = selected


def build_week_reply(context: ContextTypes.DEFAULT_TYPE) -> tuple[str, InlineKeyboardMarkup]:
    """Classify the effective date and build reply text plus keyboard."""
    today = get_today()
    shown = get_effective_date(context)
    result = classify(shown, USM_SEMESTER)
    text = format_week_info(result, shown, today, USM_SEMESTER)
    return text, get_week_keyboard(has_date_override=shown != today)


async def _reply_week_info(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    text, keyboard = build_week_reply(context)
    await update.effective_message.reply_text(text, parse_mode="Markdown", reply_markup=keyboard)


async def _select_from_text(update: Update, context: ContextTypes.DEFAULT_TYPE, text: str) -> None:
    """Select a date from user text, falling back to today when unparseable."""
    parsed = parse_date(text)
    if parsed is None:
        logger.info(f"Unparseable date '{text}', falling back to today")
        set_selected_date(context, None)
        await update.effective_message.reply_text(
            f"Couldn't read '{text}' as a date, showing today instead.\n"
            "Use the format YYYY-MM-DD, e.g. 2025-05-12"
        )
    else:
        set_selected_date(context, parsed)
    await _reply_week_info(update, context)


@handler_error_wrapper
async def start_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /start command - welcome message."""
    user = update.effective_user
    name = user.first_name if user else "there"
    await update.message.reply_text(
        WELCOME_MESSAGE.format(title=DEFAULT_TITLE, name=name, year=SELECTABLE_YEAR).strip()
    )


@handler_error_wrapper
async def help_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /help command - show available commands."""
    await start_command(update, context)


@handler_error_wrapper
async def week_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /week [YYYY-MM-DD] - show week info for the selected date."""
    if context.args:
        await _select_from_text(update, context, context.args[0])
        return
    await _reply_week_info(update, context)


@handler_error_wrapper
async def date_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /date YYYY-MM-DD - select a date to show."""
    if not context.args:
        current = get_effective_date(context)
        is_override = get_selected_date(context) is not None
        await update.message.reply_text(
            f"Showing: {current.isoformat()}\n"
            f"{'(Selected date)' if is_override else '(Today)'}\n\n"
            "Usage: /date YYYY-MM-DD\n"
            f"Example: /date {SELECTABLE_YEAR}-05-12"
        )
        return
    await _select_from_text(update, context, context.args[0])


@handler_error_wrapper
async def reset_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /reset command - go back to today."""
    set_selected_date(context, None)
    await _reply_week_info(update, context)


@handler_error_wrapper
async def semester_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /semester command - show semester overview."""
    await update.message.reply_text(format_semester_overview(USM_SEMESTER), parse_mode="Markdown")


@handler_error_wrapper
async def source_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /source command - link to the source code."""
    await update.message.reply_text(f"Open on GitHub: {config.SOURCE_URL}")


@handler_error_wrapper
async def handle_text_message(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Treat plain text that looks like a date as a date selection."""
    text = (update.message.text or "").strip()
    if parse_date(text) is not None:
        await _select_from_text(update, context, text)
        return
    await update.message.reply_text(
        "Send a date like 2025-05-12, or use /week to see this week."
    )


async def _edit_query_message(query: CallbackQuery, text: str, reply_markup: InlineKeyboardMarkup) -> None:
    """Edit the message behind a button, ignoring edits that change nothing."""
    try:
        await query.edit_message_text(text, parse_mode="Markdown", reply_markup=reply_markup)
    except BadRequest as e:
        if "not modified" not in str(e).lower():
            raise
        logger.debug(f"Message already up to date for callback {query.data}")


@handler_error_wrapper
async def callback_query_handler(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle inline keyboard button callbacks."""
    query = update.callback_query
    data = query.data

    if data in ("week_prev", "week_next"):
        step = timedelta(days=-7 if data == "week_prev" else 7)
        target = get_effective_date(context) + step
        try:
            set_selected_date(context, target)
        except DateSelectionError as e:
            logger.info(f"Rejected navigation to {target}")
            await query.answer(e.user_message, show_alert=True)
            return

    elif data == "reset_date":
        set_selected_date(context, None)

    elif data == "cmd_semester":
        await query.answer()
        await _edit_query_message(
            query, format_semester_overview(USM_SEMESTER), get_back_to_week_keyboard()
        )
        return

    elif data != "cmd_week":
        logger.warning(f"Unknown callback data: {data}")
        await query.answer(ERROR_MESSAGES["general"])
        return

    await query.answer()
    text, keyboard = build_week_reply(context)
    await _edit_query_message(query, text, keyboard)


def register_handlers(application: Application) -> None:
    """Register all command handlers with the application."""
    application.add_handler(CommandHandler("start", start_command))
    application.add_handler(CommandHandler("help", help_command))
    application.add_handler(CommandHandler("week", week_command))
    application.add_handler(CommandHandler("date", date_command))
    application.add_handler(CommandHandler("reset", reset_command))
    application.add_handler(CommandHandler("semester", semester_command))
    application.add_handler(CommandHandler("source", source_command))

    # Callback query handler for inline keyboards
    application.add_handler(CallbackQueryHandler(callback_query_handler))

    # Message handlers (lower priority than commands)
    application.add_handler(MessageHandler(
        filters.TEXT & ~filters.COMMAND,
        handle_text_message
    ))
