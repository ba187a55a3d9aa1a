"""Error handling utilities for the bot."""

import logging
from functools import wraps
from typing import Callable

from telegram import Update
from telegram.ext import ContextTypes
from telegram.error import BadRequest, TelegramError, NetworkError, TimedOut

logger = logging.getLogger(__name__)


# Default error messages
ERROR_MESSAGES = {
    "general": "Sorry, something went wrong. Please try again.",
    "network": "Network error. Please check your connection and try again.",
    "timeout": "Request timed out. Please try again.",
    "date_range": "Please select a date within the year {year}.",
}


class BotError(Exception):
    """Base exception for bot errors."""

    def __init__(self, message: str, user_message: str = None):
        super().__init__(message)
        self.user_message = user_message or ERROR_MESSAGES["general"]


class DateSelectionError(BotError):
    """A chosen date is outside the selectable year."""

    def __init__(self, selected, year: int):
        super().__init__(
            f"Rejected date selection {selected}",
            ERROR_MESSAGES["date_range"].format(year=year),
        )
        self.selected = selected


async def _reply(update: Update, text: str) -> None:
    if update and update.effective_message:
        await update.effective_message.reply_text(text)


def handler_error_wrapper(func: Callable) -> Callable:
    """
    Decorator to wrap handler functions with error handling.

    Usage:
        @handler_error_wrapper
        async def my_handler(update: Update, context: ContextTypes.DEFAULT_TYPE):
            ...
    """
    @wraps(func)
    async def wrapper(update: Update, context: ContextTypes.DEFAULT_TYPE, *args, **kwargs):
        try:
            return await func(update, context, *args, **kwargs)
        except BotError as e:
            logger.warning(f"Bot error in {func.__name__}: {e}")
            await _reply(update, e.user_message)
        except TimedOut as e:
            logger.error(f"Timeout in {func.__name__}: {e}")
            await _reply(update, ERROR_MESSAGES["timeout"])
        except BadRequest as e:
            logger.error(f"Bad request in {func.__name__}: {e}")
            await _reply(update, ERROR_MESSAGES["general"])
        except NetworkError as e:
            logger.error(f"Network error in {func.__name__}: {e}")
            await _reply(update, ERROR_MESSAGES["network"])
        except TelegramError as e:
            logger.error(f"Telegram error in {func.__name__}: {e}")
            await _reply(update, ERROR_MESSAGES["general"])
        except Exception as e:
            logger.exception(f"Unexpected error in {func.__name__}: {e}")
            await _reply(update, ERROR_MESSAGES["general"])

    return wrapper


async def error_handler(update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
    """
    Global error handler for the application.

    Register with: application.add_error_handler(error_handler)
    """
    logger.error(f"Exception while handling an update: {context.error}")

    if update and isinstance(update, Update) and update.effective_message:
        try:
            await update.effective_message.reply_text(ERROR_MESSAGES["general"])
        except TelegramError as e:
            logger.error(f"Failed to send error message: {e}")
