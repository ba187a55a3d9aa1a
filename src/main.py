"""Main entry point for the USM Week Bot."""

import logging
import sys

from telegram.ext import Application

from .config import config, Config
from .bot.handlers import register_handlers
from .scheduler.notifications import start_scheduler, stop_scheduler
from .utils.logging_config import setup_logging
from .utils.error_handlers import error_handler

logger = logging.getLogger(__name__)


async def post_init(application: Application) -> None:
    """Called after the application is initialized."""
    logger.info("Starting notification scheduler...")
    scheduler = start_scheduler(application.bot)
    # Don't wait until midnight for the first title
    await scheduler.refresh_title()


async def post_shutdown(application: Application) -> None:
    """Called when the application is shutting down."""
    logger.info("Stopping notification scheduler...")
    stop_scheduler()


def main() -> None:
    """Initialize and run the bot."""
    setup_logging(log_level=config.LOG_LEVEL, log_to_file=True)

    # Validate configuration
    missing = Config.validate()
    if missing:
        logger.error(f"Missing required configuration: {', '.join(missing)}")
        logger.error("Please check your .env file")
        sys.exit(1)

    logger.info("Starting bot...")
    application = (
        Application.builder()
        .token(config.TELEGRAM_TOKEN)
        .post_init(post_init)
        .post_shutdown(post_shutdown)
        .build()
    )

    register_handlers(application)
    application.add_error_handler(error_handler)

    # Run the bot until Ctrl+C
    logger.info("Bot is running. Press Ctrl+C to stop.")
    application.run_polling()


if __name__ == "__main__":
    main()
