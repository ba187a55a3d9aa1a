"""Scheduler for the daily title refresh and the Monday week update."""

import logging
from typing import Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger
from telegram import Bot
from telegram.error import TelegramError
import pytz

from ..config import config
from ..bot.handlers import get_today
from ..bot.conversations import format_page_title, format_week_info
from ..utils.semester_logic import USM_SEMESTER, classify

logger = logging.getLogger(__name__)

# Malaysia timezone
MY_TZ = pytz.timezone(config.TIMEZONE)


class NotificationScheduler:
    """Handles all scheduled jobs for the bot."""

    def __init__(self, bot: Bot, notify_chat_id: Optional[int] = None):
        """Initialize the scheduler with a Telegram bot instance."""
        self.bot = bot
        self.notify_chat_id = notify_chat_id
        self.scheduler = AsyncIOScheduler(timezone=MY_TZ)
        self._setup_jobs()

    def _setup_jobs(self):
        """Configure all scheduled jobs."""
        self.scheduler.add_job(
            self.refresh_title,
            CronTrigger(hour=0, minute=5, timezone=MY_TZ),
            id="refresh_title",
            name="12:05AM Title Refresh",
            replace_existing=True
        )

        self.scheduler.add_job(
            self.send_weekly_update,
            CronTrigger(day_of_week="mon", hour=8, minute=0, timezone=MY_TZ),
            id="weekly_update",
            name="Monday 8AM Week Update",
            replace_existing=True
        )

    def start(self):
        """Start the scheduler."""
        if not self.scheduler.running:
            self.scheduler.start()
            logger.info("Notification scheduler started")

    def stop(self):
        """Stop the scheduler."""
        if self.scheduler.running:
            self.scheduler.shutdown()
            logger.info("Notification scheduler stopped")

    async def refresh_title(self) -> Optional[str]:
        """Set the bot's short description to today's week title."""
        title = format_page_title(classify(get_today(), USM_SEMESTER))
        try:
            await self.bot.set_my_short_description(title)
        except TelegramError as e:
            logger.error(f"Failed to refresh bot description: {e}")
            return None
        logger.info(f"Bot description set to '{title}'")
        return title

    async def send_weekly_update(self) -> bool:
        """Send this week's info to the configured chat."""
        if self.notify_chat_id is None:
            logger.info("No NOTIFY_CHAT_ID configured, skipping weekly update")
            return False

        today = get_today()
        message = format_week_info(classify(today, USM_SEMESTER), today, today, USM_SEMESTER)
        try:
            await self.bot.send_message(
                chat_id=self.notify_chat_id,
                text=message,
                parse_mode="Markdown"
            )
        except TelegramError as e:
            logger.error(f"Failed to send weekly update to {self.notify_chat_id}: {e}")
            return False
        logger.info(f"Sent weekly update to {self.notify_chat_id}")
        return True


# Module-level scheduler instance
_scheduler: Optional[NotificationScheduler] = None


def get_scheduler(bot: Bot) -> NotificationScheduler:
    """Get or create the notification scheduler."""
    global _scheduler
    if _scheduler is None:
        _scheduler = NotificationScheduler(bot, config.NOTIFY_CHAT_ID)
    return _scheduler


def start_scheduler(bot: Bot):
    """Start the notification scheduler."""
    scheduler = get_scheduler(bot)
    scheduler.start()
    return scheduler


def stop_scheduler():
    """Stop the notification scheduler."""
    global _scheduler
    if _scheduler:
        _scheduler.stop()
        _scheduler = None
