"""Configuration module - loads and validates environment variables."""

import os
from typing import Optional

from dotenv import load_dotenv

# Load .env file from project root
load_dotenv()


def _optional_int(value: Optional[str]) -> Optional[int]:
    """Parse an optional integer env value, ignoring blanks and junk."""
    if not value or not value.strip():
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None


class Config:
    """Application configuration loaded from environment variables."""

    # Telegram
    TELEGRAM_TOKEN: str = os.getenv("TELEGRAM_TOKEN", "")

    # Chat that receives the Monday week update (optional)
    NOTIFY_CHAT_ID: Optional[int] = _optional_int(os.getenv("NOTIFY_CHAT_ID"))

    # Link shown by /source
    SOURCE_URL: str = os.getenv("SOURCE_URL", "https://github.com/ynshung/usm-current-week")

    # Timezone
    TIMEZONE: str = "Asia/Kuala_Lumpur"

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    @classmethod
    def validate(cls) -> list[str]:
        """Validate required configuration. Returns list of missing keys."""
        missing = []

        if not cls.TELEGRAM_TOKEN:
            missing.append("TELEGRAM_TOKEN")

        return missing


# Convenience access
config = Config()
