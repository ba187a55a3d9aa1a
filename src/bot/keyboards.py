"""Telegram inline keyboard layouts for interactive UI."""

from telegram import InlineKeyboardButton, InlineKeyboardMarkup


def get_week_keyboard(has_date_override: bool = False) -> InlineKeyboardMarkup:
    """Create the keyboard attached to week info replies."""
    keyboard = [
        [
            InlineKeyboardButton("◀ Prev week", callback_data="week_prev"),
            InlineKeyboardButton("Next week ▶", callback_data="week_next"),
        ],
    ]

    # Reset only makes sense when a date other than today is selected
    if has_date_override:
        keyboard.append([
            InlineKeyboardButton("🔄 Reset", callback_data="reset_date"),
        ])

    keyboard.append([
        InlineKeyboardButton("📅 Semester", callback_data="cmd_semester"),
    ])
    return InlineKeyboardMarkup(keyboard)


def get_back_to_week_keyboard() -> InlineKeyboardMarkup:
    """Single button returning to the week view."""
    keyboard = [
        [InlineKeyboardButton("🔙 Back", callback_data="cmd_week")],
    ]
    return InlineKeyboardMarkup(keyboard)
