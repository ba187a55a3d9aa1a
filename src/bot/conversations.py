"""Message formatting for week info replies."""

from datetime import date

from ..utils.semester_logic import (
    ClassificationResult,
    MessageKind,
    Phase,
    SemesterConfig,
    USM_SEMESTER,
    WeekMessage,
    format_date,
    format_long_date,
    format_week_range,
    week_dates,
)

DEFAULT_TITLE = "USM Week Calculator"


def _weeks(n: int) -> str:
    return f"{n} week{'s' if n > 1 else ''}"


def format_page_title(result: ClassificationResult) -> str:
    """Short title for a classification, used as headline and bot description."""
    if result.phase is Phase.BEFORE_START:
        return "Semester not started"
    if result.phase is Phase.AFTER_END:
        return "Semester ended!"
    return f"Week {result.week_number} at USM"


def format_date_label(is_today: bool) -> str:
    return "Today's date is" if is_today else "Showing info for"


def format_lead(result: ClassificationResult, is_today: bool) -> str:
    if not result.in_semester:
        return "On this date..."
    return "Today is" if is_today else "On this date, it is..."


def format_headline(result: ClassificationResult) -> str:
    if result.phase is Phase.BEFORE_START:
        return "Semester not started"
    if result.phase is Phase.AFTER_END:
        return "Semester ended!"
    return f"Week {result.week_number}"


def format_detail(result: ClassificationResult, config: SemesterConfig = USM_SEMESTER) -> str:
    if result.phase is Phase.BEFORE_START:
        return f"Semester starts on {format_long_date(config.start_date)}"
    if result.phase is Phase.AFTER_END:
        return f"Semester ended on {format_long_date(config.end_date)}"
    return format_week_range(result.week_start, result.week_end)


def format_week_message(message: WeekMessage) -> str:
    """Format the informational message for an in-semester week."""
    if message.kind is MessageKind.WEEKS_UNTIL_BREAK:
        return f"{_weeks(message.weeks)} until mid-semester break"
    if message.kind is MessageKind.BREAK_WEEK:
        return "Mid-Semester Break!"
    if message.kind is MessageKind.WEEKS_UNTIL_STUDY_WEEK:
        return f"{_weeks(message.weeks)} until study week"
    if message.kind is MessageKind.STUDY_WEEK:
        return "It's study week. Get studying!"
    return "It's exam week. Good luck!"


def format_week_info(
    result: ClassificationResult,
    shown: date,
    today: date,
    config: SemesterConfig = USM_SEMESTER,
) -> str:
    """
    Build the full week info reply (Markdown).

    Args:
        result: Classification of the shown date.
        shown: The date being shown (selected date or today).
        today: The current date.
        config: Semester the result was computed against.

    Returns:
        Multi-line message with title, date, week and additional message.
    """
    is_today = shown == today
    lines = [
        f"*{format_page_title(result)}*",
        "",
        f"{format_date_label(is_today)} *{format_date(shown)}*",
        "",
        format_lead(result, is_today),
        f"*{format_headline(result)}*",
        format_detail(result, config),
    ]
    if result.message:
        lines.extend(["", f"_{format_week_message(result.message)}_"])
    return "\n".join(lines)


def format_semester_overview(config: SemesterConfig = USM_SEMESTER) -> str:
    """Summarize the semester dates and its special weeks."""
    break_start, break_end = week_dates(config.mid_break_week, config)
    study_start, study_end = week_dates(config.study_week, config)
    return (
        "📅 *Semester Overview*\n\n"
        f"Starts: {format_date(config.start_date)}\n"
        f"Ends: {format_date(config.end_date)}\n\n"
        f"Mid-semester break: Week {config.mid_break_week} "
        f"({format_week_range(break_start, break_end)})\n"
        f"Study week: Week {config.study_week} "
        f"({format_week_range(study_start, study_end)})\n"
        f"Exams: Week {config.study_week + 1} until {format_long_date(config.end_date)}"
    )
