"""Semester week calculation and academic calendar logic."""

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Optional, Tuple

# Day name mappings for display
DAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]

# Only dates in this year may be picked explicitly
SELECTABLE_YEAR = 2025


@dataclass(frozen=True)
class SemesterConfig:
    """Fixed semester dates and the special weeks within it."""

    start_date: date
    end_date: date
    mid_break_week: int
    study_week: int

    def __post_init__(self):
        if self.start_date > self.end_date:
            raise ValueError(
                f"Semester start {self.start_date} is after end {self.end_date}"
            )
        if self.mid_break_week < 1:
            raise ValueError(f"Mid-semester break week must be >= 1, got {self.mid_break_week}")
        if self.study_week <= self.mid_break_week:
            raise ValueError(
                f"Study week ({self.study_week}) must come after "
                f"mid-semester break week ({self.mid_break_week})"
            )


USM_SEMESTER = SemesterConfig(
    start_date=date(2025, 3, 24),
    end_date=date(2025, 8, 3),
    mid_break_week=8,
    study_week=16,
)


class Phase(Enum):
    """Where a date falls relative to the semester."""

    BEFORE_START = "before_start"
    IN_SEMESTER = "in_semester"
    AFTER_END = "after_end"


class MessageKind(Enum):
    """Informational message shown alongside an in-semester week."""

    WEEKS_UNTIL_BREAK = "weeks_until_break"
    BREAK_WEEK = "break_week"
    WEEKS_UNTIL_STUDY_WEEK = "weeks_until_study_week"
    STUDY_WEEK = "study_week"
    EXAM_PERIOD = "exam_period"


@dataclass(frozen=True)
class WeekMessage:
    """A message kind, with a week count for the countdown kinds."""

    kind: MessageKind
    weeks: Optional[int] = None


@dataclass(frozen=True)
class ClassificationResult:
    """Result of classifying a date against a semester."""

    phase: Phase
    week_number: Optional[int] = None
    week_start: Optional[date] = None
    week_end: Optional[date] = None
    message: Optional[WeekMessage] = None

    @property
    def in_semester(self) -> bool:
        return self.phase is Phase.IN_SEMESTER


def start_of_week(d: date) -> date:
    """Monday of the week containing d."""
    return d - timedelta(days=d.weekday())


def end_of_week(d: date) -> date:
    """Sunday of the week containing d."""
    return start_of_week(d) + timedelta(days=6)


def calendar_weeks_between(later: date, earlier: date) -> int:
    """
    Count Monday-aligned week boundaries between two dates.

    This is not elapsed 7-day periods: a Tuesday and the following
    Monday are one calendar week apart even though only 6 days separate them.
    """
    return (start_of_week(later) - start_of_week(earlier)).days // 7


def select_message(week_number: int, config: SemesterConfig) -> WeekMessage:
    """Pick the informational message for a semester week."""
    if week_number < config.mid_break_week:
        return WeekMessage(MessageKind.WEEKS_UNTIL_BREAK, config.mid_break_week - week_number)
    if week_number == config.mid_break_week:
        return WeekMessage(MessageKind.BREAK_WEEK)
    if week_number < config.study_week:
        return WeekMessage(MessageKind.WEEKS_UNTIL_STUDY_WEEK, config.study_week - week_number)
    if week_number == config.study_week:
        return WeekMessage(MessageKind.STUDY_WEEK)
    return WeekMessage(MessageKind.EXAM_PERIOD)


def classify(target: date, config: SemesterConfig = USM_SEMESTER) -> ClassificationResult:
    """
    Classify a date against the semester.

    Args:
        target: The date to classify.
        config: The semester dates and special weeks.

    Returns:
        ClassificationResult. Week number, week range and message are only
        populated when the date falls inside the semester (both ends inclusive).
    """
    if target < config.start_date:
        return ClassificationResult(Phase.BEFORE_START)
    if target > config.end_date:
        return ClassificationResult(Phase.AFTER_END)

    week_number = calendar_weeks_between(target, config.start_date) + 1
    return ClassificationResult(
        phase=Phase.IN_SEMESTER,
        week_number=week_number,
        week_start=start_of_week(target),
        week_end=end_of_week(target),
        message=select_message(week_number, config),
    )


def week_dates(week_number: int, config: SemesterConfig = USM_SEMESTER) -> Tuple[date, date]:
    """Get the Monday and Sunday of a semester week (1-indexed)."""
    monday = start_of_week(config.start_date) + timedelta(weeks=week_number - 1)
    return monday, monday + timedelta(days=6)


def is_selectable(d: date) -> bool:
    """Check whether a date may be picked explicitly."""
    return d.year == SELECTABLE_YEAR


def parse_date(date_str: str) -> Optional[date]:
    """Parse ISO date string to date object."""
    if not date_str:
        return None
    try:
        return datetime.fromisoformat(date_str.strip()).date()
    except ValueError:
        try:
            return datetime.strptime(date_str.strip(), "%Y-%m-%d").date()
        except ValueError:
            return None


def format_date(d: date, include_day: bool = True) -> str:
    """
    Format a date for display.

    Args:
        d: The date to format.
        include_day: Whether to include day name.

    Returns:
        Formatted date string like "Monday, 24 March 2025".
    """
    if include_day:
        day_name = DAY_NAMES[d.weekday()]
        return f"{day_name}, {d.strftime('%d %B %Y')}"
    return d.strftime("%d %B %Y")


def format_long_date(d: date) -> str:
    """Format like "3 August 2025" (no leading zero on the day)."""
    return f"{d.day} {d.strftime('%B %Y')}"


def format_week_range(week_start: date, week_end: date) -> str:
    """Format a week range like "24 March - 30 March 2025"."""
    return f"{week_start.strftime('%d %B')} - {week_end.strftime('%d %B %Y')}"
