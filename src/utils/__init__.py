# Utility functions
from .semester_logic import (
    SemesterConfig,
    USM_SEMESTER,
    SELECTABLE_YEAR,
    Phase,
    MessageKind,
    WeekMessage,
    ClassificationResult,
    classify,
    select_message,
    week_dates,
    start_of_week,
    end_of_week,
    calendar_weeks_between,
    is_selectable,
    parse_date,
    format_date,
    format_long_date,
    format_week_range,
)
