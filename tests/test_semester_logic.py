"""Tests for semester week calculation and academic calendar logic."""

import pytest
from datetime import date, timedelta

from src.utils.semester_logic import (
    USM_SEMESTER,
    ClassificationResult,
    MessageKind,
    Phase,
    SemesterConfig,
    WeekMessage,
    calendar_weeks_between,
    classify,
    end_of_week,
    format_date,
    format_long_date,
    format_week_range,
    is_selectable,
    parse_date,
    select_message,
    start_of_week,
    week_dates,
)


def _semester_days(config=USM_SEMESTER):
    d = config.start_date
    while d <= config.end_date:
        yield d
        d += timedelta(days=1)


class TestSemesterConfig:
    """Tests for semester configuration validation."""

    def test_usm_semester(self):
        """Deployment constants."""
        assert USM_SEMESTER.start_date == date(2025, 3, 24)
        assert USM_SEMESTER.end_date == date(2025, 8, 3)
        assert USM_SEMESTER.mid_break_week == 8
        assert USM_SEMESTER.study_week == 16

    def test_start_after_end(self):
        """Start after end is rejected."""
        with pytest.raises(ValueError):
            SemesterConfig(date(2025, 8, 3), date(2025, 3, 24), 8, 16)

    def test_study_week_before_break(self):
        """Study week must come after the break."""
        with pytest.raises(ValueError):
            SemesterConfig(date(2025, 3, 24), date(2025, 8, 3), 8, 8)

    def test_break_week_positive(self):
        """Break week must be at least 1."""
        with pytest.raises(ValueError):
            SemesterConfig(date(2025, 3, 24), date(2025, 8, 3), 0, 16)

    def test_single_day_semester(self):
        """Start equal to end is allowed."""
        config = SemesterConfig(date(2025, 3, 24), date(2025, 3, 24), 1, 2)
        assert classify(date(2025, 3, 24), config).week_number == 1

    def test_immutable(self):
        """Config cannot be changed after creation."""
        with pytest.raises(AttributeError):
            USM_SEMESTER.study_week = 17


class TestWeekBoundaries:
    """Tests for Monday-aligned week helpers."""

    def test_start_of_week_on_monday(self):
        assert start_of_week(date(2025, 3, 24)) == date(2025, 3, 24)

    def test_start_of_week_on_sunday(self):
        assert start_of_week(date(2025, 3, 30)) == date(2025, 3, 24)

    def test_end_of_week(self):
        assert end_of_week(date(2025, 3, 26)) == date(2025, 3, 30)

    def test_calendar_weeks_same_week(self):
        """Monday and Sunday of the same week are 0 weeks apart."""
        assert calendar_weeks_between(date(2025, 3, 30), date(2025, 3, 24)) == 0

    def test_calendar_weeks_across_boundary(self):
        """Sunday to the next Monday crosses one boundary."""
        assert calendar_weeks_between(date(2025, 3, 31), date(2025, 3, 30)) == 1

    def test_calendar_weeks_not_elapsed_days(self):
        """Counts boundaries, not 7-day periods."""
        # Wednesday to the following Tuesday: 6 days, one boundary
        assert calendar_weeks_between(date(2025, 4, 1), date(2025, 3, 26)) == 1


class TestClassify:
    """Tests for date classification."""

    def test_before_start(self):
        result = classify(date(2025, 3, 20))
        assert result == ClassificationResult(Phase.BEFORE_START)
        assert result.week_number is None
        assert result.message is None

    def test_day_before_start(self):
        assert classify(date(2025, 3, 23)).phase is Phase.BEFORE_START

    def test_first_day(self):
        """First day of semester is Week 1."""
        result = classify(date(2025, 3, 24))
        assert result.phase is Phase.IN_SEMESTER
        assert result.week_number == 1
        assert result.week_start == date(2025, 3, 24)
        assert result.week_end == date(2025, 3, 30)
        assert result.message == WeekMessage(MessageKind.WEEKS_UNTIL_BREAK, 7)

    def test_end_of_week_one(self):
        """Sunday is still Week 1."""
        assert classify(date(2025, 3, 30)).week_number == 1

    def test_monday_starts_week_two(self):
        assert classify(date(2025, 3, 31)).week_number == 2

    def test_break_week(self):
        result = classify(date(2025, 5, 12))
        assert result.week_number == 8
        assert result.message == WeekMessage(MessageKind.BREAK_WEEK)

    def test_after_break(self):
        result = classify(date(2025, 5, 19))
        assert result.week_number == 9
        assert result.message == WeekMessage(MessageKind.WEEKS_UNTIL_STUDY_WEEK, 7)

    def test_study_week(self):
        result = classify(date(2025, 7, 7))
        assert result.week_number == 16
        assert result.message.kind is MessageKind.STUDY_WEEK

    def test_exam_period(self):
        result = classify(date(2025, 7, 21))
        assert result.week_number == 18
        assert result.message.kind is MessageKind.EXAM_PERIOD
        assert result.message.weeks is None

    def test_last_day(self):
        """End date is inclusive."""
        result = classify(date(2025, 8, 3))
        assert result.phase is Phase.IN_SEMESTER
        assert result.week_number == 19

    def test_after_end(self):
        assert classify(date(2025, 8, 10)).phase is Phase.AFTER_END

    def test_day_after_end(self):
        assert classify(date(2025, 8, 4)).phase is Phase.AFTER_END

    def test_mid_week_start(self):
        """A semester starting mid-week counts from that week's Monday."""
        config = SemesterConfig(date(2025, 3, 26), date(2025, 8, 3), 8, 16)
        assert classify(date(2025, 3, 30), config).week_number == 1
        # Only 5 days after the start, but a new calendar week
        assert classify(date(2025, 3, 31), config).week_number == 2

    def test_idempotent(self):
        d = date(2025, 6, 1)
        assert classify(d) == classify(d)


class TestClassifyProperties:
    """Properties that hold for every day of the semester."""

    def test_week_range_contains_date(self):
        for d in _semester_days():
            result = classify(d)
            assert result.week_number >= 1
            assert result.week_start <= d <= result.week_end
            assert result.week_end - result.week_start == timedelta(days=6)
            assert result.week_start.weekday() == 0

    def test_monotonic(self):
        weeks = [classify(d).week_number for d in _semester_days()]
        assert weeks == sorted(weeks)

    def test_outside_semester(self):
        for offset in range(1, 60):
            before = USM_SEMESTER.start_date - timedelta(days=offset)
            after = USM_SEMESTER.end_date + timedelta(days=offset)
            assert classify(before).phase is Phase.BEFORE_START
            assert classify(after).phase is Phase.AFTER_END


class TestSelectMessage:
    """Tests for the week message partition."""

    @pytest.mark.parametrize("week, expected", [
        (1, WeekMessage(MessageKind.WEEKS_UNTIL_BREAK, 7)),
        (7, WeekMessage(MessageKind.WEEKS_UNTIL_BREAK, 1)),
        (8, WeekMessage(MessageKind.BREAK_WEEK)),
        (9, WeekMessage(MessageKind.WEEKS_UNTIL_STUDY_WEEK, 7)),
        (15, WeekMessage(MessageKind.WEEKS_UNTIL_STUDY_WEEK, 1)),
        (16, WeekMessage(MessageKind.STUDY_WEEK)),
        (17, WeekMessage(MessageKind.EXAM_PERIOD)),
        (25, WeekMessage(MessageKind.EXAM_PERIOD)),
    ])
    def test_partition(self, week, expected):
        assert select_message(week, USM_SEMESTER) == expected

    def test_countdowns_positive(self):
        """Countdown kinds always carry a positive week count."""
        for week in range(1, 30):
            message = select_message(week, USM_SEMESTER)
            if message.kind in (MessageKind.WEEKS_UNTIL_BREAK, MessageKind.WEEKS_UNTIL_STUDY_WEEK):
                assert message.weeks >= 1
            else:
                assert message.weeks is None


class TestWeekDates:
    """Tests for semester week date ranges."""

    def test_week_one(self):
        assert week_dates(1) == (date(2025, 3, 24), date(2025, 3, 30))

    def test_break_week(self):
        assert week_dates(8) == (date(2025, 5, 12), date(2025, 5, 18))

    def test_matches_classify(self):
        monday, sunday = week_dates(16)
        result = classify(monday)
        assert result.week_number == 16
        assert result.week_end == sunday


class TestParseDate:
    """Tests for date parsing."""

    def test_parse_iso_date(self):
        assert parse_date("2025-05-12") == date(2025, 5, 12)

    def test_parse_with_whitespace(self):
        assert parse_date(" 2025-05-12 ") == date(2025, 5, 12)

    def test_parse_iso_datetime(self):
        assert parse_date("2025-05-12T14:30:00") == date(2025, 5, 12)

    def test_parse_empty_string(self):
        assert parse_date("") is None

    def test_parse_none(self):
        assert parse_date(None) is None

    def test_parse_invalid(self):
        assert parse_date("invalid") is None

    def test_parse_impossible_date(self):
        assert parse_date("2025-02-30") is None


class TestIsSelectable:
    """Tests for the selectable year restriction."""

    def test_in_year(self):
        assert is_selectable(date(2025, 1, 1))
        assert is_selectable(date(2025, 12, 31))

    def test_out_of_year(self):
        assert not is_selectable(date(2024, 12, 31))
        assert not is_selectable(date(2026, 1, 1))


class TestFormatting:
    """Tests for date formatting."""

    def test_format_with_day(self):
        assert format_date(date(2025, 3, 24)) == "Monday, 24 March 2025"

    def test_format_without_day(self):
        assert format_date(date(2025, 3, 24), include_day=False) == "24 March 2025"

    def test_format_long_date(self):
        assert format_long_date(date(2025, 8, 3)) == "3 August 2025"

    def test_format_week_range(self):
        result = format_week_range(date(2025, 3, 24), date(2025, 3, 30))
        assert result == "24 March - 30 March 2025"

    def test_format_week_range_across_months(self):
        result = format_week_range(date(2025, 7, 28), date(2025, 8, 3))
        assert result == "28 July - 03 August 2025"
