"""Tests for week windows and calendar lookups."""

from datetime import date, datetime, timedelta

import pytest

from oncallrota.domain.calendar import CalendarSet, normalize_dates
from oncallrota.domain.models import WeekWindow, week_start


class TestWeekWindow:
    """Tests for the Monday-anchored week window."""

    def test_monday_is_its_own_week_start(self, base_date):
        assert week_start(base_date) == base_date

    def test_sunday_belongs_to_preceding_monday(self, base_date):
        sunday = base_date + timedelta(days=6)
        assert week_start(sunday) == base_date

    def test_midweek_datetime_is_normalized(self, base_date):
        wednesday = datetime(2024, 1, 17, 15, 30)
        window = WeekWindow.containing(wednesday)
        assert window.start == base_date
        assert window.end == date(2024, 1, 21)

    def test_window_must_start_on_monday(self):
        with pytest.raises(ValueError):
            WeekWindow(start=date(2024, 1, 16))

    def test_days_and_next(self, base_date):
        window = WeekWindow(base_date)
        assert len(window.days) == 7
        assert window.days[0] == base_date
        assert window.days[-1] == window.end
        assert window.next().start == base_date + timedelta(days=7)

    def test_contains(self, base_date):
        window = WeekWindow(base_date)
        assert base_date + timedelta(days=3) in window
        assert base_date + timedelta(days=7) not in window
        assert "2024-01-15" not in window


class TestCalendarSet:
    """Tests for holiday, patching and unavailability lookups."""

    def test_normalize_dates_drops_time(self):
        dates = normalize_dates([datetime(2024, 12, 25, 9, 0), date(2024, 12, 25)])
        assert dates == frozenset({date(2024, 12, 25)})

    def test_point_lookups(self):
        calendar = CalendarSet(
            holidays=[date(2024, 12, 25)],
            patching=[datetime(2024, 12, 10, 22, 0)],
            unavailability={"Alice": [date(2024, 12, 3)]},
        )
        assert calendar.contains_holiday(date(2024, 12, 25))
        assert not calendar.contains_holiday(date(2024, 12, 26))
        assert calendar.contains_patching(date(2024, 12, 10))
        assert calendar.is_unavailable("Alice", datetime(2024, 12, 3, 8, 0))
        assert not calendar.is_unavailable("Bob", date(2024, 12, 3))

    def test_week_flags(self, base_date):
        calendar = CalendarSet(
            holidays=[base_date + timedelta(days=6)],
            patching=[base_date + timedelta(days=8)],
        )
        first = WeekWindow(base_date)
        second = first.next()
        assert calendar.week_has_holiday(first)
        assert not calendar.week_has_patching(first)
        assert not calendar.week_has_holiday(second)
        assert calendar.week_has_patching(second)

    def test_member_available_for_week(self, base_date):
        calendar = CalendarSet(unavailability={"Alice": [base_date + timedelta(days=4)]})
        window = WeekWindow(base_date)
        assert not calendar.member_available_for_week("Alice", window)
        assert calendar.member_available_for_week("Alice", window.next())
        assert calendar.unavailable_days("Alice", window) == [base_date + timedelta(days=4)]

    def test_absent_member_is_fully_available(self, base_date):
        calendar = CalendarSet()
        assert calendar.member_available_for_week("Nobody", WeekWindow(base_date))
