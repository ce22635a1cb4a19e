"""Tests for the high-level rota scheduler."""

from datetime import timedelta

import pytest

from oncallrota.domain.calendar import CalendarSet
from oncallrota.domain.models import ConfigurationError
from oncallrota.scheduling.rotation import make_shuffle
from oncallrota.scheduling.scheduler import RotaScheduler


class TestRotaScheduler:
    """Tests for RotaScheduler."""

    def test_default_keeps_roster_order(self, base_date):
        scheduler = RotaScheduler()
        schedule = scheduler.generate_schedule(["Carol", "Alice", "Bob"], base_date, 3)
        assert [a.assigned_to for a in schedule] == ["Carol", "Alice", "Bob"]

    def test_prepare_roster_strips_blank_names(self):
        scheduler = RotaScheduler()
        assert scheduler.prepare_roster(["  Alice ", "", "   ", "Bob"]) == ["Alice", "Bob"]

    def test_prepare_roster_rejects_empty(self):
        with pytest.raises(ConfigurationError):
            RotaScheduler().prepare_roster(["", "  "])

    def test_shuffle_applied_once(self, base_date):
        calls = []

        def reverse(members):
            calls.append(list(members))
            return list(reversed(members))

        scheduler = RotaScheduler(shuffle=reverse)
        schedule = scheduler.generate_schedule(["A", "B", "C"], base_date, 4)

        assert len(calls) == 1
        assert [a.assigned_to for a in schedule] == ["C", "B", "A", "C"]

    def test_seeded_shuffle_reproducible(self, base_date):
        members = [f"M{i}" for i in range(6)]
        first = RotaScheduler(shuffle=make_shuffle(11)).generate_schedule(members, base_date, 8)
        second = RotaScheduler(shuffle=make_shuffle(11)).generate_schedule(members, base_date, 8)
        assert first.assignments == second.assignments

    def test_stats(self, base_date, week_days):
        calendar = CalendarSet(
            holidays=[base_date + timedelta(days=2)],
            patching=[base_date + timedelta(weeks=1)],
            unavailability={m: week_days(base_date, 2) for m in ["A", "B"]},
        )
        scheduler = RotaScheduler()
        schedule, stats = scheduler.generate_schedule_with_stats(
            ["A", "B"], base_date, 4, calendar
        )

        assert stats["total_weeks"] == 4
        assert stats["assigned_weeks"] == 3
        assert stats["unassigned_weeks"] == 1
        assert stats["holiday_weeks"] == 1
        assert stats["patching_weeks"] == 1
        assert stats["roster"] == ["A", "B"]
        assert stats["per_member"]["A"] == {"weeks": 2, "holiday_weeks": 1, "patching_weeks": 0}
        assert stats["per_member"]["B"] == {"weeks": 1, "holiday_weeks": 0, "patching_weeks": 1}

    def test_stats_include_members_without_weeks(self, base_date):
        _, stats = RotaScheduler().generate_schedule_with_stats(["A", "B", "C"], base_date, 1)
        assert stats["per_member"]["C"]["weeks"] == 0
