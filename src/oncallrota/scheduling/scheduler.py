"""Main scheduler interface.

This module provides the high-level RotaScheduler class that orders the
roster, builds the schedule and summarizes it.
"""

from collections.abc import Sequence
from datetime import date
from typing import Optional

from oncallrota.domain.calendar import CalendarSet
from oncallrota.domain.models import ConfigurationError, Schedule
from oncallrota.scheduling.rotation import ShuffleFn, identity_shuffle
from oncallrota.scheduling.schedule_builder import ScheduleBuilder


class RotaScheduler:
    """High-level scheduler for generating on-call rotas.

    Example:
        >>> scheduler = RotaScheduler()
        >>> schedule, stats = scheduler.generate_schedule_with_stats(
        ...     ["Alice", "Bob", "Carol"], date(2024, 1, 15), 12, CalendarSet()
        ... )
    """

    def __init__(self, shuffle: Optional[ShuffleFn] = None):
        """Initialize scheduler.

        Args:
            shuffle: Applied once to the roster before scheduling. Defaults to
                keeping the given order, since loaders already shuffle.
        """
        self.shuffle = shuffle or identity_shuffle
        self.builder = ScheduleBuilder()

    def prepare_roster(self, members: Sequence[str]) -> list[str]:
        """Clean up and order the roster for a run."""
        roster = [m.strip() for m in members if m and m.strip()]
        if not roster:
            raise ConfigurationError("Roster is empty; nobody to schedule")
        return self.shuffle(roster)

    def generate_schedule(
        self,
        members: Sequence[str],
        start_date: date,
        num_weeks: int,
        calendar: Optional[CalendarSet] = None,
    ) -> Schedule:
        """Generate a complete rota.

        Args:
            members: Team members.
            start_date: Any date in the first week.
            num_weeks: Number of weeks to schedule.
            calendar: Holiday, patching and unavailability lookups.

        Returns:
            Schedule with one assignment per week.
        """
        roster = self.prepare_roster(members)
        return self.builder.build(
            roster, start_date, num_weeks, calendar or CalendarSet()
        )

    def generate_schedule_with_stats(
        self,
        members: Sequence[str],
        start_date: date,
        num_weeks: int,
        calendar: Optional[CalendarSet] = None,
    ) -> tuple[Schedule, dict]:
        """Generate schedule and return statistics.

        Returns:
            Tuple of (schedule, stats_dict).
        """
        schedule = self.generate_schedule(members, start_date, num_weeks, calendar)
        stats = self._calculate_stats(schedule, self.builder.cursor.roster)
        return schedule, stats

    def _calculate_stats(self, schedule: Schedule, roster: Sequence[str]) -> dict:
        """Calculate schedule statistics."""
        per_member = {
            m: {"weeks": 0, "holiday_weeks": 0, "patching_weeks": 0}
            for m in roster
        }
        per_member.update(schedule.member_counts())

        return {
            "total_weeks": len(schedule),
            "assigned_weeks": sum(1 for a in schedule if a.is_assigned),
            "unassigned_weeks": len(schedule.unassigned_weeks),
            "holiday_weeks": sum(1 for a in schedule if a.has_holiday),
            "patching_weeks": sum(1 for a in schedule if a.has_patching),
            "roster": list(roster),
            "per_member": per_member,
        }
