"""Drives the week assigner across the whole horizon."""

import logging
from collections.abc import Sequence
from datetime import date
from typing import Optional

from oncallrota.domain.calendar import CalendarSet
from oncallrota.domain.models import (
    ConfigurationError,
    Schedule,
    WeekAssignment,
    WeekWindow,
)
from oncallrota.scheduling.fairness import FairnessTracker
from oncallrota.scheduling.rotation import RotationCursor
from oncallrota.scheduling.week_assigner import WeekAssigner

logger = logging.getLogger(__name__)


class ScheduleBuilder:
    """Builds a Schedule one week at a time.

    A fresh cursor and fairness tracker are created per build unless the
    caller injects its own, which lets tests start from a given state and
    inspect it afterwards.

    Example:
        >>> builder = ScheduleBuilder()
        >>> schedule = builder.build(["Alice", "Bob"], date(2024, 1, 1), 4, CalendarSet())
        >>> [a.assigned_to for a in schedule]
        ['Alice', 'Bob', 'Alice', 'Bob']
    """

    def __init__(self):
        self.cursor: Optional[RotationCursor] = None
        self.fairness: Optional[FairnessTracker] = None

    def build(
        self,
        roster: Sequence[str],
        start_date: date,
        num_weeks: int,
        calendar: CalendarSet,
        cursor: Optional[RotationCursor] = None,
        fairness: Optional[FairnessTracker] = None,
    ) -> Schedule:
        """Assign every week of the horizon.

        Args:
            roster: Members in rotation order (already shuffled).
            start_date: Any date in the first week.
            num_weeks: Weeks to schedule. Zero yields an empty schedule.
            calendar: Holiday, patching and unavailability lookups.
            cursor: Optional pre-built rotation cursor.
            fairness: Optional pre-seeded fairness tracker.

        Returns:
            Schedule with exactly ``num_weeks`` assignments.

        Raises:
            ConfigurationError: If the roster is empty or num_weeks is negative.
        """
        if not roster:
            raise ConfigurationError("Roster is empty; nobody to schedule")
        if num_weeks < 0:
            raise ConfigurationError(
                f"Number of weeks must not be negative, got {num_weeks}"
            )

        self.cursor = cursor or RotationCursor(roster)
        self.fairness = fairness or FairnessTracker(roster)
        assigner = WeekAssigner(self.cursor, self.fairness, calendar)

        window = WeekWindow.containing(start_date)
        schedule = Schedule(start_date=window.start, num_weeks=num_weeks)

        for week_number in range(1, num_weeks + 1):
            has_holiday = calendar.week_has_holiday(window)
            has_patching = calendar.week_has_patching(window)

            member = assigner.assign(window, has_holiday, has_patching)
            if member is None:
                logger.warning(
                    "Week %d (%s to %s) left unassigned: no eligible member",
                    week_number, window.start, window.end,
                )

            schedule.assignments.append(
                WeekAssignment(
                    week_number=week_number,
                    window=window,
                    assigned_to=member,
                    has_holiday=has_holiday,
                    has_patching=has_patching,
                )
            )
            window = window.next()

        return schedule
