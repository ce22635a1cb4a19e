"""Per-week candidate search.

For one week the assigner walks the rotation at most once around the
roster, applying three filters to each candidate in turn:

1. Unavailability: any blocked day inside the week disqualifies.
2. Holiday cap: a member who already served a holiday week cannot take
   another holiday week.
3. Patching fairness: a member above the global minimum patching count is
   passed over, but only when some other member at the minimum could take
   the week (available, and holiday-eligible if the week has a holiday).

The first candidate that survives is assigned. Every candidate considered
advances the shared cursor by one, so a week that finds nobody advances it
by exactly the roster size.
"""

import logging
from typing import Optional

from oncallrota.domain.calendar import CalendarSet
from oncallrota.domain.models import WeekWindow
from oncallrota.scheduling.fairness import FairnessTracker
from oncallrota.scheduling.rotation import RotationCursor

logger = logging.getLogger(__name__)


class WeekAssigner:
    """Picks the on-call member for a single week.

    The assigner owns no state of its own. The cursor and fairness tracker
    are passed in and mutated in place so that successive weeks (and tests)
    share them explicitly.
    """

    def __init__(
        self,
        cursor: RotationCursor,
        fairness: FairnessTracker,
        calendar: CalendarSet,
    ):
        self.cursor = cursor
        self.fairness = fairness
        self.calendar = calendar

    @property
    def roster(self) -> tuple[str, ...]:
        return self.cursor.roster

    def is_holiday_eligible(self, member: str, has_holiday: bool) -> bool:
        """Holiday weeks are capped at one per member."""
        return not has_holiday or self.fairness.holiday_count(member) < 1

    def fairer_candidate_exists(
        self,
        start: int,
        window: WeekWindow,
        has_holiday: bool,
        min_patching: int,
    ) -> bool:
        """Scan the whole roster from ``start`` for a member at the minimum.

        A match must sit at ``min_patching``, be available for the week and
        be holiday-eligible. ``start`` is a plain integer; the cursor itself
        is not touched.
        """
        for offset in range(self.cursor.size):
            other = self.cursor.member_at(start + offset)
            if (
                self.fairness.patching_count(other) == min_patching
                and self.calendar.member_available_for_week(other, window)
                and self.is_holiday_eligible(other, has_holiday)
            ):
                return True
        return False

    def assign(
        self,
        window: WeekWindow,
        has_holiday: bool,
        has_patching: bool,
    ) -> Optional[str]:
        """Choose a member for ``window``.

        Args:
            window: The week being scheduled.
            has_holiday: Whether the week contains a holiday.
            has_patching: Whether the week contains a patching day.

        Returns:
            The assigned member, or None if nobody on the roster is eligible.
        """
        min_patching = self.fairness.min_patching_count()

        for attempt in range(self.cursor.size):
            candidate = self.cursor.peek()
            eligible = self.calendar.member_available_for_week(candidate, window)
            reason = None if eligible else "unavailable"

            if eligible and not self.is_holiday_eligible(candidate, has_holiday):
                eligible = False
                reason = "holiday cap reached"

            if (
                eligible
                and has_patching
                and self.fairness.patching_count(candidate) > min_patching
                and self.fairer_candidate_exists(
                    self.cursor.position, window, has_holiday, min_patching
                )
            ):
                eligible = False
                reason = "deferred to a member with fewer patching weeks"

            if eligible:
                self.fairness.record_assignment(candidate, has_holiday, has_patching)
                self.cursor.advance()
                logger.debug(
                    "Week of %s: assigned %s on attempt %d",
                    window.start, candidate, attempt + 1,
                )
                return candidate

            logger.debug("Week of %s: skipped %s (%s)", window.start, candidate, reason)
            self.cursor.advance()

        return None
