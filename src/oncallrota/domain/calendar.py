"""Date collections consulted while building a rota.

A CalendarSet bundles the holiday dates, patching dates and per-member
unavailability. All lookups are pure; the sets are frozen at construction
so a scheduling pass always sees fully materialized, immutable inputs.
"""

from collections.abc import Iterable, Mapping
from datetime import date, datetime
from typing import Optional, Union

from oncallrota.domain.models import WeekWindow, to_date

DateLike = Union[date, datetime]


def normalize_dates(values: Iterable[DateLike]) -> frozenset[date]:
    """Collapse an iterable of dates/datetimes into a frozen set of dates."""
    return frozenset(to_date(v) for v in values)


class CalendarSet:
    """Holiday, patching and unavailability lookups.

    Example:
        >>> calendar = CalendarSet(
        ...     holidays={date(2024, 12, 25)},
        ...     unavailability={"Alice": {date(2024, 12, 23)}},
        ... )
        >>> calendar.week_has_holiday(WeekWindow.containing(date(2024, 12, 25)))
        True
    """

    def __init__(
        self,
        holidays: Optional[Iterable[DateLike]] = None,
        patching: Optional[Iterable[DateLike]] = None,
        unavailability: Optional[Mapping[str, Iterable[DateLike]]] = None,
    ):
        self.holidays = normalize_dates(holidays or ())
        self.patching = normalize_dates(patching or ())
        self.unavailability: dict[str, frozenset[date]] = {
            member: normalize_dates(days)
            for member, days in (unavailability or {}).items()
        }

    def contains_holiday(self, value: DateLike) -> bool:
        return to_date(value) in self.holidays

    def contains_patching(self, value: DateLike) -> bool:
        return to_date(value) in self.patching

    def is_unavailable(self, member: str, value: DateLike) -> bool:
        return to_date(value) in self.unavailability.get(member, frozenset())

    def week_has_holiday(self, window: WeekWindow) -> bool:
        """True if any of the window's seven days is a holiday."""
        return any(d in self.holidays for d in window.days)

    def week_has_patching(self, window: WeekWindow) -> bool:
        """True if any of the window's seven days is a patching day."""
        return any(d in self.patching for d in window.days)

    def member_available_for_week(self, member: str, window: WeekWindow) -> bool:
        """True if ``member`` has no unavailable day inside ``window``.

        Members absent from the unavailability index are fully available.
        """
        blocked = self.unavailability.get(member)
        if not blocked:
            return True
        return not any(d in blocked for d in window.days)

    def unavailable_days(self, member: str, window: WeekWindow) -> list[date]:
        """The days of ``window`` on which ``member`` cannot serve."""
        blocked = self.unavailability.get(member, frozenset())
        return [d for d in window.days if d in blocked]
