"""Domain models and calendar lookups for the on-call rota."""

from oncallrota.domain.calendar import CalendarSet, normalize_dates
from oncallrota.domain.models import (
    CSV_HEADER,
    UNASSIGNED,
    ConfigurationError,
    RotaConfig,
    Schedule,
    WeekAssignment,
    WeekWindow,
    week_start,
)

__all__ = [
    # Models
    "RotaConfig",
    "Schedule",
    "WeekAssignment",
    "WeekWindow",
    "week_start",
    # Calendar
    "CalendarSet",
    "normalize_dates",
    # Constants and errors
    "CSV_HEADER",
    "UNASSIGNED",
    "ConfigurationError",
]
