"""Domain models for the on-call rota.

This module contains the core data structures shared by the scheduling,
validation and output layers: week windows, per-week assignments, the
finished schedule, and the run configuration.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import Optional, Union

# Rendering of a week with no eligible member.
UNASSIGNED = "UNASSIGNED"

CSV_HEADER = [
    "Week",
    "Start Date",
    "End Date",
    "Assigned To",
    "Has Holiday",
    "Has Patching",
]


class ConfigurationError(ValueError):
    """Raised when a rota run cannot start (empty roster, bad week count)."""


def to_date(value: Union[date, datetime]) -> date:
    """Drop any time-of-day component."""
    if isinstance(value, datetime):
        return value.date()
    return value


def week_start(value: Union[date, datetime]) -> date:
    """Return the Monday of the ISO week containing ``value``."""
    d = to_date(value)
    return d - timedelta(days=d.isoweekday() - 1)


@dataclass(frozen=True)
class WeekWindow:
    """A Monday-to-Sunday span identified by its Monday.

    Attributes:
        start: The Monday that opens the window.
    """

    start: date

    def __post_init__(self):
        if self.start.isoweekday() != 1:
            raise ValueError(f"WeekWindow must start on a Monday, got {self.start}")

    @classmethod
    def containing(cls, value: Union[date, datetime]) -> "WeekWindow":
        """Build the window for the week that contains ``value``."""
        return cls(start=week_start(value))

    @property
    def end(self) -> date:
        """The Sunday closing the window."""
        return self.start + timedelta(days=6)

    @property
    def days(self) -> list[date]:
        """All seven dates of the window, Monday first."""
        return [self.start + timedelta(days=i) for i in range(7)]

    def next(self) -> "WeekWindow":
        """The window immediately after this one."""
        return WeekWindow(start=self.start + timedelta(days=7))

    def __contains__(self, value: object) -> bool:
        if not isinstance(value, date):
            return False
        return self.start <= to_date(value) <= self.end


@dataclass(frozen=True)
class WeekAssignment:
    """Outcome of scheduling one week.

    Attributes:
        week_number: 1-based position in the horizon.
        window: The week's Monday-to-Sunday window.
        assigned_to: Member name, or None when nobody was eligible.
        has_holiday: Whether any day of the week is a holiday.
        has_patching: Whether any day of the week is a patching day.
    """

    week_number: int
    window: WeekWindow
    assigned_to: Optional[str]
    has_holiday: bool = False
    has_patching: bool = False

    @property
    def start_date(self) -> date:
        return self.window.start

    @property
    def end_date(self) -> date:
        return self.window.end

    @property
    def is_assigned(self) -> bool:
        return self.assigned_to is not None

    @property
    def assignee_label(self) -> str:
        """Member name, or ``UNASSIGNED``."""
        return self.assigned_to if self.assigned_to is not None else UNASSIGNED

    def to_row(self) -> list[str]:
        """Render as a row matching ``CSV_HEADER``."""
        return [
            str(self.week_number),
            self.start_date.isoformat(),
            self.end_date.isoformat(),
            self.assignee_label,
            str(self.has_holiday),
            str(self.has_patching),
        ]


@dataclass
class Schedule:
    """Ordered sequence of week assignments for a horizon.

    Attributes:
        start_date: Monday of the first week.
        num_weeks: Horizon length requested.
        assignments: One WeekAssignment per week, in order.
    """

    start_date: date
    num_weeks: int
    assignments: list[WeekAssignment] = field(default_factory=list)

    def __iter__(self):
        return iter(self.assignments)

    def __len__(self) -> int:
        return len(self.assignments)

    def __getitem__(self, index: int) -> WeekAssignment:
        return self.assignments[index]

    @property
    def end_date(self) -> date:
        """Sunday of the last week (or the day before start if empty)."""
        if not self.assignments:
            return self.start_date - timedelta(days=1)
        return self.assignments[-1].end_date

    @property
    def unassigned_weeks(self) -> list[WeekAssignment]:
        return [a for a in self.assignments if not a.is_assigned]

    def weeks_for(self, member: str) -> list[WeekAssignment]:
        """All weeks assigned to ``member``."""
        return [a for a in self.assignments if a.assigned_to == member]

    def member_counts(self) -> dict[str, dict[str, int]]:
        """Per-member totals of weeks, holiday weeks and patching weeks."""
        counts: dict[str, dict[str, int]] = {}
        for assignment in self.assignments:
            if not assignment.is_assigned:
                continue
            entry = counts.setdefault(
                assignment.assigned_to,
                {"weeks": 0, "holiday_weeks": 0, "patching_weeks": 0},
            )
            entry["weeks"] += 1
            if assignment.has_holiday:
                entry["holiday_weeks"] += 1
            if assignment.has_patching:
                entry["patching_weeks"] += 1
        return counts


@dataclass
class RotaConfig:
    """Run configuration for a rota generation.

    Attributes:
        team_file: One member name per line.
        holidays_file: Newline-delimited YYYY-MM-DD holidays.
        patching_file: Newline-delimited YYYY-MM-DD patching days.
        unavailability_file: ``Name,YYYY-MM-DD`` lines.
        start_date: Any date in the first week (normalized to its Monday).
        num_weeks: Number of weeks to schedule.
        output_csv: Optional CSV export path.
        output_pdf: Optional PDF export path.
        seed: Seed for the roster shuffle; None for a fresh random order.
    """

    team_file: Path = Path("team.txt")
    holidays_file: Path = Path("holidays.txt")
    patching_file: Path = Path("patching.txt")
    unavailability_file: Path = Path("unavailability.txt")
    start_date: date = field(default_factory=date.today)
    num_weeks: int = 12
    output_csv: Optional[Path] = None
    output_pdf: Optional[Path] = None
    seed: Optional[int] = None

    def __post_init__(self):
        self.team_file = Path(self.team_file)
        self.holidays_file = Path(self.holidays_file)
        self.patching_file = Path(self.patching_file)
        self.unavailability_file = Path(self.unavailability_file)
        if self.output_csv is not None:
            self.output_csv = Path(self.output_csv)
        if self.output_pdf is not None:
            self.output_pdf = Path(self.output_pdf)

    def validate(self) -> None:
        """Raise ConfigurationError if the configuration cannot be run."""
        if self.num_weeks < 0:
            raise ConfigurationError(
                f"Number of weeks must not be negative, got {self.num_weeks}"
            )
