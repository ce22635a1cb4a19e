"""Validation module for verifying rota correctness.

The validator replays a finished schedule against the roster and calendar
and reports every broken rule. It is independent of the scheduler, so it
also catches hand-edited or imported schedules.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum
from typing import Optional

from oncallrota.domain.calendar import CalendarSet
from oncallrota.domain.models import Schedule, WeekAssignment


class ValidationErrorType(Enum):
    """Types of validation errors."""

    UNKNOWN_MEMBER = "unknown_member"
    MEMBER_UNAVAILABLE = "member_unavailable"
    HOLIDAY_CAP_EXCEEDED = "holiday_cap_exceeded"
    PATCHING_UNFAIR = "patching_unfair"
    WEEK_SEQUENCE_BROKEN = "week_sequence_broken"
    FLAG_MISMATCH = "flag_mismatch"


@dataclass
class ValidationError:
    """A single validation error."""

    error_type: ValidationErrorType
    message: str
    member: Optional[str] = None
    week_number: Optional[int] = None
    details: dict = field(default_factory=dict)

    def __str__(self) -> str:
        parts = [f"[{self.error_type.value}]"]
        if self.week_number is not None:
            parts.append(f"Week {self.week_number}:")
        if self.member:
            parts.append(f"{self.member}:")
        parts.append(self.message)
        return " ".join(parts)


@dataclass
class ValidationResult:
    """Result of validating a schedule."""

    is_valid: bool
    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def add_error(self, error: ValidationError) -> None:
        """Add an error and mark as invalid."""
        self.errors.append(error)
        self.is_valid = False

    def add_warning(self, warning: str) -> None:
        """Add a warning (doesn't affect validity)."""
        self.warnings.append(warning)

    def errors_of_type(self, error_type: ValidationErrorType) -> list[ValidationError]:
        return [e for e in self.errors if e.error_type == error_type]


class ScheduleValidator:
    """Validates rotas against the holiday cap, availability and fairness.

    Example:
        >>> validator = ScheduleValidator()
        >>> result = validator.validate(schedule, roster, calendar)
        >>> if not result.is_valid:
        ...     for error in result.errors:
        ...         print(error)
    """

    def __init__(self, holiday_cap: int = 1):
        self.holiday_cap = holiday_cap

    def validate(
        self,
        schedule: Schedule,
        roster: Sequence[str],
        calendar: CalendarSet,
    ) -> ValidationResult:
        """Validate a complete schedule.

        Args:
            schedule: The schedule to validate.
            roster: Members eligible for the rota.
            calendar: Calendar the schedule was built against.

        Returns:
            ValidationResult with is_valid flag and any errors.
        """
        result = ValidationResult(is_valid=True)
        members = set(roster)
        holiday_counts = {m: 0 for m in members}
        patching_counts = {m: 0 for m in members}

        self._validate_sequence(schedule, result)

        for assignment in schedule:
            self._validate_flags(assignment, calendar, result)

            if not assignment.is_assigned:
                result.add_warning(
                    f"Week {assignment.week_number} "
                    f"({assignment.start_date} to {assignment.end_date}) is unassigned"
                )
                continue

            member = assignment.assigned_to
            if member not in members:
                result.add_error(
                    ValidationError(
                        error_type=ValidationErrorType.UNKNOWN_MEMBER,
                        message="Assignee is not on the roster",
                        member=member,
                        week_number=assignment.week_number,
                    )
                )
                continue

            self._validate_availability(assignment, calendar, result)

            if assignment.has_holiday:
                if holiday_counts[member] >= self.holiday_cap:
                    result.add_error(
                        ValidationError(
                            error_type=ValidationErrorType.HOLIDAY_CAP_EXCEEDED,
                            message=(
                                f"Already served {holiday_counts[member]} holiday "
                                f"week(s) (cap {self.holiday_cap})"
                            ),
                            member=member,
                            week_number=assignment.week_number,
                        )
                    )
                holiday_counts[member] += 1

            if assignment.has_patching:
                self._validate_patching_fairness(
                    assignment, calendar, holiday_counts, patching_counts, result
                )
                patching_counts[member] += 1

        return result

    def _validate_sequence(self, schedule: Schedule, result: ValidationResult) -> None:
        """Check week numbers run 1..N and windows are consecutive."""
        expected_start = schedule.start_date
        for i, assignment in enumerate(schedule, start=1):
            if assignment.week_number != i or assignment.start_date != expected_start:
                result.add_error(
                    ValidationError(
                        error_type=ValidationErrorType.WEEK_SEQUENCE_BROKEN,
                        message=(
                            f"Expected week {i} starting {expected_start}, "
                            f"got week {assignment.week_number} starting "
                            f"{assignment.start_date}"
                        ),
                        week_number=assignment.week_number,
                    )
                )
            expected_start = assignment.start_date + timedelta(days=7)

        if len(schedule) != schedule.num_weeks:
            result.add_error(
                ValidationError(
                    error_type=ValidationErrorType.WEEK_SEQUENCE_BROKEN,
                    message=(
                        f"Schedule has {len(schedule)} weeks, "
                        f"expected {schedule.num_weeks}"
                    ),
                )
            )

    def _validate_flags(
        self,
        assignment: WeekAssignment,
        calendar: CalendarSet,
        result: ValidationResult,
    ) -> None:
        expected = (
            calendar.week_has_holiday(assignment.window),
            calendar.week_has_patching(assignment.window),
        )
        actual = (assignment.has_holiday, assignment.has_patching)
        if expected != actual:
            result.add_error(
                ValidationError(
                    error_type=ValidationErrorType.FLAG_MISMATCH,
                    message=(
                        f"Flags (holiday, patching) are {actual}, "
                        f"calendar says {expected}"
                    ),
                    week_number=assignment.week_number,
                )
            )

    def _validate_availability(
        self,
        assignment: WeekAssignment,
        calendar: CalendarSet,
        result: ValidationResult,
    ) -> None:
        blocked = calendar.unavailable_days(assignment.assigned_to, assignment.window)
        if blocked:
            result.add_error(
                ValidationError(
                    error_type=ValidationErrorType.MEMBER_UNAVAILABLE,
                    message="Unavailable on " + ", ".join(d.isoformat() for d in blocked),
                    member=assignment.assigned_to,
                    week_number=assignment.week_number,
                    details={"days": blocked},
                )
            )

    def _validate_patching_fairness(
        self,
        assignment: WeekAssignment,
        calendar: CalendarSet,
        holiday_counts: dict[str, int],
        patching_counts: dict[str, int],
        result: ValidationResult,
    ) -> None:
        """A patching week above the minimum needs no fair alternative to exist.

        ``holiday_counts`` already includes this week, so holiday eligibility
        of the alternatives is judged on the counts before it.
        """
        member = assignment.assigned_to
        floor = min(patching_counts.values())
        if patching_counts[member] == floor:
            return

        def holiday_before(m: str) -> int:
            count = holiday_counts[m]
            if m == member and assignment.has_holiday:
                count -= 1
            return count

        alternatives = [
            m for m in patching_counts
            if patching_counts[m] == floor
            and calendar.member_available_for_week(m, assignment.window)
            and (not assignment.has_holiday or holiday_before(m) < self.holiday_cap)
        ]
        if alternatives:
            result.add_error(
                ValidationError(
                    error_type=ValidationErrorType.PATCHING_UNFAIR,
                    message=(
                        f"Has {patching_counts[member]} patching weeks while "
                        f"{', '.join(sorted(alternatives))} had {floor}"
                    ),
                    member=member,
                    week_number=assignment.week_number,
                )
            )
