"""Per-member fairness counters.

The tracker remembers how many holiday weeks and patching weeks each roster
member has been given so far in the run. Counters start at zero for every
roster member and only ever go up.
"""

from collections.abc import Iterable
from typing import Optional


class FairnessTracker:
    """Holiday-week and patching-week counters for a single scheduling pass.

    Duplicate roster entries share one set of counters, since fairness is
    tracked by member identity rather than rotation slot.
    """

    def __init__(
        self,
        roster: Iterable[str],
        holiday_counts: Optional[dict[str, int]] = None,
        patching_counts: Optional[dict[str, int]] = None,
    ):
        """Initialize counters for every roster member.

        Args:
            roster: Members to track.
            holiday_counts: Optional starting holiday counts (e.g. for tests).
            patching_counts: Optional starting patching counts.
        """
        members = list(roster)
        self.holiday_counts: dict[str, int] = {m: 0 for m in members}
        self.patching_counts: dict[str, int] = {m: 0 for m in members}

        for member, count in (holiday_counts or {}).items():
            self._seed(self.holiday_counts, member, count)
        for member, count in (patching_counts or {}).items():
            self._seed(self.patching_counts, member, count)

    @staticmethod
    def _seed(counts: dict[str, int], member: str, count: int) -> None:
        if member not in counts:
            raise KeyError(f"Cannot seed counter for non-roster member {member!r}")
        if count < 0:
            raise ValueError(f"Counter for {member!r} must be non-negative, got {count}")
        counts[member] = count

    @property
    def members(self) -> list[str]:
        return list(self.holiday_counts)

    def holiday_count(self, member: str) -> int:
        return self.holiday_counts.get(member, 0)

    def patching_count(self, member: str) -> int:
        return self.patching_counts.get(member, 0)

    def min_patching_count(self) -> int:
        """Lowest patching count across every roster member.

        This is a global floor: availability for any particular week is not
        taken into account.
        """
        if not self.patching_counts:
            return 0
        return min(self.patching_counts.values())

    def record_assignment(
        self,
        member: str,
        has_holiday: bool,
        has_patching: bool,
    ) -> None:
        """Count a finished assignment against ``member``."""
        if member not in self.holiday_counts:
            raise KeyError(f"Unknown roster member {member!r}")
        if has_holiday:
            self.holiday_counts[member] += 1
        if has_patching:
            self.patching_counts[member] += 1

    def snapshot(self) -> dict[str, tuple[int, int]]:
        """Copy of ``{member: (holiday_count, patching_count)}``."""
        return {
            m: (self.holiday_counts[m], self.patching_counts[m])
            for m in self.holiday_counts
        }
