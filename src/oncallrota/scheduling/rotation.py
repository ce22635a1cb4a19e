"""Circular rotation over the roster.

The cursor is shared by every week of a run. It advances once per candidate
considered, accepted or not, and is never reset, so a week that rejects
everybody leaves the next week starting at the same phase.
"""

import random
from collections.abc import Callable, Sequence
from typing import Optional

ShuffleFn = Callable[[Sequence[str]], list[str]]


def identity_shuffle(members: Sequence[str]) -> list[str]:
    """Keep the roster in the given order."""
    return list(members)


def make_shuffle(seed: Optional[int] = None) -> ShuffleFn:
    """Build a shuffle that orders the roster by a random key per member.

    Args:
        seed: Seed for reproducible orderings. None draws fresh entropy.
    """
    rng = random.Random(seed)

    def shuffle(members: Sequence[str]) -> list[str]:
        keyed = [(rng.random(), i, m) for i, m in enumerate(members)]
        keyed.sort()
        return [m for _, _, m in keyed]

    return shuffle


class RotationCursor:
    """Persistent circular pointer into the roster.

    Attributes:
        roster: Fixed member order for the run.
        index: Total number of advances so far. Never wrapped; the modulus
            is applied on read.
    """

    def __init__(self, roster: Sequence[str], index: int = 0):
        if not roster:
            raise ValueError("RotationCursor requires a non-empty roster")
        if index < 0:
            raise ValueError(f"Cursor index must be non-negative, got {index}")
        self.roster: tuple[str, ...] = tuple(roster)
        self.index = index

    @property
    def size(self) -> int:
        return len(self.roster)

    @property
    def position(self) -> int:
        """Current index as a plain integer.

        Lookahead scans work on this copy so they cannot move the cursor.
        """
        return self.index

    def peek(self) -> str:
        """The member the cursor currently points at."""
        return self.roster[self.index % self.size]

    def member_at(self, position: int) -> str:
        """The member at an arbitrary (unwrapped) position."""
        return self.roster[position % self.size]

    def advance(self) -> None:
        self.index += 1
