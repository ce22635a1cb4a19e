"""Flat-file readers for team, calendar and unavailability inputs.

Every reader skips blank lines and ``#`` comments. Malformed lines are
logged and skipped so the scheduler only ever sees clean values.
"""

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from datetime import date, datetime
from pathlib import Path
from types import MappingProxyType
from typing import Optional, Union

from oncallrota.domain.calendar import CalendarSet
from oncallrota.domain.models import ConfigurationError, RotaConfig
from oncallrota.scheduling.rotation import ShuffleFn, make_shuffle

logger = logging.getLogger(__name__)

DATE_FORMAT = "%Y-%m-%d"

PathLike = Union[str, Path]


def parse_date(text: str) -> date:
    """Parse a ``YYYY-MM-DD`` token."""
    return datetime.strptime(text.strip(), DATE_FORMAT).date()


def _content_lines(path: Path) -> Iterator[tuple[int, str]]:
    """Yield (line_number, stripped_line) for non-blank, non-comment lines.

    Lines that are not valid UTF-8 are logged and skipped.
    """
    with path.open("rb") as f:
        for line_number, raw_bytes in enumerate(f, start=1):
            try:
                raw = raw_bytes.decode("utf-8-sig" if line_number == 1 else "utf-8")
            except UnicodeDecodeError:
                logger.warning(
                    "%s:%d: skipping line that is not valid UTF-8", path, line_number
                )
                continue
            line = raw.strip()
            if not line or line.startswith("#"):
                continue
            yield line_number, line


def load_team(path: PathLike, shuffle: Optional[ShuffleFn] = None) -> list[str]:
    """Read team members, one per line, and put them in rotation order.

    Args:
        path: Team file.
        shuffle: Ordering applied once after reading. Defaults to a random
            permutation.

    Raises:
        ConfigurationError: If the file is missing or lists nobody.
    """
    path = Path(path)
    if not path.exists():
        raise ConfigurationError(f"Team file not found: {path}")

    members = [line for _, line in _content_lines(path)]
    if not members:
        raise ConfigurationError(f"Team file lists no members: {path}")

    shuffle = shuffle or make_shuffle()
    roster = shuffle(members)
    logger.info("Loaded %d team members from %s", len(roster), path)
    return roster


def load_dates(path: PathLike) -> frozenset[date]:
    """Read newline-delimited ``YYYY-MM-DD`` dates.

    A missing file is treated as an empty set.
    """
    path = Path(path)
    if not path.exists():
        logger.info("No date file at %s; treating as empty", path)
        return frozenset()

    dates = set()
    for line_number, line in _content_lines(path):
        try:
            dates.add(parse_date(line))
        except ValueError:
            logger.warning("%s:%d: skipping malformed date %r", path, line_number, line)

    logger.info("Loaded %d dates from %s", len(dates), path)
    return frozenset(dates)


def load_unavailability(path: PathLike) -> dict[str, frozenset[date]]:
    """Read ``Name,YYYY-MM-DD`` lines into a member -> dates index.

    A missing file is treated as nobody being unavailable.
    """
    path = Path(path)
    if not path.exists():
        logger.info("No unavailability file at %s; treating as empty", path)
        return {}

    index: dict[str, set[date]] = {}
    for line_number, line in _content_lines(path):
        parts = [p.strip() for p in line.split(",")]
        if len(parts) != 2 or not parts[0]:
            logger.warning(
                "%s:%d: skipping malformed unavailability line %r",
                path, line_number, line,
            )
            continue
        name, token = parts
        try:
            day = parse_date(token)
        except ValueError:
            logger.warning(
                "%s:%d: skipping unavailability with bad date %r",
                path, line_number, token,
            )
            continue
        index.setdefault(name, set()).add(day)

    logger.info(
        "Loaded unavailability for %d members from %s", len(index), path
    )
    return {name: frozenset(days) for name, days in index.items()}


@dataclass(frozen=True)
class RotaInputs:
    """Everything a run needs, fully loaded before scheduling starts.

    The unavailability index is wrapped in a read-only mapping and left out
    of the hash, so instances stay immutable and hashable.
    """

    roster: tuple[str, ...]
    holidays: frozenset[date] = frozenset()
    patching: frozenset[date] = frozenset()
    unavailability: Mapping[str, frozenset[date]] = field(
        default_factory=dict, hash=False
    )

    def __post_init__(self):
        object.__setattr__(self, "roster", tuple(self.roster))
        object.__setattr__(
            self,
            "unavailability",
            MappingProxyType(
                {name: frozenset(days) for name, days in self.unavailability.items()}
            ),
        )

    def calendar(self) -> CalendarSet:
        return CalendarSet(
            holidays=self.holidays,
            patching=self.patching,
            unavailability=self.unavailability,
        )

    def unknown_unavailable_members(self) -> list[str]:
        """Names in the unavailability index that are not on the roster."""
        return sorted(set(self.unavailability) - set(self.roster))


def load_inputs(config: RotaConfig, shuffle: Optional[ShuffleFn] = None) -> RotaInputs:
    """Load all input files named by ``config``.

    Args:
        config: Run configuration.
        shuffle: Roster ordering; defaults to one seeded from ``config.seed``.
    """
    roster = load_team(config.team_file, shuffle or make_shuffle(config.seed))
    inputs = RotaInputs(
        roster=tuple(roster),
        holidays=load_dates(config.holidays_file),
        patching=load_dates(config.patching_file),
        unavailability=load_unavailability(config.unavailability_file),
    )
    for name in inputs.unknown_unavailable_members():
        logger.warning("Unavailability listed for %r, who is not on the team", name)
    return inputs
