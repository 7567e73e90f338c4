"""
Puzzle unlock and date resolution.

Puzzles unlock at midnight in a fixed UTC-5 offset, one per day from the 1st
to the 25th of December. Everything here takes an optional ``now`` so that
callers (and tests) can pin the clock; it defaults to the current time.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from datetime import timedelta
from datetime import timezone

from .exceptions import InvalidEventYear
from .exceptions import InvalidPuzzleDate
from .exceptions import InvalidPuzzleDay
from .exceptions import LockedPuzzle
from .types import PuzzleDay
from .types import PuzzleYear


log = logging.getLogger(__name__)


# no daylight saving - the unlock is always at midnight UTC-5
RELEASE_TZ = timezone(timedelta(hours=-5))
FIRST_EVENT_YEAR = 2015
DECEMBER = 12
FIRST_PUZZLE_DAY = 1
LAST_PUZZLE_DAY = 25
URL = "https://adventofcode.com/{year}/day/{day}"


def release_now(now: datetime | None = None) -> datetime:
    """The given instant (default: right now) in the release timezone."""
    if now is None:
        return datetime.now(tz=RELEASE_TZ)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.astimezone(RELEASE_TZ)


@dataclass(frozen=True)
class PuzzleDate:
    year: PuzzleYear
    day: PuzzleDay

    def __post_init__(self) -> None:
        if self.year < FIRST_EVENT_YEAR:
            raise InvalidEventYear(self.year)
        if not FIRST_PUZZLE_DAY <= self.day <= LAST_PUZZLE_DAY:
            raise InvalidPuzzleDay(self.day, self.year)
        try:
            datetime(self.year, DECEMBER, self.day)
        except (ValueError, OverflowError):
            raise InvalidPuzzleDate(self.day, self.year)

    def __str__(self) -> str:
        return f"{self.year}/{self.day:02d}"

    @property
    def unlock_time(self) -> datetime:
        """Local midnight of this puzzle's day, in the release timezone."""
        return datetime(self.year, DECEMBER, self.day, tzinfo=RELEASE_TZ)

    @property
    def url(self) -> str:
        """A link to the puzzle's description page on adventofcode.com."""
        return URL.format(year=self.year, day=self.day)

    def is_unlocked(self, now: datetime | None = None) -> bool:
        return is_unlocked(self, now)

    def ensure_unlocked(self, now: datetime | None = None) -> None:
        if not is_unlocked(self, now):
            log.debug("%s unlocks at %s", self, self.unlock_time.isoformat())
            raise LockedPuzzle(self.day, self.year)


def is_unlocked(date: PuzzleDate, now: datetime | None = None) -> bool:
    """True from the moment the puzzle unlocks onwards."""
    return release_now(now) >= date.unlock_time


def latest_unlocked_year(now: datetime | None = None) -> PuzzleYear:
    """
    This year, if it's December.
    The most recent year, otherwise.
    Note: Advent of Code started in 2015
    """
    aoc_now = release_now(now)
    year = aoc_now.year
    if aoc_now.month < DECEMBER:
        year -= 1
    if year < FIRST_EVENT_YEAR:
        raise InvalidEventYear(year)
    return year


def latest_unlocked_day(
    year: PuzzleYear, now: datetime | None = None
) -> PuzzleDay | None:
    """
    The last day of the given event which is playable, or None if the event
    has not started yet (or never happened).
    """
    aoc_now = release_now(now)
    if year == aoc_now.year and aoc_now.month == DECEMBER:
        return min(aoc_now.day, LAST_PUZZLE_DAY)
    if FIRST_EVENT_YEAR <= year < aoc_now.year:
        return LAST_PUZZLE_DAY
    return None


def resolve_year(
    explicit_year: PuzzleYear | None = None, now: datetime | None = None
) -> PuzzleYear:
    if explicit_year is None:
        year = latest_unlocked_year(now)
        log.debug("most recent year=%s", year)
        return year
    if explicit_year < FIRST_EVENT_YEAR:
        raise InvalidEventYear(explicit_year)
    return explicit_year


def resolve_day(
    year: PuzzleYear,
    explicit_day: PuzzleDay | None = None,
    now: datetime | None = None,
) -> PuzzleDay:
    """
    The explicit day if given, otherwise the last unlocked day: today during
    the event, the 25th for past events and the 1st for upcoming ones.
    """
    if explicit_day is not None:
        if not FIRST_PUZZLE_DAY <= explicit_day <= LAST_PUZZLE_DAY:
            raise InvalidPuzzleDay(explicit_day, year)
        return explicit_day
    aoc_now = release_now(now)
    if year == aoc_now.year and aoc_now.month == DECEMBER:
        day = min(aoc_now.day, LAST_PUZZLE_DAY)
    elif year < aoc_now.year:
        day = LAST_PUZZLE_DAY
    else:
        day = FIRST_PUZZLE_DAY
    log.debug("current day=%s for year %s", day, year)
    return day
