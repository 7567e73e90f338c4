from __future__ import annotations

import logging
import typing as t
from dataclasses import dataclass
from dataclasses import field

from .dates import FIRST_PUZZLE_DAY
from .dates import LAST_PUZZLE_DAY
from .exceptions import AocResponseError
from .types import LeaderboardPayload
from .types import MemberId
from .types import MemberPayload
from .types import PuzzleDay
from .utils import colored


log = logging.getLogger(__name__)


GOLD = colored("*", "yellow")
SILVER = colored("*", "white")
DIM = colored(".", "gray")
LOCKED = " "
DAY_HEADERS = [
    "         1111111111222222",
    "1234567890123456789012345",
]


@dataclass(frozen=True, eq=False)
class Member:
    id: MemberId
    name: str | None
    local_score: int
    stars_by_day: dict[PuzzleDay, frozenset[str]] = field(default_factory=dict)

    def __eq__(self, other):
        if not isinstance(other, Member):
            return NotImplemented
        return self.id == other.id

    def __hash__(self):
        return hash(self.id)

    @classmethod
    def from_json(cls, data: MemberPayload) -> Member:
        try:
            stars = {
                int(day): frozenset(levels)
                for day, levels in (data.get("completion_day_level") or {}).items()
            }
            return cls(
                id=int(data["id"]),
                name=data.get("name"),
                local_score=int(data["local_score"]),
                stars_by_day=stars,
            )
        except (KeyError, TypeError, ValueError, AttributeError) as err:
            log.debug("malformed leaderboard member %r: %r", data, err)
            raise AocResponseError() from err

    @property
    def display_name(self) -> str:
        if self.name is not None:
            return self.name
        return f"(anonymous user #{self.id})"

    def count_stars(self, day: PuzzleDay) -> int:
        return len(self.stars_by_day.get(day, ()))


@dataclass(frozen=True)
class Leaderboard:
    owner_id: MemberId
    members: frozenset[Member]

    @classmethod
    def from_json(cls, data: LeaderboardPayload) -> Leaderboard:
        try:
            owner_id = int(data["owner_id"])
            members = data["members"].values()
        except (KeyError, TypeError, ValueError, AttributeError) as err:
            raise AocResponseError() from err
        return cls(owner_id=owner_id, members=frozenset(Member.from_json(m) for m in members))

    @property
    def owner(self) -> Member:
        for member in self.members:
            if member.id == self.owner_id:
                return member
        log.debug("owner id %s not among %d members", self.owner_id, len(self.members))
        raise AocResponseError()


def rank(members: t.Iterable[Member]) -> list[tuple[Member, int]]:
    """
    Highest score first. Equal scores are ordered by member id, lowest first.
    Ranks are positions: a tie still gets two different rank numbers.
    """
    ordered = sorted(members, key=lambda m: (-m.local_score, m.id))
    return [(member, position) for position, member in enumerate(ordered, start=1)]


def star_glyph(member: Member, day: PuzzleDay, last_unlocked_day: PuzzleDay) -> str:
    if day > last_unlocked_day:
        return LOCKED
    n = member.count_stars(day)
    if n == 2:
        return GOLD
    if n == 1:
        return SILVER
    if n != 0:
        log.warning(
            "member %s has %d stars on day %d, expected at most 2",
            member.id,
            n,
            day,
        )
    return DIM


def render(members: t.Iterable[Member], last_unlocked_day: PuzzleDay) -> str:
    """
    The calendar-ish grid: two header rows numbering the days, then one row per
    member with their rank, score, a glyph per day and their name.
    """
    ranked = rank(members)
    highest_score = ranked[0][0].local_score if ranked else 0
    score_width = len(str(highest_score))
    rank_width = len(str(1 + len(ranked)))
    header_pad = " " * (rank_width + score_width)
    lines = []
    for header in DAY_HEADERS:
        on, off = header[:last_unlocked_day], header[last_unlocked_day:]
        lines.append(f"{header_pad}   {on}{colored(off, 'gray')}")
    days = range(FIRST_PUZZLE_DAY, LAST_PUZZLE_DAY + 1)
    for member, position in ranked:
        stars = "".join(star_glyph(member, day, last_unlocked_day) for day in days)
        lines.append(
            f"{position:>{rank_width}}) {member.local_score:>{score_width}} "
            f"{stars}  {member.display_name}"
        )
    return "\n".join(lines)
