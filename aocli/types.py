from __future__ import annotations

from typing import Any
from typing import Literal
from typing import Optional
from typing import TypedDict
from typing import Union


PuzzleYear = int
PuzzleDay = int
LeaderboardId = int
MemberId = int

AnswerValue = Any
"""The answer to a puzzle, either a string or a number. Numbers are coerced to a string"""
PuzzlePart = Literal["1", "2"]
"""The part of a given puzzle, as sent in the ``level`` form field"""
LoosePart = Union[PuzzlePart, Literal[1, 2, "a", "b"]]


class StarPayload(TypedDict):
    """One collected star, as found in the private leaderboard JSON"""

    get_star_ts: int
    star_index: int


class MemberPayload(TypedDict):
    """A private leaderboard member, as served by adventofcode.com"""

    id: MemberId
    name: Optional[str]
    local_score: int
    stars: int
    completion_day_level: dict[str, dict[str, StarPayload]]


class LeaderboardPayload(TypedDict):
    """See https://adventofcode.com/<year>/leaderboard/private/view/<id>.json"""

    owner_id: MemberId
    event: str
    members: dict[str, MemberPayload]
