from __future__ import annotations

import json
import logging
from datetime import datetime

from .config import EffectiveConfig
from .cookies import sanitized
from .dates import latest_unlocked_day
from .exceptions import AocResponseError
from .exceptions import ClientFieldMissing
from .exceptions import HttpRequestError
from .exceptions import InvalidEventYear
from .exceptions import InvalidPuzzlePart
from .exceptions import LockedPuzzle
from .exceptions import PrivateLeaderboardNoId
from .exceptions import PrivateLeaderboardNotAvailable
from .leaderboard import Leaderboard
from .leaderboard import render
from .responses import classify_submission
from .responses import extract_calendar
from .responses import extract_main
from .responses import extract_puzzle
from .responses import SubmissionOutcome
from .responses import wait_seconds
from .types import AnswerValue
from .types import LoosePart
from .types import PuzzlePart
from .utils import atomic_write_file
from .utils import bold
from .utils import colored
from .utils import html2markdown
from .utils import html2text
from .utils import http


log = logging.getLogger(__name__)


BASE_URL = "https://adventofcode.com"


def coerce_part(part: LoosePart) -> PuzzlePart:
    """Accepts 1, 2, "1", "2", "a" or "b" and returns the ``level`` form value."""
    level = {1: "1", 2: "2", "1": "1", "2": "2", "a": "1", "b": "2"}.get(part)
    if level is None:
        raise InvalidPuzzlePart()
    return level


def _check_status(response, url):
    if response.status >= 400:
        log.error("got %s status code", response.status)
        log.debug(response.data.decode(errors="replace"))
        raise HttpRequestError(f"HTTP {response.status} at {url}")


class AocClient:
    def __init__(self, session_cookie, config: EffectiveConfig):
        for missing, name in [
            (session_cookie is None, "session cookie"),
            (config.year is None, "year"),
            (config.day is None, "day"),
        ]:
            if missing:
                raise ClientFieldMissing(name)
        self.session_cookie = session_cookie
        self.config = config
        self.puzzle_date = config.puzzle_date

    def __repr__(self):
        token = sanitized(self.session_cookie)
        return f"<{type(self).__name__} {self.puzzle_date} (token={token})>"

    @property
    def year(self):
        return self.puzzle_date.year

    @property
    def day(self):
        return self.puzzle_date.day

    @property
    def url(self):
        return self.puzzle_date.url

    def day_unlocked(self, now: datetime | None = None) -> bool:
        return self.puzzle_date.is_unlocked(now)

    def _get(self, url, content_type="text/html"):
        response = http.get(url, token=self.session_cookie, content_type=content_type)
        _check_status(response, url)
        return response.data.decode()

    def get_puzzle_html(self) -> str:
        self.puzzle_date.ensure_unlocked()
        log.debug("fetching puzzle for day %s, %s", self.day, self.year)
        return extract_puzzle(self._get(self.url)).html

    def get_input(self) -> str:
        self.puzzle_date.ensure_unlocked()
        log.debug("fetching input for day %s, %s", self.day, self.year)
        url = self.url + "/input"
        response = http.get(url, token=self.session_cookie, content_type="text/plain")
        if response.status == 404:
            raise LockedPuzzle(self.day, self.year)
        _check_status(response, url)
        return response.data.decode()

    def submit_answer_html(self, part: LoosePart, answer: AnswerValue) -> str:
        self.puzzle_date.ensure_unlocked()
        level = coerce_part(part)
        url = self.url + "/answer"
        log.debug("submitting answer for part %s, day %s, %s", level, self.day, self.year)
        log.info("posting %r to %s (part %s) token=%s", str(answer), url, level, sanitized(self.session_cookie))
        response = http.post(url, token=self.session_cookie, fields={"level": level, "answer": str(answer)})
        _check_status(response, url)
        return extract_main(response.data.decode())

    def submit_answer(self, part: LoosePart, answer: AnswerValue) -> SubmissionOutcome:
        outcome_html = self.submit_answer_html(part, answer)
        outcome = classify_submission(outcome_html)
        if outcome is SubmissionOutcome.TOO_SOON:
            wait = wait_seconds(outcome_html)
            if wait is not None:
                log.info("you can submit again in %d seconds", wait)
        return outcome

    def submit_answer_and_show_outcome(self, part: LoosePart, answer: AnswerValue) -> SubmissionOutcome | None:
        outcome_html = self.submit_answer_html(part, answer)
        color = {
            SubmissionOutcome.CORRECT: "green",
            SubmissionOutcome.INCORRECT: "red",
            SubmissionOutcome.TOO_SOON: "red",
            SubmissionOutcome.WRONG_PART: "yellow",
        }
        try:
            outcome = classify_submission(outcome_html)
        except AocResponseError:
            outcome = None
        message = html2text(outcome_html, self.config.output_width)
        print()
        print(colored(message, color.get(outcome)))
        return outcome

    def show_puzzle(self) -> None:
        puzzle_html = self.get_puzzle_html()
        if self.config.show_html_markup:
            print(puzzle_html)
        else:
            print()
            print(html2text(puzzle_html, self.config.output_width))

    def save_puzzle_markdown(self) -> None:
        puzzle_html = self.get_puzzle_html()
        path = self.config.puzzle_filename
        atomic_write_file(path, html2markdown(puzzle_html), overwrite=self.config.overwrite)
        log.info("saved puzzle to '%s'", path)

    def save_input(self) -> None:
        data = self.get_input()
        path = self.config.input_filename
        atomic_write_file(path, data, overwrite=self.config.overwrite)
        log.info("saved input to '%s'", path)

    def download(self, input_only=False, puzzle_only=False) -> None:
        # two independent steps, the first isn't undone if the second fails
        if not input_only:
            self.save_puzzle_markdown()
        if not puzzle_only:
            self.save_input()

    def get_calendar_html(self) -> str:
        log.debug("fetching %s calendar", self.year)
        url = f"{BASE_URL}/{self.year}"
        response = http.get(url, token=self.session_cookie)
        if response.status == 404:
            # the calendar for this year is not available yet
            raise InvalidEventYear(self.year)
        _check_status(response, url)
        return extract_calendar(response.data.decode()).html

    def show_calendar(self) -> None:
        calendar_html = self.get_calendar_html()
        if self.config.show_html_markup:
            print(calendar_html)
        else:
            print()
            print(html2text(calendar_html, self.config.output_width))

    def get_private_leaderboard(self, leaderboard_id) -> Leaderboard:
        log.debug("fetching private leaderboard %s", leaderboard_id)
        url = f"{BASE_URL}/{self.year}/leaderboard/private/view/{leaderboard_id}.json"
        response = http.get(url, token=self.session_cookie, content_type="application/json")
        if 300 <= response.status < 400:
            # a redirect means the leaderboard doesn't exist or we can't access it
            raise PrivateLeaderboardNotAvailable()
        _check_status(response, url)
        try:
            data = json.loads(response.data.decode())
        except ValueError as err:
            raise AocResponseError() from err
        return Leaderboard.from_json(data)

    def show_private_leaderboard(self, leaderboard_id=None) -> None:
        last_unlocked_day = latest_unlocked_day(self.year)
        if last_unlocked_day is None:
            raise InvalidEventYear(self.year)
        if leaderboard_id is None:
            leaderboard_id = self.config.leaderboard_id
        if leaderboard_id is None:
            raise PrivateLeaderboardNoId()
        leaderboard = self.get_private_leaderboard(leaderboard_id)
        owner = leaderboard.owner
        print(
            f"Private leaderboard of {bold(owner.display_name)} "
            f"for Advent of Code {bold(str(self.year))}.\n\n"
            f"{colored('Gold *', 'yellow')} indicates the user got both stars for that day,\n"
            f"{colored('silver *', 'white')} means just the first star, "
            f"and a {colored('gray dot (.)', 'gray')} means none.\n"
        )
        print(render(leaderboard.members, last_unlocked_day))
