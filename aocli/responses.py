"""
Making sense of the pages served by adventofcode.com.

These are plain text transforms - substring checks and regexes over the raw
HTML - so that each of them can be tested without a network or a parser.
"""
from __future__ import annotations

import enum
import logging
import re
from dataclasses import dataclass

from .exceptions import AocResponseError


log = logging.getLogger(__name__)


class SubmissionOutcome(enum.Enum):
    CORRECT = "correct"
    INCORRECT = "incorrect"
    TOO_SOON = "too soon"
    WRONG_PART = "wrong part"


# checked in this order, first hit wins
SUBMISSION_PHRASES = [
    ("That's the right answer", SubmissionOutcome.CORRECT),
    ("not the right answer", SubmissionOutcome.INCORRECT),
    ("You gave an answer too recently", SubmissionOutcome.TOO_SOON),
    ("You don't seem to be solving the right level", SubmissionOutcome.WRONG_PART),
]

_main_re = re.compile(r"<main>(?P<main>.*)</main>", re.IGNORECASE | re.DOTALL)
_login_re = re.compile(r'href="/[0-9]{4}/auth/login"')
_wait_re = re.compile(r"You have (?:(\d+)m )?(\d+)s left to wait")

_calendar_noise_re = re.compile(
    "|".join(
        [
            # 2015 "calendar-bkg"
            r'(<div class="calendar-bkg">\s*(<div>[^<]*</div>\s*)*</div>)',
            # 2017 "naughty/nice" animation
            r'(<div class="calendar-printer">(?s:.)*\|O\|</span></div>\s*)',
            # 2018 "space mug"
            r'(<pre id="spacemug"[^>]*>[^<]*</pre>)',
            # 2019 shadows
            r'(<span style="color[^>]*position:absolute[^>]*>\.</span>)',
            # 2019 "sunbeam"
            r'(<span class="sunbeam"[^>]*><span style="animation-delay[^>]*>\*</span></span>)',
        ]
    )
)
_class_re = re.compile(r'<a [^>]*class="(?P<class>[^"]*)"')
_stars_re = re.compile(
    r'<span class="calendar-mark-complete">\*</span>'
    r'<span class="calendar-mark-verycomplete">\*</span>'
)


@dataclass(frozen=True)
class PuzzleBody:
    html: str


@dataclass(frozen=True)
class CalendarView:
    html: str


def extract_main(html: str) -> str:
    """The contents of the page's <main> element."""
    match = _main_re.search(html)
    if match is None:
        raise AocResponseError()
    return match.group("main")


def classify_submission(body: str) -> SubmissionOutcome:
    for phrase, outcome in SUBMISSION_PHRASES:
        if phrase in body:
            log.debug("submission outcome %s (matched %r)", outcome.value, phrase)
            return outcome
    log.warning("unrecognised submit message %r", body)
    raise AocResponseError()


def wait_seconds(body: str) -> int | None:
    """How long the server wants you to wait before the next submission, if it says."""
    try:
        [(minutes, seconds)] = _wait_re.findall(body)
    except ValueError:
        return None
    wait_time = int(seconds)
    if minutes:
        wait_time += 60 * int(minutes)
    return wait_time


def looks_logged_out(html: str) -> bool:
    return _login_re.search(html) is not None


def clean_calendar(main_html: str) -> str:
    """
    Drop the decorations which won't render in a terminal, and replace the
    star markup on each line with the stars actually collected for that day.
    """
    cleaned_up = _calendar_noise_re.sub("", main_html)
    lines = []
    for line in cleaned_up.splitlines():
        match = _class_re.search(line)
        css_class = match.group("class") if match else ""
        if "calendar-verycomplete" in css_class:
            stars = "**"
        elif "calendar-complete" in css_class:
            stars = "*"
        else:
            stars = ""
        lines.append(_stars_re.sub(stars, line, count=1))
    return "\n".join(lines)


def extract_calendar(html: str) -> CalendarView:
    if looks_logged_out(html):
        log.warning("it looks like you are not logged in, try logging in again")
    return CalendarView(html=clean_calendar(extract_main(html)))


def extract_puzzle(html: str) -> PuzzleBody:
    return PuzzleBody(html=extract_main(html))


def classify(body: str) -> SubmissionOutcome | CalendarView | PuzzleBody:
    """
    Work out what kind of page this is: the response to an answer submission,
    an event calendar, or a puzzle description.
    """
    for phrase, outcome in SUBMISSION_PHRASES:
        if phrase in body:
            return outcome
    main = extract_main(body)
    if 'class="calendar' in main:
        return extract_calendar(body)
    if "<article" in main:
        return PuzzleBody(html=main)
    raise AocResponseError()
