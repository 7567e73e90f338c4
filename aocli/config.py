"""
Settings come from three layers: the command line, the persisted config file
and built-in defaults. Each field is resolved on its own, command line first,
except for (year, day) which are resolved together since the default day
depends on which year was chosen.
"""
from __future__ import annotations

import logging
import os
import typing as t
from dataclasses import asdict
from dataclasses import dataclass
from dataclasses import field
from dataclasses import fields
from datetime import datetime
from pathlib import Path

import tomli_w

from ._compat import tomllib
from .cookies import HIDDEN_SESSION_COOKIE_FILE
from .dates import FIRST_EVENT_YEAR
from .dates import FIRST_PUZZLE_DAY
from .dates import LAST_PUZZLE_DAY
from .dates import latest_unlocked_year
from .dates import PuzzleDate
from .dates import resolve_day
from .dates import resolve_year
from .exceptions import ConfigError
from .exceptions import InvalidOutputWidth
from .types import LeaderboardId
from .types import PuzzleDay
from .types import PuzzleYear
from .utils import atomic_write_file
from .utils import colored
from .utils import DEFAULT_COL_WIDTH
from .utils import terminal_width


log = logging.getLogger(__name__)


CONFIG_FILE = ".adventofcode_config.toml"
DEFAULT_PUZZLE_INPUT = "input"
DEFAULT_PUZZLE_DESCRIPTION = "puzzle.md"
HOME_DIR = Path("~").expanduser()
CONFIG_DIR = Path(os.environ.get("XDG_CONFIG_HOME", Path("~", ".config"))).expanduser()


def _check_int(name, val, lo=None, hi=None):
    if isinstance(val, bool) or not isinstance(val, int):
        raise ConfigError(f"{name} must be an integer, got {val!r}")
    if lo is not None and val < lo or hi is not None and val > hi:
        bounds = f"{lo}-{hi}" if hi is not None else f">= {lo}"
        raise ConfigError(f"{name} must lie in the range {bounds}, got {val}")


def _check_str(name, val):
    if not isinstance(val, str) or not val:
        raise ConfigError(f"{name} must be a non-empty string, got {val!r}")


@dataclass
class Config:
    """The persisted layer. Every field is optional, None means unset."""

    year: PuzzleYear | None = None
    day: PuzzleDay | None = None
    session_file: str | None = None
    width: int | None = None
    input_filename: str | None = None
    description_filename: str | None = None
    private_leaderboard_id: LeaderboardId | None = None

    def __post_init__(self) -> None:
        if self.year is not None:
            _check_int("year", self.year, lo=FIRST_EVENT_YEAR)
        if self.day is not None:
            _check_int("day", self.day, lo=FIRST_PUZZLE_DAY, hi=LAST_PUZZLE_DAY)
        if self.width is not None:
            _check_int("width", self.width, lo=1)
        if self.private_leaderboard_id is not None:
            _check_int("private_leaderboard_id", self.private_leaderboard_id, lo=0)
        for name in "session_file", "input_filename", "description_filename":
            val = getattr(self, name)
            if val is not None:
                _check_str(name, val)

    @classmethod
    def from_dict(cls, data: t.Mapping[str, t.Any]) -> Config:
        known = {f.name for f in fields(cls)}
        for key in data.keys() - known:
            log.warning("ignoring unknown config key %r", key)
        return cls(**{k: v for k, v in data.items() if k in known})

    def to_dict(self) -> dict[str, t.Any]:
        return {k: v for k, v in asdict(self).items() if v is not None}

    @classmethod
    def loads(cls, txt: str) -> Config:
        try:
            data = tomllib.loads(txt)
        except tomllib.TOMLDecodeError as err:
            raise ConfigError(f"Failed to deserialize config file -- Error: {err}") from err
        return cls.from_dict(data)

    def dumps(self) -> str:
        return tomli_w.dumps(self.to_dict())

    @classmethod
    def from_effective(cls, effective: EffectiveConfig) -> Config:
        return cls(
            year=effective.year,
            day=effective.day,
            session_file=effective.session_file,
            width=effective.output_width,
            input_filename=effective.input_filename,
            description_filename=effective.puzzle_filename,
            private_leaderboard_id=effective.leaderboard_id,
        )


@dataclass(frozen=True)
class Loaded:
    path: Path
    config: Config


@dataclass(frozen=True)
class NotFound:
    pass


@dataclass(frozen=True)
class ParseError:
    path: Path
    details: str


ConfigLoadOutcome = t.Union[Loaded, NotFound, ParseError]


def config_paths() -> list[Path]:
    return [HOME_DIR / CONFIG_FILE, CONFIG_DIR / CONFIG_FILE]


def load_config(paths: t.Iterable[Path] | None = None) -> ConfigLoadOutcome:
    """
    Look for a config file in the home directory, then in the config directory.
    The first one found decides the outcome - a malformed file is reported as a
    ParseError rather than skipped, and it's up to the caller whether that's fatal.
    """
    if paths is None:
        paths = config_paths()
    for path in paths:
        try:
            txt = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            log.debug("no config file at %s", path)
            continue
        except OSError as err:
            log.warning("failed to read config file %s: %s", path, err)
            return ParseError(path=path, details=str(err))
        try:
            config = Config.loads(txt)
        except ConfigError as err:
            log.warning("failed to parse config file %s: %s", path, err.msg)
            return ParseError(path=path, details=err.msg)
        log.debug("config file loaded: %s", path)
        return Loaded(path=path, config=config)
    return NotFound()


def write_config(config: Config, path: Path | str, overwrite: bool = False) -> None:
    atomic_write_file(path, config.dumps(), overwrite=overwrite)
    log.info("saved config to '%s'", path)


def set_config(
    year: PuzzleYear | None = None,
    day: PuzzleDay | None = None,
    session_file: str | None = None,
    width: int | None = None,
    input_filename: str | None = None,
    description_filename: str | None = None,
    private_leaderboard_id: LeaderboardId | None = None,
) -> Config:
    """Update the given values in the existing config file, leaving the rest alone."""
    outcome = load_config()
    if isinstance(outcome, NotFound):
        raise ConfigError(
            "Failed to find/ read in existing config file. "
            "Instantiate a fresh config file using `aoc init`"
        )
    if isinstance(outcome, ParseError):
        raise ConfigError(f"{outcome.path}: {outcome.details}")
    changes = {
        "year": year,
        "day": day,
        "session_file": session_file,
        "width": width,
        "input_filename": input_filename,
        "description_filename": description_filename,
        "private_leaderboard_id": private_leaderboard_id,
    }
    log.debug("old config: %r", outcome.config)
    data = outcome.config.to_dict()
    data.update({k: v for k, v in changes.items() if v is not None})
    config = Config.from_dict(data)
    log.debug("updated config: %r", config)
    write_config(config, outcome.path, overwrite=True)
    return config


def _ask(prompt, question, default=None, convert=str, validate=None):
    # re-asks until the answer converts and validates. empty answer -> default
    suffix = f" [{default}]" if default is not None else ""
    while True:
        raw = prompt(f"{question}{suffix}: ").strip()
        if not raw:
            return default
        try:
            val = convert(raw)
        except ValueError:
            print(colored(f"invalid value {raw!r}", "red"))
            continue
        err = validate(val) if validate is not None else None
        if err:
            print(colored(err, "red"))
            continue
        return val


def init_config(prompt=input, overwrite: bool = False) -> tuple[Path, Config]:
    """Interactively create a config file in the home or config directory."""
    locations = config_paths()
    for i, path in enumerate(locations, start=1):
        print(f"  {i}) {path}")

    def valid_location(n):
        if not 1 <= n <= len(locations):
            return f"choose a number between 1 and {len(locations)}"

    n = _ask(prompt, "Config file location", default=1, convert=int, validate=valid_location)
    path = locations[n - 1]

    latest_year = latest_unlocked_year()

    def valid_year(year):
        if not FIRST_EVENT_YEAR <= year <= latest_year:
            return f"Year must lie in the range {FIRST_EVENT_YEAR}-{latest_year}"

    def valid_day(day):
        if not FIRST_PUZZLE_DAY <= day <= LAST_PUZZLE_DAY:
            return f"Day must lie in the range {FIRST_PUZZLE_DAY}-{LAST_PUZZLE_DAY}"

    def valid_width(width):
        if width <= 0:
            return "Column width must be greater than 0"

    config = Config(
        year=_ask(prompt, "Puzzle year (empty for default)", convert=int, validate=valid_year),
        day=_ask(prompt, "Puzzle day (empty for default)", convert=int, validate=valid_day),
        session_file=_ask(prompt, "Session file", default=str(HOME_DIR / HIDDEN_SESSION_COOKIE_FILE)),
        width=_ask(prompt, "Column width", default=DEFAULT_COL_WIDTH, convert=int, validate=valid_width),
        input_filename=_ask(prompt, "Puzzle input filename", default=DEFAULT_PUZZLE_INPUT),
        description_filename=_ask(prompt, "Puzzle description filename", default=DEFAULT_PUZZLE_DESCRIPTION),
        private_leaderboard_id=_ask(prompt, "Private leaderboard ID", convert=int),
    )
    write_config(config, path, overwrite=overwrite)
    return path, config


@dataclass
class CliArgs:
    """What the user typed. None means the option wasn't given."""

    year: PuzzleYear | None = None
    day: PuzzleDay | None = None
    session_file: str | None = None
    width: int | None = None
    input_filename: str | None = None
    puzzle_filename: str | None = None
    leaderboard_id: LeaderboardId | None = None
    overwrite: bool = False
    show_html_markup: bool = False


@dataclass
class Defaults:
    width: int = field(default_factory=terminal_width)
    input_filename: str = DEFAULT_PUZZLE_INPUT
    puzzle_filename: str = DEFAULT_PUZZLE_DESCRIPTION


@dataclass(frozen=True)
class EffectiveConfig:
    year: PuzzleYear
    day: PuzzleDay
    session_file: str | None
    output_width: int
    input_filename: str
    puzzle_filename: str
    leaderboard_id: LeaderboardId | None = None
    overwrite: bool = False
    show_html_markup: bool = False

    @property
    def puzzle_date(self) -> PuzzleDate:
        return PuzzleDate(year=self.year, day=self.day)


def _first(*vals):
    return next((v for v in vals if v is not None), None)


def _pick_filename(cli_value, file_value, default):
    # a command line value equal to the default is indistinguishable from
    # the option not being given at all, so the config file wins then
    if cli_value is not None and cli_value != default:
        return cli_value
    if file_value is not None:
        return file_value
    return default


def resolve_puzzle_date(
    cli_year: PuzzleYear | None,
    cli_day: PuzzleDay | None,
    file_year: PuzzleYear | None = None,
    file_day: PuzzleDay | None = None,
    now: datetime | None = None,
) -> PuzzleDate:
    """
    The year is resolved first (command line, config file, latest event) and
    the day is then resolved against it (command line, config file, latest
    unlocked day of that year).
    """
    year = resolve_year(_first(cli_year, file_year), now=now)
    day = resolve_day(year, _first(cli_day, file_day), now=now)
    return PuzzleDate(year=year, day=day)


def merge(
    cli: CliArgs | None = None,
    file_config: Config | None = None,
    defaults: Defaults | None = None,
    now: datetime | None = None,
) -> EffectiveConfig:
    if cli is None:
        cli = CliArgs()
    if file_config is None:
        file_config = Config()
    if defaults is None:
        defaults = Defaults()
    date = resolve_puzzle_date(cli.year, cli.day, file_config.year, file_config.day, now=now)
    width = _first(cli.width, file_config.width, defaults.width)
    if width <= 0:
        raise InvalidOutputWidth()
    effective = EffectiveConfig(
        year=date.year,
        day=date.day,
        session_file=_first(cli.session_file, file_config.session_file),
        output_width=width,
        input_filename=_pick_filename(
            cli.input_filename, file_config.input_filename, defaults.input_filename
        ),
        puzzle_filename=_pick_filename(
            cli.puzzle_filename, file_config.description_filename, defaults.puzzle_filename
        ),
        leaderboard_id=_first(cli.leaderboard_id, file_config.private_leaderboard_id),
        overwrite=cli.overwrite,
        show_html_markup=cli.show_html_markup,
    )
    log.debug("effective config: %r", effective)
    return effective
