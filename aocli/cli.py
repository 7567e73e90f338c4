import argparse
import logging
import sys

from . import exceptions as exc
from .config import CliArgs
from .config import DEFAULT_PUZZLE_DESCRIPTION
from .config import DEFAULT_PUZZLE_INPUT
from .config import init_config
from .config import load_config
from .config import merge
from .config import ParseError
from .config import set_config
from .cookies import load_session_cookie
from .models import AocClient
from .version import __version__


log = logging.getLogger(__name__)


# see sysexits.h
EX_OK = 0
EX_FAILURE = 1
EX_USAGE = 64
EX_DATAERR = 65
EX_NOINPUT = 66
EX_CANTCREAT = 73
EX_IOERR = 74
EX_CONFIG = 78

# most specific first
EXIT_CODES = [
    (exc.InvalidPuzzleDate, EX_USAGE),
    (exc.InvalidEventYear, EX_USAGE),
    (exc.LockedPuzzle, EX_USAGE),
    (exc.InvalidPuzzlePart, EX_USAGE),
    (exc.InvalidOutputWidth, EX_USAGE),
    (exc.PrivateLeaderboardNoId, EX_USAGE),
    (exc.SessionFileNotFound, EX_NOINPUT),
    (exc.SessionFileReadError, EX_IOERR),
    (exc.InvalidSessionCookie, EX_DATAERR),
    (exc.FileWriteError, EX_CANTCREAT),
    (exc.ConfigError, EX_CONFIG),
]

# failures where the real cause is often an expired session cookie
_STALE_COOKIE_HINT = (
    exc.HttpRequestError,
    exc.AocResponseError,
    exc.PrivateLeaderboardNotAvailable,
)


def exit_code_for(err):
    for cls, code in EXIT_CODES:
        if isinstance(err, cls):
            return code
    return EX_FAILURE


def _verbosity_options():
    parser = argparse.ArgumentParser(add_help=False, argument_default=argparse.SUPPRESS)
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "-q", "--quiet", action="store_true",
        help="restrict log messages to errors only",
    )
    verbosity.add_argument(
        "--debug", action="store_true",
        help="enable debug logging",
    )
    return parser


def _global_options(verbosity):
    # shared by the top-level parser and every subcommand, so that options may
    # be given on either side of the subcommand. nothing gets a default here -
    # an option which wasn't given is simply absent from the namespace.
    parser = argparse.ArgumentParser(
        add_help=False, argument_default=argparse.SUPPRESS, parents=[verbosity]
    )
    parser.add_argument(
        "-d", "--day", type=int,
        help="puzzle day (default: last unlocked day)",
    )
    parser.add_argument(
        "-y", "--year", type=int,
        help="puzzle year (default: year of current or last event)",
    )
    parser.add_argument(
        "-s", "--session-file", "--session", dest="session_file", metavar="PATH",
        help="path to session cookie file (default: ~/.adventofcode.session)",
    )
    parser.add_argument(
        "-w", "--width", type=int,
        help="width at which to wrap output (default: terminal width)",
    )
    parser.add_argument(
        "-o", "--overwrite", action="store_true",
        help="overwrite files if they already exist",
    )
    only = parser.add_mutually_exclusive_group()
    only.add_argument(
        "-I", "--input-only", action="store_true",
        help="download puzzle input only",
    )
    only.add_argument(
        "-P", "--puzzle-only", "--description-only", dest="puzzle_only", action="store_true",
        help="download puzzle description only",
    )
    parser.add_argument(
        "-i", "--input-file", "--input", dest="input_file", metavar="PATH",
        help=f"path where to save puzzle input (default: {DEFAULT_PUZZLE_INPUT})",
    )
    parser.add_argument(
        "-p", "--puzzle-file", "--puzzle", dest="puzzle_file", metavar="PATH",
        help=f"path where to save puzzle description (default: {DEFAULT_PUZZLE_DESCRIPTION})",
    )
    parser.add_argument(
        "-m", "--show-html-markup", action="store_true",
        help="show HTML markup including links",
    )
    return parser


def get_parser():
    verbosity = _verbosity_options()
    common = _global_options(verbosity)
    parser = argparse.ArgumentParser(
        prog="aoc",
        description="Advent of Code command-line client",
        parents=[common],
    )
    parser.add_argument(
        "-v", "--version",
        action="version",
        version=f"%(prog)s v{__version__}",
    )
    sub = parser.add_subparsers(dest="command", metavar="<command>")
    sub.add_parser(
        "calendar", aliases=["c"], parents=[common],
        help="show Advent of Code calendar and stars collected",
    )
    sub.add_parser(
        "download", aliases=["d"], parents=[common],
        help="save puzzle description and input to files",
    )
    sub.add_parser(
        "read", aliases=["r"], parents=[common],
        help="read puzzle statement (the default command)",
    )
    sub.add_parser(
        "init", aliases=["i"], parents=[common],
        help="create a config file",
    )
    submit = sub.add_parser(
        "submit", aliases=["s"], parents=[common],
        help="submit puzzle answer",
    )
    submit.add_argument("part", choices=["1", "2"], help="puzzle part")
    submit.add_argument("answer", help="puzzle answer")
    leaderboard = sub.add_parser(
        "private-leaderboard", aliases=["p"], parents=[common],
        help="show the state of a private leaderboard",
    )
    leaderboard.add_argument(
        "leaderboard_id", nargs="?", type=int, default=None,
        help="private leaderboard id (default: from config file)",
    )
    set_conf = sub.add_parser(
        "set-config", aliases=["se"], parents=[verbosity],
        help="set a value in the config",
    )
    set_conf.add_argument("--year", dest="new_year", type=int, help="set the config puzzle year")
    set_conf.add_argument("--day", dest="new_day", type=int, help="set the config puzzle day")
    set_conf.add_argument("--session-file", dest="new_session_file", help="set the config session filename")
    set_conf.add_argument("--width", dest="new_width", type=int, help="set the width")
    set_conf.add_argument("--input-filename", dest="new_input_filename", help="set the config input filename")
    set_conf.add_argument(
        "--description-filename", dest="new_description_filename",
        help="set the config description filename",
    )
    set_conf.add_argument(
        "--private-leaderboard-id", dest="new_private_leaderboard_id", type=int,
        help="set the config private leaderboard id",
    )
    return parser


_ALIASES = {
    "c": "calendar",
    "d": "download",
    "r": "read",
    "i": "init",
    "s": "submit",
    "p": "private-leaderboard",
    "se": "set-config",
}


def setup_logging(args):
    if getattr(args, "debug", False):
        level = logging.DEBUG
    elif getattr(args, "quiet", False):
        level = logging.ERROR
    else:
        level = logging.INFO
    logging.basicConfig(level=level, format="%(message)s")


def cli_args(args):
    return CliArgs(
        year=getattr(args, "year", None),
        day=getattr(args, "day", None),
        session_file=getattr(args, "session_file", None),
        width=getattr(args, "width", None),
        input_filename=getattr(args, "input_file", None),
        puzzle_filename=getattr(args, "puzzle_file", None),
        overwrite=getattr(args, "overwrite", False),
        show_html_markup=getattr(args, "show_html_markup", False),
    )


def run(args):
    command = _ALIASES.get(args.command, args.command) or "read"
    log.debug("called with %r", args)

    if command == "init":
        path, config = init_config(overwrite=getattr(args, "overwrite", False))
        print(f"config saved to {path}")
        return
    if command == "set-config":
        set_config(
            year=args.new_year,
            day=args.new_day,
            session_file=args.new_session_file,
            width=args.new_width,
            input_filename=args.new_input_filename,
            description_filename=args.new_description_filename,
            private_leaderboard_id=args.new_private_leaderboard_id,
        )
        return

    outcome = load_config()
    if isinstance(outcome, ParseError):
        raise exc.ConfigError(f"{outcome.path}: {outcome.details}")
    file_config = getattr(outcome, "config", None)
    effective = merge(cli=cli_args(args), file_config=file_config)
    session = load_session_cookie(effective.session_file)
    client = AocClient(session_cookie=session, config=effective)

    if command == "calendar":
        client.show_calendar()
    elif command == "download":
        client.download(
            input_only=getattr(args, "input_only", False),
            puzzle_only=getattr(args, "puzzle_only", False),
        )
    elif command == "submit":
        client.submit_answer_and_show_outcome(args.part, args.answer)
    elif command == "private-leaderboard":
        client.show_private_leaderboard(args.leaderboard_id)
    else:
        client.show_puzzle()


def main(argv=None):
    """Fetch puzzles and inputs, submit answers and watch leaderboards from your terminal."""
    parser = get_parser()
    args = parser.parse_args(argv)
    setup_logging(args)
    log.info("advent-of-code-cli v%s", __version__)
    try:
        run(args)
    except exc.AocError as err:
        log.error("%s", err)
        if isinstance(err, _STALE_COOKIE_HINT):
            log.error("your session cookie may have expired, try logging in again")
        sys.exit(exit_code_for(err))
    sys.exit(EX_OK)
