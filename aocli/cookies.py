import logging
import os
import string
from pathlib import Path

from .exceptions import InvalidSessionCookie
from .exceptions import SessionFileNotFound
from .exceptions import SessionFileReadError


log = logging.getLogger(__name__)


SESSION_COOKIE_ENV_VAR = "ADVENT_OF_CODE_SESSION"
SESSION_COOKIE_FILE = "adventofcode.session"
HIDDEN_SESSION_COOKIE_FILE = ".adventofcode.session"
HOME_DIR = Path("~").expanduser()
CONFIG_DIR = Path(os.environ.get("XDG_CONFIG_HOME", Path("~", ".config"))).expanduser()


def sanitized(token):
    return "..." + token[-4:]


def validate_session_cookie(cookie):
    """The session cookie is a (long) hex string, possibly with a trailing newline."""
    cookie = cookie.strip()
    if not cookie or not all(c in string.hexdigits for c in cookie):
        raise InvalidSessionCookie()
    return cookie


def session_cookie_from_file(path):
    path = Path(path).expanduser()
    try:
        txt = path.read_text(encoding="utf-8")
    except OSError as err:
        raise SessionFileReadError(str(path), err) from err
    log.debug("loading session cookie from '%s'", path)
    return validate_session_cookie(txt)


def default_session_paths():
    return [
        HOME_DIR / HIDDEN_SESSION_COOKIE_FILE,
        CONFIG_DIR / SESSION_COOKIE_FILE,
    ]


def load_session_cookie(session_file=None):
    """
    Find the user's session cookie. In order of preference:
        1) an explicitly given file (command line or config file)
        2) the ADVENT_OF_CODE_SESSION environment variable
        3) ~/.adventofcode.session
        4) adventofcode.session in the user's config directory
    """
    if session_file is not None:
        return session_cookie_from_file(session_file)

    cookie = os.environ.get(SESSION_COOKIE_ENV_VAR)
    if cookie is not None:
        if cookie.strip():
            log.debug("loading session cookie from %r environment variable", SESSION_COOKIE_ENV_VAR)
            return validate_session_cookie(cookie)
        log.warning(
            "environment variable %r is set but it is empty, ignoring",
            SESSION_COOKIE_ENV_VAR,
        )

    for path in default_session_paths():
        if path.exists():
            return session_cookie_from_file(path)
        log.debug("no session cookie at %s", path)

    raise SessionFileNotFound()
