from __future__ import annotations

import errno
import logging
import os
import platform
import shutil
import textwrap
import typing as t
from functools import cache
from pathlib import Path
from tempfile import NamedTemporaryFile

import bs4
import urllib3
from markdownify import markdownify

from .exceptions import FileWriteError
from .exceptions import HttpRequestError
from .version import __version__


log: logging.Logger = logging.getLogger(__name__)
USER_AGENT = f"advent-of-code-cli v{__version__} (+https://pypi.org/project/advent-of-code-cli/)"
DEFAULT_COL_WIDTH = 80


class HttpClient:
    # every request to adventofcode.com goes through this wrapper
    # so that we can put in the user agent header and the session cookie.
    # redirects are never followed, a 302 from the server is meaningful
    # (usually: your cookie is dead, or you can't see that page).

    pool_manager: urllib3.PoolManager
    req_count: dict[t.Literal["GET", "POST"], int]

    def __init__(self) -> None:
        proxy_url = os.environ.get("http_proxy") or os.environ.get("https_proxy")
        if proxy_url:
            self.pool_manager = urllib3.ProxyManager(proxy_url, headers={"User-Agent": USER_AGENT})
        else:
            self.pool_manager = urllib3.PoolManager(headers={"User-Agent": USER_AGENT})
        self.req_count = {"GET": 0, "POST": 0}

    def _headers(self, token: str, content_type: str) -> dict[str, str]:
        return self.pool_manager.headers | {
            "Cookie": f"session={token.strip()}",
            "Content-Type": content_type,
        }

    def get(
        self, url: str, token: str, content_type: str = "text/html"
    ) -> urllib3.BaseHTTPResponse:
        # puzzle prose, inputs, calendar, leaderboard json
        headers = self._headers(token, content_type)
        try:
            resp = self.pool_manager.request("GET", url, headers=headers, redirect=False)
        except urllib3.exceptions.HTTPError as err:
            raise HttpRequestError(f"HTTP request error: {err}") from err
        self.req_count["GET"] += 1
        log.debug("GET %s -> %s", url, resp.status)
        return resp

    def post(
        self, url: str, token: str, fields: t.Mapping[str, str]
    ) -> urllib3.BaseHTTPResponse:
        # submitting answers
        headers = self._headers(token, "application/x-www-form-urlencoded")
        try:
            resp = self.pool_manager.request_encode_body(
                method="POST",
                url=url,
                fields=fields,
                headers=headers,
                encode_multipart=False,
                redirect=False,
            )
        except urllib3.exceptions.HTTPError as err:
            raise HttpRequestError(f"HTTP request error: {err}") from err
        self.req_count["POST"] += 1
        log.debug("POST %s -> %s", url, resp.status)
        return resp


http: HttpClient = HttpClient()


def _ensure_intermediate_dirs(path):
    path.expanduser().parent.mkdir(parents=True, exist_ok=True)


def atomic_write_file(path: Path | str, contents_str: str, overwrite: bool = True) -> None:
    """
    Atomically write a string to a file by writing it to a temporary file, and then
    renaming it to the final destination name. An existing file is only replaced
    when `overwrite` is True, otherwise FileWriteError is raised.
    """
    path = Path(path)
    if not overwrite and path.exists():
        err = FileExistsError(errno.EEXIST, os.strerror(errno.EEXIST))
        raise FileWriteError(path, err)
    try:
        _ensure_intermediate_dirs(path)
        with NamedTemporaryFile("w", dir=path.parent, encoding="utf-8", delete=False) as f:
            log.debug("writing to tempfile @ %s", f.name)
            f.write(contents_str)
        log.debug("moving %s -> %s", f.name, path)
        shutil.move(f.name, path)
    except OSError as err:
        raise FileWriteError(path, err) from err


def terminal_width() -> int:
    return shutil.get_terminal_size(fallback=(DEFAULT_COL_WIDTH, 24)).columns


_ANSIColor = t.Literal[
    "black", "red", "green", "yellow", "blue", "magenta", "cyan", "white", "gray"
]
_ansi_colors = t.get_args(_ANSIColor)
if platform.system() == "Windows":
    os.system("color")  # hack - makes ANSI colors work in the windows cmd window


def colored(txt: str, color: _ANSIColor | None) -> str:
    if color is None:
        return txt
    color = color.casefold()
    if color == "gray":
        code = 90  # "bright black"
    else:
        code = _ansi_colors.index(color) + 30
    reset = "\x1b[0m"
    return f"\x1b[{code}m{txt}{reset}"


def bold(txt: str) -> str:
    return f"\x1b[1m{txt}\x1b[0m"


@cache
def _get_soup(html):
    return bs4.BeautifulSoup(html, "html.parser")


_BLOCKS = ["h2", "p", "pre", "ul"]


def html2text(html: str, width: int) -> str:
    """Plain text rendering of a page fragment, paragraphs wrapped to `width`."""
    soup = _get_soup(html)
    chunks = []
    for el in soup.find_all(_BLOCKS):
        if el.find_parent(_BLOCKS) is not None:
            continue
        if el.name == "pre":
            chunks.append(el.get_text().rstrip("\n"))
        elif el.name == "ul":
            items = [
                textwrap.fill(" ".join(li.get_text().split()), width, initial_indent="  - ", subsequent_indent="    ")
                for li in el.find_all("li")
            ]
            chunks.append("\n".join(items))
        else:
            chunks.append(textwrap.fill(" ".join(el.get_text().split()), width))
    if not chunks:
        txt = " ".join(soup.get_text().split())
        return textwrap.fill(txt, width)
    return "\n\n".join(chunks)


def html2markdown(html: str) -> str:
    return markdownify(html, heading_style="ATX").strip() + "\n"
