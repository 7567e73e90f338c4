from . import cli
from . import config
from . import cookies
from . import dates
from . import exceptions
from . import leaderboard
from . import models
from . import responses
from . import types
from . import utils
from .exceptions import AocError
from .models import AocClient
from .version import __version__

__all__ = [
    "AocClient",
    "AocError",
    "__version__",
    "cli",
    "config",
    "cookies",
    "dates",
    "exceptions",
    "leaderboard",
    "models",
    "responses",
    "types",
    "utils",
]
