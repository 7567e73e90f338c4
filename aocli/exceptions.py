class AocError(Exception):
    """base exception for this package"""


class InvalidPuzzleDate(AocError):
    """day and year do not make a puzzle date"""

    def __init__(self, day, year, msg=None):
        super().__init__(msg or f"Invalid puzzle date: day {day}, year {year}")
        self.day = day
        self.year = year


class InvalidPuzzleDay(InvalidPuzzleDate):
    """day is outside of 1-25"""

    def __init__(self, day, year=None):
        super().__init__(day, year, f"{day} is not a valid Advent of Code day")


class InvalidEventYear(AocError):
    """there is no event for this year (yet)"""

    def __init__(self, year):
        super().__init__(f"{year} is not a valid Advent of Code year")
        self.year = year


class LockedPuzzle(AocError):
    """trying to access a puzzle before the unlock"""

    def __init__(self, day, year):
        super().__init__(f"Puzzle {day} of {year} is still locked")
        self.day = day
        self.year = year


class SessionFileNotFound(AocError):
    """no session cookie in any of the default locations"""

    def __init__(self):
        super().__init__("Session cookie file not found in home or config directory")


class SessionFileReadError(AocError):
    """the session cookie file exists but could not be read"""

    def __init__(self, filename, source):
        super().__init__(f"Failed to read session cookie from '{filename}': {source}")
        self.filename = filename
        self.source = source


class InvalidSessionCookie(AocError):
    """the session cookie is malformed"""

    def __init__(self):
        super().__init__("Invalid session cookie")


class HttpRequestError(AocError):
    """unexpected status code or transport failure"""


class AocResponseError(AocError):
    """the server responded with something we don't understand"""

    def __init__(self, msg="Failed to parse Advent of Code response"):
        super().__init__(msg)


class PrivateLeaderboardNotAvailable(AocError):
    """redirected away from a private leaderboard"""

    def __init__(self):
        super().__init__(
            "The private leaderboard does not exist or you are not a member"
        )


class PrivateLeaderboardNoId(AocError):
    """no leaderboard id on the command line or in the config file"""

    def __init__(self):
        super().__init__(
            "No private leaderboard id. Provide an argument "
            '(e.g. "aoc private-leaderboard <LEADERBOARD-ID>") '
            "or add it to your config file."
        )


class FileWriteError(AocError):
    """could not save puzzle input, description or config"""

    def __init__(self, filename, source):
        super().__init__(f"Failed to write to file '{filename}': {source}")
        self.filename = filename
        self.source = source


class ConfigError(AocError):
    """the persisted config is missing or malformed"""

    def __init__(self, msg):
        super().__init__(f"Configuration file error: {msg}")
        self.msg = msg


class ClientFieldMissing(AocError):
    """a mandatory setting was still unset after merging"""

    def __init__(self, field):
        super().__init__(f"Failed to create client due to missing field: {field}")
        self.field = field


class InvalidPuzzlePart(AocError):
    """part must be 1 or 2"""

    def __init__(self):
        super().__init__("Invalid puzzle part number")


class InvalidOutputWidth(AocError):
    """width must be positive"""

    def __init__(self):
        super().__init__("Output width must be greater than zero")
