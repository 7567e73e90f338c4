import logging

import pytest

from aocli import exceptions as exc
from aocli.cli import exit_code_for
from aocli.cli import main
from aocli.config import Config
from aocli.config import load_config


@pytest.fixture
def client_cls(mocker, session_file):
    return mocker.patch("aocli.cli.AocClient")


def effective_config(client_cls):
    [call] = client_cls.call_args_list
    return call.kwargs["config"]


def test_version(capsys):
    with pytest.raises(SystemExit(0)):
        main(["--version"])
    out, err = capsys.readouterr()
    assert out == "aoc v0.1.0\n"


def test_read_is_the_default_command(client_cls):
    with pytest.raises(SystemExit(0)):
        main(["-y", "2018", "-d", "3"])
    config = effective_config(client_cls)
    assert (config.year, config.day) == (2018, 3)
    client_cls.assert_called_once_with(session_cookie="c0ffee1234", config=config)
    client_cls.return_value.show_puzzle.assert_called_once_with()


def test_options_after_subcommand(client_cls):
    with pytest.raises(SystemExit(0)):
        main(["download", "-y", "2018", "-d", "3", "-I"])
    config = effective_config(client_cls)
    assert (config.year, config.day) == (2018, 3)
    client_cls.return_value.download.assert_called_once_with(input_only=True, puzzle_only=False)


def test_options_either_side_of_subcommand(client_cls):
    with pytest.raises(SystemExit(0)):
        main(["-y", "2018", "-o", "d", "-d", "4", "--input-file", "data.txt"])
    config = effective_config(client_cls)
    assert (config.year, config.day) == (2018, 4)
    assert config.overwrite
    assert config.input_filename == "data.txt"
    assert config.puzzle_filename == "puzzle.md"


def test_input_only_and_puzzle_only_are_exclusive(capsys):
    with pytest.raises(SystemExit(2)):
        main(["download", "-I", "-P"])
    out, err = capsys.readouterr()
    assert "not allowed with argument" in err


def test_submit(client_cls):
    with pytest.raises(SystemExit(0)):
        main(["submit", "2", "1234", "-y", "2018", "-d", "1"])
    client_cls.return_value.submit_answer_and_show_outcome.assert_called_once_with("2", "1234")


def test_submit_bogus_part(client_cls, capsys):
    with pytest.raises(SystemExit(2)):
        main(["s", "3", "1234"])
    out, err = capsys.readouterr()
    assert "invalid choice: '3'" in err


def test_calendar(client_cls):
    with pytest.raises(SystemExit(0)):
        main(["c", "-y", "2018"])
    client_cls.return_value.show_calendar.assert_called_once_with()


@pytest.mark.parametrize(
    "argv, expected",
    [
        (["private-leaderboard", "-y", "2018", "123"], 123),
        (["p", "-y", "2018"], None),
    ],
)
def test_private_leaderboard(client_cls, argv, expected):
    with pytest.raises(SystemExit(0)):
        main(argv)
    client_cls.return_value.show_private_leaderboard.assert_called_once_with(expected)


def test_config_file_is_used(client_cls, home_dir):
    home_dir.joinpath(".adventofcode_config.toml").write_text(
        'year = 2019\nday = 5\nwidth = 100\ninput_filename = "in.txt"\nprivate_leaderboard_id = 42\n'
    )
    with pytest.raises(SystemExit(0)):
        main(["-d", "6"])
    config = effective_config(client_cls)
    assert (config.year, config.day) == (2019, 6)
    assert config.output_width == 100
    assert config.input_filename == "in.txt"
    assert config.leaderboard_id == 42


def test_malformed_config_file_is_fatal(client_cls, home_dir, caplog):
    home_dir.joinpath(".adventofcode_config.toml").write_text("year = = 2019")
    with pytest.raises(SystemExit(78)):
        main(["-y", "2018", "-d", "1"])
    assert "Configuration file error" in caplog.text
    client_cls.assert_not_called()


def test_invalid_day(client_cls, caplog):
    with pytest.raises(SystemExit(64)):
        main(["-y", "2018", "-d", "26"])
    assert "26 is not a valid Advent of Code day" in caplog.text


def test_invalid_width(client_cls):
    with pytest.raises(SystemExit(64)):
        main(["-y", "2018", "-d", "1", "-w", "0"])


def test_no_session_cookie(mocker, caplog):
    mocker.patch("aocli.cli.AocClient")
    with pytest.raises(SystemExit(66)):
        main(["-y", "2018", "-d", "1"])
    assert "Session cookie file not found" in caplog.text


def test_locked_puzzle_exit_code(client_cls):
    client_cls.return_value.show_puzzle.side_effect = exc.LockedPuzzle(day=25, year=2018)
    with pytest.raises(SystemExit(64)):
        main(["-y", "2018", "-d", "25"])


def test_http_error_hints_at_stale_cookie(client_cls, caplog):
    client_cls.return_value.show_calendar.side_effect = exc.HttpRequestError("HTTP 500 at https://adventofcode.com/2018")
    with pytest.raises(SystemExit(1)):
        main(["calendar", "-y", "2018"])
    assert caplog.record_tuples[-2:] == [
        ("aocli.cli", logging.ERROR, "HTTP 500 at https://adventofcode.com/2018"),
        ("aocli.cli", logging.ERROR, "your session cookie may have expired, try logging in again"),
    ]


def test_set_config(home_dir):
    path = home_dir / ".adventofcode_config.toml"
    path.write_text("year = 2018\nwidth = 90\n")
    with pytest.raises(SystemExit(0)):
        main(["set-config", "--day", "3", "--private-leaderboard-id", "99"])
    assert load_config().config == Config(year=2018, day=3, width=90, private_leaderboard_id=99)


@pytest.mark.parametrize(
    "argv",
    [
        ["set-config", "--width", "120", "-q"],
        ["-q", "set-config", "--width", "120"],
        ["se", "--debug", "--width", "120"],
    ],
)
def test_set_config_accepts_verbosity_either_side(home_dir, argv):
    path = home_dir / ".adventofcode_config.toml"
    path.write_text("year = 2018\n")
    with pytest.raises(SystemExit(0)):
        main(argv)
    assert load_config().config == Config(year=2018, width=120)


def test_set_config_without_config_file(caplog):
    with pytest.raises(SystemExit(78)):
        main(["se", "--year", "2020"])
    assert "aoc init" in caplog.text


def test_init(mocker, home_dir, capsys):
    path = home_dir / ".adventofcode_config.toml"
    init = mocker.patch("aocli.cli.init_config", return_value=(path, Config()))
    with pytest.raises(SystemExit(0)):
        main(["init", "-o"])
    init.assert_called_once_with(overwrite=True)
    out, err = capsys.readouterr()
    assert out == f"config saved to {path}\n"


@pytest.mark.parametrize(
    "err, code",
    [
        (exc.InvalidPuzzleDay(0), 64),
        (exc.InvalidPuzzleDate(31, 2018), 64),
        (exc.InvalidEventYear(2014), 64),
        (exc.InvalidPuzzlePart(), 64),
        (exc.PrivateLeaderboardNoId(), 64),
        (exc.SessionFileNotFound(), 66),
        (exc.SessionFileReadError("x", OSError()), 74),
        (exc.InvalidSessionCookie(), 65),
        (exc.FileWriteError("input", OSError()), 73),
        (exc.ConfigError("bad"), 78),
        (exc.HttpRequestError("boom"), 1),
        (exc.AocResponseError(), 1),
        (exc.PrivateLeaderboardNotAvailable(), 1),
        (exc.ClientFieldMissing("day"), 1),
    ],
)
def test_exit_codes(err, code):
    assert exit_code_for(err) == code
