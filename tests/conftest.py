import pook as pook_mod
import pytest


@pytest.fixture
def home_dir(tmp_path):
    path = tmp_path / "home"
    path.mkdir()
    return path


@pytest.fixture
def config_dir(tmp_path):
    path = tmp_path / "home" / ".config"
    path.mkdir(parents=True)
    return path


@pytest.fixture(autouse=True)
def remove_user_env(home_dir, config_dir, monkeypatch):
    monkeypatch.setattr("aocli.config.HOME_DIR", home_dir)
    monkeypatch.setattr("aocli.config.CONFIG_DIR", config_dir)
    monkeypatch.setattr("aocli.cookies.HOME_DIR", home_dir)
    monkeypatch.setattr("aocli.cookies.CONFIG_DIR", config_dir)
    monkeypatch.delenv("ADVENT_OF_CODE_SESSION", raising=False)


@pytest.fixture
def session_file(home_dir):
    path = home_dir / ".adventofcode.session"
    path.write_text("c0ffee1234\n")
    return path


@pytest.fixture(autouse=True)
def workdir(tmp_path, monkeypatch):
    # downloads land in the current directory
    path = tmp_path / "work"
    path.mkdir()
    monkeypatch.chdir(path)
    return path


@pytest.fixture
def pook():
    pook_mod.on()
    yield pook_mod
    pook_mod.off()
    pook_mod.reset()
