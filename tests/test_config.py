import pytest

from doorman.config import DEFAULTS, _coerce, find_config, load_config, tomllib
from doorman.errors import ConfigError


def test_defaults_without_file():
    cfg = load_config()
    assert cfg == DEFAULTS
    assert cfg is not DEFAULTS
    assert cfg["source"] is not DEFAULTS["source"]


def test_find_config_home(isolated_home):
    assert find_config() is None
    (isolated_home / ".doorman.toml").write_text("")
    assert find_config() == isolated_home / ".doorman.toml"


def test_find_config_env_override(tmp_path, monkeypatch):
    path = tmp_path / "custom.toml"
    monkeypatch.setenv("DOORMAN_CONFIG", str(path))
    assert find_config() == path


def test_toml_file_layer(isolated_home):
    (isolated_home / ".doorman.toml").write_text(
        '[source]\nurl = "https://keys.example.com/{identity}"\n'
        "timeout = 5\n"
        '[store]\nauthorized_keys = "~/alt/authorized_keys"\n'
        '[unknown]\nignored = true\n'
    )
    cfg = load_config()
    assert cfg["source"] == {"url": "https://keys.example.com/{identity}", "timeout": 5}
    assert cfg["store"]["authorized_keys"] == "~/alt/authorized_keys"
    assert "unknown" not in cfg


def test_env_beats_file(isolated_home, monkeypatch):
    (isolated_home / ".doorman.toml").write_text("[source]\ntimeout = 5\n")
    monkeypatch.setenv("DOORMAN_TIMEOUT", "12")
    monkeypatch.setenv("DOORMAN_AUTHORIZED_KEYS", "/tmp/ak")
    cfg = load_config()
    assert cfg["source"]["timeout"] == 12
    assert cfg["store"]["authorized_keys"] == "/tmp/ak"


def test_explicit_path_argument(tmp_path):
    path = tmp_path / "explicit.toml"
    path.write_text('[source]\nurl = "http://localhost/{identity}.keys"\n')
    assert load_config(path)["source"]["url"] == "http://localhost/{identity}.keys"


def test_coerce():
    assert _coerce("42", 30) == 42
    assert _coerce("soon", 30) == "soon"
    assert _coerce("/x", "") == "/x"


def test_malformed_toml_raises_config_error(isolated_home):
    (isolated_home / ".doorman.toml").write_text("[source\n")
    with pytest.raises(ConfigError, match="cannot load config") as excinfo:
        load_config()
    assert isinstance(excinfo.value.__cause__, tomllib.TOMLDecodeError)


def test_unreadable_config_raises_config_error(tmp_path, monkeypatch):
    path = tmp_path / "custom.toml"
    path.write_text("")
    monkeypatch.setenv("DOORMAN_CONFIG", str(path))

    def denied(p):
        raise PermissionError(13, "Permission denied", str(p))

    monkeypatch.setattr("doorman.config.load_toml", denied)
    with pytest.raises(ConfigError) as excinfo:
        load_config()
    assert isinstance(excinfo.value.__cause__, PermissionError)
