import io

import pytest

from doorman.config import ENV_MAP, CONFIG_ENV


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Point HOME at a temp dir and clear every doorman env var."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv(CONFIG_ENV, raising=False)
    for env_var in ENV_MAP.values():
        monkeypatch.delenv(env_var, raising=False)
    return home


class ScriptedConfirm:
    """Confirmation stub answering from a fixed list and recording prompts."""

    def __init__(self, *answers):
        self.answers = list(answers)
        self.prompts = []

    def __call__(self, prompt):
        self.prompts.append(prompt)
        return self.answers.pop(0)


@pytest.fixture
def answers():
    return ScriptedConfirm


@pytest.fixture
def stdin_lines():
    def _make(*lines):
        return io.StringIO("".join(f"{line}\n" for line in lines))
    return _make
