import pytest

from constants import Constants


@pytest.fixture
def isolated_env(tmp_path, monkeypatch):
    """Run with an empty working directory, HOME and nestdeps environment."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.delenv(Constants.ENV_LOG_LEVEL, raising=False)
    monkeypatch.delenv(Constants.ENV_DECLARING_IDENTIFIER, raising=False)
    return tmp_path
