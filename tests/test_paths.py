"""Tests for the config and state file locations."""

from pipe2mattermost.paths import (
    config_dir,
    default_config_path,
    default_log_path,
    state_dir,
)


def test_config_path_under_home(monkeypatch, tmp_path):
    monkeypatch.setenv("HOME", str(tmp_path))
    assert config_dir() == tmp_path / ".config" / "pipe2mattermost"
    assert default_config_path() == tmp_path / ".config" / "pipe2mattermost" / "config.toml"
    # reading the config location never creates anything
    assert not config_dir().exists()


def test_log_path_creates_state_dir(monkeypatch, tmp_path):
    monkeypatch.setenv("HOME", str(tmp_path))
    path = default_log_path()

    assert path == state_dir() / "pipe2mattermost.log"
    assert state_dir() == tmp_path / ".local" / "state" / "pipe2mattermost"
    assert state_dir().is_dir()
