"""Where pipe2mattermost keeps its files.

Both follow the XDG layout under the home directory:
- config: ~/.config/pipe2mattermost/config.toml
- log:    ~/.local/state/pipe2mattermost/pipe2mattermost.log
"""

from pathlib import Path

APP_NAME = "pipe2mattermost"


def config_dir() -> Path:
    return Path.home() / ".config" / APP_NAME


def state_dir() -> Path:
    return Path.home() / ".local" / "state" / APP_NAME


def default_config_path() -> Path:
    return config_dir() / "config.toml"


def default_log_path() -> Path:
    """Log file path; creates the state directory if needed."""
    directory = state_dir()
    directory.mkdir(parents=True, exist_ok=True)
    return directory / f"{APP_NAME}.log"
