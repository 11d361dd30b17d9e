"""Configuration management for pipe2mattermost."""

import sys
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .paths import default_config_path

DEFAULT_MACHINE = "mattermost"
DEFAULT_TIMEOUT = 10.0


def get_default_config() -> str:
    """Return the default config file contents."""
    return """\
# pipe2mattermost configuration

# Team used when --team is not given. Leave empty to pick the only team
# you belong to (fails if you belong to several).
team = ""

# HTTP timeout in seconds for each request to the server
timeout = 10.0

[netrc]
# Empty means $NETRC, or ~/.netrc
path = ""
# netrc "machine" entry holding your login and password
machine = "mattermost"
"""


@dataclass
class NetrcConfig:
    """Where to find the login/password pair."""

    path: str = ""  # empty: $NETRC or ~/.netrc
    machine: str = DEFAULT_MACHINE


@dataclass
class Config:
    """pipe2mattermost configuration."""

    team: str = ""
    timeout: float = DEFAULT_TIMEOUT
    netrc: NetrcConfig = field(default_factory=NetrcConfig)


def load_config(config_path: Path | None = None) -> Config:
    """Load configuration from file, or return defaults."""
    if config_path is None:
        config_path = default_config_path()

    if not config_path.exists():
        return Config()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        # Warn but return defaults
        print(f"Warning: Could not load config from {config_path}: {e}", file=sys.stderr)
        return Config()

    return _parse_config(data)


def _parse_config(data: dict[str, Any]) -> Config:
    """Parse config dict into Config object."""
    netrc_data = data.get("netrc", {})
    netrc = NetrcConfig(
        path=netrc_data.get("path", ""),
        machine=netrc_data.get("machine", DEFAULT_MACHINE) or DEFAULT_MACHINE,
    )

    return Config(
        team=data.get("team", ""),
        timeout=float(data.get("timeout", DEFAULT_TIMEOUT)),
        netrc=netrc,
    )
