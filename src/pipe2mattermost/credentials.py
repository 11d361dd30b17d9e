"""Login/password lookup from the user's netrc file.

The file holds one entry per machine name:

    machine mattermost login alice password s3cret

The machine name is a fixed key ("mattermost" unless configured), not the
server hostname, so one entry serves whichever server URL is given.
"""

from __future__ import annotations

import netrc
import os
from dataclasses import dataclass, field
from pathlib import Path

from .config import DEFAULT_MACHINE
from .errors import CredentialError
from .log import get_logger

_log = get_logger("credentials")


@dataclass(frozen=True)
class Credentials:
    login: str
    password: str = field(repr=False)


def default_netrc_path() -> Path:
    """$NETRC if set, otherwise ~/.netrc."""
    env = os.environ.get("NETRC")
    if env:
        return Path(env).expanduser()
    return Path.home() / ".netrc"


class CredentialStore:
    """Reads Credentials for one machine entry of a netrc file."""

    def __init__(self, path: Path | str | None = None, machine: str = DEFAULT_MACHINE) -> None:
        self.path = default_netrc_path() if not path else Path(path).expanduser()
        self.machine = machine

    def load(self) -> Credentials:
        """Return the login/password pair, or raise CredentialError."""
        if not self.path.exists():
            raise CredentialError(f"netrc file not found: {self.path}")

        try:
            parsed = netrc.netrc(str(self.path))
        except netrc.NetrcParseError as e:
            raise CredentialError(f"could not parse {self.path}: {e}") from e
        except OSError as e:
            raise CredentialError(f"could not read {self.path}: {e}") from e

        # authenticators() falls back to a "default" entry; only an explicit
        # machine entry counts here
        if self.machine not in parsed.hosts:
            raise CredentialError(f"no '{self.machine}' machine entry in {self.path}")

        login, _account, password = parsed.hosts[self.machine]
        if not login or not password:
            raise CredentialError(
                f"'{self.machine}' entry in {self.path} needs both login and password"
            )

        _log.debug("loaded credentials for %s from %s", self.machine, self.path)
        return Credentials(login=login, password=password)
