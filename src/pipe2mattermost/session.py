"""Authenticated session against a Mattermost server (REST API v4).

One AuthSession is created per run. login() is called exactly once; after
that the session carries the user id and bearer token for every request.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx

from .config import DEFAULT_TIMEOUT
from .credentials import Credentials
from .errors import AmbiguousTeamError, AuthError, MattermostAPIError, NotFoundError
from .log import get_logger

_log = get_logger("session")

API_PREFIX = "/api/v4"


@dataclass
class Team:
    id: str
    name: str
    display_name: str = ""

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> Team:
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            display_name=data.get("display_name", ""),
        )


def error_message(response: httpx.Response) -> str:
    """Best human-readable message from a Mattermost error response."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return body["message"]
    return f"HTTP {response.status_code} from {response.request.url}"


class AuthSession:
    """A logged-in user on one Mattermost server."""

    def __init__(
        self,
        server_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        client: httpx.Client | None = None,
    ) -> None:
        self.server_url = server_url.rstrip("/")
        try:
            base_url = httpx.URL(self.server_url + API_PREFIX)
        except httpx.InvalidURL as e:
            raise AuthError(f"invalid server URL {server_url}: {e}") from e

        if client is None:
            client = httpx.Client(timeout=timeout)
        else:
            client.timeout = timeout
        client.base_url = base_url
        self.client = client
        self._user_id: str | None = None

    def __enter__(self) -> AuthSession:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self.client.close()

    @property
    def is_logged_in(self) -> bool:
        return self._user_id is not None

    @property
    def user_id(self) -> str:
        if self._user_id is None:
            raise AuthError("not logged in")
        return self._user_id

    def login(self, credentials: Credentials) -> str:
        """Authenticate and remember the user. Returns the user id."""
        payload = {"login_id": credentials.login, "password": credentials.password}
        try:
            response = self.client.post("/users/login", json=payload)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise AuthError(f"could not reach {self.server_url}: {e}") from e

        if response.status_code != 200:
            raise AuthError(
                f"login failed for {credentials.login}: {error_message(response)}",
                status_code=response.status_code,
            )

        token = response.headers.get("Token")
        try:
            user_id = response.json()["id"]
        except (ValueError, KeyError, TypeError) as e:
            raise AuthError(f"unexpected login response from {self.server_url}") from e
        if not token:
            raise AuthError(f"no session token in login response from {self.server_url}")

        self.client.headers["Authorization"] = f"Bearer {token}"
        self._user_id = user_id
        _log.info("logged in to %s as %s (%s)", self.server_url, credentials.login, user_id)
        return user_id

    def request(
        self,
        method: str,
        path: str,
        error_cls: type[MattermostAPIError] = MattermostAPIError,
        **kwargs: Any,
    ) -> Any:
        """Send an authenticated request and return the decoded JSON body.

        Transport failures and non-2xx responses raise error_cls, except a
        404 on a GET, which raises NotFoundError.
        """
        if not self.is_logged_in:
            raise AuthError("not logged in")

        try:
            response = self.client.request(method, path, **kwargs)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise error_cls(f"{method} {path} failed: {e}") from e

        if response.is_success:
            try:
                return response.json()
            except ValueError as e:
                raise error_cls(
                    f"{method} {path}: response is not JSON", status_code=response.status_code
                ) from e

        message = error_message(response)
        _log.warning("%s %s -> %s: %s", method, path, response.status_code, message)
        if response.status_code == 404 and method == "GET":
            raise NotFoundError(message, status_code=404)
        raise error_cls(message, status_code=response.status_code)

    def list_teams(self) -> list[Team]:
        """Teams the logged-in user is a member of."""
        data = self.request("GET", "/users/me/teams")
        return [Team.from_json(t) for t in data]

    def resolve_team_id(self) -> str:
        """Id of the user's only team.

        Never guesses: belonging to several teams is an error, and the
        caller has to name the team.
        """
        teams = self.list_teams()
        if not teams:
            raise NotFoundError("you are not a member of any team")
        if len(teams) > 1:
            names = ", ".join(sorted(t.name for t in teams))
            raise AmbiguousTeamError(f"multiple teams available ({names}); pass --team")
        _log.debug("only team is %s (%s)", teams[0].name, teams[0].id)
        return teams[0].id
