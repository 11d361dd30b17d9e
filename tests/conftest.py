"""Shared fixtures: an in-memory Mattermost server behind httpx.MockTransport."""

from __future__ import annotations

import json
import re

import httpx
import pytest

from pipe2mattermost.credentials import Credentials
from pipe2mattermost.session import AuthSession

SERVER = "https://chat.example.com"


def _error(status: int, message: str) -> httpx.Response:
    return httpx.Response(
        status, json={"id": "api.error", "message": message, "status_code": status}
    )


class FakeMattermost:
    """Just enough of the v4 API for a pipe2mattermost run.

    Every request is recorded in `calls` as (method, path) so tests can count
    network activity.
    """

    def __init__(self) -> None:
        self.users = {"alice": ("s3cret", "user-alice")}
        self.teams = [{"id": "team-1", "name": "eng", "display_name": "Engineering"}]
        self.channels = [{"id": "chan-1", "name": "town-square", "team_id": "team-1"}]
        self.posts: dict[str, dict] = {}
        self.calls: list[tuple[str, str]] = []
        # index (0-based) of the create/revise call to reject with a 403
        self.reject_publish_at: int | None = None
        self._publish_count = 0
        self.token = "session-token"

    @property
    def publish_calls(self) -> list[tuple[str, str]]:
        return [c for c in self.calls if c[1].startswith("/api/v4/posts")]

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self.handler))

    def handler(self, request: httpx.Request) -> httpx.Response:
        method, path = request.method, request.url.path
        self.calls.append((method, path))

        if (method, path) == ("POST", "/api/v4/users/login"):
            return self._login(json.loads(request.content))

        if request.headers.get("Authorization") != f"Bearer {self.token}":
            return _error(401, "Invalid or expired session, please login again.")

        if (method, path) == ("GET", "/api/v4/users/me/teams"):
            return httpx.Response(200, json=self.teams)

        m = re.fullmatch(r"/api/v4/teams/name/([^/]+)/channels/name/([^/]+)", path)
        if method == "GET" and m:
            team = next((t for t in self.teams if t["name"] == m.group(1)), None)
            if team is None:
                return _error(404, "Unable to find the existing team.")
            return self._channel(team["id"], m.group(2))

        m = re.fullmatch(r"/api/v4/teams/([^/]+)/channels/name/([^/]+)", path)
        if method == "GET" and m:
            return self._channel(m.group(1), m.group(2))

        if (method, path) == ("POST", "/api/v4/posts"):
            if self._reject():
                return _error(403, "You do not have the appropriate permissions.")
            body = json.loads(request.content)
            post_id = f"post-{len(self.posts) + 1}"
            self.posts[post_id] = {"id": post_id, **body}
            return httpx.Response(201, json=self.posts[post_id])

        m = re.fullmatch(r"/api/v4/posts/([^/]+)/patch", path)
        if method == "PUT" and m:
            if self._reject():
                return _error(403, "You do not have the appropriate permissions.")
            post = self.posts.get(m.group(1))
            if post is None:
                return _error(404, "Unable to find the existing post.")
            post["message"] = json.loads(request.content)["message"]
            return httpx.Response(200, json=post)

        return _error(404, f"no route for {method} {path}")

    def _login(self, body: dict) -> httpx.Response:
        password, user_id = self.users.get(body.get("login_id"), (None, None))
        if password is None or password != body.get("password"):
            return _error(401, "Enter a valid email or username and/or password.")
        return httpx.Response(
            200,
            json={"id": user_id, "username": body["login_id"]},
            headers={"Token": self.token},
        )

    def _channel(self, team_id: str, name: str) -> httpx.Response:
        for channel in self.channels:
            if channel["team_id"] == team_id and channel["name"] == name:
                return httpx.Response(200, json=channel)
        return _error(404, "Unable to find the existing channel.")

    def _reject(self) -> bool:
        index = self._publish_count
        self._publish_count += 1
        return index == self.reject_publish_at


@pytest.fixture
def fake_server() -> FakeMattermost:
    return FakeMattermost()


@pytest.fixture
def credentials() -> Credentials:
    return Credentials(login="alice", password="s3cret")


@pytest.fixture
def session(fake_server: FakeMattermost, credentials: Credentials):
    """A session already logged in to the fake server."""
    with AuthSession(SERVER, client=fake_server.client()) as s:
        s.login(credentials)
        yield s
