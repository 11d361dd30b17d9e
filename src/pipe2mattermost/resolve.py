"""Turn team and channel names into Mattermost ids."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

from .errors import NotFoundError
from .log import get_logger
from .session import AuthSession

_log = get_logger("resolve")


@dataclass
class Channel:
    id: str
    name: str
    team_id: str

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> Channel:
        return cls(id=data["id"], name=data.get("name", ""), team_id=data.get("team_id", ""))


def normalize_channel_name(name: str) -> str:
    """Strip the "~" (Mattermost) or "#" prefix people copy along with the name."""
    return name.strip().lstrip("~#")


def get_channel(session: AuthSession, channel_name: str, team_name: str = "") -> Channel:
    """Look up a channel by name.

    With no team name, the user's only team is used (see
    AuthSession.resolve_team_id). With a team name, the channel is looked up
    by team name directly and the team id is never fetched.
    """
    name = normalize_channel_name(channel_name)
    if not name:
        raise NotFoundError(f"no channel name in {channel_name!r}")
    name = quote(name, safe="")

    if team_name:
        path = f"/teams/name/{quote(team_name, safe='')}/channels/name/{name}"
    else:
        team_id = session.resolve_team_id()
        path = f"/teams/{team_id}/channels/name/{name}"

    return Channel.from_json(session.request("GET", path))


def resolve_channel_id(session: AuthSession, channel_name: str, team_name: str = "") -> str:
    """Id of the named channel; raises NotFoundError or AmbiguousTeamError."""
    channel = get_channel(session, channel_name, team_name)
    _log.info("channel %s resolved to %s (team %s)", channel_name, channel.id, channel.team_id)
    return channel.id
