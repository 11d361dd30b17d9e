"""Create posts and replace their text."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

from .errors import PublishError
from .log import get_logger
from .session import AuthSession

_log = get_logger("publish")


@dataclass
class Post:
    id: str
    channel_id: str
    user_id: str
    message: str

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> Post:
        return cls(
            id=data["id"],
            channel_id=data.get("channel_id", ""),
            user_id=data.get("user_id", ""),
            message=data.get("message", ""),
        )


class MessagePublisher:
    """Posts on behalf of the session's user."""

    def __init__(self, session: AuthSession) -> None:
        self.session = session

    def create(self, text: str, channel_id: str) -> str:
        """Create a post in the channel and return its id."""
        draft = {
            "channel_id": channel_id,
            "user_id": self.session.user_id,
            "message": text,
        }
        post = self._send("POST", "/posts", draft)
        _log.debug("created post %s in %s", post.id, channel_id)
        return post.id

    def revise(self, message_id: str, text: str) -> str:
        """Replace the whole text of an existing post. Returns its id.

        A post that no longer exists is an error; no new post is created.
        """
        post = self._send("PUT", f"/posts/{quote(message_id, safe='')}/patch", {"message": text})
        _log.debug("revised post %s", post.id)
        return post.id

    def _send(self, method: str, path: str, payload: dict[str, Any]) -> Post:
        data = self.session.request(method, path, error_cls=PublishError, json=payload)
        try:
            return Post.from_json(data)
        except (KeyError, TypeError) as e:
            raise PublishError(f"{method} {path}: unexpected response") from e
