"""pipe2mattermost: stream stdin lines into a Mattermost channel.

Components, in the order a run uses them:
- credentials: login/password from ~/.netrc
- session: login and team membership
- resolve: team/channel names to ids
- publish: create posts and replace their text
- follow: one post per line, or one post revised per line
"""

from .errors import (
    AmbiguousTeamError,
    AuthError,
    CredentialError,
    InputError,
    MattermostAPIError,
    NotFoundError,
    Pipe2MattermostError,
    PublishError,
)

__all__ = [
    "AmbiguousTeamError",
    "AuthError",
    "CredentialError",
    "InputError",
    "MattermostAPIError",
    "NotFoundError",
    "Pipe2MattermostError",
    "PublishError",
]
