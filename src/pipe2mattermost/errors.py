"""Exceptions raised by pipe2mattermost.

Nothing here is recovered locally: the CLI reports the error and exits.
"""

from __future__ import annotations


class Pipe2MattermostError(Exception):
    """Base class for every error the tool reports."""


class CredentialError(Pipe2MattermostError):
    """The netrc file is missing, unreadable, or has no usable entry."""


class InputError(Pipe2MattermostError):
    """Standard input could not be read or decoded."""


class MattermostAPIError(Pipe2MattermostError):
    """A request to the Mattermost server failed."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class AuthError(MattermostAPIError):
    """Login was rejected, or the session was used before logging in."""


class NotFoundError(MattermostAPIError):
    """A team or channel name did not resolve."""


class AmbiguousTeamError(MattermostAPIError):
    """No team was named and the user belongs to more than one."""


class PublishError(MattermostAPIError):
    """Creating or revising a post failed."""
