"""Follow a stream of lines and publish each one.

Two modes:
- post mode: every line becomes a new post
- update mode: the first line creates a post, every later line replaces
  that post's text

The branching lives in decide() and advance(), which do no I/O. follow()
applies the chosen action through a publisher and tracks the current post id.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Protocol, TextIO

from .errors import InputError
from .log import get_logger

_log = get_logger("follow")


class Publisher(Protocol):
    def create(self, text: str, channel_id: str) -> str: ...

    def revise(self, message_id: str, text: str) -> str: ...


@dataclass(frozen=True)
class NoMessageYet:
    pass


@dataclass(frozen=True)
class HasMessage:
    message_id: str


FollowState = NoMessageYet | HasMessage


@dataclass(frozen=True)
class Create:
    text: str


@dataclass(frozen=True)
class Revise:
    message_id: str
    text: str


Action = Create | Revise


@dataclass
class FollowResult:
    """What a finished follow() did."""

    state: FollowState
    created: int = 0
    revised: int = 0


def decide(line: str, state: FollowState, update: bool) -> Action:
    """Pick the action for one line.

    Revising only happens in update mode once a post exists.
    """
    if update and isinstance(state, HasMessage):
        return Revise(state.message_id, line)
    return Create(line)


def advance(state: FollowState, action: Action, message_id: str, update: bool) -> FollowState:
    """State after action succeeded with the returned message_id."""
    if update and isinstance(action, Create):
        return HasMessage(message_id)
    return state


def read_lines(stream: TextIO) -> Iterator[str]:
    """Yield lines without their line ending. Blank lines are kept."""
    try:
        for line in stream:
            yield line.removesuffix("\n").removesuffix("\r")
    except (OSError, UnicodeDecodeError) as e:
        raise InputError(f"could not read input: {e}") from e


def follow(
    lines: Iterable[str],
    publisher: Publisher,
    channel_id: str,
    update: bool = False,
) -> FollowResult:
    """Publish each line in order, stopping at the first error.

    Posts made before a failure stay as they are.
    """
    result = FollowResult(state=NoMessageYet())

    for line in lines:
        action = decide(line, result.state, update)
        if isinstance(action, Revise):
            message_id = publisher.revise(action.message_id, action.text)
            result.revised += 1
        else:
            message_id = publisher.create(action.text, channel_id)
            result.created += 1
        result.state = advance(result.state, action, message_id, update)

    _log.info("input ended: %d created, %d revised", result.created, result.revised)
    return result
