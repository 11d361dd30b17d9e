"""CLI entry point for pipe2mattermost.

    echo foo | pipe2mattermost https://chat.example.com town-square

Each line read from stdin is posted to the channel. With --update, one post
is created and then edited in place as new lines arrive.
"""

import argparse
import sys
from pathlib import Path
from typing import TextIO

import httpx
from rich.console import Console
from rich.markup import escape

from .config import load_config
from .credentials import CredentialStore
from .errors import Pipe2MattermostError
from .follow import FollowResult, follow, read_lines
from .log import get_logger, setup_logging
from .publish import MessagePublisher
from .resolve import normalize_channel_name, resolve_channel_id
from .session import AuthSession

_log = get_logger("cli")

_stderr = Console(stderr=True, highlight=False)


def normalize_server_url(url: str) -> str:
    """Add https:// when no scheme is given."""
    url = url.strip()
    if "://" not in url:
        url = f"https://{url}"
    return url.rstrip("/")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pipe2mattermost",
        description="Post lines from stdin to a Mattermost channel",
        epilog="Credentials are read from the 'mattermost' entry of ~/.netrc.",
    )
    parser.add_argument("server_url", nargs="?", help="Mattermost server URL")
    parser.add_argument("channel", nargs="?", help="Channel name (slug)")
    parser.add_argument("--team", help="Team name (required if you are in several teams)")
    parser.add_argument(
        "--update",
        action="store_true",
        help="Continuously update the same message",
    )
    parser.add_argument("--config", type=Path, help="Path to config file")
    parser.add_argument("--netrc", help="Path to the netrc file")
    parser.add_argument("--machine", help="netrc machine entry to use")
    return parser


def run(
    args: argparse.Namespace,
    stdin: TextIO,
    client: httpx.Client | None = None,
) -> FollowResult:
    """Log in, resolve the channel, then publish stdin line by line."""
    config = load_config(args.config)
    team = args.team if args.team is not None else config.team
    store = CredentialStore(
        path=args.netrc or config.netrc.path or None,
        machine=args.machine or config.netrc.machine,
    )

    # credentials are checked before any network activity
    credentials = store.load()

    with AuthSession(
        normalize_server_url(args.server_url), timeout=config.timeout, client=client
    ) as session:
        session.login(credentials)
        channel_id = resolve_channel_id(session, args.channel, team)
        publisher = MessagePublisher(session)
        return follow(read_lines(stdin), publisher, channel_id, update=args.update)


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.server_url:
        parser.error("I need a server URL")
    if not args.channel or not normalize_channel_name(args.channel):
        parser.error("I need a channel slug")

    setup_logging()
    _log.info("starting: server=%s channel=%s update=%s", args.server_url, args.channel, args.update)

    try:
        run(args, sys.stdin)
    except Pipe2MattermostError as e:
        _log.error("%s: %s", type(e).__name__, e)
        _stderr.print(f"[bold red]error:[/bold red] {escape(str(e))}")
        sys.exit(1)
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    main()
