"""Shared logging for pipe2mattermost.

Components log through children of the "pipe2mattermost" logger. Nothing is
written until setup_logging() attaches the file handler; the CLI does that
on startup. Filter with grep: grep 'pipe2mattermost.session' <logfile>
"""

import logging
from pathlib import Path

from .paths import default_log_path

_root = logging.getLogger("pipe2mattermost")
_root.addHandler(logging.NullHandler())
_root.setLevel(logging.DEBUG)
# don't propagate to root logger (avoids duplicate output if someone
# configures the root logger elsewhere)
_root.propagate = False


def setup_logging(path: Path | None = None) -> Path | None:
    """Attach the file handler. Returns the log path, or None if unwritable."""
    try:
        if path is None:
            path = default_log_path()
        handler = logging.FileHandler(path)
    except OSError:
        # a read-only home must not stop the pipe
        return None

    handler.setFormatter(
        logging.Formatter("%(asctime)s %(name)s %(message)s", datefmt="%H:%M:%S")
    )
    _root.addHandler(handler)
    return path


def get_logger(name: str) -> logging.Logger:
    return _root.getChild(name)
