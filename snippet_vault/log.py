"""Package logger.

Everything in the package logs through :data:`logger`.  Nothing is emitted
until :func:`configure_logging` attaches a handler, because a terminal UI
owns stdout and stderr while it runs.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

logger = logging.getLogger("snippet_vault")
logger.addHandler(logging.NullHandler())

_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def configure_logging(
    path: Path | None = None,
    level: str | int | None = None,
) -> logging.Handler | None:
    """Send package logs to *path*.

    Falls back to ``$SNIPPET_VAULT_LOG`` when *path* is not given, and to
    ``$SNIPPET_VAULT_LOG_LEVEL`` (default ``INFO``) for the level.  Returns
    the handler that was attached, or ``None`` when logging stays disabled.
    """
    if path is None:
        env_path = os.environ.get("SNIPPET_VAULT_LOG", "").strip()
        if not env_path:
            return None
        path = Path(env_path).expanduser()

    if level is None:
        level = os.environ.get("SNIPPET_VAULT_LOG_LEVEL", "INFO").upper()

    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setFormatter(logging.Formatter(_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(level)
    return handler
