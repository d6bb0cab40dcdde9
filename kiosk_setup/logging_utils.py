from __future__ import annotations

import logging
from pathlib import Path
from typing import Tuple

DEFAULT_LOG_PATH = "~/.local/state/kiosk-setup/kiosk-setup.log"
FALLBACK_LOG_NAME = "kiosk-setup.log"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%dT%H:%M:%S%z"

_CONFIGURED_ATTR = "_kiosk_log_path"


def _open_log_file(log_path: str) -> Tuple[logging.FileHandler, str]:
    """File handler for `log_path`, or for ./kiosk-setup.log if that is not writable."""

    requested = Path(log_path).expanduser()
    try:
        requested.parent.mkdir(parents=True, exist_ok=True)
        return logging.FileHandler(requested, encoding="utf-8"), str(requested)
    except OSError:
        fallback = Path.cwd() / FALLBACK_LOG_NAME
        return logging.FileHandler(fallback, encoding="utf-8"), str(fallback)


def configure_logging(log_path: str = DEFAULT_LOG_PATH, verbose: bool = False) -> str:
    """Send every command and file decision to the setup log.

    The terminal belongs to the prompts, so by default nothing is logged to it.
    `verbose` lowers the level to DEBUG (command stdout/stderr included) and
    mirrors the log on stderr. Calling this twice keeps the first setup.

    Returns the log file actually in use.
    """

    root = logging.getLogger()
    already = getattr(root, _CONFIGURED_ATTR, None)
    if already is not None:
        return already

    level = logging.DEBUG if verbose else logging.INFO
    root.setLevel(level)
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)

    file_handler, chosen = _open_log_file(log_path)
    handlers: list[logging.Handler] = [file_handler]
    if verbose:
        handlers.append(logging.StreamHandler())

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root.addHandler(handler)
    setattr(root, _CONFIGURED_ATTR, chosen)

    logging.getLogger(__name__).info("Logging to %s (requested %s, level %s)", chosen, log_path, logging.getLevelName(level))
    return chosen
