"""CLI console and logging helpers with optional Rich support.

This module intentionally avoids module-level imports of optional UI
dependencies so bootstrap paths (``--help``, ``--version``) remain
functional even when Rich is not installed.

Two proxies are exported: :data:`console` writes normal results to
stdout and :data:`err_console` writes errors and diagnostics to stderr.
"""

from __future__ import annotations

import logging
import re
import sys
from typing import Any

from jumake.exceptions import MissingDependencyError

_MARKUP_TAG = re.compile(r"\[/?(?:bold|dim|red|green|yellow|cyan|magenta|blue)(?: [a-z]+)*\]")


def _load_rich_console_class() -> type[Any]:
    """Return ``rich.console.Console`` class or raise ``MissingDependencyError``."""
    try:
        from rich.console import Console
    except ModuleNotFoundError as exc:
        raise MissingDependencyError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return Console


def get_rich_console(*, stderr: bool = False) -> Any:
    """Create a Rich console bound to the current stdout or stderr."""
    console_class = _load_rich_console_class()
    return console_class(stderr=stderr)


def escape(text: str) -> str:
    """Escape Rich markup in user-supplied *text* (identity without Rich)."""
    try:
        from rich.markup import escape as rich_escape
    except ModuleNotFoundError:
        return text
    return rich_escape(text)


def strip_markup(text: str) -> str:
    """Remove the style tags used by jumake from *text*."""
    return _MARKUP_TAG.sub("", text)


class _ConsoleProxy:
    """Minimal ``print``-compatible proxy with Rich fallback."""

    def __init__(self, *, stderr: bool) -> None:
        self._stderr: bool = stderr

    def print(self, *objects: object, **kwargs: Any) -> None:
        """Render with Rich when available, else plain print."""
        try:
            rich_console = get_rich_console(stderr=self._stderr)
        except MissingDependencyError:
            stream = sys.stderr if self._stderr else sys.stdout
            plain = [strip_markup(obj) if isinstance(obj, str) else obj for obj in objects]
            print(*plain, file=stream)
            return
        rich_console.print(*objects, **kwargs)


console = _ConsoleProxy(stderr=False)
err_console = _ConsoleProxy(stderr=True)


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

_LOGGER_NAME = "jumake"
_HANDLER_MARKER = "_jumake_handler"


def level_for(verbosity: int) -> int:
    """Map the number of ``-v`` flags to a logging level."""
    if verbosity >= 2:
        return logging.DEBUG
    if verbosity == 1:
        return logging.INFO
    return logging.WARNING


def configure_logging(verbosity: int = 0) -> logging.Logger:
    """Attach a single stderr handler to the ``jumake`` logger.

    A :class:`rich.logging.RichHandler` is used when Rich is installed,
    otherwise a plain :class:`logging.StreamHandler`.  Calling this again
    replaces the previously installed handler.
    """
    logger = logging.getLogger(_LOGGER_NAME)
    for existing in list(logger.handlers):
        if getattr(existing, _HANDLER_MARKER, False):
            logger.removeHandler(existing)

    handler: logging.Handler
    try:
        from rich.logging import RichHandler

        handler = RichHandler(
            console=get_rich_console(stderr=True),
            show_time=False,
            show_path=False,
            markup=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
    except (ModuleNotFoundError, MissingDependencyError):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))

    setattr(handler, _HANDLER_MARKER, True)
    logger.addHandler(handler)
    logger.setLevel(level_for(verbosity))
    return logger
