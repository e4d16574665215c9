"""Exit-code constants used by the CLI layer.

Centralised here so that every exit path uses a well-known, tested
value rather than magic integers scattered across the codebase.
"""

from __future__ import annotations

from jumake.exceptions import InvalidArgumentError, JuMakeError

SUCCESS: int = 0
"""Clean exit — command completed without error."""

GENERAL_ERROR: int = 1
"""An operation failed. User-facing message was displayed."""

USAGE_ERROR: int = 2
"""The command line was rejected before any work started (argparse convention)."""

UNEXPECTED_ERROR: int = 3
"""An unhandled exception escaped all known error boundaries."""

KEYBOARD_INTERRUPT: int = 130
"""User pressed Ctrl+C.  Follows POSIX convention (128 + SIGINT=2)."""


def for_error(exc: JuMakeError) -> int:
    """Map a domain error to its exit code."""
    if isinstance(exc, InvalidArgumentError):
        return USAGE_ERROR
    return GENERAL_ERROR
