"""``subprocess`` backed implementation of :class:`~jumake.core.protocols.ProcessRunner`.

The child inherits stdin/stdout/stderr so CMake and the launched
program stream their output straight to the terminal.
"""

from __future__ import annotations

import logging
import shlex
import subprocess
from collections.abc import Sequence
from pathlib import Path

from jumake.exceptions import OperationError, ToolNotFoundError

logger = logging.getLogger(__name__)


class SubprocessRunner:
    """Concrete :class:`ProcessRunner` using :func:`subprocess.run`.

    This class satisfies the :class:`~jumake.core.protocols.ProcessRunner`
    protocol structurally — no explicit inheritance required.
    """

    def run(self, args: Sequence[str], *, cwd: Path) -> int:
        """Run *args* in *cwd* and return the exit code.

        Raises
        ------
        ToolNotFoundError
            When the program does not exist.
        OperationError
            When the program cannot be started for another reason.
        """
        argv = list(args)
        logger.debug("Running %s (cwd=%s)", shlex.join(argv), cwd)
        try:
            completed = subprocess.run(argv, cwd=cwd, check=False)
        except FileNotFoundError as exc:
            raise ToolNotFoundError(
                f"{argv[0]} could not be executed: {exc.strerror or exc}",
                hint="Run 'jumake doctor' to check your environment.",
            ) from exc
        except OSError as exc:
            raise OperationError(f"Failed to run {argv[0]}: {exc}") from exc
        logger.debug("%s exited with %d", argv[0], completed.returncode)
        return completed.returncode
