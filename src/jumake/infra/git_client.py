"""``git`` executable backed implementation of :class:`~jumake.core.protocols.VersionControl`.

This module is the **only** place in the codebase that runs ``git``.
Non-zero exits are re-raised as :class:`~jumake.exceptions.GitError`
carrying git's own stderr.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from jumake.exceptions import GitError, ToolNotFoundError

logger = logging.getLogger(__name__)

AUTHOR_NAME: str = "JuMake"
AUTHOR_EMAIL: str = "jumake@example.com"


class GitClient:
    """Concrete :class:`VersionControl` that shells out to ``git``.

    Parameters
    ----------
    executable:
        Name or path of the git binary.
    """

    def __init__(self, executable: str = "git") -> None:
        self._executable: str = executable

    # ------------------------------------------------------------------
    # Protocol methods
    # ------------------------------------------------------------------

    def init(self, path: Path) -> None:
        self._git(path, "init")
        logger.info("Git repository initialized at %s", path)

    def add_all(self, path: Path) -> None:
        self._git(path, "add", "--all")

    def commit(self, path: Path, message: str) -> None:
        self._git(
            path,
            "commit",
            "--quiet",
            "-m",
            message,
            config=(
                f"user.name={AUTHOR_NAME}",
                f"user.email={AUTHOR_EMAIL}",
                "commit.gpgsign=false",
            ),
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _git(
        self,
        path: Path,
        subcommand: str,
        *args: str,
        config: tuple[str, ...] = (),
    ) -> str:
        argv = [self._executable]
        for setting in config:
            argv.extend(("-c", setting))
        argv.extend((subcommand, *args))
        logger.debug("Running %s in %s", " ".join(argv), path)
        try:
            completed = subprocess.run(
                argv,
                cwd=path,
                capture_output=True,
                text=True,
                check=False,
            )
        except FileNotFoundError as exc:
            raise ToolNotFoundError(
                "git is not installed or not on PATH.",
                hint="Install git, or pass --no-git to skip repository creation.",
            ) from exc
        except OSError as exc:
            raise GitError(f"Failed to run git: {exc}") from exc

        if completed.returncode != 0:
            detail = completed.stderr.strip() or completed.stdout.strip()
            raise GitError(f"git {subcommand} failed: {detail}")
        return completed.stdout
