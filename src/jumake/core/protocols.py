"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations — so that external programs (cmake, git, the project
executable) can be replaced with fakes in tests.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from jumake.core.models import ElementType, ProjectTemplate


class ProcessRunner(Protocol):
    """Contract for running an external program to completion."""

    def run(self, args: Sequence[str], *, cwd: Path) -> int:
        """Run *args* in *cwd* with inherited stdio and return the exit code.

        Raises
        ------
        ToolNotFoundError
            When ``args[0]`` cannot be executed because it does not exist.
        OperationError
            For any other failure to start the program.
        """
        ...  # pragma: no cover


class VersionControl(Protocol):
    """Contract for the version-control backend used by ``jumake new``."""

    def init(self, path: Path) -> None:
        """Create an empty repository in *path*."""
        ...  # pragma: no cover

    def add_all(self, path: Path) -> None:
        """Stage every file in the working tree at *path*."""
        ...  # pragma: no cover

    def commit(self, path: Path, message: str) -> None:
        """Record the staged changes in *path* with *message*.

        Raises
        ------
        GitError
            When the backend reports a failure.
        """
        ...  # pragma: no cover


class TemplateStore(Protocol):
    """Contract for the source of project and element templates."""

    def project_files(self, template: ProjectTemplate) -> dict[str, str]:
        """Return ``{file name: content}`` for the ``src/`` directory.

        Raises
        ------
        TemplateError
            When a template file cannot be loaded.
        """
        ...  # pragma: no cover

    def element_files(self, element_type: ElementType) -> tuple[str, str]:
        """Return ``(header, source)`` contents with a ``Template`` placeholder.

        Raises
        ------
        TemplateError
            When a template file cannot be loaded.
        """
        ...  # pragma: no cover
