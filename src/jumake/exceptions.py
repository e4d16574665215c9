"""Custom exception hierarchy for jumake.

All exceptions that cross layer boundaries must inherit from
:class:`JuMakeError`.  Raw ``OSError``/``subprocess`` failures must never
propagate beyond the layer that triggered them — they are caught and
re-raised as a typed subclass defined here, chained with ``from``.

Hierarchy
---------
JuMakeError
├── InvalidArgumentError          usage errors (exit code 2)
└── OperationError                execution errors (exit code 1)
    ├── ConfigError
    ├── ProjectError
    │   ├── ProjectExistsError
    │   ├── ProjectNotFoundError
    │   ├── ElementExistsError
    │   └── CMakeListsError
    ├── TemplateError
    ├── GitError
    ├── SymlinkError
    ├── BuildError
    │   ├── CMakeConfigureError
    │   ├── CMakeBuildError
    │   ├── CompileCommandsMissingError
    │   └── ExecutableNotFoundError
    ├── ToolNotFoundError
    └── MissingDependencyError
"""

from __future__ import annotations


class JuMakeError(Exception):
    """Base exception for all jumake errors.

    Every user-visible error condition maps to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Usage -----------------------------------------------------------------

class InvalidArgumentError(JuMakeError):
    """Raised when the command line is malformed or a value is rejected."""

    def __init__(
        self,
        message: str,
        *,
        value: str | None = None,
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.value: str | None = value
        """The offending token, when one can be singled out."""


# --- Execution -------------------------------------------------------------

class OperationError(JuMakeError):
    """Raised when a validated command fails while doing its work."""


class ConfigError(OperationError):
    """Raised when persisted configuration is missing or unreadable."""


# --- Project layout --------------------------------------------------------

class ProjectError(OperationError):
    """Raised for problems with the on-disk project structure."""


class ProjectExistsError(ProjectError):
    """Raised when ``new`` targets a directory that already exists."""


class ProjectNotFoundError(ProjectError):
    """Raised when the working directory is not a jumake project."""


class ElementExistsError(ProjectError):
    """Raised when ``add`` would overwrite an existing class or component."""


class CMakeListsError(ProjectError):
    """Raised when a ``CMakeLists.txt`` cannot be edited as expected."""


class TemplateError(OperationError):
    """Raised when a bundled template cannot be loaded."""


# --- Version control / filesystem ------------------------------------------

class GitError(OperationError):
    """Raised when a git command exits unsuccessfully."""


class SymlinkError(OperationError):
    """Raised when the JUCE modules link cannot be created."""

    def __init__(
        self,
        src: str,
        dst: str,
        reason: str,
        *,
        hint: str | None = None,
    ) -> None:
        super().__init__(f"Symlink error from {src} to {dst}: {reason}", hint=hint)
        self.src: str = src
        self.dst: str = dst


# --- Build -----------------------------------------------------------------

class BuildError(OperationError):
    """Base class for CMake build and run failures."""


class CMakeConfigureError(BuildError):
    """Raised when the CMake configure step exits non-zero."""


class CMakeBuildError(BuildError):
    """Raised when ``cmake --build`` exits non-zero."""


class CompileCommandsMissingError(BuildError):
    """Raised when CMake did not export ``compile_commands.json``."""


class ExecutableNotFoundError(BuildError):
    """Raised when no built executable matches the project and build type."""


# --- Environment / tooling -------------------------------------------------

class ToolNotFoundError(OperationError):
    """Raised when a required external program is not on PATH."""


class MissingDependencyError(OperationError):
    """Raised when an optional Python UI dependency is not installed."""
