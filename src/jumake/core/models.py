"""Domain models for jumake.

All models are **frozen** dataclasses or enums — immutable value objects
with no behaviour beyond data access and parsing.  Commands are created
once by the argument parser and consumed once by the dispatcher.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from pathlib import Path
from typing import TypeAlias

from jumake.exceptions import InvalidArgumentError

BUILD_DIR_NAME: str = "jumake_build"
"""Directory (inside the project root) that holds the CMake build tree."""

LAST_USED: str = "LastUsed"
"""Pseudo build type accepted by ``run`` — resolved from the ``.jumake`` file."""


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class BuildType(str, enum.Enum):
    """CMake build configurations understood by jumake."""

    DEBUG = "Debug"
    RELEASE = "Release"
    REL_WITH_DEB_INFO = "RelWithDebInfo"
    MIN_SIZE_REL = "MinSizeRel"

    @classmethod
    def choices(cls) -> tuple[str, ...]:
        return tuple(member.value for member in cls)

    @classmethod
    def parse(cls, text: str) -> BuildType:
        """Convert *text* (exact CMake spelling) into a :class:`BuildType`.

        Raises
        ------
        InvalidArgumentError
            If *text* is not one of :meth:`choices`.
        """
        try:
            return cls(text)
        except ValueError as exc:
            raise InvalidArgumentError(
                f"Invalid build type: {text}",
                value=text,
                hint=f"Valid options: {', '.join(cls.choices())}",
            ) from exc


class ProjectTemplate(str, enum.Enum):
    """Project skeletons that ``jumake new`` can generate."""

    GUI_APPLICATION = "GuiApplication"
    AUDIO_PLUGIN = "AudioPlugin"
    CONSOLE_APP = "ConsoleApp"

    @classmethod
    def choices(cls) -> tuple[str, ...]:
        return tuple(member.value for member in cls)


class ElementType(str, enum.Enum):
    """Kinds of source element that ``jumake add`` can generate."""

    CLASS = "class"
    COMPONENT = "component"

    @classmethod
    def choices(cls) -> tuple[str, ...]:
        return tuple(member.value for member in cls)

    def class_name(self, element_name: str) -> str:
        """Return the C++ class name generated for *element_name*.

        Components carry a ``Component`` suffix, plain classes do not.
        """
        if self is ElementType.COMPONENT:
            return f"{element_name}Component"
        return element_name


# ---------------------------------------------------------------------------
# Project and toolchain descriptors
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ProjectContext:
    """Everything an operation needs to know about one project."""

    name: str
    """CMake project name (also the executable name)."""

    path: Path
    """Project root directory."""

    template: ProjectTemplate | None
    """Template the project was generated from, when known."""

    build_type: BuildType = BuildType.RELEASE
    """CMake configuration to build or run."""

    @property
    def build_dir(self) -> Path:
        return self.path / BUILD_DIR_NAME

    @property
    def source_dir(self) -> Path:
        return self.path / "src"


@dataclass(frozen=True, slots=True)
class Toolchain:
    """Resolved build tools for the current machine."""

    cmake: str
    """Path (or bare name) of the ``cmake`` executable."""

    generator: str | None
    """CMake generator passed with ``-G``; ``None`` keeps CMake's default."""

    compiler_launcher: str | None
    """Compiler launcher such as ``ccache``; ``None`` when unavailable."""


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class NewCommand:
    """Create a new JUCE project."""

    project_name: str
    path: Path | None = None
    template: ProjectTemplate | None = None
    init_git: bool = True


@dataclass(frozen=True, slots=True)
class AddCommand:
    """Add a C++ class or JUCE component to the current project."""

    element_type: ElementType
    element_name: str


@dataclass(frozen=True, slots=True)
class BuildCommand:
    """Build the current project."""

    build_type: BuildType = BuildType.RELEASE


@dataclass(frozen=True, slots=True)
class RunCommand:
    """Build and run the current project.

    ``build_type`` of ``None`` means "last used", read from ``.jumake``.
    """

    build_type: BuildType | None = None


@dataclass(frozen=True, slots=True)
class DoctorCommand:
    """Print environment diagnostics."""


@dataclass(frozen=True, slots=True)
class ConfigCommand:
    """Show the configuration, or store a new JUCE path when given."""

    juce_path: Path | None = None


@dataclass(frozen=True, slots=True)
class ShowHelp:
    """Pseudo-command: print pre-rendered help text."""

    text: str


@dataclass(frozen=True, slots=True)
class ShowVersion:
    """Pseudo-command: print the program version."""


Command: TypeAlias = (
    NewCommand
    | AddCommand
    | BuildCommand
    | RunCommand
    | DoctorCommand
    | ConfigCommand
    | ShowHelp
    | ShowVersion
)


@dataclass(frozen=True, slots=True)
class Invocation:
    """A parsed command line: the command plus global options."""

    command: Command
    verbosity: int = 0
