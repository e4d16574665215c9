"""Infrastructure: build-tool detection and platform guidance.

This module locates ``cmake``, ``ninja``, ``ccache`` and ``git`` on the
system PATH and provides platform-specific installation guidance when
one is missing.

Rules
-----
* Detection via :func:`shutil.which` only — no subprocess.
* No permanent PATH modification.
* No automatic installation.
* No ``print()`` — callers handle user-facing output.
"""

from __future__ import annotations

import platform
import shutil
from dataclasses import dataclass
from pathlib import Path

from jumake.core.models import Toolchain
from jumake.exceptions import ToolNotFoundError


# ---------------------------------------------------------------------------
# Detection result
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ToolStatus:
    """Result of a PATH probe for one external program.

    Attributes
    ----------
    name : str
        Program name that was searched for.
    found : bool
        Whether the program was located on PATH.
    path : Path | None
        Absolute path to the binary, or ``None``.
    install_commands : tuple[str, ...]
        Suggested shell commands for installing the program on the
        current platform.  Empty when it is already present.
    """

    name: str
    found: bool
    path: Path | None
    install_commands: tuple[str, ...]


# ---------------------------------------------------------------------------
# Detection logic
# ---------------------------------------------------------------------------

def detect_tool(name: str) -> ToolStatus:
    """Probe the system for *name*.

    Returns a :class:`ToolStatus` regardless of whether the program is
    present — the caller decides whether to abort or merely warn.
    """
    result = shutil.which(name)

    if result is not None:
        return ToolStatus(
            name=name,
            found=True,
            path=Path(result).resolve(),
            install_commands=(),
        )

    return ToolStatus(
        name=name,
        found=False,
        path=None,
        install_commands=_platform_install_commands(name),
    )


def require_tool(name: str) -> Path:
    """Locate *name* or raise :class:`ToolNotFoundError`."""
    status = detect_tool(name)
    if not status.found or status.path is None:
        hint_lines: list[str] = []
        if status.install_commands:
            hint_lines.append(f"Install {name} using one of:")
            hint_lines.extend(f"  {cmd}" for cmd in status.install_commands)
        raise ToolNotFoundError(
            f"{name} is not installed or not on PATH.",
            hint="\n".join(hint_lines) if hint_lines else None,
        )
    return status.path


def detect_toolchain(system: str | None = None) -> Toolchain:
    """Resolve cmake plus the optional Ninja generator and ccache launcher.

    Ninja is preferred when installed.  Otherwise ``Unix Makefiles`` is
    used, except on Windows where CMake's own default generator is kept.

    Raises
    ------
    ToolNotFoundError
        If ``cmake`` is not installed.
    """
    cmake = require_tool("cmake")
    system = system if system is not None else platform.system()

    if detect_tool("ninja").found:
        generator: str | None = "Ninja"
    elif system == "Windows":
        generator = None
    else:
        generator = "Unix Makefiles"

    launcher = "ccache" if detect_tool("ccache").found else None
    return Toolchain(cmake=str(cmake), generator=generator, compiler_launcher=launcher)


# ---------------------------------------------------------------------------
# Platform-specific install guidance
# ---------------------------------------------------------------------------

_WINGET_IDS: dict[str, str] = {
    "cmake": "Kitware.CMake",
    "ninja": "Ninja-build.Ninja",
    "ccache": "Ccache.Ccache",
    "git": "Git.Git",
}

_DEBIAN_PACKAGES: dict[str, str] = {
    "ninja": "ninja-build",
}


def _platform_install_commands(name: str) -> tuple[str, ...]:
    """Return install commands for *name* appropriate for the current OS."""
    system = platform.system().lower()
    if system == "windows":
        return (
            f"winget install {_WINGET_IDS.get(name, name)}",
            f"choco install {name}",
        )
    if system == "linux":
        package = _DEBIAN_PACKAGES.get(name, name)
        return (
            f"sudo apt install {package}",
            f"sudo dnf install {package}",
            f"sudo pacman -S {name}",
        )
    if system == "darwin":
        return (f"brew install {name}",)
    return (f"Please install {name} using your system package manager.",)
