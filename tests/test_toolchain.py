"""Tests for build-tool detection (infra/toolchain.py).

All tests mock :func:`shutil.which` — no system dependency.

Coverage:
* ``detect_tool`` when the program is found or missing.
* ``require_tool`` happy path and ``ToolNotFoundError`` with a hint.
* ``detect_toolchain`` generator and launcher selection.
* Platform-specific install commands (Windows / Linux / macOS).
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable
from pathlib import Path
from unittest.mock import patch

import pytest

from jumake.exceptions import ToolNotFoundError
from jumake.infra.toolchain import (
    ToolStatus,
    _platform_install_commands,
    detect_tool,
    detect_toolchain,
    require_tool,
)


def _which_for(*available: str) -> Callable[[str], str | None]:
    def which(name: str) -> str | None:
        return f"/usr/bin/{name}" if name in available else None

    return which


# ---------------------------------------------------------------------------
# detect_tool / require_tool
# ---------------------------------------------------------------------------

class TestDetectTool:
    @patch("jumake.infra.toolchain.shutil.which", return_value="/usr/bin/cmake")
    def test_found(self, _mock_which: object) -> None:
        status = detect_tool("cmake")
        assert status.found is True
        assert isinstance(status.path, Path)
        assert status.install_commands == ()

    @patch("jumake.infra.toolchain.shutil.which", return_value=None)
    def test_not_found(self, _mock_which: object) -> None:
        status = detect_tool("ninja")
        assert status.name == "ninja"
        assert status.found is False
        assert status.path is None
        assert len(status.install_commands) > 0

    def test_status_is_frozen(self) -> None:
        status = ToolStatus(name="git", found=False, path=None, install_commands=())
        with pytest.raises(dataclasses.FrozenInstanceError):
            status.found = True  # type: ignore[misc]


class TestRequireTool:
    @patch("jumake.infra.toolchain.shutil.which", return_value="/usr/bin/git")
    def test_found_returns_path(self, _mock_which: object) -> None:
        assert isinstance(require_tool("git"), Path)

    @patch("jumake.infra.toolchain.shutil.which", return_value=None)
    def test_missing_raises_with_hint(self, _mock_which: object) -> None:
        with pytest.raises(ToolNotFoundError, match="cmake is not installed") as exc_info:
            require_tool("cmake")
        assert exc_info.value.hint is not None
        assert "Install cmake" in exc_info.value.hint


# ---------------------------------------------------------------------------
# detect_toolchain
# ---------------------------------------------------------------------------

class TestDetectToolchain:
    def test_prefers_ninja_and_ccache(self) -> None:
        with patch("jumake.infra.toolchain.shutil.which", side_effect=_which_for("cmake", "ninja", "ccache")):
            toolchain = detect_toolchain(system="Linux")
        assert toolchain.generator == "Ninja"
        assert toolchain.compiler_launcher == "ccache"
        assert toolchain.cmake

    def test_falls_back_to_makefiles(self) -> None:
        with patch("jumake.infra.toolchain.shutil.which", side_effect=_which_for("cmake")):
            toolchain = detect_toolchain(system="Darwin")
        assert toolchain.generator == "Unix Makefiles"
        assert toolchain.compiler_launcher is None

    def test_windows_keeps_default_generator(self) -> None:
        with patch("jumake.infra.toolchain.shutil.which", side_effect=_which_for("cmake")):
            toolchain = detect_toolchain(system="Windows")
        assert toolchain.generator is None

    def test_cmake_is_required(self) -> None:
        with patch("jumake.infra.toolchain.shutil.which", side_effect=_which_for("ninja")):
            with pytest.raises(ToolNotFoundError, match="cmake"):
                detect_toolchain(system="Linux")


# ---------------------------------------------------------------------------
# Platform install commands
# ---------------------------------------------------------------------------

class TestPlatformInstallCommands:
    @patch("jumake.infra.toolchain.platform.system", return_value="Windows")
    def test_windows(self, _mock_sys: object) -> None:
        cmds = _platform_install_commands("cmake")
        assert "winget install Kitware.CMake" in cmds
        assert "choco install cmake" in cmds

    @patch("jumake.infra.toolchain.platform.system", return_value="Linux")
    def test_linux_uses_distribution_package_names(self, _mock_sys: object) -> None:
        cmds = _platform_install_commands("ninja")
        assert "sudo apt install ninja-build" in cmds
        assert "sudo pacman -S ninja" in cmds

    @patch("jumake.infra.toolchain.platform.system", return_value="Darwin")
    def test_macos(self, _mock_sys: object) -> None:
        assert _platform_install_commands("ccache") == ("brew install ccache",)

    @patch("jumake.infra.toolchain.platform.system", return_value="Plan9")
    def test_unknown_os(self, _mock_sys: object) -> None:
        cmds = _platform_install_commands("git")
        assert len(cmds) == 1
        assert "git" in cmds[0]
