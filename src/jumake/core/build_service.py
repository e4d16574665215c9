"""Core build service — configures, builds and runs a project with CMake.

This service delegates every external program (``cmake``, the built
executable, ``open`` on macOS) to a
:class:`~jumake.core.protocols.ProcessRunner` injected at construction
time.  It is responsible for:

* Building the CMake command lines (pure, see the static methods).
* Skipping the configure step when a ``CMakeCache.txt`` already exists
  for the requested build type.
* Copying ``compile_commands.json`` to the project root for tooling.
* Locating the built executable for ``run``.
"""

from __future__ import annotations

import logging
import os
import platform
import shutil
from collections.abc import Iterable
from pathlib import Path

from jumake.core.cmake import cached_build_type
from jumake.core.models import BuildType, ProjectContext, ProjectTemplate, Toolchain
from jumake.core.protocols import ProcessRunner
from jumake.exceptions import (
    CMakeBuildError,
    CMakeConfigureError,
    CompileCommandsMissingError,
    ExecutableNotFoundError,
    OperationError,
)

logger = logging.getLogger(__name__)

COMPILE_COMMANDS: str = "compile_commands.json"
CMAKE_CACHE: str = "CMakeCache.txt"
MIN_PARALLEL_JOBS: int = 2


class BuildService:
    """Drives the configure → build → run pipeline for one project.

    Parameters
    ----------
    runner:
        Any object satisfying the :class:`ProcessRunner` protocol.
    toolchain:
        The resolved cmake executable, generator and compiler launcher.
    system:
        ``platform.system()`` value; injectable for tests.
    cpu_count:
        Logical CPU count used to size ``--parallel``; defaults to
        :func:`os.cpu_count`.
    """

    def __init__(
        self,
        runner: ProcessRunner,
        toolchain: Toolchain,
        *,
        system: str | None = None,
        cpu_count: int | None = None,
    ) -> None:
        self._runner: ProcessRunner = runner
        self._toolchain: Toolchain = toolchain
        self._system: str = system if system is not None else platform.system()
        self._cpu_count: int | None = cpu_count if cpu_count is not None else os.cpu_count()

    # ------------------------------------------------------------------
    # Command-line construction (pure)
    # ------------------------------------------------------------------

    @staticmethod
    def configure_args(build_type: BuildType, toolchain: Toolchain) -> list[str]:
        """Return the CMake configure command, run from the build directory."""
        args = [toolchain.cmake, ".."]
        if toolchain.generator is not None:
            args.append(f"-G{toolchain.generator}")
        args.append(f"-DCMAKE_BUILD_TYPE={build_type.value}")
        args.append("-DCMAKE_EXPORT_COMPILE_COMMANDS=ON")
        if toolchain.compiler_launcher is not None:
            args.append(f"-DCMAKE_C_COMPILER_LAUNCHER={toolchain.compiler_launcher}")
            args.append(f"-DCMAKE_CXX_COMPILER_LAUNCHER={toolchain.compiler_launcher}")
        return args

    @staticmethod
    def build_args(build_type: BuildType, toolchain: Toolchain, jobs: int) -> list[str]:
        """Return the ``cmake --build`` command, run from the build directory."""
        return [
            toolchain.cmake,
            "--build",
            ".",
            "--config",
            build_type.value,
            "--parallel",
            str(jobs),
        ]

    @staticmethod
    def parallel_jobs(cpu_count: int | None) -> int:
        """Leave two cores free, but never use fewer than two jobs."""
        if cpu_count is None:
            return MIN_PARALLEL_JOBS
        return max(cpu_count - 2, MIN_PARALLEL_JOBS)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def build(self, context: ProjectContext) -> None:
        """Configure (when needed) and build *context*.

        Raises
        ------
        CMakeConfigureError
            When the configure step exits non-zero.
        CMakeBuildError
            When the build step exits non-zero.
        CompileCommandsMissingError
            When CMake did not export ``compile_commands.json`` (non-Windows).
        """
        build_dir = context.build_dir
        try:
            build_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise OperationError(f"Cannot create build directory {build_dir}: {exc}") from exc

        if self._needs_configure(build_dir, context.build_type):
            logger.info("Running CMake configuration in %s", build_dir)
            if self._toolchain.compiler_launcher is None:
                logger.warning("ccache not found, building without compiler cache")
            else:
                logger.info("Compiler caching enabled via %s", self._toolchain.compiler_launcher)
            code = self._runner.run(
                self.configure_args(context.build_type, self._toolchain),
                cwd=build_dir,
            )
            if code != 0:
                raise CMakeConfigureError(
                    "CMake configuration failed",
                    hint=f"Inspect the CMake output above; delete {build_dir} to start clean.",
                )
        else:
            logger.info("CMake already configured, skipping configure step")

        jobs = self.parallel_jobs(self._cpu_count)
        code = self._runner.run(
            self.build_args(context.build_type, self._toolchain, jobs),
            cwd=build_dir,
        )
        if code != 0:
            raise CMakeBuildError("CMake build failed")

        if self._system != "Windows":
            self._export_compile_commands(context)

    def _needs_configure(self, build_dir: Path, build_type: BuildType) -> bool:
        cache = build_dir / CMAKE_CACHE
        try:
            cache_text = cache.read_text(encoding="utf-8", errors="replace")
        except FileNotFoundError:
            return True
        except OSError as exc:
            raise OperationError(f"Cannot read {cache}: {exc}") from exc

        cached = cached_build_type(cache_text)
        if cached is not None and cached != build_type.value:
            logger.info("Build type changed from %s to %s, reconfiguring", cached, build_type.value)
            return True
        return False

    def run(self, context: ProjectContext) -> int:
        """Build *context*, then launch its executable.

        Returns
        -------
        int
            The exit status of the launched program.
        """
        self.build(context)
        executable = self.locate_executable(context)
        logger.info("Executable path: %s", executable)

        if self._system == "Darwin" and context.template is not ProjectTemplate.CONSOLE_APP:
            args = ["open", str(executable)]
        else:
            args = [str(executable)]
        return self._runner.run(args, cwd=context.build_dir)

    def locate_executable(self, context: ProjectContext) -> Path:
        """Return the built executable for *context*.

        Raises
        ------
        ExecutableNotFoundError
            When no candidate matches the project name and build type.
        """
        candidates = self._find_candidates(context)
        selected = select_executable(
            candidates,
            build_type=context.build_type,
            template=context.template,
            system=self._system,
        )
        if selected is None:
            raise ExecutableNotFoundError(
                f"Executable not found for build type: {context.build_type.value}",
                hint=f"Looked for '{context.name}' under {context.build_dir}.",
            )
        return selected

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _export_compile_commands(self, context: ProjectContext) -> None:
        source = context.build_dir / COMPILE_COMMANDS
        if not source.exists():
            raise CompileCommandsMissingError(f"{COMPILE_COMMANDS} not found")
        try:
            shutil.copyfile(source, context.path / COMPILE_COMMANDS)
        except OSError as exc:
            raise OperationError(f"Cannot copy {COMPILE_COMMANDS}: {exc}") from exc
        logger.info("Copied %s to the project root", COMPILE_COMMANDS)

    def _find_candidates(self, context: ProjectContext) -> list[Path]:
        windows = self._system == "Windows"
        file_name = f"{context.name}.exe" if windows else context.name
        if not context.build_dir.is_dir():
            return []
        return sorted(
            path
            for path in context.build_dir.rglob(file_name)
            if path.is_file() and (windows or os.access(path, os.X_OK))
        )


# ---------------------------------------------------------------------------
# Executable selection (pure)
# ---------------------------------------------------------------------------

def select_executable(
    candidates: Iterable[Path],
    *,
    build_type: BuildType,
    template: ProjectTemplate | None,
    system: str,
) -> Path | None:
    """Pick the executable to launch from *candidates*.

    Rules
    -----
    * The path must contain the build type (JUCE artefact folders are
      named after the configuration).
    * On macOS, audio plugins launch their ``Standalone`` artefact.
    * On macOS, paths inside an app bundle are truncated to the ``.app``.
    """
    for path in candidates:
        text = str(path)
        if build_type.value not in text:
            continue
        if system == "Darwin" and template is ProjectTemplate.AUDIO_PLUGIN and "Standalone" not in text:
            continue
        if system == "Darwin":
            return _app_bundle(path)
        return path
    return None


def _app_bundle(path: Path) -> Path:
    """Return the enclosing ``.app`` bundle of *path*, or *path* itself."""
    for parent in (path, *path.parents):
        if parent.suffix == ".app":
            return parent
    return path
