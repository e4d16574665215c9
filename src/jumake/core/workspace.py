"""Project discovery and the per-project ``.jumake`` state file.

A jumake project is a directory with a top-level ``CMakeLists.txt``
(declaring the project name) and a ``src/CMakeLists.txt`` (carrying the
``JUMAKE_TEMPLATE`` marker).  The ``.jumake`` file records the build
type of the last successful ``jumake build``.
"""

from __future__ import annotations

import logging
from pathlib import Path

from jumake.core.cmake import detect_template, extract_project_name
from jumake.core.models import BuildType, ProjectContext, ProjectTemplate
from jumake.exceptions import ConfigError, ProjectNotFoundError

logger = logging.getLogger(__name__)

STATE_FILE_NAME: str = ".jumake"
DEFAULT_TEMPLATE: ProjectTemplate = ProjectTemplate.GUI_APPLICATION


def load_project_context(
    project_path: Path,
    build_type: BuildType = BuildType.RELEASE,
) -> ProjectContext:
    """Describe the project rooted at *project_path*.

    Raises
    ------
    ProjectNotFoundError
        If *project_path* has no readable ``CMakeLists.txt`` or it does not
        declare a project name.
    """
    cmakelists = project_path / "CMakeLists.txt"
    try:
        root_text = cmakelists.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ProjectNotFoundError(
            f"No CMakeLists.txt found in {project_path}",
            hint="Run this command from the root of a jumake project.",
        ) from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ProjectNotFoundError(f"Cannot read {cmakelists}: {exc}") from exc

    return ProjectContext(
        name=extract_project_name(root_text),
        path=project_path,
        template=determine_template(project_path),
        build_type=build_type,
    )


def determine_template(project_path: Path) -> ProjectTemplate:
    """Return the template recorded in ``src/CMakeLists.txt``.

    Falls back to :data:`DEFAULT_TEMPLATE` when the file or marker is
    missing.
    """
    src_cmakelists = project_path / "src" / "CMakeLists.txt"
    try:
        text = src_cmakelists.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        logger.debug("Cannot read %s, assuming %s", src_cmakelists, DEFAULT_TEMPLATE.value)
        return DEFAULT_TEMPLATE
    template = detect_template(text)
    if template is None:
        logger.debug("No JUMAKE_TEMPLATE marker in %s", src_cmakelists)
        return DEFAULT_TEMPLATE
    return template


# ---------------------------------------------------------------------------
# .jumake state
# ---------------------------------------------------------------------------

def save_last_build_type(context: ProjectContext) -> None:
    """Record ``context.build_type`` as the last used build type."""
    state_file = context.path / STATE_FILE_NAME
    try:
        state_file.write_text(context.build_type.value, encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot write {state_file}: {exc}") from exc
    logger.debug("Saved build type %s to %s", context.build_type.value, state_file)


def read_last_build_type(project_path: Path) -> BuildType | None:
    """Return the build type stored in ``.jumake``, or ``None`` if absent.

    Raises
    ------
    ConfigError
        If the file exists but holds something other than a build type.
    """
    state_file = project_path / STATE_FILE_NAME
    try:
        raw = state_file.read_text(encoding="utf-8").strip()
    except FileNotFoundError:
        return None
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Cannot read {state_file}: {exc}") from exc

    try:
        return BuildType(raw)
    except ValueError as exc:
        raise ConfigError(
            f"Invalid build type recorded in {state_file}: {raw!r}",
            hint="Run 'jumake build -t <type>' to record a valid build type.",
        ) from exc


def resolve_run_build_type(
    requested: BuildType | None,
    last_used: BuildType | None,
) -> BuildType:
    """Pick the build type for ``run``: explicit, else last used, else Release."""
    if requested is not None:
        return requested
    if last_used is not None:
        return last_used
    return BuildType.RELEASE
