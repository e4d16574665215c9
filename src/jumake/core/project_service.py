"""Core project service — scaffolds new projects and adds source elements.

Templates, version control and the JUCE location are injected at
construction time, keeping this module free of any subprocess or
package-resource handling.  Every failure propagates as a
:class:`~jumake.exceptions.JuMakeError` subclass; nothing is logged and
swallowed.
"""

from __future__ import annotations

import logging
import os
import shutil
from collections.abc import Callable
from pathlib import Path

from jumake.core.cmake import insert_target_source, render_root_cmakelists
from jumake.core.gitignore import merge_gitignore
from jumake.core.models import ElementType, ProjectContext
from jumake.core.protocols import TemplateStore, VersionControl
from jumake.exceptions import (
    CMakeListsError,
    ElementExistsError,
    InvalidArgumentError,
    OperationError,
    ProjectExistsError,
    ProjectNotFoundError,
    SymlinkError,
)

logger = logging.getLogger(__name__)

INITIAL_COMMIT_MESSAGE: str = "Initial commit by JuMake"
PLACEHOLDER: str = "Template"


class ProjectService:
    """Creates projects on disk and extends them with classes/components.

    Parameters
    ----------
    templates:
        Any object satisfying the :class:`TemplateStore` protocol.
    vcs:
        Version-control backend, or ``None`` to skip repository creation.
    juce_path_provider:
        Zero-argument callable returning the local JUCE folder.  Called
        only by :meth:`create_project`, before anything is written.
    """

    def __init__(
        self,
        templates: TemplateStore,
        *,
        vcs: VersionControl | None = None,
        juce_path_provider: Callable[[], Path] | None = None,
    ) -> None:
        self._templates: TemplateStore = templates
        self._vcs: VersionControl | None = vcs
        self._juce_path_provider: Callable[[], Path] | None = juce_path_provider

    # ------------------------------------------------------------------
    # new
    # ------------------------------------------------------------------

    def create_project(self, context: ProjectContext) -> None:
        """Create the project described by *context*.

        Steps: directory, ``CMakeLists.txt``, template sources, JUCE
        modules link, then (when a VCS is configured) ``.gitignore``,
        repository and initial commit.

        Raises
        ------
        ProjectExistsError
            If ``context.path`` already exists.
        InvalidArgumentError
            If ``context.template`` is not set.
        """
        ensure_project_path_free(context.path)
        if context.template is None:
            raise InvalidArgumentError(
                "No template specified for the new project.",
                hint="Pass --template GuiApplication, AudioPlugin or ConsoleApp.",
            )
        if self._juce_path_provider is None:
            raise OperationError("No JUCE location configured for project creation.")

        juce_path = self._juce_path_provider()
        sources = self._templates.project_files(context.template)

        logger.info("Creating project '%s' at %s", context.name, context.path)
        _write(context.path / "CMakeLists.txt", render_root_cmakelists(context.name))
        for file_name, content in sources.items():
            _write(context.source_dir / file_name, content)

        link_juce(juce_path, context.path / "modules" / "JUCE")

        if self._vcs is not None:
            self._initialize_repository(context.path)

        logger.info("Project '%s' created successfully at %s", context.name, context.path)

    def _initialize_repository(self, project_path: Path) -> None:
        assert self._vcs is not None
        logger.info("Initializing Git repository at %s", project_path)
        self._vcs.init(project_path)

        gitignore = project_path / ".gitignore"
        existing = _read(gitignore) if gitignore.exists() else ""
        merged = merge_gitignore(existing)
        if merged != existing:
            _write(gitignore, merged)
            logger.info("Updated .gitignore at %s", gitignore)

        self._vcs.add_all(project_path)
        self._vcs.commit(project_path, INITIAL_COMMIT_MESSAGE)
        logger.info("Initial commit created")

    # ------------------------------------------------------------------
    # add
    # ------------------------------------------------------------------

    def add_element(
        self,
        context: ProjectContext,
        element_type: ElementType,
        element_name: str,
    ) -> tuple[Path, Path]:
        """Generate a header/source pair and register it with CMake.

        Returns
        -------
        tuple[Path, Path]
            Paths of the created header and source files.

        Raises
        ------
        ProjectNotFoundError
            If ``src/CMakeLists.txt`` does not exist.
        ElementExistsError
            If either generated file already exists.
        CMakeListsError
            If the source cannot be registered in ``src/CMakeLists.txt``.
        """
        class_name = element_type.class_name(element_name)
        src_cmakelists = context.source_dir / "CMakeLists.txt"
        if not src_cmakelists.is_file():
            raise ProjectNotFoundError(
                f"No src/CMakeLists.txt found in {context.path}",
                hint="Run this command from the root of a jumake project.",
            )

        header_path = context.source_dir / f"{class_name}.h"
        source_path = context.source_dir / f"{class_name}.cpp"
        if header_path.exists() or source_path.exists():
            raise ElementExistsError(
                f"{element_type.value} '{class_name}' already exists in the project.",
            )

        try:
            cmakelists_text = src_cmakelists.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise CMakeListsError(f"Cannot read {src_cmakelists}: {exc}") from exc

        header_template, source_template = self._templates.element_files(element_type)
        updated_cmakelists = insert_target_source(
            cmakelists_text,
            source_path.name,
        )

        _write(header_path, header_template.replace(PLACEHOLDER, class_name))
        _write(source_path, source_template.replace(PLACEHOLDER, class_name))
        _write(src_cmakelists, updated_cmakelists)
        logger.info("Registered %s in %s", source_path.name, src_cmakelists)
        return header_path, source_path


# ---------------------------------------------------------------------------
# Filesystem helpers
# ---------------------------------------------------------------------------

def ensure_project_path_free(project_path: Path) -> None:
    """Raise :class:`ProjectExistsError` if *project_path* is taken."""
    if project_path.exists():
        raise ProjectExistsError(
            f"Project directory already exists: {project_path}",
            hint="Choose another name or pass --path to create it elsewhere.",
        )


def link_juce(juce_path: Path, link_path: Path) -> None:
    """Point *link_path* at the local JUCE folder.

    An existing link to the same target is kept; anything else at
    *link_path* is replaced.

    Raises
    ------
    SymlinkError
        When the link cannot be created.
    """
    if link_path.is_symlink() or link_path.exists():
        if link_path.is_symlink() and Path(os.readlink(link_path)) == juce_path:
            logger.info("JUCE link already correct: %s -> %s", link_path, juce_path)
            return
        logger.warning("Replacing existing JUCE link/folder at %s", link_path)
        try:
            if link_path.is_dir() and not link_path.is_symlink():
                shutil.rmtree(link_path)
            else:
                link_path.unlink()
        except OSError as exc:
            raise SymlinkError(str(juce_path), str(link_path), str(exc)) from exc

    try:
        link_path.parent.mkdir(parents=True, exist_ok=True)
        os.symlink(juce_path, link_path, target_is_directory=True)
    except OSError as exc:
        raise SymlinkError(
            str(juce_path),
            str(link_path),
            str(exc),
            hint="On Windows, enable Developer Mode to allow symlink creation.",
        ) from exc
    logger.info("Linked JUCE to %s", link_path)


def _read(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise OperationError(f"Failed to read file: {path}: {exc}") from exc


def _write(path: Path, content: str) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise OperationError(f"Failed to create file: {path}: {exc}") from exc
    logger.info("Created file: %s", path)
