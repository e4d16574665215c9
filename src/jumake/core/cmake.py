"""Pure ``CMakeLists.txt`` rendering and editing.

Every function in this module is a **pure** text transformation — no
I/O, no side effects, fully deterministic.  Callers read and write the
files; these helpers only decide what the text should be.
"""

from __future__ import annotations

import re

from jumake.core.models import ProjectTemplate
from jumake.exceptions import CMakeListsError, ProjectNotFoundError

_TARGET_SOURCES_PREFIX = "target_sources(${PROJECT_NAME}"
_TEMPLATE_MARKER = re.compile(r'set\(JUMAKE_TEMPLATE\s+"([^"]+)"\)')
_CACHED_BUILD_TYPE = re.compile(r"^CMAKE_BUILD_TYPE:[A-Z]+=(.*)$", re.MULTILINE)
_INDENT_STEP = 4


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

def render_root_cmakelists(project_name: str) -> str:
    """Return the top-level ``CMakeLists.txt`` for a new project."""
    return "\n".join(
        (
            "cmake_minimum_required(VERSION 3.24)",
            f"project({project_name} VERSION 0.0.1)",
            "add_subdirectory(modules/JUCE)",
            "add_subdirectory(src)",
            "",
        )
    )


# ---------------------------------------------------------------------------
# Editing
# ---------------------------------------------------------------------------

def insert_target_source(text: str, cpp_file_name: str) -> str:
    """Register *cpp_file_name* in the project's ``target_sources`` block.

    The file is inserted on the line after the first ``PRIVATE`` keyword
    that follows ``target_sources(${PROJECT_NAME}``, indented one level
    deeper than that keyword.

    Raises
    ------
    CMakeListsError
        If no ``PRIVATE`` section follows ``target_sources``, or the file
        is already listed there.
    """
    lines = text.splitlines()
    found_target_sources = False

    for index, line in enumerate(lines):
        stripped = line.lstrip()
        if stripped.startswith(_TARGET_SOURCES_PREFIX):
            found_target_sources = True
        if found_target_sources and stripped.startswith("PRIVATE"):
            if _lists_source(lines[index + 1:], cpp_file_name):
                raise CMakeListsError(
                    f"{cpp_file_name} is already listed in CMakeLists.txt.",
                )
            indentation = len(line) - len(stripped) + _INDENT_STEP
            lines.insert(index + 1, " " * indentation + cpp_file_name)
            trailing = "\n" if text.endswith("\n") else ""
            return "\n".join(lines) + trailing

    raise CMakeListsError(
        "Could not find 'PRIVATE' after 'target_sources' in CMakeLists.txt",
        hint="Add a 'target_sources(${PROJECT_NAME} PRIVATE ...)' block to src/CMakeLists.txt.",
    )


def _lists_source(lines: list[str], cpp_file_name: str) -> bool:
    """Return whether *cpp_file_name* appears before the block closes."""
    for line in lines:
        stripped = line.strip()
        if stripped.rstrip(")") == cpp_file_name:
            return True
        if stripped.endswith(")"):
            return False
    return False


# ---------------------------------------------------------------------------
# Inspection
# ---------------------------------------------------------------------------

def extract_project_name(text: str) -> str:
    """Return the first word inside ``project(...)``.

    Raises
    ------
    ProjectNotFoundError
        If no ``project(`` call with a name is present.
    """
    for line in text.splitlines():
        stripped = line.lstrip()
        if not stripped.startswith("project("):
            continue
        inner = stripped[len("project("):]
        end = inner.find(")")
        if end == -1:
            continue
        words = inner[:end].split()
        if words:
            return words[0]
    raise ProjectNotFoundError("Project name not found in CMakeLists.txt")


def detect_template(text: str) -> ProjectTemplate | None:
    """Return the template recorded by ``set(JUMAKE_TEMPLATE "...")``.

    ``None`` when the marker is missing or names an unknown template.
    """
    match = _TEMPLATE_MARKER.search(text)
    if match is None:
        return None
    try:
        return ProjectTemplate(match.group(1))
    except ValueError:
        return None


def cached_build_type(cache_text: str) -> str | None:
    """Return ``CMAKE_BUILD_TYPE`` from a ``CMakeCache.txt``.

    ``None`` when the entry is missing or empty, as with multi-config
    generators (Visual Studio, Xcode).
    """
    match = _CACHED_BUILD_TYPE.search(cache_text)
    if match is None:
        return None
    return match.group(1).strip() or None
