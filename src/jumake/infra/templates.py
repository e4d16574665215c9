"""Bundled template loading via :mod:`importlib.resources`.

Templates live under ``jumake/templates/`` as ``*.template`` files and
ship as package data.  Element templates use the literal word
``Template`` as the class-name placeholder.
"""

from __future__ import annotations

from importlib import resources
from importlib.resources.abc import Traversable

from jumake.core.models import ElementType, ProjectTemplate
from jumake.exceptions import TemplateError

TEMPLATE_SUFFIX: str = ".template"

PROJECT_TEMPLATE_FILES: dict[ProjectTemplate, tuple[str, ...]] = {
    ProjectTemplate.GUI_APPLICATION: (
        "Main.cpp",
        "MainComponent.cpp",
        "MainComponent.h",
        "CMakeLists.txt",
    ),
    ProjectTemplate.AUDIO_PLUGIN: (
        "PluginProcessor.cpp",
        "PluginProcessor.h",
        "PluginEditor.cpp",
        "PluginEditor.h",
        "CMakeLists.txt",
    ),
    ProjectTemplate.CONSOLE_APP: (
        "Main.cpp",
        "CMakeLists.txt",
    ),
}

ELEMENT_TEMPLATE_FILES: dict[ElementType, tuple[str, str]] = {
    ElementType.CLASS: ("Class.h", "Class.cpp"),
    ElementType.COMPONENT: ("Component.h", "Component.cpp"),
}

ELEMENTS_DIR: str = "Elements"


class PackageTemplates:
    """Concrete :class:`TemplateStore` reading the bundled package data.

    Parameters
    ----------
    root:
        Directory holding the template folders; defaults to the
        ``templates`` directory inside the installed ``jumake`` package.
    """

    def __init__(self, root: Traversable | None = None) -> None:
        self._root: Traversable = root if root is not None else resources.files("jumake") / "templates"

    def project_files(self, template: ProjectTemplate) -> dict[str, str]:
        folder = self._root / template.value
        return {
            name: self._read(folder / f"{name}{TEMPLATE_SUFFIX}")
            for name in PROJECT_TEMPLATE_FILES[template]
        }

    def element_files(self, element_type: ElementType) -> tuple[str, str]:
        header_name, source_name = ELEMENT_TEMPLATE_FILES[element_type]
        folder = self._root / ELEMENTS_DIR
        return (
            self._read(folder / f"{header_name}{TEMPLATE_SUFFIX}"),
            self._read(folder / f"{source_name}{TEMPLATE_SUFFIX}"),
        )

    @staticmethod
    def _read(resource: Traversable) -> str:
        try:
            return resource.read_text(encoding="utf-8")
        except OSError as exc:
            raise TemplateError(
                f"Template not found: {resource.name}",
                hint="The jumake installation may be incomplete; try reinstalling it.",
            ) from exc
