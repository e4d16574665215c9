"""Tests for the bundled templates (infra/templates.py).

These read the real package data, so they also guard against a template
being renamed or dropped from the distribution.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from jumake.core.cmake import detect_template, insert_target_source
from jumake.core.models import ElementType, ProjectTemplate
from jumake.exceptions import TemplateError
from jumake.infra.templates import PROJECT_TEMPLATE_FILES, PackageTemplates


class TestProjectFiles:
    @pytest.mark.parametrize("template", list(ProjectTemplate))
    def test_all_files_present(self, template: ProjectTemplate) -> None:
        files = PackageTemplates().project_files(template)
        assert set(files) == set(PROJECT_TEMPLATE_FILES[template])
        assert all(content.strip() for content in files.values())

    @pytest.mark.parametrize("template", list(ProjectTemplate))
    def test_cmakelists_records_template(self, template: ProjectTemplate) -> None:
        cmakelists = PackageTemplates().project_files(template)["CMakeLists.txt"]
        assert detect_template(cmakelists) is template

    @pytest.mark.parametrize("template", list(ProjectTemplate))
    def test_cmakelists_accepts_new_sources(self, template: ProjectTemplate) -> None:
        cmakelists = PackageTemplates().project_files(template)["CMakeLists.txt"]
        assert "Engine.cpp" in insert_target_source(cmakelists, "Engine.cpp")


class TestElementFiles:
    @pytest.mark.parametrize("element_type", list(ElementType))
    def test_placeholder_present(self, element_type: ElementType) -> None:
        header, source = PackageTemplates().element_files(element_type)
        assert "class Template" in header
        assert '#include "Template.h"' in source

    def test_component_derives_from_juce_component(self) -> None:
        header, _ = PackageTemplates().element_files(ElementType.COMPONENT)
        assert "juce::Component" in header


class TestMissingTemplates:
    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(TemplateError, match="Template not found: Main.cpp.template"):
            PackageTemplates(tmp_path).project_files(ProjectTemplate.CONSOLE_APP)
