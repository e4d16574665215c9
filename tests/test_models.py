"""Tests for domain models (core/models.py)."""

from __future__ import annotations

import dataclasses
from pathlib import Path

import pytest

from jumake.core.models import (
    BUILD_DIR_NAME,
    BuildCommand,
    BuildType,
    ElementType,
    Invocation,
    NewCommand,
    ProjectContext,
    ProjectTemplate,
    ShowVersion,
)
from jumake.exceptions import InvalidArgumentError


# ---------------------------------------------------------------------------
# BuildType
# ---------------------------------------------------------------------------

class TestBuildType:
    def test_choices_use_cmake_spelling(self) -> None:
        assert BuildType.choices() == ("Debug", "Release", "RelWithDebInfo", "MinSizeRel")

    @pytest.mark.parametrize("text", ["Debug", "Release", "RelWithDebInfo", "MinSizeRel"])
    def test_parse_valid(self, text: str) -> None:
        assert BuildType.parse(text).value == text

    def test_parse_is_case_sensitive(self) -> None:
        with pytest.raises(InvalidArgumentError) as exc_info:
            BuildType.parse("debug")
        assert exc_info.value.value == "debug"
        assert "Valid options" in (exc_info.value.hint or "")

    def test_parse_rejects_last_used(self) -> None:
        with pytest.raises(InvalidArgumentError, match="Invalid build type: LastUsed"):
            BuildType.parse("LastUsed")


# ---------------------------------------------------------------------------
# Templates and elements
# ---------------------------------------------------------------------------

class TestProjectTemplate:
    def test_choices(self) -> None:
        assert ProjectTemplate.choices() == ("GuiApplication", "AudioPlugin", "ConsoleApp")


class TestElementType:
    def test_class_name_for_class(self) -> None:
        assert ElementType.CLASS.class_name("Engine") == "Engine"

    def test_class_name_for_component_has_suffix(self) -> None:
        assert ElementType.COMPONENT.class_name("Knob") == "KnobComponent"

    def test_values_are_lowercase(self) -> None:
        assert ElementType.choices() == ("class", "component")


# ---------------------------------------------------------------------------
# ProjectContext
# ---------------------------------------------------------------------------

class TestProjectContext:
    def test_derived_directories(self, tmp_path: Path) -> None:
        context = ProjectContext(name="Demo", path=tmp_path, template=ProjectTemplate.CONSOLE_APP)
        assert context.build_dir == tmp_path / BUILD_DIR_NAME
        assert context.source_dir == tmp_path / "src"

    def test_defaults_to_release(self, tmp_path: Path) -> None:
        context = ProjectContext(name="Demo", path=tmp_path, template=None)
        assert context.build_type is BuildType.RELEASE

    def test_frozen(self, tmp_path: Path) -> None:
        context = ProjectContext(name="Demo", path=tmp_path, template=None)
        with pytest.raises(dataclasses.FrozenInstanceError):
            context.name = "Other"  # type: ignore[misc]


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

class TestCommands:
    def test_new_command_defaults(self) -> None:
        command = NewCommand(project_name="Demo")
        assert command.path is None
        assert command.template is None
        assert command.init_git is True

    def test_build_command_default(self) -> None:
        assert BuildCommand().build_type is BuildType.RELEASE

    def test_commands_are_immutable(self) -> None:
        command = BuildCommand(BuildType.DEBUG)
        with pytest.raises(dataclasses.FrozenInstanceError):
            command.build_type = BuildType.RELEASE  # type: ignore[misc]

    def test_commands_compare_by_value(self) -> None:
        assert NewCommand("Demo") == NewCommand("Demo")
        assert ShowVersion() == ShowVersion()

    def test_invocation_default_verbosity(self) -> None:
        assert Invocation(command=ShowVersion()).verbosity == 0
