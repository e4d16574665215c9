"""Smoke tests — verify scaffold wiring.

These tests prove that:
* The CLI entry point is importable and callable.
* The exception hierarchy is correctly structured.
* Version is accessible.
* Exit codes are defined and mapped from errors.
"""

from __future__ import annotations

import pytest

from jumake import __version__
from jumake.cli import exit_codes
from jumake.exceptions import (
    BuildError,
    CMakeBuildError,
    CMakeConfigureError,
    CMakeListsError,
    CompileCommandsMissingError,
    ConfigError,
    ElementExistsError,
    ExecutableNotFoundError,
    GitError,
    InvalidArgumentError,
    JuMakeError,
    MissingDependencyError,
    OperationError,
    ProjectError,
    ProjectExistsError,
    ProjectNotFoundError,
    SymlinkError,
    TemplateError,
    ToolNotFoundError,
)


# ---------------------------------------------------------------------------
# Version
# ---------------------------------------------------------------------------

class TestVersion:
    def test_version_is_string(self) -> None:
        assert isinstance(__version__, str)

    def test_version_is_semver_like(self) -> None:
        parts = __version__.split(".")
        assert len(parts) == 3
        assert all(part.isdigit() for part in parts)


# ---------------------------------------------------------------------------
# Exception hierarchy
# ---------------------------------------------------------------------------

class TestExceptions:
    @pytest.mark.parametrize(
        "exc_class",
        [
            ConfigError,
            ProjectError,
            TemplateError,
            GitError,
            SymlinkError,
            BuildError,
            ToolNotFoundError,
            MissingDependencyError,
        ],
    )
    def test_operation_errors_inherit_from_operation_error(
        self, exc_class: type[JuMakeError]
    ) -> None:
        assert issubclass(exc_class, OperationError)
        assert issubclass(exc_class, JuMakeError)

    @pytest.mark.parametrize(
        "exc_class",
        [ProjectExistsError, ProjectNotFoundError, ElementExistsError, CMakeListsError],
    )
    def test_project_errors(self, exc_class: type[JuMakeError]) -> None:
        assert issubclass(exc_class, ProjectError)

    @pytest.mark.parametrize(
        "exc_class",
        [CMakeConfigureError, CMakeBuildError, CompileCommandsMissingError, ExecutableNotFoundError],
    )
    def test_build_errors(self, exc_class: type[JuMakeError]) -> None:
        assert issubclass(exc_class, BuildError)

    def test_invalid_argument_is_not_an_operation_error(self) -> None:
        assert issubclass(InvalidArgumentError, JuMakeError)
        assert not issubclass(InvalidArgumentError, OperationError)

    def test_base_inherits_from_exception(self) -> None:
        assert issubclass(JuMakeError, Exception)

    def test_hint_is_stored(self) -> None:
        err = JuMakeError("boom", hint="try this")
        assert str(err) == "boom"
        assert err.hint == "try this"

    def test_hint_defaults_to_none(self) -> None:
        err = JuMakeError("boom")
        assert err.hint is None

    def test_invalid_argument_keeps_offending_value(self) -> None:
        err = InvalidArgumentError("unrecognized arguments: --bogus", value="--bogus")
        assert err.value == "--bogus"

    def test_symlink_error_message(self) -> None:
        err = SymlinkError("/opt/JUCE", "/p/modules/JUCE", "permission denied")
        assert str(err) == "Symlink error from /opt/JUCE to /p/modules/JUCE: permission denied"


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------

class TestExitCodes:
    def test_success_is_zero(self) -> None:
        assert exit_codes.SUCCESS == 0

    def test_general_error_is_one(self) -> None:
        assert exit_codes.GENERAL_ERROR == 1

    def test_usage_error_is_two(self) -> None:
        assert exit_codes.USAGE_ERROR == 2

    def test_unexpected_error_is_three(self) -> None:
        assert exit_codes.UNEXPECTED_ERROR == 3

    def test_keyboard_interrupt_is_130(self) -> None:
        assert exit_codes.KEYBOARD_INTERRUPT == 130

    def test_invalid_argument_maps_to_usage_error(self) -> None:
        assert exit_codes.for_error(InvalidArgumentError("bad")) == exit_codes.USAGE_ERROR

    def test_operation_error_maps_to_general_error(self) -> None:
        assert exit_codes.for_error(CMakeBuildError("failed")) == exit_codes.GENERAL_ERROR
