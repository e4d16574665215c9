"""Tests for the interactive prompts (cli/prompts.py).

``questionary`` is mocked to avoid terminal interaction; the tests check
the mapping between the user's answer and the returned value.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock, patch

import pytest

from jumake.cli.prompts import (
    TEMPLATE_DESCRIPTIONS,
    _build_choice_label,
    prompt_juce_path,
    prompt_template,
    validate_juce_dir,
)
from jumake.core.models import ProjectTemplate
from jumake.exceptions import InvalidArgumentError, MissingDependencyError


def _questionary_answering(answer: Any) -> MagicMock:
    fake = MagicMock()
    fake.select.return_value.ask.return_value = answer
    fake.path.return_value.ask.return_value = answer
    return fake


# ---------------------------------------------------------------------------
# Pure helpers
# ---------------------------------------------------------------------------

class TestHelpers:
    def test_every_template_is_described(self) -> None:
        assert set(TEMPLATE_DESCRIPTIONS) == set(ProjectTemplate)

    def test_choice_label_starts_with_template_name(self) -> None:
        label = _build_choice_label(ProjectTemplate.AUDIO_PLUGIN)
        assert label.startswith("AudioPlugin")
        assert TEMPLATE_DESCRIPTIONS[ProjectTemplate.AUDIO_PLUGIN] in label

    def test_validate_existing_directory(self, tmp_path: Path) -> None:
        assert validate_juce_dir(str(tmp_path)) is True

    def test_validate_missing_directory(self, tmp_path: Path) -> None:
        assert isinstance(validate_juce_dir(str(tmp_path / "missing")), str)

    def test_validate_file_is_rejected(self, tmp_path: Path) -> None:
        file_path = tmp_path / "file.txt"
        file_path.write_text("", encoding="utf-8")
        assert validate_juce_dir(str(file_path)) is not True


# ---------------------------------------------------------------------------
# prompt_template
# ---------------------------------------------------------------------------

class TestPromptTemplate:
    def test_returns_selected_template(self) -> None:
        fake = _questionary_answering("ConsoleApp")
        with patch("jumake.cli.prompts._import_questionary", return_value=fake):
            assert prompt_template() is ProjectTemplate.CONSOLE_APP

        kwargs = fake.select.call_args.kwargs
        assert kwargs["default"] == "GuiApplication"
        assert len(kwargs["choices"]) == len(ProjectTemplate)

    def test_cancel_raises(self) -> None:
        with patch("jumake.cli.prompts._import_questionary", return_value=_questionary_answering(None)):
            with pytest.raises(InvalidArgumentError, match="No template selected") as exc_info:
                prompt_template()
        assert "--template" in (exc_info.value.hint or "")

    def test_missing_questionary(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setitem(sys.modules, "questionary", None)
        with pytest.raises(MissingDependencyError, match="questionary is not installed"):
            prompt_template()


# ---------------------------------------------------------------------------
# prompt_juce_path
# ---------------------------------------------------------------------------

class TestPromptJucePath:
    def test_returns_resolved_path(self, juce_dir: Path) -> None:
        fake = _questionary_answering(str(juce_dir))
        with patch("jumake.cli.prompts._import_questionary", return_value=fake):
            assert prompt_juce_path() == juce_dir.resolve()

        kwargs = fake.path.call_args.kwargs
        assert kwargs["only_directories"] is True
        assert kwargs["validate"] is validate_juce_dir

    @pytest.mark.parametrize("answer", [None, ""])
    def test_cancel_raises(self, answer: str | None) -> None:
        with patch("jumake.cli.prompts._import_questionary", return_value=_questionary_answering(answer)):
            with pytest.raises(InvalidArgumentError, match="No JUCE folder provided"):
                prompt_juce_path()
