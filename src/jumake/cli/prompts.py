"""Interactive prompts for the CLI layer.

This module is responsible for:

* Letting the user pick a project template when ``--template`` is omitted.
* Asking for the local JUCE folder the first time a project is created.

``questionary`` is imported lazily so that non-interactive commands
work without it.  A cancelled prompt (Esc / Ctrl+C inside questionary
returns ``None``) raises :class:`~jumake.exceptions.InvalidArgumentError`
naming the flag that avoids the prompt.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jumake.core.models import ProjectTemplate
from jumake.exceptions import InvalidArgumentError, MissingDependencyError

TEMPLATE_DESCRIPTIONS: dict[ProjectTemplate, str] = {
    ProjectTemplate.GUI_APPLICATION: "Desktop application with a main window",
    ProjectTemplate.AUDIO_PLUGIN: "AU / VST3 plugin with a standalone host",
    ProjectTemplate.CONSOLE_APP: "Command-line application without a GUI",
}


def _import_questionary() -> Any:
    """Import questionary lazily for interactive selection."""
    try:
        import questionary
    except ModuleNotFoundError as exc:
        raise MissingDependencyError(
            "questionary is not installed. Install with: pip install questionary",
        ) from exc
    return questionary


# ---------------------------------------------------------------------------
# Presentation helpers (pure)
# ---------------------------------------------------------------------------

def _build_choice_label(template: ProjectTemplate) -> str:
    """Return ``"GuiApplication   Desktop application ..."``."""
    return f"{template.value:<16} {TEMPLATE_DESCRIPTIONS[template]}"


def validate_juce_dir(text: str) -> bool | str:
    """questionary validator: ``True`` or an error message."""
    path = Path(text).expanduser()
    if path.is_dir():
        return True
    return "Path does not exist or is not a directory"


# ---------------------------------------------------------------------------
# Public prompt functions
# ---------------------------------------------------------------------------

def prompt_template() -> ProjectTemplate:
    """Ask the user to choose a :class:`ProjectTemplate`.

    Raises
    ------
    InvalidArgumentError
        If the user cancels the prompt.
    """
    questionary = _import_questionary()
    choices = [
        questionary.Choice(title=_build_choice_label(template), value=template.value)
        for template in ProjectTemplate
    ]
    selected: str | None = questionary.select(
        "Select a template:",
        choices=choices,
        default=ProjectTemplate.GUI_APPLICATION.value,
        use_arrow_keys=True,
    ).ask()

    if selected is None:
        raise InvalidArgumentError(
            "No template selected.",
            hint="Pass --template GuiApplication, AudioPlugin or ConsoleApp.",
        )
    return ProjectTemplate(selected)


def prompt_juce_path() -> Path:
    """Ask the user for the local JUCE folder.

    Raises
    ------
    InvalidArgumentError
        If the user cancels the prompt.
    """
    questionary = _import_questionary()
    answer: str | None = questionary.path(
        "Enter path to your local JUCE folder:",
        only_directories=True,
        validate=validate_juce_dir,
    ).ask()

    if not answer:
        raise InvalidArgumentError(
            "No JUCE folder provided.",
            hint="Set it once with 'jumake config --juce-path DIR' or JUMAKE_JUCE_PATH.",
        )
    return Path(answer).expanduser().resolve()
