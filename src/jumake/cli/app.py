"""CLI application entry point and command dispatch for jumake.

This module is the **sole error boundary** for the entire application.
:func:`main` renders :class:`~jumake.exceptions.JuMakeError` failures and
maps them to exit codes; :func:`cli` additionally catches
``KeyboardInterrupt`` and any unexpected ``Exception``.

Architecture notes
------------------
* No business logic lives here — all work is delegated to the core/service
  and infrastructure layers.
* Parsing happens in :mod:`jumake.cli.parser` and has no side effects;
  every side effect starts in :func:`dispatch`.
* Configuration is handed to :func:`dispatch` as an explicit
  :class:`~jumake.infra.config.Settings` value.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import assert_never

from jumake.cli import exit_codes
from jumake.cli.console import configure_logging, console, err_console, escape
from jumake.cli.parser import parse_invocation
from jumake.core.build_service import BuildService
from jumake.core.models import (
    AddCommand,
    BuildCommand,
    Command,
    ConfigCommand,
    DoctorCommand,
    NewCommand,
    ProjectContext,
    RunCommand,
    ShowHelp,
    ShowVersion,
)
from jumake.core.project_service import ProjectService, ensure_project_path_free
from jumake.core.workspace import (
    load_project_context,
    read_last_build_type,
    resolve_run_build_type,
    save_last_build_type,
)
from jumake.exceptions import InvalidArgumentError, JuMakeError
from jumake.infra.config import (
    JuMakeConfig,
    Settings,
    load_config,
    resolve_juce_path,
    save_config,
)
from jumake.infra.git_client import GitClient
from jumake.infra.process_runner import SubprocessRunner
from jumake.infra.templates import PackageTemplates
from jumake.infra.toolchain import detect_toolchain, require_tool
from jumake.version import __version__

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------

def _handle_new(command: NewCommand, settings: Settings) -> int:
    """Create a project directory from a template.

    Flow:
    1. Refuse an existing target directory and make sure git is
       available, before any prompt is shown.
    2. Resolve the template (prompting if needed).
    3. Delegate to :class:`ProjectService`, which asks for the JUCE
       folder through *settings* when it is not configured yet.
    """
    from jumake.cli.prompts import prompt_juce_path, prompt_template

    parent = command.path if command.path is not None else Path.cwd()
    project_path = (parent / command.project_name).resolve()
    ensure_project_path_free(project_path)

    vcs: GitClient | None = None
    if command.init_git:
        vcs = GitClient(str(require_tool("git")))

    template = command.template if command.template is not None else prompt_template()

    service = ProjectService(
        PackageTemplates(),
        vcs=vcs,
        juce_path_provider=lambda: resolve_juce_path(settings, prompt_juce_path),
    )
    service.create_project(
        ProjectContext(name=command.project_name, path=project_path, template=template)
    )

    console.print(
        f"[bold green]Project created:[/bold green] {escape(str(project_path))} "
        f"([cyan]{template.value}[/cyan])"
    )
    return exit_codes.SUCCESS


def _handle_add(command: AddCommand) -> int:
    """Add a class or component to the project in the current directory."""
    context = load_project_context(Path.cwd())
    header, source = ProjectService(PackageTemplates()).add_element(
        context,
        command.element_type,
        command.element_name,
    )
    console.print(
        f"[bold green]Added {command.element_type.value}:[/bold green] "
        f"{escape(header.name)}, {escape(source.name)}"
    )
    return exit_codes.SUCCESS


def _handle_build(command: BuildCommand) -> int:
    """Configure and build, then remember the build type for ``run``."""
    context = load_project_context(Path.cwd(), command.build_type)
    BuildService(SubprocessRunner(), detect_toolchain()).build(context)
    save_last_build_type(context)
    console.print(f"[bold green]Build succeeded:[/bold green] {context.build_type.value}")
    return exit_codes.SUCCESS


def _handle_run(command: RunCommand) -> int:
    """Build with the requested (or last used) type and launch the program."""
    project_path = Path.cwd()
    last_used = read_last_build_type(project_path) if command.build_type is None else None
    build_type = resolve_run_build_type(command.build_type, last_used)
    context = load_project_context(project_path, build_type)

    status = BuildService(SubprocessRunner(), detect_toolchain()).run(context)
    if status != 0:
        err_console.print(f"[yellow]Warning:[/yellow] {context.name} exited with status {status}")
    else:
        console.print("[bold green]Run completed.[/bold green]")
    return exit_codes.SUCCESS


def _handle_doctor(settings: Settings) -> int:
    from jumake.cli.doctor import run_doctor

    return run_doctor(settings)


def _handle_config(command: ConfigCommand, settings: Settings) -> int:
    """Store a new JUCE folder, or show the current configuration."""
    if command.juce_path is not None:
        juce_path = command.juce_path.expanduser().resolve()
        if not juce_path.is_dir():
            raise InvalidArgumentError(
                f"Local JUCE folder does not exist: {juce_path}",
                value=str(command.juce_path),
            )
        save_config(settings.config_file, JuMakeConfig(juce_path=juce_path))
        console.print(f"[bold green]JUCE folder saved:[/bold green] {escape(str(juce_path))}")
        return exit_codes.SUCCESS

    config = load_config(settings.config_file)
    console.print(f"[bold]Config file:[/bold] {escape(str(settings.config_file))}")
    stored = str(config.juce_path) if config.juce_path is not None else "not configured"
    console.print(f"[bold]JUCE folder:[/bold] {escape(stored)}")
    if settings.juce_path_override is not None:
        console.print(
            f"[dim]Overridden by the environment: {escape(str(settings.juce_path_override))}[/dim]"
        )
    return exit_codes.SUCCESS


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------

def dispatch(command: Command, settings: Settings) -> int:
    """Run the single operation for *command* and return its exit code."""
    match command:
        case ShowHelp(text=text):
            console.print(text, markup=False, highlight=False, soft_wrap=True)
            return exit_codes.SUCCESS
        case ShowVersion():
            console.print(f"jumake {__version__}", markup=False, highlight=False)
            return exit_codes.SUCCESS
        case NewCommand():
            return _handle_new(command, settings)
        case AddCommand():
            return _handle_add(command)
        case BuildCommand():
            return _handle_build(command)
        case RunCommand():
            return _handle_run(command)
        case DoctorCommand():
            return _handle_doctor(settings)
        case ConfigCommand():
            return _handle_config(command, settings)
        case _:
            assert_never(command)


def _render_error(exc: JuMakeError) -> None:
    err_console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
    if exc.hint:
        err_console.print(f"[yellow]Hint:[/yellow] {escape(exc.hint)}")


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: Sequence[str] | None = None, settings: Settings | None = None) -> int:
    """Run the jumake CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.
    settings:
        Configuration to dispatch with; read from the environment when
        omitted.

    Returns
    -------
    int
        OS process exit code.
    """
    try:
        invocation = parse_invocation(sys.argv[1:] if argv is None else argv)
        configure_logging(invocation.verbosity)
        if settings is None:
            settings = Settings.from_environment()
        logger.debug("Dispatching %s", invocation.command)
        return dispatch(invocation.command, settings)
    except JuMakeError as exc:
        _render_error(exc)
        return exit_codes.for_error(exc)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
    except KeyboardInterrupt:
        err_console.print("\n[yellow]Aborted by user.[/yellow]")
        code = exit_codes.KEYBOARD_INTERRUPT
    except Exception as exc:  # noqa: BLE001
        err_console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {escape(str(exc))}"
        )
        code = exit_codes.UNEXPECTED_ERROR
    sys.exit(code)
