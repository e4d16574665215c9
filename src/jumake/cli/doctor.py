"""``jumake doctor`` — environment diagnostics command.

Gathers system information and renders a Rich table summarising
whether the machine can create, build and run JUCE projects.

This module lives in the CLI layer — it may import from ``infra``
and ``core``, and it renders via Rich.  No business logic resides
here; it purely collects and displays diagnostic data.
"""

from __future__ import annotations

import platform
import sys

from jumake.cli import exit_codes
from jumake.cli.console import console
from jumake.exceptions import ConfigError
from jumake.infra.config import JUCE_PATH_ENV, Settings, load_config
from jumake.infra.toolchain import ToolStatus, detect_tool
from jumake.version import __version__

MIN_PYTHON: tuple[int, int] = (3, 11)

_OK = "[green]OK[/green]"
_WARN = "[yellow]WARN[/yellow]"
_FAIL = "[red]FAIL[/red]"

Check = tuple[str, str, str]


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _jumake_version_check() -> Check:
    return "jumake", __version__, _OK


def _python_version_check() -> Check:
    """Return (label, value, status) for the Python version row."""
    version = platform.python_version()
    ok = sys.version_info[:2] >= MIN_PYTHON
    required = ".".join(str(part) for part in MIN_PYTHON)
    status = _OK if ok else f"[red]FAIL (>={required} required)[/red]"
    return "Python", version, status


def _tool_check(tool: ToolStatus, *, required: bool) -> Check:
    """Return the row for an external program found (or not) on PATH."""
    if tool.found:
        return tool.name, str(tool.path) if tool.path else "found", _OK
    return tool.name, "not found", _FAIL if required else _WARN


def _juce_check(settings: Settings) -> Check:
    """Return the row for the configured local JUCE folder."""
    if settings.juce_path_override is not None:
        juce_path = settings.juce_path_override
    else:
        try:
            juce_path = load_config(settings.config_file).juce_path
        except ConfigError as exc:
            return "JUCE", str(exc), _FAIL

    if juce_path is None:
        return "JUCE", "not configured (asked on 'jumake new')", _WARN
    if not juce_path.is_dir():
        return "JUCE", f"{juce_path} (missing)", _FAIL
    return "JUCE", str(juce_path), _OK


def _os_check() -> Check:
    """Return (label, value, status) for the OS row."""
    system_raw = platform.system()
    system_display = {
        "Windows": "Windows",
        "Linux": "Linux",
        "Darwin": "macOS",
    }.get(system_raw, system_raw)
    value = f"{system_display} {platform.release()} ({platform.machine()})"
    return "OS", value, _OK


def _status_plain(status: str) -> str:
    """Convert rich-markup status to plain text."""
    for word in ("FAIL", "WARN", "OK"):
        if word in status:
            return word
    return status


def _print_plain_doctor_table(checks: list[Check]) -> None:
    """Render doctor output without Rich."""
    print("\njumake doctor")
    print("=" * 72)
    print(f"{'Component':<12} {'Value':<48} {'Status':<8}")
    print("-" * 72)
    for label, value, status in checks:
        print(f"{label:<12} {value:<48} {_status_plain(status):<8}")
    print()


def _print_rich_doctor_table(checks: list[Check]) -> None:
    from rich.table import Table

    table = Table(
        title="jumake doctor",
        show_header=True,
        header_style="bold cyan",
        border_style="dim",
    )
    table.add_column("Component", style="bold", min_width=12)
    table.add_column("Value", min_width=20)
    table.add_column("Status", justify="center", min_width=8)
    for label, value, status in checks:
        table.add_row(label, value, status)

    console.print()
    console.print(table)
    console.print()


def _print_install_guidance(tools: list[ToolStatus]) -> None:
    for tool in tools:
        if tool.found or not tool.install_commands:
            continue
        console.print(f"[yellow]{tool.name} is not installed.[/yellow]")
        console.print("Install using one of the following commands:")
        for cmd in tool.install_commands:
            console.print(f"  [bold]{cmd}[/bold]")
        console.print()


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor(settings: Settings) -> int:
    """Execute all diagnostic checks and render a summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when all critical checks pass,
        :data:`exit_codes.GENERAL_ERROR` if a critical check fails.
    """
    cmake = detect_tool("cmake")
    optional = [detect_tool(name) for name in ("git", "ninja", "ccache")]

    checks = [
        _jumake_version_check(),
        _python_version_check(),
        _tool_check(cmake, required=True),
        *(_tool_check(tool, required=False) for tool in optional),
        _juce_check(settings),
        _os_check(),
    ]
    has_failure = any("FAIL" in status for _, _, status in checks)

    try:
        import rich  # noqa: F401
    except ModuleNotFoundError:
        _print_plain_doctor_table(checks)
    else:
        _print_rich_doctor_table(checks)

    _print_install_guidance([cmake, *optional])
    if settings.juce_path_override is not None:
        console.print(f"[dim]JUCE folder taken from {JUCE_PATH_ENV}.[/dim]")

    if has_failure:
        console.print("[bold red]Some checks failed.[/bold red]")
        return exit_codes.GENERAL_ERROR

    console.print("[bold green]All checks passed.[/bold green]")
    return exit_codes.SUCCESS
