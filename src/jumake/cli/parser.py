"""Command-line parsing: raw argv tokens → :class:`~jumake.core.models.Invocation`.

Parsing is eager and side-effect free.  The :mod:`argparse` parser is
subclassed so that every rejection raises
:class:`~jumake.exceptions.InvalidArgumentError` instead of printing and
calling :func:`sys.exit`; the dispatcher decides how errors are shown.

Help and version requests are recognised before argparse runs and
returned as the :class:`ShowHelp` / :class:`ShowVersion` pseudo-commands,
so they succeed whatever else is on the command line.
"""

from __future__ import annotations

import argparse
import re
from collections.abc import Sequence
from pathlib import Path
from typing import NoReturn

from jumake.core.models import (
    LAST_USED,
    AddCommand,
    BuildCommand,
    BuildType,
    Command,
    ConfigCommand,
    DoctorCommand,
    ElementType,
    Invocation,
    NewCommand,
    ProjectTemplate,
    RunCommand,
    ShowHelp,
    ShowVersion,
)
from jumake.exceptions import InvalidArgumentError

PROG: str = "jumake"
HELP_FLAGS: frozenset[str] = frozenset({"-h", "--help"})
VERSION_FLAGS: frozenset[str] = frozenset({"-V", "--version"})

_PROJECT_NAME = re.compile(r"^[A-Za-z][A-Za-z0-9_-]*$")
_CPP_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_INVALID_VALUE = re.compile(r"invalid [^:']*: '([^']*)'")


# ---------------------------------------------------------------------------
# argparse plumbing
# ---------------------------------------------------------------------------

class _RaisingArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises instead of exiting on bad input."""

    def error(self, message: str) -> NoReturn:
        match = _INVALID_VALUE.search(message)
        raise InvalidArgumentError(
            message,
            value=match.group(1) if match else None,
            hint=f"Run '{self.prog} --help' for usage.",
        )


def _project_name(text: str) -> str:
    if not _PROJECT_NAME.match(text):
        raise argparse.ArgumentTypeError(
            f"invalid project name: {text!r} (expected a letter followed by "
            "letters, digits, '_' or '-')"
        )
    return text


def _element_name(text: str) -> str:
    if not _CPP_IDENTIFIER.match(text):
        raise argparse.ArgumentTypeError(
            f"invalid element name: {text!r} (expected a C++ identifier)"
        )
    return text


def _add_help_flag(parser: argparse.ArgumentParser) -> None:
    # Handled by the pre-scan in parse_invocation; listed here for --help output.
    parser.add_argument("-h", "--help", action="store_true", help="show this help message and exit")


def build_parser() -> tuple[argparse.ArgumentParser, dict[str, argparse.ArgumentParser]]:
    """Construct the top-level parser and return it with its sub-parsers."""
    parser = _RaisingArgumentParser(
        prog=PROG,
        description="A CLI tool for creating and managing JUCE projects.",
        add_help=False,
        allow_abbrev=False,
    )
    _add_help_flag(parser)
    parser.add_argument("-V", "--version", action="store_true", help="show the version and exit")
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="show progress details (repeat for debug output)",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND", required=True)
    commands: dict[str, argparse.ArgumentParser] = {}

    new = subparsers.add_parser("new", help="Create a new JUCE project", add_help=False, allow_abbrev=False)
    _add_help_flag(new)
    new.add_argument("project_name", type=_project_name, help="name of the project and its directory")
    new.add_argument("-p", "--path", type=Path, default=None, help="parent directory (default: current directory)")
    new.add_argument(
        "-t",
        "--template",
        choices=ProjectTemplate.choices(),
        default=None,
        help="project template (prompted for when omitted)",
    )
    new.add_argument("--no-git", action="store_true", help="do not create a git repository")
    commands["new"] = new

    add = subparsers.add_parser("add", help="Add a new C++ class or JUCE component", add_help=False, allow_abbrev=False)
    _add_help_flag(add)
    add.add_argument("element_type", choices=ElementType.choices(), help="kind of element to add")
    add.add_argument("element_name", type=_element_name, help="class name (components get a 'Component' suffix)")
    commands["add"] = add

    build = subparsers.add_parser("build", help="Build the project", add_help=False, allow_abbrev=False)
    _add_help_flag(build)
    build.add_argument(
        "-t",
        "--build-type",
        choices=BuildType.choices(),
        default=BuildType.RELEASE.value,
        help="CMake build type (default: %(default)s)",
    )
    commands["build"] = build

    run = subparsers.add_parser("run", help="Build and run the project", add_help=False, allow_abbrev=False)
    _add_help_flag(run)
    run.add_argument(
        "-t",
        "--build-type",
        choices=(*BuildType.choices(), LAST_USED),
        default=LAST_USED,
        help="CMake build type (default: %(default)s, the type of the last build)",
    )
    commands["run"] = run

    doctor = subparsers.add_parser("doctor", help="Check the build environment", add_help=False, allow_abbrev=False)
    _add_help_flag(doctor)
    commands["doctor"] = doctor

    config = subparsers.add_parser("config", help="Show or change jumake settings", add_help=False, allow_abbrev=False)
    _add_help_flag(config)
    config.add_argument("--juce-path", type=Path, default=None, help="store the local JUCE folder")
    commands["config"] = config

    return parser, commands


# ---------------------------------------------------------------------------
# Pseudo-command pre-scan
# ---------------------------------------------------------------------------

def _options_region(tokens: Sequence[str]) -> list[str]:
    """Return the tokens before a ``--`` separator."""
    region: list[str] = []
    for token in tokens:
        if token == "--":
            break
        region.append(token)
    return region


def _pseudo_command(
    tokens: Sequence[str],
    parser: argparse.ArgumentParser,
    commands: dict[str, argparse.ArgumentParser],
) -> Command | None:
    region = _options_region(tokens)
    if any(token in HELP_FLAGS for token in region):
        for token in region:
            if token in HELP_FLAGS:
                break
            if token in commands:
                return ShowHelp(text=commands[token].format_help())
        return ShowHelp(text=parser.format_help())
    if any(token in VERSION_FLAGS for token in region):
        return ShowVersion()
    return None


# ---------------------------------------------------------------------------
# Unknown-flag pre-scan
# ---------------------------------------------------------------------------

def _lookup_option(parser: argparse.ArgumentParser, token: str) -> tuple[argparse.Action | None, bool]:
    """Return the action *token* names and whether it carries its own value.

    Accepts ``--long=value`` and attached short forms (``-tDebug``, ``-vv``).
    """
    actions = parser._option_string_actions
    if token in actions:
        return actions[token], False
    if token.startswith("--"):
        name, sep, _ = token.partition("=")
        return (actions.get(name), True) if sep else (None, False)
    return actions.get(token[:2]), True


def _first_unknown_flag(
    tokens: Sequence[str],
    parser: argparse.ArgumentParser,
    commands: dict[str, argparse.ArgumentParser],
) -> tuple[str, str | None] | None:
    """Find the first flag no parser on the path understands.

    Returns the token with the sub-command in effect, or ``None``.  Scanning
    stops at an unknown sub-command name so argparse can report it.
    """
    current = parser
    command: str | None = None
    skip_value = False
    for token in _options_region(tokens):
        if skip_value:
            skip_value = False
            continue
        if not token.startswith("-") or token == "-":
            if command is None:
                if token not in commands:
                    return None
                command, current = token, commands[token]
            continue
        action, attached = _lookup_option(current, token)
        if action is None:
            return token, command
        skip_value = not attached and action.nargs != 0
    return None


# ---------------------------------------------------------------------------
# Namespace → Command
# ---------------------------------------------------------------------------

def _to_command(args: argparse.Namespace) -> Command:
    name: str = args.command
    if name == "new":
        return NewCommand(
            project_name=args.project_name,
            path=args.path,
            template=ProjectTemplate(args.template) if args.template else None,
            init_git=not args.no_git,
        )
    if name == "add":
        return AddCommand(
            element_type=ElementType(args.element_type),
            element_name=args.element_name,
        )
    if name == "build":
        return BuildCommand(build_type=BuildType.parse(args.build_type))
    if name == "run":
        if args.build_type == LAST_USED:
            return RunCommand(build_type=None)
        return RunCommand(build_type=BuildType.parse(args.build_type))
    if name == "doctor":
        return DoctorCommand()
    if name == "config":
        return ConfigCommand(juce_path=args.juce_path)
    raise AssertionError(f"sub-command without a Command mapping: {name}")


def parse_invocation(argv: Sequence[str]) -> Invocation:
    """Parse *argv* (without the program name) into an :class:`Invocation`.

    Raises
    ------
    InvalidArgumentError
        For unknown flags, missing or invalid values, or a missing
        sub-command.  The message names the offending token.
    """
    tokens = list(argv)
    parser, commands = build_parser()

    pseudo = _pseudo_command(tokens, parser, commands)
    if pseudo is not None:
        return Invocation(command=pseudo)

    unknown = _first_unknown_flag(tokens, parser, commands)
    if unknown is not None:
        flag, command = unknown
        usage = f"{PROG} {command}" if command else PROG
        raise InvalidArgumentError(
            f"unrecognized arguments: {flag}",
            value=flag,
            hint=f"Run '{usage} --help' for usage.",
        )

    args, extras = parser.parse_known_args(tokens)
    if extras:
        raise InvalidArgumentError(
            f"unrecognized arguments: {' '.join(extras)}",
            value=extras[0],
            hint=f"Run '{PROG} {args.command} --help' for usage.",
        )
    return Invocation(command=_to_command(args), verbosity=args.verbose)
