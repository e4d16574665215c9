"""Core / service layer — project logic and data transformations.

Rules
-----
* No ``print()`` calls and no user-facing rendering; log via ``logging``.
* External programs are reached only through :mod:`jumake.core.protocols`.
* No imports from ``cli`` or ``infra``.
"""

from jumake.core.build_service import BuildService
from jumake.core.models import (
    AddCommand,
    BuildCommand,
    BuildType,
    Command,
    ConfigCommand,
    DoctorCommand,
    ElementType,
    Invocation,
    NewCommand,
    ProjectContext,
    ProjectTemplate,
    RunCommand,
    ShowHelp,
    ShowVersion,
    Toolchain,
)
from jumake.core.project_service import ProjectService
from jumake.core.protocols import ProcessRunner, TemplateStore, VersionControl

__all__: list[str] = [
    "AddCommand",
    "BuildCommand",
    "BuildService",
    "BuildType",
    "Command",
    "ConfigCommand",
    "DoctorCommand",
    "ElementType",
    "Invocation",
    "NewCommand",
    "ProcessRunner",
    "ProjectContext",
    "ProjectService",
    "ProjectTemplate",
    "RunCommand",
    "ShowHelp",
    "ShowVersion",
    "TemplateStore",
    "Toolchain",
    "VersionControl",
]
