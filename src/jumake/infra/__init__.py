"""Infrastructure layer — external system integration.

This layer wraps all interaction with cmake, git, the operating system,
bundled package data and the user configuration file.  Every raw
``OSError``/``subprocess`` failure is caught here and re-raised as a
:class:`~jumake.exceptions.JuMakeError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from jumake.infra.config import JuMakeConfig, Settings, load_config, resolve_juce_path, save_config
from jumake.infra.git_client import GitClient
from jumake.infra.process_runner import SubprocessRunner
from jumake.infra.templates import PackageTemplates
from jumake.infra.toolchain import ToolStatus, detect_tool, detect_toolchain, require_tool

__all__: list[str] = [
    "GitClient",
    "JuMakeConfig",
    "PackageTemplates",
    "Settings",
    "SubprocessRunner",
    "ToolStatus",
    "detect_tool",
    "detect_toolchain",
    "load_config",
    "require_tool",
    "resolve_juce_path",
    "save_config",
]
