"""Infrastructure: user configuration and the local JUCE location.

The only persisted setting is the path to a local JUCE checkout, kept
in ``config.toml`` inside the platform configuration directory
(resolved with :mod:`platformdirs`).  ``JUMAKE_CONFIG_DIR`` relocates
that directory and ``JUMAKE_JUCE_PATH`` overrides the stored path.

Rules
-----
* Reads with :mod:`tomllib`, writes with :mod:`tomli_w`.
* Writes are atomic (temporary file + :func:`os.replace`).
* No user interaction — prompting is injected by the CLI layer.
"""

from __future__ import annotations

import logging
import os
import tomllib
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from pathlib import Path

import platformdirs
import tomli_w

from jumake.exceptions import ConfigError

logger = logging.getLogger(__name__)

APP_NAME: str = "jumake"
CONFIG_FILE_NAME: str = "config.toml"
CONFIG_DIR_ENV: str = "JUMAKE_CONFIG_DIR"
JUCE_PATH_ENV: str = "JUMAKE_JUCE_PATH"


# ---------------------------------------------------------------------------
# Settings and persisted config
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Settings:
    """Process-level configuration handed to the dispatcher."""

    config_file: Path
    """Location of ``config.toml``."""

    juce_path_override: Path | None = None
    """JUCE folder forced through the environment, if any."""

    @classmethod
    def from_environment(cls, environ: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ
        config_dir_raw = env.get(CONFIG_DIR_ENV)
        config_dir = (
            Path(config_dir_raw).expanduser()
            if config_dir_raw
            else Path(platformdirs.user_config_dir(APP_NAME))
        )
        juce_raw = env.get(JUCE_PATH_ENV)
        return cls(
            config_file=config_dir / CONFIG_FILE_NAME,
            juce_path_override=Path(juce_raw).expanduser() if juce_raw else None,
        )


@dataclass(frozen=True, slots=True)
class JuMakeConfig:
    """Contents of ``config.toml``."""

    juce_path: Path | None = None


def load_config(config_file: Path) -> JuMakeConfig:
    """Read *config_file*; a missing file yields an empty config.

    Raises
    ------
    ConfigError
        If the file exists but is unreadable or not valid TOML.
    """
    try:
        with config_file.open("rb") as handle:
            data = tomllib.load(handle)
    except FileNotFoundError:
        return JuMakeConfig()
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(
            f"TOML parse error in {config_file}: {exc}",
            hint="Fix the file or set the path again with 'jumake config --juce-path DIR'.",
        ) from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Cannot read {config_file}: {exc}") from exc

    raw_path = data.get("juce_path")
    if raw_path is not None and not isinstance(raw_path, str):
        raise ConfigError(f"'juce_path' in {config_file} must be a string.")
    return JuMakeConfig(juce_path=Path(raw_path) if raw_path else None)


def save_config(config_file: Path, config: JuMakeConfig) -> None:
    """Atomically write *config* to *config_file*."""
    data: dict[str, str] = {}
    if config.juce_path is not None:
        data["juce_path"] = str(config.juce_path)

    tmp_file = config_file.with_suffix(".tmp")
    try:
        config_file.parent.mkdir(parents=True, exist_ok=True)
        tmp_file.write_text(tomli_w.dumps(data), encoding="utf-8")
        os.replace(tmp_file, config_file)
    except OSError as exc:
        raise ConfigError(f"Cannot write {config_file}: {exc}") from exc
    logger.info("Configuration saved to %s", config_file)


# ---------------------------------------------------------------------------
# JUCE path resolution
# ---------------------------------------------------------------------------

def resolve_juce_path(
    settings: Settings,
    prompt: Callable[[], Path],
) -> Path:
    """Return the local JUCE folder, prompting (and saving) when unknown.

    Resolution order: ``JUMAKE_JUCE_PATH``, then ``config.toml``, then
    *prompt*.  A prompted answer is persisted for future runs.

    Raises
    ------
    ConfigError
        If the override or stored path is not an existing directory.
    """
    if settings.juce_path_override is not None:
        return _require_directory(settings.juce_path_override, source=JUCE_PATH_ENV)

    config = load_config(settings.config_file)
    if config.juce_path is not None:
        logger.info("Using cached JUCE path from %s", settings.config_file)
        return _require_directory(config.juce_path, source=str(settings.config_file))

    juce_path = prompt()
    save_config(settings.config_file, JuMakeConfig(juce_path=juce_path))
    return juce_path


def _require_directory(path: Path, *, source: str) -> Path:
    # Absolute, so a symlink to it works from any directory.
    path = path.expanduser().resolve()
    if not path.is_dir():
        raise ConfigError(
            f"Local JUCE folder does not exist: {path}",
            hint=f"Configured via {source}. Update it with 'jumake config --juce-path DIR'.",
        )
    return path
