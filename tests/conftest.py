"""Shared pytest fixtures and configuration for the jumake test suite.

Guidelines
----------
* No real cmake, git or compiler invocation in any test.
* Subprocess calls are mocked at the infra boundary.
* Core tests work on ``tmp_path`` only.
* Tests must not depend on the user's configuration or OS state.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from jumake.infra.config import CONFIG_DIR_ENV, JUCE_PATH_ENV, Settings

ROOT_CMAKELISTS = """cmake_minimum_required(VERSION 3.24)

project(Demo VERSION 0.0.1)

add_subdirectory(modules/JUCE)
add_subdirectory(src)
"""

SRC_CMAKELISTS = """set(JUMAKE_TEMPLATE "ConsoleApp")

juce_add_console_app(${PROJECT_NAME} PRODUCT_NAME "${PROJECT_NAME}")

target_sources(${PROJECT_NAME}
    PRIVATE
        Main.cpp)
"""


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the config directory at a temporary folder for every test."""
    config_dir = tmp_path_factory.mktemp("config")
    monkeypatch.setenv(CONFIG_DIR_ENV, str(config_dir))
    monkeypatch.delenv(JUCE_PATH_ENV, raising=False)
    return config_dir


@pytest.fixture
def settings(isolated_environment: Path) -> Settings:
    return Settings(config_file=isolated_environment / "config.toml")


@pytest.fixture
def juce_dir(tmp_path_factory: pytest.TempPathFactory) -> Path:
    """An empty directory standing in for a local JUCE checkout."""
    path = tmp_path_factory.mktemp("JUCE")
    (path / "modules").mkdir()
    return path


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """A minimal ConsoleApp project named ``Demo``."""
    root = tmp_path / "Demo"
    (root / "src").mkdir(parents=True)
    (root / "CMakeLists.txt").write_text(ROOT_CMAKELISTS, encoding="utf-8")
    (root / "src" / "CMakeLists.txt").write_text(SRC_CMAKELISTS, encoding="utf-8")
    return root
