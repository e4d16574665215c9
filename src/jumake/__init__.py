"""jumake — create, extend, build and run JUCE projects from the command line.

Wraps CMake and git behind a small command set with a strict layered
architecture.
"""

from jumake.version import __version__

__all__: list[str] = ["__version__"]
