"""Allow ``python -m jumake`` invocation.

Delegates to the CLI error-boundary entry point so that
``python -m jumake`` behaves identically to the ``jumake`` console script.
"""

from __future__ import annotations

from jumake.cli.app import cli

if __name__ == "__main__":
    cli()
