"""Single source of truth for the jumake version string."""

__version__: str = "0.3.0"
