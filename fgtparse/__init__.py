"""Parse FortiGate configurations, search and render them, and export tables as CSV."""

__version__ = "0.1.0"
__all__ = ["__version__"]