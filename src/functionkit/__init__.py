"""Attach generated actions to service functions."""

__version__ = "0.3.1"

__all__ = ["__version__"]
