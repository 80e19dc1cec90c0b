"""Base error type shared by the fnkit services."""

from __future__ import annotations


class FunctionkitError(RuntimeError):
    """Base class for errors reported to the user by the CLI."""
