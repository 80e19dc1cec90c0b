"""Function name normalisation."""

from __future__ import annotations

import re

from .errors import FunctionkitError

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_-]")


class InvalidFunctionNameError(FunctionkitError):
    """Raised when a function name has no characters left after sanitising."""


def canonicalize(raw_name: str) -> str:
    """Return the identifier-safe form of a function directory name.

    Hyphens become underscores; applying it twice changes nothing.
    """

    return raw_name.replace("-", "_")


def sanitize(name: str) -> str:
    """Strip characters that must not end up inside generated files."""

    cleaned = _UNSAFE_CHARS.sub("", name)
    if not cleaned:
        raise InvalidFunctionNameError(f"Function name {name!r} contains no usable characters.")
    return cleaned
