"""
urlrev.errors
=============
Exception hierarchy.

Every failure that can happen while revising a single ``url()`` derives
from :class:`UrlrevError`.  Those are caught per declaration and turned
into warnings; anything else is a programming error and propagates.

    UrlrevError
    ├── UnreadableLocalFile        – local / site-absolute file missing or unreadable
    ├── RemoteFetchFailure         – connection error or non-2xx response
    ├── CustomHashFunctionFailure  – user-supplied hash function raised
    ├── ReplacerFailure            – user-supplied replacer raised
    └── OptionsError               – malformed options (raised to the caller)
"""

from __future__ import annotations


class UrlrevError(Exception):
    """Base class for all css-urlrev errors."""


class UnreadableLocalFile(UrlrevError):
    def __init__(self, path: str, reason: str = "") -> None:
        self.path = path
        self.reason = reason
        msg = f"Can't read file '{path}'"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class RemoteFetchFailure(UrlrevError):
    def __init__(self, url: str, reason: str = "", status: int | None = None) -> None:
        self.url = url
        self.reason = reason
        self.status = status
        msg = f"Can't fetch '{url}'"
        if status is not None:
            msg += f" (HTTP {status})"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class CustomHashFunctionFailure(UrlrevError):
    def __init__(self, path: str, reason: str = "") -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Hash function failed for '{path}': {reason}")


class ReplacerFailure(UrlrevError):
    def __init__(self, value: str, reason: str = "") -> None:
        self.value = value
        self.reason = reason
        super().__init__(f"Replacer failed for '{value}': {reason}")


class OptionsError(UrlrevError, ValueError):
    """Raised for contract violations in :class:`urlrev.options.Options`."""
