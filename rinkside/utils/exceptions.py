"""rinkside exception hierarchy.

A small exception tree for the places where failures cross a module
boundary. Fetch failures never escape as exceptions: the effect layer turns
them into failed-load actions (see ``rinkside.effects``).
"""
from __future__ import annotations


class RinksideException(Exception):
    """Base class for all rinkside exceptions."""


class ConfigError(RinksideException):
    """Configuration-related issues (unreadable file, schema errors)."""


class APIError(RinksideException):
    """Upstream data API errors (network, HTTP status, bad payload)."""

    def __init__(self, message: str, *, status_code: int | None = None, url: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class DocumentError(RinksideException):
    """Raised when a document cannot be built for the requested panel."""


__all__ = [
    "RinksideException",
    "ConfigError",
    "APIError",
    "DocumentError",
]
