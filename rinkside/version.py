"""Package version.

``RINKSIDE_VERSION`` overrides the constant (e.g. injected by CI).
"""
from __future__ import annotations

import os

__version__ = "0.1.0"


def get_version() -> str:
    return os.environ.get("RINKSIDE_VERSION", __version__)


__all__ = ["__version__", "get_version"]
