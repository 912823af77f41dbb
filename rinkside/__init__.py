"""Rinkside: a terminal hockey scores and standings dashboard."""
from .version import __version__, get_version

__all__ = ["__version__", "get_version"]
