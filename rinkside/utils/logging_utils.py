"""Unified logging utilities for rinkside."""
from __future__ import annotations

import logging
import os
import sys

DEFAULT_FORMAT = '%(asctime)s - %(threadName)s - %(name)s - %(levelname)s - %(message)s'
# Minimal console format (message only) used for cleaner terminal output.
MINIMAL_CONSOLE_FORMAT = '%(message)s'

SUPPRESSED_LOGGERS = [
    'httpx', 'httpcore', 'asyncio',
]


def setup_logging(
    level: str = 'INFO',
    log_file: str | None = None,
    fmt: str = DEFAULT_FORMAT,
    *,
    console: bool = True,
) -> logging.Logger:
    """Configure root logging.

    Console handler uses the minimal message-only format unless
    RINKSIDE_VERBOSE_CONSOLE=1 is set or a custom fmt is passed. While the
    full-screen dashboard owns the terminal, callers pass ``console=False`` so
    log lines never tear through the rendered frame; the file handler then
    becomes the only sink.

    File handler (if enabled) always uses full DEFAULT_FORMAT for diagnostics.
    """
    from rinkside.config.env_config import TRUE_SET

    log_level = getattr(logging, level.upper(), logging.INFO)
    root = logging.getLogger()
    root.setLevel(log_level)
    # Remove existing handlers to avoid duplication on re-init
    for h in root.handlers[:]:
        root.removeHandler(h)
        h.flush()
        h.close()

    if fmt != DEFAULT_FORMAT:
        console_fmt = fmt
    elif os.environ.get('RINKSIDE_VERBOSE_CONSOLE', '').strip().lower() in TRUE_SET:
        console_fmt = DEFAULT_FORMAT
    else:
        console_fmt = MINIMAL_CONSOLE_FORMAT

    if console:
        stream = logging.StreamHandler(sys.stdout)
        stream.setLevel(log_level)
        stream.setFormatter(logging.Formatter(console_fmt))
        root.addHandler(stream)

    if log_file:
        try:
            parent = os.path.dirname(log_file)
            if parent:
                os.makedirs(parent, exist_ok=True)
            fh = logging.FileHandler(log_file, encoding='utf-8')
            fh.setLevel(log_level)
            # Always keep detailed format in file for post-mortem analysis
            fh.setFormatter(logging.Formatter(DEFAULT_FORMAT))
            root.addHandler(fh)
        except OSError as e:
            root.error(f"Failed to create log file handler: {e}")

    if not root.handlers:
        root.addHandler(logging.NullHandler())

    for name in SUPPRESSED_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return root


__all__ = ["setup_logging", "DEFAULT_FORMAT"]
