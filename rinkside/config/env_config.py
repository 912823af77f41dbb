"""Environment configuration for the dashboard process.

Consolidates os.getenv lookups into a single typed dataclass (`RinksideEnv`)
with explicit defaults, normalization and light validation.  Values found
here override the on-disk config file (see ``rinkside.config.loader``).

Recognised variables:
  RINKSIDE_CONFIG        path to the JSON config file
  RINKSIDE_REFRESH_SEC   auto-refresh cadence (clamped 5..3600)
  RINKSIDE_DEBUG         enable debug mode (status line diagnostics)
  RINKSIDE_LOG_LEVEL     root log level (default INFO)
  RINKSIDE_LOG_FILE      log file path (default logs/rinkside.log)
  RINKSIDE_API_BASE      base URL of the data API
  RINKSIDE_HTTP_TIMEOUT  per-request timeout in seconds
  RINKSIDE_METRICS_PORT  expose prometheus metrics on this port when set
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

__all__ = [
    "RinksideEnv",
    "load_env",
]

DEFAULT_API_BASE = "https://api-web.nhle.com/v1"

# ---------------------------- Parsing Helpers ---------------------------- #

TRUE_SET = {"1", "true", "yes", "on"}
FALSE_SET = {"0", "false", "no", "off"}


def _get(environ: Mapping[str, str], key: str) -> str | None:
    v = environ.get(key)
    if v is None:
        return None
    v2 = v.strip()
    return v2 if v2 != "" else None


def _get_bool(environ: Mapping[str, str], key: str, default: bool | None = False) -> bool | None:
    v = _get(environ, key)
    if v is None:
        return default
    lv = v.lower()
    if lv in TRUE_SET:
        return True
    if lv in FALSE_SET:
        return False
    return default  # Unrecognized -> default


def _get_int(
    environ: Mapping[str, str], key: str, default: int | None, *, min_v: int | None = None, max_v: int | None = None
) -> int | None:
    v = _get(environ, key)
    if v is None:
        return default
    try:
        iv = int(float(v))  # allow floats like "15.0"
    except ValueError:
        return default
    if min_v is not None and iv < min_v:
        iv = min_v
    if max_v is not None and iv > max_v:
        iv = max_v
    return iv


def _get_float(
    environ: Mapping[str, str], key: str, default: float, *, min_v: float | None = None
) -> float:
    v = _get(environ, key)
    if v is None:
        return default
    try:
        fv = float(v)
    except ValueError:
        return default
    if min_v is not None and fv < min_v:
        fv = min_v
    return fv


@dataclass(slots=True)
class RinksideEnv:
    config_path: str | None
    # None means "not set", so the config file value stays in effect
    refresh_sec: int | None
    debug: bool | None
    log_level: str
    log_file: str
    api_base: str
    http_timeout_sec: float
    metrics_port: int | None


def load_env(environ: Mapping[str, str] | None = None) -> RinksideEnv:
    env = os.environ if environ is None else environ
    return RinksideEnv(
        config_path=_get(env, "RINKSIDE_CONFIG"),
        refresh_sec=_get_int(env, "RINKSIDE_REFRESH_SEC", None, min_v=5, max_v=3600),
        debug=_get_bool(env, "RINKSIDE_DEBUG", None),
        log_level=(_get(env, "RINKSIDE_LOG_LEVEL") or "INFO").upper(),
        log_file=_get(env, "RINKSIDE_LOG_FILE") or "logs/rinkside.log",
        api_base=(_get(env, "RINKSIDE_API_BASE") or DEFAULT_API_BASE).rstrip("/"),
        http_timeout_sec=_get_float(env, "RINKSIDE_HTTP_TIMEOUT", 10.0, min_v=0.5),
        metrics_port=_get_int(env, "RINKSIDE_METRICS_PORT", None, min_v=1, max_v=65535),
    )
