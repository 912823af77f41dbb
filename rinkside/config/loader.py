"""Config file loading, validation and persistence.

Responsibilities:
  * Load the JSON config file (missing file -> defaults).
  * Validate against ``CONFIG_SCHEMA`` with jsonschema; violations raise
    ``ConfigError``.
  * Apply environment overrides from ``RinksideEnv``.
  * Persist settings changed from the Settings tab (``save_config``).

Public API:
  load_config(path, env=None) -> Config
  save_config(config, path) -> None
  ConfigStore(path).save   (the persistence callback handed to effects)
"""
from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any

import jsonschema

from rinkside.config.env_config import RinksideEnv
from rinkside.utils.exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config/rinkside.json")

STANDINGS_GROUPS = ("division", "conference", "league", "wildcard")

CONFIG_SCHEMA: dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "properties": {
        "debug": {"type": "boolean"},
        "refresh_interval": {"type": "integer", "minimum": 5, "maximum": 3600},
        "display_standings_western_first": {"type": "boolean"},
        "time_format": {"type": "string", "minLength": 1},
        "standings_group": {"enum": list(STANDINGS_GROUPS)},
    },
    "additionalProperties": False,
}


@dataclass(frozen=True)
class Config:
    debug: bool = False
    refresh_interval: int = 60
    display_standings_western_first: bool = False
    time_format: str = "%H:%M"
    standings_group: str = "division"

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def bool_fields(cls) -> tuple[str, ...]:
        return tuple(f.name for f in fields(cls) if f.type in ("bool", bool))


def validate_config(raw: dict[str, Any]) -> dict[str, Any]:
    try:
        jsonschema.validate(instance=raw, schema=CONFIG_SCHEMA)
    except jsonschema.ValidationError as e:
        path = '/'.join(str(p) for p in e.path) or '<root>'
        raise ConfigError(f"Config schema validation error: {e.message} (path: {path})") from e
    return raw


def load_config(path: str | os.PathLike[str] | None = None, env: RinksideEnv | None = None) -> Config:
    cfg_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    if cfg_path.exists():
        try:
            with cfg_path.open('r', encoding='utf-8') as fh:
                raw = json.load(fh)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(f"Unable to read config {cfg_path}: {e}") from e
        if not isinstance(raw, dict):
            raise ConfigError(f"Config root must be an object: {cfg_path}")
        config = Config(**validate_config(raw))
        logger.info("Loaded config from %s", cfg_path)
    else:
        logger.info("Config %s not found; using defaults", cfg_path)
        config = Config()

    if env is not None:
        overrides: dict[str, Any] = {}
        if env.refresh_sec is not None:
            overrides["refresh_interval"] = env.refresh_sec
        if env.debug is not None:
            overrides["debug"] = env.debug
        if overrides:
            logger.debug("Environment overrides applied: %s", overrides)
            config = replace(config, **overrides)
    return config


def save_config(config: Config, path: str | os.PathLike[str] | None = None) -> Path:
    cfg_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    payload = validate_config(config.to_dict())
    try:
        cfg_path.parent.mkdir(parents=True, exist_ok=True)
        tmp = cfg_path.with_suffix(cfg_path.suffix + ".tmp")
        with tmp.open('w', encoding='utf-8') as fh:
            json.dump(payload, fh, indent=2, sort_keys=True)
        os.replace(tmp, cfg_path)
    except OSError as e:
        raise ConfigError(f"Unable to write config {cfg_path}: {e}") from e
    logger.info("Saved config to %s", cfg_path)
    return cfg_path


class ConfigStore:
    """Binds a config path so reducers can request a save without knowing it."""

    def __init__(self, path: str | os.PathLike[str] | None = None):
        self.path = Path(path) if path is not None else DEFAULT_CONFIG_PATH

    def load(self, env: RinksideEnv | None = None) -> Config:
        return load_config(self.path, env)

    def save(self, config: Config) -> None:
        save_config(config, self.path)


__all__ = [
    "Config",
    "ConfigStore",
    "CONFIG_SCHEMA",
    "STANDINGS_GROUPS",
    "load_config",
    "save_config",
    "validate_config",
]
