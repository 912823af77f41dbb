import json
import logging

import pytest

from rinkside.config import Config, ConfigStore, load_config, load_env, save_config
from rinkside.utils.exceptions import ConfigError
from rinkside.utils.logging_utils import DEFAULT_FORMAT, setup_logging


def test_missing_file_gives_defaults(tmp_path):
    config = load_config(tmp_path / "absent.json")
    assert config == Config()


def test_file_values_and_env_overrides(tmp_path):
    path = tmp_path / "rinkside.json"
    path.write_text(json.dumps({"refresh_interval": 30, "standings_group": "league"}))
    env = load_env({"RINKSIDE_REFRESH_SEC": "2", "RINKSIDE_DEBUG": "yes"})
    config = load_config(path, env)
    assert config.standings_group == "league"
    # clamped to the 5 second floor
    assert config.refresh_interval == 5
    assert config.debug is True


@pytest.mark.parametrize("payload", [
    {"refresh_interval": 1},
    {"standings_group": "playoffs"},
    {"unknown_key": True},
    ["not", "an", "object"],
])
def test_invalid_config_raises(tmp_path, payload):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps(payload))
    with pytest.raises(ConfigError):
        load_config(path)


def test_unparseable_config_raises(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("{nope")
    with pytest.raises(ConfigError):
        load_config(path)


def test_save_then_load(tmp_path):
    store = ConfigStore(tmp_path / "nested" / "rinkside.json")
    store.save(Config(display_standings_western_first=True, time_format="%I:%M %p"))
    loaded = store.load()
    assert loaded.display_standings_western_first is True
    assert loaded.time_format == "%I:%M %p"
    assert not (tmp_path / "nested" / "rinkside.json.tmp").exists()


def test_save_rejects_invalid_values(tmp_path):
    with pytest.raises(ConfigError):
        save_config(Config(refresh_interval=0), tmp_path / "c.json")


def test_bool_fields():
    assert Config.bool_fields() == ("debug", "display_standings_western_first")


def test_env_defaults_and_parsing(monkeypatch):
    for name in ("RINKSIDE_CONFIG", "RINKSIDE_REFRESH_SEC", "RINKSIDE_DEBUG", "RINKSIDE_API_BASE"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("RINKSIDE_LOG_LEVEL", "debug")
    monkeypatch.setenv("RINKSIDE_HTTP_TIMEOUT", "garbage")
    monkeypatch.setenv("RINKSIDE_METRICS_PORT", "9108")
    env = load_env()
    assert env.config_path is None
    assert env.refresh_sec is None
    assert env.debug is None
    assert env.log_level == "DEBUG"
    assert env.http_timeout_sec == 10.0
    assert env.metrics_port == 9108
    assert env.api_base == "https://api-web.nhle.com/v1"


def test_setup_logging_file_only(tmp_path):
    log_file = tmp_path / "logs" / "rinkside.log"
    root = setup_logging("DEBUG", str(log_file), console=False)
    try:
        assert len(root.handlers) == 1
        assert root.handlers[0].formatter._fmt == DEFAULT_FORMAT
        logging.getLogger("rinkside.test").info("hello file")
        root.handlers[0].flush()
        assert "hello file" in log_file.read_text()
        assert logging.getLogger("httpx").level == logging.WARNING
    finally:
        setup_logging("WARNING", None, console=False)


def test_wildcard_grouping_is_accepted(tmp_path):
    path = tmp_path / "rinkside.json"
    path.write_text(json.dumps({"standings_group": "wildcard"}))
    assert load_config(path).standings_group == "wildcard"
