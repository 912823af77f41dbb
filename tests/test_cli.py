import logging

from rinkside.cache import CachingDataProvider
from rinkside.cli import build_provider, main, parse_arguments
from rinkside.provider import FixtureDataProvider, HttpDataProvider


def test_parse_arguments_defaults():
    args = parse_arguments([])
    assert args.config is None
    assert args.log_level is None
    assert args.fixtures is False


def test_fixture_flag_selects_fixture_provider():
    provider = build_provider(parse_arguments(["--fixtures"]), "https://api.test/v1", 1.0)
    assert isinstance(provider, FixtureDataProvider)


def test_live_provider_uses_api_base():
    provider = build_provider(parse_arguments([]), "https://api.test/v1", 1.0)
    assert isinstance(provider, CachingDataProvider)
    assert isinstance(provider.inner, HttpDataProvider)
    assert provider.inner.base_url == "https://api.test/v1"


def test_invalid_config_exits_before_ui(tmp_path, monkeypatch, capsys):
    bad = tmp_path / "bad.json"
    bad.write_text('{"refresh_interval": "soon"}')
    monkeypatch.delenv("RINKSIDE_REFRESH_SEC", raising=False)
    try:
        code = main(["--config", str(bad), "--log-file", str(tmp_path / "r.log"), "--log-level", "DEBUG"])
    finally:
        root = logging.getLogger()
        for h in root.handlers[:]:
            root.removeHandler(h)
            h.close()
    assert code == 2
    assert "Invalid configuration" in capsys.readouterr().err
    assert "starting up" in (tmp_path / "r.log").read_text()
