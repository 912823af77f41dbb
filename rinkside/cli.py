"""Command line entry point."""
from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from dotenv import load_dotenv

from rinkside.cache import CachingDataProvider
from rinkside.config import ConfigStore, load_env
from rinkside.effects import DataEffects
from rinkside.error_handling import handle_config_error
from rinkside.metrics import get_metrics
from rinkside.provider import DataProvider, FixtureDataProvider, HttpDataProvider
from rinkside.state import AppState
from rinkside.utils.exceptions import ConfigError
from rinkside.utils.logging_utils import setup_logging
from rinkside.version import get_version

logger = logging.getLogger(__name__)


def parse_arguments(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description='Rinkside - terminal hockey dashboard')
    parser.add_argument('--config', default=None,
                        help='Path to configuration file (default: $RINKSIDE_CONFIG or config/rinkside.json)')
    parser.add_argument('--log-level', choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        default=None, help='Set the logging level (default: $RINKSIDE_LOG_LEVEL or INFO)')
    parser.add_argument('--log-file', default=None,
                        help='Path to log file (default: $RINKSIDE_LOG_FILE or logs/rinkside.log)')
    parser.add_argument('--fixtures', action='store_true',
                        help='Serve built-in sample data instead of calling the live API')
    parser.add_argument('--version', action='version', version=f'Rinkside {get_version()}')
    return parser.parse_args(argv)


def build_provider(args: argparse.Namespace, api_base: str, timeout: float) -> DataProvider:
    if args.fixtures:
        logger.info("Using built-in fixture data")
        return FixtureDataProvider()
    logger.info("Using live data from %s", api_base)
    return CachingDataProvider(HttpDataProvider(api_base, timeout=timeout))


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_arguments(argv)
    # .env values never override variables already set in the process
    load_dotenv()
    env = load_env()
    setup_logging(
        level=args.log_level or env.log_level,
        log_file=args.log_file or env.log_file,
        console=False,
    )
    logger.info("Rinkside %s starting up", get_version())

    store = ConfigStore(args.config or env.config_path)
    try:
        config = store.load(env)
    except ConfigError as e:
        handle_config_error(e, context={"path": str(store.path)})
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2

    if env.metrics_port:
        get_metrics().serve(env.metrics_port)

    # imported late so --help and --version work without a terminal UI stack
    from rinkside.tui.app import RinksideApp

    provider = build_provider(args, env.api_base, env.http_timeout_sec)
    app = RinksideApp(AppState.initial(config), DataEffects(provider, save_config=store.save))
    app.run()
    logger.info("Shutdown complete")
    return 0


if __name__ == "__main__":
    sys.exit(main())
