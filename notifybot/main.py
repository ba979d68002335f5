#!/usr/bin/env python3
"""
Main entry point for NotifyBot
"""

import argparse
import asyncio
import logging
import sys

from .bot import NotifyBot
from .config import BotConfig, get_configuration, print_config_summary
from .errors import ConfigurationError, log_error
from .logging_config import LoggerConfigurator
from .signal_handler import SignalHandler


async def main(config: BotConfig) -> None:
    """Run the bot until a signal asks it to stop.

    Transport failures never surface here; the supervisor retries them forever.
    """
    bot = NotifyBot(config)
    SignalHandler(bot.shutdown).setup_signal_handlers()
    await bot.run()


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="notifybot",
        description="Watch IRC nicknames and email when they come and go.",
    )
    parser.add_argument(
        "--health-check",
        action="store_true",
        help="validate the configuration and exit",
    )
    return parser.parse_args(argv)


def load_config_or_exit() -> BotConfig:
    try:
        return get_configuration()
    except ConfigurationError as e:
        log_error("Startup configuration error", e)
        sys.exit(1)


def run(argv: list[str] | None = None) -> None:
    """Synchronous entry point for the application.

    Raises:
        SystemExit: On configuration failure or an unexpected top-level error.
    """
    args = parse_args(argv)
    LoggerConfigurator(exit_summary=not args.health_check).configure()

    config = load_config_or_exit()
    if args.health_check:
        logging.info(f"✅ Health check passed - tracking {len(config.nicknames)} nickname(s)")
        sys.exit(0)

    print("🚀 Starting NotifyBot")
    print_config_summary(config)
    try:
        asyncio.run(main(config))
    except KeyboardInterrupt:
        sys.exit(0)
    except Exception as e:  # noqa: BLE001
        log_error("Top-level error", e)
        sys.exit(1)
    finally:
        logging.info("✅ Application shutdown complete")


if __name__ == "__main__":
    run()
