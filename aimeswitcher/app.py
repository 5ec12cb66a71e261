"""
Entry point for the AIME switcher.

Starts the rating snapshot sync (when a database is configured) and serves the
Discord commands that switch the cabinet's active AIME card.

Usage:
    aimeswitcher [--config CONFIG_PATH] [--sync-only] [--log-level LEVEL]
"""

import argparse
import sys

import discord
import structlog
from sqlalchemy.exc import SQLAlchemyError

from aimeswitcher.bot.commands import CommandHandlers
from aimeswitcher.bot.discord_bot import run_bot
from aimeswitcher.bot.notifier import DesktopNotifier, NullNotifier
from aimeswitcher.cards.active_card import ActiveCardStore
from aimeswitcher.cards.directory import CardDirectory
from aimeswitcher.errors import ConfigError, InitialSyncError, LoadError
from aimeswitcher.models.config import AppConfig, DiscordConfig
from aimeswitcher.sync.sync_loop import SyncLoop, create_sync_loop
from aimeswitcher.utils.config_loader import ConfigLoader
from aimeswitcher.utils.logging_config import configure_logging
from aimeswitcher.utils.shutdown import ShutdownSignal

log = structlog.stdlib.get_logger()

EXIT_OK = 0
EXIT_STARTUP_FAILURE = 1

# How long to wait for an in-flight sync cycle when shutting down
SYNC_STOP_TIMEOUT_SECONDS = 30.0


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="aimeswitcher",
        description="Discord bot switching the active AIME card, with rating snapshot sync",
    )
    parser.add_argument(
        "--config",
        type=str,
        help="Path to configuration file",
        default=None,
    )
    parser.add_argument(
        "--sync-only",
        action="store_true",
        help="Run only the snapshot sync and wait for SIGINT/SIGTERM",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        help="Override the configured log level",
        default=None,
    )
    return parser.parse_args(argv)


def start_sync(config: AppConfig) -> SyncLoop | None:
    """
    Run the initial sync and start the background loop.

    Returns:
        The running loop, or None when sync is not configured

    Raises:
        InitialSyncError: If the initial sync fails
        SQLAlchemyError: If the database URL cannot be used
    """
    if not config.sync_enabled:
        log.info("sync_disabled", reason="database.url is not set")
        return None

    sync_loop = create_sync_loop(config)
    sync_loop.start()
    sync_loop.start_background()
    return sync_loop


def build_handlers(config: AppConfig) -> CommandHandlers:
    """
    Create command handlers from configuration.

    Raises:
        ConfigError: If the cards section is missing
        LoadError: If the card directory cannot be loaded
    """
    cards = config.cards
    if cards is None:
        raise ConfigError("cards.active_card_path and cards.directory_path are required")

    directory = CardDirectory.from_file(cards.directory_path)
    notifier = DesktopNotifier() if config.notifications.enabled else NullNotifier()
    return CommandHandlers(
        directory=directory,
        store=ActiveCardStore(cards.active_card_path),
        game_name=config.game.name,
        notifier=notifier,
    )


def discord_settings(config: AppConfig) -> DiscordConfig:
    """
    Discord section of a configuration that is about to run the bot.

    Raises:
        ConfigError: If the token or application ID is missing
    """
    discord_config = config.discord
    if discord_config is None or not discord_config.is_configured:
        raise ConfigError("discord.token and discord.app_id are required to run the bot")
    return discord_config


def wait_for_shutdown() -> None:
    with ShutdownSignal() as shutdown:
        log.info("waiting_for_shutdown")
        while not shutdown.wait(1.0):
            pass


def main(argv: list[str] | None = None) -> int:
    """Run the application and return the process exit code."""
    args = parse_args(argv)

    try:
        config_loader = ConfigLoader()
        config = config_loader.load_config(args.config)
    except ConfigError as e:
        configure_logging(log_level=args.log_level or "INFO")
        log.error("startup_failed", stage="config", error=str(e))
        return EXIT_STARTUP_FAILURE

    configure_logging(
        log_level=args.log_level or config.logging.log_level,
        json_logs=config.logging.json_logs,
        log_file=config.logging.log_file,
    )

    try:
        config_loader.validate_config(config, sync_only=args.sync_only)
        if args.sync_only:
            handlers, discord_config = None, None
        else:
            discord_config = discord_settings(config)
            handlers = build_handlers(config)
    except (ConfigError, LoadError) as e:
        log.error("startup_failed", stage="config", error=str(e))
        return EXIT_STARTUP_FAILURE

    try:
        sync_loop = start_sync(config)
    except (InitialSyncError, SQLAlchemyError) as e:
        log.error("startup_failed", stage="initial_sync", error=str(e))
        return EXIT_STARTUP_FAILURE

    try:
        if handlers is None or discord_config is None:
            wait_for_shutdown()
        else:
            run_bot(
                handlers,
                game_name=config.game.name,
                token=discord_config.token,
                application_id=discord_config.app_id,
            )
    except discord.DiscordException as e:
        log.error("startup_failed", stage="discord", error=str(e))
        return EXIT_STARTUP_FAILURE
    finally:
        if sync_loop is not None:
            sync_loop.stop(timeout=SYNC_STOP_TIMEOUT_SECONDS)

    log.info("shutdown_complete")
    return EXIT_OK


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
