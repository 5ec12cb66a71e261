#!/usr/bin/env python3
"""
One-shot snapshot sync for the AIME switcher.

Reads the rating and profile tables once and uploads the snapshot to the
object store, without starting the bot or the periodic loop. Because the
process starts fresh, the snapshot is always uploaded.

Designed for manual pushes or an external scheduler (e.g. cron).

Usage:
    python scripts/scheduled_sync.py [--config CONFIG_PATH]
"""

import argparse
import sys

import structlog

from aimeswitcher.errors import ConfigError
from aimeswitcher.sync.models import CycleResult
from aimeswitcher.sync.sync_loop import create_sync_loop
from aimeswitcher.utils.config_loader import ConfigLoader
from aimeswitcher.utils.logging_config import configure_logging

log = structlog.stdlib.get_logger()


def perform_sync(config_path: str | None = None) -> CycleResult | None:
    """
    Perform a single sync cycle.

    Args:
        config_path: Optional path to configuration file

    Returns:
        Result of the cycle, or None if configuration is unusable
    """
    try:
        config = ConfigLoader().load_config(config_path)
    except ConfigError as e:
        log.error("sync_config_failed", error=str(e))
        return None

    configure_logging(
        log_level=config.logging.log_level,
        json_logs=config.logging.json_logs,
        log_file=config.logging.log_file,
    )

    if not config.sync_enabled:
        log.error("sync_not_configured", reason="database.url is not set")
        return None

    sync_loop = create_sync_loop(config)
    return sync_loop.run_cycle()


def main():
    """Main entry point for the one-shot sync script."""
    parser = argparse.ArgumentParser(description="Upload the rating snapshot once")
    parser.add_argument(
        "--config",
        type=str,
        help="Path to configuration file",
        default=None,
    )
    args = parser.parse_args()

    result = perform_sync(config_path=args.config)

    print("\n" + "=" * 60)
    print("SNAPSHOT SYNC SUMMARY")
    print("=" * 60)

    if result is None:
        print("Status: FAILED")
        print("Error: configuration is missing or incomplete")
    elif result.success:
        print("Status: SUCCESS")
        print(f"Outcome: {result.status.value}")
        print(f"Fingerprint: {result.fingerprint}")
        print(f"Duration: {result.duration_seconds:.2f} seconds")
    else:
        print("Status: FAILED")
        print(f"Error: {result.error}")
        print(f"Duration: {result.duration_seconds:.2f} seconds")

    print("=" * 60)

    sys.exit(0 if result is not None and result.success else 1)


if __name__ == "__main__":
    main()
