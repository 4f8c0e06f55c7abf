#!/usr/bin/env python3
"""
DNS Records Updater - Command Line Interface

Main entry point for the DNS Records Updater daemon.
"""

import argparse
import logging
import sys
from typing import List

from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from ..core.dns_updater import DNSUpdater, PassResult
from ..core.scheduler import UpdateScheduler
from ..exceptions import ConfigurationError
from ..providers.cloudflare_provider import CloudflareProvider
from ..providers.ip_resolver import IPResolver
from ..utils.config import Configuration, load_config

console = Console()
logger = logging.getLogger(__name__)


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="DNS Records Updater - keep DNS records on the host's public IP"
    )

    parser.add_argument(
        "--config",
        "-c",
        default="config.yaml",
        help="Configuration file path, optional (default: config.yaml)",
    )

    parser.add_argument(
        "--once",
        action="store_true",
        help="Run a single pass for each enabled family and exit",
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show which records would be updated without changing them (implies --once)",
    )

    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )

    args = parser.parse_args(argv)

    load_dotenv()

    try:
        config = load_config(args.config)
    except ConfigurationError as e:
        console.print(f"[red]Error: {e}[/red]")
        logger.error(f"Missing or invalid configuration: {e}")
        sys.exit(1)

    config_logger(config, verbose=args.verbose)
    logger.info(config.summary())
    _display_configuration(config)

    updater = build_updater(config)

    if args.once or args.dry_run:
        results = updater.run_tick(dry_run=args.dry_run)
        _display_results(results)
        sys.exit(1 if any(result.failed for result in results) else 0)

    scheduler = UpdateScheduler(updater, config.cron)
    try:
        scheduler.start()
    except (KeyboardInterrupt, SystemExit):
        logger.info("Shutting down")
        scheduler.shutdown()
    sys.exit(0)


def build_updater(config: Configuration) -> DNSUpdater:
    """Wire the provider and resolver for a configuration."""
    provider = CloudflareProvider(
        config.api_token,
        api_base=config.api_base,
        timeout=config.request_timeout,
    )
    resolver = IPResolver(config.ip_endpoints, timeout=config.request_timeout)
    return DNSUpdater(config, provider, resolver)


def config_logger(config: Configuration, verbose: bool = False):
    """Configure logging."""
    level = "DEBUG" if verbose else config.log_level
    handlers = [logging.StreamHandler(sys.stdout)]
    if config.log_file:
        handlers.append(logging.FileHandler(config.log_file))

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
    )
    # APScheduler logs every job run at INFO
    if not verbose:
        logging.getLogger("apscheduler").setLevel(logging.WARNING)


def _display_configuration(config: Configuration):
    """Display the effective settings."""
    table = Table(title="DNS Records Updater")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="white")

    for key, value in config.summary().items():
        if isinstance(value, list):
            value = ", ".join(value)
        table.add_row(key, str(value))

    console.print(table)


def _display_results(results: List[PassResult]):
    """Display a summary of the passes of one tick."""
    table = Table(title="Update Summary")
    table.add_column("Family", style="cyan")
    table.add_column("Status", style="magenta")
    table.add_column("Address", style="white")
    table.add_column("Records", style="green")
    table.add_column("Missing", style="yellow")

    for result in results:
        status = result.status
        if result.error is not None:
            status = f"{status}: {result.error}"
        elif result.warning is not None:
            status = f"{status} (partial)"
        table.add_row(
            result.family.label,
            status,
            result.ip or "-",
            ", ".join(result.updated) or "-",
            ", ".join(result.missing) or "-",
        )

    console.print(table)


if __name__ == "__main__":
    main()
