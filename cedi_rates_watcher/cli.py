"""Command-line interface for the Cedi rates watcher."""

from __future__ import annotations

import logging

import click

from .checker import RateChangeChecker
from .config import Config, configure_file_logging, log_file_from_env

logger = logging.getLogger(__name__)


@click.command()
def main() -> None:
    """Check CediRates and notify via WhatsApp on change."""
    try:
        configure_file_logging(log_file_from_env())
        config = Config.from_env()
        checker = RateChangeChecker(config)
        summary = checker.run()
    except Exception as exc:  # noqa: BLE001
        logger.exception("Rate check error: %s", exc)
        click.secho(f"Rate check error: {exc}", fg="red", err=True)
        return

    if summary is None:
        click.secho("Rate check aborted: exchange rate API call failed.", fg="red", err=True)
    else:
        click.echo(f"Rate check complete: {summary}")
