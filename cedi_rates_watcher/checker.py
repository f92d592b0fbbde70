"""Exchange rate change detection and notification orchestration."""

from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal
from typing import Optional

from .api_client import CediRatesClient
from .config import Config
from .models import BUY, SELL, ChannelRate, RunSummary, StoredRate, is_empty_rate
from .notifier import WhatsAppNotifier
from .state_manager import RateStore, RedisRateStore

logger = logging.getLogger(__name__)


class RateChangeChecker:
    """Coordinate fetching, diffing, notifications and persistence."""

    def __init__(
        self,
        config: Config,
        api_client: Optional[CediRatesClient] = None,
        notifier: Optional[WhatsAppNotifier] = None,
        store: Optional[RateStore] = None,
    ) -> None:
        self.config = config
        self.api_client = api_client or CediRatesClient(config)
        self.notifier = notifier or WhatsAppNotifier(config)
        self.store: RateStore = store or RedisRateStore(config)

    def run(self, moment: Optional[datetime] = None) -> Optional[RunSummary]:
        """Check every watched channel once. Returns ``None`` when the fetch failed."""
        if not self.config.watch_list:
            logger.warning("Watch list is empty, nothing to check")

        result = self.api_client.fetch_rates(moment)
        if not result.ok:
            logger.error("API call failed: %s", result.error)
            return None

        summary = RunSummary()
        for slug in self.config.watch_list:
            channel = result.rates.get(slug)
            if channel is None:
                logger.warning("Channel %s not found in today's API response.", slug)
                summary.missing += 1
                continue
            self._check_channel(channel, summary)

        self.store.mark_run()
        logger.info("Rate check finished: %s", summary)
        return summary

    def _check_channel(self, channel: ChannelRate, summary: RunSummary) -> None:
        summary.checked += 1
        existing = self.store.find_by_slug(channel.slug)
        stored = existing or StoredRate(channel_slug=channel.slug)

        for side in (BUY, SELL):
            new_rate = channel.get_side(side)
            if existing is not None and stored.get_side(side) != new_rate:
                self._process_change(channel.name, side, new_rate, stored, summary)
            elif existing is None:
                stored.set_side(side, new_rate)

        if existing is None:
            logger.info("Seeded rates for new channel %s", channel.name)
            summary.seeded += 1

        stored.channel_name = channel.name
        self.store.upsert(stored)

    def _process_change(
        self,
        channel_name: str,
        side: str,
        new_rate: Optional[Decimal],
        stored: StoredRate,
        summary: RunSummary,
    ) -> None:
        # Zero or missing rates are bad upstream data, not a real change.
        if is_empty_rate(new_rate):
            logger.debug("Ignoring empty %s rate for %s", side, channel_name)
            return

        old_rate = stored.get_side(side)
        logger.info("Rate change detected for %s (%s): %s -> %s", channel_name, side, old_rate, new_rate)

        sent = self.notifier.send_rate_change(channel_name, side, old_rate, new_rate)
        if sent.ok:
            stored.set_side(side, new_rate)
            self.store.upsert(stored)
            summary.notified += 1
            logger.info("Notification sent and rates updated.")
        else:
            summary.failed += 1
            logger.error(
                "Failed to send WhatsApp for %s (%s): %s. Rates not updated (will retry next run).",
                channel_name,
                side,
                sent.error,
            )
