"""HTTP client for the CediRates exchange-rate API."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, Optional
from zoneinfo import ZoneInfo

import requests

from .config import HEADERS, Config
from .models import ChannelRate, FetchResult

logger = logging.getLogger(__name__)


def format_rate_date(moment: datetime) -> str:
    """Render a date as ``day-month-year`` without zero padding, e.g. ``27-1-2026``."""
    return f"{moment.day}-{moment.month}-{moment.year}"


def index_by_slug(entries: Any, currency_key: str) -> Dict[str, ChannelRate]:
    rates: Dict[str, ChannelRate] = {}
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        rate = ChannelRate.from_api(entry, currency_key)
        if not rate.slug:
            logger.debug("Skipping exchange rate entry without company url")
            continue
        rates[rate.slug] = rate
    return rates


class CediRatesClient:
    """Fetch the daily exchange rates published by CediRates."""

    def __init__(self, config: Config, session: Optional[requests.Session] = None) -> None:
        self.config = config
        self.session = session or requests.Session()
        self.session.headers.update(HEADERS)

    def now(self) -> datetime:
        return datetime.now(ZoneInfo(self.config.timezone))

    def build_url(self, moment: Optional[datetime] = None) -> str:
        moment = moment or self.now()
        if moment.tzinfo is not None:
            moment = moment.astimezone(ZoneInfo(self.config.timezone))
        return f"{self.config.api_url}/{format_rate_date(moment)}"

    def fetch_rates(self, moment: Optional[datetime] = None) -> FetchResult:
        url = self.build_url(moment)
        logger.info("Checking URL: %s", url)
        try:
            response = self.session.get(url, timeout=self.config.request_timeout)
        except requests.RequestException as exc:
            logger.error("Exchange rate API request failed: %s", exc)
            return FetchResult(ok=False, error=str(exc))

        if not response.ok:
            logger.error("API call failed with status %s: %s", response.status_code, response.text)
            return FetchResult(ok=False, error=f"HTTP {response.status_code}")

        try:
            payload = response.json()
        except ValueError as exc:
            logger.error("Exchange rate API returned invalid JSON: %s", exc)
            return FetchResult(ok=False, error="invalid JSON")

        entries = payload.get("exchangeRates") if isinstance(payload, dict) else None
        if not isinstance(entries, list):
            logger.error("Exchange rate API response has no exchangeRates list")
            return FetchResult(ok=False, error="missing exchangeRates")

        rates = index_by_slug(entries, self.config.currency_key)
        logger.info("Retrieved %s exchange rate entries", len(rates))
        return FetchResult(ok=True, rates=rates)
