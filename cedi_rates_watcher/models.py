"""Domain models used by the application."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Optional

BUY = "Buy"
SELL = "Sell"


def parse_rate(value: Any) -> Optional[Decimal]:
    """Convert an API or stored rate value to ``Decimal``; unusable values become ``None``."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip().replace(",", "")
        if not value:
            return None
    try:
        rate = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None
    if not rate.is_finite():
        return None
    return rate


def format_rate(rate: Optional[Decimal]) -> str:
    if rate is None:
        return ""
    text = format(rate, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text or "0"


def is_empty_rate(rate: Optional[Decimal]) -> bool:
    return rate is None or rate == 0


@dataclass
class StoredRate:
    channel_slug: str
    channel_name: str = ""
    buy_rate: Optional[Decimal] = None
    sell_rate: Optional[Decimal] = None

    def get_side(self, side: str) -> Optional[Decimal]:
        return self.buy_rate if side == BUY else self.sell_rate

    def set_side(self, side: str, rate: Optional[Decimal]) -> None:
        if side == BUY:
            self.buy_rate = rate
        else:
            self.sell_rate = rate

    def to_redis(self) -> Dict[str, str]:
        return {
            "channel_slug": self.channel_slug,
            "channel_name": self.channel_name,
            "buy_rate": format_rate(self.buy_rate),
            "sell_rate": format_rate(self.sell_rate),
        }

    @staticmethod
    def from_redis(data: Dict[str, str]) -> "StoredRate":
        return StoredRate(
            channel_slug=data["channel_slug"],
            channel_name=data.get("channel_name", ""),
            buy_rate=parse_rate(data.get("buy_rate")),
            sell_rate=parse_rate(data.get("sell_rate")),
        )


@dataclass(frozen=True)
class ChannelRate:
    slug: str
    name: str
    buy_rate: Optional[Decimal]
    sell_rate: Optional[Decimal]

    def get_side(self, side: str) -> Optional[Decimal]:
        return self.buy_rate if side == BUY else self.sell_rate

    @staticmethod
    def from_api(entry: Dict[str, Any], currency_key: str) -> "ChannelRate":
        company = entry.get("company") or {}
        rates = entry.get(currency_key) or {}
        return ChannelRate(
            slug=str(company.get("url", "")),
            name=str(company.get("companyName") or company.get("url", "")),
            buy_rate=parse_rate(rates.get("buyingRate")),
            sell_rate=parse_rate(rates.get("sellingRate")),
        )


@dataclass(frozen=True)
class FetchResult:
    ok: bool
    rates: Dict[str, ChannelRate] = field(default_factory=dict)
    error: Optional[str] = None


@dataclass(frozen=True)
class NotifyResult:
    ok: bool
    error: Optional[str] = None


@dataclass
class RunSummary:
    checked: int = 0
    missing: int = 0
    seeded: int = 0
    notified: int = 0
    failed: int = 0

    def __str__(self) -> str:
        return (
            f"checked={self.checked} missing={self.missing} seeded={self.seeded} "
            f"notified={self.notified} failed={self.failed}"
        )
