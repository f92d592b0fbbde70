# tests/conftest.py
"""Shared fixtures: a test configuration, an in-memory rate store and API payload builders."""
from __future__ import annotations

from decimal import Decimal
from typing import Dict, List, Optional

import pytest

from cedi_rates_watcher.config import Config
from cedi_rates_watcher.models import StoredRate


class InMemoryRateStore:
    """Dict-backed stand-in for RedisRateStore."""

    def __init__(self, records: Optional[List[StoredRate]] = None) -> None:
        self.records: Dict[str, StoredRate] = {}
        self.upserts: List[StoredRate] = []
        self.runs: List[Optional[float]] = []
        for record in records or []:
            self.records[record.channel_slug] = StoredRate(**vars(record))

    def find_by_slug(self, slug: str) -> Optional[StoredRate]:
        record = self.records.get(slug)
        return StoredRate(**vars(record)) if record else None

    def upsert(self, record: StoredRate) -> None:
        snapshot = StoredRate(**vars(record))
        self.records[record.channel_slug] = snapshot
        self.upserts.append(snapshot)

    def mark_run(self, timestamp: Optional[float] = None) -> None:
        self.runs.append(timestamp)


def make_entry(slug: str, name: str, buy=None, sell=None, currency_key: str = "dollarRates") -> dict:
    return {
        "company": {"url": slug, "companyName": name},
        currency_key: {"buyingRate": buy, "sellingRate": sell},
        "euroRates": {"buyingRate": 99.0, "sellingRate": 100.0},
    }


@pytest.fixture
def config() -> Config:
    return Config(
        watch_list=("lemfi", "afriex"),
        whatsapp_token="token-123",
        whatsapp_phone_id="555000",
        whatsapp_to_number="233200000000",
        log_file=None,
    )


@pytest.fixture
def store() -> InMemoryRateStore:
    return InMemoryRateStore(
        [
            StoredRate("lemfi", "LemFi", Decimal("10.0"), Decimal("11.0")),
        ]
    )
