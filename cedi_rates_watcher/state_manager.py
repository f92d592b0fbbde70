"""Redis-backed storage for the last notified exchange rates."""

from __future__ import annotations

import logging
import time
from typing import Optional, Protocol

import redis

from .config import Config
from .models import StoredRate

logger = logging.getLogger(__name__)


class RateStore(Protocol):
    def find_by_slug(self, slug: str) -> Optional[StoredRate]: ...

    def upsert(self, record: StoredRate) -> None: ...

    def mark_run(self, timestamp: Optional[float] = None) -> None: ...


def create_redis_client(config: Config) -> redis.Redis:
    return redis.Redis(
        host=config.redis_host,
        port=config.redis_port,
        db=config.redis_db,
        password=config.redis_password,
        decode_responses=True,
        ssl=config.redis_ssl,
        socket_connect_timeout=3,
        socket_timeout=3,
    )


class RedisRateStore:
    """Look up and upsert one stored rate record per channel slug."""

    def __init__(self, config: Config, client: Optional[redis.Redis] = None) -> None:
        self.prefix = config.redis_key_prefix
        if client is not None:
            self.redis_client = client
            return
        try:
            self.redis_client = create_redis_client(config)
            self.redis_client.ping()
            logger.info("Connected to Redis successfully")
        except Exception as exc:  # noqa: BLE001 - Keep broad except but log.
            logger.error("Failed to connect to Redis: %s", exc)
            raise

    def _rate_key(self, slug: str) -> str:
        return f"{self.prefix}rate:{slug}"

    @property
    def last_run_key(self) -> str:
        return f"{self.prefix}last_run"

    def find_by_slug(self, slug: str) -> Optional[StoredRate]:
        data = self.redis_client.hgetall(self._rate_key(slug))
        if not data:
            return None
        data.setdefault("channel_slug", slug)
        return StoredRate.from_redis(data)

    def upsert(self, record: StoredRate) -> None:
        self.redis_client.hset(self._rate_key(record.channel_slug), mapping=record.to_redis())
        logger.debug("Saved rates for %s", record.channel_slug)

    def mark_run(self, timestamp: Optional[float] = None) -> None:
        self.redis_client.set(self.last_run_key, str(timestamp if timestamp is not None else time.time()))

    def last_run(self) -> Optional[float]:
        raw = self.redis_client.get(self.last_run_key)
        if raw is None:
            return None
        try:
            return float(raw)
        except ValueError:
            logger.warning("Ignoring malformed last run timestamp: %s", raw)
            return None
