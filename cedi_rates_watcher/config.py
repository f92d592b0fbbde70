"""Application configuration and logging setup."""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, Tuple

from dotenv import load_dotenv

load_dotenv()

DEFAULT_LOG_FILE = "logs/cedi_rates_watcher.log"
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"

logging.basicConfig(
    level=logging.INFO,
    format=LOG_FORMAT,
    handlers=[logging.StreamHandler(sys.stdout)],
)


def _env_bool(name: str, default: str = "False") -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


def _split_watch_list(raw: Optional[str]) -> Tuple[str, ...]:
    if not raw:
        return ()
    return tuple(slug.strip() for slug in raw.split(",") if slug.strip())


@dataclass(frozen=True)
class Config:
    """Configuration values sourced from the environment."""

    watch_list: Tuple[str, ...] = ()
    currency_key: str = "dollarRates"
    api_url: str = "https://api.cedirates.com/api/v1/exchangeRates"
    timezone: str = "Africa/Accra"
    request_timeout: float = 10.0
    whatsapp_token: Optional[str] = None
    whatsapp_phone_id: Optional[str] = None
    whatsapp_to_number: Optional[str] = None
    whatsapp_api_version: str = "v17.0"
    whatsapp_template_name: str = "rates_monitor"
    whatsapp_template_language: str = "en"
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    redis_password: Optional[str] = field(default=None, repr=False)
    redis_ssl: bool = False
    redis_key_prefix: str = "cedirates:"
    log_file: Optional[str] = DEFAULT_LOG_FILE
    healthcheck_max_age: int = 900

    @classmethod
    def from_env(cls) -> "Config":
        return cls(
            watch_list=_split_watch_list(os.getenv("WATCH_LIST")),
            currency_key=os.getenv("CURRENCY_KEY", "dollarRates"),
            api_url=os.getenv(
                "CEDIRATES_API_URL", "https://api.cedirates.com/api/v1/exchangeRates"
            ).rstrip("/"),
            timezone=os.getenv("RATES_TIMEZONE", "Africa/Accra"),
            request_timeout=float(os.getenv("REQUEST_TIMEOUT", "10")),
            whatsapp_token=os.getenv("WHATSAPP_TOKEN"),
            whatsapp_phone_id=os.getenv("WHATSAPP_PHONE_ID"),
            whatsapp_to_number=os.getenv("WHATSAPP_TO_NUMBER"),
            whatsapp_api_version=os.getenv("WHATSAPP_API_VERSION", "v17.0"),
            whatsapp_template_name=os.getenv("WHATSAPP_TEMPLATE_NAME", "rates_monitor"),
            whatsapp_template_language=os.getenv("WHATSAPP_TEMPLATE_LANGUAGE", "en"),
            redis_host=os.getenv("REDIS_HOST", "localhost"),
            redis_port=int(os.getenv("REDIS_PORT", "6379")),
            redis_db=int(os.getenv("REDIS_DB", "0")),
            redis_password=os.getenv("REDIS_PASSWORD"),
            redis_ssl=_env_bool("REDIS_SSL"),
            redis_key_prefix=os.getenv("REDIS_KEY_PREFIX", "cedirates:"),
            log_file=log_file_from_env(),
            healthcheck_max_age=int(os.getenv("HEALTHCHECK_MAX_AGE", "900")),
        )

    @property
    def whatsapp_messages_url(self) -> str:
        return (
            f"https://graph.facebook.com/{self.whatsapp_api_version}"
            f"/{self.whatsapp_phone_id}/messages"
        )


def log_file_from_env() -> Optional[str]:
    return os.getenv("LOG_FILE", DEFAULT_LOG_FILE) or None


def configure_file_logging(log_file: Optional[str], level: int = logging.ERROR) -> Optional[logging.Handler]:
    """Attach the application log file handler to the root logger.

    When the file cannot be opened the stdout handler stays the only one.
    """
    if not log_file:
        return None
    path = Path(log_file)
    root = logging.getLogger()
    for handler in root.handlers:
        if isinstance(handler, logging.FileHandler) and Path(handler.baseFilename) == path.resolve():
            return handler
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path, encoding="utf-8")
    except OSError as exc:
        logging.getLogger(__name__).warning("Cannot open log file %s, logging to stdout only: %s", path, exc)
        return None
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    return handler


HEADERS: Dict[str, str] = {
    "Accept": "application/json",
}
