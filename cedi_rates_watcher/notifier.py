"""WhatsApp notification helper."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Dict, Optional

import requests

from .config import Config
from .models import NotifyResult, format_rate

logger = logging.getLogger(__name__)


def build_template_payload(
    config: Config,
    channel: str,
    side: str,
    old_rate: Optional[Decimal],
    new_rate: Optional[Decimal],
) -> Dict[str, Any]:
    # Parameter order must match the template registered with Meta.
    return {
        "messaging_product": "whatsapp",
        "recipient_type": "individual",
        "to": config.whatsapp_to_number,
        "type": "template",
        "template": {
            "name": config.whatsapp_template_name,
            "language": {"code": config.whatsapp_template_language},
            "components": [
                {
                    "type": "header",
                    "parameters": [{"type": "text", "text": channel}],
                },
                {
                    "type": "body",
                    "parameters": [
                        {"type": "text", "text": side},
                        {"type": "text", "text": format_rate(old_rate)},
                        {"type": "text", "text": format_rate(new_rate)},
                        {"type": "text", "text": channel},
                    ],
                },
            ],
        },
    }


class WhatsAppNotifier:
    """Send rate change alerts through the WhatsApp Cloud API."""

    def __init__(self, config: Config, session: Optional[requests.Session] = None) -> None:
        self.config = config
        self.session = session or requests.Session()

    def send_rate_change(
        self,
        channel: str,
        side: str,
        old_rate: Optional[Decimal],
        new_rate: Optional[Decimal],
    ) -> NotifyResult:
        if not all(
            [
                self.config.whatsapp_token,
                self.config.whatsapp_phone_id,
                self.config.whatsapp_to_number,
            ]
        ):
            logger.error("WhatsApp credentials are not set.")
            return NotifyResult(ok=False, error="missing credentials")

        payload = build_template_payload(self.config, channel, side, old_rate, new_rate)
        try:
            response = self.session.post(
                self.config.whatsapp_messages_url,
                json=payload,
                headers={"Authorization": f"Bearer {self.config.whatsapp_token}"},
                timeout=self.config.request_timeout,
            )
            if response.ok:
                logger.info("WhatsApp notification sent for %s (%s)", channel, side)
                return NotifyResult(ok=True)
            logger.error("WhatsApp API error %s: %s", response.status_code, response.text)
            return NotifyResult(ok=False, error=f"HTTP {response.status_code}: {response.text}")
        except Exception as exc:  # noqa: BLE001
            logger.error("WhatsApp exception: %s", exc)
            return NotifyResult(ok=False, error=str(exc))
