from dataclasses import dataclass
from datetime import datetime, timezone
from enum import IntEnum
from typing import Any, Dict, Optional

import httpx

from passkey_vault.lib.events import EventRecorder
from passkey_vault.lib.logger import configure_logger
from passkey_vault.lib.utils import explorer_tx_url, short_hash

logger = configure_logger(__name__)


class DiscordColors(IntEnum):
    """Embed side-bar colors."""

    MINT = 0x00FF00
    TRANSFER = 0x0099FF
    REGISTER = 0x9B59B6
    ROLLBACK = 0xFFA500


@dataclass(frozen=True)
class Notification:
    """A message for the Discord channel about one on-chain event."""

    title: str
    description: str
    tx_hash: str
    block_height: int
    color: int


class DiscordService:
    """Best-effort Discord webhook client.

    `send_notification` never raises: a missing webhook URL makes it a no-op and
    transport errors or non-2xx responses are logged and dropped.
    """

    FOOTER_TEXT = "Passkey NFT Vault • Powered by Hiro Chainhooks"

    def __init__(
        self,
        webhook_url: str = "",
        network: str = "mainnet",
        timeout_seconds: float = 5.0,
        bot_name: Optional[str] = None,
        recorder: Optional[EventRecorder] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.webhook_url = webhook_url
        self.network = network
        self.timeout = httpx.Timeout(timeout_seconds, connect=min(2.0, timeout_seconds))
        self.bot_name = bot_name
        self.recorder = recorder or EventRecorder()
        self._transport = transport

    @property
    def is_configured(self) -> bool:
        return bool(self.webhook_url)

    def build_payload(self, notification: Notification) -> Dict[str, Any]:
        """Build the webhook body for a notification."""
        explorer_url = explorer_tx_url(notification.tx_hash, self.network)
        payload: Dict[str, Any] = {
            "embeds": [
                {
                    "title": notification.title,
                    "description": notification.description,
                    "color": int(notification.color),
                    "fields": [
                        {
                            "name": "Transaction",
                            "value": f"[`{short_hash(notification.tx_hash)}`]({explorer_url})",
                            "inline": True,
                        },
                        {
                            "name": "Block Height",
                            "value": f"#{notification.block_height}",
                            "inline": True,
                        },
                    ],
                    "timestamp": datetime.now(timezone.utc).isoformat(),
                    "footer": {"text": self.FOOTER_TEXT},
                }
            ]
        }
        if self.bot_name:
            payload["username"] = self.bot_name
        return payload

    async def send_notification(self, notification: Notification) -> None:
        """Post a notification to the configured webhook."""
        event_data = {
            "title": notification.title,
            "tx_hash": notification.tx_hash,
            "block_height": notification.block_height,
        }

        if not self.is_configured:
            logger.info("Discord webhook not configured, skipping notification")
            self.recorder.record("notification_skipped", **event_data)
            return

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                response = await client.post(
                    self.webhook_url, json=self.build_payload(notification)
                )
        except httpx.TimeoutException as e:
            logger.error(
                "Discord notification timed out",
                extra={"tx_hash": notification.tx_hash, "error": str(e) or "timeout"},
            )
            self.recorder.record("notification_failed", error="timeout", **event_data)
            return
        except httpx.HTTPError as e:
            logger.error(
                "Failed to send Discord notification",
                extra={"tx_hash": notification.tx_hash, "error": str(e)},
            )
            self.recorder.record("notification_failed", error=str(e), **event_data)
            return
        except Exception as e:
            logger.error(
                f"Unexpected error sending Discord notification: {str(e)}",
                extra={"tx_hash": notification.tx_hash},
                exc_info=True,
            )
            self.recorder.record("notification_failed", error=str(e), **event_data)
            return

        if response.is_success:
            logger.info(
                f"Discord notification sent: {notification.title}",
                extra={"tx_hash": notification.tx_hash},
            )
            self.recorder.record(
                "notification_sent", status_code=response.status_code, **event_data
            )
        else:
            logger.error(
                f"Discord notification failed with status {response.status_code}",
                extra={"tx_hash": notification.tx_hash, "response_body": response.text[:200]},
            )
            self.recorder.record(
                "notification_failed", status_code=response.status_code, **event_data
            )
