from typing import Optional

import httpx

from passkey_vault.config import ChainhookSettings
from passkey_vault.lib.events import EventRecorder
from passkey_vault.services.communication.discord.discord_service import DiscordService


def create_discord_service(
    settings: ChainhookSettings,
    recorder: Optional[EventRecorder] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> DiscordService:
    """Build a DiscordService from chainhook settings."""
    return DiscordService(
        webhook_url=settings.discord_webhook_url,
        network=settings.network,
        timeout_seconds=settings.discord_timeout_seconds,
        bot_name=settings.discord_bot_name or None,
        recorder=recorder,
        transport=transport,
    )
