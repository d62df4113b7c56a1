"""
Discord service package for sending chainhook notifications via webhooks.
"""

from passkey_vault.services.communication.discord.discord_factory import (
    create_discord_service,
)
from passkey_vault.services.communication.discord.discord_service import (
    DiscordColors,
    DiscordService,
    Notification,
)

__all__ = ["DiscordColors", "DiscordService", "Notification", "create_discord_service"]
