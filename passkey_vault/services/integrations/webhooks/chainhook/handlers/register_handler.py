"""Handler for passkey registrations."""

from passkey_vault.services.communication.discord import DiscordColors
from passkey_vault.services.integrations.webhooks.chainhook.handlers.base import (
    ChainhookEventHandler,
)
from passkey_vault.services.integrations.webhooks.chainhook.models import EventContext


class RegisterHandler(ChainhookEventHandler):
    """Announces new passkey registrations. Rollbacks are only logged."""

    function_names = ("register-passkey",)

    async def handle_apply(self, context: EventContext) -> None:
        self.log_event("🔑 Passkey Registered!", context)

        await self.notify(
            context,
            title="🔑 New Passkey Registered",
            description="A new user registered their passkey for biometric NFT minting",
            color=DiscordColors.REGISTER,
        )

    async def handle_rollback(self, context: EventContext) -> None:
        self.log_event("⚠️ Registration rolled back", context)
