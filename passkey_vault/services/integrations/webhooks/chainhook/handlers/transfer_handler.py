"""Handler for passkey NFT transfers."""

from passkey_vault.services.communication.discord import DiscordColors
from passkey_vault.services.integrations.webhooks.chainhook.handlers.base import (
    ChainhookEventHandler,
)
from passkey_vault.services.integrations.webhooks.chainhook.models import EventContext


class TransferHandler(ChainhookEventHandler):
    """Announces transfers. A rolled-back transfer is only logged."""

    function_names = ("transfer-with-passkey", "transfer")

    async def handle_apply(self, context: EventContext) -> None:
        self.log_event("📦 NFT Transferred!", context)

        await self.notify(
            context,
            title="📦 NFT Transferred",
            description="An NFT was transferred using passkey authentication",
            color=DiscordColors.TRANSFER,
        )

    async def handle_rollback(self, context: EventContext) -> None:
        self.log_event("⚠️ Transfer rolled back", context)
