"""Handler for passkey NFT mints."""

from abc import ABC, abstractmethod
from typing import Optional

from passkey_vault.lib.events import EventRecorder
from passkey_vault.services.communication.discord import DiscordColors
from passkey_vault.services.integrations.webhooks.chainhook.handlers.base import (
    ChainhookEventHandler,
    Notifier,
)
from passkey_vault.services.integrations.webhooks.chainhook.models import EventContext


class MintStore(ABC):
    """Storage for mint records, provided by the embedding application."""

    @abstractmethod
    async def record_mint(self, tx_hash: str, block_height: int) -> None:
        pass

    @abstractmethod
    async def revert_mint(self, tx_hash: str, block_height: int) -> None:
        pass


class MintHandler(ChainhookEventHandler):
    """Announces mints, and announces again when a reorg undoes one."""

    function_names = ("mint-with-passkey",)

    def __init__(
        self,
        notifier: Optional[Notifier] = None,
        recorder: Optional[EventRecorder] = None,
        mint_store: Optional[MintStore] = None,
    ):
        super().__init__(notifier=notifier, recorder=recorder)
        self.mint_store = mint_store

    async def handle_apply(self, context: EventContext) -> None:
        self.log_event("🎨 NFT Minted!", context)

        await self.notify(
            context,
            title="🎨 New NFT Minted!",
            description="A new Passkey NFT has been minted with biometric authentication",
            color=DiscordColors.MINT,
        )

        if self.mint_store is not None:
            await self.mint_store.record_mint(context.tx_hash, context.block_height)

    async def handle_rollback(self, context: EventContext) -> None:
        self.log_event("⚠️ Mint rolled back", context)

        await self.notify(
            context,
            title="⚠️ NFT Mint Rolled Back",
            description="A mint transaction was rolled back due to a chain reorganization",
            color=DiscordColors.ROLLBACK,
        )

        if self.mint_store is not None:
            await self.mint_store.revert_mint(context.tx_hash, context.block_height)
