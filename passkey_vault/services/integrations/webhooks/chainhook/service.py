"""Chainhook webhook service implementation."""

from typing import Optional

from passkey_vault.config import ChainhookSettings
from passkey_vault.lib.events import EventRecorder
from passkey_vault.services.communication.discord import create_discord_service
from passkey_vault.services.integrations.webhooks.base import WebhookService
from passkey_vault.services.integrations.webhooks.chainhook.handler import (
    ChainhookHandler,
)
from passkey_vault.services.integrations.webhooks.chainhook.handlers import (
    MintStore,
    Notifier,
)
from passkey_vault.services.integrations.webhooks.chainhook.models import (
    ChainhookPayload,
    IngestionSummary,
)
from passkey_vault.services.integrations.webhooks.chainhook.parser import (
    ChainhookParser,
)
from passkey_vault.services.integrations.webhooks.chainhook.processor import (
    BlockProcessor,
)
from passkey_vault.services.integrations.webhooks.chainhook.registry import (
    HandlerRegistry,
)
from passkey_vault.services.integrations.webhooks.chainhook.tracker import (
    BlockDeliveryTracker,
)


class ChainhookService(WebhookService[ChainhookPayload, IngestionSummary]):
    """Service for handling Chainhook webhooks.

    This service wires the parser, handler registry, block processor and
    ingestion handler together from one `ChainhookSettings` instance.
    """

    def __init__(
        self,
        settings: ChainhookSettings,
        recorder: Optional[EventRecorder] = None,
        notifier: Optional[Notifier] = None,
        mint_store: Optional[MintStore] = None,
        registry: Optional[HandlerRegistry] = None,
    ):
        """Initialize the Chainhook service with parser and handler components.

        Args:
            settings: Contract, network, notification and dedup settings
            recorder: Event sink shared by all components
            notifier: Notification sink; defaults to a DiscordService
            mint_store: Optional storage for mint records
            registry: Handler table; defaults to mint/transfer/register
        """
        self.settings = settings
        self.recorder = recorder or EventRecorder()
        self.notifier = notifier or create_discord_service(settings, self.recorder)
        self.registry = registry or HandlerRegistry.default(
            notifier=self.notifier, recorder=self.recorder, mint_store=mint_store
        )
        self.tracker = BlockDeliveryTracker() if settings.deduplicate_blocks else None

        processor = BlockProcessor(
            contract_id=settings.contract_id,
            registry=self.registry,
            recorder=self.recorder,
        )
        handler = ChainhookHandler(
            processor=processor, tracker=self.tracker, recorder=self.recorder
        )
        super().__init__(parser=ChainhookParser(), handler=handler)
