"""Chainhook webhook module.

This module provides components for parsing and handling Chainhook webhook payloads.
"""

from passkey_vault.services.integrations.webhooks.chainhook.classifier import (
    classify,
    is_relevant,
)
from passkey_vault.services.integrations.webhooks.chainhook.exceptions import (
    ChainhookError,
    PayloadValidationError,
)
from passkey_vault.services.integrations.webhooks.chainhook.handler import (
    ChainhookHandler,
)
from passkey_vault.services.integrations.webhooks.chainhook.handlers import (
    ChainhookEventHandler,
    MintHandler,
    MintStore,
    RegisterHandler,
    TransferHandler,
)
from passkey_vault.services.integrations.webhooks.chainhook.models import (
    BlockEvent,
    ChainhookPayload,
    ContractCall,
    Direction,
    EventContext,
    IngestionSummary,
    TxEvent,
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
from passkey_vault.services.integrations.webhooks.chainhook.service import (
    ChainhookService,
)
from passkey_vault.services.integrations.webhooks.chainhook.tracker import (
    BlockDeliveryTracker,
)

__all__ = [
    "ChainhookService",
    "ChainhookParser",
    "ChainhookHandler",
    "ChainhookPayload",
    "ChainhookError",
    "PayloadValidationError",
    "BlockProcessor",
    "BlockDeliveryTracker",
    "HandlerRegistry",
    "ChainhookEventHandler",
    "MintHandler",
    "MintStore",
    "TransferHandler",
    "RegisterHandler",
    "BlockEvent",
    "TxEvent",
    "ContractCall",
    "Direction",
    "EventContext",
    "IngestionSummary",
    "classify",
    "is_relevant",
]
