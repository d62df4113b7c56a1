"""Chainhook webhook handlers module.

This module contains the handlers for the tracked contract's functions.
"""

from passkey_vault.services.integrations.webhooks.chainhook.handlers.base import (
    ChainhookEventHandler,
    Notifier,
)
from passkey_vault.services.integrations.webhooks.chainhook.handlers.mint_handler import (
    MintHandler,
    MintStore,
)
from passkey_vault.services.integrations.webhooks.chainhook.handlers.register_handler import (
    RegisterHandler,
)
from passkey_vault.services.integrations.webhooks.chainhook.handlers.transfer_handler import (
    TransferHandler,
)

__all__ = [
    "ChainhookEventHandler",
    "Notifier",
    "MintHandler",
    "MintStore",
    "TransferHandler",
    "RegisterHandler",
]
