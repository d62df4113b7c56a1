"""Selects the contract calls of a transaction that concern the tracked contract."""

from typing import List

from passkey_vault.services.integrations.webhooks.chainhook.models import (
    ContractCall,
    TxEvent,
)


def classify(tx: TxEvent, tracked_contract_id: str) -> List[ContractCall]:
    """Return the calls in `tx` made against `tracked_contract_id`, in order.

    Failed transactions never yield calls.
    """
    if not tx.succeeded:
        return []
    return [call for call in tx.contract_calls if call.contract_id == tracked_contract_id]


def is_relevant(tx: TxEvent, tracked_contract_id: str) -> bool:
    """Whether `tx` succeeded and touches the tracked contract at least once."""
    return tx.succeeded and any(
        call.contract_id == tracked_contract_id for call in tx.contract_calls
    )
