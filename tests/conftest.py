"""Shared fixtures for the chainhook tests."""

from typing import Any, Dict, List, Optional

import pytest

from passkey_vault.config import DEFAULT_CONTRACT_ID, ChainhookSettings
from passkey_vault.lib.events import EventRecorder

OTHER_CONTRACT_ID = "SP000000000000000000002Q6VF78.some-other-contract"


class RecordingNotifier:
    """Notifier double that keeps every notification it is given."""

    def __init__(self):
        self.sent = []

    async def send_notification(self, notification) -> None:
        self.sent.append(notification)

    def titles(self) -> List[str]:
        return [n.title for n in self.sent]


def make_call(
    function_name: str,
    contract_id: str = DEFAULT_CONTRACT_ID,
    args: Optional[List[Any]] = None,
) -> Dict[str, Any]:
    call = {"contract_identifier": contract_id, "function_name": function_name}
    if args is not None:
        call["function_args"] = args
    return call


def make_tx(
    tx_hash: str, calls: List[Dict[str, Any]], success: Optional[bool] = True
) -> Dict[str, Any]:
    metadata: Dict[str, Any] = {"receipt": {"contract_calls_stack": calls}}
    if success is not None:
        metadata["success"] = success
    return {"transaction_identifier": {"hash": tx_hash}, "metadata": metadata}


def make_block(
    index: int, transactions: List[Dict[str, Any]], block_hash: Optional[str] = None
) -> Dict[str, Any]:
    return {
        "block_identifier": {"index": index, "hash": block_hash or f"0xblock{index}"},
        "timestamp": 1700000000 + index,
        "transactions": transactions,
    }


def make_payload(
    apply: Optional[List[Dict[str, Any]]] = None,
    rollback: Optional[List[Dict[str, Any]]] = None,
    uuid: str = "7c9a1f52-chainhook",
) -> Dict[str, Any]:
    return {
        "apply": apply or [],
        "rollback": rollback or [],
        "chainhook": {"uuid": uuid, "predicate": {"scope": "contract_call"}},
    }


class PayloadBuilder:
    """Namespace handed to tests through the `chainhook_payload` fixture."""

    call = staticmethod(make_call)
    tx = staticmethod(make_tx)
    block = staticmethod(make_block)
    payload = staticmethod(make_payload)


@pytest.fixture
def chainhook_payload() -> PayloadBuilder:
    return PayloadBuilder()


@pytest.fixture
def mint_block() -> Dict[str, Any]:
    """Block 150 with one successful mint-with-passkey call."""
    return make_block(
        150,
        [
            make_tx(
                "0x8f3c2a1b9d4e5f60718293a4b5c6d7e8f9a0b1c2d3e4f5061728394a5b6c7d8e",
                [make_call("mint-with-passkey", args=["u1"])],
            )
        ],
    )


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def recorder() -> EventRecorder:
    return EventRecorder(log_events=False)


@pytest.fixture
def settings() -> ChainhookSettings:
    return ChainhookSettings(
        contract_id=DEFAULT_CONTRACT_ID,
        network="mainnet",
        auth_token="secret-token",
        discord_webhook_url="",
        deduplicate_blocks=True,
    )
