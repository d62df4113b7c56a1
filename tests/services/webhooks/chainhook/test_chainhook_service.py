"""Tests for the chainhook service: apply and rollback phases end to end."""

import asyncio
from dataclasses import replace
from unittest.mock import AsyncMock

import pytest

from passkey_vault.services.integrations.webhooks.chainhook import (
    ChainhookService,
    PayloadValidationError,
)
from passkey_vault.services.integrations.webhooks.chainhook.models import (
    Direction,
    IngestionSummary,
)

MINTED = "🎨 New NFT Minted!"
MINT_ROLLED_BACK = "⚠️ NFT Mint Rolled Back"


@pytest.fixture
def service(settings, notifier, recorder):
    return ChainhookService(settings, recorder=recorder, notifier=notifier)


@pytest.mark.asyncio
async def test_apply_mint(service, notifier, chainhook_payload, mint_block):
    summary = await service.process(chainhook_payload.payload(apply=[mint_block]))

    assert isinstance(summary, IngestionSummary)
    assert summary.to_response() == {
        "success": True,
        "processed": {"applied": 1, "rolledBack": 0},
    }
    assert notifier.titles() == [MINTED]


@pytest.mark.asyncio
async def test_rollback_mint(service, notifier, chainhook_payload, mint_block):
    summary = await service.process(chainhook_payload.payload(rollback=[mint_block]))

    assert summary.to_response()["processed"] == {"applied": 0, "rolledBack": 1}
    assert notifier.titles() == [MINT_ROLLED_BACK]


@pytest.mark.asyncio
async def test_apply_phase_runs_before_rollback_phase(
    service, notifier, chainhook_payload
):
    p = chainhook_payload
    rolled_back = p.block(
        151, [p.tx("0xold", [p.call("mint-with-passkey")])], block_hash="0xold151"
    )
    applied = p.block(
        151, [p.tx("0xnew", [p.call("mint-with-passkey")])], block_hash="0xnew151"
    )

    # Rollback list is listed first in the body but apply is still processed first
    body = {"rollback": [rolled_back], "apply": [applied], "chainhook": {"uuid": "u"}}
    summary = await service.process(body)

    assert [(n.title, n.tx_hash) for n in notifier.sent] == [
        (MINTED, "0xnew"),
        (MINT_ROLLED_BACK, "0xold"),
    ]
    assert [r.direction for r in summary.results] == [Direction.APPLY, Direction.ROLLBACK]


@pytest.mark.asyncio
async def test_blocks_processed_in_delivery_order(service, notifier, chainhook_payload):
    p = chainhook_payload
    blocks = [
        p.block(h, [p.tx(f"0xtx{h}", [p.call("register-passkey")])])
        for h in (152, 150, 151)
    ]

    await service.process(p.payload(apply=blocks))

    assert [n.block_height for n in notifier.sent] == [152, 150, 151]


@pytest.mark.asyncio
async def test_redelivered_payload_is_not_renotified(
    service, notifier, recorder, chainhook_payload, mint_block
):
    body = chainhook_payload.payload(apply=[mint_block])

    first = await service.process(body)
    second = await service.process(body)

    assert notifier.titles() == [MINTED]
    assert first.skipped == 0
    assert second.skipped == 1
    # Skipped blocks are still acknowledged to the indexer
    assert second.to_response()["processed"] == {"applied": 1, "rolledBack": 0}
    assert recorder.count("block_skipped") == 1


@pytest.mark.asyncio
async def test_reorg_sequence(service, notifier, chainhook_payload, mint_block):
    p = chainhook_payload

    await service.process(p.payload(apply=[mint_block]))
    await service.process(p.payload(rollback=[mint_block]))
    await service.process(p.payload(rollback=[mint_block]))
    await service.process(p.payload(apply=[mint_block]))

    assert notifier.titles() == [MINTED, MINT_ROLLED_BACK, MINTED]


@pytest.mark.asyncio
async def test_dedup_is_scoped_per_chainhook(service, notifier, chainhook_payload, mint_block):
    p = chainhook_payload

    await service.process(p.payload(apply=[mint_block], uuid="hook-a"))
    await service.process(p.payload(apply=[mint_block], uuid="hook-b"))

    assert notifier.titles() == [MINTED, MINTED]


@pytest.mark.asyncio
async def test_dedup_can_be_disabled(settings, notifier, recorder, chainhook_payload, mint_block):
    service = ChainhookService(
        replace(settings, deduplicate_blocks=False), recorder=recorder, notifier=notifier
    )
    body = chainhook_payload.payload(apply=[mint_block])

    await service.process(body)
    await service.process(body)

    assert service.tracker is None
    assert notifier.titles() == [MINTED, MINTED]


@pytest.mark.asyncio
async def test_malformed_payload_has_no_side_effects(
    service, notifier, chainhook_payload, mint_block
):
    body = chainhook_payload.payload(apply=[mint_block, {"transactions": []}])

    with pytest.raises(PayloadValidationError):
        await service.process(body)

    assert notifier.sent == []


@pytest.mark.asyncio
async def test_handler_error_does_not_fail_delivery(
    settings, recorder, chainhook_payload
):
    notifier = AsyncMock()
    notifier.send_notification.side_effect = [None, RuntimeError("discord down"), None]
    service = ChainhookService(settings, recorder=recorder, notifier=notifier)
    p = chainhook_payload
    block = p.block(
        150,
        [
            p.tx("0xtx1", [p.call("register-passkey")]),
            p.tx("0xtx2", [p.call("mint-with-passkey")]),
            p.tx("0xtx3", [p.call("transfer-with-passkey")]),
        ],
    )

    summary = await service.process(p.payload(apply=[block]))

    assert notifier.send_notification.await_count == 3
    assert summary.results[0].dispatched == 3
    assert recorder.count("notification_failed") == 1


@pytest.mark.asyncio
async def test_unexpected_error_propagates(service, chainhook_payload, mint_block):
    service.handler.processor.process_block = AsyncMock(side_effect=KeyError("state"))

    with pytest.raises(KeyError):
        await service.process(chainhook_payload.payload(apply=[mint_block]))


@pytest.mark.asyncio
async def test_unconfigured_discord_completes(settings, recorder, chainhook_payload, mint_block):
    # No notifier injected: the service builds a DiscordService without a URL
    service = ChainhookService(settings, recorder=recorder)

    summary = await service.process(chainhook_payload.payload(apply=[mint_block]))

    assert summary.applied == 1
    assert recorder.count("notification_skipped") == 1
    assert recorder.count("notification_sent") == 0
    assert recorder.count("call_dispatched") == 1


class SlowNotifier:
    """Notifier that yields to the event loop while "posting"."""

    def __init__(self, delay: float = 0.05):
        self.delay = delay
        self.sent = []

    async def send_notification(self, notification) -> None:
        await asyncio.sleep(self.delay)
        self.sent.append(notification.title)


@pytest.mark.asyncio
async def test_concurrent_redelivery_is_notified_once(
    settings, recorder, chainhook_payload, mint_block
):
    notifier = SlowNotifier()
    service = ChainhookService(settings, recorder=recorder, notifier=notifier)
    body = chainhook_payload.payload(apply=[mint_block])

    first, second = await asyncio.gather(service.process(body), service.process(body))

    assert notifier.sent == [MINTED]
    assert first.skipped + second.skipped == 1
    assert recorder.count("block_skipped") == 1


@pytest.mark.asyncio
async def test_failed_delivery_can_be_retried(service, notifier, chainhook_payload, mint_block):
    body = chainhook_payload.payload(apply=[mint_block])
    process_block = service.handler.processor.process_block
    service.handler.processor.process_block = AsyncMock(side_effect=KeyError("state"))

    with pytest.raises(KeyError):
        await service.process(body)

    service.handler.processor.process_block = process_block
    summary = await service.process(body)

    assert summary.skipped == 0
    assert notifier.titles() == [MINTED]
