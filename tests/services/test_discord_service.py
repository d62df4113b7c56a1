"""Tests for the Discord notification sink."""

import json

import httpx
import pytest

from passkey_vault.config import ChainhookSettings
from passkey_vault.services.communication.discord import (
    DiscordColors,
    DiscordService,
    Notification,
    create_discord_service,
)

WEBHOOK_URL = "https://discord.com/api/webhooks/123/abc"
TX_HASH = "0x8f3c2a1b9d4e5f60718293a4b5c6d7e8f9a0b1c2d3e4f5061728394a5b6c7d8e"


@pytest.fixture
def notification():
    return Notification(
        title="🎨 New NFT Minted!",
        description="A new Passkey NFT has been minted with biometric authentication",
        tx_hash=TX_HASH,
        block_height=150,
        color=DiscordColors.MINT,
    )


def _service(handler, recorder, **kwargs):
    return DiscordService(
        webhook_url=WEBHOOK_URL,
        recorder=recorder,
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


def test_build_payload(notification, recorder):
    service = DiscordService(webhook_url=WEBHOOK_URL, network="testnet", recorder=recorder)
    payload = service.build_payload(notification)

    embed = payload["embeds"][0]
    assert embed["title"] == "🎨 New NFT Minted!"
    assert embed["color"] == 0x00FF00
    assert embed["footer"] == {"text": "Passkey NFT Vault • Powered by Hiro Chainhooks"}
    assert embed["timestamp"].endswith("+00:00")

    tx_field, height_field = embed["fields"]
    assert tx_field["name"] == "Transaction"
    assert tx_field["inline"] is True
    assert tx_field["value"] == (
        "[`0x8f3c2a...6c7d8e`]"
        f"(https://explorer.hiro.so/txid/{TX_HASH}?chain=testnet)"
    )
    assert height_field == {"name": "Block Height", "value": "#150", "inline": True}
    assert "username" not in payload


def test_build_payload_with_bot_name(notification, recorder):
    service = DiscordService(webhook_url=WEBHOOK_URL, bot_name="Vault Bot", recorder=recorder)
    assert service.build_payload(notification)["username"] == "Vault Bot"


@pytest.mark.asyncio
async def test_send_posts_embed(notification, recorder):
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(204)

    await _service(handler, recorder).send_notification(notification)

    assert len(requests) == 1
    assert requests[0].method == "POST"
    assert str(requests[0].url) == WEBHOOK_URL
    body = json.loads(requests[0].content)
    assert body["embeds"][0]["fields"][1]["value"] == "#150"
    assert recorder.count("notification_sent") == 1


@pytest.mark.asyncio
async def test_unconfigured_is_noop(notification, recorder):
    def handler(request):
        raise AssertionError("no request expected")

    service = DiscordService(
        webhook_url="", recorder=recorder, transport=httpx.MockTransport(handler)
    )
    await service.send_notification(notification)

    assert not service.is_configured
    assert recorder.count("notification_skipped") == 1


@pytest.mark.asyncio
async def test_error_status_is_swallowed(notification, recorder):
    def handler(request):
        return httpx.Response(429, json={"message": "You are being rate limited."})

    await _service(handler, recorder).send_notification(notification)

    failures = recorder.events("notification_failed")
    assert len(failures) == 1
    assert failures[0].data["status_code"] == 429


@pytest.mark.asyncio
async def test_timeout_is_swallowed(notification, recorder):
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    await _service(handler, recorder, timeout_seconds=0.5).send_notification(notification)

    assert recorder.events("notification_failed")[0].data["error"] == "timeout"


@pytest.mark.asyncio
async def test_connection_error_is_swallowed(notification, recorder):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    await _service(handler, recorder).send_notification(notification)

    assert recorder.count("notification_failed") == 1
    assert recorder.count("notification_sent") == 0


def test_factory_uses_settings(recorder):
    settings = ChainhookSettings(
        network="testnet",
        discord_webhook_url=WEBHOOK_URL,
        discord_timeout_seconds=3.0,
    )
    service = create_discord_service(settings, recorder)

    assert service.webhook_url == WEBHOOK_URL
    assert service.network == "testnet"
    assert service.timeout.read == 3.0
    assert service.bot_name is None
    assert service.recorder is recorder


def test_color_palette():
    assert {color.name: color.value for color in DiscordColors} == {
        "MINT": 0x00FF00,
        "TRANSFER": 0x0099FF,
        "REGISTER": 0x9B59B6,
        "ROLLBACK": 0xFFA500,
    }
