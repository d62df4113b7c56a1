"""Chainhook webhook handler implementation."""

from typing import Optional

from passkey_vault.lib.events import EventRecorder
from passkey_vault.services.integrations.webhooks.base import WebhookHandler
from passkey_vault.services.integrations.webhooks.chainhook.models import (
    BlockEvent,
    ChainhookPayload,
    IngestionSummary,
)
from passkey_vault.services.integrations.webhooks.chainhook.processor import (
    BlockProcessor,
)
from passkey_vault.services.integrations.webhooks.chainhook.tracker import (
    BlockDeliveryTracker,
)


class ChainhookHandler(WebhookHandler[ChainhookPayload, IngestionSummary]):
    """Handler for Chainhook webhook deliveries.

    The processing happens in the following order:
    1. Apply phase - every block in `apply`, in delivery order
    2. Rollback phase - every block in `rollback`, in delivery order

    The indexer's ordering is trusted; blocks are not re-sorted by height.
    Exceptions other than handler failures (which the block processor
    contains) propagate so the whole delivery fails and the indexer retries it.
    """

    def __init__(
        self,
        processor: BlockProcessor,
        tracker: Optional[BlockDeliveryTracker] = None,
        recorder: Optional[EventRecorder] = None,
    ):
        super().__init__()
        self.processor = processor
        self.tracker = tracker
        self.recorder = recorder or EventRecorder()

    async def handle(self, parsed_data: ChainhookPayload) -> IngestionSummary:
        """Run the apply phase then the rollback phase.

        Args:
            parsed_data: The parsed delivery

        Returns:
            IngestionSummary: Blocks received per phase
        """
        self.logger.info(
            "📨 Received Chainhook event",
            extra={
                "uuid": parsed_data.uuid or None,
                "apply_blocks": len(parsed_data.apply),
                "rollback_blocks": len(parsed_data.rollback),
            },
        )

        summary = IngestionSummary(
            applied=len(parsed_data.apply), rolled_back=len(parsed_data.rollback)
        )

        for block in parsed_data.apply:
            await self._process(parsed_data.uuid, block, summary)

        for block in parsed_data.rollback:
            await self._process(parsed_data.uuid, block, summary)

        self.recorder.record(
            "delivery_processed",
            uuid=parsed_data.uuid,
            applied=summary.applied,
            rolled_back=summary.rolled_back,
            skipped=summary.skipped,
        )
        self.logger.debug("Finished processing all blocks in webhook")
        return summary

    async def _process(
        self, uuid: str, block: BlockEvent, summary: IngestionSummary
    ) -> None:
        if self.tracker is not None and not self.tracker.claim(uuid, block):
            self.logger.warning(
                f"Block #{block.block_height} already seen as {block.direction}, skipping re-delivery",
                extra={"block_hash": block.block_hash},
            )
            summary.skipped += 1
            self.recorder.record(
                "block_skipped",
                uuid=uuid,
                block_height=block.block_height,
                block_hash=block.block_hash,
                direction=block.direction.value,
            )
            return

        try:
            result = await self.processor.process_block(block)
        except Exception:
            if self.tracker is not None:
                self.tracker.release(uuid, block)
            raise
        summary.results.append(result)

        if self.tracker is not None:
            self.tracker.mark_processed(uuid, block)
