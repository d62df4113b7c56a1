"""Routes the tracked-contract calls of one block to their handlers."""

from typing import Optional

from passkey_vault.lib.events import EventRecorder
from passkey_vault.lib.logger import configure_logger
from passkey_vault.services.integrations.webhooks.chainhook.classifier import classify
from passkey_vault.services.integrations.webhooks.chainhook.models import (
    BlockEvent,
    BlockResult,
    ContractCall,
    Direction,
    EventContext,
    TxEvent,
)
from passkey_vault.services.integrations.webhooks.chainhook.registry import (
    HandlerRegistry,
)


class BlockProcessor:
    """Processes blocks one call at a time, in delivery order.

    Calls are awaited sequentially because later calls in a transaction may
    depend on earlier ones (register-passkey followed by mint-with-passkey).
    A handler that raises is logged and skipped; the rest of the block is
    still processed.
    """

    def __init__(
        self,
        contract_id: str,
        registry: HandlerRegistry,
        recorder: Optional[EventRecorder] = None,
    ):
        self.contract_id = contract_id
        self.registry = registry
        self.recorder = recorder or EventRecorder()
        self.logger = configure_logger(self.__class__.__name__)

    async def process_block(self, block: BlockEvent) -> BlockResult:
        prefix = "✅" if block.direction is Direction.APPLY else "⚠️"
        self.logger.info(
            f"{prefix} Processing block #{block.block_height}",
            extra={
                "block_hash": block.block_hash,
                "direction": block.direction.value,
                "tx_count": len(block.transactions),
            },
        )

        result = BlockResult(block_height=block.block_height, direction=block.direction)
        for tx in block.transactions:
            if not tx.succeeded:
                self.logger.info(f"⏭️ Skipping failed transaction: {tx.tx_hash}")
                result.skipped_transactions += 1
                continue

            for call in classify(tx, self.contract_id):
                await self._dispatch(block, tx, call, result)

        self.recorder.record(
            "block_processed",
            block_height=block.block_height,
            block_hash=block.block_hash,
            direction=block.direction.value,
            dispatched=result.dispatched,
            ignored=result.ignored,
            failed=result.failed,
        )
        return result

    async def _dispatch(
        self, block: BlockEvent, tx: TxEvent, call: ContractCall, result: BlockResult
    ) -> None:
        handler = self.registry.get(call.function_name)
        if handler is None:
            self.logger.info(f"ℹ️ Unhandled function: {call.function_name}")
            result.ignored += 1
            self.recorder.record(
                "call_ignored",
                function_name=call.function_name,
                tx_hash=tx.tx_hash,
                block_height=block.block_height,
            )
            return

        self.logger.info(f"📞 Contract call: {call.function_name}")
        context = EventContext(
            tx_hash=tx.tx_hash,
            block_height=block.block_height,
            args=call.args,
            direction=block.direction,
            function_name=call.function_name,
            block_hash=block.block_hash,
        )
        event_data = {
            "function_name": call.function_name,
            "handler": handler.__class__.__name__,
            "tx_hash": tx.tx_hash,
            "block_height": block.block_height,
            "direction": block.direction.value,
        }

        try:
            await handler.handle(context)
        except Exception as e:
            result.failed += 1
            self.logger.error(
                f"Handler {handler.__class__.__name__} failed for {call.function_name}: {str(e)}",
                extra={"tx_hash": tx.tx_hash, "block_height": block.block_height},
                exc_info=True,
            )
            self.recorder.record("handler_failed", error=str(e), **event_data)
            return

        result.dispatched += 1
        self.recorder.record("call_dispatched", **event_data)
