"""Chainhook webhook parser implementation."""

from typing import Any, List, Tuple

from pydantic import ValidationError

from passkey_vault.services.integrations.webhooks.base import WebhookParser
from passkey_vault.services.integrations.webhooks.chainhook.exceptions import (
    PayloadValidationError,
)
from passkey_vault.services.integrations.webhooks.chainhook.models import (
    BlockEvent,
    BlockModel,
    ChainhookPayload,
    ChainhookPayloadModel,
    ContractCall,
    Direction,
    TransactionModel,
    TxEvent,
)


class ChainhookParser(WebhookParser[ChainhookPayload]):
    """Validates a chainhook delivery and converts it into block events."""

    def parse(self, raw_data: Any) -> ChainhookPayload:
        """Parse Chainhook webhook data.

        Args:
            raw_data: The decoded JSON body

        Returns:
            ChainhookPayload: Apply and rollback blocks in delivery order

        Raises:
            PayloadValidationError: If the body does not match the chainhook envelope
        """
        if not isinstance(raw_data, dict):
            raise PayloadValidationError(
                "Chainhook payload must be a JSON object",
                received_type=type(raw_data).__name__,
            )

        try:
            model = ChainhookPayloadModel.model_validate(raw_data)
        except ValidationError as e:
            errors = [
                {"loc": list(err["loc"]), "msg": err["msg"], "type": err["type"]}
                for err in e.errors()
            ]
            self.logger.warning(
                "Rejected malformed chainhook payload",
                extra={"error_count": len(errors)},
            )
            raise PayloadValidationError(errors=errors) from e

        info = model.chainhook
        payload = ChainhookPayload(
            uuid=info.uuid if info else "",
            apply=self._convert_blocks(model.apply, Direction.APPLY),
            rollback=self._convert_blocks(model.rollback, Direction.ROLLBACK),
            predicate=info.predicate if info else None,
        )
        self.logger.debug(
            f"Parsed chainhook payload: {len(payload.apply)} apply, "
            f"{len(payload.rollback)} rollback blocks",
            extra={"uuid": payload.uuid or None},
        )
        return payload

    def _convert_blocks(
        self, blocks: List[BlockModel], direction: Direction
    ) -> Tuple[BlockEvent, ...]:
        return tuple(
            BlockEvent(
                block_height=block.block_identifier.index,
                block_hash=block.block_identifier.hash,
                direction=direction,
                transactions=tuple(
                    self._convert_transaction(tx) for tx in block.transactions
                ),
                timestamp=block.timestamp,
            )
            for block in blocks
        )

    def _convert_transaction(self, tx: TransactionModel) -> TxEvent:
        metadata = tx.metadata
        # Only an explicit `success: false` marks a failed transaction
        succeeded = not (metadata is not None and metadata.success is False)

        calls = []
        if metadata and metadata.receipt and metadata.receipt.contract_calls_stack:
            calls = [
                ContractCall(
                    contract_id=call.contract_identifier,
                    function_name=call.function_name,
                    args=tuple(call.function_args or ()),
                )
                for call in metadata.receipt.contract_calls_stack
            ]

        return TxEvent(
            tx_hash=tx.transaction_identifier.hash,
            succeeded=succeeded,
            contract_calls=tuple(calls),
        )
