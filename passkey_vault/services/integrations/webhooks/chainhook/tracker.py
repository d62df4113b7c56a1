"""Suppresses re-delivered blocks.

Chainhook delivers at least once: a payload that failed, timed out or was
retried by the indexer can arrive again. The tracker remembers, per chainhook
UUID, the last direction each block hash was processed in. A block is skipped
only when it arrives again in the same direction; a rollback after an apply
(or a re-apply after a rollback) is always processed.

A block being processed is claimed first, so a copy that arrives while
the original is still in flight is skipped as well. A claim is released when
processing fails, leaving the block open for the indexer's retry.

State is in memory and per process. It is lost on restart, in which case a
re-delivery is processed again.
"""

from collections import OrderedDict
from typing import Dict, Optional, Set, Tuple

from passkey_vault.lib.logger import configure_logger
from passkey_vault.services.integrations.webhooks.chainhook.models import (
    BlockEvent,
    Direction,
)

logger = configure_logger(__name__)


class BlockDeliveryTracker:
    """Last processed direction per (chainhook uuid, block hash)."""

    def __init__(self, max_blocks: int = 5000):
        self._seen: "OrderedDict[Tuple[str, str], Direction]" = OrderedDict()
        self._in_flight: Set[Tuple[str, str, Direction]] = set()
        self._max_blocks = max_blocks

    def is_duplicate(self, uuid: str, block: BlockEvent) -> bool:
        if (uuid, block.block_hash, block.direction) in self._in_flight:
            return True
        return self._seen.get((uuid, block.block_hash)) is block.direction

    def claim(self, uuid: str, block: BlockEvent) -> bool:
        """Reserve `block` for processing; False if it is a duplicate."""
        if self.is_duplicate(uuid, block):
            return False
        self._in_flight.add((uuid, block.block_hash, block.direction))
        return True

    def release(self, uuid: str, block: BlockEvent) -> None:
        """Drop a claim without marking the block processed."""
        self._in_flight.discard((uuid, block.block_hash, block.direction))

    def mark_processed(self, uuid: str, block: BlockEvent) -> None:
        self.release(uuid, block)
        key = (uuid, block.block_hash)
        self._seen.pop(key, None)
        self._seen[key] = block.direction

        # Forget the oldest blocks once over capacity
        while len(self._seen) > self._max_blocks:
            self._seen.popitem(last=False)

    def last_direction(self, uuid: str, block_hash: str) -> Optional[Direction]:
        return self._seen.get((uuid, block_hash))

    def snapshot(self) -> Dict[str, int]:
        """Number of tracked blocks per chainhook uuid."""
        counts: Dict[str, int] = {}
        for uuid, _ in self._seen:
            counts[uuid] = counts.get(uuid, 0) + 1
        return counts
