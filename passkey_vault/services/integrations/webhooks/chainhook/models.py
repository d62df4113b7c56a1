"""Chainhook webhook data models.

Two layers live here:

* pydantic models describing the raw JSON envelope the indexer posts. They are
  only used to validate a delivery before anything is processed.
* frozen dataclasses (``BlockEvent``, ``TxEvent``, ``ContractCall`` ...) that
  the rest of the pipeline works with.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ----------------------------------------------------------------
# Raw envelope
# ----------------------------------------------------------------
class ChainhookBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class BlockIdentifierModel(ChainhookBaseModel):
    hash: str
    index: int = Field(ge=0)


class TransactionIdentifierModel(ChainhookBaseModel):
    hash: str


class ContractCallModel(ChainhookBaseModel):
    contract_identifier: str
    function_name: str
    function_args: Optional[List[Any]] = None


class ReceiptModel(ChainhookBaseModel):
    contract_calls_stack: Optional[List[ContractCallModel]] = None


class TransactionMetadataModel(ChainhookBaseModel):
    success: Optional[bool] = None
    receipt: Optional[ReceiptModel] = None


class TransactionModel(ChainhookBaseModel):
    transaction_identifier: TransactionIdentifierModel
    metadata: Optional[TransactionMetadataModel] = None


class BlockModel(ChainhookBaseModel):
    block_identifier: BlockIdentifierModel
    timestamp: Optional[int] = None
    transactions: List[TransactionModel] = Field(default_factory=list)

    @field_validator("transactions", mode="before")
    @classmethod
    def coerce_none_to_list(cls, value: Any) -> Any:
        return [] if value is None else value


class ChainHookInfoModel(ChainhookBaseModel):
    uuid: str = ""
    predicate: Optional[Any] = None
    is_streaming_blocks: Optional[bool] = None


class ChainhookPayloadModel(ChainhookBaseModel):
    apply: List[BlockModel] = Field(default_factory=list)
    rollback: List[BlockModel] = Field(default_factory=list)
    chainhook: Optional[ChainHookInfoModel] = None

    @field_validator("apply", "rollback", mode="before")
    @classmethod
    def coerce_none_to_list(cls, value: Any) -> Any:
        return [] if value is None else value


# ----------------------------------------------------------------
# Domain model
# ----------------------------------------------------------------
class Direction(str, Enum):
    """Whether a block joined the canonical chain or was removed from it."""

    APPLY = "apply"
    ROLLBACK = "rollback"

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class ContractCall:
    contract_id: str
    function_name: str
    args: Tuple[Any, ...] = ()


@dataclass(frozen=True)
class TxEvent:
    tx_hash: str
    succeeded: bool
    contract_calls: Tuple[ContractCall, ...] = ()


@dataclass(frozen=True)
class BlockEvent:
    block_height: int
    block_hash: str
    direction: Direction
    transactions: Tuple[TxEvent, ...] = ()
    timestamp: Optional[int] = None


@dataclass(frozen=True)
class EventContext:
    """What a handler gets to see about one contract call."""

    tx_hash: str
    block_height: int
    args: Tuple[Any, ...]
    direction: Direction
    function_name: str = ""
    block_hash: str = ""

    @property
    def is_rollback(self) -> bool:
        return self.direction is Direction.ROLLBACK


@dataclass(frozen=True)
class ChainhookPayload:
    """A validated chainhook delivery."""

    uuid: str
    apply: Tuple[BlockEvent, ...] = ()
    rollback: Tuple[BlockEvent, ...] = ()
    predicate: Optional[Any] = None


@dataclass
class BlockResult:
    """Counters for one processed block."""

    block_height: int
    direction: Direction
    dispatched: int = 0
    ignored: int = 0
    failed: int = 0
    skipped_transactions: int = 0


@dataclass
class IngestionSummary:
    """Outcome of one delivery."""

    applied: int = 0
    rolled_back: int = 0
    skipped: int = 0
    results: List[BlockResult] = field(default_factory=list)

    def to_response(self) -> Dict[str, Any]:
        return {
            "success": True,
            "processed": {"applied": self.applied, "rolledBack": self.rolled_back},
        }
