from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from explorer.models.transaction import EthTransaction


class EthBlock(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    number: Optional[int] = Field(default=None, description="Block number, must be >= 0")
    hash: str | None = None
    parent_hash: str | None = None
    miner: str | None = None
    state_root: str | None = None
    receipts_root: str | None = None
    transactions_root: str | None = None
    extra_data: str = "0x"
    size: int | None = None
    gas_limit: int = 0
    gas_used: int = 0
    timestamp: int = 0
    base_fee_per_gas: int | None = None
    uncles: List[str] = Field(default_factory=list)
    withdrawals_count: int | None = None
    blob_gas_used: int | None = None
    excess_blob_gas: int | None = None

    transaction_hashes: List[str] = Field(default_factory=list)
    transactions: List[EthTransaction] = Field(default_factory=list)
    transaction_count: int = 0

    @field_validator("number")
    @classmethod
    def validate_block_number(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v < 0:
            raise ValueError(f"Block number must be greater than or equal to 0, got {v}")
        return v


class BlockStats(BaseModel):
    """Block totals computed from its transactions and receipts."""

    model_config = ConfigDict(frozen=True)

    total_value_transferred: int = 0
    total_fees: int = 0
    burnt_fees: int = 0
    blob_count: int = 0


class BlockInfo(BaseModel):
    """
    Block header record.

    The derived fields at the bottom stay zeroed (builder_tag None) unless the
    block was fetched together with its transactions.
    """

    model_config = ConfigDict(frozen=True)

    number: int
    hash: str
    parent_hash: str
    timestamp: int
    gas_used: int
    gas_limit: int
    base_fee: int | None = None
    tx_count: int = 0
    miner: str
    miner_name: str | None = None
    state_root: str | None = None
    receipts_root: str | None = None
    transactions_root: str | None = None
    extra_data: str = "0x"
    extra_data_decoded: str | None = None
    size: int | None = None
    uncles_count: int = 0
    withdrawals_count: int | None = None
    blob_gas_used: int | None = None
    excess_blob_gas: int | None = None

    # Derived
    blob_count: int = 0
    total_value_transferred: int = 0
    total_fees: int = 0
    burnt_fees: int = 0
    builder_tag: str | None = None
