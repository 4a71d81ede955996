from enum import Enum
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field

from explorer.models.receipt_log import DecodedLog
from explorer.models.token_transfer import TokenTransfer


class EthTransaction(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    hash: str | None = None
    nonce: int = 0
    block_number: int | None = None
    transaction_index: int | None = None
    from_address: str | None = None
    to_address: str | None = None
    value: int = 0
    gas: int = 0
    gas_price: int | None = None
    input: str = "0x"
    max_fee_per_gas: int | None = None
    max_priority_fee_per_gas: int | None = None
    transaction_type: int = 0
    max_fee_per_blob_gas: int | None = None
    access_list: List[Dict[str, Any]] | None = None
    blob_versioned_hashes: List[str] = Field(default_factory=list)


class TxKind(str, Enum):
    LEGACY = "LEGACY"
    ACCESS_LIST = "ACCESS_LIST"
    EIP1559 = "EIP1559"
    BLOB = "BLOB"
    UNKNOWN = "UNKNOWN"


_KIND_BY_TYPE_BYTE = {
    0: TxKind.LEGACY,
    1: TxKind.ACCESS_LIST,
    2: TxKind.EIP1559,
    3: TxKind.BLOB,
}

_LABELS = {
    TxKind.LEGACY: "Legacy (Type 0)",
    TxKind.ACCESS_LIST: "Access List (Type 1)",
    TxKind.EIP1559: "EIP-1559 (Type 2)",
    TxKind.BLOB: "Blob (Type 3)",
    TxKind.UNKNOWN: "Unknown",
}


class TxType(BaseModel):
    """Envelope type of a transaction. Every type byte maps to a value; unrecognized ones keep the raw byte."""

    model_config = ConfigDict(frozen=True)

    kind: TxKind
    type_byte: int

    @classmethod
    def from_type_byte(cls, type_byte: int) -> "TxType":
        return cls(kind=_KIND_BY_TYPE_BYTE.get(type_byte, TxKind.UNKNOWN), type_byte=type_byte)

    @property
    def label(self) -> str:
        return _LABELS[self.kind]


class TxSummary(BaseModel):
    """Lightweight transaction record for block listings."""

    model_config = ConfigDict(frozen=True)

    hash: str
    from_address: str
    to_address: str | None = None
    value: int = 0
    gas_limit: int = 0
    tx_type: TxType
    is_contract_creation: bool = False
    from_name: str | None = None
    to_name: str | None = None
    input_size: int = 0
    method_selector: str | None = None
    decoded_method: str | None = None
    blob_count: int = 0
    # Only known when the block receipts could be fetched
    fee_paid: int | None = None


class TxInfo(BaseModel):
    """
    Full transaction record.

    ``gas_used``, ``status``, ``actual_fee`` and ``contract_created`` come from
    the receipt and stay None while the transaction is pending or when the
    receipt could not be fetched.
    """

    model_config = ConfigDict(frozen=True)

    hash: str
    from_address: str
    to_address: str | None = None
    value: int = 0
    gas_price: int | None = None
    gas_limit: int = 0
    nonce: int = 0
    block_number: int | None = None
    tx_index: int | None = None
    input_size: int = 0
    tx_type: TxType
    max_fee_per_gas: int | None = None
    max_priority_fee_per_gas: int | None = None
    access_list_size: int | None = None
    blob_hashes: List[str] = Field(default_factory=list)
    input_data: str = "0x"
    from_name: str | None = None
    to_name: str | None = None
    decoded_method: str | None = None

    # Receipt fields
    gas_used: int | None = None
    status: bool | None = None
    contract_created: str | None = None
    logs_count: int | None = None
    blob_gas_used: int | None = None
    blob_gas_price: int | None = None
    actual_fee: int | None = None
    logs: List[DecodedLog] = Field(default_factory=list)
    token_transfers: List[TokenTransfer] = Field(default_factory=list)
