from typing import List

from pydantic import BaseModel, ConfigDict, Field

from explorer.models.receipt_log import EthReceiptLog


class EthReceipt(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    transaction_hash: str | None = None
    transaction_index: int | None = None
    block_number: int | None = None
    contract_address: str | None = None
    gas_used: int = 0
    effective_gas_price: int = 0
    blob_gas_used: int | None = None
    blob_gas_price: int | None = None
    status: int | None = None
    logs: List[EthReceiptLog] = Field(default_factory=list)

    @property
    def fee(self) -> int:
        return self.gas_used * self.effective_gas_price
