from typing import List

from pydantic import BaseModel, ConfigDict, Field


class EthReceiptLog(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    log_index: int | None = None
    transaction_hash: str | None = None
    address: str | None = None
    data: str = "0x"
    topics: List[str] = Field(default_factory=list)


class DecodedParam(BaseModel):
    """One decoded event argument; ``is_address`` marks values that identify an account."""

    model_config = ConfigDict(frozen=True)

    name: str
    value: str
    is_address: bool = False


class DecodedLog(BaseModel):
    model_config = ConfigDict(frozen=True)

    address: str
    topics: List[str] = Field(default_factory=list)
    data: str = "0x"
    # Full signature like "Transfer(address,address,uint256)"
    event_name: str | None = None
    decoded_params: List[DecodedParam] = Field(default_factory=list)
