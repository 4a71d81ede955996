from typing import List

from pydantic import BaseModel, ConfigDict, Field


class TokenInfo(BaseModel):
    """ERC-20 metadata. Only symbol and decimals are required to call a contract a token."""

    model_config = ConfigDict(frozen=True)

    name: str | None = None
    symbol: str | None = None
    decimals: int | None = None
    total_supply: int | None = None


class TokenBalance(BaseModel):
    model_config = ConfigDict(frozen=True)

    symbol: str
    name: str
    address: str
    balance: int
    decimals: int


class AddressInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    address: str
    balance: int
    nonce: int
    is_contract: bool
    code_size: int | None = None
    proxy_impl: str | None = None
    token_info: TokenInfo | None = None
    name: str | None = None
    owner: str | None = None
    token_balances: List[TokenBalance] = Field(default_factory=list)
