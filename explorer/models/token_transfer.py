from pydantic import BaseModel, ConfigDict


class TokenTransfer(BaseModel):
    model_config = ConfigDict(frozen=True)

    token_address: str
    from_address: str
    to_address: str
    amount: int
    token_symbol: str | None = None
    decimals: int | None = None
