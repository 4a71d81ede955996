from typing import List

from pydantic import BaseModel, ConfigDict


class NetworkSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    latest_block: int
    gas_price: int
    client_version: str
    # Base fee of the last blocks, oldest first
    base_fee_trend: List[int] | None = None
    # 25th, 50th and 75th percentile priority fee of the latest block
    priority_fee_percentiles: List[int] | None = None
