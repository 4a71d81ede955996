from typing import List, Optional

from explorer.executors.retry_executor import RetryExecutor
from explorer.models.network import NetworkSnapshot
from explorer.transport import Transport
from utils.exceptions import ExplorerError, FetchError
from utils.formatter_utils import hex_to_dec
from utils.logger_utils import get_logger

logger = get_logger("Network Assembler")

FEE_HISTORY_BLOCK_COUNT = 5
FEE_HISTORY_PERCENTILES = (25, 50, 75)
UNKNOWN_CLIENT_VERSION = "Unknown"


class NetworkAssembler(object):
    def __init__(self, transport: Transport, retry_executor: RetryExecutor):
        self._transport = transport
        self._retry_executor = retry_executor

    async def get_network_snapshot(self) -> NetworkSnapshot:
        try:
            latest_block = await self._retry_executor.execute(self._transport.get_block_number, "eth_blockNumber")
            gas_price = await self._retry_executor.execute(self._transport.get_gas_price, "eth_gasPrice")
        except ExplorerError as e:
            raise FetchError("fetch network info from", self._transport.endpoint) from e

        try:
            client_version = await self._retry_executor.execute(
                self._transport.get_client_version, "web3_clientVersion"
            )
        except ExplorerError as e:
            logger.debug(f"Client version unavailable: {e}")
            client_version = UNKNOWN_CLIENT_VERSION

        base_fee_trend, priority_fee_percentiles = await self._get_fee_history()

        return NetworkSnapshot(
            latest_block=latest_block,
            gas_price=gas_price,
            client_version=client_version,
            base_fee_trend=base_fee_trend,
            priority_fee_percentiles=priority_fee_percentiles,
        )

    async def _get_fee_history(self):
        try:
            fee_history = await self._retry_executor.execute(
                lambda: self._transport.get_fee_history(
                    FEE_HISTORY_BLOCK_COUNT, "latest", list(FEE_HISTORY_PERCENTILES)
                ),
                "eth_feeHistory",
            )
        except ExplorerError as e:
            logger.debug(f"Fee history unavailable: {e}")
            return None, None

        if not fee_history:
            return None, None

        base_fee_trend: Optional[List[int]] = [
            hex_to_dec(fee) for fee in fee_history.get("baseFeePerGas") or []
        ] or None
        rewards = fee_history.get("reward") or []
        priority_fee_percentiles: Optional[List[int]] = (
            [hex_to_dec(fee) for fee in rewards[-1]] if rewards and rewards[-1] else None
        )
        return base_fee_trend, priority_fee_percentiles
