import asyncio
from typing import List, Optional, Sequence

from eth_abi import encode
from eth_utils import function_signature_to_4byte_selector, to_checksum_address

from constants.popular_tokens import POPULAR_TOKENS, PopularToken
from explorer.executors.retry_executor import RetryExecutor
from explorer.models.address import TokenBalance
from explorer.transport import Transport
from utils.async_utils import gather_with_concurrency
from utils.exceptions import DecodeError, ExplorerError
from utils.logger_utils import get_logger

logger = get_logger("ETH Token Balance Service")

BALANCE_OF_SELECTOR = function_signature_to_4byte_selector("balanceOf(address)")

DEFAULT_SCAN_TIMEOUT_SECONDS = 5.0
DEFAULT_SCAN_CONCURRENCY = 4


def min_display_balance(decimals: int) -> int:
    """Smallest balance worth listing: 0.0001 of a whole token."""
    return 10 ** max(decimals - 4, 0)


class EthTokenBalanceService(object):
    """Scans an account's balances of a fixed table of popular ERC-20 tokens."""

    def __init__(
        self,
        transport: Transport,
        retry_executor: RetryExecutor,
        timeout: float = DEFAULT_SCAN_TIMEOUT_SECONDS,
        concurrency: int = DEFAULT_SCAN_CONCURRENCY,
        tokens: Sequence[PopularToken] = POPULAR_TOKENS,
    ):
        self._transport = transport
        self._retry_executor = retry_executor
        self.timeout = timeout
        self.concurrency = concurrency
        self.tokens = tuple(tokens)

    async def get_token_balances(self, address: str) -> List[TokenBalance]:
        """
        Non-dust balances in table order. The scan as a whole is best effort:
        a timeout or an undecodable response yields an empty list.
        """
        try:
            return await asyncio.wait_for(self._scan(address), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.debug(f"Token balance scan for {address} timed out after {self.timeout}s")
            return []
        except DecodeError as e:
            logger.debug(f"Token balance scan for {address} aborted: {e}")
            return []

    async def _scan(self, address: str) -> List[TokenBalance]:
        calldata = BALANCE_OF_SELECTOR + encode(["address"], [to_checksum_address(address)])
        results = await gather_with_concurrency(
            self.concurrency,
            *(self._get_token_balance(token, calldata) for token in self.tokens),
            return_exceptions=True,
        )

        balances = []
        for result in results:
            if isinstance(result, BaseException):
                raise result
            if result is not None:
                balances.append(result)
        return balances

    async def _get_token_balance(self, token: PopularToken, calldata: bytes) -> Optional[TokenBalance]:
        try:
            result = await self._retry_executor.execute(
                lambda: self._transport.call(token.address, calldata), f"balanceOf() on {token.symbol}"
            )
        except ExplorerError as e:
            logger.debug(f"Skipping {token.symbol}: {e}")
            return None

        if len(result) < 32:
            raise DecodeError(f"balanceOf() on {token.symbol} returned {len(result)} bytes, expected 32")

        balance = int.from_bytes(result[:32], "big")
        if balance < min_display_balance(token.decimals):
            return None

        return TokenBalance(
            symbol=token.symbol,
            name=token.name,
            address=token.address,
            balance=balance,
            decimals=token.decimals,
        )
