import asyncio
from typing import Any, Dict, List, Optional, Sequence

import aiohttp

from explorer.transport import BlockTag, Transport
from utils.exceptions import RpcError
from utils.formatter_utils import bytes_to_hex, hex_to_bytes, hex_to_dec
from utils.logger_utils import get_logger
from utils.rpc_utils import rpc_response_to_result

logger = get_logger("Rpc Client")


def _block_param(block: BlockTag) -> str:
    return hex(block) if isinstance(block, int) else block


class RpcClient(Transport):
    """
    JSON-RPC 2.0 client for a single EVM node over HTTP.
    Uses one persistent ClientSession for connection pooling. Retrying is
    left to the caller.
    """

    def __init__(self, rpc_url: str, timeout: float = 30, headers: Optional[Dict[str, str]] = None):
        url = (rpc_url or "").strip()
        if not url:
            raise ValueError("rpc_url must be a non-empty string.")

        self.rpc_url = url
        self.id_counter = 0
        # Total timeout for the request (connect + read)
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.headers = {"Content-Type": "application/json", **(headers or {})}
        self._session: Optional[aiohttp.ClientSession] = None

    @property
    def endpoint(self) -> str:
        return self.rpc_url

    async def _get_session(self) -> aiohttp.ClientSession:
        """Lazy loads or returns the existing session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout, headers=self.headers)
        return self._session

    async def close(self) -> None:
        """Closes the underlying session."""
        if self._session and not self._session.closed:
            await self._session.close()

    def _generate_id(self) -> int:
        self.id_counter += 1
        return self.id_counter

    async def _make_request(self, method: str, params: List[Any]) -> Any:
        payload = {
            "jsonrpc": "2.0",
            "method": method,
            "params": params,
            "id": self._generate_id(),
        }
        session = await self._get_session()
        logger.debug(f"{method} {params}")
        try:
            async with session.post(self.rpc_url, json=payload) as response:
                if response.status != 200:
                    text = await response.text()
                    raise RpcError(method, f"HTTP {response.status} {response.reason or ''} {text[:200]}".strip())
                data = await response.json(content_type=None)
        except asyncio.TimeoutError as e:
            raise RpcError(method, f"request timed out after {self.timeout.total}s") from e
        except aiohttp.ClientError as e:
            raise RpcError(method, f"connection error: {e}") from e
        except ValueError as e:
            raise RpcError(method, f"invalid JSON response: {e}") from e

        return rpc_response_to_result(method, data)

    async def get_block_by_number(self, number: BlockTag, full_transactions: bool = False) -> Optional[Dict[str, Any]]:
        return await self._make_request("eth_getBlockByNumber", [_block_param(number), full_transactions])

    async def get_block_receipts(self, number: BlockTag) -> Optional[List[Dict[str, Any]]]:
        return await self._make_request("eth_getBlockReceipts", [_block_param(number)])

    async def get_transaction_by_hash(self, tx_hash: str) -> Optional[Dict[str, Any]]:
        return await self._make_request("eth_getTransactionByHash", [tx_hash])

    async def get_transaction_receipt(self, tx_hash: str) -> Optional[Dict[str, Any]]:
        return await self._make_request("eth_getTransactionReceipt", [tx_hash])

    async def get_balance(self, address: str, block: BlockTag = "latest") -> int:
        return self._to_int("eth_getBalance", await self._make_request("eth_getBalance", [address, _block_param(block)]))

    async def get_transaction_count(self, address: str, block: BlockTag = "latest") -> int:
        result = await self._make_request("eth_getTransactionCount", [address, _block_param(block)])
        return self._to_int("eth_getTransactionCount", result)

    async def get_code(self, address: str, block: BlockTag = "latest") -> bytes:
        return hex_to_bytes(await self._make_request("eth_getCode", [address, _block_param(block)]))

    async def get_storage_at(self, address: str, slot: str, block: BlockTag = "latest") -> bytes:
        return hex_to_bytes(await self._make_request("eth_getStorageAt", [address, slot, _block_param(block)]))

    async def call(self, to: str, data: bytes, block: BlockTag = "latest") -> bytes:
        call_object = {"to": to, "data": bytes_to_hex(data)}
        return hex_to_bytes(await self._make_request("eth_call", [call_object, _block_param(block)]))

    async def get_gas_price(self) -> int:
        return self._to_int("eth_gasPrice", await self._make_request("eth_gasPrice", []))

    async def get_fee_history(
        self, block_count: int, newest_block: BlockTag, reward_percentiles: Sequence[float]
    ) -> Optional[Dict[str, Any]]:
        params = [hex(block_count), _block_param(newest_block), list(reward_percentiles)]
        return await self._make_request("eth_feeHistory", params)

    async def get_block_number(self) -> int:
        return self._to_int("eth_blockNumber", await self._make_request("eth_blockNumber", []))

    async def get_client_version(self) -> str:
        return str(await self._make_request("web3_clientVersion", []))

    @staticmethod
    def _to_int(method: str, result: Any) -> int:
        value = hex_to_dec(result)
        if value is None:
            raise RpcError(method, f"unexpected result {result!r}")
        return value
