# MIT License
#
# Copyright (c) 2018 Evgeny Medvedev, evge.medvedev@gmail.com
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

import asyncio
from typing import Awaitable, Callable, Optional, TypeVar

from eth_abi import decode
from eth_abi.exceptions import DecodingError
from eth_utils import function_signature_to_4byte_selector

from constants.contract_addresses import EIP1967_IMPLEMENTATION_SLOT
from explorer.executors.retry_executor import RetryExecutor
from explorer.models.address import TokenInfo
from explorer.transport import Transport
from utils.exceptions import DecodeError, ExplorerError
from utils.formatter_utils import is_zero_address, word_to_address
from utils.logger_utils import get_logger

logger = get_logger("ETH Contract Inspector Service")

T = TypeVar("T")

NAME_SELECTOR = function_signature_to_4byte_selector("name()")
SYMBOL_SELECTOR = function_signature_to_4byte_selector("symbol()")
DECIMALS_SELECTOR = function_signature_to_4byte_selector("decimals()")
TOTAL_SUPPLY_SELECTOR = function_signature_to_4byte_selector("totalSupply()")
OWNER_SELECTOR = function_signature_to_4byte_selector("owner()")

# DecodingError: response is not a valid ABI string
# ValueError: string bytes are not valid UTF-8
PROBE_IGNORED_ERRORS = (ExplorerError, DecodingError, ValueError)


async def call_contract_function(
    probe: Callable[[], Awaitable[T]], description: str, ignore_errors=PROBE_IGNORED_ERRORS, default_value=None
):
    try:
        return await probe()
    except Exception as ex:
        if isinstance(ex, ignore_errors):
            logger.debug(f"{description} failed: {ex}. This exception can be safely ignored.")
            return default_value
        raise


def _bytes32_to_string(data: bytes) -> str:
    return data.rstrip(b"\x00").decode("utf-8")


class EthContractInspectorService(object):
    """
    Best-effort metadata probes for contract accounts.

    Every public method returns None when the underlying call fails or the
    contract does not implement the probed function.
    """

    def __init__(self, transport: Transport, retry_executor: RetryExecutor):
        self._transport = transport
        self._retry_executor = retry_executor

    async def get_proxy_implementation(self, address: str) -> Optional[str]:
        """EIP-1967 implementation address, if the contract is such a proxy."""
        return await call_contract_function(
            lambda: self._read_proxy_implementation(address), f"EIP-1967 slot read for {address}"
        )

    async def detect_token(self, address: str) -> Optional[TokenInfo]:
        name, symbol, decimals, total_supply = await asyncio.gather(
            call_contract_function(lambda: self._call_string(address, NAME_SELECTOR), f"name() on {address}"),
            call_contract_function(lambda: self._call_string(address, SYMBOL_SELECTOR), f"symbol() on {address}"),
            call_contract_function(lambda: self._call_uint8(address, DECIMALS_SELECTOR), f"decimals() on {address}"),
            call_contract_function(
                lambda: self._call_uint256(address, TOTAL_SUPPLY_SELECTOR), f"totalSupply() on {address}"
            ),
        )

        # name and totalSupply are optional in ERC-20
        if symbol is None or decimals is None:
            return None

        return TokenInfo(name=name, symbol=symbol, decimals=decimals, total_supply=total_supply)

    async def get_owner(self, address: str) -> Optional[str]:
        return await call_contract_function(lambda: self._read_owner(address), f"owner() on {address}")

    async def _read_proxy_implementation(self, address: str) -> Optional[str]:
        value = await self._retry_executor.execute(
            lambda: self._transport.get_storage_at(address, EIP1967_IMPLEMENTATION_SLOT),
            f"eth_getStorageAt({address})",
        )
        implementation = word_to_address(value[-32:])
        return None if is_zero_address(implementation) else implementation

    async def _read_owner(self, address: str) -> Optional[str]:
        result = await self._call(address, OWNER_SELECTOR)
        if len(result) < 32:
            raise DecodeError(f"owner() returned {len(result)} bytes, expected 32")
        owner = word_to_address(result[:32])
        return None if is_zero_address(owner) else owner

    async def _call(self, address: str, selector: bytes) -> bytes:
        return await self._retry_executor.execute(
            lambda: self._transport.call(address, selector), f"eth_call 0x{selector.hex()} on {address}"
        )

    async def _call_string(self, address: str, selector: bytes) -> str:
        result = await self._call(address, selector)
        if len(result) >= 64:
            (value,) = decode(["string"], result)
            return value
        if len(result) == 32:
            # Some older tokens return bytes32 instead of string
            value = _bytes32_to_string(result)
            if value:
                return value
        raise DecodeError(f"call 0x{selector.hex()} returned {len(result)} bytes, expected an ABI string")

    async def _call_uint8(self, address: str, selector: bytes) -> int:
        result = await self._call(address, selector)
        if len(result) < 32:
            raise DecodeError(f"call 0x{selector.hex()} returned {len(result)} bytes, expected 32")
        return result[31]

    async def _call_uint256(self, address: str, selector: bytes) -> int:
        result = await self._call(address, selector)
        if len(result) < 32:
            raise DecodeError(f"call 0x{selector.hex()} returned {len(result)} bytes, expected 32")
        return int.from_bytes(result[:32], "big")
