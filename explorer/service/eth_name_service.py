from typing import Dict, Iterable, List, Optional

from eth_abi import decode, encode
from eth_abi.exceptions import DecodingError
from eth_utils import function_signature_to_4byte_selector, keccak, to_checksum_address

from constants.contract_addresses import ENS_REGISTRY_ADDRESS, ENS_REVERSE_RECORDS_ADDRESS
from explorer.executors.retry_executor import RetryExecutor
from explorer.transport import Transport
from utils.exceptions import ExplorerError, NameResolutionError
from utils.formatter_utils import is_zero_address, word_to_address
from utils.logger_utils import get_logger

logger = get_logger("ETH Name Service")

GET_NAMES_SELECTOR = function_signature_to_4byte_selector("getNames(address[])")
RESOLVER_SELECTOR = function_signature_to_4byte_selector("resolver(bytes32)")
ADDR_SELECTOR = function_signature_to_4byte_selector("addr(bytes32)")

EMPTY_NODE = b"\x00" * 32


def namehash(name: str) -> bytes:
    """
    ENS namehash (EIP-137).

    >>> namehash("eth").hex()
    '93cdeb708b7545dc668eb9280176169d1c33cfd8ed6f04690a0bcc88a93fc4ae'
    """
    node = EMPTY_NODE
    if not name:
        return node
    for label in reversed(name.split(".")):
        node = keccak(node + keccak(text=label))
    return node


class EthNameService(object):
    """Reverse (address -> name) and forward (name -> address) ENS lookups."""

    def __init__(
        self,
        transport: Transport,
        retry_executor: RetryExecutor,
        reverse_records_address: str = ENS_REVERSE_RECORDS_ADDRESS,
        registry_address: str = ENS_REGISTRY_ADDRESS,
    ):
        self._transport = transport
        self._retry_executor = retry_executor
        self._reverse_records_address = reverse_records_address
        self._registry_address = registry_address

    async def resolve_names(self, addresses: Iterable[str]) -> Dict[str, str]:
        """
        Batch reverse lookup through the ReverseRecords contract.

        Returns a mapping of checksummed address to primary name; addresses
        without a name are left out. Lookup failures yield an empty mapping.
        """
        unique: List[str] = []
        for address in addresses:
            try:
                checksum = to_checksum_address(address)
            except (TypeError, ValueError):
                logger.debug(f"Skipping invalid address in reverse lookup: {address}")
                continue
            if checksum not in unique:
                unique.append(checksum)

        if not unique:
            return {}

        calldata = GET_NAMES_SELECTOR + encode(["address[]"], [unique])
        try:
            result = await self._retry_executor.execute(
                lambda: self._transport.call(self._reverse_records_address, calldata),
                "ENS getNames()",
            )
            (names,) = decode(["string[]"], result)
        except (ExplorerError, DecodingError, ValueError) as e:
            logger.debug(f"Reverse lookup for {len(unique)} addresses failed: {e}")
            return {}

        return {address: name for address, name in zip(unique, names) if name}

    async def resolve_name(self, address: str) -> Optional[str]:
        names = await self.resolve_names([address])
        return next(iter(names.values()), None)

    async def resolve_address(self, name: str) -> str:
        """
        Forward lookup: registry ``resolver(node)`` then ``addr(node)`` on
        that resolver. Raises NameResolutionError naming the failed step.
        """
        name = name.strip().lower()
        node = namehash(name)

        resolver = await self._call_for_address(
            name, "registry lookup", self._registry_address, RESOLVER_SELECTOR + node, "ENS registry resolver()"
        )
        if is_zero_address(resolver):
            raise NameResolutionError(name, "registry lookup", "no resolver found")

        address = await self._call_for_address(
            name, "resolver lookup", resolver, ADDR_SELECTOR + node, "ENS resolver addr()"
        )
        if is_zero_address(address):
            raise NameResolutionError(name, "resolver lookup", "name does not resolve to an address")

        logger.debug(f"Resolved {name} to {address} via resolver {resolver}")
        return address

    async def _call_for_address(self, name: str, step: str, to: str, calldata: bytes, description: str) -> str:
        try:
            result = await self._retry_executor.execute(lambda: self._transport.call(to, calldata), description)
        except ExplorerError as e:
            raise NameResolutionError(name, step, f"{description} call failed") from e

        if len(result) < 32:
            raise NameResolutionError(name, step, f"{description} returned {len(result)} bytes, expected 32")
        return word_to_address(result[:32])
