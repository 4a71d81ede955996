from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence, Union

BlockTag = Union[int, str]


class Transport(ABC):
    """
    Read-only access to one Ethereum node.

    Quantities come back as ints and byte strings as ``bytes``; block,
    transaction and receipt objects are returned as the node's JSON dicts, or
    None when the node answers null.
    """

    @property
    @abstractmethod
    def endpoint(self) -> str:
        ...

    @abstractmethod
    async def get_block_by_number(self, number: BlockTag, full_transactions: bool = False) -> Optional[Dict[str, Any]]:
        ...

    @abstractmethod
    async def get_block_receipts(self, number: BlockTag) -> Optional[List[Dict[str, Any]]]:
        ...

    @abstractmethod
    async def get_transaction_by_hash(self, tx_hash: str) -> Optional[Dict[str, Any]]:
        ...

    @abstractmethod
    async def get_transaction_receipt(self, tx_hash: str) -> Optional[Dict[str, Any]]:
        ...

    @abstractmethod
    async def get_balance(self, address: str, block: BlockTag = "latest") -> int:
        ...

    @abstractmethod
    async def get_transaction_count(self, address: str, block: BlockTag = "latest") -> int:
        ...

    @abstractmethod
    async def get_code(self, address: str, block: BlockTag = "latest") -> bytes:
        ...

    @abstractmethod
    async def get_storage_at(self, address: str, slot: str, block: BlockTag = "latest") -> bytes:
        ...

    @abstractmethod
    async def call(self, to: str, data: bytes, block: BlockTag = "latest") -> bytes:
        ...

    @abstractmethod
    async def get_gas_price(self) -> int:
        ...

    @abstractmethod
    async def get_fee_history(
        self, block_count: int, newest_block: BlockTag, reward_percentiles: Sequence[float]
    ) -> Optional[Dict[str, Any]]:
        ...

    @abstractmethod
    async def get_block_number(self) -> int:
        ...

    @abstractmethod
    async def get_client_version(self) -> str:
        ...

    async def close(self) -> None:
        """Releases network resources. Nothing to do by default."""
