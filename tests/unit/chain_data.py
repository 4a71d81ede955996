import copy
from typing import Any, Dict, List, Optional, Sequence

from explorer.transport import BlockTag, Transport
from utils.exceptions import RpcError


class FakeTransport(Transport):
    """
    In-memory node. Tests fill the dictionaries; ``failures`` maps a method
    name to the exception it should raise on every call.
    """

    def __init__(self):
        self.blocks: Dict[int, Dict[str, Any]] = {}
        self.block_receipts: Dict[int, List[Dict[str, Any]]] = {}
        self.transactions: Dict[str, Dict[str, Any]] = {}
        self.receipts: Dict[str, Dict[str, Any]] = {}
        self.balances: Dict[str, int] = {}
        self.nonces: Dict[str, int] = {}
        self.codes: Dict[str, bytes] = {}
        self.storage: Dict[tuple, bytes] = {}
        self.calls: Dict[tuple, Any] = {}
        self.gas_price = 20 * 10**9
        self.block_number = 0
        self.client_version = "Geth/v1.14.0"
        self.fee_history: Optional[Dict[str, Any]] = None
        self.failures: Dict[str, BaseException] = {}
        self.requests: List[tuple] = []
        self.closed = False

    @property
    def endpoint(self) -> str:
        return "http://fake-node:8545"

    def _record(self, method: str, *params):
        self.requests.append((method, params))
        if method in self.failures:
            raise self.failures[method]

    async def get_block_by_number(self, number: BlockTag, full_transactions: bool = False):
        self._record("eth_getBlockByNumber", number, full_transactions)
        block = self.blocks.get(number)
        if block is None or full_transactions:
            return copy.deepcopy(block)
        block = copy.deepcopy(block)
        block["transactions"] = [tx["hash"] for tx in block.get("transactions", [])]
        return block

    async def get_block_receipts(self, number: BlockTag):
        self._record("eth_getBlockReceipts", number)
        return copy.deepcopy(self.block_receipts.get(number))

    async def get_transaction_by_hash(self, tx_hash: str):
        self._record("eth_getTransactionByHash", tx_hash)
        return copy.deepcopy(self.transactions.get(tx_hash))

    async def get_transaction_receipt(self, tx_hash: str):
        self._record("eth_getTransactionReceipt", tx_hash)
        return copy.deepcopy(self.receipts.get(tx_hash))

    async def get_balance(self, address: str, block: BlockTag = "latest") -> int:
        self._record("eth_getBalance", address)
        return self.balances.get(address.lower(), 0)

    async def get_transaction_count(self, address: str, block: BlockTag = "latest") -> int:
        self._record("eth_getTransactionCount", address)
        return self.nonces.get(address.lower(), 0)

    async def get_code(self, address: str, block: BlockTag = "latest") -> bytes:
        self._record("eth_getCode", address)
        return self.codes.get(address.lower(), b"")

    async def get_storage_at(self, address: str, slot: str, block: BlockTag = "latest") -> bytes:
        self._record("eth_getStorageAt", address, slot)
        return self.storage.get((address.lower(), slot), b"\x00" * 32)

    async def call(self, to: str, data: bytes, block: BlockTag = "latest") -> bytes:
        self._record("eth_call", to, data)
        result = self.calls.get((to.lower(), bytes(data)))
        if result is None:
            result = self.calls.get((to.lower(), bytes(data[:4])))
        if result is None:
            raise RpcError("eth_call", "execution reverted", 3)
        if isinstance(result, BaseException):
            raise result
        return result

    async def get_gas_price(self) -> int:
        self._record("eth_gasPrice")
        return self.gas_price

    async def get_fee_history(self, block_count: int, newest_block: BlockTag, reward_percentiles: Sequence[float]):
        self._record("eth_feeHistory", block_count, newest_block, list(reward_percentiles))
        return copy.deepcopy(self.fee_history)

    async def get_block_number(self) -> int:
        self._record("eth_blockNumber")
        return self.block_number

    async def get_client_version(self) -> str:
        self._record("web3_clientVersion")
        return self.client_version

    async def close(self) -> None:
        self.closed = True

    def methods_called(self, method: str) -> List[tuple]:
        return [params for name, params in self.requests if name == method]


def word(value: int) -> bytes:
    return value.to_bytes(32, "big")


def address_word(address: str) -> bytes:
    return bytes.fromhex(address[2:].lower()).rjust(32, b"\x00")


def address_topic(address: str) -> str:
    return "0x" + address_word(address).hex()


def raw_transaction(tx_hash, sender, to, value=0, tx_type=2, input_data="0x", block_number=100, **extra):
    tx = {
        "hash": tx_hash,
        "nonce": "0x5",
        "blockNumber": hex(block_number),
        "transactionIndex": "0x0",
        "from": sender,
        "to": to,
        "value": hex(value),
        "gas": hex(21000),
        "gasPrice": hex(30 * 10**9),
        "input": input_data,
        "type": hex(tx_type),
    }
    tx.update(extra)
    return tx


def raw_receipt(tx_hash, gas_used=21000, effective_gas_price=30 * 10**9, status=1, logs=None, **extra):
    receipt = {
        "transactionHash": tx_hash,
        "transactionIndex": "0x0",
        "blockNumber": hex(100),
        "contractAddress": None,
        "gasUsed": hex(gas_used),
        "effectiveGasPrice": hex(effective_gas_price),
        "status": hex(status),
        "logs": logs or [],
    }
    receipt.update(extra)
    return receipt


def raw_block(number, transactions=(), base_fee=10 * 10**9, gas_used=15_000_000, extra_data="0x", **extra):
    block = {
        "number": hex(number),
        "hash": "0x" + f"{number:064x}",
        "parentHash": "0x" + f"{number - 1:064x}",
        "miner": "0x95222290dd7278aa3ddd389cc1e1d165cc4bafe5",
        "extraData": extra_data,
        "size": hex(1234),
        "gasLimit": hex(30_000_000),
        "gasUsed": hex(gas_used),
        "timestamp": hex(1_700_000_000),
        "uncles": [],
        "withdrawals": [{"index": "0x1"}, {"index": "0x2"}],
        "transactions": list(transactions),
    }
    if base_fee is not None:
        block["baseFeePerGas"] = hex(base_fee)
    block.update(extra)
    return block
