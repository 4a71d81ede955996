from typing import Dict, List, Optional, Tuple

from explorer.assemblers.transaction_assembler import build_tx_summary
from explorer.executors.retry_executor import RetryExecutor
from explorer.mappers.block_mapper import EthBlockMapper
from explorer.mappers.receipt_mapper import EthReceiptMapper
from explorer.models.block import BlockInfo, BlockStats, EthBlock
from explorer.models.receipt import EthReceipt
from explorer.models.transaction import TxSummary
from explorer.service.eth_builder_tag_service import decode_extra_data, detect_builder_tag
from explorer.service.eth_name_service import EthNameService
from explorer.transport import Transport
from utils.exceptions import ExplorerError, FetchError, NotFoundError
from utils.logger_utils import get_logger

logger = get_logger("Block Assembler")


def block_to_info(block: EthBlock, miner_name: Optional[str] = None) -> BlockInfo:
    return BlockInfo(
        number=block.number,
        hash=block.hash,
        parent_hash=block.parent_hash,
        timestamp=block.timestamp,
        gas_used=block.gas_used,
        gas_limit=block.gas_limit,
        base_fee=block.base_fee_per_gas,
        tx_count=block.transaction_count,
        miner=block.miner,
        miner_name=miner_name,
        state_root=block.state_root,
        receipts_root=block.receipts_root,
        transactions_root=block.transactions_root,
        extra_data=block.extra_data,
        extra_data_decoded=decode_extra_data(block.extra_data),
        size=block.size,
        uncles_count=len(block.uncles),
        withdrawals_count=block.withdrawals_count,
        blob_gas_used=block.blob_gas_used,
        excess_blob_gas=block.excess_blob_gas,
    )


def compute_block_stats(block: EthBlock, receipts: Dict[str, EthReceipt]) -> BlockStats:
    total_value = 0
    total_fees = 0
    blob_count = 0
    for tx in block.transactions:
        total_value += tx.value
        blob_count += len(tx.blob_versioned_hashes)
        receipt = receipts.get(tx.hash)
        if receipt is not None:
            total_fees += receipt.fee

    burnt_fees = block.base_fee_per_gas * block.gas_used if block.base_fee_per_gas is not None else 0

    return BlockStats(
        total_value_transferred=total_value,
        total_fees=total_fees,
        burnt_fees=burnt_fees,
        blob_count=blob_count,
    )


class BlockAssembler(object):
    def __init__(
        self,
        transport: Transport,
        retry_executor: RetryExecutor,
        name_service: EthNameService,
        receipt_mapper: Optional[EthReceiptMapper] = None,
    ):
        self._transport = transport
        self._retry_executor = retry_executor
        self._name_service = name_service
        self._block_mapper = EthBlockMapper()
        self._receipt_mapper = receipt_mapper or EthReceiptMapper()

    async def get_block(self, number: int) -> BlockInfo:
        """Block header with the miner's name. Derived totals are left at zero."""
        try:
            block = await self._fetch_block(number, full_transactions=False)
        except ExplorerError as e:
            raise FetchError("fetch block", f"#{number}") from e

        return block_to_info(block, await self._resolve_miner(block))

    async def get_block_tx_hashes(self, number: int) -> List[str]:
        try:
            block = await self._fetch_block(number, full_transactions=False)
        except ExplorerError as e:
            raise FetchError("fetch transaction hashes for block", f"#{number}") from e
        return block.transaction_hashes

    async def get_block_transactions(self, number: int) -> Tuple[List[TxSummary], BlockStats]:
        try:
            block = await self._fetch_block(number, full_transactions=True)
        except ExplorerError as e:
            raise FetchError("fetch transactions for block", f"#{number}") from e

        return await self._summarize_transactions(block)

    async def get_block_with_transactions(self, number: int) -> Tuple[BlockInfo, List[TxSummary]]:
        """
        Block record with its transactions, the only path that fills the
        derived totals and the builder tag.
        """
        try:
            block = await self._fetch_block(number, full_transactions=True)
        except ExplorerError as e:
            raise FetchError("fetch block", f"#{number}") from e

        summaries, stats = await self._summarize_transactions(block)
        info = block_to_info(block, await self._resolve_miner(block)).model_copy(
            update={
                "blob_count": stats.blob_count,
                "total_value_transferred": stats.total_value_transferred,
                "total_fees": stats.total_fees,
                "burnt_fees": stats.burnt_fees,
                "builder_tag": detect_builder_tag(block.extra_data, block.miner),
            }
        )
        return info, summaries

    async def _fetch_block(self, number: int, full_transactions: bool) -> EthBlock:
        block_json = await self._retry_executor.execute(
            lambda: self._transport.get_block_by_number(number, full_transactions),
            f"eth_getBlockByNumber({number}, {str(full_transactions).lower()})",
        )
        if block_json is None:
            raise NotFoundError(f"Block {number} not found (RPC returned null)")
        return self._block_mapper.json_dict_to_block(block_json)

    async def _fetch_receipts(self, number: int) -> Dict[str, EthReceipt]:
        try:
            receipts_json = await self._retry_executor.execute(
                lambda: self._transport.get_block_receipts(number), f"eth_getBlockReceipts({number})"
            )
        except ExplorerError as e:
            logger.warning(f"Receipts for block {number} unavailable, fees will be missing: {e}")
            return {}

        receipts = [self._receipt_mapper.json_dict_to_receipt(r) for r in receipts_json or []]
        return {receipt.transaction_hash: receipt for receipt in receipts if receipt.transaction_hash}

    async def _resolve_miner(self, block: EthBlock) -> Optional[str]:
        if not block.miner:
            return None
        return await self._name_service.resolve_name(block.miner)

    async def _summarize_transactions(self, block: EthBlock) -> Tuple[List[TxSummary], BlockStats]:
        addresses = []
        for tx in block.transactions:
            addresses.append(tx.from_address)
            if tx.to_address:
                addresses.append(tx.to_address)

        names = await self._name_service.resolve_names(addresses)
        receipts = await self._fetch_receipts(block.number)

        summaries = [build_tx_summary(tx, names, receipts.get(tx.hash)) for tx in block.transactions]
        return summaries, compute_block_stats(block, receipts)
