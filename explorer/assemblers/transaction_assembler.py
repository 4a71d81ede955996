from typing import Dict, Optional

from explorer.executors.retry_executor import RetryExecutor
from explorer.mappers.receipt_mapper import EthReceiptMapper
from explorer.mappers.transaction_mapper import EthTransactionMapper
from explorer.models.receipt import EthReceipt
from explorer.models.transaction import EthTransaction, TxInfo, TxSummary, TxType
from explorer.service.eth_event_decoder_service import EthEventDecoderService
from explorer.service.eth_function_selector_service import (
    decode_function_selector,
    method_selector,
    short_method_name,
)
from explorer.service.eth_name_service import EthNameService
from explorer.transport import Transport
from utils.exceptions import ExplorerError, FetchError, NotFoundError
from utils.formatter_utils import hex_to_bytes
from utils.logger_utils import get_logger

logger = get_logger("Transaction Assembler")


def build_tx_summary(
    tx: EthTransaction, names: Dict[str, str], receipt: Optional[EthReceipt] = None
) -> TxSummary:
    call_input = hex_to_bytes(tx.input)
    signature = decode_function_selector(call_input)
    return TxSummary(
        hash=tx.hash,
        from_address=tx.from_address,
        to_address=tx.to_address,
        value=tx.value,
        gas_limit=tx.gas,
        tx_type=TxType.from_type_byte(tx.transaction_type),
        is_contract_creation=tx.to_address is None,
        from_name=names.get(tx.from_address),
        to_name=names.get(tx.to_address) if tx.to_address else None,
        input_size=len(call_input),
        method_selector=method_selector(call_input) if tx.to_address else None,
        decoded_method=short_method_name(signature) if signature else None,
        blob_count=len(tx.blob_versioned_hashes),
        fee_paid=receipt.fee if receipt is not None else None,
    )


def build_tx_info(tx: EthTransaction, receipt: Optional[EthReceipt], names: Dict[str, str]) -> TxInfo:
    call_input = hex_to_bytes(tx.input)
    fields = dict(
        hash=tx.hash,
        from_address=tx.from_address,
        to_address=tx.to_address,
        value=tx.value,
        gas_price=tx.gas_price,
        gas_limit=tx.gas,
        nonce=tx.nonce,
        block_number=tx.block_number,
        tx_index=tx.transaction_index,
        input_size=len(call_input),
        tx_type=TxType.from_type_byte(tx.transaction_type),
        max_fee_per_gas=tx.max_fee_per_gas,
        max_priority_fee_per_gas=tx.max_priority_fee_per_gas,
        access_list_size=len(tx.access_list) if tx.access_list is not None else None,
        blob_hashes=tx.blob_versioned_hashes,
        input_data=tx.input,
        from_name=names.get(tx.from_address),
        to_name=names.get(tx.to_address) if tx.to_address else None,
        decoded_method=decode_function_selector(call_input),
    )

    if receipt is not None:
        logs, token_transfers = EthEventDecoderService.decode_logs(receipt.logs)
        fields.update(
            gas_used=receipt.gas_used,
            status=receipt.status == 1 if receipt.status is not None else None,
            contract_created=receipt.contract_address,
            logs_count=len(receipt.logs),
            blob_gas_used=receipt.blob_gas_used,
            blob_gas_price=receipt.blob_gas_price,
            actual_fee=receipt.fee,
            logs=logs,
            token_transfers=token_transfers,
        )

    return TxInfo(**fields)


class TransactionAssembler(object):
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
        self._transaction_mapper = EthTransactionMapper()
        self._receipt_mapper = receipt_mapper or EthReceiptMapper()

    async def get_transaction(self, tx_hash: str) -> TxInfo:
        """
        Full transaction record. Receipt fields stay empty when the transaction
        is pending or its receipt could not be fetched.
        """
        try:
            tx_json = await self._retry_executor.execute(
                lambda: self._transport.get_transaction_by_hash(tx_hash), f"eth_getTransactionByHash({tx_hash})"
            )
            if tx_json is None:
                raise NotFoundError(f"Transaction {tx_hash} not found (RPC returned null)")
        except ExplorerError as e:
            raise FetchError("fetch transaction", tx_hash) from e

        tx = self._transaction_mapper.json_dict_to_transaction(tx_json)
        receipt = await self._get_receipt(tx_hash)

        addresses = [tx.from_address] + ([tx.to_address] if tx.to_address else [])
        names = await self._name_service.resolve_names(addresses)

        return build_tx_info(tx, receipt, names)

    async def _get_receipt(self, tx_hash: str) -> Optional[EthReceipt]:
        try:
            receipt_json = await self._retry_executor.execute(
                lambda: self._transport.get_transaction_receipt(tx_hash), f"eth_getTransactionReceipt({tx_hash})"
            )
        except ExplorerError as e:
            logger.warning(f"Receipt for {tx_hash} unavailable, treating transaction as pending: {e}")
            return None

        if receipt_json is None:
            return None
        return self._receipt_mapper.json_dict_to_receipt(receipt_json)
