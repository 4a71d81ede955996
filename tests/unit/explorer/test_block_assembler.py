import pytest
from eth_abi import encode

from constants.contract_addresses import ENS_REVERSE_RECORDS_ADDRESS
from explorer.assemblers.block_assembler import BlockAssembler
from explorer.models.transaction import TxKind
from explorer.service.eth_name_service import GET_NAMES_SELECTOR, EthNameService
from tests.unit.chain_data import raw_block, raw_receipt, raw_transaction
from utils.exceptions import FetchError, NotFoundError, RetryError, RpcError

SENDER = "0xd8da6bf26964af9d7eed9e03e53415d37aa96045"
TOKEN = "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48"


@pytest.fixture
def assembler(fake_transport, retry_executor):
    return BlockAssembler(fake_transport, retry_executor, EthNameService(fake_transport, retry_executor))


@pytest.fixture
def populated_transport(fake_transport):
    transactions = [
        raw_transaction("0x01", SENDER, TOKEN, value=10**18, input_data="0xa9059cbb" + "00" * 64),
        raw_transaction("0x02", SENDER, None, value=0, tx_type=0, input_data="0x6080"),
        raw_transaction(
            "0x03", SENDER, TOKEN, value=2 * 10**18, tx_type=3, blobVersionedHashes=["0x" + "01" * 32] * 2
        ),
    ]
    fake_transport.blocks[100] = raw_block(
        100, transactions=transactions, gas_used=1_000_000, extra_data="0x" + b"beaverbuild.org".hex()
    )
    fake_transport.block_receipts[100] = [
        raw_receipt("0x01", gas_used=50_000, effective_gas_price=10),
        raw_receipt("0x02", gas_used=100_000, effective_gas_price=10),
        raw_receipt("0x03", gas_used=21_000, effective_gas_price=10),
    ]
    return fake_transport


@pytest.mark.asyncio
async def test_get_block_leaves_derived_fields_empty(assembler, populated_transport):
    populated_transport.calls[(ENS_REVERSE_RECORDS_ADDRESS.lower(), GET_NAMES_SELECTOR)] = encode(
        ["string[]"], [["builder.eth"]]
    )

    block = await assembler.get_block(100)

    assert block.number == 100
    assert block.tx_count == 3
    assert block.miner_name == "builder.eth"
    assert block.withdrawals_count == 2
    assert block.extra_data_decoded == "beaverbuild.org"
    assert block.total_value_transferred == 0
    assert block.total_fees == 0
    assert block.burnt_fees == 0
    assert block.blob_count == 0
    assert block.builder_tag is None
    assert populated_transport.methods_called("eth_getBlockByNumber") == [(100, False)]


@pytest.mark.asyncio
async def test_get_block_transactions(assembler, populated_transport):
    summaries, stats = await assembler.get_block_transactions(100)

    assert [s.hash for s in summaries] == ["0x01", "0x02", "0x03"]
    transfer, creation, blob = summaries
    assert transfer.decoded_method == "transfer"
    assert transfer.method_selector == "0xa9059cbb"
    assert transfer.fee_paid == 500_000
    assert creation.is_contract_creation
    assert creation.method_selector is None
    assert creation.tx_type.kind == TxKind.LEGACY
    assert blob.blob_count == 2
    assert blob.tx_type.label == "Blob (Type 3)"

    assert stats.total_value_transferred == 3 * 10**18
    assert stats.total_fees == 1_710_000
    assert stats.burnt_fees == 10 * 10**9 * 1_000_000
    assert stats.blob_count == 2


@pytest.mark.asyncio
async def test_get_block_with_transactions_fills_derived_fields(assembler, populated_transport):
    block, summaries = await assembler.get_block_with_transactions(100)

    assert len(summaries) == 3
    assert block.total_value_transferred == 3 * 10**18
    assert block.total_fees == 1_710_000
    assert block.burnt_fees == 10 * 10**9 * 1_000_000
    assert block.blob_count == 2
    assert block.builder_tag == "Beaver"
    assert populated_transport.methods_called("eth_getBlockByNumber") == [(100, True)]


@pytest.mark.asyncio
async def test_missing_receipts_are_tolerated(assembler, populated_transport):
    populated_transport.failures["eth_getBlockReceipts"] = RpcError("eth_getBlockReceipts", "method not found", -32601)

    summaries, stats = await assembler.get_block_transactions(100)

    assert all(s.fee_paid is None for s in summaries)
    assert stats.total_fees == 0
    assert stats.total_value_transferred == 3 * 10**18


@pytest.mark.asyncio
async def test_pre_london_block_burns_nothing(assembler, fake_transport):
    fake_transport.blocks[5] = raw_block(5, base_fee=None)

    _, stats = await assembler.get_block_transactions(5)

    assert stats.burnt_fees == 0


@pytest.mark.asyncio
async def test_unknown_block(assembler):
    with pytest.raises(FetchError, match="Failed to fetch block #999") as exc_info:
        await assembler.get_block(999)

    assert isinstance(exc_info.value.__cause__, NotFoundError)


@pytest.mark.asyncio
async def test_transport_failure_is_wrapped(assembler, fake_transport, no_sleep):
    fake_transport.failures["eth_getBlockByNumber"] = RpcError("eth_getBlockByNumber", "HTTP 503 Service Unavailable")

    with pytest.raises(FetchError, match="Failed to fetch transactions for block #100") as exc_info:
        await assembler.get_block_transactions(100)

    retry_error = exc_info.value.__cause__
    assert isinstance(retry_error, RetryError)
    assert len(retry_error.attempts) == 3
    assert no_sleep.await_count == 2


@pytest.mark.asyncio
async def test_block_tx_hashes(assembler, populated_transport):
    assert await assembler.get_block_tx_hashes(100) == ["0x01", "0x02", "0x03"]
