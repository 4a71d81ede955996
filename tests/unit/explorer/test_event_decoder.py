import pytest

from constants.event_signatures import (
    APPROVAL_EVENT_SIGNATURE,
    DEPOSIT_EVENT_SIGNATURE,
    TRANSFER_EVENT_SIGNATURE,
    UNISWAP_V2_SWAP_EVENT_SIGNATURE,
    UNISWAP_V3_SWAP_EVENT_SIGNATURE,
    WITHDRAWAL_EVENT_SIGNATURE,
)
from explorer.models.receipt_log import EthReceiptLog
from explorer.service.eth_event_decoder_service import EthEventDecoderService, decode_event_signature
from tests.unit.chain_data import address_topic, address_word, word
from utils.formatter_utils import MAX_UINT256

TOKEN = "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48"
ALICE = "0x1111111111111111111111111111111111111111"
BOB = "0x2222222222222222222222222222222222222222"
PAIR = "0xB4e16d0168e52d35CaCD2c6185b44281Ec28C9Dc"


def make_log(topics, data=b"", address=TOKEN):
    return EthReceiptLog(address=address, topics=topics, data="0x" + data.hex())


def params(decoded):
    return [(p.name, p.value, p.is_address) for p in decoded.decoded_params]


def test_topic_hashes():
    assert TRANSFER_EVENT_SIGNATURE == "0xddf252ad1be2c89b69c2b068fc378daa952ba7f163c4a11628f55a4df523b3ef"
    assert APPROVAL_EVENT_SIGNATURE == "0x8c5be1e5ebec7d5bd14f71427d1e84f3dd0314c0f7b2291e5b200ac8c7c3b925"
    assert UNISWAP_V2_SWAP_EVENT_SIGNATURE == "0xd78ad95fa46c994b6551d0da85fc275fe613ce37657fb8d5e3d130840159d822"
    assert UNISWAP_V3_SWAP_EVENT_SIGNATURE == "0xc42079f94a6350d7e6235f29174924f928cc2ac818eb64fed8004e115fbcca67"
    assert DEPOSIT_EVENT_SIGNATURE == "0xe1fffcc4923d04b559f4d29a8bfc6cda04eb5b0d3c460751c2402c5c5cc9109c"
    assert WITHDRAWAL_EVENT_SIGNATURE == "0x7fcf532c15f0a6db0bd6d0e038bea71d30d808c7d98cb3bf7268a95bf5081b65"


def test_decode_event_signature():
    assert decode_event_signature(TRANSFER_EVENT_SIGNATURE.upper().replace("0X", "0x")) == (
        "Transfer(address,address,uint256)"
    )
    assert decode_event_signature(bytes.fromhex(APPROVAL_EVENT_SIGNATURE[2:])) == "Approval(address,address,uint256)"
    assert decode_event_signature("0x" + "ab" * 32) is None
    assert decode_event_signature(None) is None


def test_transfer():
    log = make_log([TRANSFER_EVENT_SIGNATURE, address_topic(ALICE), address_topic(BOB)], word(1_500_000_000_000_000_000))

    decoded = EthEventDecoderService.decode_log(log)

    assert decoded.event_name == "Transfer(address,address,uint256)"
    assert params(decoded) == [("from", ALICE, True), ("to", BOB, True), ("value", "1.5", False)]

    transfer = EthEventDecoderService.extract_token_transfer(log)
    assert transfer.token_address == TOKEN
    assert (transfer.from_address, transfer.to_address, transfer.amount) == (ALICE, BOB, 1_500_000_000_000_000_000)


def test_transfer_without_data_has_zero_amount():
    log = make_log([TRANSFER_EVENT_SIGNATURE, address_topic(ALICE), address_topic(BOB)])

    assert params(EthEventDecoderService.decode_log(log))[2] == ("value", "0", False)
    assert EthEventDecoderService.extract_token_transfer(log).amount == 0


def test_transfer_with_too_few_topics_uses_generic_decoding():
    log = make_log([TRANSFER_EVENT_SIGNATURE, address_topic(ALICE)], word(5))

    decoded = EthEventDecoderService.decode_log(log)

    assert decoded.event_name == "Transfer(address,address,uint256)"
    assert [p.name for p in decoded.decoded_params] == ["topic1", "data0"]
    assert EthEventDecoderService.extract_token_transfer(log) is None


def test_unlimited_approval():
    log = make_log([APPROVAL_EVENT_SIGNATURE, address_topic(ALICE), address_topic(BOB)], word(MAX_UINT256))

    assert params(EthEventDecoderService.decode_log(log)) == [
        ("owner", ALICE, True),
        ("spender", BOB, True),
        ("value", "unlimited", False),
    ]
    assert EthEventDecoderService.extract_token_transfer(log) is None


def test_v2_swap():
    data = word(10**18) + word(0) + word(0) + word(2 * 10**18) + address_word(BOB)
    log = make_log([UNISWAP_V2_SWAP_EVENT_SIGNATURE, address_topic(ALICE)], data, address=PAIR)

    assert params(EthEventDecoderService.decode_log(log)) == [
        ("sender", ALICE, True),
        ("amount0In", "1", False),
        ("amount1In", "0", False),
        ("amount0Out", "0", False),
        ("amount1Out", "2", False),
        ("to", BOB, True),
    ]


def test_v2_swap_with_short_data_keeps_sender_only():
    log = make_log([UNISWAP_V2_SWAP_EVENT_SIGNATURE, address_topic(ALICE)], word(1) * 3, address=PAIR)

    assert [p.name for p in EthEventDecoderService.decode_log(log).decoded_params] == ["sender"]


def test_weth_deposit_and_withdrawal():
    deposit = make_log([DEPOSIT_EVENT_SIGNATURE, address_topic(ALICE)], word(25 * 10**16))
    withdrawal = make_log([WITHDRAWAL_EVENT_SIGNATURE, address_topic(BOB)], word(10**18))

    assert params(EthEventDecoderService.decode_log(deposit)) == [("dst", ALICE, True), ("wad", "0.25", False)]
    assert params(EthEventDecoderService.decode_log(withdrawal)) == [("src", BOB, True), ("wad", "1", False)]


def test_v3_swap_is_named_but_decoded_generically():
    log = make_log(
        [UNISWAP_V3_SWAP_EVENT_SIGNATURE, address_topic(ALICE), address_topic(BOB)],
        word(1) * 5,
        address=PAIR,
    )

    decoded = EthEventDecoderService.decode_log(log)

    assert decoded.event_name == "Swap(address,address,int256,int256,uint160,uint128,int24)"
    assert [p.name for p in decoded.decoded_params] == ["topic1", "topic2", "data0", "data1", "data2", "data3"]


def test_generic_fallback():
    unknown_topic = "0x" + "12" * 32
    large_topic = "0x" + "ff" * 32
    data = word(3 * 10**18) + word(1) + b"\x01" * 10
    log = make_log([unknown_topic, address_topic(ALICE), large_topic], data)

    decoded = EthEventDecoderService.decode_log(log)

    assert decoded.event_name is None
    assert params(decoded) == [
        ("topic1", ALICE, True),
        ("topic2", str(MAX_UINT256), False),
        ("data0", "3", False),
        ("data1", "0.000000000000000001", False),
    ]


def test_log_without_topics():
    decoded = EthEventDecoderService.decode_log(make_log([], word(1)))

    assert decoded.event_name is None
    assert decoded.decoded_params == []


def test_decode_logs_pairs_two_transfers():
    logs = [
        make_log([TRANSFER_EVENT_SIGNATURE, address_topic(ALICE), address_topic(BOB)], word(1)),
        make_log([TRANSFER_EVENT_SIGNATURE, address_topic(BOB), address_topic(ALICE)], word(2)),
    ]

    decoded_logs, transfers = EthEventDecoderService.decode_logs(logs)

    assert len(decoded_logs) == 2
    assert [t.amount for t in transfers] == [1, 2]


@pytest.mark.parametrize("topic_count", [3, 4])
def test_erc721_shaped_transfer_still_yields_transfer(topic_count):
    topics = [TRANSFER_EVENT_SIGNATURE, address_topic(ALICE), address_topic(BOB), "0x" + word(7).hex()]
    log = make_log(topics[:topic_count])

    assert EthEventDecoderService.extract_token_transfer(log) is not None
