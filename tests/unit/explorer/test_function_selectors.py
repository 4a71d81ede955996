import pytest

from constants.function_selectors import ALL_FUNCTION_SIGNATURES, KNOWN_FUNCTION_SELECTORS
from explorer.service.eth_function_selector_service import (
    decode_function_selector,
    method_selector,
    short_method_name,
)


@pytest.mark.parametrize(
    "selector, signature",
    [
        ("a9059cbb", "transfer(address,uint256)"),
        ("095ea7b3", "approve(address,uint256)"),
        ("23b872dd", "transferFrom(address,address,uint256)"),
        ("70a08231", "balanceOf(address)"),
        ("6352211e", "ownerOf(uint256)"),
        ("a22cb465", "setApprovalForAll(address,bool)"),
        ("01ffc9a7", "supportsInterface(bytes4)"),
        ("38ed1739", "swapExactTokensForTokens(uint256,uint256,address[],address,uint256)"),
        ("414bf389", "exactInputSingle((address,address,uint24,address,uint256,uint256,uint256,uint160))"),
        ("ac9650d8", "multicall(bytes[])"),
        ("d0e30db0", "deposit()"),
        ("2e1a7d4d", "withdraw(uint256)"),
        ("3659cfe6", "upgradeTo(address)"),
    ],
)
def test_known_selectors(selector, signature):
    assert decode_function_selector(bytes.fromhex(selector)) == signature


def test_selector_table_is_large_enough_and_unambiguous():
    assert len(KNOWN_FUNCTION_SELECTORS) >= 25
    assert len(KNOWN_FUNCTION_SELECTORS) == len(ALL_FUNCTION_SIGNATURES)


def test_transfer_calldata_with_arguments():
    calldata = bytes([0xA9, 0x05, 0x9C, 0xBB]) + b"\x00" * 64
    assert decode_function_selector(calldata) == "transfer(address,uint256)"


def test_hex_string_input():
    assert decode_function_selector("0x095ea7b3" + "00" * 64) == "approve(address,uint256)"


@pytest.mark.parametrize("call_input", [b"", b"\xa9\x05\x9c", None, "0x"])
def test_short_input_has_no_match(call_input):
    assert decode_function_selector(call_input) is None
    assert method_selector(call_input) is None


def test_unknown_selector():
    assert decode_function_selector(b"\xde\xad\xbe\xef") is None
    assert method_selector(b"\xde\xad\xbe\xef\x00") == "0xdeadbeef"


def test_short_method_name():
    assert short_method_name("transfer(address,uint256)") == "transfer"
    assert short_method_name("deposit()") == "deposit"
