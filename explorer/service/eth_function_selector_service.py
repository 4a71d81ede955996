from typing import Optional, Union

from constants.function_selectors import KNOWN_FUNCTION_SELECTORS
from utils.formatter_utils import hex_to_bytes


def _as_bytes(data: Union[bytes, bytearray, str, None]) -> bytes:
    if data is None:
        return b""
    if isinstance(data, str):
        return hex_to_bytes(data)
    return bytes(data)


def decode_function_selector(call_input: Union[bytes, bytearray, str, None]) -> Optional[str]:
    """
    Returns the signature of a well-known function for the first 4 bytes of call input.

    >>> decode_function_selector(bytes([0xA9, 0x05, 0x9C, 0xBB]))
    'transfer(address,uint256)'
    """
    data = _as_bytes(call_input)
    if len(data) < 4:
        return None
    return KNOWN_FUNCTION_SELECTORS.get(data[:4])


def method_selector(call_input: Union[bytes, bytearray, str, None]) -> Optional[str]:
    data = _as_bytes(call_input)
    if len(data) < 4:
        return None
    return "0x" + data[:4].hex()


def short_method_name(signature: str) -> str:
    """``"transfer(address,uint256)"`` -> ``"transfer"``"""
    return signature.split("(", 1)[0]
