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

from typing import Optional, Union

from eth_utils import decode_hex, encode_hex, to_checksum_address, to_int

from utils.logger_utils import get_logger

logger = get_logger("Formatter Utils")

MAX_UINT256 = 2**256 - 1


def hex_to_dec(hex_string: Optional[Union[str, int]]) -> Optional[int]:
    """
    Converts a hex quantity from the node to a decimal integer.
    """
    if hex_string is None:
        return None
    if isinstance(hex_string, int):
        return hex_string
    try:
        return to_int(hexstr=hex_string)
    except (ValueError, TypeError):
        logger.warning(f"Invalid hex string for conversion: {hex_string}")
        return None


def hex_to_bytes(hex_string: Optional[str]) -> bytes:
    if not hex_string:
        return b""
    return decode_hex(hex_string)


def bytes_to_hex(data: bytes) -> str:
    return encode_hex(data)


def to_normalized_address(address: Optional[str]) -> Optional[str]:
    """
    Converts an address to its EIP-55 checksummed form.
    Safe-guards against None or invalid types.
    """
    if address is None or not isinstance(address, str):
        return None

    try:
        return to_checksum_address(address)
    except ValueError:
        return address.lower()


def word_to_address(word: bytes) -> str:
    """Interprets the low 20 bytes of a 32-byte word as an address."""
    return to_checksum_address("0x" + word[-20:].rjust(20, b"\x00").hex())


def is_zero_address(address: Optional[str]) -> bool:
    return address is None or int(address, 16) == 0


def format_units(value: int, decimals: int) -> str:
    """
    Formats a raw integer amount with the given number of decimals,
    trimming trailing zeros of the fractional part.

    >>> format_units(1500000, 6)
    '1.5'
    """
    if value == 0:
        return "0"

    divisor = 10**decimals
    whole, remainder = divmod(value, divisor)
    if remainder == 0:
        return str(whole)

    fraction = str(remainder).rjust(decimals, "0").rstrip("0")
    if not fraction:
        return str(whole)
    return f"{whole}.{fraction}"


def parse_units(text: str, decimals: int) -> int:
    """
    Parses a decimal amount back into its raw integer, the inverse of format_units.

    >>> parse_units("1.5", 6)
    1500000
    """
    whole, point, fraction = text.strip().partition(".")
    if not whole.isdigit() or (point and not fraction.isdigit()):
        raise ValueError(f"Invalid decimal amount: {text!r}")
    if len(fraction) > decimals:
        raise ValueError(f"{text!r} has more than {decimals} fractional digits")
    return int(whole) * 10**decimals + int(fraction.ljust(decimals, "0") or "0")
