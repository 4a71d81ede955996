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

from typing import Callable, Dict, List, Optional, Tuple, Union

from constants.event_signatures import (
    APPROVAL_EVENT_SIGNATURE,
    DEPOSIT_EVENT_SIGNATURE,
    KNOWN_EVENT_SIGNATURES,
    TRANSFER_EVENT_SIGNATURE,
    UNISWAP_V2_SWAP_EVENT_SIGNATURE,
    WITHDRAWAL_EVENT_SIGNATURE,
)
from explorer.models.receipt_log import DecodedLog, DecodedParam, EthReceiptLog
from explorer.models.token_transfer import TokenTransfer
from utils.formatter_utils import (
    MAX_UINT256,
    bytes_to_hex,
    format_units,
    hex_to_bytes,
    to_normalized_address,
    word_to_address,
)


WORD_SIZE = 32
# Amounts are shown with ether precision, the token's decimals are unknown here
DISPLAY_DECIMALS = 18
MAX_GENERIC_DATA_WORDS = 4


def decode_event_signature(topic0: Union[str, bytes, None]) -> Optional[str]:
    """Returns the event signature for a known topic0 hash, otherwise None."""
    if topic0 is None:
        return None
    if isinstance(topic0, (bytes, bytearray)):
        topic0 = bytes_to_hex(bytes(topic0))
    return KNOWN_EVENT_SIGNATURES.get(topic0.lower())


def _topic_word(topic: str) -> bytes:
    return hex_to_bytes(topic).rjust(WORD_SIZE, b"\x00")


def _uint_at(data: bytes, offset: int) -> int:
    return int.from_bytes(data[offset:offset + WORD_SIZE], "big")


def _first_amount(data: bytes) -> int:
    return _uint_at(data, 0) if len(data) >= WORD_SIZE else 0


def _address_param(name: str, word: bytes) -> DecodedParam:
    return DecodedParam(name=name, value=word_to_address(word), is_address=True)


def _amount_param(name: str, amount: int) -> DecodedParam:
    return DecodedParam(name=name, value=format_units(amount, DISPLAY_DECIMALS))


class EthEventDecoderService(object):
    """
    Table driven decoding of receipt logs.

    Known events get named parameters, anything else falls back to reading
    indexed topics and the leading data words as raw values.
    """

    @staticmethod
    def decode_logs(logs: List[EthReceiptLog]) -> Tuple[List[DecodedLog], List[TokenTransfer]]:
        decoded_logs = []
        token_transfers = []
        for log in logs:
            decoded_logs.append(EthEventDecoderService.decode_log(log))
            transfer = EthEventDecoderService.extract_token_transfer(log)
            if transfer is not None:
                token_transfers.append(transfer)
        return decoded_logs, token_transfers

    @staticmethod
    def decode_log(log: EthReceiptLog) -> DecodedLog:
        topics = [topic.lower() for topic in log.topics]
        data = hex_to_bytes(log.data)

        event_name = decode_event_signature(topics[0]) if topics else None
        params: List[DecodedParam] = []
        if topics:
            handler = _EVENT_HANDLERS.get(topics[0])
            if handler is not None and len(topics) >= handler[0]:
                params = handler[1](topics, data)
            else:
                params = EthEventDecoderService._decode_generic(topics, data)

        return DecodedLog(
            address=to_normalized_address(log.address) or "",
            topics=topics,
            data=bytes_to_hex(data),
            event_name=event_name,
            decoded_params=params,
        )

    @staticmethod
    def extract_token_transfer(log: EthReceiptLog) -> Optional[TokenTransfer]:
        topics = log.topics
        if len(topics) < 3 or topics[0].lower() != TRANSFER_EVENT_SIGNATURE:
            return None

        return TokenTransfer(
            token_address=to_normalized_address(log.address) or "",
            from_address=word_to_address(_topic_word(topics[1])),
            to_address=word_to_address(_topic_word(topics[2])),
            amount=_first_amount(hex_to_bytes(log.data)),
        )

    @staticmethod
    def _decode_transfer(topics: List[str], data: bytes) -> List[DecodedParam]:
        return [
            _address_param("from", _topic_word(topics[1])),
            _address_param("to", _topic_word(topics[2])),
            _amount_param("value", _first_amount(data)),
        ]

    @staticmethod
    def _decode_approval(topics: List[str], data: bytes) -> List[DecodedParam]:
        amount = _first_amount(data)
        if amount == MAX_UINT256:
            value = DecodedParam(name="value", value="unlimited")
        else:
            value = _amount_param("value", amount)
        return [
            _address_param("owner", _topic_word(topics[1])),
            _address_param("spender", _topic_word(topics[2])),
            value,
        ]

    @staticmethod
    def _decode_v2_swap(topics: List[str], data: bytes) -> List[DecodedParam]:
        params = [_address_param("sender", _topic_word(topics[1]))]
        if len(data) >= 4 * WORD_SIZE:
            for index, name in enumerate(("amount0In", "amount1In", "amount0Out", "amount1Out")):
                params.append(_amount_param(name, _uint_at(data, index * WORD_SIZE)))
        if len(data) >= 5 * WORD_SIZE:
            # Fifth word holds the recipient, right aligned
            params.append(_address_param("to", data[140:160]))
        return params

    @staticmethod
    def _decode_deposit(topics: List[str], data: bytes) -> List[DecodedParam]:
        return [
            _address_param("dst", _topic_word(topics[1])),
            _amount_param("wad", _first_amount(data)),
        ]

    @staticmethod
    def _decode_withdrawal(topics: List[str], data: bytes) -> List[DecodedParam]:
        return [
            _address_param("src", _topic_word(topics[1])),
            _amount_param("wad", _first_amount(data)),
        ]

    @staticmethod
    def _decode_generic(topics: List[str], data: bytes) -> List[DecodedParam]:
        params = []
        for index, topic in enumerate(topics[1:], start=1):
            word = _topic_word(topic)
            if word[:12] == b"\x00" * 12:
                params.append(_address_param(f"topic{index}", word))
            else:
                params.append(DecodedParam(name=f"topic{index}", value=str(int.from_bytes(word, "big"))))

        word_count = min(len(data) // WORD_SIZE, MAX_GENERIC_DATA_WORDS)
        for index in range(word_count):
            params.append(_amount_param(f"data{index}", _uint_at(data, index * WORD_SIZE)))
        return params


# topic0 -> (minimum topic count, decode rule)
_EVENT_HANDLERS: Dict[str, Tuple[int, Callable[[List[str], bytes], List[DecodedParam]]]] = {
    TRANSFER_EVENT_SIGNATURE: (3, EthEventDecoderService._decode_transfer),
    APPROVAL_EVENT_SIGNATURE: (3, EthEventDecoderService._decode_approval),
    UNISWAP_V2_SWAP_EVENT_SIGNATURE: (2, EthEventDecoderService._decode_v2_swap),
    DEPOSIT_EVENT_SIGNATURE: (2, EthEventDecoderService._decode_deposit),
    WITHDRAWAL_EVENT_SIGNATURE: (2, EthEventDecoderService._decode_withdrawal),
}
