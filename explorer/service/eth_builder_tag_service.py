from typing import Optional, Union

from constants.builder_tags import (
    BUILDER_EXTRA_DATA_TAGS,
    KNOWN_BUILDER_ADDRESSES,
    MAX_PLAIN_BUILDER_TAG_LENGTH,
)
from utils.formatter_utils import hex_to_bytes


def _as_bytes(extra_data: Union[bytes, str, None]) -> bytes:
    if isinstance(extra_data, str):
        return hex_to_bytes(extra_data)
    return extra_data or b""


def _is_plain_tag_char(char: str) -> bool:
    return char.isalnum() or char in " -_"


def detect_builder_tag(extra_data: Union[bytes, str, None], miner: Optional[str] = None) -> Optional[str]:
    """
    Names the block builder from the header extra data, falling back to
    known fee-recipient addresses.
    """
    raw = _as_bytes(extra_data)
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError:
        text = None

    if text is not None:
        lowered = text.lower()
        for needles, tag in BUILDER_EXTRA_DATA_TAGS:
            if any(needle in lowered for needle in needles):
                return tag
        if text and len(raw) < MAX_PLAIN_BUILDER_TAG_LENGTH and all(_is_plain_tag_char(c) for c in text):
            return text

    if miner:
        miner_lower = miner.lower()
        for address, tag in KNOWN_BUILDER_ADDRESSES:
            if address in miner_lower:
                return tag

    return None


def decode_extra_data(extra_data: Union[bytes, str, None]) -> Optional[str]:
    """Extra data as text when it is printable ASCII (often a client or builder banner)."""
    raw = _as_bytes(extra_data)
    if not raw:
        return None
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError:
        return None
    if all(c == " " or (c.isascii() and c.isprintable() and not c.isspace()) for c in text):
        return text
    return None
