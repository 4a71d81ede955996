from types import MappingProxyType
from typing import Mapping

from eth_utils import encode_hex, keccak

TRANSFER_EVENT = "Transfer(address,address,uint256)"
APPROVAL_EVENT = "Approval(address,address,uint256)"
UNISWAP_V2_SWAP_EVENT = "Swap(address,uint256,uint256,uint256,uint256,address)"
UNISWAP_V3_SWAP_EVENT = "Swap(address,address,int256,int256,uint160,uint128,int24)"
DEPOSIT_EVENT = "Deposit(address,uint256)"
WITHDRAWAL_EVENT = "Withdrawal(address,uint256)"


def event_topic(signature: str) -> str:
    """keccak256 of an event signature as a 0x-prefixed hex string (topic0)."""
    return encode_hex(keccak(text=signature))


# ERC-20 / ERC-721 Transfer(address indexed from, address indexed to, uint256 value)
# 0xddf252ad1be2c89b69c2b068fc378daa952ba7f163c4a11628f55a4df523b3ef
TRANSFER_EVENT_SIGNATURE = event_topic(TRANSFER_EVENT)

# Approval(address indexed owner, address indexed spender, uint256 value)
APPROVAL_EVENT_SIGNATURE = event_topic(APPROVAL_EVENT)

# Uniswap V2 Pair Swap
UNISWAP_V2_SWAP_EVENT_SIGNATURE = event_topic(UNISWAP_V2_SWAP_EVENT)

# Uniswap V3 Pool Swap, recognized by name only
UNISWAP_V3_SWAP_EVENT_SIGNATURE = event_topic(UNISWAP_V3_SWAP_EVENT)

# WETH9 Deposit(address indexed dst, uint wad) / Withdrawal(address indexed src, uint wad)
DEPOSIT_EVENT_SIGNATURE = event_topic(DEPOSIT_EVENT)
WITHDRAWAL_EVENT_SIGNATURE = event_topic(WITHDRAWAL_EVENT)

# topic0 -> event signature
KNOWN_EVENT_SIGNATURES: Mapping[str, str] = MappingProxyType(
    {
        TRANSFER_EVENT_SIGNATURE: TRANSFER_EVENT,
        APPROVAL_EVENT_SIGNATURE: APPROVAL_EVENT,
        UNISWAP_V2_SWAP_EVENT_SIGNATURE: UNISWAP_V2_SWAP_EVENT,
        UNISWAP_V3_SWAP_EVENT_SIGNATURE: UNISWAP_V3_SWAP_EVENT,
        DEPOSIT_EVENT_SIGNATURE: DEPOSIT_EVENT,
        WITHDRAWAL_EVENT_SIGNATURE: WITHDRAWAL_EVENT,
    }
)
