from types import MappingProxyType
from typing import Mapping, Tuple

from eth_utils import function_signature_to_4byte_selector

# ERC-20 Standard Functions
ERC20_FUNCTION_SIGNATURES: Tuple[str, ...] = (
    "transfer(address,uint256)",
    "transferFrom(address,address,uint256)",
    "approve(address,uint256)",
    "balanceOf(address)",
    "allowance(address,address)",
    "increaseAllowance(address,uint256)",
)

# ERC-721 NFT Standard Functions
ERC721_FUNCTION_SIGNATURES: Tuple[str, ...] = (
    "safeTransferFrom(address,address,uint256)",
    "safeTransferFrom(address,address,uint256,bytes)",
    "ownerOf(uint256)",
    "getApproved(uint256)",
    "setApprovalForAll(address,bool)",
    "supportsInterface(bytes4)",
)

# Uniswap V2 Router
UNISWAP_V2_ROUTER_SIGNATURES: Tuple[str, ...] = (
    "swapExactTokensForTokens(uint256,uint256,address[],address,uint256)",
    "swapExactETHForTokens(uint256,address[],address,uint256)",
    "swapExactTokensForETH(uint256,uint256,address[],address,uint256)",
    "swapETHForExactTokens(uint256,address[],address,uint256)",
)

# Uniswap V3 Router
UNISWAP_V3_ROUTER_SIGNATURES: Tuple[str, ...] = (
    "exactInput((bytes,address,uint256,uint256,uint256))",
    "exactInputSingle((address,address,uint24,address,uint256,uint256,uint256,uint160))",
    "exactOutput((bytes,address,uint256,uint256,uint256))",
    "exactOutputSingle((address,address,uint24,address,uint256,uint256,uint256,uint160))",
    "multicall(uint256,bytes[])",
    "multicall(bytes[])",
)

# WETH style wrappers and mintable tokens
COMMON_FUNCTION_SIGNATURES: Tuple[str, ...] = (
    "deposit()",
    "withdraw(uint256)",
    "withdraw()",
    "mint(address,uint256)",
    "burn(uint256)",
)

# Transparent / UUPS Proxy
PROXY_FUNCTION_SIGNATURES: Tuple[str, ...] = (
    "implementation()",
    "admin()",
    "upgradeTo(address)",
    "upgradeToAndCall(address,bytes)",
)

# Aave V3 Pool
LENDING_FUNCTION_SIGNATURES: Tuple[str, ...] = (
    "flashLoan(address,address[],uint256[],uint256[],address,bytes,uint16)",
    "supply(address,uint256,address,uint16)",
    "borrow(address,uint256,uint256,uint16,address)",
    "repay(address,uint256,uint256,address)",
    "withdraw(address,uint256,address)",
)

# ENS Public Resolver / Reverse Registrar
ENS_FUNCTION_SIGNATURES: Tuple[str, ...] = (
    "setAddr(bytes32,address)",
    "setName(string)",
    "addr(bytes32)",
)

ALL_FUNCTION_SIGNATURES: Tuple[str, ...] = (
    ERC20_FUNCTION_SIGNATURES
    + ERC721_FUNCTION_SIGNATURES
    + UNISWAP_V2_ROUTER_SIGNATURES
    + UNISWAP_V3_ROUTER_SIGNATURES
    + COMMON_FUNCTION_SIGNATURES
    + PROXY_FUNCTION_SIGNATURES
    + LENDING_FUNCTION_SIGNATURES
    + ENS_FUNCTION_SIGNATURES
)

# 4-byte selector -> function signature
KNOWN_FUNCTION_SELECTORS: Mapping[bytes, str] = MappingProxyType(
    {function_signature_to_4byte_selector(signature): signature for signature in ALL_FUNCTION_SIGNATURES}
)
