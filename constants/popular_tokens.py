from typing import NamedTuple, Tuple


class PopularToken(NamedTuple):
    symbol: str
    name: str
    address: str
    decimals: int


# Well-known ERC-20 tokens on Ethereum mainnet, probed for balances in this order
POPULAR_TOKENS: Tuple[PopularToken, ...] = (
    PopularToken("USDT", "Tether USD", "0xdAC17F958D2ee523a2206206994597C13D831ec7", 6),
    PopularToken("USDC", "USD Coin", "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48", 6),
    PopularToken("WETH", "Wrapped Ether", "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2", 18),
    PopularToken("DAI", "Dai Stablecoin", "0x6B175474E89094C44Da98b954EedeAC495271d0F", 18),
    PopularToken("WBTC", "Wrapped Bitcoin", "0x2260FAC5E5542a773Aa44fBCfeDf7C193bc2C599", 8),
    PopularToken("LINK", "Chainlink", "0x514910771AF9Ca656af840dff83E8264EcF986CA", 18),
    PopularToken("UNI", "Uniswap", "0x1f9840a85d5aF5bf1D1762F925BDADdC4201F984", 18),
    PopularToken("MATIC", "Polygon", "0x7D1AfA7B718fb893dB30A3aBc0Cfc608AaCfeBB0", 18),
    PopularToken("SHIB", "Shiba Inu", "0x95aD61b0a150d79219dCF64E1E6Cc01f0B64C4cE", 18),
    PopularToken("stETH", "Lido Staked ETH", "0xae7ab96520DE3A18E5e111B5EaAb095312D7fE84", 18),
)
