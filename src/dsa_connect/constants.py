"""Constants and address registry for the DSA contracts."""

from enum import Enum

GENESIS_ADDRESS = "0x0000000000000000000000000000000000000000"
ETH_ADDRESS = "0xEeeeeEeeeEeEeeEeEeEeeEEEeeeeEeeeeeeeEEeE"

# uint256(-1), used for "max amount" spell arguments
MAX_VALUE = 2**256 - 1

DEFAULT_ACCOUNT_VERSION = 2
DEFAULT_BUILD_VERSION = 1
DEFAULT_GAS_BUFFER = 1.1


class Mode(str, Enum):
    """How transactions get signed.

    ``NODE`` signs locally with a held private key, ``BROWSER`` lets the
    connected node or wallet sign with its managed accounts.
    """

    NODE = "node"
    BROWSER = "browser"


# Ethereum mainnet deployment of the DSA core and resolvers.
ADDRESSES: dict = {
    "genesis": GENESIS_ADDRESS,
    "core": {
        "index": "0x2971AdFa57b20E5a416aE5a708A8655A9c74f723",
        "list": "0x4c8a1BEb8a87765788946D6B19C6C6355194AbEb",
        "connectors": "0xD6A602C01a023B98Ecfb29Df02FBA380d3B21E0c",
    },
    "read": {
        "core": "0x621AD080ad6a4Ba4aD8A04c7CA62E53EfF5F79c0",
    },
    # Only used by version 1 accounts, which cast to connector addresses.
    "connectors": {
        "basic": "0x9370236a085A99Aa359f4bD2f0424b8c3bf25C99",
        "auth": "0xd1aFf9f2aCf800C876c409100D6F39AEa93Fc3D9",
        "compound": "0x15FdD1e902cAC70786fe7D31013B1a806764B5a2",
        "maker": "0xac02030d8a8F49eD04b2f52C394D3F901A10F8A9",
    },
}

TOKENS: dict[str, dict] = {
    "eth": {"symbol": "ETH", "name": "Ethereum", "address": ETH_ADDRESS, "decimals": 18},
    "weth": {
        "symbol": "WETH",
        "name": "Wrapped Ether",
        "address": "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2",
        "decimals": 18,
    },
    "dai": {
        "symbol": "DAI",
        "name": "Dai Stablecoin",
        "address": "0x6B175474E89094C44Da98b954EedeAC495271d0F",
        "decimals": 18,
    },
    "usdc": {
        "symbol": "USDC",
        "name": "USD Coin",
        "address": "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48",
        "decimals": 6,
    },
    "usdt": {
        "symbol": "USDT",
        "name": "Tether USD",
        "address": "0xdAC17F958D2ee523a2206206994597C13D831ec7",
        "decimals": 6,
    },
    "wbtc": {
        "symbol": "WBTC",
        "name": "Wrapped BTC",
        "address": "0x2260FAC5E5542a773Aa44fBCfeDf7C193bc2C599",
        "decimals": 8,
    },
}
