"""
Blockchain identifiers supported by the Ankr multichain API.

The set of identifiers is closed and fixed here; every chain value in a
request must be one of these members.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple, Union


class Blockchain(str, Enum):
    """Chain identifiers understood by the remote API."""

    # Mainnets
    ARBITRUM = "arbitrum"
    AVALANCHE = "avalanche"
    BASE = "base"
    BSC = "bsc"
    ETH = "eth"
    FANTOM = "fantom"
    FLARE = "flare"
    GNOSIS = "gnosis"
    LINEA = "linea"
    OPTIMISM = "optimism"
    POLYGON = "polygon"
    POLYGON_ZKEVM = "polygon_zkevm"
    ROLLUX = "rollux"
    SCROLL = "scroll"
    SYSCOIN = "syscoin"
    TELOS = "telos"
    XAI = "xai"
    XLAYER = "xlayer"
    STORY_MAINNET = "story_mainnet"

    # Testnets
    AVALANCHE_FUJI = "avalanche_fuji"
    BASE_SEPOLIA = "base_sepolia"
    ETH_HOLESKY = "eth_holesky"
    ETH_SEPOLIA = "eth_sepolia"
    OPTIMISM_TESTNET = "optimism_testnet"
    POLYGON_AMOY = "polygon_amoy"
    STORY_TESTNET = "story_testnet"


@dataclass(frozen=True)
class ChainInfo:
    """Display metadata for one chain identifier."""
    identifier: Blockchain
    display_name: str
    is_testnet: bool = False


BLOCKCHAIN_VALUES: Tuple[str, ...] = tuple(chain.value for chain in Blockchain)

BLOCKCHAIN_INFO: Dict[Blockchain, ChainInfo] = {
    info.identifier: info
    for info in (
        ChainInfo(Blockchain.ARBITRUM, "Arbitrum"),
        ChainInfo(Blockchain.AVALANCHE, "Avalanche"),
        ChainInfo(Blockchain.BASE, "Base"),
        ChainInfo(Blockchain.BSC, "Binance Smart Chain"),
        ChainInfo(Blockchain.ETH, "Ethereum"),
        ChainInfo(Blockchain.FANTOM, "Fantom"),
        ChainInfo(Blockchain.FLARE, "Flare"),
        ChainInfo(Blockchain.GNOSIS, "Gnosis"),
        ChainInfo(Blockchain.LINEA, "Linea"),
        ChainInfo(Blockchain.OPTIMISM, "Optimism"),
        ChainInfo(Blockchain.POLYGON, "Polygon"),
        ChainInfo(Blockchain.POLYGON_ZKEVM, "Polygon zkEVM"),
        ChainInfo(Blockchain.ROLLUX, "Rollux"),
        ChainInfo(Blockchain.SCROLL, "Scroll"),
        ChainInfo(Blockchain.SYSCOIN, "Syscoin"),
        ChainInfo(Blockchain.TELOS, "Telos"),
        ChainInfo(Blockchain.XAI, "Xai"),
        ChainInfo(Blockchain.XLAYER, "XLayer"),
        ChainInfo(Blockchain.STORY_MAINNET, "Story"),
        ChainInfo(Blockchain.AVALANCHE_FUJI, "Avalanche Fuji", is_testnet=True),
        ChainInfo(Blockchain.BASE_SEPOLIA, "Base Sepolia", is_testnet=True),
        ChainInfo(Blockchain.ETH_HOLESKY, "Ethereum Holesky", is_testnet=True),
        ChainInfo(Blockchain.ETH_SEPOLIA, "Ethereum Sepolia", is_testnet=True),
        ChainInfo(Blockchain.OPTIMISM_TESTNET, "Optimism Testnet", is_testnet=True),
        ChainInfo(Blockchain.POLYGON_AMOY, "Polygon Amoy", is_testnet=True),
        ChainInfo(Blockchain.STORY_TESTNET, "Story Testnet", is_testnet=True),
    )
}


def get_chain_info(identifier: Union[Blockchain, str, None]) -> Optional[ChainInfo]:
    """Look up chain metadata by identifier. Returns None when unknown."""
    if identifier is None:
        return None
    try:
        return BLOCKCHAIN_INFO[Blockchain(identifier)]
    except ValueError:
        return None


def get_blockchain_from_name(name: Optional[str]) -> Optional[Blockchain]:
    """
    Resolve free text to a chain identifier (case insensitive).

    Tries an exact identifier match first, then a display-name match.

    Examples:
        >>> get_blockchain_from_name("ETH")
        <Blockchain.ETH: 'eth'>
        >>> get_blockchain_from_name("binance smart chain")
        <Blockchain.BSC: 'bsc'>
    """
    if not name:
        return None

    normalized = name.strip().lower()

    for chain in Blockchain:
        if chain.value.lower() == normalized:
            return chain

    for chain, info in BLOCKCHAIN_INFO.items():
        if info.display_name.lower() == normalized:
            return chain

    return None


def is_testnet(identifier: Union[Blockchain, str]) -> bool:
    info = get_chain_info(identifier)
    return bool(info and info.is_testnet)


def display_name(identifier: Union[Blockchain, str]) -> str:
    """Human-readable chain name, falling back to the raw identifier."""
    info = get_chain_info(identifier)
    if info:
        return info.display_name
    return str(identifier.value if isinstance(identifier, Blockchain) else identifier)


def mainnets() -> Tuple[ChainInfo, ...]:
    return tuple(info for info in BLOCKCHAIN_INFO.values() if not info.is_testnet)


def testnets() -> Tuple[ChainInfo, ...]:
    return tuple(info for info in BLOCKCHAIN_INFO.values() if info.is_testnet)
