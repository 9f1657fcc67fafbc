import pytest

from ankr_plugin.chains import (
    BLOCKCHAIN_INFO,
    Blockchain,
    display_name,
    get_blockchain_from_name,
    get_chain_info,
    is_testnet,
    mainnets,
    testnets,
)


def test_registry_covers_every_identifier():
    assert set(BLOCKCHAIN_INFO) == set(Blockchain)
    assert len(mainnets()) == 19
    assert len(testnets()) == 7


@pytest.mark.parametrize("chain", list(Blockchain))
def test_identifier_and_display_name_lookups_agree(chain):
    info = BLOCKCHAIN_INFO[chain]

    assert get_blockchain_from_name(chain.value) == chain
    assert get_blockchain_from_name(info.display_name) == chain
    assert get_blockchain_from_name(f"  {info.display_name.upper()} ") == chain


def test_identifier_match_wins_over_display_name():
    assert get_blockchain_from_name("BASE") == Blockchain.BASE
    assert get_blockchain_from_name("Binance Smart Chain") == Blockchain.BSC


@pytest.mark.parametrize("name", ["", None, "solana", "ethereum mainnet"])
def test_unknown_names_resolve_to_none(name):
    assert get_blockchain_from_name(name) is None


def test_chain_info_helpers():
    assert get_chain_info("eth").display_name == "Ethereum"
    assert get_chain_info("not-a-chain") is None
    assert is_testnet(Blockchain.ETH_SEPOLIA) is True
    assert is_testnet("polygon") is False
    assert display_name(Blockchain.POLYGON_ZKEVM) == "Polygon zkEVM"
    assert display_name("unknown") == "unknown"
