"""Request-to-remote-call parameter mapping."""

import pytest
from unittest.mock import AsyncMock, MagicMock

from ankr_plugin.actions import accounts, nfts, tokens, transactions

WALLET = "0xd8da6bf26964af9d7eed9e03e53415d37aa96045"
CONTRACT = "0xbc4ca0eda7647a8ab7c2061c2e118a18a936f13d"
TX_HASH = "0x5a4bf6970980a9381e6d6c78d96ab278035bbff58c383ffe96a0a2bbc7c02a4c"


@pytest.fixture
def provider():
    mock = MagicMock()
    for name in (
        "get_account_balance",
        "get_interactions",
        "get_nft_holders",
        "get_nft_metadata",
        "get_nft_transfers",
        "get_token_transfers",
        "get_transactions_by_address",
        "get_transactions_by_hash",
    ):
        setattr(mock, name, AsyncMock(return_value={}))
    return mock


def build(schema, **params):
    result = schema.validate(params)
    assert result.ok, result.error
    return result.request


@pytest.mark.asyncio
async def test_account_balance_fixed_options(provider):
    request = build(accounts.account_balance_schema, blockchain=["eth", "bsc"], walletAddress=WALLET)

    await accounts.get_account_balance(provider, request)

    provider.get_account_balance.assert_awaited_once_with({
        "blockchain": ["eth", "bsc"],
        "walletAddress": WALLET,
        "onlyWhitelisted": True,
        "pageSize": 50,
    })


@pytest.mark.asyncio
async def test_interactions_omit_absent_chain(provider):
    request = build(accounts.interactions_schema, address=WALLET)

    await accounts.get_interactions(provider, request)

    provider.get_interactions.assert_awaited_once_with({"address": WALLET})


@pytest.mark.asyncio
async def test_token_transfers_wrap_address_and_skip_missing_bounds(provider):
    request = build(tokens.token_transfers_schema, blockchain="eth", address=WALLET, toTimestamp=1700000000)

    await tokens.get_token_transfers(provider, request)

    provider.get_token_transfers.assert_awaited_once_with({
        "blockchain": "eth",
        "address": [WALLET],
        "descOrder": True,
        "pageSize": 10,
        "toTimestamp": 1700000000,
    })


@pytest.mark.asyncio
async def test_nft_transfers_only_send_present_filters(provider):
    request = build(nfts.nft_transfers_schema, blockchain="eth", contractAddress=CONTRACT, fromAddress="")

    await nfts.get_nft_transfers(provider, request)

    provider.get_nft_transfers.assert_awaited_once_with({
        "blockchain": "eth",
        "pageSize": 10,
        "contractAddress": CONTRACT,
    })


@pytest.mark.asyncio
async def test_nft_metadata_forces_fetch(provider):
    request = build(nfts.nft_metadata_schema, blockchain="eth", contractAddress=CONTRACT, tokenId="1")

    await nfts.get_nft_metadata(provider, request)

    provider.get_nft_metadata.assert_awaited_once_with({
        "blockchain": "eth",
        "contractAddress": CONTRACT,
        "tokenId": "1",
        "forceFetch": True,
    })


@pytest.mark.asyncio
async def test_nft_holders_default_chain(provider):
    request = build(nfts.nft_holders_schema, contractAddress=CONTRACT)

    await nfts.get_nft_holders(provider, request)

    provider.get_nft_holders.assert_awaited_once_with({
        "blockchain": "eth",
        "contractAddress": CONTRACT,
        "pageSize": 10,
    })


@pytest.mark.asyncio
async def test_transactions_by_address(provider):
    request = build(transactions.transactions_by_address_schema, blockchain="eth", address=WALLET, descOrder=False)

    await transactions.get_transactions_by_address(provider, request)

    provider.get_transactions_by_address.assert_awaited_once_with({
        "blockchain": "eth",
        "address": [WALLET],
        "includeLogs": True,
        "descOrder": False,
        "pageSize": 10,
    })


@pytest.mark.asyncio
async def test_transactions_by_hash_decoding_follows_include_logs(provider):
    request = build(transactions.transactions_by_hash_schema, transactionHash=TX_HASH)

    await transactions.get_transactions_by_hash(provider, request)

    provider.get_transactions_by_hash.assert_awaited_once_with({
        "transactionHash": TX_HASH,
        "includeLogs": False,
        "decodeLogs": False,
        "decodeTxData": True,
    })


@pytest.mark.asyncio
async def test_token_transfers_forward_contract_filter(provider):
    request = build(tokens.token_transfers_schema, blockchain="eth", address=WALLET, contractAddress=CONTRACT)

    await tokens.get_token_transfers(provider, request)

    params = provider.get_token_transfers.call_args.args[0]
    assert params["contractAddress"] == CONTRACT
    assert params["address"] == [WALLET]
