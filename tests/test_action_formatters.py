"""Response formatting for each action."""

from ankr_plugin.actions import accounts, network, nfts, tokens, transactions

WALLET = "0xd8da6bf26964af9d7eed9e03e53415d37aa96045"
OTHER = "0x68b3465833fb72a70ecdf485e0e4c7bd8665fc45"
CONTRACT = "0xbc4ca0eda7647a8ab7c2061c2e118a18a936f13d"
TX_HASH = "0x5a4bf6970980a9381e6d6c78d96ab278035bbff58c383ffe96a0a2bbc7c02a4c"
SYNC = {"status": "synced", "lag": "0s", "timestamp": 1600000000}


def build(schema, **params):
    result = schema.validate(params)
    assert result.ok, result.error
    return result.request


class TestTokenPrice:
    def test_price_and_truncated_contract(self):
        request = build(tokens.token_price_schema, blockchain="eth", contractAddress="0xabc")
        response = {
            "usdPrice": "1234.5",
            "contractAddress": "0xabc1234567890000000000000000000000000abc",
            "syncStatus": {"status": "synced", "lag": "0"},
        }

        text = tokens.format_token_price(request, response)

        assert "Price: $1234.50000 USD" in text
        assert "Contract: 0xabc1...0abc" in text
        assert text.endswith("Sync Status: synced (lag: 0)")

    def test_native_token_without_sync_status(self):
        request = build(tokens.token_price_schema, blockchain="eth")

        text = tokens.format_token_price(request, {"usdPrice": "3000"})

        assert text == "Current token price on eth:\n\nPrice: $3000.00000 USD\nContract: Native Token"


class TestAccountBalance:
    def test_assets_listed(self):
        request = build(accounts.account_balance_schema, walletAddress=WALLET)
        response = {
            "assets": [
                {
                    "tokenName": "Ether",
                    "tokenType": "NATIVE",
                    "balance": "1.5",
                    "tokenSymbol": "ETH",
                    "balanceUsd": "4500.123",
                },
                {
                    "tokenName": "USD Coin",
                    "tokenType": "ERC20",
                    "balance": "10",
                    "tokenSymbol": "USDC",
                    "contractAddress": CONTRACT,
                    "balanceUsd": "10",
                },
            ],
        }

        text = accounts.format_account_balance(request, response)

        assert text.startswith(f"Here are the balances for wallet {WALLET}:\n\n")
        assert "1. Ether (NATIVE)\n   Balance: 1.5 ETH\n   USD Value: $4500.12\n\n" in text
        assert f"   Contract: {CONTRACT}\n" in text

    def test_empty(self):
        request = build(accounts.account_balance_schema, walletAddress=WALLET)

        text = accounts.format_account_balance(request, {"assets": []})

        assert text.endswith("No balances found")


class TestInteractions:
    def test_chains_listed_with_sync_status(self):
        request = build(accounts.interactions_schema, address=WALLET)

        text = accounts.format_interactions(request, {"blockchains": ["eth", "bsc"], "syncStatus": SYNC})

        assert "This address has interacted with the following blockchains:\n1. eth\n2. bsc\n" in text
        assert text.endswith("\nSync Status: synced (lag: 0s)")

    def test_empty_skips_sync_status(self):
        request = build(accounts.interactions_schema, address=WALLET)

        text = accounts.format_interactions(request, {"blockchains": [], "syncStatus": SYNC})

        assert text.endswith("No interactions found on any blockchain")
        assert "Sync Status" not in text


class TestBlockchainStats:
    def test_stats(self):
        request = build(network.blockchain_stats_schema, blockchain="Ethereum")
        response = {
            "stats": [{
                "latestBlockNumber": 19000000,
                "totalTransactionsCount": 2100000000,
                "totalEventsCount": 4200000000,
                "blockTimeMs": 12060,
                "nativeCoinUsdPrice": "3012.456",
            }],
        }

        text = network.format_blockchain_stats(request, response)

        assert text == (
            "Blockchain Statistics for Ethereum (eth):\n\n"
            "Latest Block: 19,000,000\n"
            "Total Transactions: 2,100,000,000\n"
            "Total Events: 4,200,000,000\n"
            "Block Time: 12.06 seconds\n"
            "Native Coin Price: $3012.46 USD"
        )

    def test_no_stats(self):
        request = build(network.blockchain_stats_schema, blockchain="eth")

        assert network.format_blockchain_stats(request, {}).endswith("No blockchain statistics found")


class TestCurrencies:
    def test_native_and_contract_tokens(self):
        request = build(tokens.currencies_schema, blockchain="eth")
        response = {
            "currencies": [
                {"name": "Ether", "symbol": "ETH", "decimals": 18,
                 "address": "0x0000000000000000000000000000000000000000"},
                {"name": "Tether", "symbol": "USDT", "decimals": 6,
                 "address": "0xdac17f958d2ee523a2206206994597c13d831ec7"},
            ],
            "syncStatus": SYNC,
        }

        text = tokens.format_currencies(request, response)

        assert "1. Ether (ETH)\n   Native Token\n   Decimals: 18\n\n" in text
        assert "2. Tether (USDT)\n   Contract: 0xdac1...1ec7\n   Decimals: 6\n\n" in text
        assert text.endswith("Sync Status: synced (lag: 0s)")


class TestTokenHolders:
    def test_holders(self):
        request = build(tokens.token_holders_schema, blockchain="bsc", contractAddress=CONTRACT)
        response = {
            "holdersCount": 12345,
            "holders": [{"holderAddress": WALLET, "balance": "1000000.5"}],
            "syncStatus": SYNC,
        }

        text = tokens.format_token_holders(request, response)

        assert text.startswith("Token Holders on BSC:\nTotal Holders: 12,345\n\n")
        assert "1. 0xd8da...6045\n   Balance: 1,000,000.5\n\n" in text
        assert "Sync Status: synced (lag: 0s)" in text

    def test_holders_count_history(self):
        request = build(tokens.token_holders_count_schema, blockchain="eth", contractAddress=CONTRACT)
        response = {
            "latestHoldersCount": 5000000,
            "holderCountHistory": [
                {"lastUpdatedAt": "2024-01-15T00:00:00Z", "holderCount": 4999000, "totalAmount": "1000.25"},
            ],
            "syncStatus": SYNC,
        }

        text = tokens.format_token_holders_count(request, response)

        assert text.startswith("Token Holders Count on ETH:\n\nCurrent Holders: 5,000,000\n\nHistorical Data:\n")
        assert "\n1. 2024-01-15\n   Holders: 4,999,000\n   Total Amount: 1,000.25" in text
        assert text.endswith("\n\nSync Status: synced (lag: 0s)")


class TestTokenTransfers:
    def _request(self):
        return build(tokens.token_transfers_schema, blockchain="eth", address=WALLET)

    def test_direction_follows_from_address(self):
        response = {
            "transfers": [
                {
                    "tokenName": "USD Coin", "tokenSymbol": "USDC", "value": "25.5",
                    "fromAddress": WALLET.upper().replace("0X", "0x"), "toAddress": OTHER,
                    "contractAddress": CONTRACT, "transactionHash": TX_HASH, "timestamp": 1600000000,
                },
                {
                    "tokenName": "USD Coin", "tokenSymbol": "USDC", "value": "3",
                    "fromAddress": OTHER, "toAddress": WALLET,
                    "contractAddress": CONTRACT, "transactionHash": TX_HASH, "timestamp": 1600000000,
                },
            ],
        }

        text = tokens.format_token_transfers(self._request(), response)

        assert "1. USD Coin (USDC)\n   Sent: 25.5 USDC\n   To: 0x68b3...fc45\n" in text
        assert "2. USD Coin (USDC)\n   Received: 3 USDC\n   From: 0x68b3...fc45\n" in text
        assert "   Tx Hash: 0x5a4b...2a4c\n   Time: 2020-09-13 12:26:40 UTC\n\n" in text

    def test_empty(self):
        text = tokens.format_token_transfers(self._request(), {"transfers": [], "syncStatus": SYNC})

        assert text == f"Token transfers for {WALLET} on eth:\n\nNo token transfers found"


class TestNFTs:
    def test_metadata(self):
        request = build(nfts.nft_metadata_schema, blockchain="eth", contractAddress=CONTRACT, tokenId="1234")
        response = {
            "metadata": {"contractAddress": CONTRACT, "contractType": "ERC721", "collectionName": "BAYC"},
            "attributes": {
                "name": "Bored Ape #1234",
                "description": "An ape",
                "traits": [{"trait_type": "Fur", "value": "Gold"}],
                "imageUrl": "https://example.com/1234.png",
            },
            "syncStatus": SYNC,
        }

        text = nfts.format_nft_metadata(request, response)

        assert text.startswith("NFT Metadata for Bored Ape #1234:\n\nCollection: Bored Ape\n")
        assert "Contract: 0xbc4c...f13d (ERC721)\n\n" in text
        assert "Traits:\n- Fur: Gold\n" in text
        assert "\nImage URL: https://example.com/1234.png\n" in text
        assert text.endswith("Last Update: 2020-09-13 12:26:40 UTC")

    def test_metadata_missing(self):
        request = build(nfts.nft_metadata_schema, blockchain="eth", contractAddress=CONTRACT, tokenId="1")

        text = nfts.format_nft_metadata(request, {"metadata": None, "attributes": None})

        assert text == f"No metadata found for NFT with token ID 1 at contract {CONTRACT} on eth"

    def test_nfts_by_owner(self):
        request = build(nfts.nfts_by_owner_schema, walletAddress=WALLET)
        response = {
            "assets": [
                {"name": "", "collectionName": "Art", "tokenId": "7", "blockchain": "polygon",
                 "contractAddress": CONTRACT, "quantity": "3", "contractType": "ERC1155"},
                {"name": "Punk", "tokenId": "8", "blockchain": "eth",
                 "contractAddress": CONTRACT, "quantity": "1", "contractType": "ERC721"},
            ],
        }

        text = nfts.format_nfts_by_owner(request, response)

        assert "1. Unnamed NFT\n   Collection: Art\n" in text
        assert "   Quantity: 3\n" in text
        assert "2. Punk\n   Collection: Unknown Collection\n" in text
        assert text.count("Quantity") == 1

    def test_nft_holders(self):
        request = build(nfts.nft_holders_schema, contractAddress=CONTRACT)

        text = nfts.format_nft_holders(request, {"holders": [WALLET, OTHER], "syncStatus": SYNC})

        assert text.startswith(f"NFT Holders for contract {CONTRACT} on eth:\n\nTotal Holders: 2\n\n")
        assert f"2. {OTHER}\n" in text
        assert "\nSync Status: synced (lag: 0s)\nLast Update:" in text

    def test_nft_transfers_empty_keeps_filter_header(self):
        request = build(nfts.nft_transfers_schema, blockchain="eth", contractAddress=CONTRACT)

        text = nfts.format_nft_transfers(request, {"transfers": []})

        assert text == f"NFT Transfers on eth:\n\nContract: {CONTRACT}\n\nNo NFT transfers found"

    def test_nft_transfers(self):
        request = build(nfts.nft_transfers_schema, blockchain="eth", fromAddress=WALLET)
        response = {
            "transfers": [{
                "collectionName": None, "tokenId": "", "fromAddress": WALLET, "toAddress": OTHER,
                "contractAddress": CONTRACT, "type": "ERC721", "transactionHash": TX_HASH,
                "timestamp": 1600000000,
            }],
        }

        text = nfts.format_nft_transfers(request, response)

        assert "1. NFT (ID: Unknown)\n   From: 0xd8da...6045\n   To: 0x68b3...fc45\n" in text
        assert "   Type: ERC721\n   Tx Hash: 0x5a4b...2a4c\n" in text


class TestTransactions:
    def test_by_address(self):
        request = build(transactions.transactions_by_address_schema, blockchain="eth", address=WALLET)
        response = {
            "transactions": [
                {"hash": TX_HASH, "from": WALLET, "to": OTHER, "value": "0x22b1c8c1227a0000",
                 "status": "0x1", "timestamp": "0x5f5e1000"},
                {"hash": TX_HASH, "from": OTHER, "to": None, "contractAddress": CONTRACT,
                 "value": "0", "status": "0x0", "timestamp": "0x5f5e1000"},
            ],
            "syncStatus": SYNC,
        }

        text = transactions.format_transactions_by_address(request, response)

        assert "   Direction: Outgoing\n   Value: 2.5000 ETH\n   Status: Success\n" in text
        assert "   Contract Created: 0xbc4c...f13d\n   Direction: Incoming\n" in text
        assert "   Status: Failed\n" in text
        assert text.endswith("Sync Status: synced (lag: 0s)")

    def test_by_address_other_chain_uses_native_tokens(self):
        request = build(transactions.transactions_by_address_schema, blockchain="bsc", address=WALLET)
        response = {"transactions": [{"hash": TX_HASH, "from": OTHER, "to": WALLET, "value": "1000000000000000000"}]}

        assert "Value: 1.0000 native tokens" in transactions.format_transactions_by_address(request, response)

    def test_by_hash_with_logs(self):
        request = build(transactions.transactions_by_hash_schema, transactionHash=TX_HASH, includeLogs=True)
        response = {
            "transactions": [{
                "blockchain": "eth", "hash": TX_HASH, "blockNumber": "0x10", "from": WALLET, "to": OTHER,
                "value": "0x0", "gasUsed": "21000", "status": "0x1", "timestamp": "0x5f5e1000",
                "logs": [{
                    "address": CONTRACT,
                    "topics": ["0xddf2", "0x0001"],
                    "event": {
                        "name": "Transfer",
                        "inputs": [{"name": "value", "type": "uint256", "valueDecoded": "10"}],
                    },
                }],
            }],
        }

        text = transactions.format_transactions_by_hash(request, response)

        assert text.startswith(f"Transaction details for hash {TX_HASH}:\n\nTransaction #1:\nBlockchain: eth\n")
        assert "Gas Used: 21000\nStatus: Success\nTime: 2020-09-13 12:26:40 UTC\n" in text
        assert "\nLogs (1):\n  Log #1:\n" in text
        assert "    Topics: 0xddf2, 0x0001\n    Event: Transfer\n" in text
        assert "      value (uint256): 10\n" in text

    def test_by_hash_empty(self):
        request = build(transactions.transactions_by_hash_schema, transactionHash=TX_HASH)

        text = transactions.format_transactions_by_hash(request, {"transactions": []})

        assert text.endswith("No transaction found with this hash")

    def test_decimal_status_counts_only_for_hash_lookups(self):
        tx = {"blockchain": "eth", "hash": TX_HASH, "from": OTHER, "to": WALLET, "value": "0", "status": "1"}

        by_hash = transactions.format_transactions_by_hash(
            build(transactions.transactions_by_hash_schema, transactionHash=TX_HASH), {"transactions": [tx]},
        )
        by_address = transactions.format_transactions_by_address(
            build(transactions.transactions_by_address_schema, blockchain="eth", address=WALLET),
            {"transactions": [tx]},
        )

        assert "Status: Success\n" in by_hash
        assert "   Status: Failed\n" in by_address
