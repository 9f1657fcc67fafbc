"""Fungible token actions: prices, holders, transfers and currency listings."""

from typing import Any, Dict

from ..core.formatting import (
    ZERO_ADDRESS,
    format_amount,
    format_count,
    format_date,
    format_price,
    format_sync_status,
    format_timestamp,
    same_address,
    truncate_address,
)
from ..core.pipeline import ActionDescriptor
from ..core.schema import FieldKind, FieldSpec, RequestSchema, request_params
from ..providers.ankr import AnkrProvider
from .base import define_action, user_examples

TOKEN_TRANSFERS_PAGE_SIZE = 10


def _is_native(address: Any) -> bool:
    return not address or str(address).lower() == ZERO_ADDRESS


# ---------------------------------------------------------------------------
# GetTokenPrice
# ---------------------------------------------------------------------------

token_price_schema = RequestSchema(
    "GetTokenPrice",
    fields=[
        FieldSpec("blockchain", FieldKind.CHAIN, "The blockchain to check the token price on"),
        FieldSpec(
            "contractAddress",
            FieldKind.HEX_STRING,
            "The contract address of the token to check the price of. Leave empty for native token.",
            required=False,
            allow_empty=True,
        ),
    ],
)


async def get_token_price(provider: AnkrProvider, request) -> Dict[str, Any]:
    return await provider.get_token_price(request_params(request))


def format_token_price(request, response: Dict[str, Any]) -> str:
    contract = response.get("contractAddress")
    contract_display = "Native Token" if _is_native(contract) else truncate_address(contract)

    text = (
        f"Current token price on {request.blockchain.value}:\n\n"
        f"Price: ${format_price(response.get('usdPrice'))} USD\n"
        f"Contract: {contract_display}"
    )

    sync = format_sync_status(response.get("syncStatus"))
    if sync:
        text += f"\n{sync}"
    return text


get_token_price_action = define_action(
    name="GET_TOKEN_PRICE_ANKR",
    similes=["CHECK_PRICE", "TOKEN_PRICE", "CRYPTO_PRICE", "PRICE_CHECK"],
    description="Get the current USD price for any token on supported blockchains.",
    examples=user_examples(
        "What's the current price of ETH?",
        "What's the current price of 0x8290333cef9e6d528dd5618fb97a76f268f3edd4 token on eth?",
    ),
    descriptor=ActionDescriptor(
        method_name="GetTokenPrice",
        schema=token_price_schema,
        invoke=get_token_price,
        formatter=format_token_price,
    ),
)


# ---------------------------------------------------------------------------
# GetTokenHolders
# ---------------------------------------------------------------------------

token_holders_schema = RequestSchema(
    "GetTokenHolders",
    fields=[
        FieldSpec("blockchain", FieldKind.CHAIN, "The blockchain to get token holders for"),
        FieldSpec("contractAddress", FieldKind.HEX_STRING, "The contract address of the token"),
    ],
)


async def get_token_holders(provider: AnkrProvider, request) -> Dict[str, Any]:
    return await provider.get_token_holders(request_params(request))


def format_token_holders(request, response: Dict[str, Any]) -> str:
    text = f"Token Holders on {request.blockchain.value.upper()}:\n"

    holders = response.get("holders") or []
    if not holders:
        return text + "No token holders found"

    text += f"Total Holders: {format_count(response.get('holdersCount', len(holders)))}\n\n"
    for index, holder in enumerate(holders, start=1):
        text += f"{index}. {truncate_address(holder.get('holderAddress'))}\n"
        text += f"   Balance: {format_count(holder.get('balance'))}\n\n"

    sync = format_sync_status(response.get("syncStatus"))
    if sync:
        text += f"\n{sync}\n"
    return text


get_token_holders_action = define_action(
    name="GET_TOKEN_HOLDERS_ANKR",
    similes=["LIST_HOLDERS", "SHOW_HOLDERS", "TOKEN_HOLDERS", "FIND_HOLDERS"],
    description="Get a list of token holders for any ERC20 or ERC721 token contract.",
    examples=user_examples(
        "Show me holders for contract 0xf307910A4c7bbc79691fD374889b36d8531B08e3 on bsc",
    ),
    descriptor=ActionDescriptor(
        method_name="GetTokenHolders",
        schema=token_holders_schema,
        invoke=get_token_holders,
        formatter=format_token_holders,
    ),
)


# ---------------------------------------------------------------------------
# GetTokenHoldersCount
# ---------------------------------------------------------------------------

token_holders_count_schema = RequestSchema(
    "GetTokenHoldersCount",
    fields=[
        FieldSpec("blockchain", FieldKind.CHAIN, "The blockchain to get token holders count for"),
        FieldSpec("contractAddress", FieldKind.HEX_STRING, "The contract address of the token"),
    ],
)


async def get_token_holders_count(provider: AnkrProvider, request) -> Dict[str, Any]:
    return await provider.get_token_holders_count(request_params(request))


def format_token_holders_count(request, response: Dict[str, Any]) -> str:
    text = f"Token Holders Count on {request.blockchain.value.upper()}:\n\n"

    history = response.get("holderCountHistory") or []
    if not history and response.get("latestHoldersCount") is None:
        return text + "No holder count data found"

    text += f"Current Holders: {format_count(response.get('latestHoldersCount'))}\n\n"
    text += "Historical Data:\n"

    if not history:
        return text + "No historical data found"

    for index, entry in enumerate(history, start=1):
        text += (
            f"\n{index}. {format_date(entry.get('lastUpdatedAt'))}"
            f"\n   Holders: {format_count(entry.get('holderCount'))}"
            f"\n   Total Amount: {format_count(entry.get('totalAmount'))}"
        )

    sync = format_sync_status(response.get("syncStatus"))
    if sync:
        text += f"\n\n{sync}"
    return text


get_token_holders_count_action = define_action(
    name="GET_TOKEN_HOLDERS_COUNT_ANKR",
    similes=["COUNT_HOLDERS", "TOTAL_HOLDERS", "HOLDERS_COUNT", "NUMBER_OF_HOLDERS"],
    description="Get the total number of holders and historical data for a specific token.",
    examples=user_examples(
        "How many holders does 0xdAC17F958D2ee523a2206206994597C13D831ec7 have on eth?",
    ),
    descriptor=ActionDescriptor(
        method_name="GetTokenHoldersCount",
        schema=token_holders_count_schema,
        invoke=get_token_holders_count,
        formatter=format_token_holders_count,
    ),
)


# ---------------------------------------------------------------------------
# GetTokenTransfers
# ---------------------------------------------------------------------------

token_transfers_schema = RequestSchema(
    "GetTokenTransfers",
    fields=[
        FieldSpec("blockchain", FieldKind.CHAIN, "The blockchain to get token transfers from"),
        FieldSpec("address", FieldKind.HEX_STRING, "The wallet address to get token transfers for"),
        FieldSpec(
            "contractAddress",
            FieldKind.HEX_STRING,
            "The token contract address (optional)",
            required=False,
            allow_empty=True,
        ),
        FieldSpec(
            "fromTimestamp",
            FieldKind.INTEGER,
            "Start timestamp for the transfers (optional)",
            required=False,
        ),
        FieldSpec(
            "toTimestamp",
            FieldKind.INTEGER,
            "End timestamp for the transfers (optional)",
            required=False,
        ),
        FieldSpec(
            "descOrder",
            FieldKind.BOOLEAN,
            "Whether to sort transfers in descending order",
            required=False,
            default=True,
        ),
    ],
)


async def get_token_transfers(provider: AnkrProvider, request) -> Dict[str, Any]:
    params: Dict[str, Any] = {
        "blockchain": request.blockchain.value,
        "address": [request.address],
        "descOrder": request.descOrder,
        "pageSize": TOKEN_TRANSFERS_PAGE_SIZE,
    }
    if request.contractAddress:
        params["contractAddress"] = request.contractAddress
    if request.fromTimestamp:
        params["fromTimestamp"] = request.fromTimestamp
    if request.toTimestamp:
        params["toTimestamp"] = request.toTimestamp
    return await provider.get_token_transfers(params)


def format_token_transfers(request, response: Dict[str, Any]) -> str:
    text = f"Token transfers for {request.address} on {request.blockchain.value}:\n\n"

    transfers = response.get("transfers") or []
    if not transfers:
        return text + "No token transfers found"

    for index, transfer in enumerate(transfers, start=1):
        symbol = transfer.get("tokenSymbol")
        value = format_amount(transfer.get("value"))

        text += f"{index}. {transfer.get('tokenName')} ({symbol})\n"
        if same_address(transfer.get("fromAddress"), request.address):
            text += f"   Sent: {value} {symbol}\n"
            text += f"   To: {truncate_address(transfer.get('toAddress'))}\n"
        else:
            text += f"   Received: {value} {symbol}\n"
            text += f"   From: {truncate_address(transfer.get('fromAddress'))}\n"
        text += f"   Contract: {truncate_address(transfer.get('contractAddress'))}\n"
        text += f"   Tx Hash: {truncate_address(transfer.get('transactionHash'))}\n"
        text += f"   Time: {format_timestamp(transfer.get('timestamp'))}\n\n"

    text += format_sync_status(response.get("syncStatus"))
    return text


get_token_transfers_action = define_action(
    name="GET_TOKEN_TRANSFERS_ANKR",
    similes=["FETCH_TOKEN_TRANSFERS", "SHOW_TOKEN_TRANSFERS", "VIEW_TOKEN_TRANSFERS", "LIST_TOKEN_TRANSFERS"],
    description="Retrieve token transfer history for a specific address on the blockchain",
    examples=user_examples(
        "Show me token transfers for address 0xd8da6bf26964af9d7eed9e03e53415d37aa96045 on eth",
    ),
    descriptor=ActionDescriptor(
        method_name="GetTokenTransfers",
        schema=token_transfers_schema,
        invoke=get_token_transfers,
        formatter=format_token_transfers,
    ),
)


# ---------------------------------------------------------------------------
# GetCurrencies
# ---------------------------------------------------------------------------

currencies_schema = RequestSchema(
    "GetCurrencies",
    fields=[
        FieldSpec("blockchain", FieldKind.CHAIN, "The blockchain to get currencies for"),
    ],
)


async def get_currencies(provider: AnkrProvider, request) -> Dict[str, Any]:
    return await provider.get_currencies(request_params(request))


def format_currencies(request, response: Dict[str, Any]) -> str:
    text = f"Here are the top currencies on {request.blockchain.value}:\n\n"

    currencies = response.get("currencies") or []
    if not currencies:
        return text + "No currencies found"

    for index, currency in enumerate(currencies, start=1):
        text += f"{index}. {currency.get('name')} ({currency.get('symbol')})\n"
        address = currency.get("address")
        if _is_native(address):
            text += "   Native Token\n"
        else:
            text += f"   Contract: {truncate_address(address)}\n"
        text += f"   Decimals: {currency.get('decimals')}\n\n"

    text += format_sync_status(response.get("syncStatus"))
    return text


get_currencies_action = define_action(
    name="GET_CURRENCIES_ANKR",
    similes=["LIST_CURRENCIES", "SHOW_CURRENCIES", "VIEW_CURRENCIES", "FETCH_CURRENCIES"],
    description="Retrieve information about currencies on specified blockchain networks.",
    examples=user_examples("Show me the top currencies on Ethereum"),
    descriptor=ActionDescriptor(
        method_name="GetCurrencies",
        schema=currencies_schema,
        invoke=get_currencies,
        formatter=format_currencies,
    ),
)
