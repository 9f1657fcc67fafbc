"""Wallet-level actions: multichain balances and chain interactions."""

from typing import Any, Dict

from ..core.formatting import format_sync_status, format_usd
from ..core.pipeline import ActionDescriptor
from ..core.schema import FieldKind, FieldSpec, RequestSchema, request_params
from ..providers.ankr import AnkrProvider
from .base import define_action, user_examples

ACCOUNT_BALANCE_PAGE_SIZE = 50


# ---------------------------------------------------------------------------
# GetAccountBalance
# ---------------------------------------------------------------------------

account_balance_schema = RequestSchema(
    "GetAccountBalance",
    fields=[
        FieldSpec(
            "blockchain",
            FieldKind.CHAIN_OR_CHAINS,
            "The blockchain(s) to check the balance on",
            required=False,
        ),
        FieldSpec(
            "walletAddress",
            FieldKind.HEX_STRING,
            "The EVM-like wallet address to check the balance of, "
            "e.g. 0x1234567890123456789012345678901234567890",
        ),
    ],
)


async def get_account_balance(provider: AnkrProvider, request) -> Dict[str, Any]:
    params = request_params(request)
    return await provider.get_account_balance({
        "blockchain": params.get("blockchain"),
        "walletAddress": params["walletAddress"],
        "onlyWhitelisted": True,
        "pageSize": ACCOUNT_BALANCE_PAGE_SIZE,
    })


def format_account_balance(request, response: Dict[str, Any]) -> str:
    text = f"Here are the balances for wallet {request.walletAddress}:\n\n"

    assets = response.get("assets") or []
    if not assets:
        return text + "No balances found"

    for index, asset in enumerate(assets, start=1):
        text += f"{index}. {asset.get('tokenName')} ({asset.get('tokenType')})\n"
        text += f"   Balance: {asset.get('balance')} {asset.get('tokenSymbol')}\n"
        if asset.get("contractAddress"):
            text += f"   Contract: {asset['contractAddress']}\n"
        text += f"   USD Value: ${format_usd(asset.get('balanceUsd'))}\n\n"

    return text


get_account_balance_action = define_action(
    name="GET_ACCOUNT_BALANCE_ANKR",
    similes=["CHECK_BALANCE", "SHOW_BALANCE", "VIEW_BALANCE", "GET_WALLET_BALANCE"],
    description="Retrieve account balance information across multiple blockchains.",
    examples=user_examples(
        "Show me the balance for wallet 0x1234567890123456789012345678901234567890 on eth",
    ),
    descriptor=ActionDescriptor(
        method_name="GetAccountBalance",
        schema=account_balance_schema,
        invoke=get_account_balance,
        formatter=format_account_balance,
    ),
)


# ---------------------------------------------------------------------------
# GetInteractions
# ---------------------------------------------------------------------------

interactions_schema = RequestSchema(
    "GetInteractions",
    fields=[
        FieldSpec("address", FieldKind.HEX_STRING, "The wallet address to get interactions for"),
        FieldSpec(
            "blockchain",
            FieldKind.CHAIN,
            "The blockchain to check interactions on (optional)",
            required=False,
        ),
    ],
)


async def get_interactions(provider: AnkrProvider, request) -> Dict[str, Any]:
    # blockchain is left out entirely when absent so every chain is searched
    return await provider.get_interactions(request_params(request))


def format_interactions(request, response: Dict[str, Any]) -> str:
    text = f"Blockchain interactions for address {request.address}:\n\n"

    blockchains = response.get("blockchains") or []
    if not blockchains:
        return text + "No interactions found on any blockchain"

    text += "This address has interacted with the following blockchains:\n"
    for index, chain in enumerate(blockchains, start=1):
        text += f"{index}. {chain}\n"

    sync = format_sync_status(response.get("syncStatus"))
    if sync:
        text += f"\n{sync}"

    return text


get_interactions_action = define_action(
    name="GET_INTERACTIONS_ANKR",
    similes=["FETCH_INTERACTIONS", "SHOW_INTERACTIONS", "VIEW_INTERACTIONS", "LIST_INTERACTIONS"],
    description="Retrieve interactions between wallets and smart contracts on specified blockchain networks.",
    examples=user_examples(
        "Show me interactions for the wallet 0x68b3465833fb72A70ecDF485E0e4C7bD8665Fc45",
    ),
    descriptor=ActionDescriptor(
        method_name="GetInteractions",
        schema=interactions_schema,
        invoke=get_interactions,
        formatter=format_interactions,
    ),
)
