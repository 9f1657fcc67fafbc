"""Transaction lookups by address and by hash."""

from typing import Any, Dict

from ..chains import Blockchain
from ..core.formatting import format_sync_status, format_timestamp, same_address, truncate_address, wei_to_native
from ..core.pipeline import ActionDescriptor
from ..core.schema import FieldKind, FieldSpec, RequestSchema, request_params
from ..providers.ankr import AnkrProvider
from .base import define_action, user_examples

TRANSACTIONS_PAGE_SIZE = 10


def _native_unit(chain: Any) -> str:
    return "ETH" if chain == Blockchain.ETH.value else "native tokens"


# Receipt status as listed by address is always hex; hash lookups may be decimal
LISTED_SUCCESS_STATUSES = frozenset({"0x1"})
RECEIPT_SUCCESS_STATUSES = frozenset({"0x1", "1"})


def _status_label(status: Any, success_statuses: frozenset) -> str:
    return "Success" if str(status).lower() in success_statuses else "Failed"


# ---------------------------------------------------------------------------
# GetTransactionsByAddress
# ---------------------------------------------------------------------------

transactions_by_address_schema = RequestSchema(
    "GetTransactionsByAddress",
    fields=[
        FieldSpec("blockchain", FieldKind.CHAIN, "The blockchain to get transactions from"),
        FieldSpec("address", FieldKind.HEX_STRING, "The wallet address to get transactions for"),
        FieldSpec(
            "includeLogs",
            FieldKind.BOOLEAN,
            "Whether to include transaction logs",
            required=False,
            default=True,
        ),
        FieldSpec(
            "descOrder",
            FieldKind.BOOLEAN,
            "Whether to sort transactions in descending order",
            required=False,
            default=True,
        ),
    ],
)


async def get_transactions_by_address(provider: AnkrProvider, request) -> Dict[str, Any]:
    return await provider.get_transactions_by_address({
        "blockchain": request.blockchain.value,
        "address": [request.address],
        "includeLogs": request.includeLogs,
        "descOrder": request.descOrder,
        "pageSize": TRANSACTIONS_PAGE_SIZE,
    })


def format_transactions_by_address(request, response: Dict[str, Any]) -> str:
    chain = request.blockchain.value
    text = f"Transactions for {request.address} on {chain}:\n\n"

    transactions = response.get("transactions") or []
    if not transactions:
        return text + "No transactions found"

    for index, tx in enumerate(transactions, start=1):
        text += f"{index}. Transaction\n"
        text += f"   Hash: {truncate_address(tx.get('hash'))}\n"
        text += f"   From: {truncate_address(tx.get('from'))}\n"
        if tx.get("to"):
            text += f"   To: {truncate_address(tx['to'])}\n"
        elif tx.get("contractAddress"):
            text += f"   Contract Created: {truncate_address(tx['contractAddress'])}\n"
        text += f"   Direction: {'Outgoing' if same_address(tx.get('from'), request.address) else 'Incoming'}\n"
        text += f"   Value: {wei_to_native(tx.get('value'))} {_native_unit(chain)}\n"
        text += f"   Status: {_status_label(tx.get('status'), LISTED_SUCCESS_STATUSES)}\n"
        text += f"   Time: {format_timestamp(tx.get('timestamp'))}\n\n"

    text += format_sync_status(response.get("syncStatus"))
    return text


get_transactions_by_address_action = define_action(
    name="GET_TRANSACTIONS_BY_ADDRESS_ANKR",
    similes=["LIST_TXS", "SHOW_TXS", "VIEW_TRANSACTIONS", "GET_ADDRESS_TXS"],
    description="Get transactions for a specific address on the blockchain",
    examples=user_examples(
        "Show me the latest transactions for address 0xd8da6bf26964af9d7eed9e03e53415d37aa96045 on eth",
    ),
    descriptor=ActionDescriptor(
        method_name="GetTransactionsByAddress",
        schema=transactions_by_address_schema,
        invoke=get_transactions_by_address,
        formatter=format_transactions_by_address,
    ),
)


# ---------------------------------------------------------------------------
# GetTransactionsByHash
# ---------------------------------------------------------------------------

transactions_by_hash_schema = RequestSchema(
    "GetTransactionsByHash",
    fields=[
        FieldSpec(
            "blockchain",
            FieldKind.CHAIN,
            "The blockchain to get transaction from (optional)",
            required=False,
        ),
        FieldSpec("transactionHash", FieldKind.HEX_STRING, "The transaction hash to look up"),
        FieldSpec(
            "includeLogs",
            FieldKind.BOOLEAN,
            "Whether to include transaction logs",
            required=False,
            default=False,
        ),
    ],
)


async def get_transactions_by_hash(provider: AnkrProvider, request) -> Dict[str, Any]:
    params = request_params(request)
    params["decodeLogs"] = request.includeLogs
    params["decodeTxData"] = True
    return await provider.get_transactions_by_hash(params)


def _format_logs(logs) -> str:
    text = f"\nLogs ({len(logs)}):\n"
    for index, log in enumerate(logs, start=1):
        text += f"  Log #{index}:\n"
        text += f"    Address: {log.get('address')}\n"
        text += f"    Topics: {', '.join(log.get('topics') or [])}\n"

        event = log.get("event")
        if event:
            text += f"    Event: {event.get('name')}\n"
            inputs = event.get("inputs") or []
            if inputs:
                text += "    Inputs:\n"
                for item in inputs:
                    text += f"      {item.get('name')} ({item.get('type')}): {item.get('valueDecoded')}\n"
    return text


def format_transactions_by_hash(request, response: Dict[str, Any]) -> str:
    text = f"Transaction details for hash {request.transactionHash}:\n\n"

    transactions = response.get("transactions") or []
    if not transactions:
        return text + "No transaction found with this hash"

    for index, tx in enumerate(transactions, start=1):
        chain = tx.get("blockchain")
        text += f"Transaction #{index}:\n"
        text += f"Blockchain: {chain or 'Unknown'}\n"
        text += f"Hash: {tx.get('hash') or request.transactionHash}\n"
        text += f"Block: {tx.get('blockNumber')}\n"
        text += f"From: {tx.get('from')}\n"
        if tx.get("to"):
            text += f"To: {tx['to']}\n"
        elif tx.get("contractAddress"):
            text += f"Contract Created: {tx['contractAddress']}\n"
        text += f"Value: {wei_to_native(tx.get('value'))} {_native_unit(chain)}\n"

        if tx.get("gas"):
            text += f"Gas Limit: {tx['gas']}\n"
        if tx.get("gasUsed"):
            text += f"Gas Used: {tx['gasUsed']}\n"
        if tx.get("gasPrice"):
            text += f"Gas Price: {tx['gasPrice']}\n"
        if tx.get("status"):
            text += f"Status: {_status_label(tx['status'], RECEIPT_SUCCESS_STATUSES)}\n"
        if tx.get("timestamp"):
            text += f"Time: {format_timestamp(tx['timestamp'])}\n"

        logs = tx.get("logs") or []
        if request.includeLogs and logs:
            text += _format_logs(logs)

        text += "\n"

    text += format_sync_status(response.get("syncStatus"), include_last_update=True)
    return text


get_transactions_by_hash_action = define_action(
    name="GET_TRANSACTIONS_BY_HASH_ANKR",
    similes=["FETCH_TRANSACTION_BY_HASH", "SHOW_TRANSACTION_BY_HASH", "VIEW_TRANSACTION_BY_HASH", "GET_TX_BY_HASH"],
    description="Retrieve transaction details by transaction hash on specified blockchain networks.",
    examples=user_examples(
        "Show me transaction 0x5a4bf6970980a9381e6d6c78d96ab278035bbff58c383ffe96a0a2bbc7c02a4c on eth",
    ),
    descriptor=ActionDescriptor(
        method_name="GetTransactionsByHash",
        schema=transactions_by_hash_schema,
        invoke=get_transactions_by_hash,
        formatter=format_transactions_by_hash,
    ),
)
