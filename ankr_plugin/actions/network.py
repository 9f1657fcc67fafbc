"""Chain-level statistics."""

from typing import Any, Dict

from ..chains import display_name
from ..core.formatting import format_count, format_fixed, format_usd
from ..core.pipeline import ActionDescriptor
from ..core.schema import FieldKind, FieldSpec, RequestSchema, request_params
from ..providers.ankr import AnkrProvider
from .base import define_action, user_examples

blockchain_stats_schema = RequestSchema(
    "GetBlockchainStats",
    fields=[
        FieldSpec("blockchain", FieldKind.CHAIN, "The blockchain to get statistics for"),
    ],
)


async def get_blockchain_stats(provider: AnkrProvider, request) -> Dict[str, Any]:
    return await provider.get_blockchain_stats(request_params(request))


def _block_time_seconds(value: Any) -> str:
    try:
        return format_fixed(float(value) / 1000, 2)
    except (TypeError, ValueError):
        return format_fixed(None, 2)


def format_blockchain_stats(request, response: Dict[str, Any]) -> str:
    chain = request.blockchain.value
    header = f"Blockchain Statistics for {display_name(chain)} ({chain}):\n\n"

    # One chain was requested, so only the first entry is relevant
    stats = response.get("stats") or []
    if not stats:
        return header + "No blockchain statistics found"
    entry = stats[0]

    return (
        header
        + f"Latest Block: {format_count(entry.get('latestBlockNumber'))}\n"
        + f"Total Transactions: {format_count(entry.get('totalTransactionsCount'))}\n"
        + f"Total Events: {format_count(entry.get('totalEventsCount'))}\n"
        + f"Block Time: {_block_time_seconds(entry.get('blockTimeMs'))} seconds\n"
        + f"Native Coin Price: ${format_usd(entry.get('nativeCoinUsdPrice'))} USD"
    )


get_blockchain_stats_action = define_action(
    name="GET_BLOCKCHAIN_STATS_ANKR",
    similes=["BLOCKCHAIN_STATS", "CHAIN_STATS", "NETWORK_STATS", "BLOCKCHAIN_METRICS"],
    description="Retrieve statistics about a blockchain such as latest block, transaction count, and more.",
    examples=user_examples("Show me the stats for the Ethereum blockchain"),
    descriptor=ActionDescriptor(
        method_name="GetBlockchainStats",
        schema=blockchain_stats_schema,
        invoke=get_blockchain_stats,
        formatter=format_blockchain_stats,
    ),
)
