"""NFT actions: metadata, ownership, holders and transfers."""

from typing import Any, Dict

from ..chains import Blockchain
from ..core.formatting import format_sync_status, format_timestamp, truncate_address
from ..core.pipeline import ActionDescriptor
from ..core.schema import FieldKind, FieldSpec, RequestSchema, request_params, require_any
from ..providers.ankr import AnkrProvider
from .base import define_action, user_examples

NFT_PAGE_SIZE = 10


# ---------------------------------------------------------------------------
# GetNFTMetadata
# ---------------------------------------------------------------------------

nft_metadata_schema = RequestSchema(
    "GetNFTMetadata",
    fields=[
        FieldSpec("blockchain", FieldKind.CHAIN, "The blockchain to get NFT metadata from"),
        FieldSpec("contractAddress", FieldKind.HEX_STRING, "The NFT contract address"),
        FieldSpec("tokenId", FieldKind.STRING, "The token ID of the NFT"),
    ],
)


async def get_nft_metadata(provider: AnkrProvider, request) -> Dict[str, Any]:
    params = request_params(request)
    params["forceFetch"] = True
    return await provider.get_nft_metadata(params)


def format_nft_metadata(request, response: Dict[str, Any]) -> str:
    metadata = response.get("metadata")
    attributes = response.get("attributes")

    if not metadata or not attributes:
        return (
            f"No metadata found for NFT with token ID {request.tokenId} "
            f"at contract {request.contractAddress} on {request.blockchain.value}"
        )

    name = attributes.get("name")
    text = f"NFT Metadata for {name or f'Token #{request.tokenId}'}:\n\n"

    # NFT names usually look like "Collection #1234"
    collection = name.split("#")[0].strip() if name else (metadata.get("collectionName") or "Unknown Collection")
    text += f"Collection: {collection}\n"
    text += (
        f"Contract: {truncate_address(metadata.get('contractAddress') or request.contractAddress)} "
        f"({metadata.get('contractType')})\n\n"
    )

    if attributes.get("description"):
        text += f"Description: {attributes['description']}\n\n"

    traits = attributes.get("traits") or []
    if traits:
        text += "Traits:\n"
        for trait in traits:
            text += f"- {trait.get('trait_type')}: {trait.get('value')}\n"

    if attributes.get("imageUrl"):
        text += f"\nImage URL: {attributes['imageUrl']}\n"
    if attributes.get("tokenUrl"):
        text += f"Token URL: {attributes['tokenUrl']}\n"

    sync = format_sync_status(response.get("syncStatus"), include_last_update=True)
    if sync:
        text += f"\n{sync}"
    return text


get_nft_metadata_action = define_action(
    name="GET_NFT_METADATA_ANKR",
    similes=["GET_NFT_INFO", "SHOW_NFT_DETAILS", "VIEW_NFT", "NFT_METADATA"],
    description="Get detailed metadata for a specific NFT including traits, images, and contract information.",
    examples=user_examples(
        "Show me the metadata for NFT token 1234 at contract 0xbc4ca0eda7647a8ab7c2061c2e118a18a936f13d on eth",
    ),
    descriptor=ActionDescriptor(
        method_name="GetNFTMetadata",
        schema=nft_metadata_schema,
        invoke=get_nft_metadata,
        formatter=format_nft_metadata,
    ),
)


# ---------------------------------------------------------------------------
# GetNFTsByOwner
# ---------------------------------------------------------------------------

nfts_by_owner_schema = RequestSchema(
    "GetNFTsByOwner",
    fields=[
        FieldSpec(
            "blockchain",
            FieldKind.CHAIN_OR_CHAINS,
            "The blockchain(s) to get NFTs from",
            required=False,
        ),
        FieldSpec("walletAddress", FieldKind.HEX_STRING, "The wallet address to get NFTs for"),
    ],
)


async def get_nfts_by_owner(provider: AnkrProvider, request) -> Dict[str, Any]:
    params = request_params(request)
    params["pageSize"] = NFT_PAGE_SIZE
    return await provider.get_nfts_by_owner(params)


def format_nfts_by_owner(request, response: Dict[str, Any]) -> str:
    text = f"NFTs owned by {request.walletAddress}:\n\n"

    assets = response.get("assets") or []
    if not assets:
        return text + "No NFTs found"

    for index, nft in enumerate(assets, start=1):
        text += f"{index}. {nft.get('name') or 'Unnamed NFT'}\n"
        text += f"   Collection: {nft.get('collectionName') or 'Unknown Collection'}\n"
        text += f"   Token ID: {nft.get('tokenId')}\n"
        text += f"   Blockchain: {nft.get('blockchain')}\n"
        text += f"   Contract: {truncate_address(nft.get('contractAddress'))}\n"
        quantity = nft.get("quantity")
        if quantity and str(quantity) != "1":
            text += f"   Quantity: {quantity}\n"
        text += f"   Type: {nft.get('contractType')}\n\n"

    text += format_sync_status(response.get("syncStatus"))
    return text


get_nfts_by_owner_action = define_action(
    name="GET_NFTS_BY_OWNER_ANKR",
    similes=["LIST_NFTS", "SHOW_NFTS", "VIEW_NFTS", "FETCH_NFTS", "GET_OWNED_NFTS"],
    description="Get NFTs owned by a specific wallet address across multiple blockchains",
    examples=user_examples("Show me the NFTs owned by 0xd8da6bf26964af9d7eed9e03e53415d37aa96045"),
    descriptor=ActionDescriptor(
        method_name="GetNFTsByOwner",
        schema=nfts_by_owner_schema,
        invoke=get_nfts_by_owner,
        formatter=format_nfts_by_owner,
    ),
)


# ---------------------------------------------------------------------------
# GetNFTHolders
# ---------------------------------------------------------------------------

nft_holders_schema = RequestSchema(
    "GetNFTHolders",
    fields=[
        FieldSpec(
            "blockchain",
            FieldKind.CHAIN,
            "The blockchain to get NFT holders from",
            required=False,
            default=Blockchain.ETH,
        ),
        FieldSpec("contractAddress", FieldKind.HEX_STRING, "The NFT contract address to get holders for"),
    ],
)


async def get_nft_holders(provider: AnkrProvider, request) -> Dict[str, Any]:
    params = request_params(request)
    params["pageSize"] = NFT_PAGE_SIZE
    return await provider.get_nft_holders(params)


def format_nft_holders(request, response: Dict[str, Any]) -> str:
    text = f"NFT Holders for contract {request.contractAddress} on {request.blockchain.value}:\n\n"

    holders = response.get("holders") or []
    if not holders:
        return text + "No holders found for this NFT contract"

    text += f"Total Holders: {len(holders)}\n\n"
    for index, holder in enumerate(holders, start=1):
        text += f"{index}. {holder}\n"

    sync = format_sync_status(response.get("syncStatus"), include_last_update=True)
    if sync:
        text += f"\n{sync}"
    return text


get_nft_holders_action = define_action(
    name="GET_NFT_HOLDERS_ANKR",
    similes=["FETCH_NFT_HOLDERS", "SHOW_NFT_HOLDERS", "VIEW_NFT_HOLDERS", "LIST_NFT_HOLDERS"],
    description="Retrieve holders of specific NFTs on specified blockchain networks.",
    examples=user_examples("Show me holders of NFT contract 0x34d85c9cdeb23fa97cb08333b511ac86e1c4e258 on bsc"),
    descriptor=ActionDescriptor(
        method_name="GetNFTHolders",
        schema=nft_holders_schema,
        invoke=get_nft_holders,
        formatter=format_nft_holders,
    ),
)


# ---------------------------------------------------------------------------
# GetNFTTransfers
# ---------------------------------------------------------------------------

nft_transfers_schema = RequestSchema(
    "GetNFTTransfers",
    fields=[
        FieldSpec("blockchain", FieldKind.CHAIN, "The blockchain to get NFT transfers from"),
        FieldSpec(
            "contractAddress",
            FieldKind.HEX_STRING,
            "The NFT contract address (optional)",
            required=False,
            allow_empty=True,
        ),
        FieldSpec(
            "fromAddress",
            FieldKind.HEX_STRING,
            "The sender address (optional)",
            required=False,
            allow_empty=True,
        ),
        FieldSpec(
            "toAddress",
            FieldKind.HEX_STRING,
            "The recipient address (optional)",
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
    ],
    checks=[require_any("contractAddress", "fromAddress", "toAddress")],
)

_NFT_TRANSFER_FILTERS = ("contractAddress", "fromAddress", "toAddress", "fromTimestamp", "toTimestamp")


async def get_nft_transfers(provider: AnkrProvider, request) -> Dict[str, Any]:
    params: Dict[str, Any] = {"blockchain": request.blockchain.value, "pageSize": NFT_PAGE_SIZE}
    for name in _NFT_TRANSFER_FILTERS:
        value = getattr(request, name)
        if value:
            params[name] = value
    return await provider.get_nft_transfers(params)


def format_nft_transfers(request, response: Dict[str, Any]) -> str:
    text = f"NFT Transfers on {request.blockchain.value}:\n\n"

    if request.contractAddress:
        text += f"Contract: {request.contractAddress}\n\n"
    if request.fromAddress:
        text += f"From Address: {request.fromAddress}\n\n"
    if request.toAddress:
        text += f"To Address: {request.toAddress}\n\n"

    transfers = response.get("transfers") or []
    if not transfers:
        return text + "No NFT transfers found"

    for index, transfer in enumerate(transfers, start=1):
        text += f"{index}. {transfer.get('collectionName') or 'NFT'} (ID: {transfer.get('tokenId') or 'Unknown'})\n"
        text += f"   From: {truncate_address(transfer.get('fromAddress'))}\n"
        text += f"   To: {truncate_address(transfer.get('toAddress'))}\n"
        text += f"   Contract: {truncate_address(transfer.get('contractAddress'))}\n"
        text += f"   Type: {transfer.get('type')}\n"
        text += f"   Tx Hash: {truncate_address(transfer.get('transactionHash'))}\n"
        text += f"   Time: {format_timestamp(transfer.get('timestamp'))}\n\n"

    text += format_sync_status(response.get("syncStatus"), include_last_update=True)
    return text


get_nft_transfers_action = define_action(
    name="GET_NFT_TRANSFERS_ANKR",
    similes=["FETCH_NFT_TRANSFERS", "SHOW_NFT_TRANSFERS", "VIEW_NFT_TRANSFERS", "LIST_NFT_TRANSFERS"],
    description="Retrieve NFT transfer history on specified blockchain networks.",
    examples=user_examples(
        "Show me NFT transfers for contract 0xbc4ca0eda7647a8ab7c2061c2e118a18a936f13d on eth",
    ),
    descriptor=ActionDescriptor(
        method_name="GetNFTTransfers",
        schema=nft_transfers_schema,
        invoke=get_nft_transfers,
        formatter=format_nft_transfers,
    ),
)
