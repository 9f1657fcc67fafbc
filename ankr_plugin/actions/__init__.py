"""Registered Ankr actions, grouped by domain module."""

from .accounts import get_account_balance_action, get_interactions_action
from .base import Action, ActionExample, ActionRegistry, always_applicable, define_action
from .network import get_blockchain_stats_action
from .nfts import (
    get_nft_holders_action,
    get_nft_metadata_action,
    get_nft_transfers_action,
    get_nfts_by_owner_action,
)
from .tokens import (
    get_currencies_action,
    get_token_holders_action,
    get_token_holders_count_action,
    get_token_price_action,
    get_token_transfers_action,
)
from .transactions import get_transactions_by_address_action, get_transactions_by_hash_action

ACTIONS = [
    get_token_holders_count_action,
    get_token_price_action,
    get_token_transfers_action,
    get_account_balance_action,
    get_transactions_by_address_action,
    get_transactions_by_hash_action,
    get_blockchain_stats_action,
    get_currencies_action,
    get_interactions_action,
    get_nft_holders_action,
    get_nft_transfers_action,
    get_nft_metadata_action,
    get_nfts_by_owner_action,
    get_token_holders_action,
]


def build_registry() -> ActionRegistry:
    return ActionRegistry(ACTIONS)


__all__ = [
    "ACTIONS",
    "Action",
    "ActionExample",
    "ActionRegistry",
    "always_applicable",
    "build_registry",
    "define_action",
]
