import itertools
import logging
import time
from typing import Any, Dict, Optional

import httpx

from ..config import settings
from .base import Provider, ProviderError

logger = logging.getLogger(__name__)

_request_ids = itertools.count(1)


class AnkrProviderError(ProviderError):
    """Ankr Advanced API call failed (HTTP or JSON-RPC level)"""
    pass


class AnkrProvider(Provider):
    """Ankr Advanced API provider (multichain JSON-RPC)"""

    name = "ankr"
    timeout_s = 30

    def __init__(
        self,
        api_key: str,
        endpoint: Optional[str] = None,
        timeout_s: Optional[int] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.endpoint = endpoint or settings.ankr_endpoint
        self.base_url = f"{self.endpoint}{self.api_key}"
        self.timeout_s = timeout_s or settings.request_timeout_seconds
        self._transport = transport

    async def ready(self) -> bool:
        return bool(self.api_key)

    async def health_check(self) -> Dict[str, Any]:
        if not await self.ready():
            return {
                "status": "unavailable",
                "reason": "API key not configured"
            }

        start = time.perf_counter()
        try:
            async with self._client() as client:
                response = await client.post(
                    self.base_url,
                    json=self._payload("ankr_getBlockchainStats", {"blockchain": "eth"}),
                    headers={"Content-Type": "application/json"},
                )
                response.raise_for_status()
                return {"status": "healthy", "latency_ms": int((time.perf_counter() - start) * 1000)}
        except httpx.HTTPStatusError as e:
            return {"status": "error", "reason": f"HTTP {e.response.status_code}"}
        except httpx.HTTPError as e:
            return {"status": "error", "reason": e.__class__.__name__}

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout_s, transport=self._transport)

    @staticmethod
    def _payload(method: str, params: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "jsonrpc": "2.0",
            "method": method,
            # Absent optional parameters are omitted, never sent as null
            "params": {key: value for key, value in params.items() if value is not None},
            "id": next(_request_ids),
        }

    async def call(self, method: str, params: Dict[str, Any]) -> Dict[str, Any]:
        """Issue a single JSON-RPC call and return its result object"""
        payload = self._payload(method, params)

        try:
            async with self._client() as client:
                response = await client.post(
                    self.base_url,
                    json=payload,
                    headers={"Content-Type": "application/json"},
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            raise AnkrProviderError(
                f"Ankr HTTP error {e.response.status_code} for {method}",
                status_code=e.response.status_code,
                method=method,
            ) from e
        except httpx.HTTPError as e:
            raise AnkrProviderError(f"Ankr request failed for {method}: {e.__class__.__name__}", method=method) from e
        except ValueError as e:
            raise AnkrProviderError(f"Ankr returned invalid JSON for {method}", method=method) from e

        if "error" in data and data["error"]:
            error = data["error"]
            code = error.get("code") if isinstance(error, dict) else None
            message = error.get("message") if isinstance(error, dict) else str(error)
            logger.warning(f"Ankr error for {method}: {message} (code={code})")
            raise AnkrProviderError(f"Ankr error: {message}", status_code=code, method=method)

        return data.get("result") or {}

    async def get_account_balance(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return await self.call("ankr_getAccountBalance", params)

    async def get_blockchain_stats(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return await self.call("ankr_getBlockchainStats", params)

    async def get_currencies(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return await self.call("ankr_getCurrencies", params)

    async def get_interactions(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return await self.call("ankr_getInteractions", params)

    async def get_nft_holders(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return await self.call("ankr_getNFTHolders", params)

    async def get_nft_metadata(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return await self.call("ankr_getNFTMetadata", params)

    async def get_nfts_by_owner(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return await self.call("ankr_getNFTsByOwner", params)

    async def get_nft_transfers(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return await self.call("ankr_getNftTransfers", params)

    async def get_token_holders(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return await self.call("ankr_getTokenHolders", params)

    async def get_token_holders_count(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return await self.call("ankr_getTokenHoldersCount", params)

    async def get_token_price(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return await self.call("ankr_getTokenPrice", params)

    async def get_token_transfers(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return await self.call("ankr_getTokenTransfers", params)

    async def get_transactions_by_address(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return await self.call("ankr_getTransactionsByAddress", params)

    async def get_transactions_by_hash(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return await self.call("ankr_getTransactionsByHash", params)
