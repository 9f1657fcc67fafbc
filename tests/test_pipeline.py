"""
Tests for the generic action handler pipeline.

Covers the success path, credential checks, validation failures and the
translation of remote and unexpected failures into classified errors.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from ankr_plugin.actions import accounts, tokens
from ankr_plugin.core.pipeline import AnkrActionHandler, PipelineStage
from ankr_plugin.core.runtime import HandlerResult, Memory
from ankr_plugin.errors import APIError, ConfigurationError, ErrorKind, ValidationError
from ankr_plugin.providers.ankr import AnkrProviderError

PRICE_RESPONSE = {
    "usdPrice": "1234.5",
    "contractAddress": "0xabc1234567890000000000000000000000000abc",
    "syncStatus": {"status": "synced", "lag": "0"},
}


@pytest.fixture
def provider():
    mock = MagicMock()
    mock.get_token_price = AsyncMock(return_value=PRICE_RESPONSE)
    mock.get_account_balance = AsyncMock(return_value={"assets": []})
    return mock


@pytest.fixture
def factory(provider):
    created = []

    def _factory(api_key, endpoint=None):
        created.append((api_key, endpoint))
        return provider

    _factory.created = created
    return _factory


def price_handler(factory) -> AnkrActionHandler:
    return AnkrActionHandler(tokens.get_token_price_action.descriptor, provider_factory=factory)


# =============================================================================
# Success path
# =============================================================================

class TestSuccess:
    @pytest.mark.asyncio
    async def test_formats_and_delivers_once(self, make_runtime, factory, provider):
        runtime = make_runtime({"blockchain": "eth", "contractAddress": "0xabc"})
        callback = AsyncMock()

        result = await price_handler(factory)(
            runtime, Memory.from_text("Price of 0xabc on eth?"), callback=callback,
        )

        assert result is True
        provider.get_token_price.assert_awaited_once_with({"blockchain": "eth", "contractAddress": "0xabc"})
        callback.assert_awaited_once()
        delivered = callback.call_args.args[0]
        assert isinstance(delivered, HandlerResult)
        assert "Price: $1234.50000 USD" in delivered.text
        assert "Contract: 0xabc1...0abc" in delivered.text
        assert delivered.content == {
            "success": True,
            "request": {"blockchain": "eth", "contractAddress": "0xabc"},
            "response": PRICE_RESPONSE,
        }
        assert factory.created[0][0] == "test-key"

    @pytest.mark.asyncio
    async def test_prompt_contains_recent_messages(self, make_runtime, factory):
        runtime = make_runtime({"blockchain": "eth"})
        message = Memory.from_text("What's the current price of ETH?")

        await price_handler(factory)(runtime, message)

        context, schema = runtime.extractor.calls[0]
        assert schema is tokens.token_price_schema
        assert "What's the current price of ETH?" in context
        assert "- Binance Smart Chain (bsc)" in context

    @pytest.mark.asyncio
    async def test_existing_state_is_refreshed(self, make_runtime, factory):
        runtime = make_runtime({"blockchain": "eth"})
        message = Memory.from_text("price of eth")
        runtime.remember(message)
        state = {"roomId": message.room_id, "recentMessages": "stale"}

        await price_handler(factory)(runtime, message, state=state)

        context, _ = runtime.extractor.calls[0]
        assert "stale" not in context
        assert "price of eth" in context

    @pytest.mark.asyncio
    async def test_plain_function_callback(self, make_runtime, factory):
        delivered = []

        await price_handler(factory)(
            make_runtime({"blockchain": "eth"}), Memory.from_text("eth price"), callback=delivered.append,
        )

        assert len(delivered) == 1
        assert delivered[0].success

    @pytest.mark.asyncio
    async def test_environment_key_used_without_runtime_setting(self, make_runtime, factory, monkeypatch):
        monkeypatch.setenv("ANKR_API_KEY", "env-key")

        await price_handler(factory)(make_runtime({"blockchain": "eth"}, api_key=None), Memory.from_text("eth"))

        assert factory.created[0][0] == "env-key"


# =============================================================================
# Failures
# =============================================================================

class TestFailures:
    @pytest.mark.asyncio
    async def test_missing_credential_fails_before_prompt(self, factory):
        runtime = MagicMock()
        runtime.get_setting.return_value = None
        runtime.compose_state = AsyncMock()
        runtime.generate_object = AsyncMock()
        callback = AsyncMock()

        with pytest.raises(ConfigurationError) as exc_info:
            await price_handler(factory)(runtime, Memory.from_text("eth price"), callback=callback)

        assert exc_info.value.message == "ANKR_API_KEY not found in environment variables"
        assert exc_info.value.stage == PipelineStage.START.value
        runtime.compose_state.assert_not_awaited()
        runtime.generate_object.assert_not_awaited()
        assert factory.created == []
        callback.assert_awaited_once()
        delivered = callback.call_args.args[0]
        assert delivered.text == "Error in GetTokenPrice: ANKR_API_KEY not found in environment variables"
        assert delivered.content["error"]["kind"] == ErrorKind.CONFIGURATION.value

    @pytest.mark.asyncio
    async def test_blank_credential_rejected(self, make_runtime, factory):
        with pytest.raises(ConfigurationError):
            await price_handler(factory)(make_runtime({"blockchain": "eth"}, api_key="   "), Memory.from_text("x"))

    @pytest.mark.asyncio
    async def test_missing_required_field_never_calls_api(self, make_runtime, factory, provider):
        handler = AnkrActionHandler(accounts.get_account_balance_action.descriptor, provider_factory=factory)
        callback = AsyncMock()

        with pytest.raises(ValidationError) as exc_info:
            await handler(make_runtime({"blockchain": "eth"}), Memory.from_text("balance?"), callback=callback)

        assert "walletAddress" in exc_info.value.message
        provider.get_account_balance.assert_not_awaited()
        callback.assert_awaited_once()
        assert callback.call_args.args[0].text.startswith("Error in GetAccountBalance: ")

    @pytest.mark.asyncio
    async def test_remote_failure_wrapped(self, make_runtime, factory, provider):
        provider.get_token_price.side_effect = AnkrProviderError("Ankr HTTP error 429", status_code=429)
        callback = AsyncMock()

        with pytest.raises(APIError) as exc_info:
            await price_handler(factory)(make_runtime({"blockchain": "eth"}), Memory.from_text("x"), callback=callback)

        error = exc_info.value
        assert error.message == "Failed to fetch GetTokenPrice data"
        assert error.status_code == 429
        assert isinstance(error.cause, AnkrProviderError)
        assert error.stage == PipelineStage.VALIDATED.value
        callback.assert_awaited_once()
        assert callback.call_args.args[0].text == "Error in GetTokenPrice: Failed to fetch GetTokenPrice data"

    @pytest.mark.asyncio
    async def test_formatter_failure_wrapped(self, make_runtime, factory, provider):
        provider.get_token_price.return_value = "not a dict"

        with pytest.raises(APIError) as exc_info:
            await price_handler(factory)(make_runtime({"blockchain": "eth"}), Memory.from_text("x"))

        assert exc_info.value.message == "Failed to fetch GetTokenPrice data"
        assert exc_info.value.stage == PipelineStage.API_INVOKED.value

    @pytest.mark.asyncio
    async def test_unexpected_failure_wrapped(self, make_runtime, factory):
        runtime = make_runtime({"blockchain": "eth"})
        runtime.generate_object = AsyncMock(side_effect=RuntimeError("model unavailable"))
        callback = AsyncMock()

        with pytest.raises(APIError) as exc_info:
            await price_handler(factory)(runtime, Memory.from_text("x"), callback=callback)

        assert exc_info.value.message == "Failed to execute GetTokenPrice action: model unavailable"
        assert isinstance(exc_info.value.__cause__, RuntimeError)
        callback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_failing_success_callback_not_called_twice(self, make_runtime, factory):
        callback = AsyncMock(side_effect=RuntimeError("socket closed"))

        with pytest.raises(APIError):
            await price_handler(factory)(make_runtime({"blockchain": "eth"}), Memory.from_text("x"), callback=callback)

        callback.assert_awaited_once()
