"""
Generic action handler pipeline.

Every action runs the same sequence: resolve the Ankr credential, compose
conversation state, render the extraction prompt, extract a candidate
request, validate it, make exactly one Ankr call and format the result.
Actions differ only in their ``ActionDescriptor``.
"""

import inspect
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Optional

import structlog
from pydantic import BaseModel

from ..config import validate_ankr_config
from ..errors import APIError, PluginError, ValidationError, describe_error
from ..providers.ankr import AnkrProvider
from .prompts import build_extraction_template, compose_context
from .runtime import AgentRuntime, HandlerCallback, HandlerResult, Memory, State
from .schema import RequestSchema, request_params

logger = structlog.stdlib.get_logger(__name__)

InvokeFn = Callable[[AnkrProvider, BaseModel], Awaitable[Dict[str, Any]]]
FormatFn = Callable[[BaseModel, Dict[str, Any]], str]
ProviderFactory = Callable[..., AnkrProvider]


class PipelineStage(str, Enum):
    """Last stage a handler invocation reached."""
    START = "start"
    CONFIG_LOADED = "config_loaded"
    STATE_COMPOSED = "state_composed"
    PROMPT_COMPOSED = "prompt_composed"
    PARAMS_EXTRACTED = "params_extracted"
    VALIDATED = "validated"
    API_INVOKED = "api_invoked"
    FORMATTED = "formatted"
    DELIVERED = "delivered"


@dataclass(frozen=True)
class ActionDescriptor:
    """What varies between actions: name, request schema, remote call and formatter."""
    method_name: str
    schema: RequestSchema
    invoke: InvokeFn
    formatter: FormatFn


async def _deliver(callback: Optional[HandlerCallback], result: HandlerResult) -> None:
    if callback is None:
        return
    outcome = callback(result)
    if inspect.isawaitable(outcome):
        await outcome


class AnkrActionHandler:
    """
    Callable handler for one action.

    Args:
        descriptor: Per-action configuration
        provider_factory: Builds the Ankr client from ``(api_key, endpoint=...)``
    """

    def __init__(self, descriptor: ActionDescriptor, provider_factory: ProviderFactory = AnkrProvider):
        self.descriptor = descriptor
        self.provider_factory = provider_factory

    @property
    def method_name(self) -> str:
        return self.descriptor.method_name

    async def __call__(
        self,
        runtime: AgentRuntime,
        message: Memory,
        state: Optional[State] = None,
        options: Optional[Dict[str, Any]] = None,
        callback: Optional[HandlerCallback] = None,
    ) -> bool:
        method = self.descriptor.method_name
        schema = self.descriptor.schema
        log = logger.bind(action=method)
        stage = PipelineStage.START
        delivered = False
        start = time.perf_counter()

        try:
            config = validate_ankr_config(runtime)
            provider = self.provider_factory(config.ankr_api_key, endpoint=config.ankr_endpoint)
            stage = PipelineStage.CONFIG_LOADED

            if state is None:
                state = await runtime.compose_state(message)
            else:
                state = await runtime.update_recent_message_state(state)
            stage = PipelineStage.STATE_COMPOSED

            context = compose_context(state, build_extraction_template(schema))
            stage = PipelineStage.PROMPT_COMPOSED

            candidate = await runtime.generate_object(context, schema)
            stage = PipelineStage.PARAMS_EXTRACTED
            log.debug("params_extracted", params=candidate)

            validation = schema.validate(candidate)
            if not validation.ok:
                raise ValidationError(validation.error or "Invalid request", action=method, stage=stage.value)
            request = validation.request
            stage = PipelineStage.VALIDATED

            try:
                response = await self.descriptor.invoke(provider, request)
                stage = PipelineStage.API_INVOKED
                text = self.descriptor.formatter(request, response)
                stage = PipelineStage.FORMATTED
            except Exception as e:
                status_code = getattr(e, "status_code", None)
                log.warning("ankr_call_failed", stage=stage.value, error=str(e))
                raise APIError(
                    f"Failed to fetch {method} data",
                    action=method,
                    stage=stage.value,
                    status_code=status_code if isinstance(status_code, int) else None,
                    cause=e,
                ) from e

            result = HandlerResult(
                text=text,
                content={"success": True, "request": request_params(request), "response": response},
            )
            delivered = True
            await _deliver(callback, result)
            stage = PipelineStage.DELIVERED

            log.info(
                "action_completed",
                duration_ms=round((time.perf_counter() - start) * 1000, 1),
            )
            return True

        except Exception as e:
            if isinstance(e, PluginError):
                error = e
                if error.action is None:
                    error.action = method
                if error.stage is None:
                    error.stage = stage.value
            else:
                error = APIError(
                    f"Failed to execute {method} action: {e}",
                    action=method,
                    stage=stage.value,
                    cause=e,
                )

            log.error(
                "action_failed",
                stage=stage.value,
                kind=error.kind.value,
                error=error.message,
                duration_ms=round((time.perf_counter() - start) * 1000, 1),
            )

            if not delivered:
                await _deliver(
                    callback,
                    HandlerResult(
                        text=f"Error in {method}: {error.message}",
                        content={"error": describe_error(error)},
                    ),
                )

            if error is e:
                raise
            raise error from e


def create_ankr_handler(descriptor: ActionDescriptor, provider_factory: ProviderFactory = AnkrProvider) -> AnkrActionHandler:
    """Build the handler for one action descriptor."""
    return AnkrActionHandler(descriptor, provider_factory=provider_factory)
