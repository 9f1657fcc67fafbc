from .pipeline import ActionDescriptor, AnkrActionHandler, PipelineStage, create_ankr_handler
from .runtime import AgentRuntime, HandlerResult, InMemoryRuntime, Memory
from .schema import FieldKind, FieldSpec, RequestSchema, ValidationResult, require_any

__all__ = [
    "ActionDescriptor",
    "AgentRuntime",
    "AnkrActionHandler",
    "FieldKind",
    "FieldSpec",
    "HandlerResult",
    "InMemoryRuntime",
    "Memory",
    "PipelineStage",
    "RequestSchema",
    "ValidationResult",
    "create_ankr_handler",
    "require_any",
]
