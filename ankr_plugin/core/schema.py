"""
Request schemas for action parameter extraction and validation.

Each action declares a static list of field descriptors. The same list drives
the extraction prompt, the tool definition handed to the LLM, and the
structural validation of whatever the LLM returns.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, BeforeValidator, AfterValidator, ConfigDict, create_model
from pydantic import ValidationError as PydanticValidationError

from ..chains import BLOCKCHAIN_VALUES, Blockchain, get_blockchain_from_name
from ..providers.llm.base import ToolDefinition, ToolParameter, ToolParameterType


class FieldKind(str, Enum):
    """Semantic type of a request field"""
    STRING = "string"
    HEX_STRING = "hex_string"            # must start with 0x
    INTEGER = "integer"
    BOOLEAN = "boolean"
    CHAIN = "chain"                      # one chain identifier
    CHAIN_OR_CHAINS = "chain_or_chains"  # one identifier or a list of them


@dataclass(frozen=True)
class FieldSpec:
    """Static description of one request field."""
    name: str
    kind: FieldKind
    description: str
    required: bool = True
    default: Any = None
    # HEX_STRING only: accept "" as well as 0x-prefixed values
    allow_empty: bool = False

    @property
    def is_chain(self) -> bool:
        return self.kind in (FieldKind.CHAIN, FieldKind.CHAIN_OR_CHAINS)

    def to_tool_parameter(self) -> ToolParameter:
        if self.kind == FieldKind.INTEGER:
            param_type = ToolParameterType.INTEGER
        elif self.kind == FieldKind.BOOLEAN:
            param_type = ToolParameterType.BOOLEAN
        else:
            param_type = ToolParameterType.STRING

        return ToolParameter(
            name=self.name,
            type=param_type,
            description=self.description,
            required=self.required,
            enum=list(BLOCKCHAIN_VALUES) if self.is_chain else None,
            default=self.default.value if isinstance(self.default, Blockchain) else self.default,
            allow_list=self.kind == FieldKind.CHAIN_OR_CHAINS,
        )


# Returns an error message, or None when the request is acceptable
CrossFieldCheck = Callable[[BaseModel], Optional[str]]


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating an extracted candidate object."""
    request: Optional[BaseModel] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.request is not None


def _normalize_chain(value: Any) -> Any:
    """Accept display names ("Ethereum") and stray casing for chain values."""
    if isinstance(value, str):
        chain = get_blockchain_from_name(value)
        return chain if chain is not None else value
    if isinstance(value, (list, tuple)):
        return [_normalize_chain(item) for item in value]
    return value


def _hex_prefix_check(field_name: str, allow_empty: bool) -> Callable[[str], str]:
    def check(value: str) -> str:
        if allow_empty and value == "":
            return value
        if not value.startswith("0x"):
            if allow_empty:
                raise ValueError(f"{field_name} must be empty or start with 0x")
            raise ValueError(f"{field_name} must start with 0x")
        return value
    return check


def _annotation_for(spec: FieldSpec) -> Any:
    if spec.kind == FieldKind.HEX_STRING:
        return Annotated[str, AfterValidator(_hex_prefix_check(spec.name, spec.allow_empty))]
    if spec.kind == FieldKind.INTEGER:
        return int
    if spec.kind == FieldKind.BOOLEAN:
        return bool
    if spec.kind == FieldKind.CHAIN:
        return Annotated[Blockchain, BeforeValidator(_normalize_chain)]
    if spec.kind == FieldKind.CHAIN_OR_CHAINS:
        return Annotated[Union[Blockchain, List[Blockchain]], BeforeValidator(_normalize_chain)]
    return str


def _format_errors(error: PydanticValidationError) -> str:
    parts = []
    for item in error.errors():
        loc = item.get("loc") or ()
        # Union and validator branches append their own segments after the field name
        location = str(loc[0]) if loc else ""
        message = item.get("msg", "invalid value")
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        part = f"{location}: {message}" if location else message
        if part not in parts:
            parts.append(part)
    return "; ".join(parts)


class RequestSchema:
    """
    Declarative request description for one action.

    Args:
        name: Identifier used for the generated request model and tool definition
        fields: Static field descriptors
        description: Optional free-text description included in the prompt
        checks: Cross-field checks run after structural validation
    """

    def __init__(
        self,
        name: str,
        fields: Sequence[FieldSpec],
        description: Optional[str] = None,
        checks: Sequence[CrossFieldCheck] = (),
    ):
        self.name = name
        self.fields: Tuple[FieldSpec, ...] = tuple(fields)
        self.description = description
        self.checks: Tuple[CrossFieldCheck, ...] = tuple(checks)
        self.model = self._build_model()

    @property
    def has_chain_field(self) -> bool:
        return any(spec.is_chain for spec in self.fields)

    def field(self, name: str) -> Optional[FieldSpec]:
        for spec in self.fields:
            if spec.name == name:
                return spec
        return None

    def _build_model(self) -> type:
        definitions: Dict[str, Any] = {}
        for spec in self.fields:
            annotation = _annotation_for(spec)
            if spec.required:
                definitions[spec.name] = (annotation, ...)
            else:
                definitions[spec.name] = (Optional[annotation], spec.default)

        return create_model(
            f"{self.name}Request",
            __config__=ConfigDict(frozen=True, extra="ignore"),
            **definitions,
        )

    def to_tool_definition(self) -> ToolDefinition:
        return ToolDefinition(
            name=self.name,
            description=self.description or f"Extract the parameters for the {self.name} request",
            parameters=[spec.to_tool_parameter() for spec in self.fields],
        )

    def validate(self, candidate: Any) -> ValidationResult:
        """Structural validation first, then cross-field checks; first failure wins."""
        if not isinstance(candidate, Mapping):
            return ValidationResult(error="Invalid request: expected an object of extracted parameters")

        # Models frequently emit null for values they could not determine
        data = {key: value for key, value in candidate.items() if value is not None}

        try:
            request = self.model.model_validate(data)
        except PydanticValidationError as e:
            return ValidationResult(error=_format_errors(e))

        for check in self.checks:
            message = check(request)
            if message:
                return ValidationResult(error=message)

        return ValidationResult(request=request)


def require_any(*names: str) -> CrossFieldCheck:
    """Cross-field check: at least one of the named optional fields must be present."""

    def check(request: BaseModel) -> Optional[str]:
        if any(getattr(request, name, None) for name in names):
            return None
        if len(names) > 1:
            listed = ", ".join(names[:-1]) + f", or {names[-1]}"
        else:
            listed = names[0]
        return f"At least one of {listed} must be provided"

    return check


def request_params(request: BaseModel) -> Dict[str, Any]:
    """JSON-ready request values with absent optional fields dropped."""
    return request.model_dump(mode="json", exclude_none=True)
