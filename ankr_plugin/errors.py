"""
Error Classification

Defines the error kinds surfaced by action handlers.
Every handler failure reaches the caller as exactly one of these three kinds.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorKind(str, Enum):
    """Kinds of errors reported by the handler pipeline."""

    CONFIGURATION = "configuration"  # Missing or invalid credentials
    VALIDATION = "validation"        # Extracted request failed validation
    API = "api"                      # Remote call failed or unclassified failure


class PluginError(Exception):
    """
    Base class for errors raised by action handlers.

    Carries the action name and, where available, the pipeline stage that
    failed, an upstream status code and the underlying cause.
    """

    kind: ErrorKind = ErrorKind.API

    def __init__(
        self,
        message: str,
        action: Optional[str] = None,
        stage: Optional[str] = None,
        status_code: Optional[int] = None,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message)
        self.message = message
        self.action = action
        self.stage = stage
        self.status_code = status_code
        self.cause = cause

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for callback payloads and API responses."""
        data: Dict[str, Any] = {
            "type": self.__class__.__name__,
            "kind": self.kind.value,
            "message": self.message,
        }
        if self.action:
            data["action"] = self.action
        if self.stage:
            data["stage"] = self.stage
        if self.status_code is not None:
            data["status_code"] = self.status_code
        if self.cause is not None:
            data["cause"] = str(self.cause)
        return data


class ConfigurationError(PluginError):
    """Required configuration (the API credential) is missing or empty."""

    kind = ErrorKind.CONFIGURATION


class ValidationError(PluginError):
    """Extracted request parameters failed structural or cross-field checks."""

    kind = ErrorKind.VALIDATION


class APIError(PluginError):
    """The remote data call failed, or an unclassified failure occurred."""

    kind = ErrorKind.API


def describe_error(error: BaseException) -> Dict[str, Any]:
    """Structured description of any exception for failure payloads."""
    if isinstance(error, PluginError):
        return error.to_dict()
    return {
        "type": error.__class__.__name__,
        "message": str(error),
    }
