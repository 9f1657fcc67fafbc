from typing import Any, Dict, List, Optional, Tuple

import pytest

from ankr_plugin.config import settings
from ankr_plugin.core.extraction import ParameterExtractor
from ankr_plugin.core.runtime import InMemoryRuntime
from ankr_plugin.core.schema import RequestSchema


class StaticExtractor(ParameterExtractor):
    """Returns a fixed candidate object and records every prompt it was given."""

    def __init__(self, params: Any):
        self.params = params
        self.calls: List[Tuple[str, RequestSchema]] = []

    async def extract(self, context: str, schema: RequestSchema) -> Dict[str, Any]:
        self.calls.append((context, schema))
        return self.params


@pytest.fixture(autouse=True)
def no_ambient_ankr_key(monkeypatch):
    """Tests decide explicitly whether an Ankr key is configured."""
    monkeypatch.delenv("ANKR_API_KEY", raising=False)
    monkeypatch.setattr(settings, "ankr_api_key", "")


@pytest.fixture
def make_runtime():
    def _make(params: Any = None, api_key: Optional[str] = "test-key") -> InMemoryRuntime:
        overrides = {"ANKR_API_KEY": api_key} if api_key is not None else {}
        return InMemoryRuntime(settings_overrides=overrides, extractor=StaticExtractor(params or {}))
    return _make
